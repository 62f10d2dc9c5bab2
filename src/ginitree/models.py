"""Pydantic models for trained trees, training configuration, and extracted rules."""

from __future__ import annotations

from typing import Annotated, Literal, NamedTuple, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from ginitree.exceptions import FeatureIndexOutOfRangeError

# ---------------------------------------------------------------------------
# Public type aliases
# ---------------------------------------------------------------------------

ClassLabel: TypeAlias = Literal[0, 1]

PredicateOp: TypeAlias = Literal["<=", ">"]

DEFAULT_MAX_DEPTH: int = 3

# ---------------------------------------------------------------------------
# Tree nodes
# ---------------------------------------------------------------------------


class LeafNode(BaseModel):
    """Terminal node holding a fixed predicted class.

    Attributes:
        kind (Literal["leaf"]): Discriminator. Always `"leaf"`.
        predicted_class (ClassLabel): Class returned for every sample that
            reaches this leaf.
        class_counts (tuple[int, int]): Number of training samples of class
            0 and class 1 that reached this leaf.

    Examples:
        >>> leaf = LeafNode(predicted_class=0, class_counts=(4, 0))
        >>> leaf.samples
        4
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["leaf"] = "leaf"
    predicted_class: ClassLabel = Field(description="Class predicted for samples reaching this leaf.")
    class_counts: tuple[Annotated[int, Field(ge=0)], Annotated[int, Field(ge=0)]] = Field(
        description="Training sample counts for class 0 and class 1 at this leaf.",
    )

    @computed_field
    @property
    def samples(self) -> int:
        """Number of training samples that reached this leaf."""
        return sum(self.class_counts)

    @computed_field
    @property
    def confidence(self) -> float:
        """Fraction of the leaf's training samples that belong to the predicted class."""
        total = self.samples
        return self.class_counts[self.predicted_class] / total if total else 0.0

    @model_validator(mode="after")
    def _validate_has_samples(self) -> LeafNode:
        """Reject leaves that no training sample reached.

        Returns:
            LeafNode: The validated node.

        Raises:
            ValueError: If both class counts are zero.
        """
        if self.samples == 0:
            raise ValueError("class_counts must include at least one sample")
        return self


class DecisionNode(BaseModel):
    """Internal node routing a sample to one of two owned subtrees.

    A sample goes to `left` when `sample[feature_index] <= threshold` and to
    `right` otherwise. Children are nested by value, so each subtree has
    exactly one parent.

    Attributes:
        kind (Literal["decision"]): Discriminator. Always `"decision"`.
        feature_index (int): Column tested by this node.
        threshold (float): Split value, one of the observed training values.
        gain (float): Gini information gain achieved by this split.
        left (TreeNode): Subtree for `value <= threshold`.
        right (TreeNode): Subtree for `value > threshold`.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["decision"] = "decision"
    feature_index: int = Field(ge=0, description="Column index tested by this node.")
    threshold: float = Field(description="Samples with value <= threshold go left.")
    gain: float = Field(gt=0.0, description="Information gain of this split.")
    left: TreeNode
    right: TreeNode


TreeNode = Annotated[LeafNode | DecisionNode, Field(discriminator="kind")]

DecisionNode.model_rebuild()


class SplitCandidate(NamedTuple):
    """A candidate `(feature_index, threshold, gain)` considered during split search."""

    feature_index: int
    threshold: float
    gain: float


# ---------------------------------------------------------------------------
# Trained model and configuration
# ---------------------------------------------------------------------------


class TrainingConfig(BaseModel):
    """Hyperparameters for tree construction.

    Attributes:
        max_depth (int): Maximum number of decision levels between the root
            and any leaf. `0` yields a single majority-class leaf.
    """

    model_config = ConfigDict(frozen=True)

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=0,
        description="Maximum depth of the tree; 0 produces a single leaf.",
    )


class TrainedTree(BaseModel):
    """Immutable result of one `fit` call.

    Attributes:
        root (TreeNode): Root node of the learned tree.
        n_features (int): Number of feature columns seen during training.
            Samples passed to `predict` must have at least this many values.
        n_samples (int): Number of training rows.
        max_depth (int): Depth limit used during training.
    """

    model_config = ConfigDict(frozen=True)

    root: TreeNode
    n_features: int = Field(ge=1)
    n_samples: int = Field(ge=1)
    max_depth: int = Field(ge=0)

    @computed_field
    @property
    def depth(self) -> int:
        """Number of edges on the longest root-to-leaf path."""
        return _node_depth(self.root)

    @computed_field
    @property
    def leaf_count(self) -> int:
        """Number of leaf nodes in the tree."""
        return _leaf_count(self.root)

    @model_validator(mode="after")
    def _validate_depth_within_limit(self) -> TrainedTree:
        """Validate that no leaf lies deeper than `max_depth`.

        Returns:
            TrainedTree: The validated model instance.

        Raises:
            ValueError: If the tree is deeper than `max_depth`.
        """
        if self.depth > self.max_depth:
            raise ValueError(f"tree depth ({self.depth}) exceeds max_depth ({self.max_depth})")
        return self


# ---------------------------------------------------------------------------
# Extracted rules
# ---------------------------------------------------------------------------


class Predicate(BaseModel):
    """A single threshold condition on one feature.

    Attributes:
        variable (str): Feature name the condition applies to.
        operator (PredicateOp): `"<="` for a left branch, `">"` for a right branch.
        value (float): Split threshold.

    Examples:
        >>> p = Predicate(variable="age", operator=">", value=42.0)
        >>> str(p)
        'age > 42.0'
    """

    model_config = ConfigDict(frozen=True)

    variable: str = Field(min_length=1, description="Feature name the condition applies to.")
    operator: PredicateOp = Field(description="Comparison operator.")
    value: float = Field(description="Split threshold.")

    def __str__(self) -> str:
        """Return the predicate as a human-readable condition."""
        return f"{self.variable} {self.operator} {self.value}"

    def evaluate(self, x: float) -> bool:
        """Return whether `x` satisfies this predicate.

        Args:
            x (float): Feature value to test.

        Returns:
            bool: Result of comparing `x` against `value`.
        """
        if self.operator == "<=":
            return x <= self.value
        return x > self.value


class ClassificationRule(BaseModel):
    """The path from the root to one leaf, with that leaf's prediction.

    Attributes:
        predicates (list[Predicate]): Conditions along the path. Empty when
            the tree is a single leaf.
        prediction (ClassLabel): Class predicted at the leaf.
        samples (int): Training samples that reached the leaf.
        confidence (float): Fraction of those samples in the predicted class.

    Examples:
        >>> rule = ClassificationRule(
        ...     predicates=[Predicate(variable="likes_gravity", operator="<=", value=0.0)],
        ...     prediction=0,
        ...     samples=4,
        ...     confidence=1.0,
        ... )
        >>> str(rule)
        'IF likes_gravity <= 0.0 THEN 0 (samples=4, confidence=1.0)'
    """

    model_config = ConfigDict(frozen=True)

    predicates: list[Predicate] = Field(description="Conditions along the root-to-leaf path.")
    prediction: ClassLabel = Field(description="Class predicted at the leaf.")
    samples: int = Field(ge=1, description="Training samples that reached the leaf.")
    confidence: float = Field(ge=0.0, le=1.0, description="Fraction of leaf samples in the predicted class.")

    def __str__(self) -> str:
        """Return the rule as an IF/THEN statement."""
        condition = " AND ".join(str(p) for p in self.predicates) if self.predicates else "TRUE"
        return f"IF {condition} THEN {self.prediction} (samples={self.samples}, confidence={self.confidence})"

    def matches(self, sample: list[float], feature_names: list[str]) -> bool:
        """Return whether `sample` satisfies every predicate of this rule.

        Args:
            sample (list[float]): Feature values in training column order.
            feature_names (list[str]): Names parallel to `sample`.

        Returns:
            bool: True when all predicates hold.

        Raises:
            FeatureIndexOutOfRangeError: If `sample` has fewer values than
                `feature_names`.
        """
        if len(sample) < len(feature_names):
            raise FeatureIndexOutOfRangeError(feature_index=len(feature_names) - 1, sample_length=len(sample))
        values = dict(zip(feature_names, sample, strict=False))
        return all(p.evaluate(values[p.variable]) for p in self.predicates)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _node_depth(node: TreeNode) -> int:
    if isinstance(node, LeafNode):
        return 0
    return 1 + max(_node_depth(node.left), _node_depth(node.right))


def _leaf_count(node: TreeNode) -> int:
    if isinstance(node, LeafNode):
        return 1
    return _leaf_count(node.left) + _leaf_count(node.right)
