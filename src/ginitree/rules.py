"""Extraction of human-readable root-to-leaf rules from a trained tree."""

from __future__ import annotations

from collections.abc import Sequence

from ginitree.exceptions import InvalidShapeError
from ginitree.models import ClassificationRule, LeafNode, Predicate, TrainedTree, TreeNode


def extract_rules(
    model: TrainedTree,
    feature_names: Sequence[str] | None = None,
) -> list[ClassificationRule]:
    """Extract one rule per leaf of a trained tree.

    Rules are returned in left-to-right leaf order. Each rule lists the
    predicates on the path from the root (`"<="` for a left branch, `">"`
    for a right branch) followed by the leaf's prediction and statistics.

    Args:
        model (TrainedTree): A model returned by `fit`.
        feature_names (Sequence[str] | None): Names parallel to the training
            columns. Defaults to `feature_0`, `feature_1`, ...

    Returns:
        list[ClassificationRule]: One rule per leaf node.

    Raises:
        InvalidShapeError: If `feature_names` does not have exactly
            `model.n_features` entries.
    """
    names = _resolve_feature_names(model.n_features, feature_names)
    rules: list[ClassificationRule] = []
    _walk_tree(model.root, feature_names=names, path_predicates=[], rules=rules)
    return rules


def _walk_tree(
    node: TreeNode,
    *,
    feature_names: list[str],
    path_predicates: list[Predicate],
    rules: list[ClassificationRule],
) -> None:
    """Recursively walk `node` and append one rule per reachable leaf to `rules`."""
    if isinstance(node, LeafNode):
        rules.append(
            ClassificationRule(
                predicates=path_predicates,
                prediction=node.predicted_class,
                samples=node.samples,
                confidence=round(node.confidence, 4),
            )
        )
        return

    name = feature_names[node.feature_index]
    left_predicate = Predicate(variable=name, operator="<=", value=node.threshold)
    right_predicate = Predicate(variable=name, operator=">", value=node.threshold)
    _walk_tree(
        node.left,
        feature_names=feature_names,
        path_predicates=[*path_predicates, left_predicate],
        rules=rules,
    )
    _walk_tree(
        node.right,
        feature_names=feature_names,
        path_predicates=[*path_predicates, right_predicate],
        rules=rules,
    )


def _resolve_feature_names(n_features: int, feature_names: Sequence[str] | None) -> list[str]:
    if feature_names is None:
        return [f"feature_{i}" for i in range(n_features)]
    names = list(feature_names)
    if len(names) != n_features:
        raise InvalidShapeError(f"Expected {n_features} feature names, got {len(names)}")
    return names
