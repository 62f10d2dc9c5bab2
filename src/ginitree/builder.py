"""Greedy recursive construction of a binary Gini decision tree."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from loguru import logger

from ginitree.exceptions import EmptyPartitionError, InvalidShapeError
from ginitree.impurity import class_counts, information_gain, majority_class
from ginitree.logging import SPLIT_LEVEL
from ginitree.models import (
    DecisionNode,
    LeafNode,
    SplitCandidate,
    TrainedTree,
    TrainingConfig,
    TreeNode,
)

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

_NO_SPLIT: SplitCandidate = SplitCandidate(feature_index=-1, threshold=0.0, gain=-1.0)


# ---------------------------------------------------------------------------
# Public interface -- Training
# ---------------------------------------------------------------------------


def fit(
    feature_matrix: np.ndarray | Sequence[Sequence[float]],
    labels: np.ndarray | Sequence[int],
    *,
    max_depth: int,
    n_samples: int | None = None,
    n_features: int | None = None,
) -> TrainedTree:
    """Train a binary decision tree on a feature matrix and 0/1 labels.

    The caller's arrays are never modified. Either a complete tree is
    returned or an exception is raised.

    Args:
        feature_matrix (np.ndarray | Sequence[Sequence[float]]): 2-D numeric
            matrix with shape `(n_samples, n_features)`.
        labels (np.ndarray | Sequence[int]): 1-D vector of `0`/`1` labels,
            one per row of `feature_matrix`.
        max_depth (int): Maximum number of decision levels; `0` yields a
            single majority-class leaf.
        n_samples (int | None): Expected number of rows. When given, it must
            match the data.
        n_features (int | None): Expected number of columns. When given, it
            must match the data.

    Returns:
        TrainedTree: The trained, immutable tree.

    Raises:
        InvalidShapeError: If the inputs are empty, mis-shaped, contain
            non-finite values, or labels outside `{0, 1}`.
        pydantic.ValidationError: If `max_depth` is negative.
    """
    config = TrainingConfig(max_depth=max_depth)
    try:
        matrix, targets = validate_training_data(
            feature_matrix,
            labels,
            n_samples=n_samples,
            n_features=n_features,
        )
    except InvalidShapeError as exc:
        logger.warning("Training data rejected", event="rejected", reason=exc.detail)
        raise

    all_rows = np.arange(matrix.shape[0])
    root = build_tree(matrix, targets, all_rows, config.max_depth)
    model = TrainedTree(
        root=root,
        n_features=matrix.shape[1],
        n_samples=matrix.shape[0],
        max_depth=config.max_depth,
    )
    logger.info(
        "Decision tree trained",
        event="fit",
        n_samples=model.n_samples,
        n_features=model.n_features,
        max_depth=model.max_depth,
        depth=model.depth,
        leaf_count=model.leaf_count,
    )
    return model


def build_tree(
    feature_matrix: np.ndarray,
    labels: np.ndarray,
    indices: np.ndarray,
    depth: int,
) -> TreeNode:
    """Recursively build the subtree for the rows selected by `indices`.

    A leaf is produced when `depth` is exhausted, the range is pure, or no
    threshold improves impurity. Otherwise the range is stably partitioned by
    the best split and each side is built with `depth - 1`.

    Args:
        feature_matrix (np.ndarray): Validated 2-D training matrix.
        labels (np.ndarray): Validated 1-D label vector.
        indices (np.ndarray): Row positions of the current range, in row order.
        depth (int): Remaining number of decision levels.

    Returns:
        TreeNode: Root of the built subtree.

    Raises:
        EmptyPartitionError: If `indices` is empty.
    """
    if len(indices) == 0:
        raise EmptyPartitionError("build_tree")

    counts = class_counts(labels, indices)
    if counts[0] == 0 or counts[1] == 0:
        return _make_leaf(counts, reason="pure")
    if depth == 0:
        return _make_leaf(counts, reason="depth")

    split = best_split(feature_matrix, labels, indices)
    if split.gain <= 0.0:
        return _make_leaf(counts, reason="no gain")

    goes_left = feature_matrix[indices, split.feature_index] <= split.threshold
    left_indices = indices[goes_left]
    right_indices = indices[~goes_left]
    logger.log(
        SPLIT_LEVEL,
        "Accepted split",
        event="split",
        feature_index=split.feature_index,
        threshold=split.threshold,
        gain=round(split.gain, 6),
        left_samples=len(left_indices),
        right_samples=len(right_indices),
        remaining_depth=depth,
    )

    return DecisionNode(
        feature_index=split.feature_index,
        threshold=split.threshold,
        gain=split.gain,
        left=build_tree(feature_matrix, labels, left_indices, depth - 1),
        right=build_tree(feature_matrix, labels, right_indices, depth - 1),
    )


def best_split(
    feature_matrix: np.ndarray,
    labels: np.ndarray,
    indices: np.ndarray,
) -> SplitCandidate:
    """Exhaustively search every feature and observed value for the best split.

    Features are visited in column order and candidate thresholds in row
    order of `indices`. A candidate replaces the current best only when its
    gain is strictly greater, so ties keep the first candidate found.

    Args:
        feature_matrix (np.ndarray): Validated 2-D training matrix.
        labels (np.ndarray): Validated 1-D label vector.
        indices (np.ndarray): Row positions of the current range.

    Returns:
        SplitCandidate: The best candidate. Its gain is `0.0` when no
            threshold improves impurity, and its feature index is `-1` only
            when there was nothing to evaluate.
    """
    best = _NO_SPLIT
    for feature_index in range(feature_matrix.shape[1]):
        column = feature_matrix[:, feature_index]
        seen: set[float] = set()
        for threshold in column[indices].tolist():
            # A repeated threshold yields the same gain and can never be strictly better.
            if threshold in seen:
                continue
            seen.add(threshold)
            gain = information_gain(column, labels, indices, threshold)
            if gain > best.gain:
                best = SplitCandidate(feature_index=feature_index, threshold=threshold, gain=gain)
    return best


# ---------------------------------------------------------------------------
# Public interface -- Validation
# ---------------------------------------------------------------------------


def validate_training_data(
    feature_matrix: np.ndarray | Sequence[Sequence[float]],
    labels: np.ndarray | Sequence[int],
    *,
    n_samples: int | None = None,
    n_features: int | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Validate training inputs and return private float/int copies.

    Args:
        feature_matrix (np.ndarray | Sequence[Sequence[float]]): Candidate
            2-D feature matrix.
        labels (np.ndarray | Sequence[int]): Candidate 1-D label vector.
        n_samples (int | None): Expected number of rows, if declared.
        n_features (int | None): Expected number of columns, if declared.

    Returns:
        tuple[np.ndarray, np.ndarray]: `(matrix, labels)` as `float64` and
            `int64` arrays that do not share memory with the inputs.

    Raises:
        InvalidShapeError: On any shape or content violation.
    """
    if n_samples is not None and n_samples <= 0:
        raise InvalidShapeError(f"n_samples must be positive, got {n_samples}")
    if n_features is not None and n_features <= 0:
        raise InvalidShapeError(f"n_features must be positive, got {n_features}")

    matrix = _as_float_matrix(feature_matrix)
    targets = _as_label_vector(labels)

    rows, columns = matrix.shape
    if rows == 0:
        raise InvalidShapeError("feature_matrix must contain at least one sample")
    if columns == 0:
        raise InvalidShapeError("feature_matrix must contain at least one feature")
    if n_samples is not None and n_samples != rows:
        raise InvalidShapeError(f"n_samples={n_samples} does not match feature_matrix with {rows} rows")
    if n_features is not None and n_features != columns:
        raise InvalidShapeError(f"n_features={n_features} does not match feature_matrix with {columns} columns")
    if len(targets) != rows:
        raise InvalidShapeError(f"labels has length {len(targets)} but feature_matrix has {rows} rows")
    if not np.isfinite(matrix).all():
        raise InvalidShapeError("feature_matrix must contain only finite values")
    return matrix, targets


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _make_leaf(counts: tuple[int, int], *, reason: str) -> LeafNode:
    predicted_class = majority_class(counts)
    logger.trace(
        "Created leaf",
        event="leaf",
        predicted_class=predicted_class,
        class_counts=counts,
        reason=reason,
    )
    return LeafNode(predicted_class=predicted_class, class_counts=counts)


def _as_float_matrix(feature_matrix: np.ndarray | Sequence[Sequence[float]]) -> np.ndarray:
    """Convert `feature_matrix` to a 2-D `float64` copy.

    Raises:
        InvalidShapeError: If the input is not a rectangular numeric 2-D array.
    """
    try:
        matrix = np.array(feature_matrix, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidShapeError(f"feature_matrix must be a rectangular numeric matrix: {exc}") from exc
    if matrix.ndim != 2:
        if matrix.size == 0:
            raise InvalidShapeError("feature_matrix must contain at least one sample")
        raise InvalidShapeError(f"feature_matrix must be 2-D, got {matrix.ndim} dimension(s)")
    return matrix


def _as_label_vector(labels: np.ndarray | Sequence[int]) -> np.ndarray:
    """Convert `labels` to a 1-D `int64` copy with values in `{0, 1}`.

    Raises:
        InvalidShapeError: If `labels` is not 1-D or holds values other than 0 and 1.
    """
    try:
        raw = np.array(labels)
    except (TypeError, ValueError) as exc:
        raise InvalidShapeError(f"labels must be a 1-D vector: {exc}") from exc
    if raw.ndim != 1:
        raise InvalidShapeError(f"labels must be 1-D, got {raw.ndim} dimension(s)")
    if raw.size and (raw.dtype.kind not in "biuf" or not np.isin(raw, (0, 1)).all()):
        raise InvalidShapeError("labels must contain only the values 0 and 1")
    return raw.astype(np.int64)
