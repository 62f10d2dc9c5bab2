"""Gini impurity and information gain over index-selected label ranges."""

from __future__ import annotations

import numpy as np

from ginitree.exceptions import EmptyPartitionError


def class_counts(labels: np.ndarray, indices: np.ndarray) -> tuple[int, int]:
    """Count class 0 and class 1 labels among the selected rows.

    Args:
        labels (np.ndarray): 1-D label vector with values in `{0, 1}`.
        indices (np.ndarray): Row positions that make up the range.

    Returns:
        tuple[int, int]: `(count_0, count_1)`.
    """
    count_1 = int(np.count_nonzero(labels[indices]))
    return len(indices) - count_1, count_1


def majority_class(counts: tuple[int, int]) -> int:
    """Return the majority class; equal counts resolve to class 1.

    Args:
        counts (tuple[int, int]): `(count_0, count_1)`.

    Returns:
        int: `0` when class 0 strictly outnumbers class 1, else `1`.
    """
    count_0, count_1 = counts
    return 0 if count_0 > count_1 else 1


def gini(labels: np.ndarray, indices: np.ndarray) -> float:
    """Compute the Gini impurity `1 - (p0² + p1²)` of the selected labels.

    Args:
        labels (np.ndarray): 1-D label vector with values in `{0, 1}`.
        indices (np.ndarray): Row positions that make up the range.

    Returns:
        float: Impurity in `[0, 0.5]`; `0` exactly when the range is pure.

    Raises:
        EmptyPartitionError: If `indices` is empty.
    """
    if len(indices) == 0:
        raise EmptyPartitionError("gini")
    count_0, count_1 = class_counts(labels, indices)
    if count_0 == 0 or count_1 == 0:
        return 0.0
    total = count_0 + count_1
    p0 = count_0 / total
    p1 = count_1 / total
    return 1.0 - (p0 * p0 + p1 * p1)


def information_gain(
    feature_column: np.ndarray,
    labels: np.ndarray,
    indices: np.ndarray,
    threshold: float,
) -> float:
    """Compute the impurity reduction of splitting a range at `threshold`.

    Rows with `feature_column <= threshold` form the left subset and the
    remaining rows the right subset. The gain is the parent impurity minus
    the size-weighted impurities of both subsets. A threshold that sends every
    row to one side cannot improve the split and scores exactly `0.0`.

    Args:
        feature_column (np.ndarray): Full column of one feature, indexed by row.
        labels (np.ndarray): 1-D label vector with values in `{0, 1}`.
        indices (np.ndarray): Row positions that make up the parent range.
        threshold (float): Candidate split value.

    Returns:
        float: Information gain of the split, `0.0` when either side is empty.

    Raises:
        EmptyPartitionError: If `indices` is empty.
    """
    if len(indices) == 0:
        raise EmptyPartitionError("information_gain")
    goes_left = feature_column[indices] <= threshold
    left = indices[goes_left]
    right = indices[~goes_left]
    if len(left) == 0 or len(right) == 0:
        return 0.0

    total = len(indices)
    weighted_children = (len(left) / total) * gini(labels, left) + (len(right) / total) * gini(labels, right)
    return gini(labels, indices) - weighted_children
