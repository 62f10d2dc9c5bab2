"""Prediction by traversing a trained tree from the root to a leaf."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from loguru import logger

from ginitree.exceptions import FeatureIndexOutOfRangeError, InvalidShapeError, UntrainedModelError
from ginitree.models import DecisionNode, TrainedTree, TreeNode


def predict(model: TrainedTree | None, sample: np.ndarray | Sequence[float]) -> int:
    """Classify a single sample.

    Starting at the root, each decision node sends the sample left when
    `sample[feature_index] <= threshold` and right otherwise, until a leaf
    is reached. The tree is never modified, so concurrent calls are safe.

    Args:
        model (TrainedTree | None): A model returned by `fit`.
        sample (np.ndarray | Sequence[float]): Feature values in training
            column order; must have at least `model.n_features` entries.

    Returns:
        int: The predicted class, `0` or `1`.

    Raises:
        UntrainedModelError: If `model` is `None`.
        InvalidShapeError: If `sample` is not a 1-D numeric vector.
        FeatureIndexOutOfRangeError: If `sample` is shorter than `model.n_features`.

    Examples:
        >>> from ginitree.builder import fit
        >>> model = fit([[1.0], [2.0]], [0, 1], max_depth=1)
        >>> predict(model, [1.5])
        1
    """
    model = _require_model(model)
    values = _as_sample(sample)
    _check_sample_length(model, len(values))
    return _walk(model.root, values)


def predict_many(model: TrainedTree | None, feature_matrix: np.ndarray | Sequence[Sequence[float]]) -> np.ndarray:
    """Classify every row of a feature matrix.

    The matrix is converted and its width checked once; each row then walks
    the tree directly.

    Args:
        model (TrainedTree | None): A model returned by `fit`.
        feature_matrix (np.ndarray | Sequence[Sequence[float]]): 2-D matrix
            whose rows are samples.

    Returns:
        np.ndarray: 1-D `int64` array of predicted classes, one per row.

    Raises:
        UntrainedModelError: If `model` is `None`.
        InvalidShapeError: If `feature_matrix` is not a 2-D numeric matrix.
        FeatureIndexOutOfRangeError: If rows are narrower than `model.n_features`.
    """
    model = _require_model(model)
    try:
        matrix = np.asarray(feature_matrix, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidShapeError(f"feature_matrix must be a rectangular numeric matrix: {exc}") from exc
    if matrix.ndim != 2:
        raise InvalidShapeError(f"feature_matrix must be 2-D, got {matrix.ndim} dimension(s)")
    _check_sample_length(model, matrix.shape[1])
    root = model.root
    return np.fromiter((_walk(root, row) for row in matrix), dtype=np.int64, count=matrix.shape[0])


def _walk(root: TreeNode, values: np.ndarray) -> int:
    node = root
    while isinstance(node, DecisionNode):
        node = node.left if values[node.feature_index] <= node.threshold else node.right
    return node.predicted_class


def _require_model(model: TrainedTree | None) -> TrainedTree:
    if model is None:
        logger.warning("Prediction requested from an untrained model", event="rejected")
        raise UntrainedModelError
    return model


def _as_sample(sample: np.ndarray | Sequence[float]) -> np.ndarray:
    try:
        values = np.asarray(sample, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidShapeError(f"sample must be a numeric vector: {exc}") from exc
    if values.ndim != 1:
        raise InvalidShapeError(f"sample must be 1-D, got {values.ndim} dimension(s)")
    return values


def _check_sample_length(model: TrainedTree, sample_length: int) -> None:
    if sample_length < model.n_features:
        logger.warning(
            "Sample too short for trained tree",
            event="rejected",
            sample_length=sample_length,
            n_features=model.n_features,
        )
        raise FeatureIndexOutOfRangeError(feature_index=model.n_features - 1, sample_length=sample_length)
