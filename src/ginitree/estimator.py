"""Estimator-style wrapper around training, prediction, scoring, and rule extraction."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import polars as pl
from loguru import logger
from sklearn.metrics import accuracy_score

from ginitree.builder import fit as fit_tree
from ginitree.builder import validate_training_data
from ginitree.exceptions import UntrainedModelError
from ginitree.models import DEFAULT_MAX_DEPTH, ClassificationRule, TrainedTree, TrainingConfig
from ginitree.polars_utils import frame_to_arrays
from ginitree.predictor import predict as predict_one
from ginitree.predictor import predict_many
from ginitree.rules import extract_rules


class BinaryDecisionTree:
    """Binary Gini decision tree classifier.

    Holds the training configuration and, after a successful `fit`, the
    trained `TrainedTree`. Refitting replaces the model only when the new
    fit succeeds.

    Attributes:
        config (TrainingConfig): Validated hyperparameters.
        model_ (TrainedTree | None): The trained tree, or `None` before fitting.
        feature_names_ (list[str] | None): Column names when trained with
            `fit_frame`, otherwise `None`.

    Examples:
        >>> clf = BinaryDecisionTree(max_depth=2).fit([[0.0], [1.0]], [0, 1])
        >>> clf.predict([0.0])
        0
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        """Initialize the estimator.

        Args:
            max_depth (int): Maximum tree depth; must be non-negative.

        Raises:
            pydantic.ValidationError: If `max_depth` is negative.
        """
        self.config = TrainingConfig(max_depth=max_depth)
        self.model_: TrainedTree | None = None
        self.feature_names_: list[str] | None = None

    def __repr__(self) -> str:
        """Return a representation showing configuration and training state."""
        state = "trained" if self.model_ is not None else "untrained"
        return f"{self.__class__.__name__}(max_depth={self.config.max_depth}, {state})"

    @property
    def is_fitted(self) -> bool:
        """Whether a trained model is available."""
        return self.model_ is not None

    @property
    def model(self) -> TrainedTree:
        """The trained tree.

        Raises:
            UntrainedModelError: If `fit` has not succeeded yet.
        """
        if self.model_ is None:
            logger.warning("Estimator used before fit", event="rejected")
            raise UntrainedModelError
        return self.model_

    def fit(
        self,
        feature_matrix: np.ndarray | Sequence[Sequence[float]],
        labels: np.ndarray | Sequence[int],
    ) -> BinaryDecisionTree:
        """Train on a feature matrix and 0/1 labels.

        Args:
            feature_matrix (np.ndarray | Sequence[Sequence[float]]): 2-D
                matrix with shape `(n_samples, n_features)`.
            labels (np.ndarray | Sequence[int]): One `0`/`1` label per row.

        Returns:
            BinaryDecisionTree: This estimator, for chaining.

        Raises:
            InvalidShapeError: If the training data is rejected.
        """
        self.model_ = fit_tree(feature_matrix, labels, max_depth=self.config.max_depth)
        self.feature_names_ = None
        return self

    def fit_frame(
        self,
        df: pl.DataFrame,
        target: str,
        *,
        features: Sequence[str] | None = None,
    ) -> BinaryDecisionTree:
        """Train on the columns of a Polars DataFrame.

        Args:
            df (pl.DataFrame): Training data, one row per sample.
            target (str): Name of the 0/1 label column.
            features (Sequence[str] | None): Feature columns in order. When
                `None`, all columns except `target` are used.

        Returns:
            BinaryDecisionTree: This estimator, for chaining.

        Raises:
            ColumnsNotFoundError: If a requested column is missing.
            DuplicateColumnsError: If `features` contains duplicates.
            InvalidShapeError: If the data is rejected.
        """
        feature_matrix, labels, feature_names = frame_to_arrays(df, target, features)
        model = fit_tree(feature_matrix, labels, max_depth=self.config.max_depth)
        self.model_ = model
        self.feature_names_ = feature_names
        logger.debug("Trained from DataFrame", event="frame", target=target, features=feature_names)
        return self

    def predict(self, sample: np.ndarray | Sequence[float]) -> int:
        """Classify a single sample.

        Raises:
            UntrainedModelError: If `fit` has not succeeded yet.
            FeatureIndexOutOfRangeError: If `sample` is too short.
        """
        return predict_one(self.model, sample)

    def predict_many(self, feature_matrix: np.ndarray | Sequence[Sequence[float]]) -> np.ndarray:
        """Classify every row of `feature_matrix`.

        Raises:
            UntrainedModelError: If `fit` has not succeeded yet.
            FeatureIndexOutOfRangeError: If rows are too short.
        """
        return predict_many(self.model, feature_matrix)

    def score(
        self,
        feature_matrix: np.ndarray | Sequence[Sequence[float]],
        labels: np.ndarray | Sequence[int],
    ) -> float:
        """Return the accuracy of the trained tree on labeled data.

        Args:
            feature_matrix (np.ndarray | Sequence[Sequence[float]]): 2-D
                evaluation matrix.
            labels (np.ndarray | Sequence[int]): True `0`/`1` labels.

        Returns:
            float: Fraction of rows classified correctly.

        Raises:
            UntrainedModelError: If `fit` has not succeeded yet.
            InvalidShapeError: If the evaluation data is malformed.
        """
        model = self.model
        matrix, targets = validate_training_data(feature_matrix, labels)
        predictions = predict_many(model, matrix)
        return float(accuracy_score(targets, predictions))

    def rules(self) -> list[ClassificationRule]:
        """Return one rule per leaf, using DataFrame column names when available.

        Raises:
            UntrainedModelError: If `fit` has not succeeded yet.
        """
        return extract_rules(self.model, self.feature_names_)
