"""ginitree: a binary Gini decision tree classifier."""

from loguru import logger

from ginitree.builder import best_split, build_tree, fit
from ginitree.estimator import BinaryDecisionTree
from ginitree.exceptions import (
    DecisionTreeError,
    EmptyPartitionError,
    FeatureIndexOutOfRangeError,
    InvalidShapeError,
    UntrainedModelError,
)
from ginitree.impurity import gini, information_gain
from ginitree.logging import PACKAGE_NAME, enable_logging
from ginitree.models import DecisionNode, LeafNode, SplitCandidate, TrainedTree, TrainingConfig
from ginitree.predictor import predict, predict_many
from ginitree.rules import extract_rules

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the ginitree package by default

__all__ = [
    "BinaryDecisionTree",
    "DecisionNode",
    "DecisionTreeError",
    "EmptyPartitionError",
    "FeatureIndexOutOfRangeError",
    "InvalidShapeError",
    "LeafNode",
    "SplitCandidate",
    "TrainedTree",
    "TrainingConfig",
    "UntrainedModelError",
    "best_split",
    "build_tree",
    "enable_logging",
    "extract_rules",
    "fit",
    "gini",
    "information_gain",
    "predict",
    "predict_many",
]
