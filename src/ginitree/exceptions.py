"""Custom exceptions for ginitree.

This module defines the errors raised while training and querying a tree:

Input errors (detected at the API boundary):
- InvalidShapeError: Raised when the feature matrix, labels, or a sample have
  an unusable shape or content.
- FeatureIndexOutOfRangeError: Raised when a sample is shorter than the
  feature count the tree was trained on.
- UntrainedModelError: Raised when prediction is requested before a
  successful fit.

Internal invariant violations:
- EmptyPartitionError: Raised when an empty sample range reaches impurity
  evaluation or tree construction. This indicates a logic fault rather than
  bad user input.

Column validation exceptions (subclass ValueError), used for DataFrame input:
- ColumnsNotFoundError: Raised when requested columns do not exist in a DataFrame.
- DuplicateColumnsError: Raised when duplicate column names are provided.

All tree errors derive from DecisionTreeError, so callers can catch any
ginitree failure with a single except clause.
"""

from __future__ import annotations


class DecisionTreeError(Exception):
    """Base exception for all decision tree errors."""


class InvalidShapeError(DecisionTreeError, ValueError):
    """Raised when training or prediction input has an invalid shape or content.

    Attributes:
        detail (str): Human-readable explanation of what was wrong.

    Examples:
        >>> err = InvalidShapeError("feature_matrix must have at least one row")
        >>> err.detail
        'feature_matrix must have at least one row'
    """

    detail: str

    def __init__(self, detail: str) -> None:
        """Initialize InvalidShapeError.

        Args:
            detail (str): Description of the shape violation.
        """
        super().__init__(detail)
        self.detail = detail


class EmptyPartitionError(DecisionTreeError, RuntimeError):
    """Raised when an empty sample range reaches impurity evaluation or tree construction.

    Input validation rejects empty datasets and the builder only accepts
    splits that leave both sides non-empty, so this error always signals a
    programming fault.
    """

    def __init__(self, operation: str) -> None:
        """Initialize EmptyPartitionError.

        Args:
            operation (str): Name of the operation that received the empty range.
        """
        super().__init__(f"{operation} received an empty sample range")
        self.operation = operation


class FeatureIndexOutOfRangeError(DecisionTreeError, IndexError):
    """Raised when a sample is too short for the trained tree.

    Attributes:
        feature_index (int): Highest feature index the tree may test.
        sample_length (int): Number of values in the offending sample.

    Examples:
        >>> err = FeatureIndexOutOfRangeError(feature_index=2, sample_length=2)
        >>> str(err)
        'Sample has 2 values but the tree was trained on 3 features'
    """

    feature_index: int
    sample_length: int

    def __init__(self, feature_index: int, sample_length: int) -> None:
        """Initialize FeatureIndexOutOfRangeError.

        Args:
            feature_index (int): Highest feature index the tree may test.
            sample_length (int): Number of values in the offending sample.
        """
        super().__init__(
            f"Sample has {sample_length} values but the tree was trained on {feature_index + 1} features"
        )
        self.feature_index = feature_index
        self.sample_length = sample_length


class UntrainedModelError(DecisionTreeError, RuntimeError):
    """Raised when prediction is requested before any successful fit."""

    def __init__(self, message: str = "Model has not been trained; call fit() first") -> None:
        """Initialize UntrainedModelError.

        Args:
            message (str): Description of the error.
        """
        super().__init__(message)


class ColumnsNotFoundError(ValueError):
    """Raised when requested columns do not exist in a DataFrame.

    Attributes:
        missing_columns (list[str]): Column names that were not found.
        available_columns (list[str]): Column names present in the DataFrame.

    Examples:
        >>> err = ColumnsNotFoundError(
        ...     missing_columns=["x", "y"],
        ...     available_columns=["a", "b", "c"],
        ... )
        >>> err.missing_columns
        ['x', 'y']
    """

    missing_columns: list[str]
    available_columns: list[str]

    def __init__(
        self,
        missing_columns: list[str],
        available_columns: list[str],
    ) -> None:
        """Initialize ColumnsNotFoundError.

        Args:
            missing_columns (list[str]): Column names not found in the DataFrame.
            available_columns (list[str]): Column names present in the DataFrame.
        """
        super().__init__(f"Columns not found in DataFrame: {sorted(missing_columns)}")
        self.missing_columns = missing_columns
        self.available_columns = available_columns


class DuplicateColumnsError(ValueError):
    """Raised when duplicate column names are provided.

    Attributes:
        columns (list[str]): The column list that contains duplicates.
        duplicate_columns (list[str]): The specific column names that are
            duplicated (each listed once).

    Examples:
        >>> err = DuplicateColumnsError(columns=["a", "a", "b"])
        >>> err.duplicate_columns
        ['a']
    """

    columns: list[str]
    duplicate_columns: list[str]

    def __init__(self, columns: list[str]) -> None:
        """Initialize DuplicateColumnsError.

        Args:
            columns (list[str]): The column list containing duplicates.
        """
        super().__init__("Duplicate column names are not allowed")
        self.columns = columns
        seen: set[str] = set()
        self.duplicate_columns = []
        for col in columns:
            if col in seen and col not in self.duplicate_columns:
                self.duplicate_columns.append(col)
            seen.add(col)
