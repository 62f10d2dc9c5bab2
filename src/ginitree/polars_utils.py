"""Utility functions for training from Polars DataFrames."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import polars as pl

from ginitree.exceptions import ColumnsNotFoundError, DuplicateColumnsError, InvalidShapeError


def frame_to_arrays(
    df: pl.DataFrame,
    target: str,
    features: Sequence[str] | None = None,
) -> tuple[np.ndarray, np.ndarray, list[str]]:
    """Split a DataFrame into a feature matrix, a label vector, and feature names.

    Args:
        df (pl.DataFrame): Source data with one row per sample.
        target (str): Name of the 0/1 label column.
        features (Sequence[str] | None): Feature columns in the order the
            tree should see them. When `None`, every column except `target`
            is used in DataFrame order.

    Returns:
        tuple[np.ndarray, np.ndarray, list[str]]: `(feature_matrix, labels,
            feature_names)`. Label values are validated later by `fit`.

    Raises:
        ValueError: If the resulting feature list is empty or includes `target`.
        DuplicateColumnsError: If `features` contains duplicates.
        ColumnsNotFoundError: If `target` or any feature column is missing.
        InvalidShapeError: If a feature or the target column is non-numeric
            or contains nulls.

    Examples:
        >>> df = pl.DataFrame({"age": [24, 30], "astronaut": [0, 1]})
        >>> matrix, labels, names = frame_to_arrays(df, "astronaut")
        >>> names
        ['age']
    """
    feature_columns = list(features) if features is not None else [col for col in df.columns if col != target]
    _validate_columns(feature_columns, target, df.columns)

    for column in [*feature_columns, target]:
        series = df[column]
        if not (series.dtype.is_numeric() or series.dtype == pl.Boolean):
            raise InvalidShapeError(f"Column '{column}' must be numeric, got {series.dtype}")
        if series.null_count() > 0:
            raise InvalidShapeError(f"Column '{column}' contains {series.null_count()} null value(s)")

    feature_matrix = df.select(feature_columns).cast(pl.Float64).to_numpy()
    labels = df[target].to_numpy()
    return feature_matrix, labels, feature_columns


def _validate_columns(feature_columns: Sequence[str], target: str, df_columns: Sequence[str]) -> None:
    """Validate the feature and target columns against the DataFrame.

    Args:
        feature_columns (Sequence[str]): Feature column names to validate.
        target (str): Label column name.
        df_columns (Sequence[str]): Column names present in the DataFrame.

    Raises:
        ValueError: If no feature columns remain or `target` is listed as a feature.
        DuplicateColumnsError: If feature columns contain duplicates.
        ColumnsNotFoundError: If any requested column is missing.
    """
    if len(feature_columns) == 0:
        raise ValueError("At least one feature column is required")
    if len(feature_columns) != len(set(feature_columns)):
        raise DuplicateColumnsError(columns=list(feature_columns))
    if target in feature_columns:
        raise ValueError(f"Target column '{target}' cannot also be a feature")
    missing_columns = {*feature_columns, target} - set(df_columns)
    if missing_columns:
        raise ColumnsNotFoundError(
            missing_columns=sorted(missing_columns),
            available_columns=list(df_columns),
        )
