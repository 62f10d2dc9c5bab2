"""Tests for Gini impurity, information gain, and class counting."""

from __future__ import annotations

import numpy as np
import pytest
from pytest_check import check

from ginitree.exceptions import EmptyPartitionError
from ginitree.impurity import class_counts, gini, information_gain, majority_class


def _all_rows(labels: np.ndarray) -> np.ndarray:
    return np.arange(len(labels))


class TestGini:
    """Tests for `gini`: impurity of a label range."""

    def test_pure_range_has_zero_impurity(self) -> None:
        """A range holding a single class should score exactly 0."""
        labels = np.array([1, 1, 1, 1])

        assert gini(labels, _all_rows(labels)) == 0.0

    def test_balanced_range_has_maximum_impurity(self) -> None:
        """An even class mix should score exactly 0.5."""
        labels = np.array([0, 1, 0, 1])

        assert gini(labels, _all_rows(labels)) == 0.5

    def test_unbalanced_range(self) -> None:
        """Three-to-one mix should score 1 - (9/16 + 1/16) = 0.375."""
        labels = np.array([0, 0, 0, 1])

        assert gini(labels, _all_rows(labels)) == pytest.approx(0.375)

    def test_only_selected_indices_are_counted(self) -> None:
        """Rows outside `indices` must not influence the impurity."""
        # Arrange
        labels = np.array([0, 1, 1, 1, 1])
        indices = np.array([0, 1])

        # Act
        impurity = gini(labels, indices)

        # Assert
        assert impurity == 0.5

    def test_empty_range_raises(self) -> None:
        """An empty range is an internal invariant violation."""
        labels = np.array([0, 1])

        with pytest.raises(EmptyPartitionError, match="gini"):
            gini(labels, np.array([], dtype=np.int64))

    def test_bounds_and_zero_iff_pure(self) -> None:
        """Every class mix should score within [0, 0.5], and 0 only when pure."""
        for count_0 in range(7):
            for count_1 in range(7):
                if count_0 + count_1 == 0:
                    continue
                labels = np.array([0] * count_0 + [1] * count_1)
                impurity = gini(labels, _all_rows(labels))
                is_pure = count_0 == 0 or count_1 == 0
                with check:
                    assert 0.0 <= impurity <= 0.5 + 1e-12, f"counts=({count_0}, {count_1})"
                with check:
                    assert (impurity == 0.0) == is_pure, f"counts=({count_0}, {count_1})"


class TestInformationGain:
    """Tests for `information_gain`: impurity reduction of a threshold split."""

    def test_perfect_split_recovers_full_parent_impurity(self) -> None:
        """A threshold separating the classes exactly should gain the parent's 0.5."""
        feature_column = np.array([1.0, 2.0, 3.0, 4.0])
        labels = np.array([0, 0, 1, 1])

        gain = information_gain(feature_column, labels, _all_rows(labels), threshold=2.0)

        assert gain == pytest.approx(0.5)

    def test_partial_split(self) -> None:
        """Splitting off one pure row: 0.5 - (3/4)(4/9) = 1/6."""
        feature_column = np.array([1.0, 2.0, 3.0, 4.0])
        labels = np.array([0, 0, 1, 1])

        gain = information_gain(feature_column, labels, _all_rows(labels), threshold=1.0)

        assert gain == pytest.approx(1 / 6)

    @pytest.mark.parametrize("threshold", [0.0, 4.0, 100.0])
    def test_one_sided_split_scores_zero(self, threshold: float) -> None:
        """A threshold that sends every row to one side should score exactly 0."""
        feature_column = np.array([1.0, 2.0, 3.0, 4.0])
        labels = np.array([0, 0, 1, 1])

        gain = information_gain(feature_column, labels, _all_rows(labels), threshold=threshold)

        assert gain == 0.0

    def test_uses_only_selected_rows(self) -> None:
        """Rows outside `indices` should not be partitioned or counted."""
        # Arrange -- row 0 would make the split impure if it were included
        feature_column = np.array([0.0, 1.0, 2.0, 3.0])
        labels = np.array([1, 0, 1, 1])
        indices = np.array([1, 2, 3])

        # Act
        gain = information_gain(feature_column, labels, indices, threshold=1.0)

        # Assert -- parent gini 4/9, both children pure
        assert gain == pytest.approx(4 / 9)

    def test_gain_is_never_negative(self) -> None:
        """Gini gain over observed thresholds should always be >= 0."""
        rng = np.random.default_rng(7)
        feature_column = rng.integers(0, 5, size=30).astype(np.float64)
        labels = rng.integers(0, 2, size=30)
        indices = _all_rows(labels)

        for threshold in np.unique(feature_column):
            with check:
                assert information_gain(feature_column, labels, indices, float(threshold)) >= -1e-12

    def test_empty_range_raises(self) -> None:
        """An empty parent range is an internal invariant violation."""
        with pytest.raises(EmptyPartitionError):
            information_gain(np.array([1.0]), np.array([0]), np.array([], dtype=np.int64), threshold=1.0)


class TestClassCounts:
    """Tests for `class_counts` and `majority_class`."""

    def test_counts_selected_rows(self) -> None:
        """Counts should cover only the rows in `indices`."""
        labels = np.array([0, 1, 1, 0, 1])

        with check:
            assert class_counts(labels, _all_rows(labels)) == (2, 3)
        with check:
            assert class_counts(labels, np.array([0, 3])) == (2, 0)

    @pytest.mark.parametrize(
        ("counts", "expected"),
        [((3, 1), 0), ((1, 3), 1), ((2, 2), 1), ((0, 5), 1), ((5, 0), 0)],
    )
    def test_majority_class(self, counts: tuple[int, int], expected: int) -> None:
        """Class 0 wins only with a strictly larger count; ties go to class 1."""
        assert majority_class(counts) == expected
