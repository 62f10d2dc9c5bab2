"""Tests for root-to-leaf rule extraction."""

from __future__ import annotations

import numpy as np
import pytest
from pytest_check import check

from ginitree.builder import fit
from ginitree.exceptions import InvalidShapeError
from ginitree.models import Predicate
from ginitree.predictor import predict
from ginitree.rules import extract_rules

_FEATURE_NAMES = ["age", "likes_dogs", "likes_gravity"]


def _make_astronaut_data() -> tuple[np.ndarray, np.ndarray]:
    """Return (age, likes_dogs, likes_gravity) rows and the 'becomes an astronaut' label."""
    feature_matrix = np.array([
        [24, 0, 0],
        [30, 1, 1],
        [36, 0, 1],
        [36, 0, 0],
        [42, 0, 0],
        [44, 1, 1],
        [46, 1, 0],
        [47, 1, 1],
        [47, 0, 1],
        [51, 1, 1],
    ])
    labels = np.array([0, 1, 1, 0, 0, 1, 0, 1, 0, 1])
    return feature_matrix, labels


class TestExtractRules:
    """Tests for `extract_rules`."""

    def test_astronaut_rules(self) -> None:
        """The depth-3 astronaut tree should produce four rules in left-to-right order."""
        # Arrange
        feature_matrix, labels = _make_astronaut_data()
        model = fit(feature_matrix, labels, max_depth=3)

        # Act
        rules = extract_rules(model, _FEATURE_NAMES)

        # Assert
        gravity_no = Predicate(variable="likes_gravity", operator="<=", value=0.0)
        gravity_yes = Predicate(variable="likes_gravity", operator=">", value=0.0)
        dogs_no = Predicate(variable="likes_dogs", operator="<=", value=0.0)
        dogs_yes = Predicate(variable="likes_dogs", operator=">", value=0.0)
        assert len(rules) == 4
        with check:
            assert rules[0].predicates == [gravity_no]
        with check:
            assert (rules[0].prediction, rules[0].samples, rules[0].confidence) == (0, 4, 1.0)
        with check:
            assert rules[1].predicates == [
                gravity_yes,
                dogs_no,
                Predicate(variable="age", operator="<=", value=36.0),
            ]
        with check:
            assert (rules[1].prediction, rules[1].samples) == (1, 1)
        with check:
            assert rules[2].predicates[-1] == Predicate(variable="age", operator=">", value=36.0)
        with check:
            assert (rules[2].prediction, rules[2].samples) == (0, 1)
        with check:
            assert rules[3].predicates == [gravity_yes, dogs_yes]
        with check:
            assert (rules[3].prediction, rules[3].samples) == (1, 4)

    def test_default_feature_names(self) -> None:
        """Without names, features are called `feature_<index>`."""
        feature_matrix, labels = _make_astronaut_data()
        model = fit(feature_matrix, labels, max_depth=1)

        rules = extract_rules(model)

        assert [str(p) for rule in rules for p in rule.predicates] == [
            "feature_2 <= 0.0",
            "feature_2 > 0.0",
        ]

    def test_single_leaf_gives_one_unconditional_rule(self) -> None:
        """A single-leaf tree yields one rule with no predicates."""
        model = fit([[1.0], [2.0], [3.0]], [0, 0, 1], max_depth=0)

        rules = extract_rules(model)

        assert len(rules) == 1
        with check:
            assert rules[0].predicates == []
        with check:
            assert (rules[0].prediction, rules[0].samples, rules[0].confidence) == (0, 3, 0.6667)

    def test_each_training_row_matches_exactly_one_rule(self) -> None:
        """Rules partition the feature space and agree with `predict`."""
        # Arrange
        rng = np.random.default_rng(8)
        feature_matrix = rng.integers(0, 5, size=(40, 3)).astype(np.float64)
        labels = rng.integers(0, 2, size=40)
        model = fit(feature_matrix, labels, max_depth=4)
        names = ["a", "b", "c"]

        # Act
        rules = extract_rules(model, names)

        # Assert
        with check:
            assert sum(rule.samples for rule in rules) == 40
        for row in feature_matrix:
            matching = [rule for rule in rules if rule.matches(row.tolist(), names)]
            with check:
                assert len(matching) == 1
            with check:
                assert matching[0].prediction == predict(model, row)

    def test_wrong_number_of_names_raises(self) -> None:
        """Feature names must line up with the training columns."""
        feature_matrix, labels = _make_astronaut_data()
        model = fit(feature_matrix, labels, max_depth=2)

        with pytest.raises(InvalidShapeError, match="Expected 3 feature names, got 2"):
            extract_rules(model, ["age", "likes_dogs"])
