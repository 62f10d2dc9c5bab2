"""Trains a small tree to guess who becomes an astronaut, with logging enabled.

ginitree logging is disabled by default. ``enable_logging(level="SPLIT")``
shows every accepted split as the tree is built; ``level="TRACE"`` also shows
each leaf. The handle re-disables logging when the ``with`` block exits.

Features per person: age, likes dogs (0/1), likes gravity (0/1).
"""

import polars as pl

from ginitree import BinaryDecisionTree, enable_logging

people = pl.DataFrame({
    "age": [24, 30, 36, 36, 42, 44, 46, 47, 47, 51],
    "likes_dogs": [0, 1, 0, 0, 0, 1, 1, 1, 0, 1],
    "likes_gravity": [0, 1, 1, 0, 0, 1, 0, 1, 1, 1],
    "astronaut": [0, 1, 1, 0, 0, 1, 0, 1, 0, 1],
})

with enable_logging(level="SPLIT"):
    clf = BinaryDecisionTree(max_depth=3).fit_frame(people, "astronaut")

for rule in clf.rules():
    print(rule)

print("Prediction for (40, likes dogs, likes gravity):", clf.predict([40, 1, 1]))
