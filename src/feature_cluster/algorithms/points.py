"""
Feature points: identity-bearing wrappers around fixed-length feature vectors.

Points compare and hash by ``id`` only, so a clustering result can hand back
the very instances the caller supplied.
"""

from __future__ import annotations

import itertools
from collections import abc
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from ..exceptions import DimensionMismatchError, EmptyInputError, InconsistentDimensionsError

# Dimension marker for a factory that infers its dimension from the first point
UNBOUND = None

# Id carried by synthetic points (centroids); never issued by a factory
CENTROID_ID = -1

Coords = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True, eq=False)
class FeaturePoint:
    """An immutable feature vector with a stable id."""

    id: int
    features: Tuple[float, ...] = field(repr=False)

    def __eq__(self, other):
        if not isinstance(other, FeaturePoint):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __len__(self) -> int:
        return len(self.features)

    def __repr__(self) -> str:
        coords = ", ".join(f"{c:g}" for c in self.features)
        return f"FeaturePoint(id={self.id}, features=({coords}))"

    @property
    def dimension(self) -> int:
        return len(self.features)

    def as_array(self) -> np.ndarray:
        """Return the features as a new float64 array."""
        return np.asarray(self.features, dtype=np.float64)


def _as_vector(coords: Tuple) -> np.ndarray:
    """Accept ``new_point(1, 2)`` as well as ``new_point([1, 2])``."""
    if len(coords) == 1 and isinstance(coords[0], (abc.Sequence, np.ndarray)):
        coords = coords[0]
    vec = np.asarray(coords, dtype=np.float64)
    if vec.ndim != 1:
        raise DimensionMismatchError(f"Feature vector must be 1-D, got shape {vec.shape}")
    return vec


class PointFactory:
    """
    Creates FeaturePoints with monotonically increasing ids.

    The factory either has a fixed dimension, or (``dimension=UNBOUND``)
    adopts the length of the first point it creates. Ids follow creation
    order, which is what result ordering uses to break ties.

    Usage:
        factory = PointFactory(2)
        p = factory.new_point(1.0, 3.0)
        q = factory.new_point([2.0, 4.0])
    """

    def __init__(self, dimension: Optional[int] = UNBOUND, first_id: int = 0):
        if dimension is not None and dimension < 1:
            raise DimensionMismatchError(f"dimension must be >= 1, got {dimension}")
        if first_id < 0:
            raise ValueError(f"first_id must be >= 0, got {first_id}")
        self._dimension = dimension
        self._ids = itertools.count(first_id)

    @property
    def dimension(self) -> Optional[int]:
        """The fixed dimension, or None while still unbound."""
        return self._dimension

    def new_point(self, *coords) -> FeaturePoint:
        """
        Create a point from coordinates or a single coordinate sequence.

        Raises:
            DimensionMismatchError: If the length differs from the factory's dimension
        """
        vec = _as_vector(coords)
        if self._dimension is None:
            if vec.size == 0:
                raise DimensionMismatchError("Feature vector must not be empty")
            self._dimension = int(vec.size)
        elif vec.size != self._dimension:
            raise DimensionMismatchError(
                f"Expected {self._dimension} features, got {vec.size}"
            )
        return FeaturePoint(next(self._ids), tuple(float(c) for c in vec))

    def new_points(self, rows: Iterable[Coords]) -> list[FeaturePoint]:
        """Create one point per row, in order."""
        return [self.new_point(row) for row in rows]


def stack_features(points: Sequence[FeaturePoint]) -> np.ndarray:
    """
    Stack point features into an (n, d) float64 matrix.

    Raises:
        InconsistentDimensionsError: If the points do not all share one dimension
    """
    if not points:
        return np.zeros((0, 0), dtype=np.float64)
    dims = {p.dimension for p in points}
    if len(dims) > 1:
        raise InconsistentDimensionsError(
            f"Points have differing dimensions: {sorted(dims)}"
        )
    return np.array([p.features for p in points], dtype=np.float64)


def mean(points: Iterable[FeaturePoint]) -> FeaturePoint:
    """
    Coordinate-wise mean of *points* as a synthetic point (id ``CENTROID_ID``).

    Raises:
        EmptyInputError: If *points* is empty
        InconsistentDimensionsError: If the points differ in dimension
    """
    points = list(points)
    if not points:
        raise EmptyInputError("Cannot compute the mean of zero points")
    centroid = stack_features(points).mean(axis=0)
    return FeaturePoint(CENTROID_ID, tuple(float(c) for c in centroid))
