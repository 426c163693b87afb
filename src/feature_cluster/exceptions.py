"""
Exceptions raised by the clustering engine.

All of them are ``ValueError`` subclasses: they report caller misuse
(bad parameters, mismatched shapes) detected before any clustering work.
Numerical degeneracies inside an algorithm are never raised.
"""


class ClusteringError(ValueError):
    """Base class for clustering argument errors."""


class DimensionMismatchError(ClusteringError):
    """Feature vector length disagrees with the factory's fixed dimension."""


class InconsistentDimensionsError(ClusteringError):
    """Feature vectors of differing length supplied to one clustering call."""


class EmptyInputError(ClusteringError):
    """An operation that needs at least one point was given none."""


class InvalidParameterError(ClusteringError):
    """Negative threshold, k < 1, or an unusable configuration value."""
