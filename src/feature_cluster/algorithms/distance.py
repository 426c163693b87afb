"""
Distance measures over feature matrices.

All functions are vectorised over rows: ``X`` is (n, d), ``C`` is (m, d).
"""

from __future__ import annotations

from enum import Enum

import numpy as np

Array2D = np.ndarray


class DistanceMeasure(str, Enum):
    """Supported point-to-point distances."""

    SQUARED_EUCLIDEAN = "squared_euclidean"
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"
    COSINE = "cosine"


def is_squared(measure: DistanceMeasure) -> bool:
    """True when *measure* already yields squared Euclidean distances."""
    return DistanceMeasure(measure) is DistanceMeasure.SQUARED_EUCLIDEAN


def _squared_euclidean(X: Array2D, C: Array2D) -> Array2D:
    # ||x - c||² = ||x||² + ||c||² - 2·x·c, clipped against round-off
    X_sq = np.sum(X ** 2, axis=1, keepdims=True)  # (n, 1)
    C_sq = np.sum(C ** 2, axis=1, keepdims=True).T  # (1, m)
    dists = X_sq + C_sq - 2.0 * (X @ C.T)
    return np.maximum(dists, 0.0)


def _cosine(X: Array2D, C: Array2D) -> Array2D:
    x_norm = np.linalg.norm(X, axis=1, keepdims=True)
    c_norm = np.linalg.norm(C, axis=1, keepdims=True)
    x_zero = x_norm[:, 0] < 1e-12
    c_zero = c_norm[:, 0] < 1e-12
    sims = (X / np.maximum(x_norm, 1e-12)) @ (C / np.maximum(c_norm, 1e-12)).T
    dists = np.clip(1.0 - sims, 0.0, 2.0)
    # A zero vector has no direction: distance 1 to everything else
    dists[x_zero, :] = 1.0
    dists[:, c_zero] = 1.0
    both = np.logical_and.outer(x_zero, c_zero)
    dists[both] = 0.0
    return dists


def cross_distances(
    X: Array2D, C: Array2D, measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN
) -> Array2D:
    """
    Distances from every row of *X* to every row of *C*.

    Args:
        X: (n, d) points
        C: (m, d) points (typically centroids)
        measure: Distance measure to apply

    Returns:
        (n, m) array of non-negative distances
    """
    X = np.asarray(X, dtype=np.float64)
    C = np.asarray(C, dtype=np.float64)
    measure = DistanceMeasure(measure)

    if measure is DistanceMeasure.SQUARED_EUCLIDEAN:
        return _squared_euclidean(X, C)
    if measure is DistanceMeasure.EUCLIDEAN:
        return np.sqrt(_squared_euclidean(X, C))
    if measure is DistanceMeasure.COSINE:
        return _cosine(X, C)

    diffs = np.abs(X[:, None, :] - C[None, :, :])  # (n, m, d)
    if measure is DistanceMeasure.MANHATTAN:
        return diffs.sum(axis=2)
    return diffs.max(axis=2, initial=0.0)


def _pairwise_squared_euclidean(X: Array2D) -> Array2D:
    # Explicit differences, one row at a time; exact for large coordinate offsets
    n = X.shape[0]
    dist = np.zeros((n, n))
    for i in range(n - 1):
        row = np.sum((X[i + 1:] - X[i]) ** 2, axis=1)
        dist[i, i + 1:] = row
        dist[i + 1:, i] = row
    return dist


def pairwise_distances(
    X: Array2D, measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN
) -> Array2D:
    """
    Symmetric (n, n) distance matrix with an exact zero diagonal.

    Identical rows are at distance exactly 0 under every measure, and
    Euclidean distances come from explicit coordinate differences, so a
    hard cutoff on the result is not affected by the magnitude of the
    coordinates.

    Args:
        X: (n, d) points
        measure: Distance measure to apply

    Returns:
        (n, n) distance matrix
    """
    X = np.asarray(X, dtype=np.float64)
    measure = DistanceMeasure(measure)

    if measure is DistanceMeasure.SQUARED_EUCLIDEAN:
        return _pairwise_squared_euclidean(X)
    if measure is DistanceMeasure.EUCLIDEAN:
        return np.sqrt(_pairwise_squared_euclidean(X))

    dist = cross_distances(X, X, measure)
    if measure is DistanceMeasure.COSINE and X.shape[0]:
        # Normalised dot products leave round-off between identical rows
        dist = 0.5 * (dist + dist.T)
        _, inverse = np.unique(X, axis=0, return_inverse=True)
        inverse = np.asarray(inverse).reshape(-1)
        dist[inverse[:, None] == inverse[None, :]] = 0.0
    return dist


def nearest_neighbor_distances(dist: Array2D) -> np.ndarray:
    """Distance from each point to its nearest other point (inf for a lone point)."""
    n = dist.shape[0]
    if n < 2:
        return np.full(n, np.inf)
    masked = dist + np.diag(np.full(n, np.inf))
    return masked.min(axis=1)
