"""
K-means clustering (Lloyd's algorithm) with restarts.

Provides k-means++ / random seeding, empty-centroid re-seeding and
best-of-n restarts selected by inertia.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .distance import DistanceMeasure, cross_distances
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

Array2D = np.ndarray
InitSpec = Union[str, np.ndarray]


@dataclass
class KMeansResult:
    """Result of a k-means run (the best restart when several were made)."""

    labels: np.ndarray
    centroids: np.ndarray
    inertia: float
    n_iter: int = 0
    k: int = 0


# ------------------------------------------------------------------
# Initialisation & assignment helpers
# ------------------------------------------------------------------

def _kmeanspp_init(
    X: Array2D, K: int, rng: np.random.Generator, measure: DistanceMeasure
) -> np.ndarray:
    """Return (K, d) initial centroids chosen by the k-means++ rule."""
    n, d = X.shape
    centroids = np.empty((K, d), dtype=X.dtype)
    centroids[0] = X[int(rng.integers(0, n))]
    min_d = cross_distances(X, centroids[:1], measure)[:, 0]  # (n,)

    for k in range(1, K):
        total = min_d.sum()
        if total == 0.0:
            centroids[k] = X[int(rng.integers(0, n))]
        else:
            probs = min_d / total
            centroids[k] = X[int(rng.choice(n, p=probs))]
        min_d = np.minimum(min_d, cross_distances(X, centroids[k : k + 1], measure)[:, 0])
    return centroids


def _random_init(X: Array2D, K: int, rng: np.random.Generator) -> np.ndarray:
    """Return (K, d) centroids drawn uniformly without replacement from *X*."""
    idx = rng.choice(X.shape[0], size=K, replace=False)
    return X[idx].copy()


def _assign(
    X: Array2D, centroids: Array2D, measure: DistanceMeasure
) -> tuple[np.ndarray, np.ndarray]:
    """Nearest centroid for each row of *X* and the distance to it."""
    dists = cross_distances(X, centroids, measure)  # (n, K)
    labels = np.argmin(dists, axis=1)
    return labels, dists[np.arange(X.shape[0]), labels]


def _update(
    X: Array2D, labels: np.ndarray, centroids: Array2D, point_dists: np.ndarray
) -> np.ndarray:
    """
    Recompute centroids as cluster means.

    A centroid left without points is moved onto the point currently farthest
    from its own centroid; several empty centroids take distinct points.
    """
    K = centroids.shape[0]
    new = centroids.copy()
    empty = []
    for j in range(K):
        members = labels == j
        if members.any():
            new[j] = X[members].mean(axis=0)
        else:
            empty.append(j)

    if empty:
        farthest = np.argsort(-point_dists, kind="stable")
        for j, i in zip(empty, farthest):
            new[j] = X[i]
        logger.debug("Re-seeded %d empty centroid(s)", len(empty))
    return new


def _lloyd(
    X: Array2D,
    centroids: Array2D,
    max_iter: int,
    measure: DistanceMeasure,
) -> KMeansResult:
    """Iterate assignment/update from the given centroids until stable."""
    labels, point_dists = _assign(X, centroids, measure)
    n_iter = 0
    for t in range(1, max_iter + 1):
        n_iter = t
        centroids = _update(X, labels, centroids, point_dists)
        new_labels, point_dists = _assign(X, centroids, measure)
        if np.array_equal(new_labels, labels):
            break
        labels = new_labels

    # labels is always the assignment to the current centroids here
    return KMeansResult(
        labels=labels.astype(int),
        centroids=centroids,
        inertia=float(np.sum(point_dists)),
        n_iter=n_iter,
        k=centroids.shape[0],
    )


def kmeans(
    X: Array2D,
    k: int,
    *,
    init: InitSpec = "k-means++",
    n_init: int = 10,
    max_iter: int = 300,
    seed: Optional[int] = None,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
) -> KMeansResult:
    """
    Partition the rows of *X* into at most *k* clusters.

    When ``k > n`` it is reduced to ``n`` (one point per cluster). Each restart
    draws its own seeding from a generator derived from *seed*; the run with
    the lowest inertia (sum of distances to assigned centroids) is returned.

    Args:
        X: (n, d) feature matrix
        k: Requested number of clusters (>= 1)
        init: "k-means++", "random", or an explicit (k, d) centroid array
            (explicit centroids are used for a single run and need k <= n)
        n_init: Number of restarts for the seeded strategies
        max_iter: Iteration cap per restart
        seed: Random seed; None draws fresh entropy
        measure: Distance used for assignment and inertia

    Returns:
        KMeansResult of the best restart

    Raises:
        ValueError: If k < 1, n_init < 1, max_iter < 1, init is unknown, or
            explicit init centroids are not (k, d) with k <= n
    """
    X = np.asarray(X, dtype=np.float64)
    n = X.shape[0]

    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    if n_init < 1:
        raise ValueError(f"n_init must be >= 1, got {n_init}")
    if max_iter < 1:
        raise ValueError(f"max_iter must be >= 1, got {max_iter}")

    if n == 0:
        return KMeansResult(
            labels=np.zeros(0, dtype=int),
            centroids=np.zeros((0, X.shape[1] if X.ndim == 2 else 0)),
            inertia=0.0,
            k=0,
        )

    if isinstance(init, np.ndarray):
        centroids = np.asarray(init, dtype=np.float64)
        if centroids.shape != (k, X.shape[1]):
            raise ValueError(
                f"init centroids must have shape ({k}, {X.shape[1]}), got {centroids.shape}"
            )
        if k > n:
            raise ValueError(f"init has {k} centroids for only {n} point(s)")
        return _lloyd(X, centroids.copy(), max_iter, measure)

    if init not in ("k-means++", "random"):
        raise ValueError(f"init must be 'k-means++', 'random' or an array, got {init!r}")

    K = min(k, n)
    if K < k:
        logger.debug("k=%d exceeds n=%d; reducing k to %d", k, n, K)

    rng = np.random.default_rng(seed)
    best: Optional[KMeansResult] = None
    for restart in range(n_init):
        if init == "k-means++":
            start = _kmeanspp_init(X, K, rng, measure)
        else:
            start = _random_init(X, K, rng)
        result = _lloyd(X, start, max_iter, measure)
        logger.debug(
            "k-means restart %d: inertia=%.6g after %d iteration(s)",
            restart,
            result.inertia,
            result.n_iter,
        )
        if best is None or result.inertia < best.inertia:
            best = result
    return best
