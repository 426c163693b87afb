"""
Parameter-free clustering.

Derives a linking threshold from the nearest-neighbour distance distribution,
uses threshold-graph clustering to find candidate groups, drops groups too
small to count, merges survivors that are not clearly separated, and refines
the rest with a single seeded k-means run.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .distance import DistanceMeasure, is_squared, nearest_neighbor_distances, pairwise_distances
from .greedy import threshold_components
from .kmeans import kmeans
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

Array2D = np.ndarray


def estimate_threshold(
    dist: Array2D,
    factor: float = 3.0,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
) -> float:
    """
    Linking threshold for *dist*: *factor* times the median positive
    nearest-neighbour distance.

    For squared Euclidean distances the factor scales the unsquared distance,
    so the threshold is ``(factor * median(sqrt(nn)))**2``. When every point
    has an exact duplicate the smallest positive pairwise distance stands in.
    Returns 0.0 when all distances are 0.
    """
    nn = nearest_neighbor_distances(dist)
    nn = nn[np.isfinite(nn) & (nn > 0)]
    if nn.size:
        if is_squared(measure):
            return float((factor * np.median(np.sqrt(nn))) ** 2)
        return float(factor * np.median(nn))
    positive = dist[dist > 0]
    if positive.size:
        return float(positive.min())
    return 0.0


def min_cluster_size(n: int, fraction: float) -> int:
    """Smallest group that counts as a cluster when fixing k."""
    return max(2, int(math.ceil(fraction * n)))


def separation_threshold(
    threshold: float,
    factor: float,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
) -> float:
    """
    Gap two candidate clusters need to count as separate: *factor* times the
    linking threshold (scaled on the unsquared distance for squared Euclidean).
    """
    if is_squared(measure):
        return float(threshold * factor ** 2)
    return float(threshold * factor)


def automatic_cluster(
    X: Array2D,
    *,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
    threshold_factor: float = 3.0,
    min_cluster_fraction: float = 0.05,
    separation_factor: float = 2.0,
    max_iter: int = 300,
    tolerance: float = 1e-9,
    dist: Optional[Array2D] = None,
) -> np.ndarray:
    """
    Cluster the rows of *X* without a user-supplied threshold or k.

    Steps:
    1. All pairwise distances
    2. Points that coincide (within *tolerance*) form one cluster
    3. Threshold from the nearest-neighbour distances (``estimate_threshold``)
    4. Threshold-graph components as candidate clusters
    5. Candidates smaller than ``min_cluster_size`` are dropped; the rest fix k
       (all candidates are kept if none is large enough)
    6. Surviving candidates joined by a chain of gaps shorter than
       ``separation_threshold`` are merged; if one group remains the points
       form a single cluster
    7. k-means seeded with the remaining groups' centroids

    A cloud of near-duplicate points comes back as one cluster in step 6,
    whatever the absolute size of its spread.

    Args:
        X: (n, d) feature matrix
        measure: Distance measure
        threshold_factor: Multiple of the median nearest-neighbour distance
            (of the unsquared distance for squared Euclidean)
        min_cluster_fraction: Candidate size (fraction of n) needed to count
        separation_factor: Multiple of the threshold that separates clusters
        max_iter: k-means iteration cap
        tolerance: Spread below which all points count as identical
        dist: Optional precomputed pairwise distances

    Returns:
        (n,) label vector
    """
    X = np.asarray(X, dtype=np.float64)
    n = X.shape[0]
    if n < 2:
        return np.zeros(n, dtype=int)

    scale = max(1.0, float(np.abs(X).max()))
    if float(np.ptp(X, axis=0).max()) <= tolerance * scale:
        logger.debug("Automatic: %d points coincide, returning one cluster", n)
        return np.zeros(n, dtype=int)

    if dist is None:
        dist = pairwise_distances(X, measure)

    threshold = estimate_threshold(dist, threshold_factor, measure)
    candidates = threshold_components(dist, threshold)

    roots, sizes = np.unique(candidates, return_counts=True)
    keep = roots[sizes >= min_cluster_size(n, min_cluster_fraction)]
    if keep.size == 0:
        keep = roots

    kept = np.isin(candidates, keep)
    if keep.size > 1:
        coarse = threshold_components(
            dist, separation_threshold(threshold, separation_factor, measure)
        )
    else:
        coarse = np.zeros(n, dtype=np.int64)
    groups = np.unique(coarse[kept])
    logger.debug(
        "Automatic: threshold=%g gave %d candidate(s), keeping %d in %d separated group(s)",
        threshold,
        len(roots),
        len(keep),
        len(groups),
    )

    if groups.size == 1:
        return np.zeros(n, dtype=int)

    seeds = np.vstack([X[kept & (coarse == g)].mean(axis=0) for g in groups])
    result = kmeans(X, len(groups), init=seeds, max_iter=max_iter, measure=measure)
    return result.labels
