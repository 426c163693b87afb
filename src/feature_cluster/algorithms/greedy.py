"""
Threshold-graph clustering (single linkage with a hard cutoff).

Two points are linked when their distance is strictly below the threshold;
exact duplicates are always linked. Clusters are the connected components of
the resulting graph, found with a disjoint-set forest.
"""

from __future__ import annotations

import numpy as np

from .distance import DistanceMeasure, pairwise_distances
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

Array2D = np.ndarray


class DisjointSet:
    """Union-find over ``0..n-1`` with path compression and union by rank."""

    def __init__(self, n: int):
        self.parent = np.arange(n)
        self.rank = np.zeros(n, dtype=np.int64)

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return int(root)

    def union(self, i: int, j: int) -> bool:
        """Merge the sets holding *i* and *j*; False if they were already one."""
        ri, rj = self.find(i), self.find(j)
        if ri == rj:
            return False
        if self.rank[ri] < self.rank[rj]:
            ri, rj = rj, ri
        self.parent[rj] = ri
        if self.rank[ri] == self.rank[rj]:
            self.rank[ri] += 1
        return True

    def labels(self) -> np.ndarray:
        """Root of every element, as a label vector."""
        return np.array([self.find(i) for i in range(len(self.parent))], dtype=np.int64)


def threshold_components(dist: Array2D, threshold: float) -> np.ndarray:
    """
    Connected components of the graph ``dist < threshold`` (plus zero-distance pairs).

    Args:
        dist: (n, n) symmetric distance matrix
        threshold: Strict upper bound on linking distance

    Returns:
        (n,) label vector; equal labels mean same component
    """
    n = dist.shape[0]
    forest = DisjointSet(n)
    if n < 2:
        return forest.labels()

    linked = (dist < threshold) | (dist == 0.0)
    rows, cols = np.nonzero(np.triu(linked, k=1))
    merges = 0
    for i, j in zip(rows.tolist(), cols.tolist()):
        if forest.union(i, j):
            merges += 1

    logger.debug(
        "Greedy threshold=%g: %d edges, %d merges, %d components",
        threshold,
        len(rows),
        merges,
        n - merges,
    )
    return forest.labels()


def greedy_cluster(
    X: Array2D,
    threshold: float,
    *,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
    dist: Array2D | None = None,
) -> np.ndarray:
    """
    Single-linkage clustering of the rows of *X* under a distance cutoff.

    Args:
        X: (n, d) feature matrix
        threshold: Pairs closer than this (in *measure* units) are linked
        measure: Distance measure
        dist: Optional precomputed pairwise distances for *X*

    Returns:
        (n,) label vector
    """
    if dist is None:
        dist = pairwise_distances(X, measure)
    return threshold_components(dist, threshold)
