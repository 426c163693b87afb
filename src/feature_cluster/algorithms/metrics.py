"""
Partition quality metrics.

Label-based helpers for judging and comparing clustering results:
inertia, silhouette score and Adjusted Rand Index.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Set

import numpy as np

from .distance import DistanceMeasure, cross_distances
from .points import FeaturePoint


def partition_labels(
    clusters: Iterable[Set[FeaturePoint]], points: Sequence[FeaturePoint]
) -> np.ndarray:
    """
    Label vector aligned with *points* from a list of clusters.

    Cluster i gets label i; points missing from every cluster get -1.
    """
    position = {p.id: i for i, p in enumerate(points)}
    labels = np.full(len(points), -1, dtype=int)
    for label, cluster in enumerate(clusters):
        for p in cluster:
            labels[position[p.id]] = label
    return labels


def inertia(
    X: np.ndarray,
    labels: np.ndarray,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
) -> float:
    """Sum of distances from each row of *X* to the mean of its cluster."""
    X = np.asarray(X, dtype=np.float64)
    labels = np.asarray(labels)
    total = 0.0
    for k in np.unique(labels):
        members = X[labels == k]
        centroid = members.mean(axis=0, keepdims=True)
        total += float(cross_distances(members, centroid, measure).sum())
    return total


def _pair_count(counts: np.ndarray) -> float:
    counts = np.asarray(counts, dtype=np.float64)
    return float(np.sum(counts * (counts - 1.0)) / 2.0)


def adjusted_rand_index(labels_a: np.ndarray, labels_b: np.ndarray) -> float:
    """
    Chance-corrected share of point pairs on which two partitions agree.

    Label values only name groups, so renaming them leaves the score
    unchanged. Identical partitions score 1.0 and unrelated ones score
    close to 0. Fewer than two points score 1.0.

    Raises:
        ValueError: If the label vectors differ in shape
    """
    labels_a = np.asarray(labels_a)
    labels_b = np.asarray(labels_b)
    if labels_a.shape != labels_b.shape:
        raise ValueError(f"Label vectors differ in shape: {labels_a.shape} != {labels_b.shape}")
    n = labels_a.size
    if n < 2:
        return 1.0

    _, joint = np.unique(
        np.column_stack([labels_a.reshape(-1), labels_b.reshape(-1)]),
        axis=0,
        return_counts=True,
    )
    together = _pair_count(joint)
    same_a = _pair_count(np.unique(labels_a, return_counts=True)[1])
    same_b = _pair_count(np.unique(labels_b, return_counts=True)[1])

    expected = same_a * same_b / _pair_count([n])
    ceiling = 0.5 * (same_a + same_b)
    if ceiling == expected:
        return 1.0
    return float((together - expected) / (ceiling - expected))


def silhouette_score(labels: np.ndarray, dist: np.ndarray) -> float:
    """
    Mean silhouette over all points, from a precomputed distance matrix.

    Higher is better (range [-1, 1]). A single cluster scores 0.0, as do
    points alone in their cluster.

    Args:
        labels: Cluster assignments
        dist: Distance matrix of shape (n_samples, n_samples)

    Returns:
        Mean silhouette score
    """
    labels = np.asarray(labels)
    n = len(labels)
    unique = np.unique(labels)
    if n == 0 or len(unique) == 1:
        return 0.0

    sil = np.zeros(n, dtype=np.float64)
    for i in range(n):
        same_mask = labels == labels[i]
        same_count = same_mask.sum()
        if same_count <= 1:
            continue
        a = dist[i, same_mask].sum() / (same_count - 1)
        b = min(dist[i, labels == c].mean() for c in unique if c != labels[i])
        denom = max(a, b)
        sil[i] = (b - a) / denom if denom > 0 else 0.0
    return float(np.mean(sil))
