"""
Result assembly: turn a raw label vector into the public clustering result.

Every strategy produces one integer label per input row. Assembly groups rows
by label, drops empty groups, and orders clusters by decreasing size with ties
broken by the smallest point id in each cluster.
"""

from __future__ import annotations

from typing import Dict, Hashable, List, Sequence, Set, TypeVar

import numpy as np

from .points import FeaturePoint

T = TypeVar("T", bound=Hashable)


def group_indices(labels: np.ndarray, ids: Sequence[int]) -> List[np.ndarray]:
    """
    Group row indices by label, ordered for output.

    Args:
        labels: (n,) integer label per row; any integer values
        ids: (n,) point id per row, used to break size ties

    Returns:
        List of index arrays, largest group first; equal sizes ordered by
        their smallest id
    """
    labels = np.asarray(labels).reshape(-1)
    ids = np.asarray(ids).reshape(-1)
    if labels.shape != ids.shape:
        raise ValueError(
            f"labels and ids must align: {labels.shape} != {ids.shape}"
        )
    if labels.size == 0:
        return []

    _, inverse = np.unique(labels, return_inverse=True)
    inverse = np.asarray(inverse).reshape(-1)
    groups = [np.flatnonzero(inverse == g) for g in range(int(inverse.max()) + 1)]
    groups = [idx for idx in groups if len(idx) > 0]
    groups.sort(key=lambda idx: (-len(idx), int(ids[idx].min())))
    return groups


def assemble_points(
    labels: np.ndarray, points: Sequence[FeaturePoint]
) -> List[Set[FeaturePoint]]:
    """Map a label vector over *points* to ordered sets of the points themselves."""
    ids = [p.id for p in points]
    return [{points[i] for i in idx} for idx in group_indices(labels, ids)]


def assemble_items(
    clusters: List[Set[FeaturePoint]],
    items_by_id: Dict[int, T],
    features_by_id: Dict[int, np.ndarray],
) -> List[Dict[T, np.ndarray]]:
    """
    Replace point identities with ``item -> feature vector`` maps.

    The cluster order of *clusters* is preserved; within each map, items
    appear in id (input) order.
    """
    result: List[Dict[T, np.ndarray]] = []
    for cluster in clusters:
        members = sorted(p.id for p in cluster)
        result.append({items_by_id[i]: features_by_id[i] for i in members})
    return result


def is_partition(clusters: Sequence[Set[FeaturePoint]], points: Sequence[FeaturePoint]) -> bool:
    """True if *clusters* contain every point of *points* exactly once and no empties."""
    seen: Set[FeaturePoint] = set()
    total = 0
    for cluster in clusters:
        if not cluster:
            return False
        total += len(cluster)
        seen.update(cluster)
    return total == len(seen) and seen == set(points)
