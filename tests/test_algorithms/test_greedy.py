"""
Tests for threshold-graph (greedy) clustering and the disjoint-set forest.
"""

import numpy as np

from feature_cluster.algorithms.distance import DistanceMeasure, pairwise_distances
from feature_cluster.algorithms.greedy import DisjointSet, greedy_cluster, threshold_components


def _n_clusters(labels):
    return len(np.unique(labels))


def test_disjoint_set_union_and_find():
    forest = DisjointSet(6)
    assert forest.union(0, 1)
    assert forest.union(1, 2)
    assert not forest.union(0, 2)
    assert forest.union(4, 5)

    assert forest.find(0) == forest.find(2)
    assert forest.find(3) != forest.find(0)
    assert forest.find(4) == forest.find(5)
    assert _n_clusters(forest.labels()) == 3


def test_disjoint_set_long_chain():
    forest = DisjointSet(1000)
    for i in range(999):
        forest.union(i, i + 1)
    assert _n_clusters(forest.labels()) == 1


def test_two_groups_recovered():
    X = np.array([[1.0, y] for y in range(5)] + [[9.0, y] for y in range(-4, 1)])
    labels = greedy_cluster(X, 18.0)
    assert _n_clusters(labels) == 2
    assert len(set(labels[:5])) == 1
    assert len(set(labels[5:])) == 1
    assert labels[0] != labels[5]


def test_threshold_zero_gives_singletons():
    X = np.array([[0.0], [2.0], [4.0], [100.0], [102.0], [104.0]])
    assert _n_clusters(greedy_cluster(X, 0.0)) == 6


def test_threshold_zero_merges_exact_duplicates():
    X = np.array([[0.3], [0.3], [4.0]])
    labels = greedy_cluster(X, 0.0)
    assert labels[0] == labels[1]
    assert labels[0] != labels[2]


def test_huge_threshold_gives_one_cluster():
    X = np.array([[0.0], [2.0], [4.0], [100.0], [102.0], [104.0]])
    assert _n_clusters(greedy_cluster(X, 1e9)) == 1
    assert _n_clusters(greedy_cluster(X, float("inf"))) == 1


def test_strict_inequality():
    """A pair exactly at the threshold is not linked."""
    X = np.array([[0.0], [2.0]])
    assert _n_clusters(greedy_cluster(X, 4.0)) == 2
    assert _n_clusters(greedy_cluster(X, 4.0 + 1e-9)) == 1


def test_chaining():
    """Single linkage: a chain of close points joins far-apart endpoints."""
    X = np.arange(10, dtype=float).reshape(-1, 1)
    labels = greedy_cluster(X, 1.5)
    assert _n_clusters(labels) == 1


def test_cluster_count_monotone_in_threshold():
    rng = np.random.default_rng(7)
    X = rng.uniform(0, 10, size=(40, 2))
    dist = pairwise_distances(X)
    counts = [
        _n_clusters(threshold_components(dist, t))
        for t in [0.0, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 50.0, 1e6]
    ]
    assert counts == sorted(counts, reverse=True)
    assert counts[0] == 40
    assert counts[-1] == 1


def test_other_measure_units():
    X = np.array([[0.0], [2.0], [4.0]])
    # Euclidean distance 2 < 2.5 links neighbours; squared (4) would not
    assert _n_clusters(greedy_cluster(X, 2.5, measure=DistanceMeasure.EUCLIDEAN)) == 1
    assert _n_clusters(greedy_cluster(X, 2.5)) == 3


def test_empty_and_single():
    assert greedy_cluster(np.zeros((0, 2)), 1.0).shape == (0,)
    assert greedy_cluster(np.zeros((1, 2)), 1.0).tolist() == [0]


def test_threshold_zero_with_large_coordinates():
    """Distinct points far from the origin stay apart at threshold 0."""
    X = np.array([[1e8], [1e8 + 1.0], [1e8 + 1.0], [1e8 + 5.0]])
    labels = greedy_cluster(X, 0.0)
    assert _n_clusters(labels) == 3
    assert labels[1] == labels[2]
    assert labels[0] != labels[1]


def test_strict_inequality_with_large_coordinates():
    X = np.array([[1e8, -1e8], [1e8 + 1.0, -1e8]])
    assert _n_clusters(greedy_cluster(X, 1.0)) == 2
    assert _n_clusters(greedy_cluster(X, 1.5)) == 1
