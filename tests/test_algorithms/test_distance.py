"""
Tests for distance measures.
"""

import numpy as np
import pytest

from feature_cluster.algorithms.distance import (
    DistanceMeasure,
    cross_distances,
    is_squared,
    nearest_neighbor_distances,
    pairwise_distances,
)


@pytest.fixture
def small():
    return np.array([[0.0, 0.0], [3.0, 4.0], [1.0, 1.0]])


def test_squared_euclidean(small):
    dist = pairwise_distances(small)
    expected = np.array([[0.0, 25.0, 2.0], [25.0, 0.0, 13.0], [2.0, 13.0, 0.0]])
    np.testing.assert_allclose(dist, expected, atol=1e-12)


def test_euclidean(small):
    dist = pairwise_distances(small, DistanceMeasure.EUCLIDEAN)
    assert dist[0, 1] == pytest.approx(5.0)
    assert dist[0, 2] == pytest.approx(np.sqrt(2.0))


def test_manhattan_and_chebyshev(small):
    manhattan = pairwise_distances(small, DistanceMeasure.MANHATTAN)
    chebyshev = pairwise_distances(small, DistanceMeasure.CHEBYSHEV)
    assert manhattan[0, 1] == pytest.approx(7.0)
    assert chebyshev[0, 1] == pytest.approx(4.0)
    assert chebyshev[1, 2] == pytest.approx(3.0)


def test_cosine():
    X = np.array([[1.0, 0.0], [0.0, 2.0], [3.0, 0.0], [-1.0, 0.0]])
    dist = pairwise_distances(X, "cosine")
    assert dist[0, 1] == pytest.approx(1.0)
    assert dist[0, 2] == pytest.approx(0.0, abs=1e-12)
    assert dist[0, 3] == pytest.approx(2.0)


def test_cosine_zero_vector():
    """A zero vector is at distance 1 from other vectors, 0 from itself."""
    X = np.array([[0.0, 0.0], [1.0, 1.0]])
    dist = cross_distances(X, X, DistanceMeasure.COSINE)
    assert dist[0, 1] == 1.0
    assert dist[1, 0] == 1.0
    assert dist[0, 0] == 0.0


def test_pairwise_is_symmetric_with_zero_diagonal():
    rng = np.random.default_rng(0)
    X = rng.standard_normal((15, 6)) * 1e3
    for measure in DistanceMeasure:
        dist = pairwise_distances(X, measure)
        np.testing.assert_array_equal(dist, dist.T)
        np.testing.assert_array_equal(np.diag(dist), np.zeros(15))
        assert np.all(dist >= 0)


def test_identical_rows_are_exactly_zero():
    X = np.array([[0.1, 0.7, 1e6], [0.1, 0.7, 1e6], [5.0, 5.0, 5.0]])
    dist = pairwise_distances(X)
    assert dist[0, 1] == 0.0
    assert dist[0, 2] > 0


def test_cross_distances_shape():
    X = np.zeros((4, 3))
    C = np.ones((2, 3))
    assert cross_distances(X, C).shape == (4, 2)
    np.testing.assert_allclose(cross_distances(X, C), 3.0)


def test_is_squared():
    assert is_squared(DistanceMeasure.SQUARED_EUCLIDEAN)
    assert is_squared("squared_euclidean")
    assert not is_squared(DistanceMeasure.EUCLIDEAN)


def test_unknown_measure():
    with pytest.raises(ValueError):
        pairwise_distances(np.zeros((2, 2)), "hamming")


def test_nearest_neighbor_distances(small):
    nn = nearest_neighbor_distances(pairwise_distances(small))
    np.testing.assert_allclose(nn, [2.0, 13.0, 2.0])
    assert np.isinf(nearest_neighbor_distances(np.zeros((1, 1)))[0])


def test_large_offsets_keep_full_precision():
    X = np.array([[1e8], [1e8 + 1.0], [1e8 + 3.0]])
    dist = pairwise_distances(X)
    assert dist[0, 1] == 1.0
    assert dist[0, 2] == 9.0
    assert pairwise_distances(X, DistanceMeasure.EUCLIDEAN)[1, 2] == 2.0


def test_large_offsets_many_dimensions():
    rng = np.random.default_rng(5)
    offsets = rng.integers(-3, 4, size=(6, 3)).astype(float)
    dist = pairwise_distances(offsets + 1e9)
    np.testing.assert_array_equal(dist, pairwise_distances(offsets))
