"""
Tests for spectral clustering.
"""

import numpy as np
import pytest

from feature_cluster.algorithms.distance import DistanceMeasure, pairwise_distances
from feature_cluster.algorithms.metrics import adjusted_rand_index
from feature_cluster.algorithms.spectral import (
    affinity_matrix,
    spectral_cluster,
    spectral_embedding,
)


def test_affinity_matrix_properties(blobs):
    X, _ = blobs
    A = affinity_matrix(pairwise_distances(X), n_neighbors=7)

    assert A.shape == (90, 90)
    np.testing.assert_allclose(A, A.T)
    np.testing.assert_array_equal(np.diag(A), np.zeros(90))
    assert np.all((A >= 0) & (A <= 1))
    # Points in the same blob are far more similar than points in different blobs
    assert A[0, 1] > 1e3 * A[0, 80]


def test_affinity_matrix_all_duplicates_is_zero():
    A = affinity_matrix(np.zeros((4, 4)))
    np.testing.assert_array_equal(A, np.zeros((4, 4)))


def test_spectral_embedding_rows_are_unit_or_zero(blobs):
    X, _ = blobs
    A = affinity_matrix(pairwise_distances(X))
    U = spectral_embedding(A, 3)
    norms = np.linalg.norm(U, axis=1)
    assert U.shape == (90, 3)
    np.testing.assert_allclose(norms, 1.0, atol=1e-9)


def test_spectral_recovers_blobs(blobs):
    X, truth = blobs
    labels = spectral_cluster(X, 3, seed=0)
    assert adjusted_rand_index(labels, truth) == pytest.approx(1.0)


def test_spectral_two_groups():
    X = np.array([[1.0, y] for y in range(5)] + [[9.0, y] for y in range(-4, 1)])
    labels = spectral_cluster(X, 2, seed=0)
    assert len(set(labels[:5])) == 1
    assert len(set(labels[5:])) == 1
    assert labels[0] != labels[5]


def test_spectral_non_convex_rings():
    """Two concentric rings: spectral separates what k-means cannot."""
    theta = np.linspace(0, 2 * np.pi, 60, endpoint=False)
    inner = np.c_[np.cos(theta), np.sin(theta)]
    outer = 6.0 * np.c_[np.cos(theta), np.sin(theta)]
    X = np.vstack([inner, outer])
    truth = np.repeat([0, 1], 60)

    labels = spectral_cluster(X, 2, n_neighbors=3, seed=0)

    assert adjusted_rand_index(labels, truth) == pytest.approx(1.0)


def test_spectral_fewer_points_than_k_gives_singletons():
    X = np.array([[0.0, 0.0], [1.0, 1.0], [5.0, 5.0]])
    labels = spectral_cluster(X, 5)
    assert sorted(labels.tolist()) == [0, 1, 2]


def test_spectral_k_one():
    X = np.array([[0.0], [1.0], [50.0]])
    assert spectral_cluster(X, 1).tolist() == [0, 0, 0]


def test_spectral_identical_points_coalesce():
    X = np.tile([3.0, -1.0, 2.0], (8, 1))
    labels = spectral_cluster(X, 3, seed=0)
    assert set(labels.tolist()) == {0}


def test_spectral_eigen_failure_coalesces(monkeypatch):
    def broken(_):
        raise np.linalg.LinAlgError("Eigenvalues did not converge")

    monkeypatch.setattr(np.linalg, "eigh", broken)
    X = np.array([[0.0], [1.0], [10.0], [11.0]])
    assert set(spectral_cluster(X, 2, seed=0).tolist()) == {0}


def test_spectral_euclidean_measure(blobs):
    X, truth = blobs
    labels = spectral_cluster(X, 3, measure=DistanceMeasure.EUCLIDEAN, seed=0)
    assert adjusted_rand_index(labels, truth) == pytest.approx(1.0)


def test_spectral_validation():
    with pytest.raises(ValueError, match="k must be >= 1"):
        spectral_cluster(np.zeros((3, 2)), 0)
