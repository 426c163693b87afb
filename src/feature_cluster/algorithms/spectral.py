"""
Spectral clustering.

Builds a locally scaled Gaussian affinity graph, embeds the points with the
leading eigenvectors of the symmetric normalised Laplacian, and runs k-means
on the row-normalised embedding.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .distance import DistanceMeasure, is_squared, pairwise_distances
from .kmeans import kmeans
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

Array2D = np.ndarray


def affinity_matrix(dist_sq: Array2D, n_neighbors: int = 7) -> Array2D:
    """
    Gaussian affinities with per-point bandwidths.

    ``A_ij = exp(-d²_ij / (σ_i σ_j))`` where ``σ_i`` is the distance from
    point i to its ``n_neighbors``-th nearest neighbour. Zero bandwidths
    (points with many exact duplicates) fall back to the smallest positive
    bandwidth.

    Args:
        dist_sq: (n, n) squared distances
        n_neighbors: Neighbour rank that sets the local scale

    Returns:
        (n, n) symmetric affinity matrix with a zero diagonal
    """
    n = dist_sq.shape[0]
    if n < 2:
        return np.zeros((n, n))

    m = int(min(max(n_neighbors, 1), n - 1))
    # Column 0 of each sorted row is the point itself
    sigma = np.sqrt(np.sort(dist_sq, axis=1)[:, m])
    positive = sigma[sigma > 0]
    if positive.size == 0:
        return np.zeros((n, n))
    sigma = np.where(sigma > 0, sigma, positive.min())

    A = np.exp(-dist_sq / np.outer(sigma, sigma))
    np.fill_diagonal(A, 0.0)
    return 0.5 * (A + A.T)


def spectral_embedding(A: Array2D, k: int) -> np.ndarray:
    """
    Row-normalised spectral coordinates of each point.

    Uses the k eigenvectors of ``L = I - D^-1/2 A D^-1/2`` with the smallest
    eigenvalues. Isolated points (zero degree) get zero rows.

    Raises:
        numpy.linalg.LinAlgError: If the eigen-decomposition does not converge
    """
    n = A.shape[0]
    degree = A.sum(axis=1)
    inv_sqrt = np.zeros(n)
    nz = degree > 0
    inv_sqrt[nz] = 1.0 / np.sqrt(degree[nz])

    L = np.eye(n) - inv_sqrt[:, None] * A * inv_sqrt[None, :]
    L = 0.5 * (L + L.T)
    _, vecs = np.linalg.eigh(L)  # ascending eigenvalues
    U = vecs[:, :k]

    norms = np.linalg.norm(U, axis=1, keepdims=True)
    return np.where(norms > 1e-12, U / np.maximum(norms, 1e-12), 0.0)


def spectral_cluster(
    X: Array2D,
    k: int,
    *,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
    n_neighbors: int = 7,
    n_init: int = 10,
    max_iter: int = 300,
    init: str = "k-means++",
    seed: Optional[int] = None,
    tolerance: float = 1e-9,
    dist: Optional[Array2D] = None,
) -> np.ndarray:
    """
    Partition the rows of *X* into *k* clusters via spectral embedding.

    Degenerate cases never raise:
    - ``n < k``: every point is its own cluster (no affinity/eigen work)
    - ``k == 1``, all points identical, eigen failure, or an embedding with
      no variance: a single cluster

    Args:
        X: (n, d) feature matrix
        k: Number of clusters (>= 1)
        measure: Distance measure for the kernel; non-squared distances are
            squared before use
        n_neighbors: Neighbour rank for the local kernel bandwidth
        n_init: k-means restarts on the embedding
        max_iter: k-means iteration cap
        init: k-means seeding strategy
        seed: Random seed for k-means
        tolerance: Spread below which points count as identical
        dist: Optional precomputed pairwise distances (in *measure* units)

    Returns:
        (n,) label vector

    Raises:
        ValueError: If k < 1
    """
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")

    X = np.asarray(X, dtype=np.float64)
    n = X.shape[0]
    if n < k:
        logger.debug("Spectral: n=%d < k=%d, returning singletons", n, k)
        return np.arange(n)
    single = np.zeros(n, dtype=int)
    if k == 1:
        return single

    if dist is None:
        dist = pairwise_distances(X, measure)
    dist_sq = dist if is_squared(measure) else dist ** 2
    if dist_sq.max() <= tolerance:
        logger.debug("Spectral: all points coincide, returning one cluster")
        return single

    A = affinity_matrix(dist_sq, n_neighbors)
    try:
        U = spectral_embedding(A, k)
    except np.linalg.LinAlgError as e:
        logger.debug("Spectral: eigen-decomposition failed (%s), returning one cluster", e)
        return single

    if not np.all(np.isfinite(U)) or np.ptp(U, axis=0).max() <= tolerance:
        logger.debug("Spectral: embedding has no variance, returning one cluster")
        return single

    result = kmeans(U, k, init=init, n_init=n_init, max_iter=max_iter, seed=seed)
    return result.labels
