"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test modules.
"""

import numpy as np
import pytest

from feature_cluster.algorithms.points import PointFactory
from feature_cluster.config import ClusteringConfig


@pytest.fixture
def seeded_config():
    """Configuration with a fixed seed so k-means based runs are repeatable."""
    return ClusteringConfig(seed=0)


@pytest.fixture
def factory():
    """Two-dimensional point factory."""
    return PointFactory(2)


@pytest.fixture
def two_groups(factory):
    """
    Ten points in two groups of five: (1, 0..4) and (9, -4..0).

    Largest squared distance inside a group is 16, smallest between groups 64.
    Returns (all_points, group_a, group_b).
    """
    group_a = [factory.new_point(1.0, float(y)) for y in range(5)]
    group_b = [factory.new_point(9.0, float(y)) for y in range(-4, 1)]
    return group_a + group_b, set(group_a), set(group_b)


@pytest.fixture
def collinear():
    """Six one-dimensional points at 0, 2, 4, 100, 102, 104."""
    line = PointFactory(1)
    return [line.new_point(x) for x in (0.0, 2.0, 4.0, 100.0, 102.0, 104.0)]


@pytest.fixture
def blobs():
    """
    Three well-separated Gaussian blobs in 4 dimensions.

    Returns (X, true_labels) with 40 + 30 + 20 rows.
    """
    rng = np.random.default_rng(42)
    centers = np.array(
        [
            [0.0, 0.0, 0.0, 0.0],
            [20.0, 20.0, 0.0, 0.0],
            [0.0, 20.0, 20.0, -20.0],
        ]
    )
    sizes = [40, 30, 20]
    X = np.vstack(
        [centers[i] + rng.standard_normal((size, 4)) * 0.5 for i, size in enumerate(sizes)]
    )
    labels = np.repeat(np.arange(3), sizes)
    return X, labels


@pytest.fixture
def blob_points(blobs):
    """The ``blobs`` rows as FeaturePoints (ids follow row order)."""
    X, labels = blobs
    pf = PointFactory(X.shape[1])
    return pf.new_points(X), labels
