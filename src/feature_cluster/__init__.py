"""
Feature Cluster - Core Package

Partitions collections of items into clusters from numeric feature vectors.

This package provides:
- Feature points and point factories
- Greedy (threshold graph), k-means, spectral and automatic clustering
- A clusterer facade for FeaturePoints or arbitrary items via an extractor
- CSV feature-table loading and a command-line front end
"""

__version__ = "0.1.0"

from .algorithms import (
    FeatureBasedClusterer,
    FeaturePoint,
    PointFactory,
    mean,
    new_automatic,
    new_greedy,
    new_kmeans,
    new_spectral,
)
from .exceptions import (
    ClusteringError,
    DimensionMismatchError,
    EmptyInputError,
    InconsistentDimensionsError,
    InvalidParameterError,
)

# Explicitly import subpackages to ensure they're discoverable
from . import algorithms
from . import utils

__all__ = [
    "FeatureBasedClusterer",
    "FeaturePoint",
    "PointFactory",
    "mean",
    "new_automatic",
    "new_greedy",
    "new_kmeans",
    "new_spectral",
    "ClusteringError",
    "DimensionMismatchError",
    "EmptyInputError",
    "InconsistentDimensionsError",
    "InvalidParameterError",
    "algorithms",
    "utils",
]
