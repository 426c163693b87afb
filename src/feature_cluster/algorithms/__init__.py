"""
Algorithm Core Library - feature-based clustering.

Points, distance measures, the four clustering strategies (greedy threshold
graph, k-means, spectral, automatic) and the clusterer facade that puts them
behind one ``cluster`` entry point.
"""

from .points import CENTROID_ID, UNBOUND, FeaturePoint, PointFactory, mean
from .distance import DistanceMeasure, cross_distances, pairwise_distances
from .greedy import DisjointSet, greedy_cluster
from .kmeans import KMeansResult, kmeans
from .spectral import spectral_cluster
from .automatic import automatic_cluster, estimate_threshold, separation_threshold
from .assembly import assemble_points, group_indices, is_partition
from .metrics import adjusted_rand_index, inertia, partition_labels, silhouette_score
from .clusterer import (
    Automatic,
    FeatureBasedClusterer,
    Greedy,
    KMeans,
    Spectral,
    create_clusterer,
    get_available_algorithms,
    new_automatic,
    new_greedy,
    new_kmeans,
    new_spectral,
)

__all__ = [
    # Points
    "CENTROID_ID",
    "UNBOUND",
    "FeaturePoint",
    "PointFactory",
    "mean",
    # Distances
    "DistanceMeasure",
    "cross_distances",
    "pairwise_distances",
    # Strategies
    "DisjointSet",
    "greedy_cluster",
    "KMeansResult",
    "kmeans",
    "spectral_cluster",
    "automatic_cluster",
    "estimate_threshold",
    "separation_threshold",
    # Result assembly
    "assemble_points",
    "group_indices",
    "is_partition",
    # Metrics
    "adjusted_rand_index",
    "inertia",
    "partition_labels",
    "silhouette_score",
    # Clusterer facade
    "Automatic",
    "FeatureBasedClusterer",
    "Greedy",
    "KMeans",
    "Spectral",
    "create_clusterer",
    "get_available_algorithms",
    "new_automatic",
    "new_greedy",
    "new_kmeans",
    "new_spectral",
]
