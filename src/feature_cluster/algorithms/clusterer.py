"""
Feature-based clusterer: one entry point over several clustering strategies.

Usage:
    from feature_cluster.algorithms import new_greedy, new_kmeans, PointFactory

    factory = PointFactory(2)
    points = [factory.new_point(x, y) for x, y in coords]
    clusters = new_kmeans(2).cluster(points)

    # Arbitrary items, via a feature extractor
    groups = new_automatic().cluster_items(songs, lambda s: s.features)

Results are lists of clusters, largest first, equal sizes ordered by the
smallest point id (i.e. input order for the item-based entry point).
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Set, TypeVar, Union

import numpy as np

from ..config import ClusteringConfig, config as default_config
from ..exceptions import InconsistentDimensionsError, InvalidParameterError
from ..utils.logging_config import get_logger
from .assembly import assemble_items, assemble_points
from .automatic import automatic_cluster
from .distance import DistanceMeasure, pairwise_distances
from .greedy import greedy_cluster
from .kmeans import kmeans
from .points import FeaturePoint, PointFactory, stack_features
from .spectral import spectral_cluster

logger = get_logger(__name__)

T = TypeVar("T", bound=Hashable)


# ------------------------------------------------------------------
# Strategies
# ------------------------------------------------------------------

@dataclass(frozen=True)
class Greedy:
    """Threshold-graph clustering: link pairs closer than ``threshold``."""

    threshold: float

    def __post_init__(self):
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, numbers.Real):
            raise InvalidParameterError(f"threshold must be a number, got {self.threshold!r}")
        if math.isnan(self.threshold) or self.threshold < 0:
            raise InvalidParameterError(f"threshold must be >= 0, got {self.threshold}")


@dataclass(frozen=True)
class KMeans:
    """Lloyd's k-means with ``k`` clusters."""

    k: int

    def __post_init__(self):
        _check_k(self.k)


@dataclass(frozen=True)
class Spectral:
    """Spectral clustering into ``k`` clusters."""

    k: int

    def __post_init__(self):
        _check_k(self.k)


@dataclass(frozen=True)
class Automatic:
    """Parameter-free clustering; threshold and k are derived from the data."""


Strategy = Union[Greedy, KMeans, Spectral, Automatic]


def _check_k(k) -> None:
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise InvalidParameterError(f"k must be an integer, got {k!r}")
    if k < 1:
        raise InvalidParameterError(f"k must be >= 1, got {k}")


# ------------------------------------------------------------------
# Clusterer
# ------------------------------------------------------------------

@dataclass(frozen=True)
class FeatureBasedClusterer:
    """
    Clusters FeaturePoints, or arbitrary items through a feature extractor.

    Instances are immutable and keep no state between calls, so one
    clusterer can serve concurrent callers.
    """

    strategy: Strategy
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN
    config: ClusteringConfig = field(default_factory=lambda: default_config)

    def __post_init__(self):
        if not isinstance(self.strategy, (Greedy, KMeans, Spectral, Automatic)):
            raise InvalidParameterError(f"Unknown clustering strategy: {self.strategy!r}")
        try:
            object.__setattr__(self, "measure", DistanceMeasure(self.measure))
        except ValueError as e:
            valid = ", ".join(m.value for m in DistanceMeasure)
            raise InvalidParameterError(
                f"Unknown distance measure: {self.measure!r}. Available measures: {valid}"
            ) from e

    @property
    def name(self) -> str:
        return type(self.strategy).__name__.lower()

    def labels(self, X: np.ndarray) -> np.ndarray:
        """
        Raw label vector for the rows of *X* under this clusterer's strategy.

        Args:
            X: (n, d) feature matrix

        Returns:
            (n,) integer labels; rows sharing a label form one cluster
        """
        X = np.asarray(X, dtype=np.float64)
        n = X.shape[0]
        if n == 0:
            return np.zeros(0, dtype=int)

        cfg = self.config
        strategy = self.strategy

        if isinstance(strategy, KMeans):
            return kmeans(
                X,
                strategy.k,
                init=cfg.kmeans_init,
                n_init=cfg.kmeans_restarts,
                max_iter=cfg.kmeans_max_iter,
                seed=cfg.seed,
                measure=self.measure,
            ).labels

        dist = pairwise_distances(X, self.measure)
        if isinstance(strategy, Greedy):
            return greedy_cluster(X, strategy.threshold, measure=self.measure, dist=dist)
        if isinstance(strategy, Spectral):
            return spectral_cluster(
                X,
                strategy.k,
                measure=self.measure,
                n_neighbors=cfg.spectral_neighbors,
                n_init=cfg.kmeans_restarts,
                max_iter=cfg.kmeans_max_iter,
                init=cfg.kmeans_init,
                seed=cfg.seed,
                tolerance=cfg.tolerance,
                dist=dist,
            )
        return automatic_cluster(
            X,
            measure=self.measure,
            threshold_factor=cfg.auto_threshold_factor,
            min_cluster_fraction=cfg.auto_min_cluster_fraction,
            separation_factor=cfg.auto_separation_factor,
            max_iter=cfg.kmeans_max_iter,
            tolerance=cfg.tolerance,
            dist=dist,
        )

    def cluster(self, points: Iterable[FeaturePoint]) -> List[Set[FeaturePoint]]:
        """
        Partition *points* into clusters.

        Points are identified by id; a point listed twice is clustered once.

        Args:
            points: FeaturePoints sharing one dimension

        Returns:
            List of sets of the supplied points, largest first

        Raises:
            InconsistentDimensionsError: If the points differ in dimension
        """
        unique: Dict[int, FeaturePoint] = {}
        for p in points:
            unique.setdefault(p.id, p)
        ordered = list(unique.values())
        if not ordered:
            return []

        X = stack_features(ordered)
        labels = self.labels(X)
        clusters = assemble_points(labels, ordered)
        logger.debug(
            "%s clustering of %d point(s): sizes %s",
            self.name,
            len(ordered),
            [len(c) for c in clusters],
        )
        return clusters

    def cluster_items(
        self, items: Iterable[T], extractor: Callable[[T], object]
    ) -> List[Dict[T, np.ndarray]]:
        """
        Cluster arbitrary items by their extracted feature vectors.

        Args:
            items: Hashable items; equal items collapse into one entry
            extractor: Pure function returning a numeric feature vector per item

        Returns:
            One ``{item: features}`` dict per cluster, largest first

        Raises:
            InconsistentDimensionsError: If the extractor returns vectors of
                differing length (or not 1-D)
        """
        items = list(items)
        vectors = [np.asarray(extractor(item), dtype=np.float64) for item in items]
        shapes = {v.shape for v in vectors}
        if any(len(s) != 1 for s in shapes) or len(shapes) > 1:
            raise InconsistentDimensionsError(
                f"Extractor returned feature vectors of differing shapes: {sorted(shapes)}"
            )

        factory = PointFactory()
        points = [factory.new_point(v) for v in vectors]
        items_by_id = {p.id: item for p, item in zip(points, items)}
        features_by_id = {p.id: v for p, v in zip(points, vectors)}

        clusters = self.cluster(points)
        return assemble_items(clusters, items_by_id, features_by_id)


# ------------------------------------------------------------------
# Factory functions
# ------------------------------------------------------------------

def new_automatic(
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
    config: Optional[ClusteringConfig] = None,
) -> FeatureBasedClusterer:
    """Automatic clusterer: threshold and k derived from distance statistics."""
    return FeatureBasedClusterer(Automatic(), measure, config or default_config)


def new_greedy(
    threshold: float,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
    config: Optional[ClusteringConfig] = None,
) -> FeatureBasedClusterer:
    """
    Threshold-graph clusterer.

    Args:
        threshold: Pairs closer than this (in *measure* units) share a cluster
        measure: Distance measure (squared Euclidean by default)
        config: Optional configuration (defaults to the global config)

    Raises:
        InvalidParameterError: If threshold is negative or NaN
    """
    return FeatureBasedClusterer(Greedy(threshold), measure, config or default_config)


def new_kmeans(
    k: int,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
    config: Optional[ClusteringConfig] = None,
) -> FeatureBasedClusterer:
    """
    K-means clusterer with *k* clusters (reduced to n for smaller inputs).

    Raises:
        InvalidParameterError: If k < 1
    """
    return FeatureBasedClusterer(KMeans(k), measure, config or default_config)


def new_spectral(
    k: int,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
    config: Optional[ClusteringConfig] = None,
) -> FeatureBasedClusterer:
    """
    Spectral clusterer (Gaussian kernel, normalised Laplacian) with *k* clusters.

    Raises:
        InvalidParameterError: If k < 1
    """
    return FeatureBasedClusterer(Spectral(k), measure, config or default_config)


ALGORITHMS = {
    "automatic": lambda **kw: new_automatic(kw["measure"], kw.get("config")),
    "greedy": lambda **kw: new_greedy(kw["threshold"], kw["measure"], kw.get("config")),
    "kmeans": lambda **kw: new_kmeans(kw["k"], kw["measure"], kw.get("config")),
    "spectral": lambda **kw: new_spectral(kw["k"], kw["measure"], kw.get("config")),
}


def create_clusterer(
    algorithm: str,
    *,
    threshold: Optional[float] = None,
    k: Optional[int] = None,
    measure: DistanceMeasure = DistanceMeasure.SQUARED_EUCLIDEAN,
    config: Optional[ClusteringConfig] = None,
) -> FeatureBasedClusterer:
    """
    Create a clusterer by algorithm name.

    Args:
        algorithm: One of ``get_available_algorithms()`` (case-insensitive)
        threshold: Required for "greedy"
        k: Required for "kmeans" and "spectral"
        measure: Distance measure
        config: Optional configuration

    Raises:
        InvalidParameterError: If the name is unknown or a required parameter is missing
    """
    algorithm = algorithm.lower()
    if algorithm not in ALGORITHMS:
        raise InvalidParameterError(
            f"Unknown algorithm: {algorithm}. "
            f"Available algorithms: {', '.join(get_available_algorithms())}"
        )
    if algorithm == "greedy" and threshold is None:
        raise InvalidParameterError("The greedy algorithm requires a threshold")
    if algorithm in ("kmeans", "spectral") and k is None:
        raise InvalidParameterError(f"The {algorithm} algorithm requires k")
    return ALGORITHMS[algorithm](threshold=threshold, k=k, measure=measure, config=config)


def get_available_algorithms() -> list[str]:
    """Names accepted by ``create_clusterer``."""
    return list(ALGORITHMS)
