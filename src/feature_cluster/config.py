"""
Configuration management for Feature Cluster.

Loads tuning defaults from environment variables (typically from a .env file).
Uses python-dotenv to load .env automatically.

Usage:
    from feature_cluster.config import config

    restarts = config.kmeans_restarts

    # Or build an explicit configuration
    cfg = ClusteringConfig(kmeans_restarts=20, seed=0)
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import InvalidParameterError

# Look for .env in project root (parent of src/)
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

ENV_PREFIX = "FEATURE_CLUSTER_"

KMEANS_INIT_METHODS = ("k-means++", "random")


@dataclass(frozen=True)
class ClusteringConfig:
    """Tuning parameters shared by all clustering strategies."""

    kmeans_restarts: int = 10
    kmeans_max_iter: int = 300
    kmeans_init: str = "k-means++"
    seed: Optional[int] = None
    spectral_neighbors: int = 7
    auto_threshold_factor: float = 3.0
    auto_min_cluster_fraction: float = 0.05
    auto_separation_factor: float = 2.0
    tolerance: float = 1e-9
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate values."""
        if self.kmeans_restarts < 1:
            raise InvalidParameterError(
                f"kmeans_restarts must be >= 1, got {self.kmeans_restarts}"
            )
        if self.kmeans_max_iter < 1:
            raise InvalidParameterError(
                f"kmeans_max_iter must be >= 1, got {self.kmeans_max_iter}"
            )
        if self.kmeans_init not in KMEANS_INIT_METHODS:
            raise InvalidParameterError(
                f"kmeans_init must be one of {KMEANS_INIT_METHODS}, got {self.kmeans_init!r}"
            )
        if self.spectral_neighbors < 1:
            raise InvalidParameterError(
                f"spectral_neighbors must be >= 1, got {self.spectral_neighbors}"
            )
        if not self.auto_threshold_factor > 0:
            raise InvalidParameterError(
                f"auto_threshold_factor must be > 0, got {self.auto_threshold_factor}"
            )
        if not 0 <= self.auto_min_cluster_fraction < 1:
            raise InvalidParameterError(
                "auto_min_cluster_fraction must be in [0, 1), "
                f"got {self.auto_min_cluster_fraction}"
            )
        if not self.auto_separation_factor >= 1:
            raise InvalidParameterError(
                f"auto_separation_factor must be >= 1, got {self.auto_separation_factor}"
            )
        if not self.tolerance >= 0:
            raise InvalidParameterError(f"tolerance must be >= 0, got {self.tolerance}")

    @classmethod
    def from_env(cls) -> "ClusteringConfig":
        """
        Build a configuration from ``FEATURE_CLUSTER_*`` environment variables.

        Unset variables keep the dataclass defaults.

        Raises:
            InvalidParameterError: If a variable cannot be parsed or is out of range
        """
        defaults = cls()
        seed = _env("SEED", None, int)
        return cls(
            kmeans_restarts=_env("KMEANS_RESTARTS", defaults.kmeans_restarts, int),
            kmeans_max_iter=_env("KMEANS_MAX_ITER", defaults.kmeans_max_iter, int),
            kmeans_init=_env("KMEANS_INIT", defaults.kmeans_init, str),
            seed=seed,
            spectral_neighbors=_env(
                "SPECTRAL_NEIGHBORS", defaults.spectral_neighbors, int
            ),
            auto_threshold_factor=_env(
                "AUTO_THRESHOLD_FACTOR", defaults.auto_threshold_factor, float
            ),
            auto_min_cluster_fraction=_env(
                "AUTO_MIN_CLUSTER_FRACTION", defaults.auto_min_cluster_fraction, float
            ),
            auto_separation_factor=_env(
                "AUTO_SEPARATION_FACTOR", defaults.auto_separation_factor, float
            ),
            tolerance=_env("TOLERANCE", defaults.tolerance, float),
            log_level=_env("LOG_LEVEL", defaults.log_level, str).upper(),
        )

    def with_overrides(self, **changes) -> "ClusteringConfig":
        """Return a copy with the given fields replaced (None values are ignored)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _env(name: str, default, cast):
    """Read ``FEATURE_CLUSTER_<name>`` and convert it with *cast*."""
    raw = os.getenv(ENV_PREFIX + name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise InvalidParameterError(
            f"Cannot parse {ENV_PREFIX + name}={raw!r} as {cast.__name__}"
        ) from e


# Global config instance
config = ClusteringConfig.from_env()
