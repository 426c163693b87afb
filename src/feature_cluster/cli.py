"""
Command-line front end: cluster the rows of a CSV feature table.

Usage:
    feature-cluster data.csv --algorithm greedy --threshold 18 --id-column name
    feature-cluster data.csv --algorithm kmeans -k 3 --json
"""

import argparse
import json
import sys
from typing import List, Optional

import numpy as np

from .algorithms import DistanceMeasure, create_clusterer, get_available_algorithms
from .algorithms.distance import pairwise_distances
from .algorithms.metrics import silhouette_score
from .config import config
from .exceptions import ClusteringError
from .io import load_feature_table
from .utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feature-cluster",
        description="Cluster the rows of a CSV feature table.",
    )
    parser.add_argument("path", help="CSV file with one item per row")
    parser.add_argument(
        "--algorithm",
        choices=get_available_algorithms(),
        default="automatic",
        help="Clustering algorithm (default: automatic)",
    )
    parser.add_argument("--threshold", type=float, help="Linking threshold for greedy")
    parser.add_argument("-k", type=int, help="Number of clusters for kmeans/spectral")
    parser.add_argument(
        "--measure",
        choices=[m.value for m in DistanceMeasure],
        default=DistanceMeasure.SQUARED_EUCLIDEAN.value,
        help="Distance measure (default: squared_euclidean)",
    )
    parser.add_argument("--id-column", help="Column that names each row")
    parser.add_argument("--seed", type=int, help="Random seed for k-means based algorithms")
    parser.add_argument("--json", action="store_true", help="Print clusters as JSON")
    parser.add_argument("--log-level", default=None, help="Logging level (default: from config)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or config.log_level)

    try:
        rows = load_feature_table(args.path, id_column=args.id_column)
        clusterer = create_clusterer(
            args.algorithm,
            threshold=args.threshold,
            k=args.k,
            measure=DistanceMeasure(args.measure),
            config=config.with_overrides(seed=args.seed),
        )
        # Cluster row positions so duplicate names stay distinct
        clusters = clusterer.cluster_items(range(len(rows)), lambda i: rows[i][1])
    except (ClusteringError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 2

    labels = np.empty(len(rows), dtype=int)
    for label, cluster in enumerate(clusters):
        labels[list(cluster)] = label
    score = (
        silhouette_score(labels, pairwise_distances(np.array([v for _, v in rows]), args.measure))
        if rows
        else 0.0
    )

    named = [[rows[i][0] for i in cluster] for cluster in clusters]
    if args.json:
        payload = {
            "algorithm": args.algorithm,
            "measure": args.measure,
            "silhouette": score,
            "clusters": named,
        }
        print(json.dumps(payload, default=str))
    else:
        print(f"{len(named)} cluster(s) from {len(rows)} row(s), silhouette {score:.4f}")
        for i, members in enumerate(named):
            print(f"[{i}] size={len(members)}: {', '.join(str(m) for m in members)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
