"""
Feature table loading.

Reads CSV files of numeric feature columns into ``(item, vector)`` pairs
suitable for ``FeatureBasedClusterer.cluster_items``.
"""

from pathlib import Path
from typing import Hashable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .exceptions import EmptyInputError, InvalidParameterError
from .utils.logging_config import get_logger

logger = get_logger(__name__)

FeatureRow = Tuple[Hashable, np.ndarray]


def load_feature_table(
    path: Union[str, Path],
    id_column: Optional[str] = None,
    feature_columns: Optional[List[str]] = None,
) -> List[FeatureRow]:
    """
    Load a CSV file as ``(item, feature_vector)`` pairs.

    Args:
        path: CSV file with a header row; lines starting with '#' are skipped
        id_column: Column naming each item (defaults to the row index)
        feature_columns: Columns to use as features (defaults to every
            column except *id_column*)

    Returns:
        One pair per row, in file order

    Raises:
        FileNotFoundError: If *path* does not exist
        InvalidParameterError: If a named column is missing or a feature
            column is not numeric
        EmptyInputError: If the table has no feature columns
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Feature table not found: {path}")

    df = pd.read_csv(path, comment="#")

    if id_column is not None and id_column not in df.columns:
        raise InvalidParameterError(
            f"id column {id_column!r} not in {path.name}; columns: {list(df.columns)}"
        )

    if feature_columns is None:
        feature_columns = [c for c in df.columns if c != id_column]
    missing = [c for c in feature_columns if c not in df.columns]
    if missing:
        raise InvalidParameterError(f"Feature columns not found in {path.name}: {missing}")
    if not feature_columns:
        raise EmptyInputError(f"No feature columns in {path.name}")

    non_numeric = [
        c for c in feature_columns if not pd.api.types.is_numeric_dtype(df[c])
    ]
    if non_numeric:
        raise InvalidParameterError(
            f"Non-numeric feature columns in {path.name}: {non_numeric}"
        )

    features = df[feature_columns].to_numpy(dtype=np.float64)
    items = df[id_column].tolist() if id_column is not None else df.index.tolist()
    logger.info(
        "Loaded %d row(s) x %d feature(s) from %s", len(items), len(feature_columns), path
    )
    return list(zip(items, features))
