"""
Stratified resampling support.

Any base generator that works on a row count can be stratified: rows are
grouped by the distinct values of a discrete column, the generator runs
once per group, and the i-th partition of every group is merged into the
i-th partition of the full dataset.
"""

from __future__ import annotations

import logging
from typing import Callable, List

import numpy as np
import pandas as pd

from resamplekit.data.partition import RowIndexPartition, merge_partitions
from resamplekit.data.source import DataSource
from resamplekit.errors import ConfigurationError

logger = logging.getLogger(__name__)

PartitionGenerator = Callable[[int], List[RowIndexPartition]]


def strata_groups(source: DataSource, column: str, min_size: int) -> List[np.ndarray]:
    """Group row positions by the distinct values of a discrete column.

    Args:
        source: Data source holding the stratification column.
        column: Column name.
        min_size: Minimum number of rows every stratum must have.

    Returns:
        One sorted array of row positions per distinct value, ordered by value.
    """
    values = pd.Series(source.column(column))

    if pd.api.types.is_float_dtype(values):
        raise ConfigurationError(
            f"Stratification column '{column}' is continuous ({values.dtype}); "
            "only discrete values are supported"
        )
    if values.isna().any():
        raise ConfigurationError(
            f"Stratification column '{column}' has {int(values.isna().sum())} missing values"
        )

    codes, uniques = pd.factorize(values, sort=True)
    groups = [np.flatnonzero(codes == k) for k in range(len(uniques))]

    too_small = {
        uniques[k]: len(g) for k, g in enumerate(groups) if len(g) < min_size
    }
    if too_small:
        raise ConfigurationError(
            f"Stratification column '{column}' has too many distinct values: "
            f"{len(too_small)} of {len(groups)} strata have fewer than {min_size} rows "
            f"({too_small})"
        )

    logger.debug(
        f"Stratifying on '{column}': {len(groups)} strata, "
        f"sizes {[len(g) for g in groups]}"
    )
    return groups


def apply_per_stratum(
    groups: List[np.ndarray],
    generate: PartitionGenerator,
    n_rows: int,
    sort_analysis: bool = True,
) -> List[RowIndexPartition]:
    """Run a base generator inside each stratum and merge the results.

    Args:
        groups: Row positions of each stratum (from strata_groups).
        generate: Base generator mapping a row count to a list of partitions.
        n_rows: Total number of rows in the dataset.
        sort_analysis: Sort merged analysis positions (False keeps bootstrap
            draw order).

    Returns:
        Merged partitions over the full dataset, one per base partition.
    """
    per_group = [generate(len(g)) for g in groups]

    counts = {len(parts) for parts in per_group}
    if len(counts) != 1:
        raise ConfigurationError(
            f"Strata produced different numbers of resamples: {sorted(counts)}"
        )

    merged = []
    for parts in zip(*per_group):
        lifted = [p.remap(g, n_rows) for p, g in zip(parts, groups)]
        merged.append(merge_partitions(lifted, n_rows, sort_analysis=sort_analysis))
    return merged


def generate_partitions(
    source: DataSource,
    generate: PartitionGenerator,
    strata: str | None,
    min_size: int,
    sort_analysis: bool = True,
) -> List[RowIndexPartition]:
    """Run a base generator on the whole dataset or per stratum."""
    if strata is None:
        return generate(source.n_rows)
    groups = strata_groups(source, strata, min_size)
    return apply_per_stratum(groups, generate, source.n_rows, sort_analysis)
