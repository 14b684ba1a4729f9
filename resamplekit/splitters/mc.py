"""
Monte-Carlo cross-validation and simple train/test splitting.

Each resample keeps round(prop * n) rows, sampled without replacement, for
analysis and the rest for assessment. initial_split is the single-resample
case and returns the split itself.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import numpy as np

from resamplekit.config import MonteCarloConfig, validate_config
from resamplekit.data.partition import RowIndexPartition
from resamplekit.data.resample_set import ResampleSet
from resamplekit.data.source import as_source
from resamplekit.data.split import Split
from resamplekit.errors import ConfigurationError
from resamplekit.splitters.labels import names0
from resamplekit.splitters.strata import generate_partitions

logger = logging.getLogger(__name__)


def analysis_size(n_rows: int, prop: float) -> int:
    """Number of analysis rows: prop * n_rows rounded half up."""
    return int(np.floor(prop * n_rows + 0.5))


def mc_partitions(
    n_rows: int,
    prop: float,
    times: int,
    rng: np.random.Generator,
) -> List[RowIndexPartition]:
    """Create Monte-Carlo partitions.

    Args:
        n_rows: Number of rows.
        prop: Fraction of rows used for analysis.
        times: Number of resamples.
        rng: Random generator.

    Returns:
        List of partitions with sorted, disjoint index sets.
    """
    n_analysis = analysis_size(n_rows, prop)
    partitions = []
    for _ in range(times):
        perm = rng.permutation(n_rows)
        partitions.append(RowIndexPartition(
            analysis=np.sort(perm[:n_analysis]),
            assessment=np.sort(perm[n_analysis:]),
            n_rows=n_rows,
        ))
    return partitions


def mc_cv(
    data: Any,
    prop: float = 0.75,
    times: int = 25,
    strata: Optional[str] = None,
    random_seed: Optional[int] = None,
) -> ResampleSet:
    """Monte-Carlo cross-validation.

    Args:
        data: DataFrame, numpy array, or DataSource.
        prop: Fraction of rows for analysis, in (0, 1).
        times: Number of resamples.
        strata: Discrete column to stratify on; prop is applied within
            each stratum.
        random_seed: Seed for reproducibility.

    Returns:
        ResampleSet with ids "Resample01"..
    """
    cfg = validate_config(
        MonteCarloConfig, prop=prop, times=times, strata=strata, random_seed=random_seed
    )
    source = as_source(data)
    n = source.n_rows

    rng = np.random.default_rng(cfg.random_seed)
    partitions = generate_partitions(
        source,
        lambda m: mc_partitions(m, cfg.prop, cfg.times, rng),
        strata=cfg.strata,
        min_size=2,
    )

    first = partitions[0]
    if first.n_analysis == 0 or first.n_assessment == 0:
        raise ConfigurationError(
            f"prop={cfg.prop} leaves {first.n_analysis} analysis and "
            f"{first.n_assessment} assessment rows out of {n}"
        )

    logger.info(
        f"Monte-Carlo CV: {cfg.times} splits (prop={cfg.prop}, strata={cfg.strata}) "
        f"over {n} rows"
    )
    return ResampleSet(
        [Split(source, p) for p in partitions],
        names0(cfg.times, "Resample"),
        strategy="mc_cv",
        params={"prop": cfg.prop, "times": cfg.times, "strata": cfg.strata},
    )


def initial_split(
    data: Any,
    prop: float = 0.75,
    strata: Optional[str] = None,
    random_seed: Optional[int] = None,
) -> Split:
    """Single random train/test split.

    Use training() and testing() to get the two tables.

    Args:
        data: DataFrame, numpy array, or DataSource.
        prop: Fraction of rows for training, in (0, 1).
        strata: Discrete column to stratify on.
        random_seed: Seed for reproducibility.

    Returns:
        The Split.
    """
    return mc_cv(data, prop=prop, times=1, strata=strata, random_seed=random_seed)[0]
