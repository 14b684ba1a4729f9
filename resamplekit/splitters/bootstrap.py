"""
Bootstrap resampling.

Each resample draws n rows with replacement for analysis; the rows never
drawn form the out-of-bag assessment set. For small n the out-of-bag set
can be empty; it is then an empty array, never missing.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import numpy as np

from resamplekit.config import BootstrapConfig, validate_config
from resamplekit.data.partition import RowIndexPartition
from resamplekit.data.resample_set import ResampleSet
from resamplekit.data.source import as_source
from resamplekit.data.split import Split
from resamplekit.errors import ConfigurationError
from resamplekit.splitters.labels import names0
from resamplekit.splitters.strata import generate_partitions

logger = logging.getLogger(__name__)

_EMPTY = np.array([], dtype=np.int64)


def bootstrap_partitions(
    n_rows: int,
    times: int,
    rng: np.random.Generator,
    oob: bool = True,
) -> List[RowIndexPartition]:
    """Create bootstrap partitions.

    Args:
        n_rows: Number of rows.
        times: Number of bootstrap samples.
        rng: Random generator.
        oob: Compute out-of-bag assessment sets. If False, assessment is
            left empty; analysis draws are unaffected.

    Returns:
        List of partitions; analysis holds n_rows draws in draw order.
    """
    partitions = []
    for _ in range(times):
        draws = rng.choice(n_rows, size=n_rows, replace=True)
        out_of_bag = np.setdiff1d(np.arange(n_rows), draws) if oob else _EMPTY
        partitions.append(
            RowIndexPartition(analysis=draws, assessment=out_of_bag, n_rows=n_rows)
        )
    return partitions


def bootstraps(
    data: Any,
    times: int = 25,
    strata: Optional[str] = None,
    apparent: bool = False,
    oob: bool = True,
    random_seed: Optional[int] = None,
) -> ResampleSet:
    """Bootstrap resampling.

    Args:
        data: DataFrame, numpy array, or DataSource.
        times: Number of bootstrap samples.
        strata: Discrete column to stratify on; each stratum is resampled
            with replacement at its own size.
        apparent: Append an "Apparent" split using every row for both
            analysis and assessment.
        oob: Compute out-of-bag assessment sets.
        random_seed: Seed for reproducibility.

    Returns:
        ResampleSet with ids "Resample01".. (plus "Apparent").
    """
    cfg = validate_config(
        BootstrapConfig,
        times=times,
        strata=strata,
        apparent=apparent,
        oob=oob,
        random_seed=random_seed,
    )
    source = as_source(data)
    n = source.n_rows
    if n < 1:
        raise ConfigurationError("Cannot bootstrap an empty dataset")

    rng = np.random.default_rng(cfg.random_seed)
    partitions = generate_partitions(
        source,
        lambda m: bootstrap_partitions(m, cfg.times, rng, oob=cfg.oob),
        strata=cfg.strata,
        min_size=2,
        sort_analysis=False,
    )

    splits = [Split(source, p) for p in partitions]
    ids = names0(cfg.times, "Resample")
    if cfg.apparent:
        everything = np.arange(n)
        splits.append(Split(source, RowIndexPartition(everything, everything, n)))
        ids.append("Apparent")

    if cfg.oob:
        n_empty = sum(1 for p in partitions if p.n_assessment == 0)
        if n_empty:
            logger.debug(f"{n_empty} of {cfg.times} bootstrap samples have an empty out-of-bag set")

    logger.info(
        f"Bootstrap: {len(splits)} splits (times={cfg.times}, strata={cfg.strata}, "
        f"apparent={cfg.apparent}, oob={cfg.oob}) over {n} rows"
    )
    return ResampleSet(
        splits,
        ids,
        strategy="bootstraps",
        params={
            "times": cfg.times,
            "apparent": cfg.apparent,
            "oob": cfg.oob,
            "strata": cfg.strata,
        },
    )
