"""
Rolling origin forecast resampling.

Rows are taken in their stored order, which is assumed chronological; no
row is ever permuted. The origin starts after `initial` rows and advances by
skip + 1 rows per slice while `assess` rows remain after it. Analysis is
either everything before the origin (cumulative) or the `initial` rows
immediately before it; assessment is the `assess` rows right after it.
"""

from __future__ import annotations

import logging
from typing import Any, List

import numpy as np

from resamplekit.config import RollingOriginConfig, validate_config
from resamplekit.data.partition import RowIndexPartition
from resamplekit.data.resample_set import ResampleSet
from resamplekit.data.source import as_source
from resamplekit.data.split import Split
from resamplekit.errors import ConfigurationError
from resamplekit.splitters.labels import names0

logger = logging.getLogger(__name__)


def rolling_origin_partitions(
    n_rows: int,
    initial: int,
    assess: int,
    cumulative: bool = True,
    skip: int = 0,
) -> List[RowIndexPartition]:
    """Create rolling origin partitions.

    Args:
        n_rows: Number of rows.
        initial: Analysis rows in the first slice.
        assess: Assessment rows per slice.
        cumulative: Grow the analysis window instead of sliding it.
        skip: Origins skipped between consecutive slices.

    Returns:
        List of partitions with contiguous, ordered index ranges.
    """
    if n_rows <= initial + assess:
        raise ConfigurationError(
            f"Rolling origin with initial={initial} and assess={assess} needs "
            f"more than {initial + assess} rows, got {n_rows}"
        )

    partitions = []
    for stop in range(initial, n_rows - assess + 1, skip + 1):
        start = 0 if cumulative else stop - initial
        partitions.append(RowIndexPartition(
            analysis=np.arange(start, stop),
            assessment=np.arange(stop, stop + assess),
            n_rows=n_rows,
        ))
    return partitions


def rolling_origin(
    data: Any,
    initial: int = 5,
    assess: int = 1,
    cumulative: bool = True,
    skip: int = 0,
) -> ResampleSet:
    """Rolling origin forecast resampling.

    Args:
        data: DataFrame, numpy array, or DataSource in time order.
        initial: Number of rows used for analysis in the first slice.
        assess: Number of rows used for assessment in each slice.
        cumulative: Should the analysis set grow beyond `initial` rows?
        skip: Number of origins to skip between slices, to thin the
            number of resamples.

    Returns:
        ResampleSet with ids "Slice1".. in generation order.
    """
    cfg = validate_config(
        RollingOriginConfig, initial=initial, assess=assess, cumulative=cumulative, skip=skip
    )
    source = as_source(data)
    partitions = rolling_origin_partitions(
        source.n_rows, cfg.initial, cfg.assess, cfg.cumulative, cfg.skip
    )

    logger.info(
        f"Rolling origin: {len(partitions)} slices (initial={cfg.initial}, "
        f"assess={cfg.assess}, cumulative={cfg.cumulative}, skip={cfg.skip}) "
        f"over {source.n_rows} rows"
    )
    return ResampleSet(
        [Split(source, p) for p in partitions],
        names0(len(partitions), "Slice"),
        strategy="rolling_origin",
        params={
            "initial": cfg.initial,
            "assess": cfg.assess,
            "cumulative": cfg.cumulative,
            "skip": cfg.skip,
        },
    )
