"""
V-fold cross-validation splitters.

Implements:
- V-fold splits, optionally repeated and stratified
- Leave-one-out splits (V equal to the number of rows)

Each repeat permutes the rows and cuts the permutation into V contiguous
blocks; the first n % V blocks get one extra row. A fold's assessment set
is its block, its analysis set every other block of the same repeat.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import numpy as np
from sklearn.model_selection import KFold

from resamplekit.config import VFoldConfig, validate_config
from resamplekit.data.partition import RowIndexPartition
from resamplekit.data.resample_set import ResampleSet, SplitId
from resamplekit.data.source import as_source
from resamplekit.data.split import Split
from resamplekit.errors import ConfigurationError
from resamplekit.splitters.labels import names0
from resamplekit.splitters.strata import generate_partitions

logger = logging.getLogger(__name__)


def _draw_seed(rng: np.random.Generator) -> int:
    """Derive an integer seed for sklearn from the shared generator."""
    return int(rng.integers(0, 2**31 - 1))


def vfold_partitions(
    n_rows: int,
    v: int,
    rng: np.random.Generator,
    shuffle_folds: bool = False,
) -> List[RowIndexPartition]:
    """Create one repeat of V-fold partitions.

    Args:
        n_rows: Number of rows.
        v: Number of folds.
        rng: Random generator (consumed for the permutation).
        shuffle_folds: Randomize which block becomes which fold, so that
            the larger remainder blocks do not always land on the first
            folds when strata are merged.

    Returns:
        List of V partitions, assessment blocks in fold order.
    """
    if v > n_rows:
        raise ConfigurationError(f"Cannot make {v} folds from {n_rows} rows")

    kf = KFold(n_splits=v, shuffle=True, random_state=_draw_seed(rng))
    blocks = [
        (train_idx, np.sort(val_idx))
        for train_idx, val_idx in kf.split(np.arange(n_rows))
    ]
    if shuffle_folds:
        blocks = [blocks[i] for i in rng.permutation(v)]

    return [
        RowIndexPartition(analysis=train_idx, assessment=val_idx, n_rows=n_rows)
        for train_idx, val_idx in blocks
    ]


def vfold_cv(
    data: Any,
    v: int = 10,
    repeats: int = 1,
    strata: Optional[str] = None,
    random_seed: Optional[int] = None,
) -> ResampleSet:
    """V-fold cross-validation, optionally repeated and stratified.

    Args:
        data: DataFrame, numpy array, or DataSource.
        v: Number of folds.
        repeats: Number of independent repeats of the whole procedure.
        strata: Discrete column to stratify on. Every stratum needs at
            least v rows.
        random_seed: Seed for reproducibility.

    Returns:
        ResampleSet with repeats * v splits, ids "Fold01".. or
        ("Repeat01", "Fold01")..
    """
    cfg = validate_config(
        VFoldConfig, v=v, repeats=repeats, strata=strata, random_seed=random_seed
    )
    source = as_source(data)
    n = source.n_rows
    if cfg.v > n:
        raise ConfigurationError(f"Cannot make {cfg.v} folds from {n} rows")

    rng = np.random.default_rng(cfg.random_seed)
    fold_labels = names0(cfg.v, "Fold")
    repeat_labels = names0(cfg.repeats, "Repeat")

    splits: List[Split] = []
    ids: List[SplitId] = []
    for r in range(cfg.repeats):
        partitions = generate_partitions(
            source,
            lambda m: vfold_partitions(m, cfg.v, rng, shuffle_folds=cfg.strata is not None),
            strata=cfg.strata,
            min_size=cfg.v,
        )
        for fold_label, partition in zip(fold_labels, partitions):
            splits.append(Split(source, partition))
            if cfg.repeats == 1:
                ids.append(SplitId(fold_label))
            else:
                ids.append(SplitId(repeat_labels[r], fold_label))

    logger.info(
        f"V-fold CV: {len(splits)} splits (v={cfg.v}, repeats={cfg.repeats}, "
        f"strata={cfg.strata}) over {n} rows"
    )
    return ResampleSet(
        splits,
        ids,
        strategy="vfold_cv",
        params={"v": cfg.v, "repeats": cfg.repeats, "strata": cfg.strata},
    )


def loo_cv(data: Any) -> ResampleSet:
    """Leave-one-out cross-validation.

    Split i assesses row i and analyses every other row; no randomness.

    Args:
        data: DataFrame, numpy array, or DataSource.

    Returns:
        ResampleSet with one split per row, ids "Resample1"..
    """
    source = as_source(data)
    n = source.n_rows
    if n < 2:
        raise ConfigurationError(f"Leave-one-out needs at least 2 rows, got {n}")

    rows = np.arange(n)
    splits = [
        Split(source, RowIndexPartition(
            analysis=np.delete(rows, i), assessment=[i], n_rows=n
        ))
        for i in range(n)
    ]

    logger.info(f"Leave-one-out CV: {n} splits")
    return ResampleSet(splits, names0(n, "Resample"), strategy="loo_cv", params={})
