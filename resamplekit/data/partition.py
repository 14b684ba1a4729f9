"""
Row-index partition: the analysis/assessment index pair behind one split.

Stores indices rather than data so that splits stay lazy.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from resamplekit.errors import ConfigurationError


def _as_index_array(values, n_rows: int, name: str) -> np.ndarray:
    arr = np.array(values, dtype=np.int64).reshape(-1)
    if arr.size and (arr.min() < 0 or arr.max() >= n_rows):
        raise ConfigurationError(
            f"{name} indices must lie in [0, {n_rows}), "
            f"got range [{arr.min()}, {arr.max()}]"
        )
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class RowIndexPartition:
    """Analysis and assessment row positions over a universe of n_rows rows.

    analysis may contain repeated positions (bootstrap); assessment may be
    empty. Both arrays are read-only int64.

    Attributes:
        analysis: Row positions used for fitting.
        assessment: Row positions used for evaluation.
        n_rows: Size of the row universe.
    """

    analysis: np.ndarray
    assessment: np.ndarray
    n_rows: int

    def __post_init__(self) -> None:
        if self.n_rows < 0:
            raise ConfigurationError(f"n_rows must be >= 0, got {self.n_rows}")
        object.__setattr__(
            self, "analysis", _as_index_array(self.analysis, self.n_rows, "analysis")
        )
        object.__setattr__(
            self, "assessment", _as_index_array(self.assessment, self.n_rows, "assessment")
        )

    @property
    def n_analysis(self) -> int:
        return int(self.analysis.size)

    @property
    def n_assessment(self) -> int:
        return int(self.assessment.size)

    def is_disjoint(self) -> bool:
        """True when no row is in both analysis and assessment."""
        return np.intersect1d(self.analysis, self.assessment).size == 0

    def out_of_bag(self) -> np.ndarray:
        """Sorted row positions never used for analysis."""
        mask = np.ones(self.n_rows, dtype=bool)
        mask[self.analysis] = False
        return np.flatnonzero(mask)

    def remap(self, index_map: np.ndarray, n_rows: int) -> RowIndexPartition:
        """Translate positions through index_map into a larger universe.

        Used to lift a partition computed inside one stratum back to the
        positions of the full dataset.
        """
        index_map = np.asarray(index_map, dtype=np.int64)
        return RowIndexPartition(
            analysis=index_map[self.analysis],
            assessment=index_map[self.assessment],
            n_rows=n_rows,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RowIndexPartition):
            return NotImplemented
        return (
            self.n_rows == other.n_rows
            and np.array_equal(self.analysis, other.analysis)
            and np.array_equal(self.assessment, other.assessment)
        )


def merge_partitions(
    parts: list[RowIndexPartition],
    n_rows: int,
    sort_analysis: bool = True,
) -> RowIndexPartition:
    """Union partitions that cover disjoint row groups of the same dataset.

    Analysis positions keep their multiplicity; with sort_analysis=False they
    stay in input order. Assessment positions are always sorted.
    """
    if not parts:
        return RowIndexPartition(analysis=[], assessment=[], n_rows=n_rows)
    analysis = np.concatenate([p.analysis for p in parts])
    if sort_analysis:
        analysis = np.sort(analysis)
    return RowIndexPartition(
        analysis=analysis,
        assessment=np.sort(np.concatenate([p.assessment for p in parts])),
        n_rows=n_rows,
    )
