"""
A single resample: shared data source plus one row-index partition.

The analysis and assessment halves are addressed through the Portion tag;
rows are only materialized when a table is requested.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import numpy as np

from resamplekit.data.partition import RowIndexPartition
from resamplekit.data.source import DataSource, as_source
from resamplekit.errors import ConfigurationError


class Portion(str, Enum):
    """Which half of a split."""

    ANALYSIS = "Analysis"
    ASSESSMENT = "Assessment"


class Split:
    """Immutable pairing of a data source reference and a partition.

    The source is never copied. Tables are recomputed on every call and
    depend only on the partition's indices.
    """

    __slots__ = ("_source", "_partition")

    def __init__(self, source: Any, partition: RowIndexPartition) -> None:
        source = as_source(source)
        if partition.n_rows != source.n_rows:
            raise ConfigurationError(
                f"Partition covers {partition.n_rows} rows but source has {source.n_rows}"
            )
        object.__setattr__(self, "_source", source)
        object.__setattr__(self, "_partition", partition)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Split is immutable")

    @property
    def source(self) -> DataSource:
        return self._source

    @property
    def partition(self) -> RowIndexPartition:
        return self._partition

    @property
    def n_rows(self) -> int:
        return self._partition.n_rows

    @property
    def n_analysis(self) -> int:
        return self._partition.n_analysis

    @property
    def n_assessment(self) -> int:
        return self._partition.n_assessment

    def indices(self, portion: Portion) -> np.ndarray:
        """Row positions of the requested half."""
        if Portion(portion) is Portion.ANALYSIS:
            return self._partition.analysis
        return self._partition.assessment

    def table(self, portion: Portion) -> Any:
        """Rows of the requested half, in index order (duplicates kept)."""
        return self._source.take(self.indices(portion))

    def analysis_table(self) -> Any:
        return self.table(Portion.ANALYSIS)

    def assessment_table(self) -> Any:
        return self.table(Portion.ASSESSMENT)

    def __repr__(self) -> str:
        return f"<Split [{self.n_analysis}/{self.n_assessment}/{self.n_rows}]>"


def analysis(split: Split) -> Any:
    """Analysis rows of a split."""
    return split.analysis_table()


def assessment(split: Split) -> Any:
    """Assessment rows of a split."""
    return split.assessment_table()


def training(split: Split) -> Any:
    """Training rows of an initial split (same as analysis)."""
    return split.analysis_table()


def testing(split: Split) -> Any:
    """Testing rows of an initial split (same as assessment)."""
    return split.assessment_table()
