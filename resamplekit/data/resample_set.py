"""
Resample set: the ordered collection of splits produced by one strategy.

Holds the splits, their identifiers, the strategy name and parameters, and
any per-split result columns attached afterwards. Attaching a column returns
a new set; splits and ids are never modified.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from resamplekit.data.source import DataSource
from resamplekit.data.split import Portion, Split
from resamplekit.errors import ConfigurationError

RESERVED_COLUMNS = ("splits", "id", "id2")


class SplitId(NamedTuple):
    """Identifier of a split, e.g. ("Fold03",) or ("Repeat02", "Fold03")."""

    id: str
    id2: Optional[str] = None

    def __str__(self) -> str:
        if self.id2 is None:
            return self.id
        return f"{self.id}/{self.id2}"


def _as_split_id(value: Union[SplitId, str, Tuple[str, ...]]) -> SplitId:
    if isinstance(value, SplitId):
        return value
    if isinstance(value, str):
        return SplitId(value)
    return SplitId(*value)


def _same_data(a: DataSource, b: DataSource) -> bool:
    # Split wraps raw frames/arrays in a fresh source each time
    return a is b or getattr(a, "data", a) is getattr(b, "data", b)


def _frozen_column(values: Sequence[Any]) -> Sequence[Any]:
    if isinstance(values, np.ndarray):
        values = np.array(values, copy=True)
        values.flags.writeable = False
        return values
    return tuple(values)


def _object_series(values: Sequence[Any]) -> pd.Series:
    # Element-wise fill so nested frames/arrays stay whole objects
    arr = np.empty(len(values), dtype=object)
    for i, v in enumerate(values):
        arr[i] = v
    return pd.Series(arr, dtype=object)


class ResampleSet:
    """Ordered (id, split) pairs drawn from one source by one strategy.

    Attributes:
        strategy: Generator name, e.g. "vfold_cv" or "rolling_origin".
        params: Strategy parameters (fold count, times, initial, ...).
    """

    def __init__(
        self,
        splits: Sequence[Split],
        ids: Sequence[Union[SplitId, str, Tuple[str, ...]]],
        strategy: str,
        params: Optional[Mapping[str, Any]] = None,
        columns: Optional[Mapping[str, Sequence[Any]]] = None,
    ) -> None:
        splits = list(splits)
        ids = [_as_split_id(i) for i in ids]

        if not splits:
            raise ConfigurationError("A resample set needs at least one split")
        if len(ids) != len(splits):
            raise ConfigurationError(
                f"Got {len(ids)} ids for {len(splits)} splits"
            )
        if len(set(ids)) != len(ids):
            raise ConfigurationError("Split ids must be unique within a resample set")
        source = splits[0].source
        if any(not _same_data(s.source, source) for s in splits):
            raise ConfigurationError("All splits must reference the same data source")

        self._splits: List[Split] = splits
        self._ids: List[SplitId] = ids
        self.strategy = strategy
        self.params: Dict[str, Any] = dict(params or {})
        self._columns: Dict[str, Sequence[Any]] = {}
        for name, values in (columns or {}).items():
            self._check_column(name, values)
            self._columns[name] = _frozen_column(values)

    # -- sequence protocol -------------------------------------------------

    def __len__(self) -> int:
        return len(self._splits)

    def __iter__(self) -> Iterator[Tuple[SplitId, Split]]:
        return iter(zip(self._ids, self._splits))

    def __getitem__(self, i: int) -> Split:
        return self._splits[i]

    def get_split(self, id: str, id2: Optional[str] = None) -> Split:
        """Look up a split by its id (and id2 for repeated v-fold)."""
        key = SplitId(id, id2)
        for split_id, split in self:
            if split_id == key:
                return split
        raise KeyError(f"No split with id {key}")

    @property
    def splits(self) -> List[Split]:
        return list(self._splits)

    @property
    def ids(self) -> List[SplitId]:
        return list(self._ids)

    @property
    def source(self) -> DataSource:
        return self._splits[0].source

    @property
    def column_names(self) -> List[str]:
        return list(self._columns)

    # -- result columns ----------------------------------------------------

    def _check_column(self, name: str, values: Sequence[Any]) -> None:
        if name in RESERVED_COLUMNS:
            raise ConfigurationError(f"Column name '{name}' is reserved")
        if name in self._columns:
            raise ConfigurationError(
                f"Column '{name}' already exists; result columns are append-only"
            )
        if len(values) != len(self._splits):
            raise ConfigurationError(
                f"Column '{name}' has {len(values)} values for {len(self._splits)} splits"
            )

    def attach(self, name: str, values: Sequence[Any]) -> ResampleSet:
        """Return a new set with one extra per-split column.

        Args:
            name: Column name (must be new and not reserved).
            values: Exactly one value per split, in split order.

        Returns:
            ResampleSet sharing this set's splits, with the column appended.
        """
        values = _frozen_column(values)
        self._check_column(name, values)
        columns = dict(self._columns)
        columns[name] = values
        return ResampleSet(
            self._splits, self._ids, self.strategy, self.params, columns
        )

    def column(self, name: str) -> Sequence[Any]:
        """Values of an attached column, in split order (tuple or read-only array)."""
        if name not in self._columns:
            raise KeyError(f"No column '{name}'. Available: {self.column_names}")
        return self._columns[name]

    # -- tabular views -----------------------------------------------------

    def _id_frame(self) -> pd.DataFrame:
        frame = pd.DataFrame({"id": [i.id for i in self._ids]})
        if any(i.id2 is not None for i in self._ids):
            frame["id2"] = [i.id2 for i in self._ids]
        return frame

    def to_frame(self) -> pd.DataFrame:
        """One row per split: splits, id(s), then attached columns."""
        frame = self._id_frame()
        frame.insert(0, "splits", _object_series(self._splits))
        for name, values in self._columns.items():
            if isinstance(values, np.ndarray) and values.ndim == 1:
                frame[name] = values.copy()
            else:
                frame[name] = _object_series(values)
        return frame

    def tidy(self) -> pd.DataFrame:
        """Long format: one row per index occurrence.

        Columns: row, data ("Analysis"/"Assessment"), id (and id2).
        """
        pieces = []
        for split_id, split in self:
            for portion in Portion:
                rows = split.indices(portion)
                piece = pd.DataFrame({
                    "row": rows,
                    "data": portion.value,
                    "id": split_id.id,
                })
                if split_id.id2 is not None:
                    piece["id2"] = split_id.id2
                pieces.append(piece)
        return pd.concat(pieces, ignore_index=True)

    # -- summaries ---------------------------------------------------------

    def describe(self) -> Dict[str, Any]:
        """Strategy name, parameter values and number of splits."""
        return {"strategy": self.strategy, **self.params, "n_splits": len(self)}

    def _title_lines(self) -> List[str]:
        p = self.params
        strata = p.get("strata")
        if self.strategy == "vfold_cv":
            lines = [f"{p['v']}-fold cross-validation"]
            if p.get("repeats", 1) > 1:
                lines[0] += f" repeated {p['repeats']} times"
        elif self.strategy == "loo_cv":
            lines = ["Leave-one-out cross-validation"]
        elif self.strategy == "bootstraps":
            lines = [f"Bootstrap sampling (times={p['times']})"]
            if p.get("apparent"):
                lines.append("  with apparent sample")
            if not p.get("oob", True):
                lines.append("  without out-of-bag assessment sets")
        elif self.strategy == "mc_cv":
            prop = p["prop"]
            lines = [f"Monte Carlo cross-validation ({prop:g}/{1 - prop:g})"]
        elif self.strategy == "rolling_origin":
            lines = ["Rolling origin forecast resampling"]
            if p["cumulative"]:
                lines.append(f"  {p['initial']} rows initially with accumulation")
            else:
                lines.append(f"  {p['initial']} rows for each resample")
            lines.append(f"  {p['assess']} rows for assessment")
            if p["skip"] > 0:
                unit = "rows" if p["skip"] > 1 else "row"
                lines.append(f"  skipping {p['skip']} {unit} per resample")
        else:
            lines = [f"{self.strategy} resampling"]
        if strata:
            lines.append(f"  using stratification on '{strata}'")
        return lines

    def __str__(self) -> str:
        lines = self._title_lines()
        lines.append(f"  {len(self)} splits")
        if self._columns:
            lines.append(f"  columns: {', '.join(self._columns)}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"<ResampleSet {self.strategy}: {len(self)} splits>"
