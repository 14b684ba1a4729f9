"""
Abstract data source interface for row projections.

Defines the contract every dataset wrapper must fulfill so that splits can
materialize their analysis and assessment rows without copying the source:
- DataSource: abstract base class
- FrameSource: pandas DataFrame backed source
- ArraySource: numpy array backed source
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

import numpy as np
import pandas as pd

from resamplekit.errors import ConfigurationError


class DataSource(ABC):
    """Abstract base class for tabular data sources.

    A source is read-only for the lifetime of every split that references
    it; take() must never modify the wrapped data.
    """

    @property
    @abstractmethod
    def n_rows(self) -> int:
        """Number of rows in the source."""
        pass

    @property
    @abstractmethod
    def columns(self) -> List[str]:
        """Column names, in order."""
        pass

    @abstractmethod
    def take(self, indices: np.ndarray) -> Any:
        """Return the rows at the given positions.

        Repeated positions yield repeated rows.

        Args:
            indices: Integer row positions in [0, n_rows).

        Returns:
            Sub-table of the same kind as the wrapped data.
        """
        pass

    @abstractmethod
    def column(self, name: str) -> np.ndarray:
        """Return a single column as a numpy array."""
        pass

    def __len__(self) -> int:
        """Number of rows."""
        return self.n_rows

    def _check_column(self, name: str) -> None:
        if name not in self.columns:
            raise ConfigurationError(
                f"Column '{name}' not found. Available: {self.columns}"
            )


class FrameSource(DataSource):
    """Source backed by a pandas DataFrame (held by reference)."""

    def __init__(self, frame: pd.DataFrame) -> None:
        self.data = frame

    @property
    def n_rows(self) -> int:
        return len(self.data)

    @property
    def columns(self) -> List[str]:
        return [str(c) for c in self.data.columns]

    def _label(self, name: str) -> Any:
        # columns reports labels as strings; map back to the real label
        for label in self.data.columns:
            if str(label) == name:
                return label
        return name

    def take(self, indices: np.ndarray) -> pd.DataFrame:
        # Positional selection keeps the original index labels
        return self.data.iloc[np.asarray(indices, dtype=np.int64)]

    def column(self, name: str) -> np.ndarray:
        self._check_column(name)
        return self.data[self._label(name)].to_numpy()

    def __repr__(self) -> str:
        return f"FrameSource({self.n_rows} rows x {len(self.data.columns)} columns)"


class ArraySource(DataSource):
    """Source backed by a 1-D or 2-D numpy array.

    Column names are optional for 2-D arrays; they default to "x0", "x1", ...
    """

    def __init__(
        self,
        array: np.ndarray,
        column_names: Optional[Sequence[str]] = None,
    ) -> None:
        if array.ndim not in (1, 2):
            raise ConfigurationError(
                f"ArraySource needs a 1-D or 2-D array, got shape {array.shape}"
            )
        n_cols = 1 if array.ndim == 1 else array.shape[1]
        if column_names is None:
            column_names = [f"x{i}" for i in range(n_cols)]
        if len(column_names) != n_cols:
            raise ConfigurationError(
                f"Got {len(column_names)} column names for {n_cols} columns"
            )
        self.data = array
        self._column_names = list(column_names)

    @property
    def n_rows(self) -> int:
        return int(self.data.shape[0])

    @property
    def columns(self) -> List[str]:
        return list(self._column_names)

    def take(self, indices: np.ndarray) -> np.ndarray:
        return self.data[np.asarray(indices, dtype=np.int64)]

    def column(self, name: str) -> np.ndarray:
        self._check_column(name)
        if self.data.ndim == 1:
            return self.data
        return self.data[:, self._column_names.index(name)]

    def __repr__(self) -> str:
        return f"ArraySource(shape={self.data.shape})"


def as_source(data: Any) -> DataSource:
    """Wrap a dataset in the matching DataSource.

    Args:
        data: DataSource, pandas DataFrame, or numpy array.

    Returns:
        DataSource referencing (not copying) the data.
    """
    if isinstance(data, DataSource):
        return data
    if isinstance(data, pd.DataFrame):
        return FrameSource(data)
    if isinstance(data, np.ndarray):
        return ArraySource(data)
    raise ConfigurationError(
        f"Unsupported data type {type(data).__name__}; "
        "expected a DataFrame, numpy array, or DataSource"
    )
