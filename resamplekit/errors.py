"""
Error types raised by resampling and split evaluation.

- ConfigurationError: bad parameters or inputs, raised before any object is returned
- SplitEvaluationError: a user function failed on one split (fail-fast mode)
- SplitFailure: per-split failure marker stored instead of a result (record mode)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resamplekit.data.resample_set import SplitId


class ConfigurationError(ValueError):
    """Invalid resampling parameters, strata, or result columns."""


class SplitEvaluationError(RuntimeError):
    """A user-supplied function raised while evaluating one split.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, split_id: SplitId, error: BaseException) -> None:
        self.split_id = split_id
        self.error = error
        super().__init__(
            f"Evaluation failed on split {split_id}: {type(error).__name__}: {error}"
        )


@dataclass(frozen=True)
class SplitFailure:
    """Marker stored in a result column when a split's evaluation failed."""

    split_id: SplitId
    error: BaseException

    def __repr__(self) -> str:
        return f"SplitFailure({self.split_id}, {type(self.error).__name__}: {self.error})"
