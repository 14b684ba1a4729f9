"""
Summaries of per-split results.

Aggregates a numeric result column across splits into mean, standard
deviation and a 95% percentile interval.
"""

from __future__ import annotations

from typing import Any, Dict

import numpy as np

from resamplekit.data.resample_set import ResampleSet
from resamplekit.errors import ConfigurationError, SplitFailure
from resamplekit.evaluation.driver import scalar_value


def summarize_column(resamples: ResampleSet, column: str) -> Dict[str, Any]:
    """Summarize a numeric per-split result column.

    Args:
        resamples: ResampleSet with the attached column.
        column: Column holding one scalar (or SplitFailure) per split.

    Returns:
        {"mean": ..., "std": ..., "q2.5": ..., "q97.5": ...,
         "n": <splits summarized>, "n_failed": <failure markers skipped>}
    """
    values = []
    n_failed = 0
    for split_id, value in zip(resamples.ids, resamples.column(column)):
        if isinstance(value, SplitFailure):
            n_failed += 1
            continue
        is_scalar, unwrapped = scalar_value(value)
        if not is_scalar:
            raise ConfigurationError(
                f"Column '{column}' holds a non-scalar {type(value).__name__} "
                f"for split {split_id}"
            )
        values.append(float(unwrapped))

    if not values:
        raise ConfigurationError(f"Column '{column}' has no numeric results to summarize")

    samples = np.array(values)
    return {
        "mean": float(np.mean(samples)),
        "std": float(np.std(samples)),
        "q2.5": float(np.percentile(samples, 2.5)),
        "q97.5": float(np.percentile(samples, 97.5)),
        "n": len(values),
        "n_failed": n_failed,
    }


def oob_sizes(resamples: ResampleSet) -> np.ndarray:
    """Assessment set size of every split, in split order.

    Useful to spot bootstrap samples whose out-of-bag set is empty.
    """
    return np.array([split.n_assessment for split in resamples.splits], dtype=np.int64)
