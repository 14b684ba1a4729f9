"""
Apply a function to every split of a resample set and collect the results.

This runner:
- Calls the function once per split, in resample set order
- Returns one result per split, aligned with the set's ids
- Optionally unwraps scalar results into a flat numeric array
- Either stops at the first failure or records a SplitFailure marker

The driver never touches the data source itself; whatever the user function
does with a split's tables is its own business. With n_jobs > 1 the calls
run on a thread pool, but results are still placed by split position.
"""

from __future__ import annotations

import logging
import numbers
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from tqdm import tqdm

from resamplekit.config import EvaluationConfig, validate_config
from resamplekit.data.resample_set import ResampleSet, SplitId
from resamplekit.errors import SplitEvaluationError, SplitFailure

logger = logging.getLogger(__name__)

Results = Union[List[Any], np.ndarray]


def scalar_value(value: Any) -> Tuple[bool, Any]:
    """Check whether a result is a single number.

    Numbers, 0-d arrays and one-element lists, tuples, arrays, Series or
    1x1 DataFrames count as scalar.

    Returns:
        (is_scalar, unwrapped_value)
    """
    if isinstance(value, (numbers.Number, np.number, np.bool_)):
        return True, value
    if isinstance(value, pd.DataFrame):
        if value.shape == (1, 1):
            return scalar_value(value.iat[0, 0])
        return False, value
    if isinstance(value, pd.Series):
        if len(value) == 1:
            return scalar_value(value.iloc[0])
        return False, value
    if isinstance(value, np.ndarray):
        if value.size == 1:
            return scalar_value(value.reshape(-1)[0])
        return False, value
    if isinstance(value, (list, tuple)) and len(value) == 1:
        return scalar_value(value[0])
    return False, value


def simplify_results(results: Sequence[Any]) -> Results:
    """Flatten results to a numeric array if every one is scalar.

    Results containing failure markers, or any non-scalar result, are
    returned unchanged as a list.
    """
    results = list(results)
    if any(isinstance(r, SplitFailure) for r in results):
        logger.debug("Not simplifying results: some splits failed")
        return results

    unwrapped = []
    for r in results:
        is_scalar, value = scalar_value(r)
        if not is_scalar:
            logger.debug(f"Not simplifying results: non-scalar {type(r).__name__}")
            return results
        unwrapped.append(value)
    return np.asarray(unwrapped)


def extract_field(value: Any, field: Optional[str]) -> Any:
    """Pull one named field out of a stored result.

    Mappings and DataFrames are indexed by key; anything else by attribute.
    """
    if field is None or isinstance(value, SplitFailure):
        return value
    if isinstance(value, (Mapping, pd.DataFrame)):
        return value[field]
    return getattr(value, field)


def _with_field(fn: Callable[..., Any], field: Optional[str]) -> Callable[..., Any]:
    """Wrap fn so the field lookup runs inside the per-split call."""
    if field is None:
        return fn

    def call(value: Any, *args: Any, **kwargs: Any) -> Any:
        return fn(extract_field(value, field), *args, **kwargs)

    return call


def _resolve_config(cfg: Optional[EvaluationConfig], **overrides: Any) -> EvaluationConfig:
    base = cfg.model_dump() if cfg is not None else {}
    base.update({k: v for k, v in overrides.items() if v is not None})
    return validate_config(EvaluationConfig, **base)


def _call_one(
    fn: Callable[..., Any],
    item: Any,
    split_id: SplitId,
    args: tuple,
    kwargs: dict,
    on_error: str,
) -> Any:
    """Evaluate fn on one item, applying the failure policy."""
    if isinstance(item, SplitFailure):
        # Upstream failure: nothing to evaluate
        return item
    try:
        return fn(item, *args, **kwargs)
    except Exception as e:
        if on_error == "record":
            logger.warning(f"Split {split_id} failed: {type(e).__name__}: {e}")
            return SplitFailure(split_id, e)
        raise SplitEvaluationError(split_id, e) from e


def _apply(
    items: Sequence[Any],
    ids: Sequence[SplitId],
    fn: Callable[..., Any],
    args: tuple,
    kwargs: dict,
    cfg: EvaluationConfig,
) -> Results:
    n = len(items)

    if cfg.n_jobs == 1:
        pairs = zip(ids, items)
        if cfg.show_progress:
            pairs = tqdm(pairs, total=n, desc="Evaluating splits")
        results = [
            _call_one(fn, item, split_id, args, kwargs, cfg.on_error)
            for split_id, item in pairs
        ]
    else:
        with ThreadPoolExecutor(max_workers=cfg.n_jobs) as executor:
            futures: List[Future] = [
                executor.submit(_call_one, fn, item, split_id, args, kwargs, cfg.on_error)
                for split_id, item in zip(ids, items)
            ]
            ordered = tqdm(futures, desc="Evaluating splits") if cfg.show_progress else futures
            results = []
            try:
                # Waiting in submission order keeps results aligned with splits
                for future in ordered:
                    results.append(future.result())
            except SplitEvaluationError:
                for future in futures:
                    future.cancel()
                raise

    n_failed = sum(1 for r in results if isinstance(r, SplitFailure))
    logger.info(f"Evaluated {n} splits ({n_failed} failed)")

    if cfg.simplify:
        return simplify_results(results)
    return results


def map_splits(
    resamples: ResampleSet,
    fn: Callable[..., Any],
    *args: Any,
    cfg: Optional[EvaluationConfig] = None,
    n_jobs: Optional[int] = None,
    on_error: Optional[str] = None,
    simplify: Optional[bool] = None,
    show_progress: Optional[bool] = None,
    **kwargs: Any,
) -> Results:
    """Call fn(split, *args, **kwargs) for every split.

    Args:
        resamples: ResampleSet to evaluate.
        fn: Function of a Split (plus extra arguments) returning any result.
        *args: Extra positional arguments for fn.
        cfg: Evaluation defaults; explicit keyword options override it.
        n_jobs: Worker threads (1 = sequential).
        on_error: "raise" or "record".
        simplify: Return a flat numeric array when every result is scalar.
        show_progress: Show a tqdm progress bar.
        **kwargs: Extra keyword arguments for fn.

    Returns:
        One result per split, in resample set order.
    """
    cfg = _resolve_config(
        cfg, n_jobs=n_jobs, on_error=on_error, simplify=simplify, show_progress=show_progress
    )
    return _apply(resamples.splits, resamples.ids, fn, args, kwargs, cfg)


def map_column(
    resamples: ResampleSet,
    column: str,
    fn: Callable[..., Any],
    *args: Any,
    field: Optional[str] = None,
    cfg: Optional[EvaluationConfig] = None,
    n_jobs: Optional[int] = None,
    on_error: Optional[str] = None,
    simplify: Optional[bool] = None,
    show_progress: Optional[bool] = None,
    **kwargs: Any,
) -> Results:
    """Call fn on each stored value of a previously attached column.

    Args:
        resamples: ResampleSet holding the column.
        column: Name of the attached column.
        fn: Function of one stored value (or its field) returning any result.
        *args: Extra positional arguments for fn.
        field: Key or attribute to pull out of each stored value first.
        cfg, n_jobs, on_error, simplify, show_progress: As for map_splits.
        **kwargs: Extra keyword arguments for fn.

    Returns:
        One result per split, in resample set order. Stored SplitFailure
        markers are passed through without calling fn.
    """
    cfg = _resolve_config(
        cfg, n_jobs=n_jobs, on_error=on_error, simplify=simplify, show_progress=show_progress
    )
    items = list(resamples.column(column))
    return _apply(items, resamples.ids, _with_field(fn, field), args, kwargs, cfg)


def evaluate(
    resamples: ResampleSet,
    fn: Callable[..., Any],
    name: str,
    *args: Any,
    **kwargs: Any,
) -> ResampleSet:
    """map_splits, then attach the results as column `name`.

    Returns:
        New ResampleSet with the extra column.
    """
    return resamples.attach(name, map_splits(resamples, fn, *args, **kwargs))


def evaluate_column(
    resamples: ResampleSet,
    column: str,
    fn: Callable[..., Any],
    name: str,
    *args: Any,
    **kwargs: Any,
) -> ResampleSet:
    """map_column, then attach the results as column `name`."""
    return resamples.attach(name, map_column(resamples, column, fn, *args, **kwargs))
