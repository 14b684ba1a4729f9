"""Evaluation of functions across the splits of a resample set."""

from resamplekit.config import EvaluationConfig
from resamplekit.evaluation.driver import (
    evaluate,
    evaluate_column,
    extract_field,
    map_column,
    map_splits,
    scalar_value,
    simplify_results,
)
from resamplekit.evaluation.summary import oob_sizes, summarize_column

__all__ = [
    "EvaluationConfig",
    "map_splits",
    "map_column",
    "evaluate",
    "evaluate_column",
    "extract_field",
    "scalar_value",
    "simplify_results",
    "summarize_column",
    "oob_sizes",
]
