"""
Reusable analysis/assessment resamples for model evaluation.

Splits hold row indices into a shared dataset, not copies of it. Strategies:
v-fold (repeated, stratified) and leave-one-out cross-validation, bootstrap,
Monte-Carlo cross-validation / initial split, and rolling origin.
"""

from resamplekit.config import (
    BootstrapConfig,
    EvaluationConfig,
    MonteCarloConfig,
    RollingOriginConfig,
    VFoldConfig,
)
from resamplekit.data import (
    ArraySource,
    DataSource,
    FrameSource,
    Portion,
    ResampleSet,
    RowIndexPartition,
    Split,
    SplitId,
    analysis,
    as_source,
    assessment,
    testing,
    training,
)
from resamplekit.errors import ConfigurationError, SplitEvaluationError, SplitFailure
from resamplekit.evaluation import (
    evaluate,
    evaluate_column,
    map_column,
    map_splits,
    oob_sizes,
    summarize_column,
)
from resamplekit.splitters import (
    bootstraps,
    build_resamples,
    initial_split,
    loo_cv,
    mc_cv,
    rolling_origin,
    vfold_cv,
)

__version__ = "0.1.0"

__all__ = [
    "ArraySource",
    "BootstrapConfig",
    "ConfigurationError",
    "DataSource",
    "EvaluationConfig",
    "FrameSource",
    "MonteCarloConfig",
    "Portion",
    "ResampleSet",
    "RollingOriginConfig",
    "RowIndexPartition",
    "Split",
    "SplitEvaluationError",
    "SplitFailure",
    "SplitId",
    "VFoldConfig",
    "analysis",
    "as_source",
    "assessment",
    "bootstraps",
    "build_resamples",
    "evaluate",
    "evaluate_column",
    "initial_split",
    "loo_cv",
    "map_column",
    "map_splits",
    "mc_cv",
    "oob_sizes",
    "rolling_origin",
    "summarize_column",
    "testing",
    "training",
    "vfold_cv",
]
