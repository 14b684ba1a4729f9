"""
Config-driven construction of resample sets.

Lets a resampling scheme be defined in YAML and executed without code
changes, e.g. build_resamples(df, VFoldConfig.from_yaml()).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Type, Union

from pydantic import BaseModel

from resamplekit.config import (
    BootstrapConfig,
    MonteCarloConfig,
    RollingOriginConfig,
    VFoldConfig,
    load_yaml,
    validate_config,
)
from resamplekit.data.resample_set import ResampleSet
from resamplekit.errors import ConfigurationError
from resamplekit.splitters.bootstrap import bootstraps
from resamplekit.splitters.mc import mc_cv
from resamplekit.splitters.rolling_origin import rolling_origin
from resamplekit.splitters.vfold import vfold_cv

StrategyConfig = Union[VFoldConfig, BootstrapConfig, MonteCarloConfig, RollingOriginConfig]

_CONFIG_TYPES: Dict[str, Type[BaseModel]] = {
    "vfold_cv": VFoldConfig,
    "bootstraps": BootstrapConfig,
    "mc_cv": MonteCarloConfig,
    "rolling_origin": RollingOriginConfig,
}

_GENERATORS = {
    "vfold_cv": vfold_cv,
    "bootstraps": bootstraps,
    "mc_cv": mc_cv,
    "rolling_origin": rolling_origin,
}


def config_from_dict(d: Mapping[str, Any]) -> StrategyConfig:
    """Create a strategy config from a dict with a "strategy" key."""
    strategy = d.get("strategy")
    if strategy not in _CONFIG_TYPES:
        raise ConfigurationError(
            f"Unknown strategy: {strategy}. Supported: {list(_CONFIG_TYPES)}"
        )
    return validate_config(_CONFIG_TYPES[strategy], **d)


def build_resamples(
    data: Any,
    cfg: Union[StrategyConfig, Mapping[str, Any], str, Path],
) -> ResampleSet:
    """Generate a resample set from a strategy config.

    Args:
        data: DataFrame, numpy array, or DataSource.
        cfg: Strategy config model, a dict with a "strategy" key, or a path
            to a YAML file holding such a dict.

    Returns:
        ResampleSet produced by the configured strategy.
    """
    if isinstance(cfg, (str, Path)):
        cfg = load_yaml(cfg)
    if isinstance(cfg, Mapping):
        cfg = config_from_dict(cfg)
    if not isinstance(cfg, tuple(_CONFIG_TYPES.values())):
        raise ConfigurationError(f"Not a strategy config: {type(cfg).__name__}")

    params = cfg.model_dump(exclude={"strategy"})
    return _GENERATORS[cfg.strategy](data, **params)
