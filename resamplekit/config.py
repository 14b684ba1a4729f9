"""
Configuration management using pydantic.

All config classes use pydantic for validation and YAML loading.
Default config files ship inside the package under resamplekit/configs/.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional, Type, TypeVar

import yaml
from pydantic import BaseModel, Field, ValidationError

from resamplekit.errors import ConfigurationError


# Base path for config files
CONFIGS_DIR = Path(__file__).parent / "configs"

ConfigT = TypeVar("ConfigT", bound=BaseModel)


def load_yaml(path: Path | str) -> dict[str, Any]:
    """Load a YAML file and return as dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def validate_config(cls: Type[ConfigT], **params: Any) -> ConfigT:
    """Build a config model, reporting bad parameters as ConfigurationError.

    Args:
        cls: Config class to instantiate.
        **params: Field values.

    Returns:
        Validated config instance.
    """
    try:
        return cls(**params)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {cls.__name__}: {e}") from e


class VFoldConfig(BaseModel):
    """Configuration for (repeated) v-fold cross-validation."""

    strategy: Literal["vfold_cv"] = "vfold_cv"
    v: int = Field(default=10, ge=2)
    repeats: int = Field(default=1, ge=1)
    strata: Optional[str] = None
    random_seed: Optional[int] = None

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> VFoldConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/vfold.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "vfold.yaml"
        return validate_config(cls, **load_yaml(path))


class BootstrapConfig(BaseModel):
    """Configuration for bootstrap resampling.

    apparent adds one extra split that uses every row for both analysis and
    assessment. oob=False skips computing the out-of-bag assessment sets.
    """

    strategy: Literal["bootstraps"] = "bootstraps"
    times: int = Field(default=25, ge=1)
    apparent: bool = False
    oob: bool = True
    strata: Optional[str] = None
    random_seed: Optional[int] = None

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> BootstrapConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/bootstraps.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "bootstraps.yaml"
        return validate_config(cls, **load_yaml(path))


class MonteCarloConfig(BaseModel):
    """Configuration for Monte-Carlo cross-validation.

    prop is the fraction of rows kept for analysis, strictly inside (0, 1).
    """

    strategy: Literal["mc_cv"] = "mc_cv"
    prop: float = Field(default=0.75, gt=0.0, lt=1.0)
    times: int = Field(default=25, ge=1)
    strata: Optional[str] = None
    random_seed: Optional[int] = None

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> MonteCarloConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/mc_cv.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "mc_cv.yaml"
        return validate_config(cls, **load_yaml(path))


class RollingOriginConfig(BaseModel):
    """Configuration for rolling origin forecast resampling."""

    strategy: Literal["rolling_origin"] = "rolling_origin"
    initial: int = Field(default=5, ge=1)
    assess: int = Field(default=1, ge=1)
    cumulative: bool = True
    skip: int = Field(default=0, ge=0)

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> RollingOriginConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/rolling_origin.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "rolling_origin.yaml"
        return validate_config(cls, **load_yaml(path))


class EvaluationConfig(BaseModel):
    """Configuration for applying a function across splits.

    on_error="raise" stops at the first failing split; "record" stores a
    SplitFailure marker for that split and keeps going.
    """

    n_jobs: int = Field(default=1, ge=1)
    on_error: Literal["raise", "record"] = "raise"
    simplify: bool = False
    show_progress: bool = False

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> EvaluationConfig:
        """Load config from YAML file.

        Args:
            path: Path to YAML file. If None, uses configs/evaluation.yaml.
        """
        if path is None:
            path = CONFIGS_DIR / "evaluation.yaml"
        return validate_config(cls, **load_yaml(path))
