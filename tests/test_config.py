"""Tests for configuration loading and config-driven resampling."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

import resamplekit
from resamplekit import (
    BootstrapConfig,
    ConfigurationError,
    EvaluationConfig,
    MonteCarloConfig,
    RollingOriginConfig,
    VFoldConfig,
    build_resamples,
)
from resamplekit.config import CONFIGS_DIR
from resamplekit.splitters import config_from_dict


class TestConfigFiles:
    def test_default_yaml_files(self):
        assert VFoldConfig.from_yaml().v == 10
        assert BootstrapConfig.from_yaml().times == 25
        assert MonteCarloConfig.from_yaml().prop == 0.75
        assert RollingOriginConfig.from_yaml().cumulative is True
        assert EvaluationConfig.from_yaml().on_error == "raise"

    def test_default_files_ship_with_package(self):
        package_dir = Path(resamplekit.__file__).parent
        assert CONFIGS_DIR == package_dir / "configs"
        for name in ("vfold", "bootstraps", "mc_cv", "rolling_origin", "evaluation"):
            assert (CONFIGS_DIR / f"{name}.yaml").is_file()

    def test_custom_yaml(self, tmp_path):
        path = tmp_path / "vfold.yaml"
        path.write_text(yaml.safe_dump({"v": 4, "repeats": 3, "strata": "cls"}))
        cfg = VFoldConfig.from_yaml(path)
        assert (cfg.v, cfg.repeats, cfg.strata) == (4, 3, "cls")

    def test_invalid_yaml_values(self, tmp_path):
        path = tmp_path / "mc.yaml"
        path.write_text(yaml.safe_dump({"prop": 1.2}))
        with pytest.raises(ConfigurationError, match="MonteCarloConfig"):
            MonteCarloConfig.from_yaml(path)


class TestBuildResamples:
    def test_from_config_model(self, df_100):
        rs = build_resamples(df_100, VFoldConfig(v=4, random_seed=1))
        assert rs.strategy == "vfold_cv"
        assert len(rs) == 4

    def test_from_dict(self, ts_20):
        rs = build_resamples(ts_20, {"strategy": "rolling_origin", "initial": 10, "assess": 5})
        assert rs.strategy == "rolling_origin"
        assert len(rs) == 6

    def test_from_yaml_path(self, df_100, tmp_path):
        path = tmp_path / "boot.yaml"
        path.write_text(yaml.safe_dump({"strategy": "bootstraps", "times": 7, "random_seed": 3}))
        rs = build_resamples(df_100, path)
        assert rs.strategy == "bootstraps"
        assert len(rs) == 7

    def test_default_configs_run(self, df_100):
        for cfg in (VFoldConfig.from_yaml(), BootstrapConfig.from_yaml(), MonteCarloConfig.from_yaml()):
            assert len(build_resamples(df_100, cfg)) > 0

    def test_same_seed_same_resamples(self, df_100):
        a = build_resamples(df_100, MonteCarloConfig(times=3, random_seed=9))
        b = build_resamples(df_100, MonteCarloConfig(times=3, random_seed=9))
        assert all(x.partition == y.partition for x, y in zip(a.splits, b.splits))

    def test_unknown_strategy(self, df_100):
        with pytest.raises(ConfigurationError, match="Unknown strategy"):
            config_from_dict({"strategy": "jackknife"})
        with pytest.raises(ConfigurationError):
            build_resamples(df_100, EvaluationConfig())
