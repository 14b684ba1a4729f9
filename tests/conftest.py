"""Shared fixtures for resampling tests."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def df_100() -> pd.DataFrame:
    """100 rows with an unbalanced three-level class column (63/27/10)."""
    rng = np.random.default_rng(0)
    cls = np.array(["a"] * 63 + ["b"] * 27 + ["c"] * 10)
    rng.shuffle(cls)
    x = rng.normal(size=100)
    return pd.DataFrame({
        "x": x,
        "y": 2.0 * x + rng.normal(scale=0.1, size=100),
        "cls": cls,
    })


@pytest.fixture
def ts_20() -> pd.DataFrame:
    """20 time-ordered rows; `row` is the 1-based row number."""
    return pd.DataFrame({"row": np.arange(1, 21), "value": np.linspace(0.0, 1.0, 20)})
