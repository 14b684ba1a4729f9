"""Tests for the split evaluation driver and result summaries."""

from __future__ import annotations

import threading
import time

import numpy as np
import pandas as pd
import pytest
from sklearn.linear_model import LinearRegression

from resamplekit import (
    EvaluationConfig,
    SplitEvaluationError,
    SplitFailure,
    SplitId,
    bootstraps,
    evaluate,
    evaluate_column,
    map_column,
    map_splits,
    rolling_origin,
    summarize_column,
    vfold_cv,
)
from resamplekit.errors import ConfigurationError
from resamplekit.evaluation import oob_sizes, scalar_value, simplify_results


def _first_assessed_row(split):
    return int(split.partition.assessment[0])


def _fit_and_score(split, feature="x", target="y"):
    """Fit on analysis rows, report RMSE on assessment rows."""
    train = split.analysis_table()
    test = split.assessment_table()
    model = LinearRegression().fit(train[[feature]], train[target])
    pred = model.predict(test[[feature]])
    rmse = float(np.sqrt(np.mean((test[target].to_numpy() - pred) ** 2)))
    return {
        "coef": float(model.coef_[0]),
        "rmse": rmse,
        "predictions": pd.DataFrame({"row": test.index, ".pred": pred}),
    }


class TestMapSplits:
    def test_results_follow_split_order(self, ts_20):
        rs = rolling_origin(ts_20, initial=5, assess=1)
        assert map_splits(rs, _first_assessed_row) == list(range(5, 20))

    def test_extra_arguments(self, df_100):
        rs = vfold_cv(df_100, v=5, random_seed=0)
        results = map_splits(rs, _fit_and_score, "x", target="y")
        assert len(results) == 5
        assert all(r["coef"] == pytest.approx(2.0, abs=0.1) for r in results)

    def test_simplify(self, ts_20):
        rs = rolling_origin(ts_20, initial=5, assess=1)
        flat = map_splits(rs, lambda s: [s.n_analysis], simplify=True)
        assert isinstance(flat, np.ndarray)
        assert flat.tolist() == list(range(5, 20))

    def test_simplify_keeps_non_scalar(self, ts_20):
        rs = rolling_origin(ts_20, initial=5, assess=2)
        out = map_splits(rs, lambda s: s.partition.assessment.copy(), simplify=True)
        assert isinstance(out, list)
        assert out[0].tolist() == [5, 6]

    def test_threaded_order_matches_sequential(self, ts_20):
        rs = rolling_origin(ts_20, initial=5, assess=1)
        n = len(rs)
        threads = set()

        def slow_first(split):
            threads.add(threading.get_ident())
            # Earlier splits finish later
            time.sleep(0.002 * (n - split.n_analysis + 5))
            return _first_assessed_row(split)

        out = map_splits(rs, slow_first, n_jobs=4, simplify=True)
        assert out.tolist() == map_splits(rs, _first_assessed_row)
        assert len(threads) > 1

    def test_config_defaults_and_overrides(self, ts_20):
        rs = rolling_origin(ts_20, initial=5, assess=1)
        cfg = EvaluationConfig(simplify=True, n_jobs=2)
        assert isinstance(map_splits(rs, lambda s: s.n_analysis, cfg=cfg), np.ndarray)
        assert isinstance(
            map_splits(rs, lambda s: s.n_analysis, cfg=cfg, simplify=False), list
        )

    def test_invalid_options(self, ts_20):
        rs = rolling_origin(ts_20)
        with pytest.raises(ConfigurationError):
            map_splits(rs, _first_assessed_row, on_error="ignore")
        with pytest.raises(ConfigurationError):
            map_splits(rs, _first_assessed_row, n_jobs=0)


class TestFailures:
    @staticmethod
    def _fails_on_eight(split):
        if _first_assessed_row(split) == 8:
            raise ZeroDivisionError("boom")
        return _first_assessed_row(split)

    @pytest.mark.parametrize("n_jobs", [1, 3])
    def test_fail_fast_names_split(self, ts_20, n_jobs):
        rs = rolling_origin(ts_20, initial=5, assess=1)
        with pytest.raises(SplitEvaluationError) as exc_info:
            map_splits(rs, self._fails_on_eight, n_jobs=n_jobs)
        assert exc_info.value.split_id == SplitId("Slice04")
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)
        assert "Slice04" in str(exc_info.value)

    @pytest.mark.parametrize("n_jobs", [1, 3])
    def test_record_mode_keeps_other_results(self, ts_20, n_jobs):
        rs = rolling_origin(ts_20, initial=5, assess=1)
        out = map_splits(rs, self._fails_on_eight, on_error="record", simplify=True, n_jobs=n_jobs)
        assert isinstance(out, list)
        failure = out[3]
        assert isinstance(failure, SplitFailure)
        assert failure.split_id == SplitId("Slice04")
        assert isinstance(failure.error, ZeroDivisionError)
        assert [r for i, r in enumerate(out) if i != 3] == [5, 6, 7] + list(range(9, 20))

    def test_failure_markers_pass_through_map_column(self, ts_20):
        rs = rolling_origin(ts_20, initial=5, assess=1)
        rs = evaluate(rs, self._fails_on_eight, "first", on_error="record")
        doubled = map_column(rs, "first", lambda v: v * 2)
        assert isinstance(doubled[3], SplitFailure)
        assert doubled[0] == 10

    @staticmethod
    def _field_missing_on_slice04(ts_20):
        rs = rolling_origin(ts_20, initial=5, assess=1)
        results = [{"a": 1}] * len(rs)
        results[3] = {"b": 2}
        return rs.attach("res", results)

    @pytest.mark.parametrize("n_jobs", [1, 3])
    def test_missing_field_recorded(self, ts_20, n_jobs):
        rs = self._field_missing_on_slice04(ts_20)
        out = map_column(rs, "res", lambda v: v, field="a", on_error="record", n_jobs=n_jobs)
        assert isinstance(out[3], SplitFailure)
        assert out[3].split_id == SplitId("Slice04")
        assert isinstance(out[3].error, KeyError)
        assert [r for i, r in enumerate(out) if i != 3] == [1] * (len(rs) - 1)

    def test_missing_field_raises_with_split_id(self, ts_20):
        rs = self._field_missing_on_slice04(ts_20)
        with pytest.raises(SplitEvaluationError) as exc_info:
            map_column(rs, "res", lambda v: v, field="a")
        assert exc_info.value.split_id == SplitId("Slice04")
        assert isinstance(exc_info.value.__cause__, KeyError)


class TestEvaluateAndSummaries:
    def test_evaluate_then_field(self, df_100):
        rs = vfold_cv(df_100, v=5, random_seed=1)
        rs = evaluate(rs, _fit_and_score, "fit")
        assert rs.column_names == ["fit"]

        coefs = map_column(rs, "fit", lambda c: c, field="coef", simplify=True)
        assert isinstance(coefs, np.ndarray)
        assert coefs.shape == (5,)

        rs = evaluate_column(
            rs, "fit", lambda preds: len(preds), "n_pred", field="predictions", simplify=True
        )
        assert rs.column("n_pred").tolist() == [s.n_assessment for s in rs.splits]

    def test_round_trip_preserves_order(self, df_100):
        rs = bootstraps(df_100, times=10, random_seed=5)
        rs = evaluate(rs, lambda s: s.n_assessment, "oob", simplify=True)
        frame = rs.to_frame()
        assert frame["id"].tolist() == [str(i) for i in rs.ids]
        assert frame["oob"].tolist() == oob_sizes(rs).tolist()

    def test_summarize_column(self, df_100):
        rs = vfold_cv(df_100, v=5, random_seed=1)
        rs = evaluate(rs, lambda s: _fit_and_score(s)["rmse"], "rmse", simplify=True)
        summary = summarize_column(rs, "rmse")
        values = rs.column("rmse")
        assert summary["mean"] == pytest.approx(np.mean(values))
        assert summary["std"] == pytest.approx(np.std(values))
        assert summary["q2.5"] <= summary["mean"] <= summary["q97.5"]
        assert summary["n"] == 5
        assert summary["n_failed"] == 0

    def test_summarize_skips_failures(self, ts_20):
        rs = rolling_origin(ts_20, initial=5, assess=1)
        rs = evaluate(rs, TestFailures._fails_on_eight, "first", on_error="record")
        summary = summarize_column(rs, "first")
        assert summary["n"] == 14
        assert summary["n_failed"] == 1

    def test_summarize_rejects_non_scalar(self, ts_20):
        rs = rolling_origin(ts_20, initial=5, assess=2)
        rs = rs.attach("pair", [[1, 2]] * len(rs))
        with pytest.raises(ConfigurationError, match="non-scalar"):
            summarize_column(rs, "pair")


class TestScalarHelpers:
    @pytest.mark.parametrize("value,expected", [
        (3, 3),
        (2.5, 2.5),
        (np.float64(1.5), 1.5),
        (np.array(4.0), 4.0),
        ([7], 7),
        (np.array([[9.0]]), 9.0),
        (pd.Series([6]), 6),
        (pd.DataFrame({"a": [8]}), 8),
    ])
    def test_scalar_values(self, value, expected):
        is_scalar, unwrapped = scalar_value(value)
        assert is_scalar
        assert unwrapped == expected

    @pytest.mark.parametrize("value", ["text", [1, 2], np.arange(3), {"a": 1}, None])
    def test_non_scalar_values(self, value):
        assert not scalar_value(value)[0]

    def test_simplify_results(self):
        assert simplify_results([[1], 2, np.array([3])]).tolist() == [1, 2, 3]
        assert simplify_results([1, "a"]) == [1, "a"]
