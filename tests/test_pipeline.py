""" End-to-end tests for turnout.pipeline. """
import json

import pytest

from turnout.config.settings import ReportConfig
from turnout.errors import InsufficientData, SchemaMismatch
from turnout.models.evaluate import evaluate_model
from turnout.models.select import select_model
from turnout.models.specs import ModelSpec, default_model_specs
from turnout.models.train import train_models
from turnout.pipeline import run_turnout_report
from turnout.utils.io import write_json


def test_full_run(combined_raw, small_cfg, tmp_path):
    report = run_turnout_report(combined_raw, small_cfg)

    assert len(report.results) == 6
    assert report.selection.chosen.name in report.registry.names
    assert report.selection.chosen.name in report.selection.candidates
    assert report.selection.best_name in report.selection.candidates
    assert len(report.evaluation.test_pairs) == len(report.test)
    assert report.summary.n_over_100 == 2
    assert report.evaluation.test_rmse > 0

    out = write_json(report.to_dict(), tmp_path / "report.json")
    loaded = json.loads(out.read_text(encoding="utf-8"))
    assert loaded["selection"]["chosen"] == report.selection.chosen.name
    assert len(loaded["results"]) == 6


def test_repeatable(combined_raw, small_cfg):
    a = run_turnout_report(combined_raw, small_cfg)
    b = run_turnout_report(combined_raw, small_cfg)
    assert list(a.results["RMSE"]) == pytest.approx(list(b.results["RMSE"]), rel=1e-12)
    assert a.selection.chosen.name == b.selection.chosen.name
    assert a.evaluation.test_rmse == pytest.approx(b.evaluation.test_rmse, rel=1e-12)


def test_linear_scenario_selects_linear(linear_dataset):
    specs = (
        default_model_specs()[0],
        ModelSpec("tree", "tree", "repeated_cv", {"max_depth": [2, 4]}),
        ModelSpec("knn", "knn", "repeated_cv", {"reg__n_neighbors": [9]}),
    )
    cfg = ReportConfig(model_specs=specs)
    registry = train_models(linear_dataset, cfg)

    assert registry["linear"].rmse == pytest.approx(2.0, abs=0.1)
    sel = select_model(registry, tolerance=cfg.tolerance)
    assert sel.chosen.name == "linear"

    ev = evaluate_model(sel.chosen, linear_dataset, linear_dataset)
    assert ev.test_rmse == pytest.approx(ev.train_rmse)


def test_schema_error_aborts(combined_raw, small_cfg):
    with pytest.raises(SchemaMismatch):
        run_turnout_report(combined_raw.drop(columns=["pct_native"]), small_cfg)


def test_too_few_rows_aborts(combined_raw):
    with pytest.raises(InsufficientData):
        run_turnout_report(combined_raw.head(12), ReportConfig(n_splits=10))
