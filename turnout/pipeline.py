from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import pandas as pd

from turnout.config.settings import ReportConfig
from turnout.features.describe import TurnoutSummary, summarize_turnout
from turnout.features.harmonize import Dataset, harmonize
from turnout.models.evaluate import Evaluation, evaluate_model
from turnout.models.select import Selection, select_model
from turnout.models.train import ModelRegistry, train_models

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnoutReport:
    config: ReportConfig
    train: Dataset
    test: Dataset
    summary: TurnoutSummary
    registry: ModelRegistry
    selection: Selection
    evaluation: Evaluation

    @property
    def results(self) -> pd.DataFrame:
        return self.registry.results_table()

    def to_dict(self) -> dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "n_train": len(self.train),
            "n_test": len(self.test),
            "turnout_summary": self.summary.to_dict(),
            "results": self.results.to_dict(orient="records"),
            "selection": self.selection.to_dict(),
            "train_rmse": self.evaluation.train_rmse,
            "test_rmse": self.evaluation.test_rmse,
        }


def run_turnout_report(df_combined: pd.DataFrame, cfg: ReportConfig = ReportConfig()) -> TurnoutReport:
    """
    Harmonize -> summarize -> train -> select -> evaluate, in that order.
    Any stage failure propagates; nothing partial is returned.
    """
    train, test = harmonize(df_combined)
    summary = summarize_turnout(train, bins=cfg.hist_bins)

    registry = train_models(train, cfg)
    selection = select_model(registry, tolerance=cfg.tolerance)
    evaluation = evaluate_model(selection.chosen, train, test)

    return TurnoutReport(
        config=cfg,
        train=train,
        test=test,
        summary=summary,
        registry=registry,
        selection=selection,
        evaluation=evaluation,
    )
