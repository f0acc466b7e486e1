from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from turnout.config.constants import KEY_COLS
from turnout.errors import SchemaMismatch
from turnout.features.harmonize import Dataset
from turnout.models.train import FittedModel

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Evaluation:
    model_name: str
    train_rmse: float
    test_rmse: float
    train_pairs: pd.DataFrame
    test_pairs: pd.DataFrame


def rmse(actual: np.ndarray, predicted: np.ndarray) -> float:
    resid = np.asarray(actual, dtype=float) - np.asarray(predicted, dtype=float)
    return float(np.sqrt(np.mean(resid ** 2)))


def check_schema(model: FittedModel, ds: Dataset) -> None:
    """
    The dataset must carry exactly the model's covariates, in order, in the
    same units, with every column present in the frame.
    """
    if tuple(ds.features) != tuple(model.features):
        missing = [c for c in model.features if c not in ds.features]
        extra = [c for c in ds.features if c not in model.features]
        raise SchemaMismatch(
            f"{ds.year} features differ from model '{model.name}': missing={missing} extra={extra}"
        )
    if ds.units != model.units:
        raise SchemaMismatch(f"{ds.year} units '{ds.units}' != model units '{model.units}'")
    absent = [c for c in list(model.features) + [ds.target] if c not in ds.frame.columns]
    if absent:
        raise SchemaMismatch(f"{ds.year} frame missing columns: {absent}")


def actual_vs_predicted(model: FittedModel, ds: Dataset) -> pd.DataFrame:
    check_schema(model, ds)
    keys = [c for c in KEY_COLS if c in ds.frame.columns]
    out = ds.frame[keys].copy()
    out["actual"] = ds.y.to_numpy()
    out["predicted"] = model.predict(ds.frame)
    return out.reset_index(drop=True)


def evaluate_model(model: FittedModel, train: Dataset, test: Dataset) -> Evaluation:
    """
    Score the chosen model on the held-out year; also return the in-sample
    pairs so the two years can be compared side by side.
    """
    check_schema(model, test)
    test_pairs = actual_vs_predicted(model, test)
    train_pairs = actual_vs_predicted(model, train)

    out = Evaluation(
        model_name=model.name,
        train_rmse=rmse(train_pairs["actual"], train_pairs["predicted"]),
        test_rmse=rmse(test_pairs["actual"], test_pairs["predicted"]),
        train_pairs=train_pairs,
        test_pairs=test_pairs,
    )
    log.info("%s: train rmse %.4f, test rmse %.4f", model.name, out.train_rmse, out.test_rmse)
    return out
