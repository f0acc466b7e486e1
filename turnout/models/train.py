from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np
import pandas as pd

from sklearn.model_selection import GridSearchCV, ParameterGrid, RepeatedKFold
from sklearn.metrics import mean_squared_error

from turnout.config.settings import ReportConfig
from turnout.errors import InsufficientData
from turnout.features.harmonize import Dataset
from turnout.models.specs import ModelSpec, build_estimator

log = logging.getLogger(__name__)


# -----------------------------
# Types
# -----------------------------
@dataclass(frozen=True)
class FittedModel:
    name: str
    family: str
    protocol: str
    estimator: Any
    features: tuple[str, ...]
    best_params: dict[str, Any]
    rmse: float
    resample_rmse: tuple[float, ...] | None = None
    units: str = "percent"
    order: int = 0

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        return np.asarray(self.estimator.predict(X[list(self.features)]), dtype=float)

    @property
    def rmse_std(self) -> float | None:
        if not self.resample_rmse or len(self.resample_rmse) < 2:
            return None
        return float(np.std(self.resample_rmse, ddof=1))


class ModelRegistry:
    """ Ordered, read-only collection of the models fitted in one run. """

    def __init__(self, models: list[FittedModel] | tuple[FittedModel, ...]):
        self._models = tuple(models)

    def __iter__(self) -> Iterator[FittedModel]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)

    def __getitem__(self, name: str) -> FittedModel:
        for m in self._models:
            if m.name == name:
                return m
        raise KeyError(name)

    @property
    def names(self) -> list[str]:
        return [m.name for m in self._models]

    def results_table(self) -> pd.DataFrame:
        return results_table(self)


# -----------------------------
# Helpers
# -----------------------------
def _rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    return float(np.sqrt(mean_squared_error(y_true, y_pred)))


def _clean_params(params: dict[str, Any]) -> dict[str, Any]:
    # numpy scalars -> python, so the table and JSON output stay plain
    return {k: (v.item() if hasattr(v, "item") else v) for k, v in params.items()}


def check_enough_rows(n_rows: int, cfg: ReportConfig) -> None:
    need = cfg.n_splits * cfg.min_rows_per_fold
    if n_rows < need:
        raise InsufficientData(
            f"{n_rows} training rows cannot form {cfg.n_splits} folds "
            f"of at least {cfg.min_rows_per_fold} rows (need {need})."
        )


# -----------------------------
# Resampling protocols
# -----------------------------
def _fit_repeated_cv(
    spec: ModelSpec,
    X: pd.DataFrame,
    y: np.ndarray,
    cfg: ReportConfig,
    seed: int,
) -> tuple[Any, dict[str, Any], float, tuple[float, ...]]:
    cv = RepeatedKFold(n_splits=cfg.n_splits, n_repeats=cfg.n_repeats, random_state=seed)
    gs = GridSearchCV(
        estimator=build_estimator(spec, seed=seed, n_trees=cfg.n_trees),
        param_grid=spec.grid or {},
        scoring="neg_root_mean_squared_error",
        cv=cv,
        n_jobs=cfg.n_jobs,
        refit=True,
        error_score="raise",
    )
    gs.fit(X, y)

    n_resamples = cfg.n_splits * cfg.n_repeats
    best = gs.best_index_
    per_resample = tuple(
        float(-gs.cv_results_[f"split{i}_test_score"][best]) for i in range(n_resamples)
    )
    return gs.best_estimator_, _clean_params(gs.best_params_), float(np.mean(per_resample)), per_resample


def _fit_oob(
    spec: ModelSpec,
    X: pd.DataFrame,
    y: np.ndarray,
    cfg: ReportConfig,
    seed: int,
) -> tuple[Any, dict[str, Any], float, None]:
    """
    One bagged fit per grid point; the error is taken from out-of-bag
    predictions, so there is a single aggregate value and no resample spread.
    """
    best_est, best_params, best_rmse = None, {}, np.inf
    for params in ParameterGrid(spec.grid or {}):
        est = build_estimator(spec, seed=seed, n_trees=cfg.n_trees).set_params(**params)
        est.fit(X, y)
        rmse = _rmse(y, est.oob_prediction_)
        if rmse < best_rmse:
            best_est, best_params, best_rmse = est, params, rmse
    return best_est, _clean_params(best_params), float(best_rmse), None


# -----------------------------
# Main
# -----------------------------
def fit_model(spec: ModelSpec, train: Dataset, cfg: ReportConfig, seed: int, order: int = 0) -> FittedModel:
    """
    Fit one spec with its own seeded resampling state.
    """
    check_enough_rows(len(train), cfg)

    X = train.X
    y = train.y.to_numpy()

    if spec.protocol == "oob":
        est, params, rmse, per_resample = _fit_oob(spec, X, y, cfg, seed)
    else:
        est, params, rmse, per_resample = _fit_repeated_cv(spec, X, y, cfg, seed)

    log.info("[%s] %s rmse=%.4f params=%s", spec.protocol, spec.name, rmse, params)
    return FittedModel(
        name=spec.name,
        family=spec.family,
        protocol=spec.protocol,
        estimator=est,
        features=train.features,
        best_params=params,
        rmse=rmse,
        resample_rmse=per_resample,
        units=train.units,
        order=order,
    )


def train_models(
    train: Dataset,
    cfg: ReportConfig = ReportConfig(),
    specs: tuple[ModelSpec, ...] | None = None,
) -> ModelRegistry:
    """
    Fit every configured model on the training Dataset. Each fit restarts
    from `cfg.seed`, so all repeated-CV models see the same partitions.
    """
    specs = cfg.model_specs if specs is None else specs
    check_enough_rows(len(train), cfg)

    fitted = []
    for i, spec in enumerate(specs):
        fitted.append(fit_model(spec, train, cfg, seed=cfg.seed, order=i))
        log.info("[model %d/%d] %s done", i + 1, len(specs), spec.name)
    return ModelRegistry(fitted)


def results_table(models: ModelRegistry | list[FittedModel]) -> pd.DataFrame:
    rows = []
    for m in models:
        rows.append({
            "Model": m.name,
            "Validation": "Repeated CV" if m.protocol == "repeated_cv" else "OOB",
            "Hyperparameters": ", ".join(f"{k}={v}" for k, v in m.best_params.items()),
            "RMSE": m.rmse,
        })
    return pd.DataFrame(rows, columns=["Model", "Validation", "Hyperparameters", "RMSE"])
