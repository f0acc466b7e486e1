from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from sklearn.linear_model import LinearRegression
from sklearn.ensemble import RandomForestRegressor
from sklearn.neighbors import KNeighborsRegressor
from sklearn.tree import DecisionTreeRegressor
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

import xgboost as xgb


Protocol = Literal["repeated_cv", "oob"]

FAMILIES = ("linear", "random_forest", "gbm", "knn", "tree")
PROTOCOLS = ("repeated_cv", "oob")

# Lower is simpler. Used by the selector when several models are within tolerance.
FAMILY_RANK = {
    "linear": 0,
    "tree": 1,
    "knn": 2,
    "random_forest": 3,
    "gbm": 4,
}


# Spec

@dataclass(frozen=True)
class ModelSpec:
    name: str
    family: str
    protocol: Protocol = "repeated_cv"
    grid: dict[str, list[Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.family not in FAMILIES:
            raise ValueError(f"Unknown family '{self.family}'. Expected one of {FAMILIES}.")
        if self.protocol not in PROTOCOLS:
            raise ValueError(f"Unknown protocol '{self.protocol}'. Expected one of {PROTOCOLS}.")
        if self.protocol == "oob" and self.family != "random_forest":
            raise ValueError(f"{self.name}: out-of-bag estimation needs a bagged forest, got '{self.family}'.")


def default_model_specs() -> tuple[ModelSpec, ...]:
    return (
        ModelSpec("linear", "linear", "repeated_cv", {"fit_intercept": [True]}),
        # max_features as a fraction so the grid works for any feature count
        ModelSpec("rf_cv", "random_forest", "repeated_cv", {"max_features": [0.33, 0.66, 1.0]}),
        ModelSpec("rf_oob", "random_forest", "oob", {"max_features": [0.33, 0.66, 1.0]}),
        ModelSpec("gbm", "gbm", "repeated_cv", {
            "n_estimators": [50, 100, 150],
            "max_depth": [1, 2, 3],
            "learning_rate": [0.1],
        }),
        ModelSpec("knn", "knn", "repeated_cv", {"reg__n_neighbors": [5, 7, 9]}),
        ModelSpec("tree", "tree", "repeated_cv", {"max_depth": [2, 4, 6, 8]}),
    )


# Estimator builder

def build_estimator(spec: ModelSpec, seed: int, n_trees: int = 250) -> Any:
    """
    Unfitted estimator for a spec. Every stochastic estimator gets `seed`
    as its random_state so repeated runs match exactly.
    """
    if spec.family == "linear":
        return LinearRegression()

    if spec.family == "random_forest":
        return RandomForestRegressor(
            n_estimators=n_trees,
            bootstrap=True,
            oob_score=(spec.protocol == "oob"),
            random_state=seed,
        )

    if spec.family == "gbm":
        return xgb.XGBRegressor(
            objective="reg:squarederror",
            tree_method="hist",
            n_estimators=100,
            learning_rate=0.1,
            max_depth=2,
            random_state=seed,
            n_jobs=1,
        )

    if spec.family == "knn":
        return Pipeline([
            ("scaler", StandardScaler()),
            ("reg", KNeighborsRegressor()),
        ])

    if spec.family == "tree":
        return DecisionTreeRegressor(random_state=seed)

    raise ValueError(f"Unknown family '{spec.family}'.")


# Complexity

def _param(params: dict[str, Any], key: str, default: float = 0.0) -> float:
    # grids may address pipeline steps ("reg__n_neighbors")
    for k, v in params.items():
        if k == key or k.endswith(f"__{key}"):
            return float(v)
    return default


def complexity_key(family: str, params: dict[str, Any]) -> tuple[int, float]:
    """
    (family rank, within-family size). Deeper trees and bigger ensembles are
    more complex; for knn a larger neighbourhood is smoother, hence simpler.
    """
    rank = FAMILY_RANK[family]
    if family == "tree":
        return rank, _param(params, "max_depth")
    if family == "knn":
        return rank, -_param(params, "n_neighbors")
    if family == "random_forest":
        return rank, _param(params, "max_features")
    if family == "gbm":
        return rank, _param(params, "n_estimators") * _param(params, "max_depth", 1.0)
    return rank, 0.0
