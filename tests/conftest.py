""" Shared fixtures: synthetic county tables and small, fast run configs. """
import numpy as np
import pandas as pd
import pytest

from turnout.config.constants import INCOME_COL, PERCENT_COVARIATES
from turnout.config.settings import ReportConfig
from turnout.features.harmonize import Dataset
from turnout.models.specs import ModelSpec


def make_combined_table(n=120, seed=0):
    """
    Raw combined table in the source layout:
        * 2012 covariates suffixed ``_2012`` and stored as proportions
        * 2016 covariates unsuffixed and stored as percentages
        * ``turnout_2012`` a proportion (a few counties above 1)
        * ``turnout_2016`` a percentage
    """
    rng = np.random.default_rng(seed)
    df = pd.DataFrame({
        "state": [f"state{i % 7}" for i in range(n)],
        "county": [f"county{i}" for i in range(n)],
    })
    for c in PERCENT_COVARIATES:
        p12 = rng.uniform(0.02, 0.6, n)
        df[f"{c}_2012"] = p12
        df[c] = np.clip(p12 * 100 + rng.normal(0, 1.0, n), 0, 100)
    income = rng.uniform(25_000, 90_000, n)
    df[f"{INCOME_COL}_2012"] = income
    df[INCOME_COL] = income * 1.05

    base = 0.45 + 0.3 * df["pct_bachelors_2012"] - 0.2 * df["pct_poverty_2012"]
    df["turnout_2012"] = base + rng.normal(0, 0.03, n)
    df.loc[:1, "turnout_2012"] = [1.03, 1.08]
    df["turnout_2016"] = (base + rng.normal(0, 0.03, n)) * 100
    return df


def make_linear_dataset(n=3000, noise_sd=2.0, seed=7):
    """ turnout = 50 + 0.1 * covariate1 - 0.05 * covariate2 + N(0, noise_sd) """
    rng = np.random.default_rng(seed)
    x1 = rng.uniform(0, 100, n)
    x2 = rng.uniform(0, 100, n)
    frame = pd.DataFrame({
        "state": ["s"] * n,
        "county": [f"c{i}" for i in range(n)],
        "turnout": 50 + 0.1 * x1 - 0.05 * x2 + rng.normal(0, noise_sd, n),
        "covariate1": x1,
        "covariate2": x2,
    })
    return Dataset(year=2012, frame=frame, features=("covariate1", "covariate2"))


SMALL_SPECS = (
    ModelSpec("linear", "linear", "repeated_cv", {"fit_intercept": [True]}),
    ModelSpec("rf_cv", "random_forest", "repeated_cv", {"max_features": [0.5, 1.0]}),
    ModelSpec("rf_oob", "random_forest", "oob", {"max_features": [0.5, 1.0]}),
    ModelSpec("gbm", "gbm", "repeated_cv", {"n_estimators": [20, 40], "max_depth": [2], "learning_rate": [0.1]}),
    ModelSpec("knn", "knn", "repeated_cv", {"reg__n_neighbors": [5, 9]}),
    ModelSpec("tree", "tree", "repeated_cv", {"max_depth": [2, 4]}),
)


@pytest.fixture
def combined_raw():
    return make_combined_table()


@pytest.fixture
def small_cfg():
    return ReportConfig(seed=11, n_splits=3, n_repeats=2, n_trees=25, model_specs=SMALL_SPECS)


@pytest.fixture(scope='module')
def linear_dataset():
    return make_linear_dataset()


@pytest.fixture
def tiny_linear_dataset():
    return make_linear_dataset(n=20)
