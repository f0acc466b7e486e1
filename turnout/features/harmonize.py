from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from turnout.config.constants import (
    COVARIATES,
    KEY_COLS,
    PERCENT_COVARIATES,
    PERCENT_UNITS,
    TARGET_COL,
    TEST_RENAME,
    TEST_SOURCE_SCALE,
    TEST_YEAR,
    TRAIN_RENAME,
    TRAIN_SOURCE_SCALE,
    TRAIN_YEAR,
)
from turnout.errors import SchemaMismatch
from turnout.utils.validate import require_columns, require_no_nulls, require_within

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dataset:
    """
    One election year's county table: keys, `turnout`, and the covariates
    named in `features` (model input order). Treated as read-only.
    """
    year: int
    frame: pd.DataFrame
    features: tuple[str, ...]
    target: str = TARGET_COL
    units: str = PERCENT_UNITS

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def X(self) -> pd.DataFrame:
        return self.frame[list(self.features)]

    @property
    def y(self) -> pd.Series:
        return self.frame[self.target].astype(float)


def _resolve_sources(df: pd.DataFrame, rename: dict[str, str], name: str) -> tuple[dict[str, str], bool]:
    """
    Map source -> canonical column, and report whether the table was read by
    canonical names. A table carrying none of the renamed (year-suffixed)
    sources is taken as already harmonized; sources and canonical names are
    never mixed.
    """
    renamed = [src for src, dst in rename.items() if src != dst]
    harmonized = bool(renamed) and not any(src in df.columns for src in renamed)

    picked = {dst: dst for dst in rename.values()} if harmonized else dict(rename)
    missing = [src for src in picked if src not in df.columns]
    if missing:
        raise SchemaMismatch(f"{name} missing columns: {missing}")
    return picked, harmonized


def is_proportion_scale(df: pd.DataFrame, cols: list[str] = PERCENT_COVARIATES) -> bool:
    """
    True when every percentage covariate fits in [0, 1]. Turnout is left out of
    the check because a proportion turnout can legitimately exceed 1.
    """
    return bool((df[cols].max() <= 1.0).all())


def harmonize_year(
    df: pd.DataFrame,
    rename: dict[str, str],
    year: int,
    source_scale: float = 1.0,
    name: str | None = None,
) -> Dataset:
    """
    Select, rename and rescale one year's columns into the canonical schema.

    Raw sources are always multiplied by `source_scale`. A table read by its
    canonical names is only rescaled when it still looks like proportions, so
    running this again on its own output changes nothing.
    """
    name = name or f"table_{year}"
    require_columns(df, KEY_COLS, name=name)
    picked, harmonized = _resolve_sources(df, rename, name)

    out = df[KEY_COLS + list(picked)].rename(columns=picked).copy()
    out = out[KEY_COLS + [TARGET_COL] + COVARIATES]

    model_cols = [TARGET_COL] + COVARIATES
    require_no_nulls(out, model_cols, name=name)

    if harmonized:
        scale = 100.0 if is_proportion_scale(out) else 1.0
    else:
        scale = source_scale
    if scale != 1.0:
        scaled = PERCENT_COVARIATES + [TARGET_COL]
        out[scaled] = out[scaled].astype(float) * scale
        log.info("%s: percentage columns scaled by %g", name, scale)

    require_within(out, PERCENT_COVARIATES, lower=0.0, upper=100.0, name=name)
    # turnout > 100 is a known denominator artifact; only negatives are rejected
    require_within(out, [TARGET_COL], lower=0.0, name=name)

    return Dataset(year=year, frame=out.reset_index(drop=True), features=tuple(COVARIATES))


def harmonize(df_combined: pd.DataFrame) -> tuple[Dataset, Dataset]:
    """
    Split the combined county table into the training-year and test-year
    Datasets with identical covariate names and units.
    """
    train = harmonize_year(df_combined, TRAIN_RENAME, TRAIN_YEAR, TRAIN_SOURCE_SCALE, name=f"train_{TRAIN_YEAR}")
    test = harmonize_year(df_combined, TEST_RENAME, TEST_YEAR, TEST_SOURCE_SCALE, name=f"test_{TEST_YEAR}")
    log.info("harmonized %d training rows, %d test rows", len(train), len(test))
    return train, test
