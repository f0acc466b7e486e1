from __future__ import annotations
import pandas as pd

from turnout.errors import SchemaMismatch, UnitAmbiguity

def require_columns(df: pd.DataFrame, cols: list[str], name: str = "df") -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise SchemaMismatch(f"{name} missing columns: {missing}")

def require_no_nulls(df: pd.DataFrame, cols: list[str], name: str = "df") -> None:
    bad = [c for c in cols if df[c].isna().any()]
    if bad:
        raise SchemaMismatch(f"{name} has nulls in columns: {bad}")

def require_within(
    df: pd.DataFrame,
    cols: list[str],
    lower: float | None = None,
    upper: float | None = None,
    name: str = "df",
) -> None:
    """
    Raise UnitAmbiguity naming every column with a value outside [lower, upper].
    Either bound may be None (open).
    """
    bad = []
    for c in cols:
        s = df[c]
        if lower is not None and (s < lower).any():
            bad.append(c)
        elif upper is not None and (s > upper).any():
            bad.append(c)
    if bad:
        raise UnitAmbiguity(f"{name} has values outside [{lower}, {upper}] in columns: {bad}")
