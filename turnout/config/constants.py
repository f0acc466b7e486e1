from __future__ import annotations

# --- Run defaults ---
RND = 42
TRAIN_YEAR = 2012
TEST_YEAR = 2016

# --- Key / target columns ---
KEY_COLS = ["state", "county"]
TARGET_COL = "turnout"

# Covariates in the harmonized tables. Order is the model input order.
PERCENT_COVARIATES = [
    # Race / ethnicity
    "pct_white",
    "pct_black",
    "pct_hispanic",
    "pct_asian",
    "pct_native",

    # Age / sex
    "pct_female",
    "pct_age_18_29",
    "pct_age_65_plus",

    # Education
    "pct_high_school",
    "pct_bachelors",

    # Economic
    "pct_unemployed",
    "pct_poverty",
    "pct_uninsured",
    "pct_foreign_born",
]

# Dollars, never rescaled.
INCOME_COL = "median_income"

COVARIATES = PERCENT_COVARIATES + [INCOME_COL]


# --- Column rename maps (raw combined table -> canonical) ---
# 2012 columns are year-suffixed proportions.
TRAIN_RENAME = {f"{c}_2012": c for c in COVARIATES}
TRAIN_RENAME[f"{TARGET_COL}_2012"] = TARGET_COL

# 2016 covariates are already canonical percentages; only the outcome is suffixed.
TEST_RENAME = {c: c for c in COVARIATES}
TEST_RENAME[f"{TARGET_COL}_2016"] = TARGET_COL

PERCENT_UNITS = "percent"

# Multiplier that brings each year's raw percentage columns to percent.
TRAIN_SOURCE_SCALE = 100.0   # 2012 sources are proportions
TEST_SOURCE_SCALE = 1.0      # 2016 sources are already percent
