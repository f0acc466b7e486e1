from __future__ import annotations

import logging

from turnout.config.paths import PATHS
from turnout.features.harmonize import harmonize
from turnout.utils.io import read_csv, write_csv

# Paths
RAW_IN = PATHS.raw_table
TRAIN_OUT = PATHS.processed / "turnout_train_2012.csv"
TEST_OUT = PATHS.processed / "turnout_test_2016.csv"


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    df = read_csv(RAW_IN)
    train, test = harmonize(df)

    write_csv(train.frame, TRAIN_OUT)
    write_csv(test.frame, TEST_OUT)

    print(f"[OK] wrote: {TRAIN_OUT} ({len(train)} rows)")
    print(f"[OK] wrote: {TEST_OUT} ({len(test)} rows)")


if __name__ == "__main__":
    main()
