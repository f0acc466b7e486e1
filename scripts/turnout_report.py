from __future__ import annotations

import logging

from turnout.config.paths import PATHS
from turnout.config.settings import load_config
from turnout.pipeline import run_turnout_report
from turnout.utils.io import read_csv, write_csv, write_json

RAW_IN = PATHS.raw_table
CONFIG_IN = PATHS.report_config
OUT_DIR = PATHS.outputs

RESULTS_OUT = OUT_DIR / "turnout_model_results.csv"
TRAIN_PAIRS_OUT = OUT_DIR / "turnout_train_pairs.csv"
TEST_PAIRS_OUT = OUT_DIR / "turnout_test_pairs.csv"
REPORT_OUT = OUT_DIR / "turnout_report.json"


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    cfg = load_config(CONFIG_IN)
    df = read_csv(RAW_IN)

    report = run_turnout_report(df, cfg)

    write_csv(report.results, RESULTS_OUT)
    write_csv(report.evaluation.train_pairs, TRAIN_PAIRS_OUT)
    write_csv(report.evaluation.test_pairs, TEST_PAIRS_OUT)
    write_json(report.to_dict(), REPORT_OUT)

    for p in (RESULTS_OUT, TRAIN_PAIRS_OUT, TEST_PAIRS_OUT, REPORT_OUT):
        print(f"[OK] wrote: {p}")
    print(report.results.to_string(index=False))
    print("[SELECTED]", report.selection.to_dict())
    print(f"[TEST RMSE] {report.evaluation.test_rmse:.4f}")


if __name__ == "__main__":
    main()
