from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Any

import numpy as np

from turnout.features.harmonize import Dataset

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnoutSummary:
    n: int
    mean: float
    median: float
    min: float
    max: float
    n_over_100: int
    prop_over_100: float
    prop_50_70: float
    bin_edges: tuple[float, ...]
    bin_counts: tuple[int, ...]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_turnout(ds: Dataset, bins: int = 20) -> TurnoutSummary:
    """
    Distribution of the outcome for the narrative part of the report.
    Values above 100 are counted, not removed.
    """
    y = ds.y.to_numpy(dtype=float)
    if len(y) == 0:
        raise ValueError("Cannot summarize an empty dataset.")

    over = y > 100.0
    mid = (y > 50.0) & (y < 70.0)
    counts, edges = np.histogram(y, bins=bins)

    out = TurnoutSummary(
        n=int(len(y)),
        mean=float(np.mean(y)),
        median=float(np.median(y)),
        min=float(np.min(y)),
        max=float(np.max(y)),
        n_over_100=int(over.sum()),
        prop_over_100=float(over.mean()),
        prop_50_70=float(mid.mean()),
        bin_edges=tuple(float(e) for e in edges),
        bin_counts=tuple(int(c) for c in counts),
    )
    log.info(
        "turnout %d: mean %.2f, median %.2f, range [%.2f, %.2f], %d counties above 100, %.1f%% in (50, 70)",
        ds.year, out.mean, out.median, out.min, out.max, out.n_over_100, 100 * out.prop_50_70,
    )
    return out
