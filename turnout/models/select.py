from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from turnout.models.specs import complexity_key
from turnout.models.train import FittedModel

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    chosen: FittedModel
    best_name: str
    best_rmse: float
    std: float
    band: tuple[float, float]
    candidates: tuple[str, ...]
    # OOB models are compared on their point estimate against a CV-derived band
    note: str = "one-SD rule: heuristic, not a formal test"

    def to_dict(self) -> dict[str, Any]:
        return {
            "chosen": self.chosen.name,
            "best_model": self.best_name,
            "best_rmse": self.best_rmse,
            "std": self.std,
            "band": list(self.band),
            "candidates": list(self.candidates),
            "note": self.note,
        }


def select_model(models: Iterable[FittedModel], tolerance: float = 1.0) -> Selection:
    """
    Pick the simplest model whose RMSE is within `tolerance` standard
    deviations of the best repeated-CV model.

    The standard deviation is the sample std of the best model's
    per-resample RMSE. Any model, whichever protocol produced it, is a
    candidate when its RMSE is at most the band's upper edge. Among
    candidates the lowest complexity key wins; ties go to the model
    trained first.
    """
    models = sorted(models, key=lambda m: m.order)
    cv_models = [m for m in models if m.resample_rmse is not None]
    if not cv_models:
        raise ValueError("No repeated-CV model to anchor the tolerance band.")

    best = min(cv_models, key=lambda m: (m.rmse, m.order))
    std = best.rmse_std or 0.0
    upper = best.rmse + tolerance * std

    candidates = [m for m in models if m.rmse <= upper]
    chosen = min(candidates, key=lambda m: (complexity_key(m.family, m.best_params), m.order))

    log.info(
        "best=%s rmse=%.4f std=%.4f band=[%.4f, %.4f] candidates=%s chosen=%s",
        best.name, best.rmse, std, best.rmse, upper, [m.name for m in candidates], chosen.name,
    )
    return Selection(
        chosen=chosen,
        best_name=best.name,
        best_rmse=best.rmse,
        std=std,
        band=(best.rmse, upper),
        candidates=tuple(m.name for m in candidates),
    )
