from __future__ import annotations

from dataclasses import dataclass, field, fields, asdict, replace
from pathlib import Path
from typing import Any

import yaml

from turnout.config.constants import RND
from turnout.models.specs import ModelSpec, default_model_specs


@dataclass(frozen=True)
class ReportConfig:
    seed: int = RND
    n_splits: int = 10
    n_repeats: int = 5
    tolerance: float = 1.0          # multiples of the best model's resample std
    min_rows_per_fold: int = 2
    n_trees: int = 250              # forest size for both random-forest variants
    n_jobs: int | None = None       # grid-search parallelism; None = sequential
    hist_bins: int = 20
    model_specs: tuple[ModelSpec, ...] = field(default_factory=default_model_specs)

    def __post_init__(self) -> None:
        if self.n_splits < 2:
            raise ValueError(f"n_splits must be >= 2, got {self.n_splits}")
        if self.n_repeats < 1:
            raise ValueError(f"n_repeats must be >= 1, got {self.n_repeats}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {self.tolerance}")
        names = [s.name for s in self.model_specs]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate model names in model_specs: {names}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _specs_from_records(records: list[dict[str, Any]]) -> tuple[ModelSpec, ...]:
    out = []
    for r in records:
        if not isinstance(r, dict) or "name" not in r or "family" not in r:
            raise ValueError(f"Model spec needs at least name and family: {r}")
        out.append(ModelSpec(
            name=str(r["name"]),
            family=str(r["family"]),
            protocol=r.get("protocol", "repeated_cv"),
            grid={k: list(v) for k, v in (r.get("grid") or {}).items()},
        ))
    return tuple(out)


def config_from_dict(obj: dict[str, Any], base: ReportConfig | None = None) -> ReportConfig:
    """
    Overlay a plain dict (e.g. parsed YAML) on `base`. Unknown keys are an error
    so a typo never silently falls back to a default.
    """
    base = base or ReportConfig()
    known = {f.name for f in fields(ReportConfig)}
    unknown = sorted(set(obj) - known - {"models"})
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")

    overrides = {k: v for k, v in obj.items() if k in known and k != "model_specs"}
    if "models" in obj:
        overrides["model_specs"] = _specs_from_records(obj["models"])
    elif "model_specs" in obj:
        overrides["model_specs"] = _specs_from_records(obj["model_specs"])
    return replace(base, **overrides)


def load_config(path: Path) -> ReportConfig:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        obj = yaml.safe_load(fh) or {}
    if not isinstance(obj, dict):
        raise ValueError(f"{path}: expected a mapping at top level")
    return config_from_dict(obj)
