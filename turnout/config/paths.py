from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ProjectPaths:
    """ Where the report reads its raw table and config, and writes its tables. """
    root: Path
    raw_name: str = "county_turnout_2012_2016.csv"

    def _data(self, stage: str) -> Path:
        return self.root / "data" / stage

    @property
    def raw_table(self) -> Path:
        return self._data("raw") / self.raw_name

    @property
    def processed(self) -> Path:
        return self._data("processed")

    @property
    def outputs(self) -> Path:
        return self._data("outputs")

    @property
    def report_config(self) -> Path:
        return self.root / "config" / "report.yaml"


def get_project_root() -> Path:
    # repo_root/turnout/config/paths.py -> repo_root
    return Path(__file__).resolve().parents[2]


PATHS = ProjectPaths(root=get_project_root())
