""" Unit tests for turnout.features.describe. """
import pandas as pd
import pytest

from turnout.features.describe import summarize_turnout
from turnout.features.harmonize import Dataset


@pytest.fixture
def small_ds():
    frame = pd.DataFrame({
        "state": ["a"] * 8,
        "county": list("abcdefgh"),
        "turnout": [40.0, 55.0, 60.0, 65.0, 101.0, 105.0, 70.0, 50.0],
        "pct_white": [50.0] * 8,
    })
    return Dataset(year=2012, frame=frame, features=("pct_white",))


def test_summary_stats(small_ds):
    s = summarize_turnout(small_ds, bins=5)
    assert s.n == 8
    assert s.mean == pytest.approx(68.25)
    assert s.median == pytest.approx(62.5)
    assert s.min == 40.0 and s.max == 105.0


def test_over_100_flagged_not_removed(small_ds):
    s = summarize_turnout(small_ds)
    assert s.n_over_100 == 2
    assert s.prop_over_100 == pytest.approx(0.25)
    assert s.n == 8


def test_open_interval_50_70(small_ds):
    # 50 and 70 sit on the edges and are excluded
    s = summarize_turnout(small_ds)
    assert s.prop_50_70 == pytest.approx(3 / 8)


def test_histogram(small_ds):
    s = summarize_turnout(small_ds, bins=5)
    assert len(s.bin_counts) == 5
    assert len(s.bin_edges) == 6
    assert sum(s.bin_counts) == 8
    assert s.bin_edges[0] == 40.0 and s.bin_edges[-1] == 105.0


def test_empty_dataset():
    ds = Dataset(year=2012, frame=pd.DataFrame({"turnout": []}), features=())
    with pytest.raises(ValueError):
        summarize_turnout(ds)
