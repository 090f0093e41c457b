import pandas as pd
import pytest

from mapsbanding.dataframe_ops import join_stations, station_coverage, duplicated_keys

KEYS = ["LOC", "STA", "STATION"]

def _stations():
    return pd.DataFrame({
        "LOC": ["A", "A", "B"], "STA": ["1", "2", "1"], "STATION": ["S1", "S2", "S3"],
        "LATITUDE": ["1 0 0", "2 0 0", "3 0 0"], "LONGITUDE": ["4 0 0", "5 0 0", "6 0 0"],
    })

def test_join_stations_left_join_keeps_order_and_unmatched():
    caps = pd.DataFrame({"LOC": ["B", "A", "C"], "STA": ["1", "1", "1"], "STATION": ["S3", "S1", "S9"], "BAND": ["x", "y", "z"]})
    out = join_stations(caps, _stations(), KEYS)
    assert list(out["BAND"]) == ["x", "y", "z"]
    assert list(out["LATITUDE"][:2]) == ["3 0 0", "1 0 0"]
    assert pd.isna(out.loc[2, "LATITUDE"])
    assert "_merge" not in out.columns

def test_join_stations_duplicate_station_keeps_first():
    sta = pd.concat([_stations(), _stations().iloc[[0]].assign(LATITUDE="9 0 0")], ignore_index=True)
    assert len(duplicated_keys(sta, KEYS)) == 2
    caps = pd.DataFrame({"LOC": ["A"], "STA": ["1"], "STATION": ["S1"]})
    out = join_stations(caps, sta, KEYS)
    assert len(out) == 1
    assert out.loc[0, "LATITUDE"] == "1 0 0"

def test_join_stations_missing_key_raises():
    caps = pd.DataFrame({"LOC": ["A"], "STA": ["1"]})
    with pytest.raises(KeyError):
        join_stations(caps, _stations(), KEYS)

def test_station_coverage_flags():
    caps = pd.DataFrame({"LOC": ["A", "C"], "STA": ["1", "1"], "STATION": ["S1", "S9"]})
    cov = station_coverage(caps, _stations(), KEYS).set_index("STATION")
    assert cov.loc["S1", "in_captures"] and cov.loc["S1", "in_stations"]
    assert not cov.loc["S2", "in_captures"] and cov.loc["S2", "in_stations"]
    assert cov.loc["S9", "in_captures"] and not cov.loc["S9", "in_stations"]

def test_join_stations_missing_key_never_matches():
    sta = pd.concat(
        [_stations(), pd.DataFrame({"LOC": ["A"], "STA": ["1"], "STATION": [None], "LATITUDE": ["45 0 0"], "LONGITUDE": ["-70 0 0"]})],
        ignore_index=True,
    )
    caps = pd.DataFrame({"LOC": ["A", "A"], "STA": ["1", "1"], "STATION": [None, "S1"]})
    out = join_stations(caps, sta, KEYS)
    assert len(out) == 2
    assert pd.isna(out.loc[0, "LATITUDE"])
    assert out.loc[1, "LATITUDE"] == "1 0 0"
