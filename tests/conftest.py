import matplotlib
matplotlib.use("Agg")

import pandas as pd
import pytest

CAPTURE_HEADER = ["LOC", "STA", "STATION", "DATE", "CODE", "BAND", "SPEC", "AGE", "SEX", "FAT", "STATUS"]
CAPTURE_ROWS = [
    ["ABCD", "1", "ST01", "2019-06-01", "N", "100", "BCCH", "1", "M", "0", "300"],
    ["ABCD", "2", "ST02", "2019-06-10", "N", "101", "BCCH", "1", "F", "1", "300"],
    ["EFGH", "1", "ST03", "2019-07-01", "N", "102", "BCCH", "5", "U", "0", "300"],
    ["ABCD", "1", "ST01", "2020-06-05", "R", "100", "BCCH", "5", "M", "0", "300"],
    ["ABCD", "1", "ST01", "2021-06-05", "R", "100", "BCCH", "5", "M", "0", "300"],
    ["ABCD", "2", "ST02", "2020-07-01", "N", "200", "BOCH", "1", "F", "0", "300"],
    ["ABCD", "2", "ST02", "2021-07-01", "R", "200", "BOCH", "1", "F", "0", "300"],
    ["EFGH", "2", "ST04", "2019-08-01", "N", "300", "CACH", "1", "M", "0", "300"],
    ["EFGH", "2", "ST04", "2020-08-01", "N", "301", "CACH", "1", "M", "0", "300"],
    ["EFGH", "2", "ST04", "2020-08-02", "R", "301", "CACH", "1", "M", "0", "300"],
    ["ABCD", "1", "ST01", "2020-06-01", "N", "400", "AMRO", "1", "M", "0", "300"],
    ["ZZZZ", "9", "ST99", "2021-06-01", "N", "103", "BCCH", "1", "M", "0", "300"],
    ["ABCD", "1", "ST01", "not a date", "N", "104", "BCCH", "1", "M", "0", "300"],
]

STATION_HEADER = ["LOC", "STA", "STATION", "LATITUDE", "LONGITUDE"]
STATION_ROWS = [
    ["ABCD", "1", "ST01", "45 30 0", "-75 15 0"],
    ["ABCD", "2", "ST02", "46 0 0", "-74 0 0"],
    ["EFGH", "1", "ST03", "44 0 30", "-76 30 0"],
    ["EFGH", "2", "ST04", "bad", "-76 0 0"],
    ["IJKL", "1", "ST05", "47 0 0", "-73 0 0"],
]


@pytest.fixture
def raw_captures():
    return pd.DataFrame(CAPTURE_ROWS, columns=CAPTURE_HEADER)


@pytest.fixture
def raw_stations():
    return pd.DataFrame(STATION_ROWS, columns=STATION_HEADER)


@pytest.fixture
def clean(raw_captures, raw_stations):
    from mapsbanding.cleaning import clean_captures
    return clean_captures(raw_captures, raw_stations)


@pytest.fixture
def raw_files(tmp_path, raw_captures, raw_stations):
    cap = tmp_path / "captures.csv"
    sta = tmp_path / "stations.csv"
    raw_captures.to_csv(cap, index=False)
    raw_stations.to_csv(sta, index=False)
    return cap, sta
