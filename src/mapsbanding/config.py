from __future__ import annotations
import os
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
DATA = Path(os.environ["MAPS_DATA_DIR"]).expanduser() if os.environ.get("MAPS_DATA_DIR") else ROOT / "data"
RAW = DATA / "raw"
INTERIM = DATA / "interim"
REPORTS = ROOT / "reports"

# raw MAPS export filenames (adjust to yours)
RAW_CAPTURES_CSV = RAW / "captures.csv"
RAW_STATIONS_CSV = RAW / "stations.csv"
REPORT_HTML = REPORTS / "chickadee_report.html"

# keys shared by the capture and station tables
STATION_KEYS = ["LOC", "STA", "STATION"]

# raw column -> cleaned column
CAPTURE_COLUMNS = {
    "LOC": "location",
    "STA": "station_number",
    "STATION": "station",
    "DATE": "date",
    "CODE": "capture_code",
    "BAND": "band",
    "SPEC": "species",
    "AGE": "age",
    "SEX": "sex",
    "FAT": "fat",
    "STATUS": "status",
}
STATION_COLUMNS = {
    "LATITUDE": "latitude",
    "LONGITUDE": "longitude",
}

CHICKADEE_SPECIES = {
    "BCCH": "Black-capped Chickadee",
    "CACH": "Carolina Chickadee",
    "MOCH": "Mountain Chickadee",
    "BOCH": "Boreal Chickadee",
    "CBCH": "Chestnut-backed Chickadee",
    "MECH": "Mexican Chickadee",
}

NEW_BAND_CODE = "N"
RECAPTURE_CODES = ("R",)

# spatial
MIN_HULL_POINTS = 3
CONCAVE_RATIO = 0.3  # shapely.concave_hull ratio, 0 = tightest, 1 = convex
HEXBIN_GRIDSIZE = 30
