"""
Simple usage example for the chickadee banding report.

Builds a small synthetic MAPS-style capture/station pair, then walks through
the pipeline steps one at a time the way a notebook would.
"""

import numpy as np
import pandas as pd
import sys
from pathlib import Path

# Add the src directory to path
sys.path.append('../src')
from mapsbanding.cleaning import clean_captures, geolocated
from mapsbanding.pipeline import make_aggregates, make_report


def create_mock_tables(n_captures: int = 400, seed: int = 7):
    """Random stations in the north-east and captures of four chickadee species."""
    rng = np.random.default_rng(seed)
    stations = []
    for i in range(12):
        lat = rng.uniform(42, 48)
        lon = -rng.uniform(68, 80)
        stations.append({
            "LOC": f"L{i // 3:03d}", "STA": str(i % 3 + 1), "STATION": f"S{i:03d}",
            "LATITUDE": _to_dms(lat), "LONGITUDE": _to_dms(lon),
        })
    stations = pd.DataFrame(stations)

    species = rng.choice(["BCCH", "BOCH", "CACH", "MOCH"], size=n_captures, p=[0.6, 0.2, 0.15, 0.05])
    picks = stations.sample(n_captures, replace=True, random_state=seed).reset_index(drop=True)
    years = rng.integers(2015, 2021, size=n_captures)
    bands = rng.integers(1000, 1000 + n_captures // 2, size=n_captures).astype(str)
    captures = pd.DataFrame({
        "LOC": picks["LOC"], "STA": picks["STA"], "STATION": picks["STATION"],
        "DATE": [f"{y}-06-{d:02d}" for y, d in zip(years, rng.integers(1, 29, size=n_captures))],
        "CODE": rng.choice(["N", "R"], size=n_captures, p=[0.7, 0.3]),
        "BAND": bands, "SPEC": species,
        "AGE": "1", "SEX": rng.choice(["M", "F", "U"], size=n_captures),
        "FAT": "0", "STATUS": "300",
    })
    return captures, stations


def _to_dms(value: float) -> str:
    sign = "-" if value < 0 else ""
    value = abs(value)
    deg = int(value)
    minutes = int((value - deg) * 60)
    seconds = round((value - deg - minutes / 60) * 3600, 1)
    return f"{sign}{deg} {minutes} {seconds}"


def simple_usage_example():
    print("=== Chickadee banding report - Usage Example ===\n")

    print("1. Creating mock capture and station tables...")
    captures, stations = create_mock_tables()
    print(f"   {len(captures)} captures at {len(stations)} stations")

    print("\n2. Joining and cleaning...")
    clean = clean_captures(captures, stations)
    print(f"   {len(clean)} records, {len(geolocated(clean))} geolocated")

    print("\n3. Aggregating...")
    aggs = make_aggregates(clean)
    print(aggs["summary"].to_string(index=False))
    print(aggs["convex_hulls"][["species", "n_points", "area"]].to_string(index=False))

    print("\n4. Rendering report...")
    out = Path("chickadee_report_example.html")
    make_report(clean, output=out, aggregates=aggs)
    print(f"   ✓ Written to {out.resolve()}")


if __name__ == "__main__":
    simple_usage_example()
