from __future__ import annotations
from pathlib import Path
import pandas as pd
from .config import RAW_CAPTURES_CSV, RAW_STATIONS_CSV

_DELIMITERS = {".csv": ",", ".tsv": "\t", ".txt": "\t"}

def read_table(path: str | Path) -> pd.DataFrame:
    """
    Read a delimited (or Excel) table with every column as string.

    Band numbers and station keys carry leading zeros, so nothing is
    type-inferred here; casting happens during cleaning.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in _DELIMITERS:
        return pd.read_csv(path, sep=_DELIMITERS[suffix], dtype=str, keep_default_na=True)
    if suffix == ".xlsx":
        return pd.read_excel(path, dtype=str, engine="openpyxl")
    raise ValueError(f"Unsupported table format: {path.name}")

def read_captures_raw(path: str | Path | None = None) -> pd.DataFrame:
    return read_table(path or RAW_CAPTURES_CSV)

def read_stations_raw(path: str | Path | None = None) -> pd.DataFrame:
    return read_table(path or RAW_STATIONS_CSV)
