from __future__ import annotations
from pathlib import Path
import pandas as pd
from . import config

def interim_path(name: str) -> Path:
    return config.INTERIM / name

def save_interim(df: pd.DataFrame, name: str) -> Path:
    """Write a cleaned table to the interim directory as Parquet and return its path."""
    config.INTERIM.mkdir(parents=True, exist_ok=True)
    path = interim_path(name)
    df.to_parquet(path, index=False)
    return path

def load_interim(name: str) -> pd.DataFrame:
    """
    Read a table saved by `save_interim`.

    Raises:
        FileNotFoundError: If the table has not been saved yet (run the
            cleaning step first)
    """
    path = interim_path(name)
    if not path.exists():
        raise FileNotFoundError(f"No interim table at {path}; run make_clean first")
    return pd.read_parquet(path)
