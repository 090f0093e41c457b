from __future__ import annotations
import logging
from typing import Iterable
import pandas as pd
import numpy as np
from .config import CAPTURE_COLUMNS, STATION_COLUMNS, STATION_KEYS, CHICKADEE_SPECIES
from .coords import dms_series_to_dd, is_finite_coordinate
from .dataframe_ops import join_stations

logger = logging.getLogger(__name__)

def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize column names by stripping whitespace, replacing spaces with underscores,
    removing special characters and upper-casing (MAPS export headers are upper case).
    
    Args:
        df: Input DataFrame
        
    Returns:
        DataFrame with normalized column names
    """
    df = df.copy()
    df.columns = (
        df.columns
        .astype(str)
        .str.strip()
        .str.replace(r"\s+", "_", regex=True)
        .str.replace(r"[^0-9A-Za-z_]", "", regex=True)
        .str.upper()
    )
    return df

def harmonize_ids(df: pd.DataFrame, id_cols: Iterable[str] = STATION_KEYS) -> pd.DataFrame:
    """
    Standardize ID column values by converting to uppercase strings and stripping whitespace.
    Missing values stay missing.
    
    Args:
        df: Input DataFrame
        id_cols: Names of the ID columns to harmonize (default: station keys)
        
    Returns:
        DataFrame with standardized ID columns
    """
    df = df.copy()
    for col in id_cols:
        if col in df.columns:
            df[col] = df[col].astype("string").str.strip().str.upper().replace("", pd.NA)
    return df

def select_and_rename(df: pd.DataFrame, columns: dict[str, str] | None = None) -> pd.DataFrame:
    """
    Keep the fixed set of raw columns and rename them to their cleaned names.

    Raises:
        KeyError: If any of the raw columns is absent
    """
    columns = columns or {**CAPTURE_COLUMNS, **STATION_COLUMNS}
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"Missing expected columns: {missing}")
    return df.loc[:, list(columns)].rename(columns=columns)

def add_decimal_coordinates(df: pd.DataFrame, lat_col: str = "latitude", lon_col: str = "longitude") -> pd.DataFrame:
    """Replace DMS coordinate strings with decimal degrees (NaN where unparseable)."""
    df = df.copy()
    df[lat_col] = dms_series_to_dd(df[lat_col])
    df[lon_col] = dms_series_to_dd(df[lon_col])
    # out-of-range values are as unusable as malformed ones
    df.loc[df[lat_col].abs() > 90, lat_col] = np.nan
    df.loc[df[lon_col].abs() > 180, lon_col] = np.nan
    return df

def derive_date_parts(df: pd.DataFrame, date_col: str = "date") -> pd.DataFrame:
    """
    Parse the date column and add nullable integer year, month and day columns.
    Unparseable dates become NaT and their parts <NA>.
    """
    df = df.copy()
    raw = df[date_col]
    # MAPS exports mix ISO and US month/day/year dates within one file
    df[date_col] = pd.to_datetime(raw, errors="coerce", format="mixed")
    failed = int((df[date_col].isna() & raw.notna()).sum())
    if failed:
        logger.info("%d dates could not be parsed", failed)
    df["year"] = df[date_col].dt.year.astype("Int64")
    df["month"] = df[date_col].dt.month.astype("Int64")
    df["day"] = df[date_col].dt.day.astype("Int64")
    return df

def filter_species(df: pd.DataFrame, species: Iterable[str] = CHICKADEE_SPECIES, col: str = "species") -> pd.DataFrame:
    """Keep rows whose species code (case-insensitive) is in `species`."""
    df = df.copy()
    df[col] = df[col].astype("string").str.strip().str.upper()
    keep = df[col].isin([s.upper() for s in species]).fillna(False)
    dropped = int((~keep).sum())
    if dropped:
        logger.info("Dropped %d records of non-target species", dropped)
    return df.loc[keep]

def geolocated(df: pd.DataFrame, lat_col: str = "latitude", lon_col: str = "longitude") -> pd.DataFrame:
    """Rows with both coordinates finite; the only entry point for spatial tables."""
    mask = is_finite_coordinate(df[lat_col], df[lon_col])
    return df.loc[mask]

def clean_captures(captures: pd.DataFrame, stations: pd.DataFrame) -> pd.DataFrame:
    """
    Join captures with station coordinates and produce the cleaned record table.

    Rows without usable coordinates are kept (they count towards abundance);
    spatial consumers must go through `geolocated`.
    """
    captures = harmonize_ids(normalize_columns(captures))
    stations = harmonize_ids(normalize_columns(stations))
    joined = join_stations(captures, stations)
    out = select_and_rename(joined)
    out["band"] = out["band"].astype("string").str.strip()
    out["capture_code"] = out["capture_code"].astype("string").str.strip().str.upper()
    out = add_decimal_coordinates(out)
    out = derive_date_parts(out)
    out = filter_species(out)
    unlocated = len(out) - len(geolocated(out))
    if unlocated:
        logger.info("%d of %d records have no usable coordinates", unlocated, len(out))
    return out.reset_index(drop=True)
