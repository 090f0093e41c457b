from __future__ import annotations
import logging
from typing import Iterable, Optional
import pandas as pd
from .config import STATION_KEYS

logger = logging.getLogger(__name__)

# -------------------------------
# Validation / Safety
# -------------------------------

def _check_keys(df: pd.DataFrame, keys: list[str], name: str) -> None:
    missing = [k for k in keys if k not in df.columns]
    if missing:
        raise KeyError(f"{name} is missing key columns {missing}. Available: {list(df.columns)[:20]}...")

def duplicated_keys(df: pd.DataFrame, keys: Iterable[str] = STATION_KEYS) -> pd.DataFrame:
    """Rows whose key combination appears more than once (all occurrences)."""
    keys = list(keys)
    return df.loc[df.duplicated(subset=keys, keep=False)]

def drop_duplicates_on_keys(df: pd.DataFrame, keys: list[str]) -> pd.DataFrame:
    """
    Remove duplicate rows based on specified key columns, keeping the first.
    """
    return df.drop_duplicates(subset=keys[0] if len(keys) == 1 else keys)

# -------------------------------
# Join on station keys
# -------------------------------

def join_stations(
    captures: pd.DataFrame,
    stations: pd.DataFrame,
    keys: Optional[Iterable[str]] = None,
) -> pd.DataFrame:
    """
    Left-join station metadata onto capture events by the shared station keys.

    The station table must be unique on the keys; duplicates keep their first
    row and are reported. Station rows missing any key are dropped, so captures
    with a blank key or at unknown stations keep NaN station columns.
    """
    keys = list(keys or STATION_KEYS)
    _check_keys(captures, keys, "captures")
    _check_keys(stations, keys, "stations")

    # merge would pair a blank key with any other blank key
    incomplete = stations[keys].isna().any(axis=1)
    if incomplete.any():
        logger.warning("Dropping %d station rows with a missing key", int(incomplete.sum()))
        stations = stations.loc[~incomplete]

    dups = duplicated_keys(stations, keys)
    if not dups.empty:
        logger.warning(
            "Station table has %d rows with duplicated keys; keeping the first of each",
            len(dups),
        )
        stations = drop_duplicates_on_keys(stations, keys)

    # capture-side columns win if both tables carry them
    extra = [c for c in stations.columns if c not in captures.columns or c in keys]
    out = captures.merge(stations[extra], on=keys, how="left", validate="many_to_one", indicator=True)
    unmatched = int((out["_merge"] == "left_only").sum())
    if unmatched:
        logger.info("%d capture records matched no station", unmatched)
    return out.drop(columns="_merge")

def station_coverage(
    captures: pd.DataFrame,
    stations: pd.DataFrame,
    keys: Optional[Iterable[str]] = None,
) -> pd.DataFrame:
    """
    Quick availability table: rows=union of station keys, cols=in_captures/in_stations.
    """
    keys = list(keys or STATION_KEYS)
    cap = captures[keys].drop_duplicates().assign(in_captures=True)
    sta = stations[keys].drop_duplicates().assign(in_stations=True)
    out = cap.merge(sta, on=keys, how="outer")
    out[["in_captures", "in_stations"]] = (
        out[["in_captures", "in_stations"]].astype("boolean").fillna(False).astype(bool)
    )
    return out.sort_values(keys).reset_index(drop=True)
