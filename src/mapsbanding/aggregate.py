"""
Per-year, per-species aggregates of cleaned capture records.

- counts and within-year proportions (the stacked-area chart),
- each recaptured bird's earliest-year record (the unique-recapture chart),
- a per-species summary table for the report.

All functions take the cleaned record table and return new DataFrames.
"""
from __future__ import annotations
from typing import Iterable
import pandas as pd
from .config import RECAPTURE_CODES
from .cleaning import geolocated

_GROUP = ["year", "species"]

def counts_by_year_species(df: pd.DataFrame) -> pd.DataFrame:
    """Capture counts per (year, species); rows without a year are excluded."""
    dated = df.dropna(subset=_GROUP)
    out = dated.groupby(_GROUP, observed=True).size().reset_index(name="n")
    out["year"] = out["year"].astype(int)
    out["species"] = out["species"].astype(str)
    return out.sort_values(_GROUP).reset_index(drop=True)

def proportions_by_year(counts: pd.DataFrame) -> pd.DataFrame:
    """
    Add the year total and each species' share of it.
    Within a year the proportions sum to 1.
    """
    out = counts.copy()
    out["total"] = out.groupby("year")["n"].transform("sum")
    out["proportion"] = out["n"] / out["total"]
    return out

def recaptured_bands(df: pd.DataFrame, recapture_codes: Iterable[str] = RECAPTURE_CODES) -> pd.Index:
    """Band numbers with at least one recapture-coded event."""
    codes = [c.upper() for c in recapture_codes]
    is_recap = df["capture_code"].astype("string").str.upper().isin(codes).fillna(False)
    return pd.Index(df.loc[is_recap.to_numpy(dtype=bool), "band"].dropna().unique(), name="band")

def first_recapture_records(df: pd.DataFrame, recapture_codes: Iterable[str] = RECAPTURE_CODES) -> pd.DataFrame:
    """
    For every recaptured bird, its record from the earliest year.

    Ties on the earliest year keep the first record in table order
    (stable sort). Records without a year cannot be earliest.
    """
    bands = recaptured_bands(df, recapture_codes)
    birds = df.loc[df["band"].isin(bands).fillna(False).to_numpy(dtype=bool)]
    birds = birds.dropna(subset=["year"])
    first = birds.sort_values("year", kind="stable").drop_duplicates(subset="band", keep="first")
    return first.sort_index()

def unique_recaptures_by_year_species(df: pd.DataFrame, recapture_codes: Iterable[str] = RECAPTURE_CODES) -> pd.DataFrame:
    """Count recaptured individuals by the (year, species) of their first record."""
    first = first_recapture_records(df, recapture_codes)
    return counts_by_year_species(first).rename(columns={"n": "n_recaptured"})

def abundance_table(df: pd.DataFrame, recapture_codes: Iterable[str] = RECAPTURE_CODES) -> pd.DataFrame:
    """
    One row per (year, species): n, total, proportion, n_recaptured (0 if none).
    """
    props = proportions_by_year(counts_by_year_species(df))
    recaps = unique_recaptures_by_year_species(df, recapture_codes)
    out = props.merge(recaps, on=_GROUP, how="left")
    out["n_recaptured"] = out["n_recaptured"].fillna(0).astype(int)
    return out

def species_summary(df: pd.DataFrame, recapture_codes: Iterable[str] = RECAPTURE_CODES) -> pd.DataFrame:
    """
    Per-species totals: captures, distinct bands, recaptured bands,
    stations, geolocated captures, first and last year.
    """
    recap = set(recaptured_bands(df, recapture_codes))
    located = geolocated(df).groupby("species").size()
    rows = []
    for species, g in df.groupby("species", observed=True):
        years = g["year"].dropna()
        is_recap = g["band"].isin(recap).fillna(False).to_numpy(dtype=bool)
        rows.append({
            "species": str(species),
            "captures": len(g),
            "individuals": int(g["band"].nunique()),
            "recaptured_individuals": int(g.loc[is_recap, "band"].nunique()),
            "stations": int(g["station"].nunique()),
            "geolocated": int(located.get(species, 0)),
            "first_year": int(years.min()) if len(years) else pd.NA,
            "last_year": int(years.max()) if len(years) else pd.NA,
        })
    cols = ["species", "captures", "individuals", "recaptured_individuals",
            "stations", "geolocated", "first_year", "last_year"]
    return pd.DataFrame(rows, columns=cols)
