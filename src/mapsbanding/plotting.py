"""
Static charts for the banding report.

Every function takes the cleaned (or aggregated) table, draws on ``ax`` if one
is given or on a new figure otherwise, and returns ``(fig, ax)``. Map
functions only ever see geolocated rows. Empty input draws a "No data" note
instead of raising, so a sparse species does not stop the report.
"""
from __future__ import annotations
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from shapely.geometry import Polygon, LineString

from .config import CHICKADEE_SPECIES, HEXBIN_GRIDSIZE
from .cleaning import geolocated

# ============================================================
# Configuration / constants
# ============================================================

SPECIES_COLORS: dict[str, str] = {
    "BCCH": "#264653",
    "CACH": "#E76F51",
    "MOCH": "#2A9D8F",
    "BOCH": "#F4A261",
    "CBCH": "#8AB17D",
    "MECH": "#577590",
}
FALLBACK_COLOR = "#6b7280"


def species_color(code: str) -> str:
    return SPECIES_COLORS.get(str(code), FALLBACK_COLOR)


def species_label(code: str) -> str:
    name = CHICKADEE_SPECIES.get(str(code))
    return f"{name} ({code})" if name else str(code)


# ============================================================
# Helpers
# ============================================================

def _get_ax(ax, figsize=(9, 6)):
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=figsize)
        return fig, ax, True
    return ax.figure, ax, False


def _no_data(ax, title: str) -> None:
    ax.text(0.5, 0.5, "No data", transform=ax.transAxes, ha="center", va="center", color="#6b7280")
    ax.set_title(title)
    ax.set_xticks([])
    ax.set_yticks([])


def _map_axes(ax, extent: Optional[Sequence[float]] = None) -> None:
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_aspect("equal", adjustable="datalim")
    ax.grid(True, alpha=0.3)
    if extent is not None:
        ax.set_xlim(extent[0], extent[1])
        ax.set_ylim(extent[2], extent[3])


def map_extent(df: pd.DataFrame, pad: float = 1.0) -> tuple[float, float, float, float]:
    """(lon_min, lon_max, lat_min, lat_max) of geolocated rows, padded in degrees."""
    located = geolocated(df)
    if located.empty:
        return (-180.0, 180.0, -90.0, 90.0)
    lon = located["longitude"].astype(float)
    lat = located["latitude"].astype(float)
    return (lon.min() - pad, lon.max() + pad, lat.min() - pad, lat.max() + pad)


def _hull_xy(geom):
    """Exterior coordinates of a hull, or None for degenerate geometries we only dot."""
    if isinstance(geom, Polygon):
        xs, ys = geom.exterior.xy
        return np.asarray(xs), np.asarray(ys)
    if isinstance(geom, LineString):
        xs, ys = geom.xy
        return np.asarray(xs), np.asarray(ys)
    return None


# ============================================================
# Maps
# ============================================================

def plot_capture_map(df: pd.DataFrame, *, ax=None, title: Optional[str] = None, extent=None):
    """Scatter of geolocated captures coloured by species."""
    fig, ax, created = _get_ax(ax)
    located = geolocated(df)
    title = title or "Capture locations by species"
    if located.empty:
        _no_data(ax, title)
        return fig, ax

    # one marker per station and species, sized by captures there
    sites = (
        located.groupby(["species", "longitude", "latitude"], observed=True)
        .size()
        .reset_index(name="n")
    )
    for species, sub in sites.groupby("species", observed=True):
        ax.scatter(
            sub["longitude"], sub["latitude"],
            s=10 + 4 * np.sqrt(sub["n"]),
            color=species_color(species), alpha=0.7, edgecolor="white", linewidth=0.5,
            label=species_label(species),
        )
    _map_axes(ax, extent)
    ax.set_title(title)
    ax.legend(loc="best", fontsize=8, frameon=True)
    if created:
        fig.tight_layout()
    return fig, ax


def plot_hexbin_density(df: pd.DataFrame, *, gridsize: int = HEXBIN_GRIDSIZE, title: Optional[str] = None):
    """
    Hexbin capture density, one panel per species sharing one extent.

    Returns (fig, axes) where axes is a flat array of panels.
    """
    located = geolocated(df)
    species = sorted(located["species"].dropna().astype(str).unique())
    title = title or "Capture density"
    if not species:
        fig, ax = plt.subplots(1, 1, figsize=(6, 4))
        _no_data(ax, title)
        return fig, np.array([ax])

    ncols = min(3, len(species))
    nrows = int(np.ceil(len(species) / ncols))
    fig, axes = plt.subplots(nrows, ncols, figsize=(5 * ncols, 4 * nrows), squeeze=False)
    axes = axes.ravel()
    extent = map_extent(located)
    for ax, code in zip(axes, species):
        sub = located.loc[located["species"] == code]
        hb = ax.hexbin(
            sub["longitude"].astype(float), sub["latitude"].astype(float),
            gridsize=gridsize, mincnt=1, cmap="viridis",
            extent=extent,
        )
        cb = fig.colorbar(hb, ax=ax)
        cb.set_label("Captures")
        _map_axes(ax, extent)
        ax.set_title(species_label(code), fontsize=10)
    for ax in axes[len(species):]:
        ax.set_visible(False)
    fig.suptitle(title)
    fig.tight_layout()
    return fig, axes


def plot_hulls(df: pd.DataFrame, hulls: pd.DataFrame, *, ax=None, title: Optional[str] = None, extent=None):
    """Hull outlines (from `hulls.species_hulls`) drawn over the species' points."""
    fig, ax, created = _get_ax(ax)
    located = geolocated(df)
    kind = str(hulls["kind"].iloc[0]) if len(hulls) else ""
    title = title or f"{kind.capitalize()} hull range estimates".strip()
    if located.empty:
        _no_data(ax, title)
        return fig, ax

    for species, sub in located.groupby("species", observed=True):
        ax.scatter(sub["longitude"], sub["latitude"], s=6, color=species_color(species), alpha=0.4)
    for _, row in hulls.iterrows():
        color = species_color(row["species"])
        xy = _hull_xy(row["geometry"])
        if xy is None:
            continue
        xs, ys = xy
        if isinstance(row["geometry"], Polygon):
            ax.fill(xs, ys, color=color, alpha=0.2)
        ax.plot(xs, ys, color=color, lw=1.5, label=species_label(row["species"]))
    _map_axes(ax, extent)
    ax.set_title(title)
    if len(hulls):
        ax.legend(loc="best", fontsize=8)
    if created:
        fig.tight_layout()
    return fig, ax


# ============================================================
# Time series
# ============================================================

def plot_proportion_area(props: pd.DataFrame, *, ax=None, title: Optional[str] = None):
    """Stacked area of each species' share of yearly captures."""
    fig, ax, created = _get_ax(ax, figsize=(10, 5))
    title = title or "Share of captures by species"
    if props.empty:
        _no_data(ax, title)
        return fig, ax
    wide = props.pivot_table(index="year", columns="species", values="proportion", fill_value=0.0).sort_index()
    ax.stackplot(
        wide.index, wide.T.to_numpy(),
        labels=[species_label(c) for c in wide.columns],
        colors=[species_color(c) for c in wide.columns],
        alpha=0.85,
    )
    ax.set_xlabel("Year")
    ax.set_ylabel("Proportion of captures")
    ax.set_ylim(0, 1)
    ax.set_title(title)
    ax.legend(loc="upper left", bbox_to_anchor=(1.01, 1.0), fontsize=8)
    if created:
        fig.tight_layout()
    return fig, ax


def _plot_yearly_lines(table: pd.DataFrame, value_col: str, ax, title: str, ylabel: str):
    if table.empty:
        _no_data(ax, title)
        return
    for species, sub in table.sort_values("year").groupby("species", observed=True):
        ax.plot(
            sub["year"], sub[value_col],
            marker="o", lw=2, ms=5,
            color=species_color(species), label=species_label(species),
        )
    ax.set_xlabel("Year")
    ax.set_ylabel(ylabel)
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3)
    ax.set_title(title)
    ax.legend(loc="upper left", bbox_to_anchor=(1.01, 1.0), fontsize=8)


def plot_abundance(counts: pd.DataFrame, *, ax=None, title: Optional[str] = None):
    """Captures per year and species."""
    fig, ax, created = _get_ax(ax, figsize=(10, 5))
    _plot_yearly_lines(counts, "n", ax, title or "Captures per year", "Captures")
    if created:
        fig.tight_layout()
    return fig, ax


def plot_unique_recaptures(recaps: pd.DataFrame, *, ax=None, title: Optional[str] = None):
    """Recaptured individuals counted once, in the year of their first record."""
    fig, ax, created = _get_ax(ax, figsize=(10, 5))
    _plot_yearly_lines(
        recaps, "n_recaptured", ax,
        title or "Unique recaptured individuals by first year", "Individuals",
    )
    if created:
        fig.tight_layout()
    return fig, ax
