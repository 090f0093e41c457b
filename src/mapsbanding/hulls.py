"""
Species range estimates as convex and concave hulls over (lon, lat) points.

Geometry comes from shapely: ``MultiPoint.convex_hull`` and
``shapely.concave_hull`` (GEOS alpha-shape style, controlled by ``ratio``).
Species with fewer than ``MIN_HULL_POINTS`` geolocated captures get no hull.
Areas are in square degrees; they are only meant for comparing species
within one report.
"""
from __future__ import annotations
from typing import Iterable, Literal, Tuple
import numpy as np
import pandas as pd
import shapely
from shapely.geometry import MultiPoint
from shapely.geometry.base import BaseGeometry
from .config import MIN_HULL_POINTS, CONCAVE_RATIO
from .cleaning import geolocated

HullKind = Literal["convex", "concave"]

def species_hull(
    points: Iterable[Tuple[float, float]],
    kind: HullKind = "convex",
    ratio: float = CONCAVE_RATIO,
) -> BaseGeometry | None:
    """
    Hull of (lon, lat) pairs, or None below the minimum point count.
    Degenerate inputs (collinear or repeated points) return whatever
    shapely returns, e.g. a LineString or Point.
    """
    pts = [(float(x), float(y)) for x, y in points]
    if len(pts) < MIN_HULL_POINTS:
        return None
    mp = MultiPoint(pts)
    if kind == "convex":
        return mp.convex_hull
    elif kind == "concave":
        return shapely.concave_hull(mp, ratio=ratio, allow_holes=False)
    else:
        raise ValueError(f"Unknown hull kind: {kind}")

def species_hulls(
    df: pd.DataFrame,
    kind: HullKind = "convex",
    ratio: float = CONCAVE_RATIO,
    species_col: str = "species",
) -> pd.DataFrame:
    """
    One hull per species with enough geolocated records.

    Returns a DataFrame with columns species, kind, n_points, geometry, area.
    """
    if kind not in ("convex", "concave"):
        raise ValueError(f"Unknown hull kind: {kind}")
    located = geolocated(df)
    rows = []
    for species, g in located.groupby(species_col, observed=True):
        pts = np.column_stack([g["longitude"].to_numpy(dtype=float), g["latitude"].to_numpy(dtype=float)])
        hull = species_hull(pts, kind=kind, ratio=ratio)
        if hull is None:
            continue
        rows.append({
            "species": str(species),
            "kind": kind,
            "n_points": len(pts),
            "geometry": hull,
            "area": float(hull.area),
        })
    return pd.DataFrame(rows, columns=["species", "kind", "n_points", "geometry", "area"])

def hull_area_table(convex: pd.DataFrame, concave: pd.DataFrame) -> pd.DataFrame:
    """Side-by-side convex/concave areas per species for the report."""
    a = convex.loc[:, ["species", "n_points", "area"]].rename(columns={"area": "convex_area"})
    b = concave.loc[:, ["species", "area"]].rename(columns={"area": "concave_area"})
    return a.merge(b, on="species", how="outer").sort_values("species").reset_index(drop=True)
