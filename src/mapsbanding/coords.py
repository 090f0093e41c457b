from __future__ import annotations
import math
import numpy as np
import pandas as pd

def dms_to_dd(value) -> float:
    """
    Convert a "degrees minutes seconds" string to decimal degrees.

    The sign comes from the degrees token, so "-0 30 0" gives -0.5.
    Anything that is not exactly three finite numeric tokens returns NaN
    instead of raising; callers drop those rows before spatial work.
    """
    if not isinstance(value, str):
        return np.nan
    tokens = value.split()
    if len(tokens) != 3:
        return np.nan
    try:
        deg, minutes, seconds = (float(t) for t in tokens)
    except ValueError:
        return np.nan
    if not all(math.isfinite(x) for x in (deg, minutes, seconds)):
        return np.nan
    sign = -1.0 if tokens[0].startswith("-") else 1.0
    return sign * (abs(deg) + minutes / 60.0 + seconds / 3600.0)

def dms_series_to_dd(s: pd.Series) -> pd.Series:
    """Element-wise `dms_to_dd` keeping the index; result is float64."""
    return s.map(dms_to_dd).astype(float)

def is_finite_coordinate(lat: pd.Series, lon: pd.Series) -> pd.Series:
    """Boolean mask of rows where both coordinates are finite numbers."""
    index = lat.index
    lat = pd.to_numeric(lat, errors="coerce").to_numpy(dtype=float, na_value=np.nan)
    lon = pd.to_numeric(lon, errors="coerce").to_numpy(dtype=float, na_value=np.nan)
    return pd.Series(np.isfinite(lat) & np.isfinite(lon), index=index)
