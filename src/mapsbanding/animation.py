"""Animated capture map: one frame per year, encoded as a GIF with imageio."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import imageio.v3 as iio
import numpy as np
import pandas as pd
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from .cleaning import geolocated
from .plotting import map_extent, plot_capture_map

logger = logging.getLogger(__name__)

FRAME_SIZE = (8, 6)
FRAME_DPI = 80
FRAME_DURATION_MS = 900


def _render_frame(year_df: pd.DataFrame, year: int, extent) -> np.ndarray:
    fig = Figure(figsize=FRAME_SIZE, dpi=FRAME_DPI)
    canvas = FigureCanvasAgg(fig)
    ax = fig.add_subplot(1, 1, 1)
    plot_capture_map(year_df, ax=ax, title=f"Captures in {year}", extent=extent)
    fig.tight_layout()
    canvas.draw()
    # drop alpha, GIF has no partial transparency
    return np.asarray(canvas.buffer_rgba())[..., :3].copy()


def capture_map_frames(df: pd.DataFrame) -> list[np.ndarray]:
    """RGB frames (same size, same extent) for each year with geolocated captures."""
    located = geolocated(df).dropna(subset=["year"])
    if located.empty:
        return []
    extent = map_extent(located)
    frames = []
    for year, sub in located.groupby("year", sort=True):
        frames.append(_render_frame(sub, int(year), extent))
    logger.info("Rendered %d animation frames", len(frames))
    return frames


def encode_gif(frames: list[np.ndarray], duration_ms: int = FRAME_DURATION_MS) -> bytes:
    if not frames:
        raise ValueError("No frames to encode")
    return iio.imwrite("<bytes>", np.stack(frames), extension=".gif", duration=duration_ms, loop=0)


def animate_capture_map(df: pd.DataFrame, duration_ms: int = FRAME_DURATION_MS) -> Optional[bytes]:
    """GIF bytes of the year-by-year map, or None if nothing is geolocated."""
    frames = capture_map_frames(df)
    if not frames:
        logger.info("No geolocated captures with a year; skipping animation")
        return None
    return encode_gif(frames, duration_ms)


def save_animation(gif: bytes, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(gif)
    return path
