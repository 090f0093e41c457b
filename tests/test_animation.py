import numpy as np
import pandas as pd
import pytest

from mapsbanding.animation import capture_map_frames, animate_capture_map, encode_gif, save_animation

def test_one_frame_per_year_same_shape(clean):
    frames = capture_map_frames(clean)
    # geolocated, dated records span 2019-2021
    assert len(frames) == 3
    assert len({f.shape for f in frames}) == 1
    assert frames[0].shape[2] == 3

def test_animate_capture_map_gif(clean, tmp_path):
    gif = animate_capture_map(clean)
    assert gif[:6] in (b"GIF87a", b"GIF89a")
    path = save_animation(gif, tmp_path / "out" / "map.gif")
    assert path.read_bytes() == gif

def test_animate_without_locations_returns_none():
    df = pd.DataFrame({"species": ["BCCH"], "latitude": [np.nan], "longitude": [1.0], "year": pd.array([2020], dtype="Int64")})
    assert animate_capture_map(df) is None

def test_encode_gif_requires_frames():
    with pytest.raises(ValueError):
        encode_gif([])
