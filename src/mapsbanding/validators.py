from __future__ import annotations
import pandas as pd
from pandera import Column, DataFrameSchema, Check
from .config import CAPTURE_COLUMNS, STATION_COLUMNS, STATION_KEYS

capture_raw_schema = DataFrameSchema(
    {name: Column(nullable=True) for name in CAPTURE_COLUMNS},
    strict=False,
)

station_raw_schema = DataFrameSchema(
    {name: Column(nullable=True) for name in [*STATION_KEYS, *STATION_COLUMNS]},
    strict=False,
)

clean_schema = DataFrameSchema(
    {
        "band": Column(nullable=True),
        "species": Column(checks=Check.str_length(4, 4), nullable=True),
        "date": Column(checks=Check(lambda s: pd.api.types.is_datetime64_any_dtype(s), name="is_datetime"), nullable=True),
        "latitude": Column(float, Check.in_range(-90.0, 90.0), nullable=True),
        "longitude": Column(float, Check.in_range(-180.0, 180.0), nullable=True),
        "year": Column("Int64", nullable=True),
        "month": Column("Int64", Check.in_range(1, 12), nullable=True),
        "day": Column("Int64", Check.in_range(1, 31), nullable=True),
    },
    strict=False,
)

def assert_capture_columns(df):
    capture_raw_schema.validate(df, lazy=True)

def assert_station_columns(df):
    station_raw_schema.validate(df, lazy=True)

def assert_clean(df):
    clean_schema.validate(df, lazy=True)
