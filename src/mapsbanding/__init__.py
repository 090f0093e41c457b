from .coords import dms_to_dd, dms_series_to_dd
from .cleaning import clean_captures, geolocated
from .aggregate import (
    counts_by_year_species, proportions_by_year,
    first_recapture_records, unique_recaptures_by_year_species,
    abundance_table, species_summary,
)
from .hulls import species_hull, species_hulls
from .pipeline import make_clean, make_aggregates, make_report, run

__all__ = [
    "dms_to_dd",
    "dms_series_to_dd",
    "clean_captures",
    "geolocated",
    "counts_by_year_species",
    "proportions_by_year",
    "first_recapture_records",
    "unique_recaptures_by_year_species",
    "abundance_table",
    "species_summary",
    "species_hull",
    "species_hulls",
    "make_clean",
    "make_aggregates",
    "make_report",
    "run",
]

__version__ = "0.1.0"
