"""
End-to-end run: load -> clean -> aggregate -> render.

The steps are plain functions so a notebook can stop after any of them;
:func:`run` chains all three the way the command line does.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from .config import CHICKADEE_SPECIES, REPORT_HTML
from .ingest import read_captures_raw, read_stations_raw
from .cleaning import normalize_columns, clean_captures, geolocated
from .validators import assert_capture_columns, assert_station_columns, assert_clean
from .data_io import save_interim, load_interim
from .aggregate import (
    counts_by_year_species, proportions_by_year, unique_recaptures_by_year_species,
    abundance_table, species_summary,
)
from .hulls import species_hulls, hull_area_table
from . import plotting
from .animation import animate_capture_map
from .report import ReportSection, figure_to_base64, bytes_to_data_uri, write_report

logger = logging.getLogger(__name__)

CLEAN_NAME = "captures_clean.parquet"
REPORT_TITLE = "Chickadee captures in the MAPS banding program"


def make_clean(
    captures_path: str | Path | None = None,
    stations_path: str | Path | None = None,
    save: bool = True,
) -> pd.DataFrame:
    # ---- Load ----
    captures = normalize_columns(read_captures_raw(captures_path))
    stations = normalize_columns(read_stations_raw(stations_path))
    assert_capture_columns(captures)
    assert_station_columns(stations)
    logger.info("Loaded %d capture records and %d stations", len(captures), len(stations))

    # ---- Join / clean ----
    clean = clean_captures(captures, stations)
    assert_clean(clean)
    logger.info(
        "Cleaned table: %d records, %d geolocated, %d species",
        len(clean), len(geolocated(clean)), clean["species"].nunique(),
    )
    if save:
        path = save_interim(clean, CLEAN_NAME)
        logger.info("Saved %s", path)
    return clean


def make_aggregates(clean: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    counts = counts_by_year_species(clean)
    return {
        "counts": counts,
        "proportions": proportions_by_year(counts),
        "recaptures": unique_recaptures_by_year_species(clean),
        "abundance": abundance_table(clean),
        "summary": species_summary(clean),
        "convex_hulls": species_hulls(clean, kind="convex"),
        "concave_hulls": species_hulls(clean, kind="concave"),
    }


def build_sections(clean: pd.DataFrame, aggregates: Dict[str, pd.DataFrame], animate: bool = True) -> list[ReportSection]:
    extent = plotting.map_extent(clean)
    sections = [
        ReportSection(
            "Species summary",
            "Captures, individuals and stations per species. "
            "Records without usable station coordinates count here but are left out of every map.",
            tables=[aggregates["summary"]],
        ),
        ReportSection(
            "Capture locations",
            images=[figure_to_base64(plotting.plot_capture_map(clean, extent=extent)[0])],
        ),
        ReportSection(
            "Capture density",
            images=[figure_to_base64(plotting.plot_hexbin_density(clean)[0])],
        ),
    ]

    if animate:
        gif = animate_capture_map(clean)
        if gif is not None:
            sections.append(ReportSection(
                "Captures through the years",
                images=[bytes_to_data_uri(gif, "image/gif")],
            ))

    convex, concave = aggregates["convex_hulls"], aggregates["concave_hulls"]
    sections.append(ReportSection(
        "Range estimates",
        "Convex and concave hulls over capture locations; species with fewer than "
        "three geolocated captures have no hull. Areas are in square degrees.",
        images=[
            figure_to_base64(plotting.plot_hulls(clean, convex, extent=extent)[0]),
            figure_to_base64(plotting.plot_hulls(clean, concave, extent=extent)[0]),
        ],
        tables=[hull_area_table(convex, concave)],
    ))
    sections += [
        ReportSection(
            "Species composition",
            images=[figure_to_base64(plotting.plot_proportion_area(aggregates["proportions"])[0])],
        ),
        ReportSection(
            "Abundance",
            images=[figure_to_base64(plotting.plot_abundance(aggregates["counts"])[0])],
        ),
        ReportSection(
            "Recaptures",
            "Each recaptured bird counted once, in the year and species of its earliest record.",
            images=[figure_to_base64(plotting.plot_unique_recaptures(aggregates["recaptures"])[0])],
            tables=[aggregates["abundance"]],
        ),
    ]
    return sections


def make_report(
    clean: Optional[pd.DataFrame] = None,
    output: str | Path | None = None,
    animate: bool = True,
    aggregates: Optional[Dict[str, pd.DataFrame]] = None,
) -> Path:
    """Render the report; without `clean`, the table saved by `make_clean` is reloaded."""
    if clean is None:
        clean = load_interim(CLEAN_NAME)
        logger.info("Loaded %d cleaned records from %s", len(clean), CLEAN_NAME)
    aggregates = aggregates or make_aggregates(clean)
    sections = build_sections(clean, aggregates, animate=animate)
    species = ", ".join(CHICKADEE_SPECIES[s] for s in CHICKADEE_SPECIES if s in set(clean["species"].dropna()))
    path = write_report(output or REPORT_HTML, sections, REPORT_TITLE, subtitle=species or None)
    logger.info("Report written to %s", path)
    return path


def run(
    captures_path: str | Path | None = None,
    stations_path: str | Path | None = None,
    output: str | Path | None = None,
    animate: bool = True,
    keep_interim: bool = True,
    from_interim: bool = False,
) -> Path:
    if from_interim:
        return make_report(output=output, animate=animate)
    clean = make_clean(captures_path, stations_path, save=keep_interim)
    return make_report(clean, output=output, animate=animate)
