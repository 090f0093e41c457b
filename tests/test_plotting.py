import matplotlib.pyplot as plt
import pandas as pd
import pytest

from mapsbanding import plotting
from mapsbanding.aggregate import counts_by_year_species, proportions_by_year, unique_recaptures_by_year_species
from mapsbanding.hulls import species_hulls

@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")

def test_capture_map_plots_only_geolocated(clean):
    fig, ax = plotting.plot_capture_map(clean)
    labels = [t.get_text() for t in ax.get_legend().get_texts()]
    # CACH only occurs at a station without usable coordinates
    assert any("BCCH" in l for l in labels)
    assert not any("CACH" in l for l in labels)

def test_capture_map_empty_has_no_data_note():
    empty = pd.DataFrame({"species": [], "latitude": [], "longitude": []})
    fig, ax = plotting.plot_capture_map(empty)
    assert any(t.get_text() == "No data" for t in ax.texts)

def test_hexbin_one_panel_per_located_species(clean):
    fig, axes = plotting.plot_hexbin_density(clean)
    visible = [ax for ax in axes if ax.get_visible()]
    assert len(visible) == 2  # BCCH, BOCH

def test_plot_hulls_draws_outline(clean):
    hulls = species_hulls(clean, "convex")
    fig, ax = plotting.plot_hulls(clean, hulls)
    assert len(ax.lines) == 1
    assert "Convex" in ax.get_title()

def test_time_series_plots(clean):
    counts = counts_by_year_species(clean)
    fig, ax = plotting.plot_proportion_area(proportions_by_year(counts))
    assert ax.get_ylim() == (0, 1)
    fig, ax = plotting.plot_abundance(counts)
    assert len(ax.lines) == counts["species"].nunique()
    fig, ax = plotting.plot_unique_recaptures(unique_recaptures_by_year_species(clean))
    assert len(ax.lines) == 3

def test_plot_on_given_axis(clean):
    fig, ax = plt.subplots()
    out_fig, out_ax = plotting.plot_abundance(counts_by_year_species(clean), ax=ax)
    assert out_ax is ax and out_fig is fig

def test_map_extent_pads(clean):
    lon_min, lon_max, lat_min, lat_max = plotting.map_extent(clean, pad=1.0)
    assert lon_min == pytest.approx(-77.5)
    assert lat_max == pytest.approx(47.0)
