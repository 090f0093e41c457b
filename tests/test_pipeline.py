import pandas as pd
import pytest

from mapsbanding import config, pipeline
from mapsbanding.__main__ import main
from mapsbanding.data_io import load_interim

@pytest.fixture
def interim_dir(tmp_path, monkeypatch):
    d = tmp_path / "interim"
    monkeypatch.setattr(config, "INTERIM", d)
    return d

def test_make_clean_saves_interim(raw_files, interim_dir):
    cap, sta = raw_files
    clean = pipeline.make_clean(cap, sta)
    assert len(clean) == 12
    assert (interim_dir / pipeline.CLEAN_NAME).exists()
    saved = load_interim(pipeline.CLEAN_NAME)
    assert len(saved) == 12

def test_make_clean_without_save(raw_files, interim_dir):
    cap, sta = raw_files
    pipeline.make_clean(cap, sta, save=False)
    assert not interim_dir.exists()

def test_make_aggregates_keys(clean):
    aggs = pipeline.make_aggregates(clean)
    assert set(aggs) == {"counts", "proportions", "recaptures", "abundance", "summary", "convex_hulls", "concave_hulls"}

def test_make_report_writes_html(clean, tmp_path):
    path = pipeline.make_report(clean, output=tmp_path / "report.html")
    html = path.read_text(encoding="utf-8")
    assert "Range estimates" in html
    assert "data:image/gif;base64," in html
    assert html.count("data:image/png;base64,") >= 7

def test_make_report_without_animation(clean, tmp_path):
    path = pipeline.make_report(clean, output=tmp_path / "report.html", animate=False)
    assert "data:image/gif" not in path.read_text(encoding="utf-8")

def test_cli_runs_end_to_end(raw_files, interim_dir, tmp_path, capsys):
    cap, sta = raw_files
    out = tmp_path / "r.html"
    code = main(["--captures", str(cap), "--stations", str(sta), "--output", str(out), "--no-animation", "--no-interim"])
    assert code == 0
    assert out.exists()
    assert str(out) in capsys.readouterr().out

def test_cli_missing_input_fails(tmp_path):
    code = main(["--captures", str(tmp_path / "none.csv"), "--stations", str(tmp_path / "none.csv")])
    assert code == 1

def test_make_report_reloads_saved_table(raw_files, interim_dir, tmp_path):
    cap, sta = raw_files
    pipeline.make_clean(cap, sta)
    path = pipeline.make_report(output=tmp_path / "report.html", animate=False)
    assert "Species summary" in path.read_text(encoding="utf-8")

def test_make_report_without_saved_table_raises(interim_dir, tmp_path):
    with pytest.raises(FileNotFoundError):
        pipeline.make_report(output=tmp_path / "report.html")

def test_cli_from_interim(raw_files, interim_dir, tmp_path):
    cap, sta = raw_files
    pipeline.make_clean(cap, sta)
    out = tmp_path / "r.html"
    assert main(["--from-interim", "--output", str(out), "--no-animation"]) == 0
    assert out.exists()
