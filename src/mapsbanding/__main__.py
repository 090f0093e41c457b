"""Command line entry: ``python -m mapsbanding``."""
from __future__ import annotations
import argparse
import logging
import sys

from pandera.errors import SchemaErrors

from .pipeline import run

logger = logging.getLogger("mapsbanding")


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="mapsbanding", description="Render the MAPS chickadee banding report.")
    ap.add_argument("--captures", default=None, help="capture table (csv/tsv/xlsx); default data/raw/captures.csv")
    ap.add_argument("--stations", default=None, help="station table (csv/tsv/xlsx); default data/raw/stations.csv")
    ap.add_argument("--output", default=None, help="report path; default reports/chickadee_report.html")
    ap.add_argument("--no-animation", action="store_true", help="skip the animated map")
    ap.add_argument("--no-interim", action="store_true", help="do not save the cleaned Parquet table")
    ap.add_argument("--from-interim", action="store_true", help="render from the saved cleaned table instead of the raw inputs")
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        path = run(
            captures_path=args.captures,
            stations_path=args.stations,
            output=args.output,
            animate=not args.no_animation,
            keep_interim=not args.no_interim,
            from_interim=args.from_interim,
        )
    except (OSError, KeyError, ValueError, SchemaErrors) as exc:
        logger.error("Report generation failed: %s", exc)
        return 1
    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
