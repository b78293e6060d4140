#!/usr/bin/env python3
"""
Flight statistics pipeline runner.

Reads a flight list (Excel, CSV or TSV) and writes:
1. A CSV report: flight listing, statistics by day/month/year, glider breakdown
2. An Excel report with the same content

Usage:
    python run.py --input flights.xlsx                        # Uses config.ini for outputs
    python run.py --input flights.csv --csv stats.csv         # CSV report only
    python run.py --input flights.csv --xlsx stats.xlsx --glider "Advance Alpha 6"
    python run.py --input flights.csv --no-gliders            # Without glider breakdown
    python run.py                                             # Uses config.ini
"""

import argparse
import sys
import os

from flightstat.config import Config
from flightstat.csv_report import create_csv_report
from flightstat.flight_importer import FORMATS, read_flights
from flightstat.formatting import format_minutes
from flightstat.statistics import FlightStat
from flightstat.xlsx_report import create_xlsx_report


def run_import(config):
    """Step 1: Read the flight list."""
    print("\n" + "=" * 70)
    print("STEP 1: Importing flights")
    print("=" * 70)
    print(f"  Source: {config.input_file}")
    print(f"  Format: {config.input_format}")
    flights, _ = read_flights(config.input_file, config.input_format, config.column_mapping or None)
    return flights


def run_statistics(config, flights):
    """Step 2: Build the statistics."""
    print("\n" + "=" * 70)
    print("STEP 2: Building statistics")
    print("=" * 70)
    stat = FlightStat.build(flights, config.default_glider, config.include_gliders)
    print(f"  Flights: {stat.flights}")
    print(f"  Airtime: {format_minutes(stat.airtime)} min")
    print(f"  Years: {', '.join(str(y) for y in sorted(stat.years)) or '-'}")
    print(f"  Gliders: {len(stat.gliders)}")
    return stat


def run_reports(config, flights, stat):
    """Step 3: Write the reports."""
    print("\n" + "=" * 70)
    print("STEP 3: Writing reports")
    print("=" * 70)
    for kind, path in config.outputs():
        if kind == 'csv':
            create_csv_report(flights, stat, path)
        else:
            create_xlsx_report(flights, stat, path, title=config.title)


def main():
    parser = argparse.ArgumentParser(
        description='Flight statistics by day, month, year and glider',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Supported input formats:
  .xlsx / .xlsm  Excel spreadsheet
  .csv           Comma-separated values
  .tsv / .txt    Tab-separated values

Examples:
  python run.py --input flights.xlsx --csv stats.csv --xlsx stats.xlsx
  python run.py --input flights.csv --mapping columns.ini
  python run.py --input flights.csv --glider "Default" --no-gliders
        """,
    )
    parser.add_argument('--config', '-c', default='config.ini',
                        help='Config file path (default: config.ini)')
    parser.add_argument('--input', '-i', default=None,
                        help='Flight list (Excel, CSV or TSV)')
    parser.add_argument('--format', '-f', default=None, choices=FORMATS,
                        help='Input format (default: auto-detect)')
    parser.add_argument('--mapping', '-m', default=None,
                        help='Column mapping INI file (default: auto-detect)')
    parser.add_argument('--csv', default=None,
                        help='Override CSV report path')
    parser.add_argument('--xlsx', default=None,
                        help='Override Excel report path')
    parser.add_argument('--glider', '-g', default=None,
                        help='Glider name for flights without one')
    parser.add_argument('--no-gliders', action='store_true',
                        help='Leave out the glider breakdown')
    parser.add_argument('--title', '-t', default=None,
                        help='Title of the statistics in the Excel report')

    args = parser.parse_args()

    config = Config.from_file(args.config)
    config.override(
        input_file=args.input,
        input_format=args.format,
        column_mapping=args.mapping,
        csv_output=args.csv,
        xlsx_output=args.xlsx,
        default_glider=args.glider,
        title=args.title,
    )
    if args.no_gliders:
        config.include_gliders = False

    print("Flight Statistics")
    print("=" * 70)
    print(f"Config: {os.path.abspath(args.config)}")
    print(f"Input: {config.input_file or '(not set)'} [{config.input_format}]")
    print(f"Default glider: {config.default_glider or '(none)'}")
    for kind, path in config.outputs():
        print(f"{kind.upper()} report: {path}")

    try:
        config.validate()
        flights = run_import(config)
        stat = run_statistics(config, flights)
        run_reports(config, flights, stat)

        print("\n" + "=" * 70)
        print("PIPELINE COMPLETE")
        print("=" * 70)

    except FileNotFoundError as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        raise


if __name__ == '__main__':
    main()
