#!/usr/bin/env python3
"""
Write the flight listing and the flight statistics as CSV.

Layout:
    Date,Takeoff,Takeoff Site,...      one line per flight
    Period,Flights,Airtime             statistics header
    01.10.2016,1,11.00                 day rows, month/year totals, Total
    Glider,Flights,Airtime             glider section (when enabled)

Usage:
    python -m flightstat.csv_report --input flights.xlsx --output stats.csv
"""

import argparse
import csv

from .column_map import LISTING_HEADER
from .formatting import format_date, format_minutes, format_time
from .safe_write import replace_on_success
from .statistics import (
    FlightStat, GLIDER_HEADER, GLIDER_SECTION_HEADER, REPORT_HEADER, UNKNOWN_GLIDER,
)


def flight_row(flight, stat):
    """CSV fields of one flight in the listing."""
    return [
        format_date(flight.takeoff),
        format_time(flight.takeoff),
        flight.takeoff_site,
        flight.takeoff_coord,
        format_time(flight.landing),
        flight.landing_site,
        flight.landing_coord,
        format_minutes(flight.duration),
        stat.resolve_glider(flight),
        flight.filename,
    ]


def write_flights(writer, flights, stat):
    """Write the flight listing with its header."""
    writer.writerow(LISTING_HEADER)
    for flight in flights:
        writer.writerow(flight_row(flight, stat))


def write_statistics(writer, stat):
    """Write the statistics rows in report order."""
    writer.writerow(REPORT_HEADER)
    for row in stat.rows():
        if row.kind == GLIDER_HEADER:
            writer.writerow(GLIDER_SECTION_HEADER)
        else:
            writer.writerow([row.label, str(row.flights), f"{row.minutes:.2f}"])


def create_csv_report(flights, stat, output_file, include_flights=True):
    """Write the CSV report.

    Args:
        flights: List of Flight records (for the listing).
        stat: FlightStat built from the same flights.
        output_file: Path of the CSV file.
        include_flights: Write the flight listing before the statistics.

    Returns:
        Number of statistics rows written.
    """
    rows = stat.rows()
    with replace_on_success(output_file) as tmp_path:
        with open(tmp_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            if include_flights:
                write_flights(writer, flights, stat)
            write_statistics(writer, stat)

    print(f"\nCSV file created: {output_file}")
    print(f"  Flights listed: {len(flights) if include_flights else 0}")
    print(f"  Statistics rows: {len(rows)}")
    return len(rows)


if __name__ == '__main__':
    from .flight_importer import read_flights

    parser = argparse.ArgumentParser(description='Write flight statistics as CSV')
    parser.add_argument('--input', '-i', required=True, help='Flight list (Excel, CSV or TSV)')
    parser.add_argument('--output', '-o', required=True, help='Output CSV file path')
    parser.add_argument('--glider', '-g', default=UNKNOWN_GLIDER, help='Default glider name')
    args = parser.parse_args()
    flights, _ = read_flights(args.input)
    create_csv_report(flights, FlightStat.build(flights, args.glider), args.output)
