#!/usr/bin/env python3
"""
Write the flight listing and the flight statistics as an Excel workbook.

One sheet ("Flight Statistics") holding:
1. The flight listing: merged "Flights" title, a grouped Takeoff/Landing
   header with a Time/Site/Coord sub-header, one row per flight
2. The statistics: merged title row, Period/Flights/Airtime header, day
   rows (real date cells), month/year totals and the grand total
3. The glider breakdown (when enabled)

Usage:
    python -m flightstat.xlsx_report --input flights.csv --output stats.xlsx
"""

import argparse
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from .column_map import (
    COL_DATE, COL_TAKEOFF, COL_TAKEOFF_SITE, COL_TAKEOFF_COORD,
    COL_LANDING, COL_LANDING_SITE, COL_LANDING_COORD, COL_AIRTIME,
    COL_GLIDER, COL_FILENAME, LISTING_COLUMNS,
)
from .formatting import XLSX_DATE_FORMAT, XLSX_MINUTES_FORMAT, XLSX_TIME_FORMAT
from .safe_write import replace_on_success
from .statistics import (
    FlightStat, DAY, MONTH, YEAR, TOTAL, GLIDER, GLIDER_HEADER,
    GLIDER_SECTION_HEADER, REPORT_HEADER, UNKNOWN_GLIDER,
)


SHEET_TITLE = "Flight Statistics"

# ============ Styles ============

HEADER_FONT = Font(name='Calibri', bold=True, color='FFFFFF', size=10)
HEADER_FILL = PatternFill(start_color='1F4E79', end_color='1F4E79', fill_type='solid')
SUBHEADER_FILL = PatternFill(start_color='2E75B6', end_color='2E75B6', fill_type='solid')
TITLE_FONT = Font(name='Calibri', bold=True, size=14, color='1F4E79')
DATA_FONT = Font(name='Calibri', size=9)
TOTAL_FONT = Font(name='Calibri', bold=True, size=9)
MONTH_FILL = PatternFill(start_color='E2EFDA', end_color='E2EFDA', fill_type='solid')
YEAR_FILL = PatternFill(start_color='FCE4D6', end_color='FCE4D6', fill_type='solid')
THIN_BORDER = Border(
    left=Side(style='thin', color='B4C6E7'),
    right=Side(style='thin', color='B4C6E7'),
    top=Side(style='thin', color='B4C6E7'),
    bottom=Side(style='thin', color='B4C6E7')
)
CENTER_ALIGN = Alignment(horizontal='center', vertical='center')

ROW_FILLS = {
    MONTH: MONTH_FILL,
    YEAR: YEAR_FILL,
    TOTAL: YEAR_FILL,
}

COLUMN_WIDTHS = [
    (COL_DATE, 20), (COL_TAKEOFF, 9), (COL_TAKEOFF_SITE, 18),
    (COL_TAKEOFF_COORD, 22), (COL_LANDING, 9), (COL_LANDING_SITE, 18),
    (COL_LANDING_COORD, 22), (COL_AIRTIME, 10), (COL_GLIDER, 18),
    (COL_FILENAME, 30),
]


def _naive(value):
    """Drop the time zone; Excel cannot store tz-aware datetimes."""
    if value is None or value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


def _header_cell(ws, row, column, value, fill=HEADER_FILL):
    cell = ws.cell(row=row, column=column, value=value)
    cell.font = HEADER_FONT
    cell.fill = fill
    cell.alignment = CENTER_ALIGN
    cell.border = THIN_BORDER
    return cell


def _data_cell(ws, row, column, value, number_format=None, font=DATA_FONT):
    cell = ws.cell(row=row, column=column, value=value)
    cell.font = font
    cell.border = THIN_BORDER
    cell.alignment = CENTER_ALIGN
    if number_format:
        cell.number_format = number_format
    return cell


def write_flights(ws, flights, stat, row=1):
    """Write the flight listing starting at the given row.

    Returns:
        Next free row.
    """
    # 1st row: title over all listing columns
    _header_cell(ws, row, 1, "Flights")
    ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=LISTING_COLUMNS)
    row += 1

    # 2nd row: Takeoff and Landing span Time/Site/Coord
    _header_cell(ws, row, COL_DATE, "Date")
    _header_cell(ws, row, COL_TAKEOFF, "Takeoff")
    ws.merge_cells(start_row=row, start_column=COL_TAKEOFF, end_row=row, end_column=COL_TAKEOFF_COORD)
    _header_cell(ws, row, COL_LANDING, "Landing")
    ws.merge_cells(start_row=row, start_column=COL_LANDING, end_row=row, end_column=COL_LANDING_COORD)
    _header_cell(ws, row, COL_AIRTIME, "Airtime")
    _header_cell(ws, row, COL_GLIDER, "Glider")
    _header_cell(ws, row, COL_FILENAME, "Filename")
    row += 1

    # 3rd row: sub-header
    _header_cell(ws, row, COL_DATE, None, SUBHEADER_FILL)
    for col, label in [(COL_TAKEOFF, "Time"), (COL_TAKEOFF_SITE, "Site"), (COL_TAKEOFF_COORD, "Coord"),
                       (COL_LANDING, "Time"), (COL_LANDING_SITE, "Site"), (COL_LANDING_COORD, "Coord")]:
        _header_cell(ws, row, col, label, SUBHEADER_FILL)
    for col in (COL_AIRTIME, COL_GLIDER, COL_FILENAME):
        _header_cell(ws, row, col, None, SUBHEADER_FILL)
    row += 1

    for flight in flights:
        takeoff = _naive(flight.takeoff)
        landing = _naive(flight.landing)
        _data_cell(ws, row, COL_DATE, takeoff.date(), XLSX_DATE_FORMAT)
        _data_cell(ws, row, COL_TAKEOFF, takeoff, XLSX_TIME_FORMAT)
        _data_cell(ws, row, COL_TAKEOFF_SITE, flight.takeoff_site or None)
        _data_cell(ws, row, COL_TAKEOFF_COORD, flight.takeoff_coord or None)
        _data_cell(ws, row, COL_LANDING, landing, XLSX_TIME_FORMAT if landing else None)
        _data_cell(ws, row, COL_LANDING_SITE, flight.landing_site or None)
        _data_cell(ws, row, COL_LANDING_COORD, flight.landing_coord or None)
        _data_cell(ws, row, COL_AIRTIME, round(flight.duration.total_seconds() / 60, 2), XLSX_MINUTES_FORMAT)
        _data_cell(ws, row, COL_GLIDER, stat.resolve_glider(flight) or None)
        _data_cell(ws, row, COL_FILENAME, flight.comment or flight.filename or None)
        row += 1

    return row


def write_statistics(ws, stat, row=1, title="Statistics"):
    """Write the statistics rows starting at the given row.

    Returns:
        Next free row.
    """
    title_cell = ws.cell(row=row, column=1, value=title)
    title_cell.font = TITLE_FONT
    ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=3)
    row += 1

    for col, label in enumerate(REPORT_HEADER, 1):
        _header_cell(ws, row, col, label)
    row += 1

    for report_row in stat.rows():
        if report_row.kind == GLIDER_HEADER:
            row += 1  # blank line before the glider section
            for col, label in enumerate(GLIDER_SECTION_HEADER, 1):
                _header_cell(ws, row, col, label)
            row += 1
            continue

        font = DATA_FONT if report_row.kind in (DAY, GLIDER) else TOTAL_FONT
        if report_row.kind == DAY:
            _data_cell(ws, row, 1, report_row.date, XLSX_DATE_FORMAT)
        else:
            _data_cell(ws, row, 1, report_row.label, font=font)
        _data_cell(ws, row, 2, report_row.flights, font=font)
        _data_cell(ws, row, 3, report_row.minutes, XLSX_MINUTES_FORMAT, font=font)

        fill = ROW_FILLS.get(report_row.kind)
        if fill:
            for col in range(1, 4):
                ws.cell(row=row, column=col).fill = fill
        row += 1

    return row


def create_xlsx_report(flights, stat, output_file, title="Statistics", include_flights=True):
    """Write the Excel report.

    Args:
        flights: List of Flight records (for the listing).
        stat: FlightStat built from the same flights.
        output_file: Path of the .xlsx file.
        title: Text of the merged statistics title row.
        include_flights: Write the flight listing above the statistics.

    Returns:
        The openpyxl Workbook that was saved.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    for col, width in COLUMN_WIDTHS:
        ws.column_dimensions[get_column_letter(col)].width = width

    row = 1
    if include_flights:
        row = write_flights(ws, flights, stat, row)
        row += 1  # blank line between listing and statistics
    write_statistics(ws, stat, row, title)

    with replace_on_success(output_file) as tmp_path:
        wb.save(tmp_path)

    print(f"\nExcel file created: {output_file}")
    print(f"Sheet: {SHEET_TITLE}")
    return wb


if __name__ == '__main__':
    from .flight_importer import read_flights

    parser = argparse.ArgumentParser(description='Write flight statistics as Excel workbook')
    parser.add_argument('--input', '-i', required=True, help='Flight list (Excel, CSV or TSV)')
    parser.add_argument('--output', '-o', required=True, help='Output Excel file path')
    parser.add_argument('--glider', '-g', default=UNKNOWN_GLIDER, help='Default glider name')
    parser.add_argument('--title', '-t', default='Statistics', help='Statistics title row')
    args = parser.parse_args()
    flights, _ = read_flights(args.input)
    create_xlsx_report(flights, FlightStat.build(flights, args.glider), args.output, args.title)
