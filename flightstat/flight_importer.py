"""
Flight list importer.

Reads a list of flights from any common tabular format (Excel, CSV, TSV)
and returns Flight records for the statistics.

Supports:
- Auto-format detection (by file extension / content sniffing)
- Auto-column detection (by header name matching)
- Explicit column mapping via INI file
- Value normalization (dates, times of day, durations)

Usage:
    python -m flightstat.flight_importer --input flights.xlsx
    python -m flightstat.flight_importer --input flights.csv --mapping my_mapping.ini
"""

import argparse
import csv
import os
import re
from datetime import date, datetime, time, timedelta

from dateutil import parser as dateutil_parser
from openpyxl import load_workbook

from .column_detector import (
    detect_columns, load_column_mapping, resolve_mapping_names,
    missing_columns, print_mapping_report,
)
from .column_map import (
    COL_DATE, COL_TAKEOFF, COL_TAKEOFF_SITE, COL_TAKEOFF_COORD,
    COL_LANDING, COL_LANDING_SITE, COL_LANDING_COORD, COL_AIRTIME,
    COL_GLIDER, COL_FILENAME, COL_COMMENT,
)
from .flight import Flight


FORMATS = ['auto', 'excel', 'csv', 'tsv']

# Year-first values (2016-10-01, 2016-10-01T10:15+02:00) are ISO 8601, never day first
ISO_DATE = re.compile(r'^\d{4}-\d{2}-\d{2}')

# Text columns copied as-is onto the Flight
TEXT_FIELDS = {
    COL_GLIDER: 'glider',
    COL_TAKEOFF_SITE: 'takeoff_site',
    COL_TAKEOFF_COORD: 'takeoff_coord',
    COL_LANDING_SITE: 'landing_site',
    COL_LANDING_COORD: 'landing_coord',
    COL_FILENAME: 'filename',
    COL_COMMENT: 'comment',
}


def detect_format(file_path):
    """Auto-detect file format from extension and content.

    Args:
        file_path: Path to the input file.

    Returns:
        Format string: 'excel', 'csv' or 'tsv'.

    Raises:
        ValueError: If format cannot be determined.
    """
    ext = os.path.splitext(file_path)[1].lower()

    if ext in ('.xlsx', '.xlsm'):
        return 'excel'
    elif ext == '.csv':
        return 'csv'
    elif ext == '.tsv':
        return 'tsv'
    elif ext == '.txt':
        with open(file_path, 'r', encoding='utf-8') as f:
            header = f.readline()
        return 'tsv' if '\t' in header else 'csv'
    else:
        raise ValueError(
            f"Cannot determine format for '{file_path}' (extension: {ext}).\n"
            f"Supported formats: .xlsx, .xlsm, .csv, .tsv, .txt"
        )


def _read_excel(file_path):
    """Read headers and data rows from an Excel file.

    Returns:
        Tuple of (headers: list[str], rows: list[list]).
    """
    wb = load_workbook(file_path, read_only=True, data_only=True)

    # Use the 'Flights' sheet if there is one, otherwise the first sheet
    if 'Flights' in wb.sheetnames:
        ws = wb['Flights']
    else:
        ws = wb.active

    all_rows = list(ws.iter_rows(values_only=True))
    wb.close()

    if not all_rows:
        raise ValueError(f"Excel file is empty: {file_path}")

    headers = [str(cell or '').strip() for cell in all_rows[0]]

    data_rows = []
    for row in all_rows[1:]:
        if all(cell is None or str(cell).strip() == '' for cell in row):
            continue
        data_rows.append(list(row))

    print(f"  Read Excel: {len(data_rows)} rows, {len(headers)} columns")
    return headers, data_rows


def _read_csv(file_path, delimiter=','):
    """Read headers and data rows from a CSV/TSV file.

    Returns:
        Tuple of (headers: list[str], rows: list[list[str]]).
    """
    with open(file_path, 'r', encoding='utf-8', newline='') as f:
        rows = list(csv.reader(f, delimiter=delimiter))

    if not rows:
        raise ValueError(f"File is empty: {file_path}")

    headers = [cell.strip() for cell in rows[0]]
    data_rows = [row for row in rows[1:] if any(cell.strip() for cell in row)]

    fmt_name = 'TSV' if delimiter == '\t' else 'CSV'
    print(f"  Read {fmt_name}: {len(data_rows)} rows, {len(headers)} columns")
    return headers, data_rows


def read_source(file_path, fmt='auto'):
    """Read headers and rows from a flight list.

    Args:
        file_path: Path to the source file.
        fmt: One of FORMATS.

    Returns:
        Tuple of (format_used, headers, rows).

    Raises:
        ValueError: For unsupported formats or empty files.
    """
    if fmt in (None, '', 'auto'):
        fmt = detect_format(file_path)

    if fmt == 'excel':
        headers, rows = _read_excel(file_path)
    elif fmt == 'csv':
        headers, rows = _read_csv(file_path, delimiter=',')
    elif fmt == 'tsv':
        headers, rows = _read_csv(file_path, delimiter='\t')
    else:
        raise ValueError(f"Unsupported format: {fmt}")

    return fmt, headers, rows


def normalize_date(val):
    """Parse a date value in various formats.

    Handles: DD.MM.YYYY, YYYY-MM-DD, DD/MM/YYYY, date and datetime objects,
    ISO 8601 date-times (with or without offset), and anything else
    python-dateutil understands (day first).

    Args:
        val: Date value (string, date, datetime, or None).

    Returns:
        datetime object, or None if parsing fails.
    """
    if val is None:
        return None
    if isinstance(val, datetime):
        return val
    if isinstance(val, date):
        return datetime(val.year, val.month, val.day)

    s = str(val).strip()
    if not s:
        return None

    for fmt in [
        '%d.%m.%Y',      # 01.10.2016
        '%Y-%m-%d',      # 2016-10-01
        '%d/%m/%Y',      # 01/10/2016
        '%d.%m.%y',      # 01.10.16
    ]:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue

    return _parse_text(s)


def _parse_text(s, default=None):
    """Parse free-form date text with python-dateutil.

    ISO 8601 values go through isoparse (keeping any UTC offset); everything
    else is read day first, as in European logbooks.
    """
    try:
        if ISO_DATE.match(s):
            return dateutil_parser.isoparse(s)
        return dateutil_parser.parse(s, dayfirst=True, default=default)
    except (ValueError, OverflowError):
        return None


def normalize_time_of_day(val, day):
    """Combine a time-of-day value with a date.

    Args:
        val: '14:05', '14:05:30', datetime.time, full datetime or None.
        day: datetime giving the calendar day.

    Returns:
        datetime, or None if val is empty or unparseable.
    """
    if val is None:
        return None
    if isinstance(val, datetime):
        return val
    if isinstance(val, time):
        return datetime.combine(day.date(), val, tzinfo=day.tzinfo)

    s = str(val).strip()
    if not s:
        return None

    match = re.match(r'^(\d{1,2}):(\d{2})(?::(\d{2}))?$', s)
    if match:
        h, m, sec = int(match.group(1)), int(match.group(2)), int(match.group(3) or 0)
        if h < 24 and m < 60 and sec < 60:
            return day.replace(hour=h, minute=m, second=sec, microsecond=0)
        return None

    return _parse_text(s, default=day.replace(tzinfo=None))


def normalize_duration(val):
    """Convert an airtime value to a timedelta.

    Handles: H:MM, H:MM:SS, decimal minutes (numbers or strings with '.'
    or ','), timedelta and datetime.time objects.

    Args:
        val: Duration value (string, number, timedelta, time, or None).

    Returns:
        timedelta, or None if empty or unparseable.
    """
    if val is None:
        return None
    if isinstance(val, timedelta):
        return val
    if isinstance(val, time):
        return timedelta(hours=val.hour, minutes=val.minute, seconds=val.second)
    if isinstance(val, (int, float)):
        return timedelta(minutes=val)

    s = str(val).strip()
    if not s:
        return None

    match = re.match(r'^(-?)(\d+):(\d{2})(?::(\d{2}))?$', s)
    if match:
        sign = -1 if match.group(1) else 1
        h, m, sec = int(match.group(2)), int(match.group(3)), int(match.group(4) or 0)
        return sign * timedelta(hours=h, minutes=m, seconds=sec)

    try:
        return timedelta(minutes=float(s.replace(',', '.')))
    except ValueError:
        return None


def _cell(raw_row, mapping, col):
    src_idx = mapping.get(col)
    if src_idx is None or src_idx >= len(raw_row):
        return None
    return raw_row[src_idx]


def _text(val):
    if val is None:
        return ''
    return str(val).strip()


def row_to_flight(raw_row, mapping):
    """Build a Flight from one source row.

    Args:
        raw_row: List of cell values.
        mapping: Dict mapping our column index -> source column index.

    Returns:
        Flight, or None if the row has no parseable date.
    """
    day = normalize_date(_cell(raw_row, mapping, COL_DATE))
    if day is None:
        return None

    takeoff = normalize_time_of_day(_cell(raw_row, mapping, COL_TAKEOFF), day) or day
    landing = normalize_time_of_day(_cell(raw_row, mapping, COL_LANDING), takeoff)
    if landing is not None and landing < takeoff:
        # landed after midnight
        landing += timedelta(days=1)

    duration = normalize_duration(_cell(raw_row, mapping, COL_AIRTIME))
    if duration is None:
        duration = landing - takeoff if landing is not None else timedelta(0)

    fields = {attr: _text(_cell(raw_row, mapping, col)) for col, attr in TEXT_FIELDS.items()}
    return Flight(takeoff, duration, landing=landing, **fields)


def read_flights(input_file, fmt='auto', column_mapping=None):
    """Read a flight list into Flight records.

    Args:
        input_file: Path to the source file (Excel, CSV or TSV).
        fmt: Format ('auto', 'excel', 'csv', 'tsv').
        column_mapping: Optional path to an explicit column mapping file.

    Returns:
        Tuple of (flights: list[Flight], info: dict) where info holds the
        format used, the mapping and the number of skipped rows.

    Raises:
        ValueError: If the source cannot be read or a required column is
            missing.
    """
    print(f"\nFlight Import: {os.path.basename(input_file)}")
    print("=" * 70)

    fmt_used, headers, raw_rows = read_source(input_file, fmt)

    if column_mapping and os.path.exists(column_mapping):
        print(f"  Loading explicit column mapping from: {column_mapping}")
        mapping = resolve_mapping_names(load_column_mapping(column_mapping), headers)
    else:
        print("  Auto-detecting column mapping...")
        mapping = detect_columns(headers)

    print_mapping_report(mapping, headers)
    errors = missing_columns(mapping)
    if errors:
        raise ValueError(
            f"Cannot read flights from {input_file}: " + '; '.join(errors) + "\n"
            f"Provide a column mapping file with a [columns] section."
        )

    flights = []
    skipped = 0
    for raw_row in raw_rows:
        flight = row_to_flight(list(raw_row), mapping)
        if flight is None:
            skipped += 1
            continue
        flights.append(flight)

    print(f"  Flights: {len(flights)}")
    if skipped:
        print(f"  Rows skipped (no date): {skipped}")

    return flights, {
        'format': fmt_used,
        'mapping': mapping,
        'flights': len(flights),
        'skipped': skipped,
    }


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Read a flight list and print the flights')
    parser.add_argument('--input', '-i', required=True,
                        help='Source file (Excel, CSV or TSV)')
    parser.add_argument('--format', '-f', default='auto', choices=FORMATS,
                        help='Source format (default: auto-detect)')
    parser.add_argument('--mapping', '-m', default=None,
                        help='Column mapping INI file (default: auto-detect)')
    args = parser.parse_args()
    flights, _ = read_flights(args.input, args.format, args.mapping)
    for flight in flights:
        print(f"  {flight!r}")
