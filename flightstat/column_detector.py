"""
Auto-detection and mapping of flight list column headers.

Maps common header names (flight book exports, XContest/Leonardo style
lists, manual spreadsheets) to the flight list layout defined in
column_map.py.

Supports:
- Auto-detection via fuzzy header matching
- Explicit mapping via INI config file
- Validation of the columns needed for the statistics
"""

import configparser
import re

from .column_map import (
    COL_DATE, COL_TAKEOFF, COL_TAKEOFF_SITE, COL_TAKEOFF_COORD,
    COL_LANDING, COL_LANDING_SITE, COL_LANDING_COORD, COL_AIRTIME,
    COL_GLIDER, COL_FILENAME, COL_COMMENT,
)


# ============ Header Alias Database ============
# Aliases are checked case-insensitively. The FIRST match wins.
# More specific aliases should come before generic ones.

HEADER_ALIASES = {
    COL_DATE: [
        'date', 'flight date', 'flt date', 'flight_date', 'day',
        # German
        'datum',
    ],
    COL_TAKEOFF: [
        'takeoff', 'takeoff time', 'take off', 'take-off', 'launch',
        'launch time', 'start', 'start time', 'departure time', 'dep time',
        # German
        'startzeit',
    ],
    COL_TAKEOFF_SITE: [
        'takeoff site', 'launch site', 'start site', 'site', 'start place',
        'startplatz',
    ],
    COL_TAKEOFF_COORD: [
        'takeoff coord', 'takeoff coordinates', 'launch coord',
        'launch coordinates', 'start coord',
    ],
    COL_LANDING: [
        'landing', 'landing time', 'land', 'arrival time', 'arr time',
        'end time', 'landezeit',
    ],
    COL_LANDING_SITE: [
        'landing site', 'landing place', 'landeplatz',
    ],
    COL_LANDING_COORD: [
        'landing coord', 'landing coordinates',
    ],
    COL_AIRTIME: [
        'airtime', 'air time', 'duration', 'flight time', 'flight duration',
        'minutes', 'time', 'flugzeit', 'dauer',
    ],
    COL_GLIDER: [
        'glider', 'wing', 'glider type', 'aircraft', 'paraglider',
        'schirm',
    ],
    COL_FILENAME: [
        'filename', 'file', 'igc file', 'track', 'igc',
    ],
    COL_COMMENT: [
        'comment', 'comments', 'remarks', 'notes', 'bemerkung',
    ],
}

# Columns required to build statistics
REQUIRED_COLUMNS = {COL_DATE}

# A flight needs either an airtime or a landing time
DURATION_COLUMNS = {COL_AIRTIME, COL_LANDING}

# Names used in mapping files and printed reports
COLUMN_NAMES = {
    COL_DATE: 'Date',
    COL_TAKEOFF: 'Takeoff',
    COL_TAKEOFF_SITE: 'Takeoff Site',
    COL_TAKEOFF_COORD: 'Takeoff Coord',
    COL_LANDING: 'Landing',
    COL_LANDING_SITE: 'Landing Site',
    COL_LANDING_COORD: 'Landing Coord',
    COL_AIRTIME: 'Airtime',
    COL_GLIDER: 'Glider',
    COL_FILENAME: 'Filename',
    COL_COMMENT: 'Comment',
}


def _normalize_header(header):
    """Normalize a header string for matching.

    Strips whitespace, lowercases, replaces punctuation with spaces.
    """
    if not header:
        return ''
    h = str(header).strip().lower()
    h = re.sub(r'[^\w\s]', ' ', h)
    h = re.sub(r'[\s_]+', ' ', h).strip()
    return h


def _first_free(aliases, headers, taken, matches):
    """Index of the first untaken header matching one of the aliases, in alias order."""
    for alias in aliases:
        for idx, header in enumerate(headers):
            if idx not in taken and header and matches(alias, header):
                return idx
    return None


def detect_columns(headers):
    """Auto-detect column mapping from header names.

    Exact header matches are assigned first; columns still unmapped after
    that may match a header containing one of their aliases.

    Args:
        headers: List of raw header strings from the source file.

    Returns:
        Dict mapping our column index -> source column index (0-based).
        Only includes detected columns.
    """
    normalized = [_normalize_header(h) for h in headers]
    aliases = {col: [_normalize_header(a) for a in names] for col, names in HEADER_ALIASES.items()}
    passes = [
        lambda alias, header: alias == header,
        # aliases under 4 characters ('day', 'igc') only match exactly
        lambda alias, header: len(alias) >= 4 and alias in header,
    ]

    mapping = {}
    for matches in passes:
        for col, names in aliases.items():
            if col in mapping:
                continue
            idx = _first_free(names, normalized, set(mapping.values()), matches)
            if idx is not None:
                mapping[col] = idx
    return mapping


def _column_for_name(name):
    """Our column index for a name used in a mapping file ('Airtime', 'Wing'), or None."""
    norm = _normalize_header(name)
    for col, column_name in COLUMN_NAMES.items():
        if _normalize_header(column_name) == norm:
            return col
    for col, names in HEADER_ALIASES.items():
        if any(_normalize_header(a) == norm for a in names):
            return col
    return None


def load_column_mapping(mapping_file):
    """Load explicit column mapping from an INI file.

    Format:
        [columns]
        Date = Flight Date
        Airtime = Duration (min)
        Glider = 5

    Keys are our column names (or one of their aliases); values are source
    column names or 0-based indices.

    Returns:
        Dict mapping our column index -> source column name or index.

    Raises:
        ValueError: If the file has no [columns] section.
    """
    parser = configparser.ConfigParser()
    parser.read(mapping_file, encoding='utf-8')
    if not parser.has_section('columns'):
        raise ValueError(f"Mapping file {mapping_file} must have a [columns] section")

    mapping = {}
    for name, source in parser.items('columns'):
        col = _column_for_name(name)
        if col is None:
            print(f"  WARNING: Unknown column name in mapping: '{name}'")
            continue
        source = source.strip()
        mapping[col] = int(source) if source.isdigit() else source
    return mapping


def resolve_mapping_names(mapping, headers):
    """Replace source column names in a loaded mapping by their header index.

    Names that match no header are dropped with a warning.
    """
    positions = {}
    for idx, header in enumerate(headers):
        positions.setdefault(_normalize_header(header), idx)

    resolved = {}
    for col, source in mapping.items():
        idx = source if isinstance(source, int) else positions.get(_normalize_header(source))
        if idx is None:
            print(f"  WARNING: Source column '{source}' not found in headers")
            continue
        resolved[col] = idx
    return resolved


def missing_columns(mapping):
    """List what a mapping lacks to build statistics.

    Returns:
        List of error messages, empty when the mapping is usable.
    """
    errors = [f"Required column missing: {COLUMN_NAMES[col]}"
              for col in sorted(REQUIRED_COLUMNS) if col not in mapping]
    if not DURATION_COLUMNS & set(mapping):
        errors.append("Required column missing: Airtime or Landing")
    return errors


def print_mapping_report(mapping, headers):
    """Print which source column feeds each of our columns."""
    print("\n  Column mapping:")
    for col in sorted(mapping):
        idx = mapping[col]
        source = headers[idx] if idx < len(headers) else f'Index {idx}'
        print(f"    {COLUMN_NAMES[col]:<15} <- '{source}' (col {idx})")
    for err in missing_columns(mapping):
        print(f"    ! {err}")
    print()
