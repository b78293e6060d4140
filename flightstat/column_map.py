"""
Column layout of the flight list.

The same 1-based layout is used for reading flight lists (column_detector,
flight_importer) and for writing the flight listing in the reports.
"""

COL_DATE = 1
COL_TAKEOFF = 2
COL_TAKEOFF_SITE = 3
COL_TAKEOFF_COORD = 4
COL_LANDING = 5
COL_LANDING_SITE = 6
COL_LANDING_COORD = 7
COL_AIRTIME = 8
COL_GLIDER = 9
COL_FILENAME = 10
COL_COMMENT = 11

# Columns written to the flight listing (the comment replaces the filename
# in the Excel listing when present)
LISTING_COLUMNS = 10

# Header of the CSV flight listing
LISTING_HEADER = [
    "Date", "Takeoff", "Takeoff Site", "Takeoff Coord", "Landing",
    "Landing Site", "Landing Coord", "Airtime", "Glider", "Filename",
]
