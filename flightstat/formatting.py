"""
Label and number formatting shared by the report renderers.

Airtime is always shown as total minutes with two decimals, dates as
dd.mm.yyyy and month totals with the English month name. Month names are
fixed here so the output does not depend on the process locale.
"""

MONTH_NAMES = [
    None, 'January', 'February', 'March', 'April', 'May', 'June', 'July',
    'August', 'September', 'October', 'November', 'December',
]

DATE_FORMAT = '%d.%m.%Y'
TIME_FORMAT = '%H:%M'

# openpyxl number formats
XLSX_DATE_FORMAT = 'dd.mm.yyyy'
XLSX_TIME_FORMAT = 'hh:mm'
XLSX_MINUTES_FORMAT = '0.00'


def to_minutes(duration):
    """Convert a timedelta to minutes rounded to two decimals."""
    return round(duration.total_seconds() / 60, 2)


def format_minutes(duration):
    """Format a timedelta as minutes with two decimals, e.g. '81.00'."""
    return f"{duration.total_seconds() / 60:.2f}"


def format_date(value):
    """Format a date or datetime as dd.mm.yyyy."""
    return value.strftime(DATE_FORMAT)


def format_time(value):
    """Format a datetime as HH:MM, or '' when missing."""
    if value is None:
        return ''
    return value.strftime(TIME_FORMAT)


def month_label(year, month):
    """Label of a month total row: 'Total October 2016'."""
    return f"Total {MONTH_NAMES[month]} {year}"


def year_label(year):
    """Label of a year total row: 'Total 2016'."""
    return f"Total {year}"
