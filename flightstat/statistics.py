"""
Flight statistics rolled up by day, month, year and glider.

FlightStat is the root of a tree of accumulators:

    FlightStat -> YearStat (by year) -> MonthStat (by month) -> DayStat (by day)

plus a flat map of GliderStat keyed by glider name. Every flight added to
a FlightStat is counted once at each level, so the flights and airtime of a
parent always equal the sum over its children, and the grand total also
equals the sum over the gliders.

rows() flattens the tree into the ordered report consumed by the CSV and
Excel writers: days ascending, each month followed by its total, each year
followed by its total, then the grand total and the glider breakdown.

Usage:
    stat = FlightStat.build(flights, default_glider='Default')
    for row in stat.rows():
        print(row.label, row.flights, row.minutes)
"""

from collections import namedtuple
from datetime import timedelta

from .formatting import format_date, month_label, to_minutes, year_label


# Row kinds
DAY = 'day'
MONTH = 'month'
YEAR = 'year'
TOTAL = 'total'
GLIDER_HEADER = 'glider_header'
GLIDER = 'glider'

REPORT_HEADER = ('Period', 'Flights', 'Airtime')
GLIDER_SECTION_HEADER = ('Glider', 'Flights', 'Airtime')

# Glider name for flights without one when no default glider is configured
UNKNOWN_GLIDER = 'Unknown'

# label, flights, minutes come first so row[:3] is the plain report tuple.
# date is only set on day rows (the Excel writer stores it as a real date).
ReportRow = namedtuple('ReportRow', ['label', 'flights', 'minutes', 'kind', 'date'])


class DayStat:
    """Flights of one calendar day."""

    def __init__(self):
        self.date = None
        self.flights = 0
        self.airtime = timedelta(0)

    def add(self, flight):
        self.date = flight.date
        self.flights += 1
        self.airtime += flight.duration

    def merge(self, other):
        if other.date is not None:
            self.date = other.date
        self.flights += other.flights
        self.airtime += other.airtime

    def rows(self):
        yield ReportRow(format_date(self.date), self.flights,
                        to_minutes(self.airtime), DAY, self.date)


class MonthStat:
    """Flights of one month, broken down by day of month."""

    def __init__(self):
        self.date = None
        self.flights = 0
        self.airtime = timedelta(0)
        self.days = {}

    def add(self, flight):
        self.date = flight.date
        self.flights += 1
        self.airtime += flight.duration
        day = self.days.get(flight.takeoff.day)
        if day is None:
            day = self.days[flight.takeoff.day] = DayStat()
        day.add(flight)

    def merge(self, other):
        if other.date is not None:
            self.date = other.date
        self.flights += other.flights
        self.airtime += other.airtime
        for key, other_day in other.days.items():
            self.days.setdefault(key, DayStat()).merge(other_day)

    def rows(self):
        for key in sorted(self.days):
            yield from self.days[key].rows()
        yield ReportRow(month_label(self.date.year, self.date.month),
                        self.flights, to_minutes(self.airtime), MONTH, None)


class YearStat:
    """Flights of one year, broken down by month."""

    def __init__(self):
        self.date = None
        self.flights = 0
        self.airtime = timedelta(0)
        self.months = {}

    @property
    def year(self):
        return self.date.year if self.date is not None else None

    def add(self, flight):
        self.date = flight.date
        self.flights += 1
        self.airtime += flight.duration
        month = self.months.get(flight.takeoff.month)
        if month is None:
            month = self.months[flight.takeoff.month] = MonthStat()
        month.add(flight)

    def merge(self, other):
        if other.date is not None:
            self.date = other.date
        self.flights += other.flights
        self.airtime += other.airtime
        for key, other_month in other.months.items():
            self.months.setdefault(key, MonthStat()).merge(other_month)

    def rows(self):
        for key in sorted(self.months):
            yield from self.months[key].rows()
        yield ReportRow(year_label(self.year), self.flights,
                        to_minutes(self.airtime), YEAR, None)


class GliderStat:
    """Flights of one glider."""

    def __init__(self, name):
        self.name = name
        self.flights = 0
        self.airtime = timedelta(0)

    def add(self, flight):
        self.flights += 1
        self.airtime += flight.duration

    def merge(self, other):
        self.flights += other.flights
        self.airtime += other.airtime

    def row(self):
        return ReportRow(self.name, self.flights, to_minutes(self.airtime), GLIDER, None)


class FlightStat:
    """Statistics over a collection of flights.

    Attributes:
        flights: Total number of flights.
        airtime: Total airtime (timedelta).
        years: Dict mapping year -> YearStat.
        gliders: Dict mapping glider name -> GliderStat.
        default_glider: Glider name used for flights without one.
        include_gliders: Whether rows() ends with the glider breakdown.
    """

    def __init__(self, default_glider=UNKNOWN_GLIDER, include_gliders=True):
        self.flights = 0
        self.airtime = timedelta(0)
        self.years = {}
        self.gliders = {}
        self.default_glider = default_glider
        self.include_gliders = include_gliders

    @classmethod
    def build(cls, flights, default_glider=UNKNOWN_GLIDER, include_gliders=True):
        """Create the statistics for a collection of flights.

        Args:
            flights: Iterable of Flight records, added in order.
            default_glider: Glider name for flights with an empty glider.
            include_gliders: Whether the report includes the glider section.

        Returns:
            FlightStat instance.
        """
        stat = cls(default_glider, include_gliders)
        for flight in flights:
            stat.add(flight)
        return stat

    def resolve_glider(self, flight):
        """Glider name a flight is counted under."""
        return flight.glider or self.default_glider or UNKNOWN_GLIDER

    def add(self, flight):
        """Add a flight to the statistics."""
        self.flights += 1
        self.airtime += flight.duration

        name = self.resolve_glider(flight)
        glider = self.gliders.get(name)
        if glider is None:
            glider = self.gliders[name] = GliderStat(name)
        glider.add(flight)

        year = self.years.get(flight.takeoff.year)
        if year is None:
            year = self.years[flight.takeoff.year] = YearStat()
        year.add(flight)

    def merge(self, other):
        """Add the flights counted by another FlightStat to this one.

        Matching years, months, days and gliders are summed, so merging the
        statistics of two halves of a flight list gives the same result as
        building the statistics of the whole list.

        Returns:
            self, for chaining.
        """
        self.flights += other.flights
        self.airtime += other.airtime
        for key, other_year in other.years.items():
            self.years.setdefault(key, YearStat()).merge(other_year)
        for name, other_glider in other.gliders.items():
            self.gliders.setdefault(name, GliderStat(name)).merge(other_glider)
        return self

    def year_rows(self):
        """Rows of the time breakdown, ending with the grand total."""
        for key in sorted(self.years):
            yield from self.years[key].rows()
        yield ReportRow('Total', self.flights, to_minutes(self.airtime), TOTAL, None)

    def glider_rows(self):
        """Rows of the glider breakdown, sorted by glider name."""
        return [self.gliders[name].row() for name in sorted(self.gliders)]

    def rows(self):
        """Flatten the statistics into the ordered report.

        Returns:
            List of ReportRow. Years, months and days ascending, each group
            followed by its total row, then the grand total row. When the
            glider breakdown is enabled, a GLIDER_HEADER row and one row per
            glider follow.
        """
        rows = list(self.year_rows())
        if self.include_gliders:
            rows.append(ReportRow(GLIDER_SECTION_HEADER[0], None, None, GLIDER_HEADER, None))
            rows.extend(self.glider_rows())
        return rows

    def summary(self):
        """Totals as a plain dict (used by the CLI and the web API)."""
        return {
            'flights': self.flights,
            'airtime_minutes': to_minutes(self.airtime),
            'years': {year: {'flights': y.flights, 'airtime_minutes': to_minutes(y.airtime)}
                      for year, y in sorted(self.years.items())},
            'gliders': {name: {'flights': g.flights, 'airtime_minutes': to_minutes(g.airtime)}
                        for name, g in sorted(self.gliders.items())},
        }

    def __repr__(self):
        return (
            f"FlightStat(flights={self.flights}, airtime={self.airtime}, "
            f"years={sorted(self.years)}, gliders={sorted(self.gliders)})"
        )


def build_statistics(flights, default_glider=UNKNOWN_GLIDER, include_gliders=True):
    """Build FlightStat for a collection of flights."""
    return FlightStat.build(flights, default_glider, include_gliders)
