"""
Flight record as handed over by a flight log reader.

Only ``takeoff``, ``duration`` and ``glider`` are used by the statistics.
The remaining fields are carried through to the flight listing.
"""

from datetime import timedelta


class Flight:
    """A single flight."""

    def __init__(self, takeoff, duration=None, glider='', landing=None,
                 takeoff_site='', takeoff_coord='', landing_site='',
                 landing_coord='', filename='', comment=''):
        self.takeoff = takeoff
        self.landing = landing
        if duration is None:
            duration = landing - takeoff if landing is not None else timedelta(0)
        self.duration = duration
        self.glider = glider or ''
        self.takeoff_site = takeoff_site or ''
        self.takeoff_coord = takeoff_coord or ''
        self.landing_site = landing_site or ''
        self.landing_coord = landing_coord or ''
        self.filename = filename or ''
        self.comment = comment or ''

    @property
    def date(self):
        """Calendar day of the takeoff."""
        return self.takeoff.date()

    def __repr__(self):
        return (
            f"Flight(takeoff={self.takeoff.isoformat()}, "
            f"duration={self.duration}, glider='{self.glider}')"
        )
