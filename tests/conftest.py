"""Shared fixtures for the flight statistics tests."""

from datetime import datetime, timedelta

import pytest

from flightstat.flight import Flight


@pytest.fixture
def make_flight():
    """Factory for flights taking off at 10:00 on the given day."""
    def _make(year, month, day, minutes, glider='', **kwargs):
        takeoff = datetime(year, month, day, 10, 0)
        return Flight(takeoff, timedelta(minutes=minutes), glider=glider,
                      landing=takeoff + timedelta(minutes=minutes), **kwargs)
    return _make


@pytest.fixture
def six_flights(make_flight):
    """Two flights in each of October, November and December 2016, no glider."""
    return [
        make_flight(2016, 10, 1, 11),
        make_flight(2016, 10, 5, 12),
        make_flight(2016, 11, 2, 13),
        make_flight(2016, 11, 6, 14),
        make_flight(2016, 12, 3, 15),
        make_flight(2016, 12, 7, 16),
    ]
