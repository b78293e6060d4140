"""Tests for the report formatting helpers."""

from datetime import date, datetime, timedelta

import pytest

from flightstat.formatting import (
    format_date, format_minutes, format_time, month_label, to_minutes, year_label,
)


@pytest.mark.parametrize("duration, minutes, text", [
    (timedelta(minutes=81), 81.0, '81.00'),
    (timedelta(seconds=90), 1.5, '1.50'),
    (timedelta(hours=2, seconds=1), 120.02, '120.02'),
    (timedelta(0), 0.0, '0.00'),
    (timedelta(minutes=-3), -3.0, '-3.00'),
])
def test_minutes(duration, minutes, text):
    assert to_minutes(duration) == minutes
    assert format_minutes(duration) == text


def test_format_date():
    assert format_date(date(2016, 10, 1)) == '01.10.2016'
    assert format_date(datetime(2016, 1, 9, 13, 5)) == '09.01.2016'


def test_format_time():
    assert format_time(datetime(2016, 1, 9, 7, 5)) == '07:05'
    assert format_time(None) == ''


def test_labels():
    assert month_label(2016, 10) == 'Total October 2016'
    assert month_label(2017, 1) == 'Total January 2017'
    assert year_label(2016) == 'Total 2016'
