"""End-to-end tests for the command-line runner."""

import csv
import sys

import pytest
from openpyxl import load_workbook

import run


@pytest.fixture
def flights_csv(tmp_path):
    source = tmp_path / 'flights.csv'
    source.write_text(
        "Date,Takeoff,Landing,Glider\n"
        "01.10.2016,10:00,10:11,\n"
        "05.10.2016,10:00,10:12,Alpha\n",
        encoding='utf-8',
    )
    return source


def test_writes_both_reports(tmp_path, monkeypatch, flights_csv):
    csv_out = tmp_path / 'stats.csv'
    xlsx_out = tmp_path / 'stats.xlsx'
    monkeypatch.setattr(sys, 'argv', [
        'run.py', '--config', str(tmp_path / 'none.ini'), '--input', str(flights_csv),
        '--csv', str(csv_out), '--xlsx', str(xlsx_out), '--glider', 'Default',
    ])
    run.main()

    with open(csv_out, encoding='utf-8', newline='') as f:
        lines = list(csv.reader(f))
    assert ['Total October 2016', '2', '23.00'] in lines
    assert lines[-2:] == [['Alpha', '1', '12.00'], ['Default', '1', '11.00']]
    assert load_workbook(xlsx_out)['Flight Statistics']['A1'].value == 'Flights'


def test_no_gliders(tmp_path, monkeypatch, flights_csv):
    csv_out = tmp_path / 'stats.csv'
    monkeypatch.setattr(sys, 'argv', [
        'run.py', '--config', str(tmp_path / 'none.ini'), '--input', str(flights_csv),
        '--csv', str(csv_out), '--xlsx', '', '--no-gliders',
    ])
    run.main()
    with open(csv_out, encoding='utf-8', newline='') as f:
        assert list(csv.reader(f))[-1] == ['Total', '2', '23.00']


def test_flights_without_glider_counted_as_unknown(tmp_path, monkeypatch):
    source = tmp_path / 'flights.csv'
    source.write_text("Date,Airtime,Glider\n01.10.2016,11,\n05.10.2016,12,\n", encoding='utf-8')
    csv_out = tmp_path / 'stats.csv'
    monkeypatch.setattr(sys, 'argv', [
        'run.py', '--config', str(tmp_path / 'none.ini'), '--input', str(source),
        '--csv', str(csv_out), '--xlsx', '',
    ])
    run.main()
    with open(csv_out, encoding='utf-8', newline='') as f:
        lines = list(csv.reader(f))
    assert lines[-2:] == [['Glider', 'Flights', 'Airtime'], ['Unknown', '2', '23.00']]


def test_missing_input_exits(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, 'argv', [
        'run.py', '--config', str(tmp_path / 'none.ini'), '--input', str(tmp_path / 'nope.csv'),
    ])
    with pytest.raises(SystemExit) as exc:
        run.main()
    assert exc.value.code == 1
    assert 'Input file not found' in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []
