"""Tests for writing report files."""

import pytest

from flightstat.safe_write import replace_on_success


def test_file_written_on_success(tmp_path):
    output = tmp_path / 'report.csv'
    with replace_on_success(str(output)) as tmp:
        with open(tmp, 'w', encoding='utf-8') as f:
            f.write('Period,Flights,Airtime\n')
    assert output.read_text(encoding='utf-8') == 'Period,Flights,Airtime\n'
    assert [p.name for p in tmp_path.iterdir()] == ['report.csv']


def test_failure_leaves_no_output(tmp_path):
    output = tmp_path / 'report.csv'
    with pytest.raises(RuntimeError):
        with replace_on_success(str(output)) as tmp:
            with open(tmp, 'w', encoding='utf-8') as f:
                f.write('Period,Fli')
            raise RuntimeError('disk full')
    assert list(tmp_path.iterdir()) == []


def test_failure_keeps_previous_report(tmp_path):
    output = tmp_path / 'report.csv'
    output.write_text('previous', encoding='utf-8')
    with pytest.raises(RuntimeError):
        with replace_on_success(str(output)):
            raise RuntimeError('reader failed')
    assert output.read_text(encoding='utf-8') == 'previous'
    assert [p.name for p in tmp_path.iterdir()] == ['report.csv']
