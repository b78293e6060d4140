"""Tests for configuration loading."""

import os

import pytest

from flightstat.config import Config


class TestFromFile:

    def test_defaults_without_file(self, tmp_path):
        config = Config.from_file(str(tmp_path / 'missing.ini'))
        assert config.default_glider == 'Unknown'
        assert config.include_gliders is True
        assert config.input_format == 'auto'
        assert config.title == 'Statistics'
        assert config.csv_output == os.path.join(str(tmp_path), './Flight_Statistics.csv')

    def test_values_and_relative_paths(self, tmp_path):
        ini = tmp_path / 'config.ini'
        ini.write_text(
            "[statistics]\n"
            "default_glider = Advance Alpha 6\n"
            "gliders = no\n"
            "[import]\n"
            "input_file = flights.csv\n"
            "format = csv\n"
            "[files]\n"
            "csv_output = /tmp/out/stats.csv\n"
            "xlsx_output =\n",
            encoding='utf-8',
        )
        config = Config.from_file(str(ini))
        assert config.default_glider == 'Advance Alpha 6'
        assert config.include_gliders is False
        assert config.input_format == 'csv'
        assert config.input_file == os.path.join(str(tmp_path), 'flights.csv')
        assert config.csv_output == '/tmp/out/stats.csv'
        assert config.outputs() == [('csv', '/tmp/out/stats.csv')]


    def test_blank_default_glider_falls_back(self, tmp_path):
        ini = tmp_path / 'config.ini'
        ini.write_text("[statistics]\ndefault_glider =\n", encoding='utf-8')
        assert Config.from_file(str(ini)).default_glider == 'Unknown'


class TestOverride:

    def test_none_values_ignored(self):
        config = Config()
        config.override(default_glider='Default', input_file=None, unknown='x')
        assert config.default_glider == 'Default'
        assert config.input_file == ''
        assert not hasattr(config, 'unknown')


class TestValidate:

    def test_no_input(self):
        with pytest.raises(FileNotFoundError, match="No input file configured"):
            Config().validate()

    def test_missing_input(self, tmp_path):
        config = Config()
        config.input_file = str(tmp_path / 'nope.csv')
        with pytest.raises(FileNotFoundError, match="Input file not found"):
            config.validate()

    def test_no_output(self, tmp_path):
        source = tmp_path / 'flights.csv'
        source.write_text("Date,Airtime\n", encoding='utf-8')
        config = Config()
        config.input_file = str(source)
        with pytest.raises(FileNotFoundError, match="No output file configured"):
            config.validate()

    def test_missing_output_directory(self, tmp_path):
        source = tmp_path / 'flights.csv'
        source.write_text("Date,Airtime\n", encoding='utf-8')
        config = Config()
        config.input_file = str(source)
        config.xlsx_output = str(tmp_path / 'missing' / 'stats.xlsx')
        with pytest.raises(FileNotFoundError, match="Output directory not found"):
            config.validate()

    def test_valid(self, tmp_path):
        source = tmp_path / 'flights.csv'
        source.write_text("Date,Airtime\n", encoding='utf-8')
        config = Config()
        config.input_file = str(source)
        config.csv_output = str(tmp_path / 'stats.csv')
        config.validate()
