"""
Configuration loading for the flight statistics pipeline.

Uses Python's built-in configparser (no extra dependencies).
Supports config.ini file with CLI argument overrides.
"""

import configparser
import os

from .statistics import UNKNOWN_GLIDER


DEFAULT_CONFIG = {
    'statistics': {
        'default_glider': UNKNOWN_GLIDER,
        'gliders': 'yes',
    },
    'import': {
        'input_file': '',
        'format': 'auto',
        'column_mapping': '',
    },
    'files': {
        'csv_output': './Flight_Statistics.csv',
        'xlsx_output': './Flight_Statistics.xlsx',
    },
    'report': {
        'title': 'Statistics',
    },
}


class Config:
    """Pipeline configuration."""

    def __init__(self):
        self.default_glider = UNKNOWN_GLIDER
        self.include_gliders = True
        self.input_file = ''
        self.input_format = 'auto'
        self.column_mapping = ''
        self.csv_output = ''
        self.xlsx_output = ''
        self.title = 'Statistics'

    @classmethod
    def from_file(cls, config_path):
        """Load configuration from an INI file.

        A missing file is not an error; the defaults are used.

        Args:
            config_path: Path to the config.ini file.

        Returns:
            Config instance.
        """
        config = cls()
        parser = configparser.ConfigParser()

        for section, values in DEFAULT_CONFIG.items():
            parser[section] = values

        if os.path.exists(config_path):
            parser.read(config_path, encoding='utf-8')

        # Resolve paths relative to config file directory
        config_dir = os.path.dirname(os.path.abspath(config_path))

        config.default_glider = parser.get('statistics', 'default_glider') or UNKNOWN_GLIDER
        config.include_gliders = parser.getboolean('statistics', 'gliders', fallback=True)
        config.input_format = parser.get('import', 'format', fallback='auto')
        config.title = parser.get('report', 'title', fallback='Statistics')

        for attr, section, key in [
            ('input_file', 'import', 'input_file'),
            ('column_mapping', 'import', 'column_mapping'),
            ('csv_output', 'files', 'csv_output'),
            ('xlsx_output', 'files', 'xlsx_output'),
        ]:
            val = parser.get(section, key, fallback='')
            if val and not os.path.isabs(val):
                val = os.path.join(config_dir, val)
            setattr(config, attr, val)

        return config

    def override(self, **kwargs):
        """Override config values from CLI arguments.

        Only overrides non-None values.
        """
        for key, value in kwargs.items():
            if value is not None and hasattr(self, key):
                setattr(self, key, value)

    def outputs(self):
        """Return the configured report files as a list of (kind, path)."""
        return [(kind, path) for kind, path in [('csv', self.csv_output), ('xlsx', self.xlsx_output)] if path]

    def validate(self):
        """Validate that the input exists and at least one report is configured.

        Raises:
            FileNotFoundError: If the input file is missing or no output is set.
        """
        if not self.input_file:
            raise FileNotFoundError(
                "No input file configured.\n"
                "Set input_file in the [import] section or pass --input."
            )
        if not os.path.exists(self.input_file):
            raise FileNotFoundError(
                f"Input file not found: {self.input_file}\n"
                f"Check the file path in your config.ini."
            )
        if not self.outputs():
            raise FileNotFoundError(
                "No output file configured.\n"
                "Set csv_output or xlsx_output in the [files] section or pass --csv/--xlsx."
            )
        for _, path in self.outputs():
            output_dir = os.path.dirname(os.path.abspath(path))
            if not os.path.isdir(output_dir):
                raise FileNotFoundError(f"Output directory not found: {output_dir}")

    def __repr__(self):
        return (
            f"Config(\n"
            f"  default_glider='{self.default_glider}',\n"
            f"  include_gliders={self.include_gliders},\n"
            f"  input_file='{self.input_file}',\n"
            f"  input_format='{self.input_format}',\n"
            f"  csv_output='{self.csv_output}',\n"
            f"  xlsx_output='{self.xlsx_output}',\n"
            f")"
        )
