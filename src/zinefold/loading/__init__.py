"""
Module: loading

Purpose:
    Configuration source: reads JSON config files into ImposeConfig.

Key Functions:
    - load_config(): Parse a config file
    - parse_config(): Parse decoded JSON

Used By:
    - zinefold.__main__: Entry point
"""

from .parser import config_summary, load_config, parse_config, parse_paper

__all__ = [
    "config_summary",
    "load_config",
    "parse_config",
    "parse_paper",
]
