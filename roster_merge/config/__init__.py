"""Configuration: settings, pattern tables and logging."""

from .patterns import PatternTables, SeniorityRule, get_pattern_tables, load_pattern_tables
from .settings import Settings, get_settings

__all__ = [
    "PatternTables",
    "SeniorityRule",
    "Settings",
    "get_pattern_tables",
    "get_settings",
    "load_pattern_tables",
]
