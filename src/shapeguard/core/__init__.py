"""Core infrastructure: configuration, logging, dates, schema loading."""

from shapeguard.core.config import (
    LoggingSettings,
    OutputSettings,
    ShapeguardSettings,
    load_settings,
)
from shapeguard.core.dates import is_valid_date, parse_date, to_strftime
from shapeguard.core.loader import load_schema_file, parse_schema
from shapeguard.core.logging import (
    configure_logging,
    get_logger,
)

__all__ = [
    "LoggingSettings",
    "OutputSettings",
    "ShapeguardSettings",
    "configure_logging",
    "get_logger",
    "is_valid_date",
    "load_schema_file",
    "load_settings",
    "parse_date",
    "parse_schema",
    "to_strftime",
]
