"""
Configuration schema and loading for the shapeguard CLI.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from shapeguard.contracts import DEFAULT_DESCRIPTION

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseModel):
    """Logging configuration.

    Example YAML:
        logging:
          level: DEBUG
          json_output: true
    """

    model_config = {"frozen": True}

    level: LogLevel = Field(
        default="WARNING",
        description="Minimum level for emitted log events",
    )
    json_output: bool = Field(
        default=False,
        description="Render log events as JSON lines",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept level names in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


class OutputSettings(BaseModel):
    """How validated values are written by ``shapeguard check``."""

    model_config = {"frozen": True}

    indent: int = Field(default=2, ge=0, description="JSON indent width")
    sort_keys: bool = Field(default=False, description="Sort object keys in output")


class ShapeguardSettings(BaseModel):
    """Top-level settings.

    Example YAML:
        default_description: field
        logging:
          level: INFO
        output:
          indent: 4
    """

    model_config = {"frozen": True}

    default_description: str = Field(
        default=DEFAULT_DESCRIPTION,
        description="Description applied to schema nodes loaded from files that have none",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)


def load_settings(config_path: Path | None = None) -> ShapeguardSettings:
    """Load settings from an optional YAML file with environment overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (SHAPEGUARD_*) - highest priority
    2. Config file, when given
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: SHAPEGUARD_LOGGING__LEVEL for nested keys.

    Args:
        config_path: Path to YAML configuration file, or None for
            environment and defaults only

    Returns:
        Validated ShapeguardSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="SHAPEGUARD",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,  # No [default]/[production] sections
        load_dotenv=False,  # Don't auto-load .env
        merge_enabled=True,  # Deep merge nested dicts
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # Also filter out internal Dynaconf settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {
        k.lower(): _lower_keys(v)
        for k, v in dynaconf_settings.as_dict().items()
        if k not in internal_keys
    }
    return ShapeguardSettings(**raw_config)


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value
