"""Configuration management for the Nielsen DCR destination.

Settings arrive from the analytics pipeline as a payload keyed by
integration name. This package validates them with Pydantic models and
can load a payload from a YAML or JSON file for tooling.
"""

from nielsen_dcr.config.loader import (
    SETTINGS_PATH_ENV,
    extract_integration_settings,
    get_default_settings_path,
    load_settings,
    load_settings_payload,
    parse_settings,
)
from nielsen_dcr.config.models import (
    INTEGRATION_NAME,
    LoggingConfig,
    NielsenSettings,
)

__all__ = [
    # Models
    "INTEGRATION_NAME",
    "LoggingConfig",
    "NielsenSettings",
    # Loader
    "SETTINGS_PATH_ENV",
    "extract_integration_settings",
    "get_default_settings_path",
    "load_settings",
    "load_settings_payload",
    "parse_settings",
]
