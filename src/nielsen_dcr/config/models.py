"""Configuration Pydantic models.

This module contains:
- NielsenSettings: Per-integration settings delivered by the analytics pipeline
- LoggingConfig: Logging options for the CLI and host processes
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Integration key used by the pipeline to namespace settings and options
INTEGRATION_NAME = "Nielsen DCR"

_TRUTHY_STRINGS = frozenset({"true", "1", "yes", "on"})

VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


class NielsenSettings(BaseModel):
    """Pydantic model for the Nielsen DCR integration settings.

    Field aliases match the camelCase keys of the settings payload. Empty
    strings mean "no custom property configured".
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    app_id: str = Field(alias="appId", min_length=1)
    content_asset_id_property_name: str = Field(
        default="", alias="contentAssetIdPropertyName"
    )
    ad_asset_id_property_name: str = Field(default="", alias="adAssetIdPropertyName")
    custom_section_property: str = Field(default="", alias="customSectionProperty")
    content_length_property_name: str = Field(
        default="", alias="contentLengthPropertyName"
    )
    subbrand_property_name: str = Field(default="", alias="subbrandPropertyName")
    client_id_property_name: str = Field(default="", alias="clientIdPropertyName")
    # Legacy override, only consulted when contentAssetIdPropertyName is empty
    asset_id_property_name: str = Field(default="", alias="assetIdPropertyName")
    send_current_time_livestream: bool = Field(
        default=False, alias="sendCurrentTimeLivestream"
    )

    @field_validator(
        "content_asset_id_property_name",
        "ad_asset_id_property_name",
        "custom_section_property",
        "content_length_property_name",
        "subbrand_property_name",
        "client_id_property_name",
        "asset_id_property_name",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Treat null property names as unset."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("send_current_time_livestream", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> bool:
        """Accept booleans and the string flags sent by the settings service."""
        if isinstance(v, bool):
            return v
        if v is None:
            return False
        if isinstance(v, str):
            return v.strip().casefold() in _TRUTHY_STRINGS
        if isinstance(v, (int, float)):
            return v != 0
        return False

    @property
    def content_asset_id_key(self) -> str:
        """Effective custom property name for the content asset id."""
        return self.content_asset_id_property_name or self.asset_id_property_name


class LoggingConfig(BaseModel):
    """Pydantic model for logging configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: str = "info"
    file: Path | None = None
    format: Literal["text", "json"] = "text"
    include_stderr: bool = True
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=0)
    backup_count: int = Field(default=3, ge=0)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and casefold the log level."""
        level = v.casefold()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. "
                f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return level
