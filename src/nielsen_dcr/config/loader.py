"""Settings payload loading.

The analytics pipeline delivers a settings payload shaped like::

    {"integrations": {"Nielsen DCR": {"appId": "...", ...}}, ...}

The destination only reads the block keyed by its integration name; the
rest of the payload is kept as global settings for override lookups.

Environment variables:
- NIELSEN_DCR_SETTINGS_PATH: Settings file used when no path is given
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from nielsen_dcr.config.models import INTEGRATION_NAME, NielsenSettings
from nielsen_dcr.exceptions import IntegrationNotConfiguredError, SettingsError

logger = logging.getLogger(__name__)

SETTINGS_PATH_ENV = "NIELSEN_DCR_SETTINGS_PATH"


def get_default_settings_path() -> Path | None:
    """Get the settings file path from the environment.

    Returns:
        Path from NIELSEN_DCR_SETTINGS_PATH, or None if unset.
    """
    env_path = os.environ.get(SETTINGS_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return None


def extract_integration_settings(
    payload: Mapping[str, Any],
    integration: str = INTEGRATION_NAME,
) -> dict[str, Any] | None:
    """Get the settings block for one integration from a settings payload.

    Args:
        payload: Full settings payload from the pipeline.
        integration: Integration name the block is keyed by.

    Returns:
        The integration's settings dict, or None if absent or not a mapping.
    """
    integrations = payload.get("integrations")
    if not isinstance(integrations, Mapping):
        return None
    block = integrations.get(integration)
    if not isinstance(block, Mapping):
        return None
    return dict(block)


def parse_settings(
    payload: Mapping[str, Any],
    integration: str = INTEGRATION_NAME,
) -> NielsenSettings | None:
    """Validate the integration settings in a payload.

    Never raises: a missing or invalid block is logged and yields None so
    the destination stays disabled.

    Args:
        payload: Full settings payload from the pipeline.
        integration: Integration name the block is keyed by.

    Returns:
        NielsenSettings, or None if the block is missing or invalid.
    """
    block = extract_integration_settings(payload, integration)
    if block is None:
        logger.info("No settings for integration '%s'", integration)
        return None

    try:
        return NielsenSettings.model_validate(block)
    except ValidationError as e:
        logger.warning(
            "Invalid settings for integration '%s': %d error(s): %s",
            integration,
            e.error_count(),
            e,
        )
        return None


def load_settings_payload(path: Path) -> dict[str, Any]:
    """Load a settings payload from a YAML or JSON file.

    Args:
        path: File to read. ``.json`` files are parsed as JSON, anything
            else as YAML.

    Returns:
        Parsed payload dict.

    Raises:
        SettingsError: If the file cannot be read or is not a mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsError(str(path), f"cannot read file: {e}") from e

    try:
        if path.suffix.casefold() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SettingsError(str(path), f"parse error: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SettingsError(
            str(path), f"expected a mapping, got {type(data).__name__}"
        )
    return data


def load_settings(
    path: Path | None = None,
    integration: str = INTEGRATION_NAME,
) -> tuple[NielsenSettings, dict[str, Any]]:
    """Load and validate settings from a file (strict variant for tooling).

    Args:
        path: Settings file. If None, uses NIELSEN_DCR_SETTINGS_PATH.
        integration: Integration name the block is keyed by.

    Returns:
        Tuple of (validated settings, full payload).

    Raises:
        SettingsError: If no path is available, the file is invalid, the
            integration block is missing, or validation fails.
    """
    if path is None:
        path = get_default_settings_path()
    if path is None:
        raise SettingsError(
            "environment", f"no settings path given and {SETTINGS_PATH_ENV} unset"
        )

    payload = load_settings_payload(path)
    block = extract_integration_settings(payload, integration)
    if block is None:
        raise IntegrationNotConfiguredError(str(path), integration)

    try:
        settings = NielsenSettings.model_validate(block)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise SettingsError(str(path), errors) from e

    return settings, payload
