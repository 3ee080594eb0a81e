# configcanon/logic/markers.py

"""Version marker extraction used to narrow lookup candidates."""

import logging
import tomllib
from typing import Any, Optional

import yaml

from configcanon.core.definitions import Format
from configcanon.logic.formats import CoreSchemaLoader

logger = logging.getLogger(__name__)

# Pufferfish stamps a version key that does not identify the file revision
MARKER_EXCLUDED_LOCATIONS = {"pufferfish.yml"}


def _marker_value(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        return str(value)
    return None


def _yaml_marker(text: str) -> Optional[str]:
    try:
        document = yaml.load(text, Loader=CoreSchemaLoader)
    except yaml.YAMLError:
        return None

    if not isinstance(document, dict):
        return None

    for key in ("config-version", "version"):
        if key in document:
            value = _marker_value(document[key])
            return f"{key}: {value}" if value is not None else None

    return None


def _toml_marker(text: str) -> Optional[str]:
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        logger.debug(f"Skipping version marker for unparseable TOML: {e}")
        return None

    value = document.get("config-version")
    if isinstance(value, str):
        return f'config-version = "{value}"'
    if isinstance(value, int) and not isinstance(value, bool):
        return f"config-version = {value}"
    return None


def extract_version_marker(
    config_format: Format, text: str, location: Optional[str] = None
) -> Optional[str]:
    """Finds the config-version line a canonical text should contain.

    Args:
        config_format: Format the text was canonicalized as
        text: Comment-stripped config text
        location: Canonical path of the file, if known

    Returns:
        Marker such as "config-version: 29", or None
    """
    if config_format == Format.YAML:
        if location in MARKER_EXCLUDED_LOCATIONS:
            return None
        return _yaml_marker(text)

    if config_format == Format.TOML:
        return _toml_marker(text)

    return None
