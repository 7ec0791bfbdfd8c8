"""Settings document loading and writing.

This module reads JSON settings documents, validates them with the Pydantic
models and writes documents back out in canonical form.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ffmpegfront.exceptions import SettingsValidationError
from ffmpegfront.settings.models import Settings

logger = logging.getLogger(__name__)


def load_settings(settings_path: Path) -> Settings:
    """Load and validate a settings document from a JSON file.

    Args:
        settings_path: Path to the JSON settings file.

    Returns:
        Validated Settings object.

    Raises:
        SettingsValidationError: If the file cannot be read or is invalid.
    """
    try:
        text = Path(settings_path).read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsValidationError(
            f"unable to read settings file {settings_path}: {e}"
        ) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SettingsValidationError(
            f"Unable to parse settings file {settings_path}: {e}"
        ) from e

    return load_settings_from_dict(data)


def load_settings_from_dict(data: Any) -> Settings:
    """Validate an already-decoded settings document.

    Raises:
        SettingsValidationError: If the data does not describe valid settings.
    """
    if not isinstance(data, dict):
        raise SettingsValidationError("Settings document must be a JSON object")

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsValidationError(*_format_validation_error(e)) from e


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    """Format a Pydantic validation error into a message and field path."""
    errors = error.errors()
    if errors:
        first_error = errors[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", str(error))
        if loc:
            return f"Settings validation failed: {loc}: {msg}", loc
        return f"Settings validation failed: {msg}", None
    return f"Settings validation failed: {error}", None


def dump_settings(settings: Settings) -> str:
    """Render settings as an indented JSON document with canonical field names."""
    return json.dumps(settings.model_dump(mode="json", by_alias=True), indent=2)


def write_settings(settings: Settings, file_name: str | Path) -> Path:
    """Write settings to a JSON file.

    A ``.json`` suffix is appended when the name does not already end in it.

    Returns:
        The path that was written.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(file_name)
    if not path.name.endswith(".json"):
        path = path.with_name(f"{path.name}.json")

    path.write_text(dump_settings(settings) + "\n", encoding="utf-8")
    logger.debug("Wrote settings document: %s", path)
    return path
