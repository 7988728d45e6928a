"""Runtime settings.

This module provides the settings model and I/O functions for the
installation behaviour: privilege escalation, index refresh, the fixed
retry used for network-dependent steps, and the functional probe timeout.

Settings are stored in ~/.config/setupctl/settings.toml. A missing file
means defaults.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from setupctl.core.paths import get_settings_path


class Settings(BaseModel):
    """Installation settings.

    Attributes:
        use_sudo: Prefix privileged manager commands with sudo when not root.
        refresh_index: Refresh the package index before installing.
        retry_attempts: Attempts for the index refresh (1-10).
        retry_delay_seconds: Fixed delay between attempts (0-60s).
        probe_timeout_seconds: Timeout for functional probes (1-600s).
    """

    model_config = ConfigDict(extra="forbid")

    use_sudo: Annotated[
        bool,
        Field(description="Prefix privileged commands with sudo"),
    ] = True
    refresh_index: Annotated[
        bool,
        Field(description="Refresh the package index before installing"),
    ] = True
    retry_attempts: Annotated[
        int,
        Field(ge=1, le=10, description="Retry attempts (1-10)"),
    ] = 3
    retry_delay_seconds: Annotated[
        float,
        Field(ge=0, le=60, description="Delay between retries in seconds (0-60)"),
    ] = 2.0
    probe_timeout_seconds: Annotated[
        int,
        Field(ge=1, le=600, description="Functional probe timeout in seconds (1-600)"),
    ] = 30


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object; defaults when the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save the settings. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings.model_dump(), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
