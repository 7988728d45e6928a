"""Tool registry file I/O operations.

This module loads and saves the tools.toml catalogue with validation
through the Pydantic document models. The effective registry is chosen
from an explicit path, the user registry in the config directory, or the
registry bundled with the package, in that order.
"""

import logging
import os
import tomllib
from importlib import resources
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from setupctl.core.paths import get_user_registry_path
from setupctl.models.registry import RegistryDocument, ToolRegistry

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Base exception for registry-related errors."""


class RegistryNotFoundError(RegistryError):
    """Raised when a registry file is not found."""


class RegistryParseError(RegistryError):
    """Raised when a registry file cannot be parsed."""


class RegistryValidationError(RegistryError):
    """Raised when registry content is invalid."""


def get_bundled_registry_path() -> Path:
    """Get the bundled default registry path.

    Returns:
        Path to the bundled data/tools.toml
    """
    return resources.files("setupctl.data").joinpath("tools.toml")  # type: ignore[return-value]


def get_active_registry_path(path: Path | None = None) -> Path:
    """Return the registry file that load_registry() would read.

    Args:
        path: Explicit registry path, which always wins.

    Returns:
        The explicit path, the user registry if it exists, else the bundled one.
    """
    if path is not None:
        return path
    user_path = get_user_registry_path()
    if user_path.exists():
        return user_path
    return Path(get_bundled_registry_path())


def parse_registry(data: dict[str, Any], source: str = "<data>") -> ToolRegistry:
    """Validate raw TOML data and build a ToolRegistry.

    Args:
        data: Decoded TOML document.
        source: Origin used in error messages.

    Raises:
        RegistryValidationError: If the content doesn't match the schema.
    """
    try:
        document = RegistryDocument.model_validate(data)
    except ValidationError as e:
        raise RegistryValidationError(f"Invalid registry content in {source}: {e}") from e
    return ToolRegistry.from_document(document)


def load_registry(path: Path | None = None) -> ToolRegistry:
    """Load and validate a tool registry from a TOML file.

    Args:
        path: Path to the registry file. If None, the user registry is used
            when present, otherwise the bundled registry.

    Returns:
        Validated ToolRegistry object.

    Raises:
        RegistryNotFoundError: If the registry file doesn't exist.
        RegistryParseError: If the TOML syntax is invalid.
        RegistryValidationError: If the content doesn't match the schema.
    """
    registry_path = get_active_registry_path(path)

    if not registry_path.exists():
        raise RegistryNotFoundError(f"Registry not found: {registry_path}")

    try:
        with open(registry_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise RegistryParseError(f"Invalid TOML syntax in {registry_path}: {e}") from e
    except OSError as e:
        raise RegistryError(f"Failed to read registry: {e}") from e

    registry = parse_registry(data, str(registry_path))
    logger.debug(
        "Loaded registry %s: %d categories, %d tools",
        registry_path,
        len(registry.categories),
        registry.tool_count,
    )
    return registry


def save_registry(registry: ToolRegistry, path: Path | None = None) -> Path:
    """Save a registry to a TOML file.

    The file is written atomically through a temporary file in the same
    directory followed by os.replace().

    Args:
        registry: The ToolRegistry to save.
        path: Destination path. If None, uses the user registry path.

    Returns:
        Path where the registry was saved.

    Raises:
        RegistryError: If the file cannot be written.
    """
    registry_path = path or get_user_registry_path()
    data = registry.to_document().model_dump(mode="json", exclude_none=True, exclude_defaults=True)

    tmp_path: Path | None = None
    try:
        registry_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=registry_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(registry_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise RegistryError(f"Failed to write registry: {e}") from e

    return registry_path
