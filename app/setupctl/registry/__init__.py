"""Tool registry loading and persistence."""

from setupctl.registry.loader import (
    RegistryError,
    RegistryNotFoundError,
    RegistryParseError,
    RegistryValidationError,
    get_active_registry_path,
    get_bundled_registry_path,
    load_registry,
    parse_registry,
    save_registry,
)

__all__ = [
    "RegistryError",
    "RegistryNotFoundError",
    "RegistryParseError",
    "RegistryValidationError",
    "get_active_registry_path",
    "get_bundled_registry_path",
    "load_registry",
    "parse_registry",
    "save_registry",
]
