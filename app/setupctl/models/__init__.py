"""Data models for setupctl.

This module exports the core data structures used throughout the application.
"""

from setupctl.models.manager import CommandTemplate, PackageManagerProfile
from setupctl.models.outcome import (
    InstallationOutcome,
    InstallationRun,
    InstallStatus,
    PlannedInstall,
    RunCounts,
    VerificationStatus,
)
from setupctl.models.registry import (
    CategoryNotFoundError,
    PresenceMethod,
    PresenceRule,
    Priority,
    RegistryDocument,
    ToolCategory,
    ToolOverride,
    ToolRegistry,
    ToolSpec,
)
from setupctl.models.system import Family, SupportLevel, SystemProfile

__all__ = [
    "CategoryNotFoundError",
    "CommandTemplate",
    "Family",
    "InstallationOutcome",
    "InstallationRun",
    "InstallStatus",
    "PackageManagerProfile",
    "PlannedInstall",
    "PresenceMethod",
    "PresenceRule",
    "Priority",
    "RegistryDocument",
    "RunCounts",
    "SupportLevel",
    "SystemProfile",
    "ToolCategory",
    "ToolOverride",
    "ToolRegistry",
    "ToolSpec",
    "VerificationStatus",
]
