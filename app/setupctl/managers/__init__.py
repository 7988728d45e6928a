"""Package manager resolution and execution.

This module exports the resolver and the operator that runs a resolved
manager's command templates.
"""

from setupctl.managers.operator import PackageOperator
from setupctl.managers.resolver import (
    FAMILY_MANAGERS,
    MANAGER_PROFILES,
    UnsupportedManagerError,
    get_manager_profile,
    resolve_manager,
)

__all__ = [
    "FAMILY_MANAGERS",
    "MANAGER_PROFILES",
    "PackageOperator",
    "UnsupportedManagerError",
    "get_manager_profile",
    "resolve_manager",
]
