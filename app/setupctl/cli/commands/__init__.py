"""CLI commands for setupctl.

This package contains all subcommand implementations.
"""

from setupctl.cli.commands import categories, config, detect, install, registry, verify

__all__ = ["categories", "config", "detect", "install", "registry", "verify"]
