"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape

from setupctl.core.theme import get_theme
from setupctl.models.outcome import InstallStatus, VerificationStatus
from setupctl.models.registry import Priority


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())

_STATUS_MARKUP: dict[InstallStatus, str] = {
    InstallStatus.ALREADY_SATISFIED: "[status.satisfied]satisfied[/]",
    InstallStatus.INSTALLED: "[status.installed]installed[/]",
    InstallStatus.FAILED: "[status.failed]failed[/]",
    InstallStatus.MISSING: "[status.missing]missing[/]",
}

_VERIFICATION_MARKUP: dict[VerificationStatus, str] = {
    VerificationStatus.VERIFIED: "[success]✓ verified[/]",
    VerificationStatus.NOT_VERIFIED: "[warning]✗ not verified[/]",
    VerificationStatus.UNATTEMPTED: "[muted]-[/]",
}


def format_status(status: InstallStatus) -> str:
    """Format an install status with color markup."""
    return _STATUS_MARKUP[status]


def format_verification(verified: VerificationStatus) -> str:
    """Format a verification result with color markup."""
    return _VERIFICATION_MARKUP[verified]


def format_priority(priority: Priority) -> str:
    """Format a category priority with color markup."""
    return f"[priority.{priority.value}]{priority.value}[/]"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
