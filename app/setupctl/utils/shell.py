"""Shell execution utilities.

Provides subprocess execution with structured argument lists and a
fixed-count retry helper for network-dependent steps.
"""

import logging
import shutil
import subprocess
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Exit code reported when the executable itself cannot be started
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0

    @property
    def error_summary(self) -> str:
        """Return the last non-empty line of stderr, if any."""
        lines = [line.strip() for line in self.stderr.splitlines() if line.strip()]
        return lines[-1] if lines else ""


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
) -> CommandResult:
    """Execute a command and return the result.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command. None waits forever.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def try_run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Execute a command, folding start-up failures into the result.

    Unlike run_command(), a missing executable or a timeout does not raise.
    Both are reported as a failed CommandResult so callers can treat every
    outcome uniformly.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult; returncode is 127 if the program could not be started.
    """
    try:
        return run_command(args, timeout=timeout)
    except FileNotFoundError as e:
        return CommandResult(stdout="", stderr=str(e), returncode=COMMAND_NOT_FOUND)
    except subprocess.TimeoutExpired:
        msg = f"{args[0]} timed out after {timeout}s"
        return CommandResult(stdout="", stderr=msg, returncode=124)
    except OSError as e:
        return CommandResult(stdout="", stderr=str(e), returncode=126)


def run_with_retry(
    args: list[str],
    *,
    attempts: int = 3,
    delay: float = 2.0,
    timeout: float | None = None,
) -> CommandResult:
    """Execute a command, retrying a fixed number of times on failure.

    The delay between attempts is constant; there is no backoff.

    Args:
        args: Command and arguments to execute.
        attempts: Maximum number of attempts (at least one is made).
        delay: Seconds to sleep between attempts.
        timeout: Per-attempt timeout in seconds.

    Returns:
        The first successful CommandResult, or the last failed one.
    """
    attempts = max(1, attempts)
    result = try_run_command(args, timeout=timeout)
    for attempt in range(2, attempts + 1):
        if result.success:
            break
        logger.warning(
            "Command %s failed (attempt %d/%d), retrying in %.1fs",
            " ".join(args),
            attempt - 1,
            attempts,
            delay,
        )
        time.sleep(delay)
        result = try_run_command(args, timeout=timeout)
    return result


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None
