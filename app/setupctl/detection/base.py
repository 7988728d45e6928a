"""Abstract base class for distribution detection strategies.

This module defines the DetectionStrategy interface implemented by each
Linux identification method, and the partial result they produce.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from setupctl.models.system import Family


class DetectionError(Exception):
    """Raised when the host cannot be identified by any strategy."""


@dataclass(slots=True)
class DistroInfo:
    """Partial distribution identity found by a single strategy.

    Attributes:
        id: Lower-case distribution identifier; empty if not found.
        name: Human-readable distribution name.
        version: Distribution version string.
        codename: Release codename.
        family: Family, if the strategy determines it directly.
        id_like: Related distribution ids, used as a family hint.
    """

    id: str = ""
    name: str = ""
    version: str = ""
    codename: str = ""
    family: Family | None = None
    id_like: tuple[str, ...] = ()


class DetectionStrategy(ABC):
    """Abstract base class for Linux distribution detection strategies.

    Strategies read files relative to a root directory so they can be
    exercised against fixture trees.

    Example:
        >>> strategy = OsReleaseStrategy()
        >>> info = strategy.detect()
        >>> if info is not None:
        ...     print(info.id)
    """

    def __init__(self, root: Path = Path("/")) -> None:
        """Initialize the strategy.

        Args:
            root: Filesystem root used to resolve absolute paths.
        """
        self._root = root

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in log messages."""

    @abstractmethod
    def detect(self) -> DistroInfo | None:
        """Attempt identification.

        Returns:
            DistroInfo if the strategy's signal is present, None otherwise.
            A returned DistroInfo may still carry an empty id.
        """

    def _path(self, absolute: str) -> Path:
        """Resolve an absolute host path against the configured root."""
        return self._root / absolute.lstrip("/")

    def _read(self, absolute: str) -> str | None:
        """Read a text file under the root, returning None if unreadable."""
        try:
            return self._path(absolute).read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None
