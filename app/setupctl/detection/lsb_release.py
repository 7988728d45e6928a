"""lsb_release detection strategy."""

import logging

from setupctl.detection.base import DetectionStrategy, DistroInfo
from setupctl.utils.shell import command_exists, try_run_command

logger = logging.getLogger(__name__)


class LsbReleaseStrategy(DetectionStrategy):
    """Detect the distribution by invoking the lsb_release utility."""

    @property
    def name(self) -> str:
        """Return the strategy name."""
        return "lsb_release"

    def detect(self) -> DistroInfo | None:
        """Query lsb_release if it is installed."""
        if not command_exists("lsb_release"):
            return None

        logger.debug("Using lsb_release for distribution detection")
        return DistroInfo(
            id=self._query("-si").lower(),
            name=self._query("-sd").strip('"'),
            version=self._query("-sr"),
            codename=self._query("-sc"),
        )

    def _query(self, flag: str) -> str:
        """Run lsb_release with a single short flag and return its output."""
        result = try_run_command(["lsb_release", flag], timeout=10.0)
        if not result.success:
            return ""
        return result.stdout.strip()
