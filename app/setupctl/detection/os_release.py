"""os-release detection strategy.

Parses the freedesktop.org key-value descriptor, which is authoritative
on modern distributions.
"""

import logging
import shlex

from setupctl.detection.base import DetectionStrategy, DistroInfo

logger = logging.getLogger(__name__)

# Searched in order; /usr/lib/os-release is the vendor fallback location
OS_RELEASE_PATHS = ("/etc/os-release", "/usr/lib/os-release")


def parse_os_release(content: str) -> dict[str, str]:
    """Parse os-release content into a dictionary.

    Lines are KEY=VALUE pairs with optional shell-style quoting. Comments,
    blank lines and malformed lines are skipped.

    Args:
        content: Raw file content.

    Returns:
        Dictionary of keys to unquoted values.
    """
    fields: dict[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        if not key.isidentifier():
            logger.debug("Skipping malformed os-release line: %r", line[:100])
            continue
        try:
            tokens = shlex.split(value)
        except ValueError:
            tokens = [value.strip().strip("\"'")]
        fields[key] = " ".join(tokens)
    return fields


class OsReleaseStrategy(DetectionStrategy):
    """Detect the distribution from /etc/os-release."""

    @property
    def name(self) -> str:
        """Return the strategy name."""
        return "os-release"

    def detect(self) -> DistroInfo | None:
        """Read the first available os-release file."""
        for path in OS_RELEASE_PATHS:
            content = self._read(path)
            if content is None:
                continue

            logger.debug("Reading distribution info from %s", path)
            fields = parse_os_release(content)
            return DistroInfo(
                id=fields.get("ID", "").lower(),
                name=fields.get("NAME", ""),
                version=fields.get("VERSION_ID", ""),
                codename=fields.get("VERSION_CODENAME", ""),
                id_like=tuple(fields.get("ID_LIKE", "").lower().split()),
            )
        return None
