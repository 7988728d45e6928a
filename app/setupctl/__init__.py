"""setupctl - Resilient tool installation for Linux and macOS hosts."""

__version__ = "0.2.0"
