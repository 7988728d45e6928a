"""Bundled data files (default tool registry and theme)."""
