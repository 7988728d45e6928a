"""Core functionality for setupctl."""
