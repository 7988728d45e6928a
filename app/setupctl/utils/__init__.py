"""Utility functions for setupctl."""
