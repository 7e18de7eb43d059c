"""Locale-aware sidebar and navigation generation for documentation sites."""

__version__ = "0.3.0"
