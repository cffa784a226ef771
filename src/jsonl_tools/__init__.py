"""Structural summaries for JSON-Lines files."""

__version__ = "0.1.0"
