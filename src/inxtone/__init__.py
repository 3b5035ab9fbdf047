"""Inxtone - Story Bible context assembly for AI-assisted novel writing."""

__version__ = "0.1.0"
