"""Superposition particle maze generation."""

__version__ = "0.1.0"
