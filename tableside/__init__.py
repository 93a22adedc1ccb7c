"""Tableside: table ordering service for nightlife venues."""

__version__ = "0.1.0"
