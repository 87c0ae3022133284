"""Hex grid transit network builder."""

__version__ = "0.1.0"
