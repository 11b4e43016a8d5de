"""Weld labour estimation for pressure vessel fabrication."""

__version__ = "0.1.0"
