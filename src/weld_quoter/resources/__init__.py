"""Packaged default settings and reference tables."""
