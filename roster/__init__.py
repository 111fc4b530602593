"""Roster core: record statistics and CSV import/export."""

__version__ = "1.0.0"
