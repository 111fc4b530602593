"""
Error types raised by the roster core.
"""
from __future__ import annotations


class RosterError(Exception):
    """Base class for roster errors."""


class CsvFormatError(RosterError, ValueError):
    """A CSV document is structurally unusable."""


class MissingColumnsError(CsvFormatError):
    """The header lacks one or more required columns."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"CSV missing required: {', '.join(self.missing)}")


class EmptyDocumentError(CsvFormatError):
    """Fewer than a header and one data line."""

    def __init__(self, lines: int = 0) -> None:
        self.lines = lines
        super().__init__("Need at least a header and one data row")
