"""
CSV encode/decode for roster records.

Encoding quotes a field only when it contains a separator, a quote or a line
break, doubling embedded quotes. Decoding is a character scanner with a single
inside-quotes flag, so quoted fields may carry commas, quotes and newlines.
"""
from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from roster.config import CSV_LINE_TERMINATOR, CSV_QUOTE, CSV_SEPARATOR, REQUIRED_COLUMNS
from roster.data.normalize import to_text
from roster.data.schemas import DecodeResult
from roster.errors import EmptyDocumentError, MissingColumnsError

logger = logging.getLogger(__name__)

_SPECIAL_CHARS = (CSV_SEPARATOR, CSV_QUOTE, "\n", "\r")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def escape_field(value) -> str:
    """String-coerce one value and quote it if it needs quoting."""
    text = to_text(value)
    if any(ch in text for ch in _SPECIAL_CHARS):
        return _quote(text)
    return text


def _quote(text: str) -> str:
    return CSV_QUOTE + text.replace(CSV_QUOTE, CSV_QUOTE * 2) + CSV_QUOTE


def encode(records: Iterable[Mapping], columns: Sequence[str]) -> str:
    """Serialize records to a CSV document with the given column order.

    Absent or null values encode as empty fields. Never raises for odd
    values; everything is coerced to text.
    """
    lines = [CSV_SEPARATOR.join(columns)]
    for record in records:
        line = CSV_SEPARATOR.join(escape_field(record.get(col)) for col in columns)
        if columns and not line.strip():
            # single-column blank value; a bare blank line would be dropped on decode
            line = _quote(to_text(record.get(columns[0])))
        lines.append(line)
    return CSV_LINE_TERMINATOR.join(lines)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def split_lines(text: str) -> list[str]:
    """Split text into physical records on line breaks outside quotes.

    A quote opens a quoted field only at the start of a field; a stray quote
    inside an unquoted value (``O"Brien``) is plain data. A line break inside
    a quoted field stays part of that record. Both ``\\n`` and ``\\r\\n``
    terminate a record. If the text ends inside an unterminated quoted field,
    that last stretch falls back to splitting on raw line breaks.
    """
    lines: list[str] = []
    record_start = 0
    in_quotes = False
    at_field_start = True
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if in_quotes:
            if ch == CSV_QUOTE:
                if i + 1 < n and text[i + 1] == CSV_QUOTE:
                    i += 1
                else:
                    in_quotes = False
        elif ch == CSV_QUOTE and at_field_start:
            in_quotes = True
            at_field_start = False
        elif ch == "\n":
            lines.append(_strip_cr(text[record_start:i]))
            record_start = i + 1
            at_field_start = True
        elif ch == CSV_SEPARATOR:
            at_field_start = True
        else:
            at_field_start = False
        i += 1

    tail = text[record_start:]
    if in_quotes:
        logger.warning("CSV text ends inside a quoted field; splitting the rest on line breaks")
        lines.extend(_strip_cr(part) for part in tail.split("\n"))
    elif tail:
        lines.append(_strip_cr(tail))
    return lines


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


def parse_line(line: str) -> list[str]:
    """Split one record into fields.

    Outside quotes a separator ends the field. Inside quotes a doubled quote
    is a literal quote character; any other quote toggles the quoting state.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == CSV_QUOTE:
            if in_quotes and i + 1 < n and line[i + 1] == CSV_QUOTE:
                current.append(CSV_QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == CSV_SEPARATOR and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current))
    return fields


def parse_header(line: str) -> list[str]:
    """Naive header split: trim each name, then drop one leading and one
    trailing quote independently of each other.
    """
    names = []
    for raw in line.split(CSV_SEPARATOR):
        name = raw.strip()
        if name.startswith(CSV_QUOTE):
            name = name[1:]
        if name.endswith(CSV_QUOTE):
            name = name[:-1]
        names.append(name)
    return names


def decode(text: str, required_columns: Sequence[str] = REQUIRED_COLUMNS) -> DecodeResult:
    """Parse a CSV document into records keyed by header names.

    Raises EmptyDocumentError when there is no data line and
    MissingColumnsError when the header lacks a required column. Rows with a
    blank required value are skipped and counted, not raised. When a header
    name repeats, the first column with that name supplies the value.
    """
    lines = [line for line in split_lines(text) if line.strip()]
    if len(lines) < 2:
        raise EmptyDocumentError(len(lines))

    header = parse_header(lines[0])
    missing = [col for col in required_columns if col not in header]
    if missing:
        raise MissingColumnsError(missing)

    records: list[dict[str, str]] = []
    skipped = 0
    for line in lines[1:]:
        fields = parse_line(line)
        if len(fields) < len(header):
            fields += [""] * (len(header) - len(fields))
        record: dict[str, str] = {}
        for name, value in zip(header, fields):
            record.setdefault(name, value)  # first duplicate column wins
        if any(not record[col].strip() for col in required_columns):
            skipped += 1
            continue
        records.append(record)

    logger.debug("Decoded %d rows (%d skipped) with columns %s", len(records), skipped, header)
    return DecodeResult(records=records, accepted=len(records), skipped=skipped, columns=header)
