"""
Download/upload boundary: filenames, MIME type, text <-> bytes.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from roster.config import CSV_MEDIA_TYPE, EXPORT_COLUMNS, EXPORT_FILENAME_PREFIX
from roster.data.csv_codec import encode


@dataclass(frozen=True)
class CsvDownload:
    filename: str
    media_type: str
    content: bytes

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def export_filename(prefix: str = EXPORT_FILENAME_PREFIX, day: dt.date | None = None) -> str:
    """e.g. students-export-2025-03-01.csv"""
    day = day or dt.date.today()
    return f"{prefix}-{day.isoformat()}.csv"


def to_download(
    records: Iterable[Mapping],
    columns: Sequence[str] = EXPORT_COLUMNS,
    prefix: str = EXPORT_FILENAME_PREFIX,
    day: dt.date | None = None,
) -> CsvDownload:
    """Encode records and wrap them as a UTF-8 download."""
    text = encode(records, columns)
    return CsvDownload(
        filename=export_filename(prefix, day),
        media_type=CSV_MEDIA_TYPE,
        content=text.encode("utf-8"),
    )


def read_upload(raw: bytes) -> str:
    """Decode an uploaded file as UTF-8, dropping a leading BOM.

    Bytes that are not valid UTF-8 become U+FFFD so a mis-encoded upload
    still reaches the row-level checks.
    """
    return raw.decode("utf-8-sig", errors="replace")
