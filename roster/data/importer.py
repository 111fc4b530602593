"""
Bulk CSV import: decode once, then hand each accepted row to a create callback.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from roster.config import REQUIRED_COLUMNS
from roster.data.csv_codec import decode
from roster.data.schemas import ImportReport

logger = logging.getLogger(__name__)


def import_csv(
    text: str,
    create: Callable[[dict[str, str]], Any],
    required_columns: Sequence[str] = REQUIRED_COLUMNS,
) -> ImportReport:
    """Create one record per accepted row, tolerating per-row failures.

    Only the required fields are passed to ``create``, trimmed. A failing row
    is logged and counted; earlier successes stand. Structural CSV errors
    propagate before any row is created.
    """
    result = decode(text, required_columns)
    report = ImportReport(skipped=result.skipped)

    for i, row in enumerate(result.records, 1):
        payload = _row_payload(row, required_columns)
        try:
            create(payload)
        except Exception as exc:
            report.failed += 1
            report.errors.append(f"row {i}: {exc}")
            logger.warning("Import row %d failed: %s", i, exc)
            continue
        report.imported += 1

    logger.info(
        "Import finished: %d imported, %d failed, %d skipped",
        report.imported, report.failed, report.skipped,
    )
    return report


def _row_payload(row: Mapping[str, str], required_columns: Sequence[str]) -> dict[str, str]:
    return {col: row[col].strip() for col in required_columns}
