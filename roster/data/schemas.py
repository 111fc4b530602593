"""
Record filter, remote page envelope and decode/import result types.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from roster.data.normalize import (
    domain_matches,
    gender_matches,
    is_missing,
    normalize_gender,
    to_text,
)

_NUMERIC_RE = re.compile(r"^-?\d+(\.\d+)?$")


@dataclass
class DecodeResult:
    """Rows accepted from a CSV document, plus how many were dropped."""
    records: list[dict[str, str]] = field(default_factory=list)
    accepted: int = 0
    skipped: int = 0
    columns: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """An import with zero accepted rows is a no-op failure."""
        return self.accepted > 0


@dataclass
class ImportReport:
    """Outcome of a per-row bulk import. Successes are never rolled back."""
    imported: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.imported > 0

    @property
    def attempted(self) -> int:
        return self.imported + self.failed


@dataclass
class Page:
    """One page of records as served by the remote record store."""
    content: list[dict[str, Any]] = field(default_factory=list)
    total_elements: int = 0
    number: int = 0                      # 0-based page index

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "Page":
        """Adapt a decoded ``{content, totalElements, number}`` payload."""
        content = payload.get("content") or []
        total = payload.get("totalElements")
        return cls(
            content=[dict(r) for r in content],
            total_elements=int(total) if total is not None else len(content),
            number=int(payload.get("number") or 0),
        )

    @property
    def page_label(self) -> int:
        """1-based page number for display."""
        return self.number + 1


@dataclass
class RecordFilter:
    """Search criteria over records: gender, email domain and sort order."""
    gender: Optional[str] = None         # MALE, f, Other ...
    domain: Optional[str] = None         # e.g. "gmail.com"
    sort_by: str = "id"
    direction: str = "asc"               # asc|desc

    @property
    def descending(self) -> bool:
        return self.direction.strip().lower() == "desc"

    @property
    def is_empty(self) -> bool:
        return not (self.gender and self.gender.strip()) and not (self.domain and self.domain.strip())

    def matches(self, record: Mapping[str, Any]) -> bool:
        if self.gender and self.gender.strip() and not gender_matches(record.get("gender"), self.gender):
            return False
        if self.domain and self.domain.strip() and not domain_matches(record.get("email"), self.domain):
            return False
        return True

    def apply(self, records: Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
        """Filter and sort records; inputs are not mutated.

        Records lacking the sort field always come last, whatever the
        direction.
        """
        matched = [r for r in records if self.matches(r)]
        present = [r for r in matched if to_text(r.get(self.sort_by)).strip()]
        absent = [r for r in matched if not to_text(r.get(self.sort_by)).strip()]
        present.sort(key=lambda r: _sort_key(r.get(self.sort_by)), reverse=self.descending)
        return present + absent

    @property
    def label(self) -> str:
        """Human-readable description of the filter."""
        filters = []
        if self.gender and self.gender.strip():
            filters.append(f"gender={normalize_gender(self.gender)}")
        if self.domain and self.domain.strip():
            filters.append(f"domain={self.domain.strip().lower()}")
        prefix = ", ".join(filters) if filters else "All students"
        order = "desc" if self.descending else "asc"
        return f"{prefix}, sorted by {self.sort_by} {order}"


def _sort_key(value) -> tuple[int, float, str]:
    """Numbers (or numeric text) before text; numbers compare numerically."""
    if not is_missing(value) and isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, float(value), "")
    text = to_text(value).strip()
    if _NUMERIC_RE.match(text):
        return (0, float(text), "")
    return (1, 0.0, text)
