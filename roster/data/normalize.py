"""
Grouping-key normalization shared by the aggregator and the CSV codec.
"""
from __future__ import annotations

import pandas as pd
from pandas.api.types import is_scalar

from roster.config import GENDER_NORMALIZATION, UNKNOWN_LABEL


# ---------------------------------------------------------------------------
# Missing values
# ---------------------------------------------------------------------------

def is_missing(value) -> bool:
    """True for None, NaN and other pandas missing markers."""
    return value is None or (is_scalar(value) and pd.isna(value))


def to_text(value) -> str:
    """String-coerce a field value; missing values become an empty string."""
    if is_missing(value):
        return ""
    return value if isinstance(value, str) else str(value)


# ---------------------------------------------------------------------------
# Gender
# ---------------------------------------------------------------------------

def normalize_gender(value) -> str:
    """Map a free-form gender value to Male, Female, Other or Unknown."""
    text = to_text(value).strip()
    if not text:
        return UNKNOWN_LABEL
    return GENDER_NORMALIZATION.get(text.upper(), UNKNOWN_LABEL)


def normalize_genders(values: pd.Series) -> pd.Series:
    """Vectorized normalize_gender."""
    return values.astype(object).map(normalize_gender)


# ---------------------------------------------------------------------------
# Email domain
# ---------------------------------------------------------------------------

def email_domain(email) -> str | None:
    """Lower-cased text after the first '@', or None if there is no '@'."""
    if not isinstance(email, str) or "@" not in email:
        return None
    return email.split("@", 1)[1].lower()


def email_domains(values: pd.Series) -> pd.Series:
    """Vectorized email_domain; non-contributing rows are dropped."""
    return values.astype(object).map(email_domain).dropna()


# ---------------------------------------------------------------------------
# Free-text fields (nationality, college, major, ...)
# ---------------------------------------------------------------------------

def text_key(value) -> str:
    """Trimmed text value, or Unknown when missing or blank."""
    text = to_text(value).strip()
    return text or UNKNOWN_LABEL


def text_keys(values: pd.Series) -> pd.Series:
    """Vectorized text_key."""
    return values.astype(object).map(text_key)


# ---------------------------------------------------------------------------
# Search predicates
# ---------------------------------------------------------------------------

def gender_matches(value, wanted: str) -> bool:
    """Compare a raw gender against a filter value (MALE, m, Male ...)."""
    return normalize_gender(value) == normalize_gender(wanted)


def domain_matches(email, domain: str) -> bool:
    """True when the email ends with '@<domain>', case-insensitively."""
    if not isinstance(email, str):
        return False
    return email.lower().endswith("@" + domain.strip().lower())
