import math

import pytest

from roster.data.normalize import (
    domain_matches,
    email_domain,
    gender_matches,
    normalize_gender,
    text_key,
    to_text,
)


@pytest.mark.parametrize("raw, expected", [
    ("M", "Male"),
    ("male", "Male"),
    ("  Male ", "Male"),
    ("f", "Female"),
    ("FEMALE", "Female"),
    ("O", "Other"),
    ("other", "Other"),
    ("Non-Binary", "Other"),
    ("nonbinary", "Other"),
    ("NB", "Other"),
    ("", "Unknown"),
    ("   ", "Unknown"),
    (None, "Unknown"),
    (float("nan"), "Unknown"),
    ("robot", "Unknown"),
])
def test_normalize_gender(raw, expected):
    assert normalize_gender(raw) == expected


def test_email_domain():
    assert email_domain("Ann@Example.COM") == "example.com"
    assert email_domain("a@b@c.org") == "b@c.org"
    assert email_domain("no-at-sign") is None
    assert email_domain(None) is None
    assert email_domain(42) is None


def test_text_key():
    assert text_key(" Kenya ") == "Kenya"
    assert text_key("") == "Unknown"
    assert text_key(None) == "Unknown"
    assert text_key(7) == "7"


def test_to_text():
    assert to_text(None) == ""
    assert to_text(math.nan) == ""
    assert to_text(12) == "12"
    assert to_text("  keep ") == "  keep "


def test_search_predicates():
    assert gender_matches("m", "MALE")
    assert not gender_matches("F", "MALE")
    assert domain_matches("bo@GMAIL.com", "gmail.com")
    assert not domain_matches("bo@notgmail.com", "gmail.com")
    assert not domain_matches(None, "gmail.com")
