"""
Text normalization utilities for spreadsheet cell values.

Spreadsheet readers hand back more than strings: openpyxl returns ints, floats,
datetimes and bools, and JSON clients send numbers. Everything is turned into a
clean string before detection runs. Two levels:
- normalize_cell(): any raw cell -> trimmed single-spaced string (or None)
- title_case(): person-name casing used by auto-fix
"""

import re
from datetime import date, datetime, time
from typing import Any, Optional


# ============================================================================
# Shape patterns
# ============================================================================

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
WHITESPACE_RE = re.compile(r"\s+")

# Letters from any script plus space, hyphen, apostrophe and period.
# `[^\W\d_]` is "word character that is not a digit or underscore", i.e. a letter.
PERSON_SHAPE_RE = re.compile(r"^(?:[^\W\d_]|[\s\-'.])+$")


def collapse_whitespace(text: str) -> str:
    """Replace NBSP/tabs/newlines with single spaces and trim."""
    return WHITESPACE_RE.sub(" ", text.replace("\u00a0", " ")).strip()


def _format_number(value: float) -> str:
    # Excel stores phone numbers and whole rupee amounts as floats: 9876543210.0
    if value.is_integer():
        return str(int(value))
    return repr(value)


def normalize_cell(value: Any) -> Optional[str]:
    """
    Convert a raw cell into the string the detectors look at.

    Examples:
    - 9876543210.0 -> "9876543210"
    - 4.5 -> "4.5"
    - "  Priya  Singh " -> "Priya Singh"
    - None -> None
    - datetime(2024, 1, 5) -> "2024-01-05T00:00:00"
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value != value:  # NaN
            return None
        return _format_number(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return collapse_whitespace(str(value))


def looks_like_email(text: str) -> bool:
    return bool(EMAIL_RE.match(text))


def has_person_shape(text: str) -> bool:
    """Only letters (any script), spaces, hyphens, apostrophes and periods."""
    return bool(PERSON_SHAPE_RE.match(text))


def word_count(text: str) -> int:
    return len(text.split())


def title_case(text: str) -> str:
    """
    Title-case each whitespace-separated word.

    "rahul  SHARMA" -> "Rahul Sharma"
    Unlike str.title(), letters after apostrophes or hyphens stay lowercase: "o'brien" -> "O'brien".
    """
    return " ".join(w[:1].upper() + w[1:].lower() for w in text.split())
