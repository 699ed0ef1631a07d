"""
Format-specific parsers for spreadsheet values.

Every parser takes a raw value (string or number) and returns the normalized
value, or None when the value is not in a shape the parser understands.
Parsers never raise: an unrecognized value is an expected outcome.

Units:
- salary: LPA (lakhs per annum, 1 lakh = 100,000)
- phone: 10-digit Indian mobile number as a string
- notice period: days
- experience: years
"""

import re
from typing import Any, Optional

from app.core.text_normalization import normalize_cell


# ============================================================================
# Salary
# ============================================================================

LPA_RE = re.compile(r"(\d+(?:\.\d+)?)\s*lpa")
THOUSANDS_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*k$")
LAKH_SHORT_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*l$")
LAKH_WORD_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:lakhs?|lacs?)")
GROUPED_INT_RE = re.compile(r"^\d{1,3}(?:,\d{2,3})+$")
BARE_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")

SALARY_MIN_LPA = 1.5
SALARY_MAX_LPA = 100.0
RUPEES_MIN = 100_000
RUPEES_MAX = 10_000_000
RUPEES_PER_LAKH = 100_000


def parse_salary(value: Any) -> Optional[float]:
    """
    Parse a salary figure into LPA.

    Examples:
    - "1.5LPA", "4.5 LPA" -> 1.5, 4.5
    - "150K" -> 1.5 (thousands / 100)
    - "2L", "3.5 lac", "12 Lakhs" -> 2, 3.5, 12
    - "1,50,000", "150,000" -> 1.5 (only if 1 lakh..1 crore)
    - "15" -> 15 (bare number already in LPA, 1.5..100)
    - "150000" -> 1.5 (bare rupees, up to 1 crore)
    - "1", "50000000" -> None
    """
    s = normalize_cell(value)
    if not s:
        return None
    s = s.lower()

    m = LPA_RE.search(s)
    if m:
        return float(m.group(1))

    m = THOUSANDS_RE.match(s)
    if m:
        return float(m.group(1)) / 100

    m = LAKH_SHORT_RE.match(s)
    if m:
        return float(m.group(1))

    m = LAKH_WORD_RE.search(s)
    if m:
        return float(m.group(1))

    if GROUPED_INT_RE.match(s):
        amount = int(s.replace(",", ""))
        if RUPEES_MIN <= amount <= RUPEES_MAX:
            return amount / RUPEES_PER_LAKH
        return None

    if BARE_NUMBER_RE.match(s):
        num = float(s)
        if SALARY_MIN_LPA <= num <= SALARY_MAX_LPA:
            return num
        if SALARY_MAX_LPA < num <= RUPEES_MAX:
            return num / RUPEES_PER_LAKH

    return None


# ============================================================================
# Phone
# ============================================================================

MOBILE_RE = re.compile(r"^[6-9]\d{9}$")
NON_DIGIT_RE = re.compile(r"\D")


def parse_phone(value: Any) -> Optional[str]:
    """
    Parse an Indian mobile number.

    "+91-735-9355840" -> "7359355840"
    "912345" -> None (too short)
    "5123456789" -> None (mobile numbers start with 6-9)
    """
    s = normalize_cell(value)
    if not s:
        return None
    digits = NON_DIGIT_RE.sub("", s)

    phone = digits
    if digits.startswith("91") and len(digits) == 12:
        phone = digits[2:]

    if MOBILE_RE.match(phone):
        return phone

    # Extra prefixes such as "0" or "0091": the number is the trailing 10 digits
    if len(digits) > 10:
        last10 = digits[-10:]
        if MOBILE_RE.match(last10):
            return last10

    return None


# ============================================================================
# Notice period
# ============================================================================

# immediate, imediate, immidiate, immediat, "Immediate Joiner", ...
IMMEDIATE_RE = re.compile(r"^imm?[ei]d[ie]?ate?")
DAYS_RE = re.compile(r"^(\d+)\s*days?$")
WEEKS_RE = re.compile(r"^(\d+)\s*weeks?$")
MONTHS_RE = re.compile(r"^(\d+)\s*months?$")
BARE_INT_RE = re.compile(r"^\d+$")

NOTICE_MAX_DAYS = 365


def parse_notice_period(value: Any) -> Optional[int]:
    """
    Parse a notice period into days.

    "Immediate" -> 0, "30 days" -> 30, "2 weeks" -> 14, "3 months" -> 90, "60" -> 60.
    """
    s = normalize_cell(value)
    if not s:
        return None
    s = s.lower()

    if IMMEDIATE_RE.match(s):
        return 0

    m = DAYS_RE.match(s)
    if m:
        return int(m.group(1))

    m = WEEKS_RE.match(s)
    if m:
        return int(m.group(1)) * 7

    m = MONTHS_RE.match(s)
    if m:
        return int(m.group(1)) * 30

    if BARE_INT_RE.match(s):
        days = int(s)
        if 0 <= days <= NOTICE_MAX_DAYS:
            return days

    return None


# ============================================================================
# Experience
# ============================================================================

FRESHER_RE = re.compile(r"^(?:fresher|entry|0\s*exp|student|graduate)")
EXPERIENCE_RE = re.compile(r"^(\d+(?:\.\d+)?)\+?\s*(?:yrs?|years?|y|months?)$")

EXPERIENCE_MIN_YEARS = 0.1
EXPERIENCE_MAX_YEARS = 70.0


def parse_experience(value: Any) -> Optional[float]:
    """
    Parse work experience in years.

    A unit suffix is required: "7.9 Yrs" -> 7.9, "5+ years" -> 5, but a bare "7" -> None
    because a bare number could just as well be a notice period or a salary.
    "Fresher", "Entry level", "Student" -> 0.
    """
    s = normalize_cell(value)
    if not s:
        return None
    s = s.lower()

    if FRESHER_RE.match(s):
        return 0.0

    m = EXPERIENCE_RE.match(s)
    if m:
        years = float(m.group(1))
        if years == 0 or EXPERIENCE_MIN_YEARS <= years <= EXPERIENCE_MAX_YEARS:
            return years

    return None
