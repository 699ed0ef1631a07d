"""
Content-based field classification for spreadsheet cells.

Column headers in candidate spreadsheets are unreliable ("Mob", "Col3", "FLS", ""),
so every cell is judged by what it contains. A cell can be a candidate for several
fields at once (a short capitalized word may be both a name and a SPOC); picking
one value per field happens later in candidate_resolver.

Order of the numeric checks matters: a value that parses as a notice period is
never offered as experience or salary, and one that parses as experience is
never offered as salary.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Pattern, Sequence, Tuple

from app.core.keywords import KeywordTables, get_keyword_tables
from app.core.placeholders import is_placeholder_value
from app.core.text_normalization import (
    has_person_shape,
    looks_like_email,
    normalize_cell,
    word_count,
)
from app.core.value_parsers import (
    SALARY_MAX_LPA,
    SALARY_MIN_LPA,
    NOTICE_MAX_DAYS,
    parse_experience,
    parse_notice_period,
    parse_phone,
    parse_salary,
)

logger = logging.getLogger(__name__)

FIELD_NAMES: Tuple[str, ...] = (
    "name", "phone", "email", "location", "position", "experience", "ctc",
    "expectedSalary", "noticePeriod", "company", "client", "spoc", "status",
    "sourceOfCV",
)

NAME_FORBIDDEN_RE = re.compile(r"\d|@|lpa|yrs|phone|email", re.IGNORECASE)
SPOC_FORBIDDEN_RE = re.compile(r"\d|@|lpa|yrs|bank|pvt|ltd", re.IGNORECASE)
LEGAL_SUFFIX_RE = re.compile(r"\b(?:ltd|pvt|llp|corp|inc|pte|plc)\b", re.IGNORECASE)
AMPERSAND_ORG_RE = re.compile(r"&.*(?:pvt|ltd|corp|solutions|technologies)", re.IGNORECASE)

NAME_MIN_LEN = 2
NAME_MAX_LEN = 40
NAME_MAX_WORDS = 3
ORG_LENGTH_THRESHOLD = 45
NAME_HEADER_BONUS = 20


@dataclass
class CandidateValue:
    field: str          # one of FIELD_NAMES
    value: Any          # normalized value offered for the field
    header: str         # column header the cell came from
    score: float = 0.0  # only name candidates are scored
    raw: str = ""       # cell text as seen by the classifier


@lru_cache(maxsize=8)
def _word_patterns(keywords: Tuple[str, ...]) -> Tuple[Pattern, ...]:
    return tuple(re.compile(r"\b" + re.escape(k) + r"\b", re.IGNORECASE) for k in keywords)


def _contains_any(text_lower: str, keywords: Sequence[str]) -> bool:
    return any(k in text_lower for k in keywords)


def is_position_title(text: str, tables: Optional[KeywordTables] = None) -> bool:
    """Whole-word match against position keywords ("Sr. Developer", "HR Executive")."""
    tables = tables or get_keyword_tables()
    return any(p.search(text) for p in _word_patterns(tables.positions))


def is_organization_name(text: str, tables: Optional[KeywordTables] = None) -> bool:
    """
    Heuristic for company names.

    True if the text contains an organization keyword, is longer than any plausible
    person name, carries a legal-entity suffix, or has the "A & B Solutions" shape.
    """
    tables = tables or get_keyword_tables()
    if _contains_any(text.lower(), tables.organizations):
        return True
    if len(text) > ORG_LENGTH_THRESHOLD:
        return True
    if LEGAL_SUFFIX_RE.search(text):
        return True
    if AMPERSAND_ORG_RE.search(text):
        return True
    return False


def _looks_like_person(text: str, forbidden: Pattern) -> bool:
    words = word_count(text)
    return (
        1 <= words <= NAME_MAX_WORDS
        and NAME_MIN_LEN <= len(text) <= NAME_MAX_LEN
        and has_person_shape(text)
        and not forbidden.search(text)
    )


def _name_score(text: str, header: str, tables: KeywordTables) -> float:
    bonus = NAME_HEADER_BONUS if _contains_any(header.lower(), tables.name_header_hints) else 0
    return len(text) * 2 + bonus


def classify_cell(value: Any, header: str = "", tables: Optional[KeywordTables] = None) -> List[CandidateValue]:
    """
    Return every field this cell could belong to.

    Empty and placeholder cells produce no candidates.
    """
    tables = tables or get_keyword_tables()
    text = normalize_cell(value)
    if not text or is_placeholder_value(text, tables):
        return []

    lower = text.lower()
    out: List[CandidateValue] = []

    def offer(field: str, v: Any, score: float = 0.0) -> None:
        out.append(CandidateValue(field=field, value=v, header=header, score=score, raw=text))

    is_status = _contains_any(lower, tables.statuses)
    is_org = is_organization_name(text, tables)
    is_position = is_position_title(text, tables)
    has_city = _contains_any(lower, tables.cities)

    if looks_like_email(lower):
        offer("email", lower)

    phone = parse_phone(text)
    if phone:
        offer("phone", phone)

    if is_position:
        offer("position", text)

    if (
        _looks_like_person(text, NAME_FORBIDDEN_RE)
        and not is_org
        and not is_position
        and not is_status
        and not has_city
    ):
        offer("name", text, score=_name_score(text, header, tables))

    if has_city:
        offer("location", text)

    # A notice-shaped value ("18 months") blocks experience and salary even when
    # it is too long to be offered as a notice period.
    notice = parse_notice_period(text)
    if notice is not None and 0 <= notice <= NOTICE_MAX_DAYS:
        offer("noticePeriod", notice)

    experience = parse_experience(text) if notice is None else None
    if experience is not None:
        offer("experience", experience)

    if notice is None and experience is None:
        salary = parse_salary(text)
        if salary is not None and SALARY_MIN_LPA <= salary <= SALARY_MAX_LPA:
            offer("ctc", salary)
            offer("expectedSalary", salary)

    if is_status:
        offer("status", lower)

    if _contains_any(lower, tables.sources):
        offer("sourceOfCV", lower)

    if is_org and not is_status:
        offer("company", text)
        if _contains_any(lower, tables.client_keywords):
            offer("client", text)

    if _looks_like_person(text, SPOC_FORBIDDEN_RE):
        offer("spoc", text)

    return out


def _aligned_headers(row: Mapping[str, Any], headers: Optional[Sequence[str]]) -> List[str]:
    keys = list(row.keys())
    if headers is None:
        return [str(k) for k in keys]
    # i-th header belongs to the i-th column; missing entries fall back to the row key
    return [str(headers[i]) if i < len(headers) and headers[i] is not None else str(k)
            for i, k in enumerate(keys)]


def collect_candidates(
    row: Mapping[str, Any],
    headers: Optional[Sequence[str]] = None,
    tables: Optional[KeywordTables] = None,
) -> Dict[str, List[CandidateValue]]:
    """
    Classify every cell of a row, in column order.

    Returns field -> candidates in the order their cells appear in the row.
    Every field in FIELD_NAMES is present, possibly with an empty list.
    """
    tables = tables or get_keyword_tables()
    candidates: Dict[str, List[CandidateValue]] = {f: [] for f in FIELD_NAMES}

    for header, value in zip(_aligned_headers(row, headers), row.values()):
        for cand in classify_cell(value, header, tables):
            candidates[cand.field].append(cand)

    logger.debug(
        "Candidates per field: "
        + ", ".join(f"{f}={len(c)}" for f, c in candidates.items() if c)
    )
    return candidates
