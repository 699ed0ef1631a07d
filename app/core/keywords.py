"""
Keyword tables used by the spreadsheet field detector.

All lists are stored as tuples inside a frozen dataclass so a table set can be
passed around (and cached) without anyone mutating it. The defaults target
Indian recruitment spreadsheets; any table can be replaced from a JSON file:

    {"cities": ["london", "manchester", "remote"], "sources": ["reed", "linkedin"]}

Keys that are not table names are rejected. Per-field header hints are given
as an object: {"field_hints": {"company": ["employer", "org"]}}.
"""

import json
import logging
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple, Union

from app.core import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeywordTables:
    placeholders: Tuple[str, ...]
    placeholder_patterns: Tuple[str, ...]
    cities: Tuple[str, ...]
    positions: Tuple[str, ...]
    statuses: Tuple[str, ...]
    recognized_statuses: Tuple[str, ...]
    sources: Tuple[str, ...]
    organizations: Tuple[str, ...]
    client_keywords: Tuple[str, ...]
    name_header_hints: Tuple[str, ...]
    # field -> header keywords, used to break ties between equally scored candidates
    field_hints: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()

    def hints_for(self, field: str) -> Tuple[str, ...]:
        for name, hints in self.field_hints:
            if name == field:
                return hints
        return ()


DEFAULT_TABLES = KeywordTables(
    placeholders=(
        "na", "n/a", "as per company norms", "not specified", "pending", "tbd",
        "unknown", "none", "-", "null", "nil", "wip", "company", "placeholder",
        "test", "dummy", "", "to be decided", "not applicable", "will share",
        "negotiable", "flexible", "open", "competitive",
    ),
    placeholder_patterns=(
        r"^as per\s", r"^tbd\s", r"^will.*share", r"^negotiable",
        r"^flexible", r"^to be", r"^open", r"^competitive",
    ),
    cities=(
        "bangalore", "bengaluru", "delhi", "new delhi", "mumbai", "pune",
        "hyderabad", "secunderabad", "chennai", "kolkata", "ahmedabad", "gurgaon",
        "gurugram", "noida", "greater noida", "vadodara", "surat", "jaipur",
        "lucknow", "indore", "nagpur", "bhopal", "chandigarh", "kochi",
        "coimbatore", "visakhapatnam", "trivandrum", "remote",
    ),
    positions=(
        "developer", "engineer", "manager", "lead", "analyst", "designer",
        "architect", "consultant", "specialist", "executive", "officer",
        "coordinator", "supervisor", "associate", "senior", "junior", "trainee",
        "intern", "director", "head", "ceo", "cfo", "cto", "qa", "tester",
        "business", "sales", "marketing", "hr", "finance", "operations", "so",
        "fls", "non fls", "contractor", "freelance", "programmer", "admin",
    ),
    statuses=(
        "applied", "interested", "scheduled", "interviewed", "rejected", "joined",
        "pending", "active", "selected", "offered", "accepted", "declined",
    ),
    # Wider list used when validating an already-detected status value.
    recognized_statuses=(
        "applied", "interested", "scheduled", "interviewed", "rejected", "joined",
        "pending", "active", "on hold", "not interested", "hold", "selected",
        "offered", "accepted", "declined", "didn't attend", "referred",
        "under consideration", "offer received",
    ),
    sources=(
        "naukri", "linkedin", "referral", "indeed", "walk", "monster",
        "glassdoor", "agency", "college", "campus", "email", "direct",
        "recruiter", "internal",
    ),
    organizations=(
        "pvt", "ltd", "llp", "solutions", "technologies", "systems", "services",
        "company", "corp", "bank", "finance", "insurance", "tcs", "infosys",
        "wipro", "cognizant", "deloitte", "accenture", "ibm", "microsoft",
        "google", "amazon", "flipkart", "uber", "paytm",
    ),
    client_keywords=(
        "bank", "finance", "credit", "fund", "capital", "investment", "insurance",
    ),
    name_header_hints=("fls", "candidate"),
    field_hints=(
        ("name", ("name", "candidate", "employee", "person", "fname", "fullname", "applicant", "fls")),
        ("phone", ("phone", "contact", "mobile", "number", "tel", "cell", "whatsapp")),
        ("email", ("email", "e-mail", "mailid", "mail")),
        ("location", ("location", "city", "place", "state", "region", "area")),
        ("position", ("position", "job", "role", "designation", "title", "profile", "post")),
        ("experience", ("experience", "exp", "yrs", "years")),
        ("ctc", ("ctc", "current salary", "current pay", "salary", "pay", "basic")),
        ("expectedSalary", ("expected", "desired", "target", "expectation", "offer")),
        ("noticePeriod", ("notice", "period", "availability", "joindate", "days")),
        ("company", ("company", "employer", "organization", "firm")),
        ("client", ("client", "project", "account", "placed at", "bank")),
        ("spoc", ("spoc", "feedback", "hr", "contact_person", "representative", "poc")),
        ("status", ("status", "stage", "feedback", "remark")),
        ("sourceOfCV", ("source", "cv", "resume", "origin", "channel", "referral")),
    ),
)


def _merge_field_hints(base: KeywordTables, data: object) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
    # {"company": ["employer", "org"]}: listed fields are replaced, the rest keep their hints
    if not isinstance(data, dict):
        raise ValueError("Keyword table 'field_hints' must map field names to lists of strings")
    merged = dict(base.field_hints)
    for field, values in data.items():
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ValueError(f"Header hints for '{field}' must be a list of strings")
        merged[field] = tuple(v.strip().lower() for v in values)
    return tuple(merged.items())


def load_keyword_tables(path: Union[str, Path], base: KeywordTables = DEFAULT_TABLES) -> KeywordTables:
    """
    Build a table set from a JSON file, starting from `base`.

    Each key must be a KeywordTables field and each value a list of strings;
    field_hints is an object of field name -> list of strings instead.
    Values are lowercased and stripped, except regex patterns which are kept as written.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Keyword table file must hold a JSON object: {path}")

    known = {f.name for f in fields(KeywordTables)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown keyword tables in {path}: {', '.join(unknown)}")

    overrides = {}
    for key, values in data.items():
        if key == "field_hints":
            overrides[key] = _merge_field_hints(base, values)
            continue
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ValueError(f"Keyword table '{key}' must be a list of strings")
        if key == "placeholder_patterns":
            overrides[key] = tuple(values)
        else:
            overrides[key] = tuple(v.strip().lower() for v in values)

    logger.info(f"Loaded keyword overrides from {path}: {', '.join(sorted(overrides))}")
    return replace(base, **overrides)


@lru_cache(maxsize=1)
def get_keyword_tables() -> KeywordTables:
    """Tables used by the service: defaults, or the file named by KEYWORD_TABLES_PATH."""
    path: Optional[str] = config.KEYWORD_TABLES_PATH
    if path:
        return load_keyword_tables(path)
    return DEFAULT_TABLES
