"""
Pick one value per field from the candidates collected for a row.

Selection is deterministic: highest score wins. Among candidates tied on the top
score, a cell whose column header carries one of the field's hint keywords wins
("Current Company" over "Col1"); after that, name and position prefer the shorter
value, company and client the longer one, and everything else the cell that came
first in the row (Python's sort is stable).
"""

import re
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

from app.core.field_classifier import FIELD_NAMES, CandidateValue, is_position_title
from app.core.keywords import KeywordTables, get_keyword_tables

# A text value may hold only one of these fields; earlier fields keep it.
CROSS_FIELD_PRIORITY = (
    "name", "email", "phone", "position", "spoc", "company", "status", "sourceOfCV",
)

SHORTEST_WINS = ("name", "position")
LONGEST_WINS = ("company", "client")

FLS_HEADER_RE = re.compile(r"fls", re.IGNORECASE)


def _ranked(candidates: List[CandidateValue]) -> List[CandidateValue]:
    return sorted(candidates, key=lambda c: c.score, reverse=True)


def _header_matches(cand: CandidateValue, hints: Sequence[str]) -> bool:
    header = cand.header.lower()
    return any(h in header for h in hints)


def pick_best(candidates: List[CandidateValue], hints: Sequence[str] = ()) -> Optional[CandidateValue]:
    if not candidates:
        return None
    ranked = _ranked(candidates)
    top = [c for c in ranked if c.score == ranked[0].score]
    if len(top) == 1:
        return top[0]

    field = top[0].field
    # FLS / Non-FLS columns are where recruiters put the candidate
    if field == "name":
        for c in top:
            if FLS_HEADER_RE.search(c.header):
                return c
    for c in top:
        if _header_matches(c, hints):
            return c

    if field in SHORTEST_WINS:
        return min(top, key=lambda c: len(str(c.value)))
    if field in LONGEST_WINS:
        return max(top, key=lambda c: len(str(c.value)))
    return top[0]


def find_duplicates(candidates: List[CandidateValue], hints: Sequence[str] = ()) -> List[Any]:
    """Values of every candidate that lost to the winner, best first."""
    if len(candidates) < 2:
        return []
    winner = pick_best(candidates, hints)
    return [c.value for c in _ranked(candidates) if c is not winner]


def resolve_candidates(
    candidates: Dict[str, List[CandidateValue]],
    tables: Optional[KeywordTables] = None,
) -> Dict[str, Optional[CandidateValue]]:
    """Winning candidate (or None) for every field in FIELD_NAMES."""
    tables = tables or get_keyword_tables()
    return {
        field: pick_best(candidates.get(field, []), tables.hints_for(field))
        for field in FIELD_NAMES
    }


def drop_cross_field_repeats(winners: Dict[str, Optional[CandidateValue]]) -> List[str]:
    """
    Clear lower-priority fields whose value already went to a higher-priority field.

    "Priya Singh" can win both name and spoc; it stays a name and spoc becomes None.
    Mutates `winners` and returns the fields that were cleared.
    """
    assigned = set()
    cleared: List[str] = []
    for field in CROSS_FIELD_PRIORITY:
        cand = winners.get(field)
        if cand is None:
            continue
        key = str(cand.value).strip().lower()
        if key in assigned:
            winners[field] = None
            cleared.append(field)
        else:
            assigned.add(key)
    return cleared


def _move(winners: Dict[str, Optional[CandidateValue]], src: str, dst: str) -> None:
    winners[dst] = replace(winners[src], field=dst)
    winners[src] = None


def correct_misclassifications(
    winners: Dict[str, Optional[CandidateValue]],
    tables: Optional[KeywordTables] = None,
) -> List[str]:
    """
    Fix field assignments that only look wrong once the whole record is known.

    - a name holding a position keyword moves to an empty position
    - a position holding an organization keyword moves to an empty company
    - a finance-related company and a non-finance client trade places, so the
      bank or insurer a candidate is placed at ends up as the client

    Mutates `winners` and returns a description of every move.
    """
    tables = tables or get_keyword_tables()
    moves: List[str] = []

    def value(field: str) -> Optional[str]:
        cand = winners.get(field)
        return str(cand.value) if cand is not None else None

    name = value("name")
    if name and value("position") is None and is_position_title(name, tables):
        _move(winners, "name", "position")
        moves.append("name -> position")

    position = value("position")
    if position and value("company") is None and any(k in position.lower() for k in tables.organizations):
        _move(winners, "position", "company")
        moves.append("position -> company")

    company, client = value("company"), value("client")
    if company and client:
        company_finance = any(k in company.lower() for k in tables.client_keywords)
        client_finance = any(k in client.lower() for k in tables.client_keywords)
        if company_finance and not client_finance:
            winners["company"], winners["client"] = (
                replace(winners["client"], field="company"),
                replace(winners["company"], field="client"),
            )
            moves.append("company <-> client")

    return moves
