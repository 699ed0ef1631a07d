"""Recognize cells that are present but carry no value ("NA", "TBD", "as per company norms")."""

import re
from functools import lru_cache
from typing import Any, Optional, Pattern, Tuple

from app.core.keywords import KeywordTables, get_keyword_tables
from app.core.text_normalization import normalize_cell


@lru_cache(maxsize=8)
def _compile_patterns(patterns: Tuple[str, ...]) -> Tuple[Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def is_placeholder_value(value: Any, tables: Optional[KeywordTables] = None) -> bool:
    """
    True when the value is a placeholder rather than data.

    Matching is on the trimmed, lowercased value: exact membership in the placeholder
    list, or a match against one of the placeholder prefix patterns.
    Empty cells count as placeholders.
    """
    tables = tables or get_keyword_tables()
    text = (normalize_cell(value) or "").lower()
    if text in tables.placeholders:
        return True
    return any(p.search(text) for p in _compile_patterns(tables.placeholder_patterns))
