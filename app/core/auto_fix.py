"""
Normalize detected values before validation and import.

Returns the fixed record plus a human-readable change log so reviewers can see
what was touched ("name: \"rahul sharma\" -> \"Rahul Sharma\""). remap_fields() applies
a reviewer's manual reassignment of values between fields.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from app.core.text_normalization import collapse_whitespace, title_case


def _digits_last10(value: Any) -> str:
    digits = "".join(ch for ch in str(value) if ch.isdigit())
    return digits[-10:]


def _lower(value: Any) -> str:
    return str(value).strip().lower()


def _clean(value: Any) -> str:
    return collapse_whitespace(str(value))


def _person(value: Any) -> str:
    return title_case(collapse_whitespace(str(value)))


def _to_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


TEXT_FIXERS: Dict[str, Callable[[Any], str]] = {
    "name": _person,
    "email": _lower,
    "phone": _digits_last10,
    "location": _clean,
    "position": _clean,
    "company": _clean,
    "client": _clean,
    "spoc": _person,
    "status": _lower,
    "sourceOfCV": _lower,
}

NUMERIC_FIXERS: Dict[str, Callable[[Any], Any]] = {
    "experience": _to_float,
    "ctc": _to_float,
    "expectedSalary": _to_float,
    "noticePeriod": _to_int,
}


def auto_fix(detected: Dict[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    """
    Return (fixed, changes). The input dict is not modified.

    Empty text fields are left alone; numbers that cannot be coerced are kept as they were.
    """
    fixed = dict(detected)
    changes: List[str] = []

    for field, fixer in TEXT_FIXERS.items():
        original = fixed.get(field)
        if not original:
            continue
        new = fixer(original)
        if new != original:
            fixed[field] = new
            changes.append(f'{field}: "{original}" → "{new}"')

    for field, fixer in NUMERIC_FIXERS.items():
        original = fixed.get(field)
        if original is None:
            continue
        new = fixer(original)
        if new is None:
            continue
        fixed[field] = new
        if type(new) is not type(original) or new != original:
            suffix = " days" if field == "noticePeriod" else ""
            changes.append(f'{field}: "{original}" → {new}{suffix}')

    return fixed, changes


def remap_fields(record: Dict[str, Any], swaps: Dict[str, Any]) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    """
    Apply a reviewer's manual reassignment: every key of `swaps` gets the given value.

    Swapping company and client is {"company": <client>, "client": <company>}.
    Raises ValueError for keys that are not record fields.
    """
    unknown = sorted(set(swaps) - set(record))
    if unknown:
        raise ValueError(f"Unknown fields: {', '.join(unknown)}")

    remapped = dict(record)
    changes: List[Dict[str, Any]] = []
    for field, value in swaps.items():
        changes.append({"field": field, "from": remapped[field], "to": value})
        remapped[field] = value
    return remapped, changes
