"""
Row-level detection pipeline.

detect_fields() is the pure core: one spreadsheet row in, one candidate record out.
parse_row_to_result() adds what the import screen needs on top (auto-fix, validation,
duplicates and evidence), and parse_rows_to_response() maps that over a whole sheet.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from app.core.auto_fix import auto_fix
from app.core.candidate_resolver import (
    correct_misclassifications,
    drop_cross_field_repeats,
    find_duplicates,
    resolve_candidates,
)
from app.core.confidence_calculator import validate_record
from app.core.field_classifier import FIELD_NAMES, CandidateValue, collect_candidates
from app.core.keywords import KeywordTables, get_keyword_tables
from app.core.schemas import (
    DetectedRecord,
    EvidenceItem,
    ProcessResponse,
    ProcessStats,
    RowResult,
    RowValidation,
    ValidationIssue,
)

logger = logging.getLogger(__name__)


def _detect(
    row: Mapping[str, Any],
    headers: Optional[Sequence[str]],
    tables: KeywordTables,
) -> Tuple[Dict[str, Any], Dict[str, Optional[CandidateValue]], Dict[str, List[Any]]]:
    candidates = collect_candidates(row, headers, tables)
    winners = resolve_candidates(candidates, tables)
    cleared = drop_cross_field_repeats(winners)
    if cleared:
        logger.debug(f"Cleared repeated values from: {', '.join(cleared)}")
    moves = correct_misclassifications(winners, tables)
    if moves:
        logger.debug(f"Corrected field assignments: {', '.join(moves)}")

    detected = {f: (winners[f].value if winners[f] is not None else None) for f in FIELD_NAMES}
    duplicates = {}
    for f in FIELD_NAMES:
        losers = find_duplicates(candidates[f], tables.hints_for(f))
        if losers:
            duplicates[f] = losers
    return detected, winners, duplicates


def detect_fields(
    row: Mapping[str, Any],
    headers: Optional[Sequence[str]] = None,
    tables: Optional[KeywordTables] = None,
) -> Dict[str, Any]:
    """
    Infer a candidate record from one spreadsheet row.

    `row` maps column header -> cell value; `headers` optionally gives the headers in
    column order (defaults to the row keys). Returns a dict with every field in
    FIELD_NAMES, each a value or None. Never raises on odd cell contents.
    """
    detected, _, _ = _detect(row, headers, tables or get_keyword_tables())
    return detected


def _evidence(
    winners: Dict[str, Optional[CandidateValue]],
    row_index: int,
    source: str,
) -> Dict[str, List[EvidenceItem]]:
    evidence_map: Dict[str, List[EvidenceItem]] = {}
    for field, cand in winners.items():
        if cand is None:
            continue
        evidence_map.setdefault(field, []).append(
            EvidenceItem(source=source, locator=f"{source}:row:{row_index}:column:{cand.header}", text=cand.raw)
        )
    return evidence_map


def detect_row(
    row: Mapping[str, Any],
    row_index: int = 1,
    headers: Optional[Sequence[str]] = None,
    source: str = "json",
    tables: Optional[KeywordTables] = None,
) -> Tuple[Dict[str, Any], Dict[str, List[Any]], Dict[str, List[EvidenceItem]]]:
    """detect_fields plus per-field duplicates and evidence."""
    detected, winners, duplicates = _detect(row, headers, tables or get_keyword_tables())
    return detected, duplicates, _evidence(winners, row_index, source)


def parse_row_to_result(
    row: Any,
    row_index: int,
    headers: Optional[Sequence[str]] = None,
    source: str = "json",
    tables: Optional[KeywordTables] = None,
) -> RowResult:
    """Detect, auto-fix and validate one row."""
    tables = tables or get_keyword_tables()

    if not isinstance(row, Mapping):
        logger.warning(f"Row {row_index} is not a header -> value mapping: {type(row).__name__}")
        return RowResult(
            row_index=row_index,
            original=row,
            validation=RowValidation(
                category="blocked",
                confidence=0,
                errors=[ValidationIssue(field="row", message="Invalid row data", severity="ERROR")],
            ),
        )

    detected, duplicates, evidence_map = detect_row(row, row_index, headers, source, tables)
    fixed, changes = auto_fix(detected)
    validation = validate_record(fixed, duplicates, tables)

    return RowResult(
        row_index=row_index,
        original=dict(row),
        detected=DetectedRecord.model_validate(fixed),
        auto_fix_changes=changes,
        duplicates=duplicates,
        evidence_map=evidence_map,
        validation=validation,
    )


def parse_rows_to_response(
    rows: Sequence[Any],
    headers: Optional[Sequence[str]] = None,
    source: str = "json",
) -> ProcessResponse:
    """
    Process a whole sheet. Rows are numbered from 1.
    Each row is independent; the tables are resolved once for the batch.
    """
    tables = get_keyword_tables()
    results = [parse_row_to_result(row, i + 1, headers, source, tables) for i, row in enumerate(rows)]

    stats = ProcessStats(total=len(results))
    for r in results:
        setattr(stats, r.validation.category, getattr(stats, r.validation.category) + 1)

    warnings: List[str] = []
    if results and stats.ready == 0:
        warnings.append("No rows are ready for import; check that the sheet holds candidate data.")

    logger.info(
        f"Processed {stats.total} rows from {source}: "
        f"{stats.ready} ready, {stats.review} review, {stats.blocked} blocked"
    )
    return ProcessResponse(results=results, stats=stats, warnings=warnings)
