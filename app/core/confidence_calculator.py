"""
Confidence scoring and categorization for detected candidate records.

A record starts at 100 and loses points for every missing, odd or ambiguous
field. Downstream import uses the category to decide what needs a human:

  ready    no errors, confidence >= 80: import as-is
  review   no errors, confidence >= 50: import after a look
  blocked  any error, or confidence < 50: cannot be imported

Errors are reserved for the two fields a candidate cannot exist without
(name and phone) and for values that are present but impossible.
"""

from typing import Any, Dict, List, Optional, Tuple

from app.core.keywords import KeywordTables, get_keyword_tables
from app.core.placeholders import is_placeholder_value
from app.core.schemas import RowCategory, RowValidation, ValidationIssue
from app.core.text_normalization import has_person_shape, looks_like_email, word_count
from app.core.value_parsers import MOBILE_RE

# (penalty, issues) for a single check
Check = Tuple[int, List[ValidationIssue]]

ERROR_PENALTY = 50
WARNING_PENALTY = 10
MINOR_PENALTY = 5
SALARY_INVERSION_PENALTY = 15

READY_THRESHOLD = 80
REVIEW_THRESHOLD = 50


def _error(field: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, message=message, severity="ERROR")


def _warning(field: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, message=message, severity="WARNING")


class ConfidenceCalculator:
    """Central place for all record validation logic."""

    @staticmethod
    def name(value: Optional[str], tables: KeywordTables) -> Check:
        if not value:
            return ERROR_PENALTY, [_error("name", "Name is required")]
        if is_placeholder_value(value, tables):
            return ERROR_PENALTY, [_error("name", f'"{value}" is placeholder text, not a valid name')]
        if not has_person_shape(value):
            return ERROR_PENALTY, [_error("name", "Name must be alphabetic only")]
        if not 1 <= word_count(value) <= 4:
            return ERROR_PENALTY, [_error("name", "Name must be 1-4 words")]
        return 0, []

    @staticmethod
    def phone(value: Optional[str]) -> Check:
        if not value:
            return ERROR_PENALTY, [_error("phone", "Phone number is required")]
        if not MOBILE_RE.match(str(value)):
            return ERROR_PENALTY, [_error("phone", "Phone must be 10 digits starting with 6-9")]
        return 0, []

    @staticmethod
    def email(value: Optional[str]) -> Check:
        if not value:
            return WARNING_PENALTY, [_warning("email", "Email is missing (add for better candidate matching)")]
        if not looks_like_email(value):
            return ERROR_PENALTY, [_error("email", "Email format is invalid")]
        return 0, []

    @staticmethod
    def duplicates(field: str, value: Any, others: List[Any]) -> Check:
        """Several cells matched the same field; the winner may be the wrong one."""
        if not others:
            return 0, []
        listed = ", ".join(str(o) for o in others)
        return MINOR_PENALTY, [_warning(field, f'Multiple {field} values found: {listed}. Using: "{value}"')]

    @staticmethod
    def required_text(field: str, value: Optional[str], label: str) -> Check:
        if not value:
            return WARNING_PENALTY, [_warning(field, f"{label} is missing")]
        return 0, []

    @staticmethod
    def experience(value: Optional[float]) -> Check:
        if value is None:
            return WARNING_PENALTY, [_warning("experience", "Experience is missing")]
        if value < 0 or value > 70:
            return ERROR_PENALTY, [_error("experience", "Experience must be between 0-70 years")]
        if value > 50:
            return WARNING_PENALTY, [
                _warning("experience", f"Experience ({value} years) seems unusually high. Verify data.")
            ]
        return 0, []

    @staticmethod
    def salary(field: str, value: Optional[float], label: str) -> Check:
        if value is None:
            return WARNING_PENALTY, [_warning(field, f"{label} is missing")]
        if value < 0 or value > 100:
            return WARNING_PENALTY, [_warning(field, f"{label} ({value} LPA) seems unusual. Verify data.")]
        return 0, []

    @staticmethod
    def salary_inversion(ctc: Optional[float], expected: Optional[float]) -> Check:
        if ctc is None or expected is None or ctc <= expected:
            return 0, []
        return SALARY_INVERSION_PENALTY, [
            _warning(
                "salary",
                f"Expected salary ({expected} LPA) is lower than current CTC ({ctc} LPA). "
                "Verify candidate willingness.",
            )
        ]

    @staticmethod
    def notice_period(value: Optional[int]) -> Check:
        if value is None:
            return WARNING_PENALTY, [_warning("noticePeriod", "Notice Period is missing (check candidate availability)")]
        if value < 0 or value > 365:
            return WARNING_PENALTY, [_warning("noticePeriod", f"Notice Period ({value} days) is unusual")]
        return 0, []

    @staticmethod
    def company(value: Optional[str], tables: KeywordTables) -> Check:
        # Missing company is normal for freelancers, hence the smaller penalty
        if not value:
            return MINOR_PENALTY, [_warning("company", "Current Company is missing (freelancer or self-employed?)")]
        if is_placeholder_value(value, tables):
            return WARNING_PENALTY, [_warning("company", "Company appears to be placeholder text")]
        return 0, []

    @staticmethod
    def status(value: Optional[str], tables: KeywordTables) -> Check:
        if not value:
            return WARNING_PENALTY, [_warning("status", "Candidate Status is missing")]
        lower = value.lower()
        if not any(s in lower for s in tables.recognized_statuses):
            return WARNING_PENALTY, [
                _warning(
                    "status",
                    f"Status '{value}' not recognized. Valid values: "
                    + ", ".join(tables.recognized_statuses[:6]) + ", etc.",
                )
            ]
        return 0, []

    @staticmethod
    def source(value: Optional[str]) -> Check:
        if not value:
            return MINOR_PENALTY, [_warning("sourceOfCV", "Source of CV is missing (for recruitment analytics)")]
        return 0, []

    @staticmethod
    def calculate_category(errors: List[ValidationIssue], confidence: int) -> RowCategory:
        """
        Quality tiers:
          "blocked": any ERROR, or confidence < 50
          "ready"  : confidence >= 80
          "review" : otherwise
        """
        if errors:
            return "blocked"
        if confidence >= READY_THRESHOLD:
            return "ready"
        if confidence >= REVIEW_THRESHOLD:
            return "review"
        return "blocked"


def validate_record(
    record: Dict[str, Any],
    duplicates: Optional[Dict[str, List[Any]]] = None,
    tables: Optional[KeywordTables] = None,
) -> RowValidation:
    """Score a detected (and usually auto-fixed) record, keyed by detector field names."""
    tables = tables or get_keyword_tables()
    duplicates = duplicates or {}
    calc = ConfidenceCalculator

    checks: List[Check] = [
        calc.name(record.get("name"), tables),
        calc.duplicates("name", record.get("name"), duplicates.get("name", [])),
        calc.phone(record.get("phone")),
        calc.duplicates("phone", record.get("phone"), duplicates.get("phone", [])),
        calc.email(record.get("email")),
        calc.duplicates("email", record.get("email"), duplicates.get("email", [])),
        calc.required_text("location", record.get("location"), "Location/City"),
        calc.required_text("position", record.get("position"), "Position/Job Title"),
        calc.experience(record.get("experience")),
        calc.salary("ctc", record.get("ctc"), "Current CTC"),
        calc.salary("expectedSalary", record.get("expectedSalary"), "Expected Salary"),
        calc.salary_inversion(record.get("ctc"), record.get("expectedSalary")),
        calc.notice_period(record.get("noticePeriod")),
        calc.company(record.get("company"), tables),
        calc.status(record.get("status"), tables),
        calc.source(record.get("sourceOfCV")),
    ]

    confidence = 100
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []
    for penalty, issues in checks:
        confidence -= penalty
        for issue in issues:
            (errors if issue.severity == "ERROR" else warnings).append(issue)

    confidence = max(0, min(100, confidence))
    return RowValidation(
        category=calc.calculate_category(errors, confidence),
        confidence=confidence,
        errors=errors,
        warnings=warnings,
    )
