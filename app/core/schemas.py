from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional


RowCategory = Literal["ready", "review", "blocked"]
Severity = Literal["ERROR", "WARNING", "INFO"]
SheetSource = Literal["xlsx", "csv", "json"]


class EvidenceItem(BaseModel):
    source: SheetSource
    locator: str = Field(..., description="Where it came from (row number and column header)")
    text: str = Field(..., description="Cell text the value was detected in")


class DetectedRecord(BaseModel):
    """One candidate, as detected from a spreadsheet row. Field names on the wire are camelCase."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    position: Optional[str] = None
    experience: Optional[float] = None  # years
    ctc: Optional[float] = None  # LPA
    expected_salary: Optional[float] = Field(default=None, alias="expectedSalary")  # LPA
    notice_period: Optional[int] = Field(default=None, alias="noticePeriod")  # days
    company: Optional[str] = None
    client: Optional[str] = None
    spoc: Optional[str] = None
    status: Optional[str] = None
    source_of_cv: Optional[str] = Field(default=None, alias="sourceOfCV")

    def to_fields(self) -> Dict[str, Any]:
        """Field-name keyed dict, same keys the detector produces."""
        return self.model_dump(by_alias=True)


class ValidationIssue(BaseModel):
    field: str
    message: str
    severity: Severity


class RowValidation(BaseModel):
    category: RowCategory
    confidence: int = Field(..., ge=0, le=100, description="0 (unusable) to 100 (complete and consistent)")
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)


class RowResult(BaseModel):
    row_index: int = Field(..., description="1-based data row number")
    original: Any = None
    detected: DetectedRecord = Field(default_factory=DetectedRecord)
    auto_fix_changes: List[str] = Field(default_factory=list)
    duplicates: Dict[str, List[Any]] = Field(default_factory=dict)
    evidence_map: Dict[str, List[EvidenceItem]] = Field(default_factory=dict)
    validation: RowValidation


class ProcessStats(BaseModel):
    ready: int = 0
    review: int = 0
    blocked: int = 0
    total: int = 0


class ProcessResponse(BaseModel):
    results: List[RowResult]
    stats: ProcessStats
    warnings: List[str] = Field(default_factory=list)


class DetectRequest(BaseModel):
    row: Dict[str, Any]
    headers: Optional[List[str]] = Field(default=None, description="Column headers in row order; defaults to the row keys")


class DetectResponse(BaseModel):
    detected: DetectedRecord
    duplicates: Dict[str, List[Any]] = Field(default_factory=dict)
    evidence_map: Dict[str, List[EvidenceItem]] = Field(default_factory=dict)


class ProcessRequest(BaseModel):
    data: List[Any] = Field(..., description="Rows as header -> cell value objects")


class RevalidateRequest(BaseModel):
    record: DetectedRecord


class RevalidateResponse(BaseModel):
    fixed: DetectedRecord
    auto_fix_changes: List[str] = Field(default_factory=list)
    validation: RowValidation


class FieldChange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field: str
    from_value: Any = Field(default=None, alias="from")
    to: Any = None


class SwapRequest(BaseModel):
    record: DetectedRecord
    swaps: Dict[str, Any] = Field(..., description="Field name -> new value, e.g. the values of two fields exchanged")


class SwapResponse(BaseModel):
    remapped: DetectedRecord
    changes: List[FieldChange] = Field(default_factory=list)
