import logging

from fastapi import APIRouter, UploadFile, File, HTTPException
from pydantic import ValidationError

from app.core.auto_fix import auto_fix, remap_fields
from app.core.confidence_calculator import validate_record
from app.core.row_parser import parse_rows_to_response
from app.core.schemas import (
    DetectedRecord,
    FieldChange,
    ProcessRequest,
    ProcessResponse,
    RevalidateRequest,
    RevalidateResponse,
    SwapRequest,
    SwapResponse,
)
from app.core.sheet_extractor import SheetReadError, extract_sheet_rows, sheet_source

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sheets"])


def _evidence(column: str, text: str):
    return [{"source": "json", "locator": f"json:row:1:column:{column}", "text": text}]


# Actual output for the row below
_PROCESS_EXAMPLE = {
    "results": [
        {
            "row_index": 1,
            "original": {
                "Candidate": "priya singh",
                "Mob": "9876543210",
                "Exp": "3 Yrs",
                "Pkg": "4.5 LPA",
                "City": "Pune",
                "Notice": "30 days"
            },
            "detected": {
                "name": "Priya Singh",
                "phone": "9876543210",
                "email": None,
                "location": "Pune",
                "position": None,
                "experience": 3.0,
                "ctc": 4.5,
                "expectedSalary": 4.5,
                "noticePeriod": 30,
                "company": None,
                "client": None,
                "spoc": None,
                "status": None,
                "sourceOfCV": None
            },
            "auto_fix_changes": ['name: "priya singh" → "Priya Singh"'],
            "duplicates": {"spoc": ["Pune"]},
            "evidence_map": {
                "name": _evidence("Candidate", "priya singh"),
                "phone": _evidence("Mob", "9876543210"),
                "location": _evidence("City", "Pune"),
                "experience": _evidence("Exp", "3 Yrs"),
                "ctc": _evidence("Pkg", "4.5 LPA"),
                "expectedSalary": _evidence("Pkg", "4.5 LPA"),
                "noticePeriod": _evidence("Notice", "30 days")
            },
            "validation": {
                "category": "review",
                "confidence": 60,
                "errors": [],
                "warnings": [
                    {"field": "email", "message": "Email is missing (add for better candidate matching)", "severity": "WARNING"},
                    {"field": "position", "message": "Position/Job Title is missing", "severity": "WARNING"},
                    {"field": "company", "message": "Current Company is missing (freelancer or self-employed?)", "severity": "WARNING"},
                    {"field": "status", "message": "Candidate Status is missing", "severity": "WARNING"},
                    {"field": "sourceOfCV", "message": "Source of CV is missing (for recruitment analytics)", "severity": "WARNING"}
                ]
            }
        }
    ],
    "stats": {"ready": 0, "review": 1, "blocked": 0, "total": 1},
    "warnings": ["No rows are ready for import; check that the sheet holds candidate data."]
}


@router.post(
    "/process",
    response_model=ProcessResponse,
    summary="Process Rows",
    description="Detect, auto-fix and validate rows sent as JSON objects (header -> cell value).",
    responses={
        200: {
            "description": "Per-row results with import categories",
            "content": {"application/json": {"example": _PROCESS_EXAMPLE}}
        },
        400: {"description": "No rows to process"}
    }
)
def process_rows(payload: ProcessRequest):
    """
    Process rows already read from a spreadsheet.

    Rows that are not objects are reported as blocked instead of failing the request.
    """
    if not payload.data:
        raise HTTPException(status_code=400, detail="No data provided.")
    return parse_rows_to_response(payload.data, source="json")


@router.post(
    "/upload",
    response_model=ProcessResponse,
    summary="Upload Spreadsheet",
    description="Read the first sheet of an XLSX workbook or a CSV file and process every data row.",
    responses={
        200: {"description": "Per-row results with import categories (same shape as /process)"},
        400: {"description": "Empty file uploaded"},
        415: {"description": "Unsupported file format"},
        422: {"description": "Workbook unreadable or has no data rows"}
    }
)
async def upload_sheet(
    file: UploadFile = File(..., description="Spreadsheet file (XLSX or CSV format)")
):
    """
    Upload a candidate spreadsheet.

    **Supported formats:**
    - XLSX / XLSM (.xlsx, .xlsm) - first worksheet, cached formula values
    - CSV (.csv) - UTF-8

    The first non-empty row is the header row. Headers are kept for evidence only;
    detection works from cell contents.
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    source = sheet_source(file.filename, file.content_type)
    if source is None:
        raise HTTPException(
            status_code=415,
            detail="Unsupported file type. Upload an .xlsx or .csv spreadsheet.",
        )

    try:
        headers, rows = extract_sheet_rows(raw, file.filename, file.content_type)
    except SheetReadError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if not rows:
        raise HTTPException(status_code=422, detail="No data rows found in spreadsheet.")

    logger.info(f"Upload {file.filename!r}: {len(rows)} rows, {len(headers)} columns")
    return parse_rows_to_response(rows, headers=headers, source=source)


@router.post(
    "/revalidate",
    response_model=RevalidateResponse,
    summary="Revalidate Record",
    description="Re-run auto-fix and validation on a record after a reviewer edited it.",
    responses={
        422: {"description": "Record fields have the wrong types"}
    }
)
def revalidate(payload: RevalidateRequest):
    fixed, changes = auto_fix(payload.record.to_fields())
    return RevalidateResponse(
        fixed=DetectedRecord.model_validate(fixed),
        auto_fix_changes=changes,
        validation=validate_record(fixed),
    )


@router.post(
    "/swap",
    response_model=SwapResponse,
    summary="Swap Fields",
    description="Manually reassign values between fields of a detected record, e.g. when company and client were mixed up.",
    responses={
        200: {
            "description": "Remapped record and what changed",
            "content": {
                "application/json": {
                    "example": {
                        "remapped": {"company": "HDFC Bank", "client": "Infosys"},
                        "changes": [
                            {"field": "company", "from": "Infosys", "to": "HDFC Bank"},
                            {"field": "client", "from": "HDFC Bank", "to": "Infosys"}
                        ]
                    }
                }
            }
        },
        422: {"description": "Unknown field name, or a value of the wrong type for its new field"}
    }
)
def swap_fields(payload: SwapRequest):
    """
    Swap or overwrite fields of a record.

    **Request:**
    - **record**: the detected record as returned by /detect or /process
    - **swaps**: field name -> new value

    The result is not re-validated; send it to /revalidate for a new score.
    """
    try:
        remapped, changes = remap_fields(payload.record.to_fields(), payload.swaps)
        record = DetectedRecord.model_validate(remapped)
    except (ValueError, ValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return SwapResponse(remapped=record, changes=[FieldChange.model_validate(c) for c in changes])
