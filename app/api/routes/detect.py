from fastapi import APIRouter

from app.core.row_parser import detect_row
from app.core.schemas import DetectedRecord, DetectRequest, DetectResponse

router = APIRouter(tags=["detect"])


@router.post(
    "/detect",
    response_model=DetectResponse,
    summary="Detect Fields",
    description="Infer candidate fields from a single spreadsheet row by looking at cell contents, not column headers.",
    responses={
        200: {
            "description": "Detected record",
            "content": {
                "application/json": {
                    "example": {
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
                        "duplicates": {},
                        "evidence_map": {
                            "name": [
                                {"source": "json", "locator": "json:row:1:column:Candidate", "text": "Priya Singh"}
                            ]
                        }
                    }
                }
            }
        },
        422: {"description": "Request body is not a row object"}
    }
)
def detect(payload: DetectRequest):
    """
    Detect fields in one row.

    **Request:**
    - **row**: column header -> cell value
    - **headers**: optional column headers in row order

    **Returns:**
    - **detected**: all 14 candidate fields, null when nothing matched
    - **duplicates**: other values that also matched a field
    - **evidence_map**: which column each detected value came from
    """
    detected, duplicates, evidence_map = detect_row(payload.row, headers=payload.headers)
    return DetectResponse(
        detected=DetectedRecord.model_validate(detected),
        duplicates=duplicates,
        evidence_map=evidence_map,
    )
