"""
Test suite for record confidence scoring.

Demonstrates how confidence and category decide whether a detected row can be
imported as-is, needs a reviewer, or cannot be imported at all.
"""

from fastapi.testclient import TestClient
from app.main import app
from app.core.confidence_calculator import ConfidenceCalculator, validate_record

client = TestClient(app)


COMPLETE = {
    "name": "Rahul Sharma",
    "phone": "9876543210",
    "email": "rahul@example.com",
    "location": "Pune",
    "position": "Developer",
    "experience": 5.0,
    "ctc": 10.0,
    "expectedSalary": 14.0,
    "noticePeriod": 30,
    "company": "Infosys",
    "client": None,
    "spoc": None,
    "status": "interviewed",
    "sourceOfCV": "naukri",
}


def _with(**changes):
    record = dict(COMPLETE)
    record.update(changes)
    return record


def _fields(issues):
    return [i.field for i in issues]


def test_complete_record_is_ready():
    v = validate_record(COMPLETE)
    assert v.confidence == 100
    assert v.category == "ready"
    assert v.errors == []
    assert v.warnings == []


def test_missing_name_blocks():
    v = validate_record(_with(name=None))
    assert v.category == "blocked"
    assert _fields(v.errors) == ["name"]
    assert v.confidence == 50


def test_placeholder_name_blocks():
    v = validate_record(_with(name="NA"))
    assert "placeholder" in v.errors[0].message


def test_name_with_digits_blocks():
    v = validate_record(_with(name="Rahul 2"))
    assert _fields(v.errors) == ["name"]


def test_invalid_phone_blocks():
    v = validate_record(_with(phone="12345"))
    assert v.category == "blocked"
    assert _fields(v.errors) == ["phone"]


def test_missing_email_is_warning():
    v = validate_record(_with(email=None))
    assert v.confidence == 90
    assert v.category == "ready"
    assert _fields(v.warnings) == ["email"]


def test_malformed_email_is_error():
    v = validate_record(_with(email="rahul@example"))
    assert _fields(v.errors) == ["email"]


def test_salary_inversion():
    v = validate_record(_with(ctc=12.0, expectedSalary=10.0))
    assert v.confidence == 85
    assert _fields(v.warnings) == ["salary"]


def test_missing_company_is_minor():
    v = validate_record(_with(company=None))
    assert v.confidence == 95


def test_unrecognized_status():
    v = validate_record(_with(status="maybe later"))
    assert v.confidence == 90
    assert "not recognized" in v.warnings[0].message


def test_experience_out_of_range_is_error():
    v = validate_record(_with(experience=75.0))
    assert _fields(v.errors) == ["experience"]


def test_experience_unusually_high_is_warning():
    v = validate_record(_with(experience=55.0))
    assert v.errors == []
    assert _fields(v.warnings) == ["experience"]


def test_duplicates_cost_five_points():
    v = validate_record(COMPLETE, duplicates={"phone": ["9123456780"]})
    assert v.confidence == 95
    assert "Multiple phone values" in v.warnings[0].message


def test_confidence_is_clamped():
    v = validate_record({})
    assert v.confidence == 0
    assert v.category == "blocked"


class TestCategory:

    def test_any_error_blocks(self):
        err = validate_record(_with(name=None)).errors
        assert ConfidenceCalculator.calculate_category(err, 100) == "blocked"

    def test_thresholds(self):
        assert ConfidenceCalculator.calculate_category([], 80) == "ready"
        assert ConfidenceCalculator.calculate_category([], 79) == "review"
        assert ConfidenceCalculator.calculate_category([], 50) == "review"
        assert ConfidenceCalculator.calculate_category([], 49) == "blocked"


def test_revalidate_endpoint_scores_edited_record():
    record = _with(name="rahul  sharma", phone="+91 98765 43210")
    response = client.post("/revalidate", json={"record": record})
    assert response.status_code == 200
    data = response.json()
    assert data["fixed"]["name"] == "Rahul Sharma"
    assert data["fixed"]["phone"] == "9876543210"
    assert data["validation"]["category"] == "ready"
    assert data["validation"]["confidence"] == 100
    assert len(data["auto_fix_changes"]) == 2
