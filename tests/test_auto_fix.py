import pytest
from app.core.auto_fix import auto_fix, remap_fields


def test_no_changes_for_clean_record():
    record = {"name": "Priya Singh", "phone": "9876543210", "experience": 3.0, "noticePeriod": 30}
    fixed, changes = auto_fix(record)
    assert fixed == record
    assert changes == []


def test_text_fixes():
    record = {
        "name": "priya SINGH",
        "email": " Priya@Example.COM ",
        "phone": "+91 98765-43210",
        "spoc": "neha gupta",
        "status": "Interviewed",
        "sourceOfCV": "LinkedIn",
        "location": "Pune ",
    }
    fixed, changes = auto_fix(record)
    assert fixed["name"] == "Priya Singh"
    assert fixed["email"] == "priya@example.com"
    assert fixed["phone"] == "9876543210"
    assert fixed["spoc"] == "Neha Gupta"
    assert fixed["status"] == "interviewed"
    assert fixed["sourceOfCV"] == "linkedin"
    assert fixed["location"] == "Pune"
    assert 'name: "priya SINGH" → "Priya Singh"' in changes
    assert len(changes) == 7


def test_input_not_modified():
    record = {"name": "priya singh"}
    auto_fix(record)
    assert record == {"name": "priya singh"}


def test_numeric_coercion():
    fixed, changes = auto_fix({"experience": "3", "ctc": 4, "noticePeriod": 30.0})
    assert fixed["experience"] == 3.0
    assert isinstance(fixed["ctc"], float)
    assert fixed["noticePeriod"] == 30
    assert isinstance(fixed["noticePeriod"], int)
    assert 'noticePeriod: "30.0" → 30 days' in changes


def test_uncoercible_numbers_left_alone():
    fixed, changes = auto_fix({"ctc": "lots"})
    assert fixed["ctc"] == "lots"
    assert changes == []


def test_none_and_empty_skipped():
    fixed, changes = auto_fix({"name": None, "email": "", "ctc": None})
    assert fixed == {"name": None, "email": "", "ctc": None}
    assert changes == []


class TestRemapFields:

    def test_swap_company_and_client(self):
        record = {"name": "Priya Singh", "company": "HDFC Bank", "client": "Infosys"}
        remapped, changes = remap_fields(record, {"company": "Infosys", "client": "HDFC Bank"})
        assert remapped == {"name": "Priya Singh", "company": "Infosys", "client": "HDFC Bank"}
        assert changes == [
            {"field": "company", "from": "HDFC Bank", "to": "Infosys"},
            {"field": "client", "from": "Infosys", "to": "HDFC Bank"},
        ]
        assert record["company"] == "HDFC Bank"

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError, match="Unknown fields: salary"):
            remap_fields({"name": "Priya Singh"}, {"salary": 12})
