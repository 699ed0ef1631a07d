"""
Unit tests for field_classifier module.

Each cell is classified on its own; a cell may be offered to several fields.
"""

from app.core.field_classifier import (
    FIELD_NAMES,
    classify_cell,
    collect_candidates,
    is_organization_name,
    is_position_title,
)


def _fields(value, header=""):
    return {c.field for c in classify_cell(value, header)}


class TestClassifyCell:

    def test_email_lowercased(self):
        cands = classify_cell("Priya.Singh@Example.com")
        assert [c.field for c in cands] == ["email"]
        assert cands[0].value == "priya.singh@example.com"

    def test_phone(self):
        cands = [c for c in classify_cell("+91 98765 43210") if c.field == "phone"]
        assert cands[0].value == "9876543210"

    def test_person_name_is_name_and_spoc(self):
        assert _fields("Rahul Sharma") == {"name", "spoc"}

    def test_bank_is_company_and_client_not_name(self):
        fields = _fields("HDFC Bank")
        assert "name" not in fields
        assert "spoc" not in fields
        assert {"company", "client"} <= fields

    def test_legal_suffix_is_company(self):
        fields = _fields("Acme Pvt Ltd")
        assert "company" in fields
        assert "client" not in fields
        assert "name" not in fields

    def test_position_not_name(self):
        fields = _fields("Senior Developer")
        assert "position" in fields
        assert "name" not in fields

    def test_city_is_location_not_name(self):
        fields = _fields("Pune")
        assert "location" in fields
        assert "name" not in fields

    def test_notice_period_blocks_experience_and_salary(self):
        assert _fields("30 days") == {"noticePeriod"}

    def test_months_are_notice_not_experience(self):
        cands = classify_cell("3 months")
        assert [(c.field, c.value) for c in cands] == [("noticePeriod", 90)]

    def test_overlong_notice_is_not_experience(self):
        # 540 days is no notice period, but the value is still notice-shaped
        assert classify_cell("18 months") == []
        assert classify_cell("60 weeks") == []
        assert classify_cell("400 days") == []

    def test_experience_blocks_salary(self):
        cands = classify_cell("3 Yrs")
        assert [(c.field, c.value) for c in cands] == [("experience", 3.0)]

    def test_salary_offered_to_both_salary_fields(self):
        cands = classify_cell("4.5 LPA")
        assert {(c.field, c.value) for c in cands} == {("ctc", 4.5), ("expectedSalary", 4.5)}

    def test_bare_small_number_is_notice_not_salary(self):
        # 15 parses as a notice period first, so it is never a salary
        assert _fields("15") == {"noticePeriod"}

    def test_status_lowercased(self):
        cands = [c for c in classify_cell("Interviewed") if c.field == "status"]
        assert cands[0].value == "interviewed"

    def test_source(self):
        cands = [c for c in classify_cell("LinkedIn") if c.field == "sourceOfCV"]
        assert cands[0].value == "linkedin"

    def test_placeholder_yields_nothing(self):
        assert classify_cell("NA") == []
        assert classify_cell(None) == []
        assert classify_cell("   ") == []

    def test_name_header_bonus(self):
        plain = [c for c in classify_cell("Amit", "Col3") if c.field == "name"][0]
        hinted = [c for c in classify_cell("Amit", "Candidate Name") if c.field == "name"][0]
        assert hinted.score - plain.score == 20
        assert plain.score == len("Amit") * 2

    def test_name_rejects_digits_and_long_text(self):
        assert "name" not in _fields("Rahul 2")
        assert "name" not in _fields("Rahul Kumar Sharma Verma")


class TestHeuristics:

    def test_is_position_title_whole_word(self):
        assert is_position_title("HR Executive")
        assert not is_position_title("Shraddha")

    def test_is_organization_name(self):
        assert is_organization_name("Infosys")
        assert is_organization_name("Tata Consultancy & Sons Pvt")
        assert is_organization_name("x" * 46)
        assert not is_organization_name("Rahul Sharma")


class TestCollectCandidates:

    def test_all_fields_present(self):
        cands = collect_candidates({"A": "Pune"})
        assert set(cands) == set(FIELD_NAMES)

    def test_candidates_keep_column_order(self):
        cands = collect_candidates({"A": "Pune", "B": "Mumbai"})
        assert [c.value for c in cands["location"]] == ["Pune", "Mumbai"]
        assert [c.header for c in cands["location"]] == ["A", "B"]

    def test_headers_align_with_columns(self):
        row = {"c1": "Priya Singh", "c2": "", "c3": "Pune"}
        cands = collect_candidates(row, headers=["Candidate", "Blank", "City"])
        assert cands["location"][0].header == "City"
        assert cands["name"][0].header == "Candidate"
