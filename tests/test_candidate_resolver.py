"""
Unit tests for candidate_resolver module.

Winner selection per field, header-hint and length tie-breaks, cross-field
de-duplication and the misclassification corrections that run after it.
"""

from app.core.candidate_resolver import (
    correct_misclassifications,
    drop_cross_field_repeats,
    find_duplicates,
    pick_best,
    resolve_candidates,
)
from app.core.field_classifier import FIELD_NAMES, CandidateValue


def _cand(field, value, score=0.0, header="h"):
    return CandidateValue(field=field, value=value, header=header, score=score, raw=str(value))


def _winners(**values):
    winners = {f: None for f in FIELD_NAMES}
    for field, value in values.items():
        winners[field] = _cand(field, value, header=f"{field} column")
    return winners


def test_pick_best_empty():
    assert pick_best([]) is None


def test_pick_best_highest_score():
    cands = [_cand("name", "Amit", 8), _cand("name", "Priya Singh", 42)]
    assert pick_best(cands).value == "Priya Singh"


def test_pick_best_tie_goes_to_first_cell():
    cands = [_cand("location", "Pune"), _cand("location", "Mumbai")]
    assert pick_best(cands).value == "Pune"


class TestTieBreaks:

    def test_header_hint_wins_tie(self):
        cands = [_cand("company", "Infosys", header="Col1"), _cand("company", "Wipro", header="Current Company")]
        assert pick_best(cands, hints=("company",)).value == "Wipro"

    def test_header_hint_ignored_when_scores_differ(self):
        cands = [_cand("name", "Priya Singh", 22, header="Col1"), _cand("name", "Amit", 8, header="Name")]
        assert pick_best(cands, hints=("name",)).value == "Priya Singh"

    def test_fls_column_preferred_for_name(self):
        cands = [_cand("name", "Amit", 28, header="Candidate"), _cand("name", "Ravi", 28, header="Non-FLS")]
        assert pick_best(cands, hints=("candidate",)).value == "Ravi"

    def test_shorter_position(self):
        cands = [_cand("position", "Senior Software Engineer"), _cand("position", "Engineer")]
        assert pick_best(cands).value == "Engineer"

    def test_longer_company(self):
        cands = [_cand("company", "TCS"), _cand("company", "Tata Consultancy Services")]
        assert pick_best(cands).value == "Tata Consultancy Services"

    def test_spoc_keeps_row_order(self):
        cands = [_cand("spoc", "Priya Singh"), _cand("spoc", "Pune")]
        assert pick_best(cands).value == "Priya Singh"


def test_find_duplicates_lists_losers():
    cands = [_cand("name", "Amit", 8), _cand("name", "Priya Singh", 42), _cand("name", "Ravi", 8)]
    assert find_duplicates(cands) == ["Amit", "Ravi"]
    assert find_duplicates(cands[:1]) == []


def test_find_duplicates_follows_tie_break():
    cands = [_cand("company", "Infosys", header="Col1"), _cand("company", "Wipro", header="Company")]
    assert find_duplicates(cands, hints=("company",)) == ["Infosys"]


def test_resolve_candidates_covers_all_fields():
    winners = resolve_candidates({"phone": [_cand("phone", "9876543210")]})
    assert set(winners) == set(FIELD_NAMES)
    assert winners["phone"].value == "9876543210"
    assert winners["email"] is None


def test_spoc_cleared_when_same_as_name():
    winners = resolve_candidates({
        "name": [_cand("name", "Priya Singh", 22)],
        "spoc": [_cand("spoc", "Priya Singh")],
    })
    cleared = drop_cross_field_repeats(winners)
    assert cleared == ["spoc"]
    assert winners["name"].value == "Priya Singh"
    assert winners["spoc"] is None


def test_different_values_kept():
    winners = resolve_candidates({
        "name": [_cand("name", "Priya Singh", 22)],
        "spoc": [_cand("spoc", "Rahul Sharma")],
    })
    assert drop_cross_field_repeats(winners) == []
    assert winners["spoc"].value == "Rahul Sharma"


def test_company_and_client_may_share_a_value():
    winners = resolve_candidates({
        "company": [_cand("company", "HDFC Bank")],
        "client": [_cand("client", "HDFC Bank")],
    })
    drop_cross_field_repeats(winners)
    assert winners["company"].value == "HDFC Bank"
    assert winners["client"].value == "HDFC Bank"


class TestCorrectMisclassifications:

    def test_name_with_position_keyword_moves_to_position(self):
        winners = _winners(name="Sales Manager")
        assert correct_misclassifications(winners) == ["name -> position"]
        assert winners["name"] is None
        assert winners["position"].value == "Sales Manager"
        assert winners["position"].field == "position"
        # evidence still points at the original column
        assert winners["position"].header == "name column"

    def test_name_kept_when_position_taken(self):
        winners = _winners(name="Sales Manager", position="Developer")
        assert correct_misclassifications(winners) == []
        assert winners["name"].value == "Sales Manager"

    def test_position_with_org_keyword_moves_to_company(self):
        winners = _winners(position="Infosys Technologies")
        assert correct_misclassifications(winners) == ["position -> company"]
        assert winners["company"].value == "Infosys Technologies"
        assert winners["position"] is None

    def test_finance_company_trades_places_with_client(self):
        winners = _winners(company="HDFC Bank", client="Infosys")
        assert correct_misclassifications(winners) == ["company <-> client"]
        assert winners["company"].value == "Infosys"
        assert winners["client"].value == "HDFC Bank"
        assert winners["client"].field == "client"

    def test_both_finance_left_alone(self):
        winners = _winners(company="HDFC Bank", client="ICICI Bank")
        assert correct_misclassifications(winners) == []

    def test_clean_record_untouched(self):
        winners = _winners(name="Priya Singh", position="Developer", company="Infosys")
        assert correct_misclassifications(winners) == []
