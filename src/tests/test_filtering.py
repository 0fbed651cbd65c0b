"""
Tests for filtering.py module.

Tests:
- Query construction
- Search, category and status predicates
- Ordering by evaluation date
- aggregate() counts and approval rate
"""

import os
import sys
from datetime import date
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from conftest import make_entry
from filtering import ALL_STATUSES, Query, Stats, aggregate, filter_records
from records import Status, record_from_dict


def ids(records):
    return [r.id for r in records]


# =============================================================================
# Test Query
# =============================================================================

class TestQuery:
    """Tests for Query dataclass."""

    def test_defaults_match_everything(self):
        query = Query()

        assert query.search_term == ""
        assert query.categories == frozenset()
        assert query.status == ""

    def test_build_normalizes_inputs(self):
        query = Query.build(search_term=None, categories=["A", "B", "A"], status=Status.APPROVED)

        assert query.search_term == ""
        assert query.categories == frozenset({"A", "B"})
        assert query.status == "Approved"

    def test_build_without_status(self):
        assert Query.build(status=None).status == ""


# =============================================================================
# Test filter_records
# =============================================================================

class TestSearch:
    """Search term predicate."""

    def test_empty_search_matches_all(self, records):
        assert len(filter_records(records, Query())) == len(records)

    def test_matches_tool_name_and_findings(self, records):
        result = filter_records(records, Query(search_term="clueso"))

        # HeyGen mentions Clueso in its key findings
        assert ids(result) == ["1", "2"]

    def test_case_insensitive(self, records):
        assert ids(filter_records(records, Query(search_term="CLUESO"))) == ["1", "2"]

    def test_matches_evaluator(self, records):
        assert ids(filter_records(records, Query(search_term="sam"))) == ["2", "5"]

    def test_no_match(self, records):
        assert filter_records(records, Query(search_term="zzz-nothing")) == []


class TestCategories:
    """Category predicate (any-of)."""

    def test_empty_set_matches_all(self, records):
        assert len(filter_records(records, Query.build(categories=[]))) == len(records)

    def test_single_category(self, records):
        result = filter_records(records, Query.build(categories=["AI Avatars"]))

        assert ids(result) == ["2"]
        assert all("AI Avatars" in r.category for r in result)

    def test_category_shared_by_several_records(self, records):
        result = filter_records(records, Query.build(categories=["AI Video Editing"]))

        assert ids(result) == ["1", "3"]

    def test_any_of_several_categories(self, records):
        result = filter_records(records, Query.build(categories=["AI Avatars", "AI Audio Generation"]))

        assert ids(result) == ["2", "4"]

    def test_unknown_category_matches_nothing(self, records):
        assert filter_records(records, Query.build(categories=["Not A Category"])) == []


class TestStatus:
    """Status predicate."""

    @pytest.mark.parametrize("status", ["", ALL_STATUSES])
    def test_empty_or_all_matches_all(self, records, status):
        assert len(filter_records(records, Query(status=status))) == len(records)

    def test_exact_status(self, records):
        assert ids(filter_records(records, Query(status="Approved"))) == ["2"]

    def test_status_enum_value(self, records):
        assert ids(filter_records(records, Query.build(status=Status.UNDER_REVIEW))) == ["3"]

    def test_unknown_status_matches_nothing(self, records):
        assert filter_records(records, Query(status="Bogus")) == []


class TestCombinedAndOrdering:
    """Predicate combination and result ordering."""

    def test_predicates_are_anded(self, records):
        query = Query.build(search_term="dana", categories=["AI Video Editing"], status="Under Review")

        assert ids(filter_records(records, query)) == ["3"]

    def test_newest_first_missing_date_last(self, records):
        assert ids(filter_records(records, Query())) == ["1", "2", "3", "4", "5"]

    def test_sort_independent_of_input_order(self, records):
        assert ids(filter_records(list(reversed(records)), Query())) == ["1", "2", "3", "4", "5"]

    def test_same_date_keeps_dataset_order(self):
        records = [
            record_from_dict(make_entry(id="a", evaluationDate="2025-01-01")),
            record_from_dict(make_entry(id="b", evaluationDate="2025-01-01")),
            record_from_dict(make_entry(id="c", evaluationDate="2025-02-01")),
        ]

        assert ids(filter_records(records, Query())) == ["c", "a", "b"]

    def test_unparsable_dates_do_not_raise(self):
        records = [
            record_from_dict(make_entry(id="a", evaluationDate="not a date")),
            record_from_dict(make_entry(id="b", evaluationDate=None)),
            record_from_dict(make_entry(id="c", evaluationDate="2020-01-01")),
        ]

        assert ids(filter_records(records, Query())) == ["c", "a", "b"]

    def test_input_not_mutated(self, records):
        before = list(records)

        result = filter_records(records, Query(search_term="clueso"))

        assert records == before
        assert result is not records

    def test_returns_fresh_list(self, records):
        result = filter_records(records, Query())

        assert result == sorted(records, key=lambda r: r.evaluation_date or date.min, reverse=True)
        assert result is not records


# =============================================================================
# Test aggregate
# =============================================================================

class TestAggregate:
    """Tests for aggregate()."""

    def test_empty(self):
        assert aggregate([]) == Stats(
            total=0,
            approved=0,
            piloting=0,
            under_review=0,
            rejected=0,
            in_progress=0,
            approval_rate="0.0",
        )

    def test_counts(self, records):
        stats = aggregate(records)

        assert stats.total == 5
        assert stats.approved == 1
        assert stats.piloting == 1
        assert stats.under_review == 1
        assert stats.rejected == 1
        assert stats.in_progress == 1

    def test_approval_rate_counts_piloting(self, records):
        # (1 approved + 1 piloting) / 5
        assert aggregate(records).approval_rate == "40.0"

    def test_approval_rate_one_decimal(self):
        records = [
            record_from_dict(make_entry(id="a", status="Approved")),
            record_from_dict(make_entry(id="b", status="Rejected")),
            record_from_dict(make_entry(id="c", status="Not Started")),
        ]

        assert aggregate(records).approval_rate == "33.3"

    def test_all_approved(self):
        records = [record_from_dict(make_entry(id=str(i), status="Approved")) for i in range(4)]

        assert aggregate(records).approval_rate == "100.0"
