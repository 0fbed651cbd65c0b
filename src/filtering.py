"""
Filtering and summary statistics over evaluation records.

Both entry points are pure functions of (records, query): they never mutate
their inputs and return fresh objects, so callers can recompute them on
every query change or memoize them freely.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence

from records import EvaluationRecord, Status

ALL_STATUSES = "All"


@dataclass(frozen=True)
class Query:
    """
    Filter criteria for the record list.

    search_term: case-insensitive substring of toolName, keyFindings or evaluator.
    categories: records matching ANY of these categories; empty matches all.
    status: exact status, or "" / "All" to match all.
    """
    search_term: str = ""
    categories: frozenset[str] = field(default_factory=frozenset)
    status: str = ""

    @classmethod
    def build(
        cls,
        search_term: str = "",
        categories: Iterable[str] = (),
        status: str | Status | None = None,
    ) -> "Query":
        return cls(
            search_term=search_term or "",
            categories=frozenset(categories),
            status=str(status) if status else "",
        )


@dataclass(frozen=True)
class Stats:
    """Summary counts over the whole dataset."""
    total: int
    approved: int
    piloting: int
    under_review: int
    rejected: int
    in_progress: int
    approval_rate: str


def matches_search(record: EvaluationRecord, search_term: str) -> bool:
    if not search_term:
        return True
    needle = search_term.lower()
    return (
        needle in record.tool_name.lower()
        or needle in record.key_findings.lower()
        or needle in record.evaluator.lower()
    )


def matches_categories(record: EvaluationRecord, categories: frozenset[str]) -> bool:
    if not categories:
        return True
    return not categories.isdisjoint(record.category)


def matches_status(record: EvaluationRecord, status: str) -> bool:
    if not status or status == ALL_STATUSES:
        return True
    return record.status.value == status


def _sort_key(record: EvaluationRecord) -> date:
    # Missing or unparsable dates sort last
    return record.evaluation_date or date.min


def filter_records(records: Sequence[EvaluationRecord], query: Query) -> list[EvaluationRecord]:
    """
    Records matching all three predicates, newest evaluationDate first.

    The sort is stable: records sharing a date keep their dataset order.
    """
    matched = [
        record for record in records
        if matches_search(record, query.search_term)
        and matches_categories(record, query.categories)
        and matches_status(record, query.status)
    ]
    return sorted(matched, key=_sort_key, reverse=True)


def aggregate(records: Sequence[EvaluationRecord]) -> Stats:
    """Status counts and approval rate ((approved + piloting) / total, one decimal)."""
    counts = {status: 0 for status in Status}
    for record in records:
        counts[record.status] += 1

    total = len(records)
    approved = counts[Status.APPROVED]
    piloting = counts[Status.PILOTING]
    rate = (approved + piloting) / total * 100 if total > 0 else 0.0

    return Stats(
        total=total,
        approved=approved,
        piloting=piloting,
        under_review=counts[Status.UNDER_REVIEW],
        rejected=counts[Status.REJECTED],
        in_progress=counts[Status.IN_PROGRESS],
        approval_rate=f"{rate:.1f}",
    )
