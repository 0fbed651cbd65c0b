"""
Records: Immutable data types for tool evaluations and chat messages.

EvaluationRecord is the unit held by the DataStore. It is frozen and its
sequence fields are tuples, so a loaded dataset cannot be changed by any
reader. Invariants (non-empty category, scores in [0, 5], closed status
enumeration) are checked on construction.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Literal, Mapping

from logging_utils import get_logger

logger = get_logger(__name__)

MIN_SCORE = 0.0
MAX_SCORE = 5.0


class Status(str, Enum):
    """Closed set of evaluation statuses. Values are the display strings."""
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    PILOTING = "Piloting"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    UNDER_REVIEW = "Under Review"

    def __str__(self) -> str:
        return self.value


Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A single message in a conversation."""
    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


ExampleOutput = tuple[str, ...] | str | None


@dataclass(frozen=True)
class EvaluationRecord:
    """One tool's evaluation entry."""
    id: str
    tool_name: str
    category: tuple[str, ...]
    status: Status
    evaluator: str
    evaluation_date: date | None
    cost: str = ""
    next_review_date: date | None = None
    overall_score: float | None = None
    detailed_scores: tuple[tuple[str, float], ...] = field(default_factory=tuple)
    key_findings: str = ""
    recommendation: str = ""
    business_impact: str = ""
    pros: tuple[str, ...] = field(default_factory=tuple)
    cons: tuple[str, ...] = field(default_factory=tuple)
    use_cases: tuple[str, ...] | None = None
    example_output: ExampleOutput = None

    def __post_init__(self):
        if not self.category:
            raise ValueError(f"Record {self.id!r} ({self.tool_name}) has no category")
        if not isinstance(self.status, Status):
            raise ValueError(f"Record {self.id!r} has invalid status {self.status!r}")
        if self.overall_score is not None:
            _check_score(self.id, "overallScore", self.overall_score)
        for criterion, score in self.detailed_scores:
            _check_score(self.id, criterion, score)

    @property
    def scores(self) -> dict[str, float]:
        """Detailed scores as a plain dict (criterion -> score)."""
        return dict(self.detailed_scores)


def _check_score(record_id: str, name: str, score: float) -> None:
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ValueError(f"Record {record_id!r}: score {name}={score!r} is not a number")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValueError(
            f"Record {record_id!r}: score {name}={score} outside [{MIN_SCORE}, {MAX_SCORE}]"
        )


def parse_date(value: Any) -> date | None:
    """Parse an ISO calendar date. Returns None for missing or unparsable values."""
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _as_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _normalize_example_output(value: Any) -> ExampleOutput:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return str(value)


def record_from_dict(data: dict[str, Any]) -> EvaluationRecord:
    """
    Build an EvaluationRecord from one dataset entry (camelCase keys).

    Raises:
        ValueError: If the entry breaks a record invariant or has an unknown status.
    """
    record_id = str(data.get("id", ""))
    tool_name = data.get("toolName") or ""

    raw_status = data.get("status", "")
    try:
        status = Status(raw_status)
    except ValueError:
        raise ValueError(f"Record {record_id!r} ({tool_name}) has unknown status {raw_status!r}") from None

    raw_date = data.get("evaluationDate")
    evaluation_date = parse_date(raw_date)
    if evaluation_date is None:
        logger.warning(f"Record {record_id!r} ({tool_name}): unparsable evaluationDate {raw_date!r}, sorting last")

    detailed = data.get("detailedScores") or {}
    if not isinstance(detailed, Mapping):
        raise ValueError(f"Record {record_id!r} ({tool_name}): detailedScores must be a mapping, got {type(detailed).__name__}")
    use_cases = data.get("useCases")

    return EvaluationRecord(
        id=record_id,
        tool_name=tool_name,
        category=tuple(dict.fromkeys(_as_tuple(data.get("category")))),
        status=status,
        evaluator=data.get("evaluator") or "",
        evaluation_date=evaluation_date,
        next_review_date=parse_date(data.get("nextReviewDate")),
        cost=data.get("cost") or "",
        overall_score=data.get("overallScore"),
        detailed_scores=tuple(detailed.items()),
        key_findings=data.get("keyFindings") or "",
        recommendation=data.get("recommendation") or "",
        business_impact=data.get("businessImpact") or "",
        pros=_as_tuple(data.get("pros")),
        cons=_as_tuple(data.get("cons")),
        use_cases=_as_tuple(use_cases) if use_cases is not None else None,
        example_output=_normalize_example_output(data.get("exampleOutput")),
    )
