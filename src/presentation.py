"""
Display attributes for statuses, scores and categories.

STATUS_STYLES covers every Status member; there is no default branch, so a
new status without a style fails loudly (see test_presentation.py).
"""

from dataclasses import dataclass

from records import Status


@dataclass(frozen=True)
class StatusStyle:
    icon: str
    color: str


STATUS_STYLES: dict[Status, StatusStyle] = {
    Status.APPROVED: StatusStyle(icon="check-circle", color="green"),
    Status.PILOTING: StatusStyle(icon="clock", color="blue"),
    Status.IN_PROGRESS: StatusStyle(icon="clock", color="blue"),
    Status.REJECTED: StatusStyle(icon="x-circle", color="red"),
    Status.NOT_STARTED: StatusStyle(icon="alert-circle", color="gray"),
    Status.UNDER_REVIEW: StatusStyle(icon="eye", color="amber"),
}

CATEGORY_COLORS: dict[str, str] = {
    "AI Video Generation": "purple",
    "AI Video Editing": "blue",
    "AI Avatars": "green",
    "AI Image Generation": "orange",
    "AI Audio Generation": "pink",
    "AI Development Tools": "indigo",
    "AI Productivity": "yellow",
}

# Categories are an open vocabulary
NEUTRAL_COLOR = "gray"


def status_style(status: Status) -> StatusStyle:
    return STATUS_STYLES[status]


def score_band(score: float | None) -> str:
    """Bucket a 0-5 score: >= 4 high, >= 3 medium, else low."""
    if score is None:
        return "none"
    if score >= 4:
        return "high"
    if score >= 3:
        return "medium"
    return "low"


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, NEUTRAL_COLOR)
