"""Velocity calculation between adjacent commits."""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from ..models.commit import ValidCommit, VelocityPoint

UNKNOWN_AUTHOR = "Unknown Author"

_CENTS = Decimal("0.01")


def elapsed_minutes(current: datetime, previous: datetime) -> int:
    """Whole minutes from ``previous`` to ``current``, never less than 1.

    Partial minutes are truncated toward zero before clamping, so commits
    30 seconds apart count as one minute.
    """
    seconds = (current - previous).total_seconds()
    return max(1, int(seconds / 60))


def round_velocity(total_changes: int, minutes: int) -> float:
    """Divide exactly and round half-up to two decimal places."""
    value = (Decimal(total_changes) / Decimal(minutes)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return float(value)


def format_instant(moment: datetime) -> str:
    """Render a datetime as ``YYYY-MM-DDTHH:MM:SS.sssZ`` in UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def first_line(message: str) -> str:
    return message.split("\n", 1)[0]


def calculate(commits: Sequence[ValidCommit]) -> List[VelocityPoint]:
    """Compute one velocity point per adjacent pair of commits.

    ``commits`` must be ordered most recent first; index ``i`` is paired
    with its older neighbour ``i + 1``. The result keeps that order.

    Args:
        commits: Reconciled commits, most recent first

    Returns:
        ``len(commits) - 1`` points (empty for fewer than two commits)
    """
    points: List[VelocityPoint] = []
    for current, previous in zip(commits, commits[1:]):
        minutes = elapsed_minutes(current.timestamp, previous.timestamp)
        points.append(VelocityPoint(
            sha=current.sha,
            date=format_instant(current.timestamp),
            velocity=round_velocity(current.total_changes, minutes),
            author=current.author_name or UNKNOWN_AUTHOR,
            message=first_line(current.message),
            additions=current.additions,
            deletions=current.deletions,
        ))
    return points
