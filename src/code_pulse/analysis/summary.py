"""Aggregate statistics over a velocity series."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from ..models.commit import VelocityPoint, VelocitySummary

LOG_SCALE_RATIO = 100


def summarize(points: Sequence[VelocityPoint]) -> VelocitySummary:
    """Compute peak, average and totals for a chronologically ordered series."""
    if not points:
        return VelocitySummary()

    velocities = [point.velocity for point in points]
    average = Decimal(str(sum(velocities) / len(velocities))).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )

    time_range_hours = None
    if len(points) >= 2:
        first = datetime.fromisoformat(points[0].date.replace("Z", "+00:00"))
        last = datetime.fromisoformat(points[-1].date.replace("Z", "+00:00"))
        time_range_hours = int((last - first).total_seconds() / 3600)

    positive = [v for v in velocities if v > 0]
    suggest_log_scale = len(positive) >= 2 and max(positive) / min(positive) > LOG_SCALE_RATIO

    return VelocitySummary(
        peak=max(velocities),
        average=float(average),
        total_changes=sum(point.additions + point.deletions for point in points),
        commits_analyzed=len(points) + 1,
        time_range_hours=time_range_hours,
        suggest_log_scale=suggest_log_scale,
    )
