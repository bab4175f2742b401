"""Final ordering of the velocity series."""

from typing import List, Sequence

from ..models.commit import VelocityPoint


def assemble(points: Sequence[VelocityPoint]) -> List[VelocityPoint]:
    """Return the points in chronological order, oldest pair first."""
    return list(reversed(points))
