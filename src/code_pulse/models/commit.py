"""Data models for commits and the velocity series derived from them."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RepositoryRef(BaseModel):
    """Owner/name pair identifying a GitHub repository.

    Attributes:
        owner: Account or organisation that owns the repository.
        name: Repository name.
    """

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class CommitSummary(BaseModel):
    """Entry of the recent-commits listing; only the sha is consumed."""

    sha: str


class CommitDetail(BaseModel):
    """A commit as resolved from the GitHub detail endpoint.

    Everything except ``sha`` may be missing when upstream data is
    incomplete, e.g. merge commits without statistics or commits whose
    author metadata was stripped.

    Attributes:
        sha: Full commit SHA.
        author_name: Git author name, if present.
        timestamp: Git author date, if present.
        message: Full commit message.
        additions: Lines added, if statistics are present.
        deletions: Lines deleted, if statistics are present.
    """

    sha: str
    author_name: Optional[str] = None
    timestamp: Optional[datetime] = None
    message: str = ""
    additions: Optional[int] = None
    deletions: Optional[int] = None


class ValidCommit(BaseModel):
    """A commit with every field needed to compute velocity."""

    model_config = ConfigDict(frozen=True)

    sha: str
    author_name: str
    timestamp: datetime
    message: str = ""
    additions: int = Field(ge=0)
    deletions: int = Field(ge=0)

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions


class VelocityPoint(BaseModel):
    """One point of the velocity series.

    Attributes:
        sha: SHA of the more recent commit of the pair.
        date: ISO-8601 UTC instant of the more recent commit.
        velocity: Changed lines per minute, rounded to two decimals.
        author: Author of the more recent commit.
        message: First line of the more recent commit's message.
        additions: Lines added by the more recent commit.
        deletions: Lines deleted by the more recent commit.
    """

    model_config = ConfigDict(frozen=True)

    sha: str
    date: str
    velocity: float = Field(ge=0)
    author: str
    message: str
    additions: int
    deletions: int


class AnalysisResult(BaseModel):
    """Velocity series plus bookkeeping about excluded commits."""

    repository: RepositoryRef
    points: List[VelocityPoint] = Field(default_factory=list)
    skipped: int = 0


class VelocitySummary(BaseModel):
    """Aggregate statistics over a velocity series.

    Attributes:
        peak: Highest velocity in the series.
        average: Mean velocity, rounded to two decimals.
        total_changes: Sum of additions and deletions across all points.
        commits_analyzed: Number of commits the series spans.
        time_range_hours: Whole hours between first and last point.
        suggest_log_scale: Whether velocities span more than two orders of magnitude.
    """

    peak: float = 0.0
    average: float = 0.0
    total_changes: int = 0
    commits_analyzed: int = 0
    time_range_hours: Optional[int] = None
    suggest_log_scale: bool = False
