"""Schemas for the subset of the GitHub REST API payloads that is consumed."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from .commit import CommitDetail


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GitActor(_Payload):
    name: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("date")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # git dates without an offset are UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class GitCommit(_Payload):
    author: Optional[GitActor] = None
    message: Optional[str] = None


class CommitStats(_Payload):
    additions: StrictInt = Field(ge=0)
    deletions: StrictInt = Field(ge=0)


class CommitPayload(_Payload):
    """Response body of ``GET /repos/{owner}/{repo}/commits/{sha}``."""

    sha: str
    commit: GitCommit
    stats: Optional[CommitStats] = None

    def to_detail(self) -> CommitDetail:
        author = self.commit.author
        return CommitDetail(
            sha=self.sha,
            author_name=author.name if author else None,
            timestamp=author.date if author else None,
            message=self.commit.message or "",
            additions=self.stats.additions if self.stats else None,
            deletions=self.stats.deletions if self.stats else None,
        )
