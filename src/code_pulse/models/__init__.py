"""Data models for code-pulse."""

from .commit import (
    AnalysisResult,
    CommitDetail,
    CommitSummary,
    RepositoryRef,
    ValidCommit,
    VelocityPoint,
    VelocitySummary,
)
from .github import CommitPayload

__all__ = [
    "AnalysisResult",
    "CommitDetail",
    "CommitPayload",
    "CommitSummary",
    "RepositoryRef",
    "ValidCommit",
    "VelocityPoint",
    "VelocitySummary",
]
