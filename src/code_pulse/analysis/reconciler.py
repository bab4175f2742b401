"""Filtering of incomplete commit records."""

from typing import Iterable, List, Optional

from ..logging import get_logger
from ..models.commit import CommitDetail, ValidCommit

logger = get_logger(__name__)


def to_valid_commit(detail: CommitDetail) -> Optional[ValidCommit]:
    """Refine a detail record, or return None if a required field is missing."""
    if (
        detail.author_name is None
        or detail.timestamp is None
        or detail.additions is None
        or detail.deletions is None
    ):
        return None

    return ValidCommit(
        sha=detail.sha,
        author_name=detail.author_name,
        timestamp=detail.timestamp,
        message=detail.message,
        additions=detail.additions,
        deletions=detail.deletions,
    )


def reconcile(details: Iterable[CommitDetail]) -> List[ValidCommit]:
    """Drop records without statistics or author identity, keeping order."""
    valid: List[ValidCommit] = []
    for detail in details:
        commit = to_valid_commit(detail)
        if commit is None:
            logger.debug("commit_excluded", sha=detail.sha)
            continue
        valid.append(commit)
    return valid
