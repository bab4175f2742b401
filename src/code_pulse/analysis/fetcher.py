"""GitHub commit retrieval."""

import asyncio
from typing import Dict, List, Optional, Tuple

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..config.settings import Settings
from ..exceptions import (
    CodePulseError,
    InsufficientHistoryError,
    RateLimitedError,
    RepositoryNotFoundError,
    UpstreamDataError,
    UpstreamError,
)
from ..logging import get_logger
from ..models.commit import CommitDetail, CommitSummary, RepositoryRef
from ..models.github import CommitPayload

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100


class CommitFetcher:
    """Fetches recent commits of a repository and resolves their details.

    The summary listing is a single request; detail lookups are issued
    all at once and awaited together. Nothing is retried.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self.client = client
        self.settings = settings
        self.page_size = min(settings.page_size, MAX_PAGE_SIZE)

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/vnd.github+json",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _repo_url(self, repo: RepositoryRef) -> str:
        base = self.settings.github_api_base.rstrip("/")
        return f"{base}/repos/{repo.owner}/{repo.name}/commits"

    async def _get(self, url: str, token: Optional[str], **kwargs) -> httpx.Response:
        try:
            return await self.client.get(url, headers=self._headers(token), **kwargs)
        except httpx.HTTPError as e:
            raise UpstreamError(f"GitHub API request failed: {type(e).__name__}")

    async def fetch_summaries(self, repo: RepositoryRef, token: Optional[str] = None) -> List[CommitSummary]:
        """Fetch the most recent commit summaries, most recent first.

        Args:
            repo: Repository to list
            token: Optional bearer credential

        Returns:
            Up to ``page_size`` commit summaries

        Raises:
            RepositoryNotFoundError: GitHub answered 404
            RateLimitedError: GitHub answered 403 or 429
            UpstreamError: Any other non-success status or transport failure
            UpstreamDataError: The listing is not a list of commits
        """
        response = await self._get(self._repo_url(repo), token, params={"per_page": self.page_size})

        # Status checks come before any attempt to read the body
        if response.status_code == 404:
            raise RepositoryNotFoundError()
        if response.status_code in (403, 429):
            raise RateLimitedError()
        if not response.is_success:
            raise UpstreamError(f"GitHub API error: {_status_text(response)}")

        try:
            body = response.json()
            if not isinstance(body, list):
                raise UpstreamDataError()
            return [CommitSummary.model_validate(item) for item in body]
        except (ValueError, PydanticValidationError):
            raise UpstreamDataError()

    async def fetch_detail(self, repo: RepositoryRef, sha: str, token: Optional[str] = None) -> CommitDetail:
        """Fetch and validate the detail record of a single commit."""
        response = await self._get(f"{self._repo_url(repo)}/{sha}", token)
        if not response.is_success:
            raise UpstreamError(f"GitHub API error: {_status_text(response)}")

        try:
            payload = CommitPayload.model_validate(response.json())
        except (ValueError, PydanticValidationError):
            logger.warning("commit_detail_invalid", repository=repo.full_name, sha=sha)
            raise UpstreamDataError()

        return payload.to_detail()

    async def fetch_details(
        self,
        repo: RepositoryRef,
        summaries: List[CommitSummary],
        token: Optional[str] = None,
    ) -> Tuple[List[CommitDetail], int]:
        """Resolve every summary to its detail record concurrently.

        All requests are awaited until they settle. Results keep the order
        of ``summaries``. Under the ``fail_fast`` policy the first failure
        (in summary order) is raised; under ``skip`` failed items are dropped.

        Returns:
            Tuple of (details, number of skipped items)
        """
        outcomes = await asyncio.gather(
            *(self.fetch_detail(repo, summary.sha, token) for summary in summaries),
            return_exceptions=True,
        )

        details: List[CommitDetail] = []
        skipped = 0
        for summary, outcome in zip(summaries, outcomes):
            if isinstance(outcome, CommitDetail):
                details.append(outcome)
                continue
            if not isinstance(outcome, CodePulseError) or self.settings.detail_failure_policy == "fail_fast":
                raise outcome
            logger.warning(
                "commit_detail_skipped",
                repository=repo.full_name,
                sha=summary.sha,
                error=outcome.message,
            )
            skipped += 1

        return details, skipped

    async def fetch(self, repo: RepositoryRef, token: Optional[str] = None) -> Tuple[List[CommitDetail], int]:
        """Fetch recent commits and their details.

        Raises:
            InsufficientHistoryError: Fewer than two commits were listed
        """
        summaries = await self.fetch_summaries(repo, token)
        logger.info("commits_listed", repository=repo.full_name, count=len(summaries))

        if len(summaries) < 2:
            raise InsufficientHistoryError()

        details, skipped = await self.fetch_details(repo, summaries, token)
        logger.info(
            "commits_fetched",
            repository=repo.full_name,
            count=len(details),
            skipped=skipped,
        )
        return details, skipped


def _status_text(response: httpx.Response) -> str:
    phrase = response.reason_phrase
    return f"{response.status_code} {phrase}" if phrase else str(response.status_code)
