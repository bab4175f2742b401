"""Commit velocity analysis pipeline."""

import time
from typing import List, Optional

import httpx

from ..config.settings import Settings, get_settings
from ..exceptions import CodePulseError, UnexpectedError
from ..logging import get_logger
from ..models.commit import AnalysisResult, VelocityPoint
from .assembler import assemble
from .fetcher import CommitFetcher
from .reconciler import reconcile
from .validator import parse_repository_url
from .velocity import calculate

logger = get_logger(__name__)


class VelocityAnalyzer:
    """Runs validate → fetch → reconcile → calculate → assemble for a URL.

    An injected ``httpx.AsyncClient`` is used as-is and left open; otherwise
    a client is created for each analysis and closed when it finishes.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings or get_settings()
        self.client = client

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.settings.request_timeout)

    async def analyze(self, url: str, token: Optional[str] = None) -> List[VelocityPoint]:
        """Analyze a repository and return its velocity series.

        Args:
            url: GitHub repository URL
            token: Bearer credential; defaults to the configured GitHub token

        Returns:
            Velocity points ordered oldest first (possibly empty)

        Raises:
            CodePulseError: On any validation or upstream failure
        """
        result = await self.analyze_detailed(url, token)
        return result.points

    async def analyze_detailed(self, url: str, token: Optional[str] = None) -> AnalysisResult:
        """Like :meth:`analyze` but also reports how many commits were skipped."""
        repo = parse_repository_url(url)
        token = token or self.settings.github_token
        start_time = time.time()

        logger.info("analysis_started", repository=repo.full_name, authenticated=bool(token))

        try:
            if self.client is not None:
                details, failed = await CommitFetcher(self.client, self.settings).fetch(repo, token)
            else:
                async with self._create_client() as client:
                    details, failed = await CommitFetcher(client, self.settings).fetch(repo, token)

            commits = reconcile(details)
            points = assemble(calculate(commits))

        except CodePulseError as e:
            logger.error(
                "analysis_failed",
                repository=repo.full_name,
                error=e.message,
                error_type=type(e).__name__,
                duration_ms=int((time.time() - start_time) * 1000),
            )
            raise
        except Exception as e:
            logger.exception(
                "analysis_failed",
                repository=repo.full_name,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=int((time.time() - start_time) * 1000),
            )
            raise UnexpectedError() from e

        skipped = failed + len(details) - len(commits)
        logger.info(
            "analysis_completed",
            repository=repo.full_name,
            commits_valid=len(commits),
            points=len(points),
            skipped=skipped,
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return AnalysisResult(repository=repo, points=points, skipped=skipped)
