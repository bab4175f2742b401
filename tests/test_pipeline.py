"""Tests for the end-to-end velocity analysis pipeline."""

import httpx
import pytest

from code_pulse.analysis.pipeline import VelocityAnalyzer
from code_pulse.exceptions import (
    InsufficientHistoryError,
    RateLimitedError,
    RepositoryNotFoundError,
    UnexpectedError,
    UpstreamDataError,
    ValidationError,
)

from .conftest import FakeGitHub, make_commit

URL = "https://github.com/octocat/demo"


class TestVelocityAnalyzer:
    @pytest.mark.asyncio
    async def test_three_complete_commits(self, settings, three_commits):
        """Three commits yield two points, oldest pair first."""
        github = FakeGitHub(commits=three_commits)

        async with github.client() as client:
            points = await VelocityAnalyzer(settings, client).analyze(URL)

        assert [p.sha for p in points] == ["c2", "c3"]
        assert [p.date for p in points] == [
            "2024-03-01T12:10:00.000Z",
            "2024-03-01T12:13:00.000Z",
        ]
        # (20 + 10) / 10 minutes and (5 + 2) / 3 minutes
        assert [p.velocity for p in points] == [3.0, 2.33]
        assert [p.message for p in points] == ["Second", "Third"]

    @pytest.mark.asyncio
    async def test_repeated_analysis_is_identical(self, settings, three_commits):
        github = FakeGitHub(commits=three_commits)

        async with github.client() as client:
            analyzer = VelocityAnalyzer(settings, client)
            first = await analyzer.analyze(URL)
            second = await analyzer.analyze(URL)

        assert [p.model_dump() for p in first] == [p.model_dump() for p in second]

    @pytest.mark.asyncio
    async def test_invalid_url_makes_no_requests(self, settings):
        github = FakeGitHub()

        async with github.client() as client:
            with pytest.raises(ValidationError):
                await VelocityAnalyzer(settings, client).analyze("not-a-url")

        assert github.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,error", [
        (404, RepositoryNotFoundError),
        (403, RateLimitedError),
    ])
    async def test_upstream_status_errors(self, settings, status, error):
        github = FakeGitHub(list_status=status)

        async with github.client() as client:
            with pytest.raises(error):
                await VelocityAnalyzer(settings, client).analyze(URL)

    @pytest.mark.asyncio
    async def test_single_commit_is_insufficient(self, settings):
        github = FakeGitHub(commits=[make_commit("only")])

        async with github.client() as client:
            with pytest.raises(InsufficientHistoryError):
                await VelocityAnalyzer(settings, client).analyze(URL)

        assert github.detail_requests == []

    @pytest.mark.asyncio
    async def test_all_commits_filtered_is_an_empty_success(self, settings):
        commits = [
            make_commit("b", minutes=5, additions=None, deletions=None),
            make_commit("a", minutes=0, author=None),
        ]
        github = FakeGitHub(commits=commits)

        async with github.client() as client:
            result = await VelocityAnalyzer(settings, client).analyze_detailed(URL)

        assert result.points == []
        assert result.skipped == 2
        assert result.repository.full_name == "octocat/demo"

    @pytest.mark.asyncio
    async def test_gap_bridging_across_incomplete_commit(self, settings):
        commits = [
            make_commit("c3", minutes=30, additions=45, deletions=15),
            make_commit("c2", minutes=20, additions=None, deletions=None),
            make_commit("c1", minutes=0),
        ]
        github = FakeGitHub(commits=commits)

        async with github.client() as client:
            points = await VelocityAnalyzer(settings, client).analyze(URL)

        assert len(points) == 1
        assert points[0].sha == "c3"
        assert points[0].velocity == 2.0

    @pytest.mark.asyncio
    async def test_configured_token_is_used_by_default(self, settings, three_commits):
        github = FakeGitHub(commits=three_commits)
        authed = settings.model_copy(update={"github_token": "ghp_env"})

        async with github.client() as client:
            await VelocityAnalyzer(authed, client).analyze(URL)

        assert all(r.headers["Authorization"] == "Bearer ghp_env" for r in github.requests)

    @pytest.mark.asyncio
    async def test_explicit_token_wins(self, settings, three_commits):
        github = FakeGitHub(commits=three_commits)
        authed = settings.model_copy(update={"github_token": "ghp_env"})

        async with github.client() as client:
            await VelocityAnalyzer(authed, client).analyze(URL, token="ghp_request")

        assert all(r.headers["Authorization"] == "Bearer ghp_request" for r in github.requests)

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_wrapped(self, settings):
        def handler(request):
            raise RuntimeError("boom")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(UnexpectedError) as exc_info:
                await VelocityAnalyzer(settings, client).analyze(URL)

        assert exc_info.value.status_code == 500
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_creates_and_closes_own_client(self, settings, three_commits, monkeypatch):
        github = FakeGitHub(commits=three_commits)
        created = []

        def create_client(self):
            client = github.client()
            created.append(client)
            return client

        monkeypatch.setattr(VelocityAnalyzer, "_create_client", create_client)

        points = await VelocityAnalyzer(settings).analyze(URL)

        assert len(points) == 2
        assert len(created) == 1
        assert created[0].is_closed

    @pytest.mark.asyncio
    async def test_mixed_naive_and_aware_dates(self, settings, three_commits):
        three_commits[1]["commit"]["author"]["date"] = "2024-03-01T12:10:00"
        github = FakeGitHub(commits=three_commits)

        async with github.client() as client:
            points = await VelocityAnalyzer(settings, client).analyze(URL)

        assert [p.date for p in points] == [
            "2024-03-01T12:10:00.000Z",
            "2024-03-01T12:13:00.000Z",
        ]
        assert [p.velocity for p in points] == [3.0, 2.33]

    @pytest.mark.asyncio
    async def test_negative_stats_are_upstream_data_errors(self, settings, three_commits):
        three_commits[1]["stats"]["additions"] = -5
        github = FakeGitHub(commits=three_commits)

        async with github.client() as client:
            with pytest.raises(UpstreamDataError):
                await VelocityAnalyzer(settings, client).analyze(URL)

    @pytest.mark.asyncio
    async def test_negative_stats_skipped_under_skip_policy(self, settings, three_commits):
        three_commits[1]["stats"]["additions"] = -5
        github = FakeGitHub(commits=three_commits)
        resilient = settings.model_copy(update={"detail_failure_policy": "skip"})

        async with github.client() as client:
            result = await VelocityAnalyzer(resilient, client).analyze_detailed(URL)

        assert [p.sha for p in result.points] == ["c3"]
        assert result.skipped == 1
