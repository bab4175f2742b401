"""Shared fixtures: an in-memory stand-in for the GitHub commits API."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from code_pulse.config.settings import Settings

API_BASE = "https://api.github.test"
START = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_commit(sha, minutes=0, seconds=0, additions=10, deletions=5,
                author="Mona Lisa", message="Update README\n\nLonger body"):
    """Build a GitHub "get a commit" payload."""
    date = START + timedelta(minutes=minutes, seconds=seconds)
    payload = {
        "sha": sha,
        "node_id": f"C_{sha}",
        "commit": {
            "author": {
                "name": author,
                "email": "mona@example.com",
                "date": date.strftime("%Y-%m-%dT%H:%M:%SZ"),
            },
            "message": message,
        },
        "author": {"login": "octocat"},
        "files": [],
    }
    if additions is not None and deletions is not None:
        payload["stats"] = {
            "additions": additions,
            "deletions": deletions,
            "total": additions + deletions,
        }
    if author is None:
        del payload["commit"]["author"]
    return payload


class FakeGitHub:
    """Serves commit listings and details for a single repository.

    ``commits`` are ordered most recent first, as GitHub returns them.
    """

    def __init__(self, owner="octocat", repo="demo", commits=None,
                 list_status=200, list_body=None, detail_responses=None):
        self.owner = owner
        self.repo = repo
        self.commits = commits or []
        self.list_status = list_status
        self.list_body = list_body
        self.detail_responses = detail_responses or {}
        self.requests = []

    @property
    def detail_requests(self):
        return [r for r in self.requests if r.url.path.count("/") == 5]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        prefix = f"/repos/{self.owner}/{self.repo}/commits"
        path = request.url.path

        if path == prefix:
            if self.list_status != 200:
                return httpx.Response(self.list_status, json={"message": "error"})
            body = self.list_body
            if body is None:
                body = [{"sha": c["sha"], "commit": c["commit"]} for c in self.commits]
            return httpx.Response(200, json=body)

        if path.startswith(prefix + "/"):
            sha = path[len(prefix) + 1:]
            if sha in self.detail_responses:
                return self.detail_responses[sha]
            for commit in self.commits:
                if commit["sha"] == sha:
                    return httpx.Response(200, json=commit)

        return httpx.Response(404, json={"message": "Not Found"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def settings(monkeypatch):
    """Settings isolated from the environment."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("CODE_PULSE_GITHUB_TOKEN", raising=False)
    return Settings(
        _env_file=None,
        github_token=None,
        github_api_base=API_BASE,
    )


@pytest.fixture
def three_commits():
    """Three complete commits, most recent first, 10 and 3 minutes apart."""
    return [
        make_commit("c3", minutes=13, additions=5, deletions=2, message="Third"),
        make_commit("c2", minutes=10, additions=20, deletions=10, message="Second\nbody"),
        make_commit("c1", minutes=0, additions=100, deletions=0, message="Initial"),
    ]
