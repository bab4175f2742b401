"""Code Pulse Python SDK client."""

from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import requests

from .. import __version__
from ..analysis.summary import summarize
from ..exceptions import (
    ERRORS_BY_STATUS,
    CodePulseError,
    InsufficientHistoryError,
    UpstreamDataError,
    UpstreamError,
)
from ..models.commit import VelocityPoint, VelocitySummary
from .exceptions import ConnectionError, TimeoutError


class CodePulse:
    """Client for a running code-pulse server.

    Requests are never retried; a failed analysis surfaces immediately.
    """

    def __init__(self, server_url: str, timeout: float = 30.0, token: Optional[str] = None):
        """Initialize the client.

        Args:
            server_url: Base URL of the code-pulse server
            timeout: Request timeout in seconds
            token: GitHub token forwarded to the server as a bearer credential
        """
        self.server_url = server_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': f'CodePulse-SDK/{__version__}',
            'Content-Type': 'application/json'
        })
        if token:
            self.session.headers['Authorization'] = f'Bearer {token}'

    def _make_request(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        """Make HTTP request to server with error handling."""
        url = urljoin(self.server_url + '/', endpoint.lstrip('/'))

        try:
            kwargs.setdefault('timeout', self.timeout)
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.Timeout:
            raise TimeoutError(f"Request timed out after {self.timeout}s")
        except requests.exceptions.ConnectionError:
            raise ConnectionError(f"Failed to connect to server: {self.server_url}")
        except requests.exceptions.RequestException as e:
            raise ConnectionError(f"Request failed: {str(e)}")

        try:
            payload = response.json()
        except ValueError:
            raise CodePulseError(f"HTTP error {response.status_code}: {response.text}")

        if not isinstance(payload, dict):
            raise CodePulseError(f"Unexpected response from server: {response.text}")

        if response.ok and payload.get("success"):
            return payload

        raise _error_from_response(response.status_code, payload.get("error"))

    def analyze(self, url: str) -> List[VelocityPoint]:
        """Analyze a GitHub repository.

        Args:
            url: Repository URL, e.g. ``https://github.com/octocat/hello-world``

        Returns:
            Velocity points ordered oldest first

        Raises:
            CodePulseError: The server reported a failure or could not be reached
        """
        response = self._make_request("POST", "/api/analyze", json={"url": url})
        return [VelocityPoint.model_validate(item) for item in response.get("data", [])]

    def summarize(self, url: str) -> VelocitySummary:
        """Analyze a repository and return summary statistics of its series."""
        return summarize(self.analyze(url))

    def health(self) -> Dict[str, Any]:
        """Return the server's health payload."""
        try:
            response = self.session.get(f"{self.server_url}/health", timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise ConnectionError(f"Health check failed: {str(e)}")


def _error_from_response(status_code: int, message: Optional[str]) -> CodePulseError:
    """Rebuild the server-side exception from an error response."""
    if status_code == 400 and message == InsufficientHistoryError.default_message:
        return InsufficientHistoryError(message)
    if status_code == 500 and message == UpstreamDataError.default_message:
        return UpstreamDataError(message)
    if status_code == 500 and message and message.startswith("GitHub API"):
        return UpstreamError(message)

    error_class = ERRORS_BY_STATUS.get(status_code, CodePulseError)
    return error_class(message)
