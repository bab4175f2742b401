"""Exception hierarchy for code-pulse.

Every error carries the HTTP status code and the user-facing message that the
API layer returns in ``{"success": false, "error": ...}``.
"""

from typing import Optional


class CodePulseError(Exception):
    """Base exception for code-pulse errors."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred during analysis."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CodePulseError):
    """Raised when a repository URL or request body is malformed."""

    status_code = 400
    default_message = "Invalid GitHub repository URL format."


class RepositoryNotFoundError(CodePulseError):
    """Raised when GitHub reports the repository does not exist."""

    status_code = 404
    default_message = "Repository not found. Please check the URL or ensure it is public."


class RateLimitedError(CodePulseError):
    """Raised when GitHub refuses the request because of rate limiting."""

    status_code = 403
    default_message = "GitHub API rate limit exceeded. Please try again later."


class InsufficientHistoryError(CodePulseError):
    """Raised when the repository has fewer than two commits."""

    status_code = 400
    default_message = "Not enough commits to analyze. A repository needs at least two commits."


class UpstreamDataError(CodePulseError):
    """Raised when a GitHub payload does not have the expected structure."""

    status_code = 500
    default_message = "GitHub returned an invalid data structure."


class UpstreamError(CodePulseError):
    """Raised for any other GitHub failure, including transport errors."""

    status_code = 500
    default_message = "GitHub API error."


class UnexpectedError(CodePulseError):
    """Raised when a stage fails with an error outside this hierarchy."""

    status_code = 500


ERRORS_BY_STATUS = {
    400: ValidationError,
    403: RateLimitedError,
    404: RepositoryNotFoundError,
}
