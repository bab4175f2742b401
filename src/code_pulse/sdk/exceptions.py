"""Transport exceptions for the code-pulse SDK."""

from ..exceptions import CodePulseError


class ConnectionError(CodePulseError):
    """Raised when connection to server fails."""
    pass


class TimeoutError(CodePulseError):
    """Raised when a request to the server times out."""
    pass
