"""Code Pulse Python SDK."""

from .client import CodePulse
from .exceptions import ConnectionError, TimeoutError

__all__ = [
    "CodePulse",
    "ConnectionError",
    "TimeoutError",
]
