"""Code Pulse - development velocity analysis for GitHub repositories."""

__version__ = "0.1.0"

from .analysis import VelocityAnalyzer, summarize
from .exceptions import CodePulseError
from .models import VelocityPoint, VelocitySummary
from .sdk import CodePulse

__all__ = [
    "CodePulse",
    "CodePulseError",
    "VelocityAnalyzer",
    "VelocityPoint",
    "VelocitySummary",
    "summarize",
]
