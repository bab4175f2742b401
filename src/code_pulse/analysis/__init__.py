"""Commit velocity analysis."""

from .assembler import assemble
from .fetcher import CommitFetcher
from .pipeline import VelocityAnalyzer
from .reconciler import reconcile
from .summary import summarize
from .validator import parse_repository_url
from .velocity import calculate

__all__ = [
    "CommitFetcher",
    "VelocityAnalyzer",
    "assemble",
    "calculate",
    "parse_repository_url",
    "reconcile",
    "summarize",
]
