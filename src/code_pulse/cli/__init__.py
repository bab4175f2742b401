"""Command-line interface for code-pulse."""
