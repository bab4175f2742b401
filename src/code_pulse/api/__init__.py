"""HTTP API for code-pulse."""
