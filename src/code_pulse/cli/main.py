#!/usr/bin/env python3
"""Main CLI entry point for code-pulse."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from .. import __version__
from ..analysis.pipeline import VelocityAnalyzer
from ..analysis.summary import summarize
from ..config.settings import get_settings
from ..exceptions import CodePulseError
from ..logging import configure_logging


def main(argv=None):
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Development velocity of GitHub repositories")
    parser.add_argument("--version", action="version", version=f"code-pulse {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a GitHub repository")
    analyze_parser.add_argument("url", help="Repository URL, e.g. https://github.com/octocat/hello-world")
    analyze_parser.add_argument(
        "--token", help="GitHub token (default: GITHUB_TOKEN environment variable)"
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file path for the result (default: print to stdout)",
    )
    analyze_parser.add_argument(
        "-f",
        "--format",
        choices=["json", "pretty"],
        default="json",
        help="Output format (default: json)",
    )
    analyze_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    analyze_parser.add_argument("-q", "--quiet", action="store_true", help="Minimal output")

    # Server command
    server_parser = subparsers.add_parser("server", help="Start API server")
    server_parser.add_argument(
        "--host", default="0.0.0.0", help="Host to bind server to (default: 0.0.0.0)"
    )
    server_parser.add_argument(
        "--port", type=int, default=8000, help="Port to bind server to (default: 8000)"
    )

    args = parser.parse_args(argv)

    if args.command == "analyze":
        return analyze_repository(args)
    elif args.command == "server":
        return start_server(args)
    else:
        parser.print_help()
        return 1


def analyze_repository(args) -> int:
    """Run the analysis pipeline locally and print the series."""
    configure_logging(args.log_level)

    try:
        points = asyncio.run(VelocityAnalyzer(get_settings()).analyze(args.url, args.token))
    except CodePulseError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.format == "json":
        output = json.dumps(
            {"success": True, "data": [point.model_dump() for point in points]},
            indent=2,
        )
    else:
        output = format_pretty(points, quiet=args.quiet)

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        if not args.quiet:
            print(f"Wrote {len(points)} points to {args.output}")
    else:
        print(output)

    return 0


def format_pretty(points, quiet: bool = False) -> str:
    """Render a velocity series and its summary as plain text."""
    summary = summarize(points)
    lines = []

    if not quiet:
        if not points:
            lines.append("No analyzable commit pairs found.")
        for point in points:
            lines.append(
                f"{point.date}  {point.sha[:7]}  {point.velocity:>10.2f} lpm  "
                f"+{point.additions}/-{point.deletions}  {point.author}: {point.message}"
            )
        lines.append("")

    lines.append(f"Peak velocity:    {summary.peak:.2f} lpm")
    lines.append(f"Average velocity: {summary.average:.2f} lpm")
    lines.append(f"Total changes:    {summary.total_changes:,}")
    lines.append(f"Commits analyzed: {summary.commits_analyzed:,}")
    if summary.time_range_hours is not None:
        lines.append(f"Time range:       {summary.time_range_hours}h")
    return "\n".join(lines)


def start_server(args) -> int:
    """Start the API server."""
    import uvicorn
    from ..api.server import app

    print(f"Starting Code Pulse API server on {args.host}:{args.port}")
    print(f"Health check: http://{args.host}:{args.port}/health")
    print(f"API docs: http://{args.host}:{args.port}/docs")

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level="info"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
