"""Command-line interface for healthtables."""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path

from .config import settings


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="healthtables - scrape health-reporting tables into a fixed schema"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate", help="Crawl and scrape sources, writing results to files"
    )
    generate_parser.add_argument(
        "--output", "-o", type=Path, required=True, help="Directory to write result files to"
    )
    generate_parser.add_argument(
        "--source",
        "-s",
        action="append",
        default=None,
        help="Source key to include (repeat for several; default: all)",
    )
    generate_parser.add_argument(
        "--date", "-d", type=_parse_date, help="Start date, YYYY-MM-DD (default: today, crawling live)"
    )
    generate_parser.add_argument(
        "--end-date", "-e", type=_parse_date, help="End date, YYYY-MM-DD (default: today)"
    )
    generate_parser.add_argument(
        "--concurrency", type=int, default=None, help="Maximum sources processed at once"
    )

    # Sources command
    subparsers.add_parser("sources", help="List registered sources")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the inspection API server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "generate":
        sys.exit(run_generate(args))
    elif args.command == "sources":
        run_sources()
    elif args.command == "serve":
        run_server(args.host, args.port, args.reload)
    else:
        parser.print_help()
        sys.exit(1)


def run_generate(args) -> int:
    """Run a batch; returns the process exit code."""
    from .batch import BatchRunner, ResultWriter, get_dates
    from .sources import UnknownSourceError, get_sources

    try:
        sources = get_sources(args.source)
        dates = get_dates(args.date, args.end_date)
    except (UnknownSourceError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    # Only today's pages can be crawled; earlier dates come from the cache.
    runner = BatchRunner(sources, max_concurrency=args.concurrency, live=args.date is None)
    batch = asyncio.run(runner.run(dates))
    ResultWriter(args.output).write(batch)

    for result in batch.failed:
        print(f"FAILED {result.source} {result.date.isoformat()}: {result.error}", file=sys.stderr)
    return 1 if batch.failed else 0


def run_sources():
    """Print registered sources as JSON."""
    from .sources import get_sources

    print(json.dumps([s.summary() for s in get_sources()], indent=2))


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    import uvicorn

    uvicorn.run(
        "healthtables.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


if __name__ == "__main__":
    main()
