# src/main.py — v2
"""CLI entry point: scrape, reprocess-failed, serve commands.

Usage:
    scripturai scrape kjv [--modern]
    scripturai reprocess-failed
    scripturai serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import argparse
import asyncio
import inspect
import logging
import sys
from typing import TYPE_CHECKING

from scripturai.version import __version__

if TYPE_CHECKING:
    from scripturai.config.settings import Settings

logger = logging.getLogger(__name__)

SOURCES = ("kjv",)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from scripturai.config.settings import ConfigurationError, Settings

    try:
        settings = Settings()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    _setup_logging(settings, args.verbose)

    try:
        if inspect.iscoroutinefunction(args.func):
            return asyncio.run(args.func(args, settings))
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="scripturai",
        description=f"ScripturAI v{__version__}: Bible reader backend and verse scraper",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- scrape ---
    p_scrape = subparsers.add_parser(
        "scrape", help="Scrape a Bible source into the verse store",
    )
    p_scrape.add_argument("source", choices=SOURCES, help="Data source to scrape")
    p_scrape.add_argument(
        "--modern", action="store_true",
        help="Translate each verse to modern English (stored as version AI)",
    )
    p_scrape.set_defaults(func=_cmd_scrape)

    # --- reprocess-failed ---
    p_reprocess = subparsers.add_parser(
        "reprocess-failed", help="Re-embed verses recorded in the failure ledger",
    )
    p_reprocess.set_defaults(func=_cmd_reprocess_failed)

    # --- serve ---
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=None, help="Bind address (default: API_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default: API_PORT)")
    p_serve.set_defaults(func=_cmd_serve)

    return parser


async def _cmd_scrape(args: argparse.Namespace, settings: Settings) -> int:
    """Scrape every book of the source, resuming where the last run stopped."""
    from scripturai.api.container import AppContainer
    from scripturai.scraper.github_source import GitHubSource

    container = AppContainer.from_settings(settings)
    async with GitHubSource() as source:
        runner = container.scrape_runner(source, modern=args.modern)
        summary = await runner.run_kjv(modern=args.modern)

    print(f"\nScrape complete ({summary.version}):")
    print(f"  Books found:  {summary.total_books}")
    print(f"  Completed:    {len(summary.completed)}")
    print(f"  Skipped:      {len(summary.skipped)}")
    print(f"  Failed:       {len(summary.failed)}")
    print(f"  Duration:     {summary.duration_seconds:.1f}s")
    return 1 if summary.failed else 0


async def _cmd_reprocess_failed(args: argparse.Namespace, settings: Settings) -> int:
    """Embed the verses whose translation failed during an earlier scrape."""
    from scripturai.api.container import AppContainer

    container = AppContainer.from_settings(settings)
    count = await container.pipeline().process_failed_translations(
        batch_size=container.settings.scraper_batch_size,
    )
    print(f"Reprocessed {count} failed verses.")
    return 0


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    from scripturai.api.app import create_app
    from scripturai.api.container import AppContainer

    container = AppContainer.from_settings(settings)
    app = create_app(container)
    uvicorn.run(
        app,
        host=args.host or container.settings.api_host,
        port=args.port or container.settings.api_port,
        log_config=None,
    )
    return 0


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from scripturai.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
