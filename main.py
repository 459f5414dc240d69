# main.py

"""Entry point for the storefront (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from storefront.config.logging_config import setup_logging
from storefront.config.settings import Settings

logger = logging.getLogger("storefront.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    sort_ids = [s["id"] for s in Settings.SORT_OPTIONS]

    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Storefront catalog, cart and site search.",
        epilog=f"Sort orders: {', '.join(sort_ids)}",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Site search query. Omit to launch the interactive TUI.",
    )
    parser.add_argument(
        "-t",
        "--type",
        choices=Settings.RESULT_TYPES,
        default=None,
        dest="result_type",
        help="Only show search results of this type.",
    )
    parser.add_argument(
        "-b",
        "--browse",
        action="store_true",
        default=False,
        help="List products instead of searching the whole site.",
    )
    parser.add_argument(
        "-c",
        "--category",
        default=Settings.ALL_CATEGORIES,
        help="Product category filter for --browse (default: All).",
    )
    parser.add_argument(
        "--sort",
        choices=sort_ids,
        default="featured",
        dest="sort_key",
        help="Product sort order for --browse (default: featured).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_dir",
        help="Custom output directory for saved results (default: results/).",
    )
    parser.add_argument(
        "--remote",
        action="store_true",
        default=False,
        help="Load content from the API instead of the bundled catalog.",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on the content API.",
    )
    return parser


def _run_tui(remote: bool) -> None:
    """Launch the interactive Textual TUI."""
    from storefront.cli.runner import load_catalog
    from storefront.ui.app import StorefrontApp

    try:
        app = StorefrontApp(catalog=load_catalog(remote))
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("storefront TUI shutting down")


def _run_browse(args: argparse.Namespace) -> None:
    """List products headlessly and exit."""
    from storefront.cli.runner import cli_browse

    sys.exit(
        cli_browse(
            query=args.query or "",
            category=args.category,
            sort_key=args.sort_key,
            output_format=args.output_format,
            remote=args.remote,
        )
    )


def _run_search(args: argparse.Namespace) -> None:
    """Run a headless site search and exit."""
    from storefront.cli.runner import cli_search

    sys.exit(
        cli_search(
            query=args.query,
            result_type=args.result_type,
            output_format=args.output_format,
            output_dir=args.output_dir,
            remote=args.remote,
        )
    )


def _run_health_check() -> None:
    """Run content API health check."""
    from storefront.cli.runner import run_health_check

    sys.exit(asyncio.run(run_health_check()))


def main() -> None:
    """Route to TUI (no args) or a headless command."""
    log_file = setup_logging()
    logger.info("storefront starting, log file: %s", log_file)

    args = _build_parser().parse_args()

    if args.health:
        _run_health_check()
    elif args.browse:
        _run_browse(args)
    elif args.query is None:
        _run_tui(args.remote)
    else:
        _run_search(args)


if __name__ == "__main__":
    main()
