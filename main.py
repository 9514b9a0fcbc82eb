# main.py

"""Entry point for marketpush (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from marketpush.config.logging_config import setup_logging
from marketpush.config.settings import Settings

logger = logging.getLogger("marketpush.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    labels = ", ".join(
        mp["label"] for mp in Settings.AVAILABLE_MARKETPLACES
    )

    parser = argparse.ArgumentParser(
        prog="marketpush",
        description="Build a product inventory and export it to marketplaces.",
        epilog=f"Marketplaces: {labels}",
    )
    parser.add_argument(
        "products_file",
        nargs="?",
        default=None,
        help="JSON array of products to export. Omit to launch the TUI.",
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
        help="Directory for the export report (default: results/).",
    )
    parser.add_argument(
        "--enrich",
        default=None,
        metavar="NAME",
        help="Print AI-suggested description/category/price for NAME.",
    )
    parser.add_argument(
        "--image",
        default=None,
        metavar="FILE",
        help="Product photo sent along with --enrich.",
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from marketpush.ui.app import MarketpushApp

    try:
        app = MarketpushApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("marketpush TUI shutting down")


def _run_export(args: argparse.Namespace) -> None:
    """Export a products file headlessly and exit."""
    from marketpush.cli.runner import cli_export

    exit_code = asyncio.run(
        cli_export(
            products_path=args.products_file,
            output_format=args.output_format,
            output_dir=args.output_dir,
        )
    )
    sys.exit(exit_code)


def _run_enrich(args: argparse.Namespace) -> None:
    """Run a single AI enrichment and exit."""
    from marketpush.cli.runner import cli_enrich

    exit_code = asyncio.run(cli_enrich(args.enrich, args.image))
    sys.exit(exit_code)


def main() -> None:
    """Route to TUI (no args), enrichment, or headless export."""
    log_file = setup_logging()
    logger.info("marketpush starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.enrich is not None:
        _run_enrich(args)
    elif args.products_file is None:
        _run_tui()
    else:
        _run_export(args)


if __name__ == "__main__":
    main()
