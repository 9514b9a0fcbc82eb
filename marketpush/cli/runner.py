# marketpush/cli/runner.py

"""Headless CLI runner: export a products file or enrich one product."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from marketpush.config.settings import Settings, load_config
from marketpush.errors import EnrichmentError, MissingConfig
from marketpush.models.export_outcome import ExportOutcome, ExportResult
from marketpush.models.product import Product
from marketpush.services.enrichment import ProductEnricher
from marketpush.services.export_orchestrator import ExportOrchestrator
from marketpush.storage.file_manager import FileManager

logger = logging.getLogger("marketpush.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def load_products(path: Path) -> list[Product]:
    """Read a JSON array of product objects.

    Raises:
        ValueError: if the file is not a JSON array of valid products.
    """
    with open(path, encoding="utf-8") as f:
        data: Any = json.load(f)
    if not isinstance(data, list) or not all(
        isinstance(item, dict) for item in data
    ):
        msg = f"{path} must contain a JSON array of product objects"
        raise ValueError(msg)
    return [Product.from_dict(item) for item in data]


def _slot_summary(result: ExportResult | None) -> str:
    if result is None:
        return "—"
    if result.is_ok:
        value = result.to_dict()
        if isinstance(value, dict) and value.get("id"):
            return f"[green]✓ {escape(str(value['id']))}[/green]"
        return "[green]✓ ok[/green]"
    return f"[red]✗ {escape(result.to_dict()['error'])}[/red]"


def _print_table(outcomes: list[ExportOutcome]) -> None:
    """Render a Rich table of outcomes to stdout."""
    table = Table(
        title="Export Results",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Product", max_width=50)
    for mp in Settings.AVAILABLE_MARKETPLACES:
        table.add_column(mp["label"], overflow="fold")

    for idx, outcome in enumerate(outcomes, 1):
        table.add_row(
            str(idx),
            escape(outcome.product),
            *(
                _slot_summary(outcome.results.get(mp["id"]))
                for mp in Settings.AVAILABLE_MARKETPLACES
            ),
        )

    Console().print(table)


def _save_report(
    file_manager: FileManager, outcomes: list[ExportOutcome],
) -> None:
    try:
        path = file_manager.save_outcomes(outcomes)
        _err.print(f"[dim]Saved report → {path}[/dim]")
    except OSError as exc:
        logger.error("Save failed: %s", exc, exc_info=True)
        _err.print(f"[red]Save failed: {escape(str(exc))}[/red]")


async def cli_export(
    products_path: str,
    output_format: str,
    output_dir: str | None,
) -> int:
    """Export every product in *products_path*.

    Returns 0 when every marketplace slot succeeded, 1 when any failed
    and 2 when the products file cannot be read.
    """
    try:
        products = load_products(Path(products_path))
    except (OSError, ValueError) as exc:
        logger.error("Cannot load %s: %s", products_path, exc)
        _err.print(f"[red]Cannot load products: {escape(str(exc))}[/red]")
        return 2

    if not products:
        _err.print("[yellow]No products to export.[/yellow]")
        return 1

    file_manager = FileManager(
        Path(output_dir) if output_dir is not None else None
    )
    orchestrator = ExportOrchestrator(load_config())

    labels = ", ".join(
        mp["label"] for mp in Settings.AVAILABLE_MARKETPLACES
    )
    _err.print(
        f"[bold]Exporting {len(products)} products[/bold] "
        f"[dim]→ {labels}[/dim]"
    )

    outcomes = await orchestrator.export_all(products)

    failed = [o for o in outcomes if not o.succeeded]
    if failed:
        _err.print(
            f"[red]✗ {len(failed)} of {len(outcomes)} products "
            "had failures[/red]"
        )
    else:
        _err.print(f"[green]✓ {len(outcomes)} products exported[/green]")

    _save_report(file_manager, outcomes)

    if output_format == "table":
        _print_table(outcomes)
    else:
        json.dump(
            [o.to_dict() for o in outcomes],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
            default=str,
        )
        sys.stdout.write("\n")

    return 1 if failed else 0


async def cli_enrich(name: str, image_path: str | None) -> int:
    """Print an AI suggestion for *name* as JSON."""
    image: bytes | None = None
    if image_path is not None:
        try:
            image = Path(image_path).read_bytes()
        except OSError as exc:
            _err.print(f"[red]Cannot read image: {escape(str(exc))}[/red]")
            return 2

    try:
        enricher = ProductEnricher.from_config(load_config())
        suggestion = await enricher.enrich(name, image)
    except (MissingConfig, EnrichmentError) as exc:
        _err.print(f"[red]{escape(str(exc))}[/red]")
        return 1

    json.dump(suggestion.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0
