# marketpush/ui/app.py

"""Terminal UI: product form, session inventory and marketplace export."""

import logging
from collections.abc import Mapping
from typing import cast

from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Static,
)

from marketpush.config.settings import Settings, load_config
from marketpush.errors import EnrichmentError, MissingConfig
from marketpush.models.export_outcome import ExportOutcome, ExportResult
from marketpush.models.product import Product
from marketpush.services.enrichment import (
    ProductEnricher,
    load_enrichment_image,
)
from marketpush.services.export_orchestrator import ExportOrchestrator
from marketpush.storage.file_manager import FileManager
from marketpush.storage.inventory import Inventory

logger = logging.getLogger("marketpush.ui")

_FORM_INPUTS: tuple[str, ...] = (
    "#name_input",
    "#image_input",
    "#description_input",
    "#category_input",
    "#price_input",
)


def _slot_text(result: ExportResult | None) -> Text:
    if result is None:
        return Text("—", style="dim")
    if result.is_ok:
        return Text("✓ exported", style="bold green")
    return Text(f"✗ {result.to_dict()['error']}", style="red")


class MarketpushApp(App[object]):
    """Terminal UI for building an inventory and exporting it."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+e", "export", "Export", priority=True),
        Binding("ctrl+d", "remove_selected", "Remove"),
    ]

    def __init__(
        self,
        config: Mapping[str, str] | None = None,
        orchestrator: ExportOrchestrator | None = None,
        enricher: ProductEnricher | None = None,
    ) -> None:
        super().__init__()
        self.config = config if config is not None else load_config()
        self.settings = Settings()
        self.inventory = Inventory()
        self.outcomes: list[ExportOutcome] = []
        self.orchestrator = orchestrator or ExportOrchestrator(self.config)
        self._enricher = enricher

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        marketplace_names = ", ".join(
            mp["label"] for mp in self.settings.AVAILABLE_MARKETPLACES
        )

        yield Header()
        yield Container(
            Static(
                f"🛍 Marketpush ({marketplace_names})", id="title"
            ),

            # Product form
            Horizontal(
                Input(placeholder="Product name", id="name_input"),
                Input(
                    placeholder="Image URL or local file",
                    id="image_input",
                ),
                id="identity_row",
            ),
            Input(placeholder="Description", id="description_input"),
            Horizontal(
                Input(placeholder="Category", id="category_input"),
                Input(placeholder="Price (BRL)", id="price_input"),
                id="pricing_row",
            ),
            Horizontal(
                Button("✨ Enrich with AI", id="enrich_btn"),
                Button(
                    "Add to inventory", variant="primary", id="add_btn"
                ),
                Button(
                    "Export to marketplaces",
                    variant="success",
                    id="export_btn",
                ),
                id="actions",
            ),

            Static("Ready", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="inventory_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            cast(
                DataTable[str | Text],
                DataTable(id="results_table", zebra_stripes=True),
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure table columns on startup."""
        inventory_table = cast(
            DataTable[str | Text],
            self.query_one("#inventory_table", DataTable),
        )
        inventory_table.add_columns("Name", "Price", "Category", "Image")

        results_table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        results_table.add_columns(
            "Product",
            *(mp["label"] for mp in self.settings.AVAILABLE_MARKETPLACES),
        )

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        if event.button.id == "enrich_btn":
            await self.perform_enrich()
        elif event.button.id == "add_btn":
            self.add_to_inventory()
        elif event.button.id == "export_btn":
            await self.perform_export()

    # ── Form helpers ─────────────────────────────────────

    def _value(self, selector: str) -> str:
        return self.query_one(selector, Input).value.strip()

    def _clear_form(self) -> None:
        for selector in _FORM_INPUTS:
            self.query_one(selector, Input).value = ""

    def _get_enricher(self) -> ProductEnricher:
        if self._enricher is None:
            self._enricher = ProductEnricher.from_config(self.config)
        return self._enricher

    # ── Enrichment ───────────────────────────────────────

    async def perform_enrich(self) -> None:
        """Fill description, category and price from the AI model."""
        name = self._value("#name_input")
        if not name:
            self.notify(
                "Enter the product name first", severity="warning"
            )
            return

        status = self.query_one("#status", Static)
        status.update(Text(f"✨ Enriching '{name}'..."))
        try:
            image = load_enrichment_image(self._value("#image_input"))
        except OSError as exc:
            logger.error("Cannot read image for '%s': %s", name, exc)
            status.update("❌ Cannot read image")
            self.notify(
                f"Cannot read image: {escape(str(exc))}", severity="error"
            )
            return

        try:
            suggestion = await self._get_enricher().enrich(name, image)
        except (MissingConfig, EnrichmentError) as exc:
            logger.error("Enrichment failed for '%s': %s", name, exc)
            status.update("❌ Enrichment failed")
            self.notify(
                f"AI enrichment failed: {escape(str(exc))}", severity="error"
            )
            return

        self.query_one("#description_input", Input).value = (
            suggestion.description
        )
        self.query_one("#category_input", Input).value = (
            suggestion.category
        )
        self.query_one("#price_input", Input).value = (
            f"{suggestion.suggested_price:.2f}"
        )
        status.update(Text(f"✅ Suggestion ready for '{name}'"))

    # ── Inventory ────────────────────────────────────────

    def add_to_inventory(self) -> None:
        """Create a Product from the form and append it."""
        name = self._value("#name_input")
        description = self._value("#description_input")
        if not name or not description:
            self.notify(
                "Fill in at least the name and the description",
                severity="warning",
            )
            return

        product = Product(
            name=name,
            description=description,
            category=self._value("#category_input"),
            price=self._value("#price_input"),
            image=self._value("#image_input") or None,
        )
        self.inventory.add(product)
        self._clear_form()
        self.populate_inventory()
        self.query_one("#status", Static).update(
            f"📦 {len(self.inventory)} products in inventory"
        )

    def remove_product(self, product_id: str) -> None:
        if self.inventory.remove(product_id):
            self.populate_inventory()

    def action_remove_selected(self) -> None:
        """Remove the product under the inventory table cursor."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#inventory_table", DataTable),
        )
        products = self.inventory.snapshot()
        row = table.cursor_row
        if 0 <= row < len(products):
            self.remove_product(products[row].id)

    def populate_inventory(self) -> None:
        """Fill the inventory table from the current inventory."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#inventory_table", DataTable),
        )
        table.clear()
        for p in self.inventory:
            table.add_row(
                Text(p.name[:60]),
                Text(p.price or "—"),
                Text(p.category or "—"),
                "🖼" if p.image else "",
                key=p.id,
            )

    # ── Export ───────────────────────────────────────────

    async def action_export(self) -> None:
        await self.perform_export()

    async def perform_export(self) -> None:
        """Export the whole inventory and show one row per product."""
        products = self.inventory.snapshot()
        if not products:
            self.notify(
                "Add products before exporting", severity="warning"
            )
            return

        status = self.query_one("#status", Static)
        status.update(f"🚀 Exporting {len(products)} products...")

        self.outcomes = await self.orchestrator.export_all(products)
        self.populate_results()
        self._auto_save_report()

        failed = [o for o in self.outcomes if not o.succeeded]
        if failed:
            status.update(
                f"⚠️ {len(failed)} of {len(self.outcomes)} products "
                "had failures"
            )
            self.notify(
                "Some exports failed, see the results table",
                severity="error",
            )
        else:
            status.update(
                f"✅ Exported {len(self.outcomes)} products"
            )

    def populate_results(self) -> None:
        """Fill the results table with the last export outcomes."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.clear()
        for outcome in self.outcomes:
            table.add_row(
                Text(outcome.product[:60]),
                *(
                    _slot_text(outcome.results.get(mp["id"]))
                    for mp in self.settings.AVAILABLE_MARKETPLACES
                ),
            )

    def _auto_save_report(self) -> None:
        """Save the export report after every export."""
        try:
            path = FileManager().save_outcomes(self.outcomes)
            logger.info("Auto-saved export report to %s", path)
        except OSError as e:
            logger.error("Auto-save failed: %s", e, exc_info=True)
            self.notify(
                f"Auto-save failed: {escape(str(e))}", severity="error"
            )
