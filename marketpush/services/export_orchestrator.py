# marketpush/services/export_orchestrator.py

"""Fans an inventory out to every marketplace and collects outcomes."""

import asyncio
import importlib
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from curl_cffi import requests as curl_requests

from marketpush.config.settings import Settings
from marketpush.exporters.base_exporter import BaseExporter
from marketpush.models.export_outcome import (
    Err,
    ExportOutcome,
    ExportResult,
    Ok,
)
from marketpush.models.product import Product

logger = logging.getLogger("marketpush.orchestrator")


def _load_exporter_class(dotted_path: str) -> type[Any]:
    """Dynamically import an exporter class from its dotted module path."""
    module_path, class_name = dotted_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls: type[Any] = getattr(module, class_name)
    return cls


class ExportOrchestrator:
    """Exports a batch of products to all registered marketplaces.

    Every (product, marketplace) call runs concurrently.  A failing
    call only fills its own slot with an ``Err``; the batch always
    yields one outcome per product, in input order.
    """

    def __init__(
        self,
        config: Mapping[str, str],
        session: curl_requests.AsyncSession | None = None,
        marketplaces: list[dict[str, str]] | None = None,
    ) -> None:
        self.config = config
        self._session = session
        self.marketplaces = (
            marketplaces
            if marketplaces is not None
            else Settings.AVAILABLE_MARKETPLACES
        )

    # ── Private helpers ──────────────────────────────────

    def _build_exporters(
        self, session: curl_requests.AsyncSession,
    ) -> list[tuple[str, BaseExporter]]:
        exporters: list[tuple[str, BaseExporter]] = []
        for mp in self.marketplaces:
            exporter_cls = _load_exporter_class(mp["exporter"])
            exporters.append(
                (mp["id"], exporter_cls(self.config, session))
            )
        return exporters

    async def _export_product(
        self,
        product: Product,
        exporters: list[tuple[str, BaseExporter]],
    ) -> ExportOutcome:
        """Run every exporter for one product, capturing failures."""
        results = await asyncio.gather(
            *(exporter.export(product) for _, exporter in exporters),
            return_exceptions=True,
        )

        outcome = ExportOutcome(product=product.name)
        for (mp_id, _), result in zip(exporters, results):
            slot: ExportResult
            if isinstance(result, BaseException):
                logger.error(
                    "Export of '%s' to %s failed: %s",
                    product.name,
                    mp_id,
                    result,
                    exc_info=result,
                )
                slot = Err(result)
            else:
                slot = Ok(result)
            outcome.results[mp_id] = slot
        return outcome

    async def _export_with(
        self,
        products: Sequence[Product],
        session: curl_requests.AsyncSession,
    ) -> list[ExportOutcome]:
        exporters = self._build_exporters(session)
        outcomes: list[ExportOutcome] = list(
            await asyncio.gather(
                *(
                    self._export_product(p, exporters)
                    for p in products
                )
            )
        )
        return outcomes

    # ── Public API ───────────────────────────────────────

    async def export_all(
        self, products: Sequence[Product],
    ) -> list[ExportOutcome]:
        """Export every product and return outcomes in input order."""
        snapshot = tuple(products)
        if not snapshot:
            return []

        logger.info(
            "Exporting %d products to %s",
            len(snapshot),
            ", ".join(mp["id"] for mp in self.marketplaces),
        )

        if self._session is not None:
            outcomes = await self._export_with(snapshot, self._session)
        else:
            async with curl_requests.AsyncSession() as session:
                outcomes = await self._export_with(snapshot, session)

        failed = sum(1 for o in outcomes if not o.succeeded)
        logger.info(
            "Export finished: %d ok, %d with failures",
            len(outcomes) - failed,
            failed,
        )
        return outcomes
