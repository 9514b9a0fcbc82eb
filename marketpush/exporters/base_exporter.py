# marketpush/exporters/base_exporter.py

"""Abstract base class for all marketplace exporters."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from curl_cffi import requests as curl_requests

from marketpush.config.settings import Settings
from marketpush.errors import MarketplaceError
from marketpush.filters.payload_validator import ensure_public_image_url
from marketpush.models.export_outcome import JSONValue
from marketpush.models.product import Product


@dataclass
class ExportRequest:
    """A fully built marketplace request, ready to be sent."""

    url: str
    payload: dict[str, Any]
    headers: dict[str, str] = field(
        default_factory=lambda: dict[str, str]()
    )
    params: dict[str, str] = field(
        default_factory=lambda: dict[str, str]()
    )


class BaseExporter(ABC):
    """Translate a Product into one marketplace request and send it.

    Subclasses only build the request.  Sending it, mapping the HTTP
    status and reading diagnostics is shared here.  Each call makes a
    single attempt; there is no retry.
    """

    marketplace_id: str = ""
    label: str = ""

    def __init__(
        self,
        config: Mapping[str, str],
        session: curl_requests.AsyncSession,
    ) -> None:
        self.config = config
        self.session = session
        self.settings = Settings()
        self.logger = logging.getLogger(
            f"marketpush.{self.marketplace_id}"
        )

    @abstractmethod
    def build_request(self, product: Product) -> ExportRequest:
        """Validate *product* and build the marketplace request.

        Must not touch the network.  Raises MissingConfig, InvalidImage
        or InvalidPrice on bad input.
        """
        ...

    async def export(self, product: Product) -> JSONValue:
        """Create a listing for *product* and return the response JSON.

        Raises:
            MarketplaceError: on a non-success HTTP status.
        """
        request = self.build_request(product)
        self.logger.info(
            "[%s] Exporting '%s' (id=%s)",
            self.marketplace_id,
            product.name,
            product.id,
        )
        resp = await self.session.post(
            request.url,
            headers=request.headers,
            params=request.params or None,
            json=request.payload,
        )

        if not 200 <= resp.status_code < 300:
            body = self._read_error_body(resp)
            self.logger.warning(
                "[%s] HTTP %d for '%s': %s",
                self.marketplace_id,
                resp.status_code,
                product.name,
                body,
            )
            raise MarketplaceError(
                self.label,
                resp.status_code,
                resp.reason or "",
                body,
            )

        self.logger.info(
            "[%s] '%s' exported (HTTP %d)",
            self.marketplace_id,
            product.name,
            resp.status_code,
        )
        return resp.json()

    def _read_error_body(self, resp: curl_requests.Response) -> Any:
        """Best-effort diagnostic body: JSON, then text, else None."""
        content_type = resp.headers.get("content-type") or ""
        try:
            if "json" in content_type.lower():
                return resp.json()
            return resp.text
        except Exception:
            self.logger.debug(
                "[%s] Could not read error body",
                self.marketplace_id,
                exc_info=True,
            )
            return None

    @staticmethod
    def image_url(product: Product) -> str | None:
        """Public URL of the product image, or None when there is none."""
        if not product.image or not product.image.strip():
            return None
        return ensure_public_image_url(product.image)
