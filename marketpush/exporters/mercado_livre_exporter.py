# marketpush/exporters/mercado_livre_exporter.py

"""Exporter for Mercado Livre (api.mercadolibre.com)."""

from marketpush.exporters.base_exporter import BaseExporter, ExportRequest
from marketpush.filters.category_mapper import map_category
from marketpush.filters.payload_validator import (
    clamp_text,
    parse_price,
    require_config,
)
from marketpush.models.product import Product


class MercadoLivreExporter(BaseExporter):
    """Exporter for Mercado Livre (api.mercadolibre.com)."""

    marketplace_id = "ml"
    label = "Mercado Livre"

    def build_request(self, product: Product) -> ExportRequest:
        """Build the item-creation request with bearer auth."""
        token = require_config(
            self.config, self.settings.MERCADO_LIVRE_TOKEN_KEY
        )
        image_url = self.image_url(product)

        payload = {
            "title": product.name,
            "category_id": map_category(
                product.category, self.marketplace_id
            ),
            "price": parse_price(product.price),
            "currency_id": self.settings.MERCADO_LIVRE_CURRENCY_ID,
            "available_quantity": self.settings.AVAILABLE_QUANTITY,
            "condition": self.settings.MERCADO_LIVRE_CONDITION,
            "listing_type_id": (
                self.settings.MERCADO_LIVRE_LISTING_TYPE_ID
            ),
            "description": {
                "plain_text": clamp_text(
                    product.description,
                    self.settings.MERCADO_LIVRE_DESCRIPTION_MAX,
                ),
            },
            "pictures": (
                [{"source": image_url}] if image_url else []
            ),
        }

        return ExportRequest(
            url=self.settings.MERCADO_LIVRE_ENDPOINT,
            payload=payload,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
        )
