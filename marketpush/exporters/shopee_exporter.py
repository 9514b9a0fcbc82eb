# marketpush/exporters/shopee_exporter.py

"""Exporter for Shopee Open Platform (v2 product.add_item)."""

from marketpush.exporters.base_exporter import BaseExporter, ExportRequest
from marketpush.filters.category_mapper import map_category
from marketpush.filters.payload_validator import (
    clamp_text,
    parse_price,
    require_config,
)
from marketpush.models.product import Product


class ShopeeExporter(BaseExporter):
    """Exporter for Shopee Open Platform (v2 product.add_item).

    Known gaps: requests are not signed (no timestamp, access_token or
    sign parameters), and images are not uploaded to Shopee's media
    space, so ``image_id_list`` is always empty.
    """

    marketplace_id = "shopee"
    label = "Shopee"

    def build_request(self, product: Product) -> ExportRequest:
        """Build the add_item request, partner id as query parameter."""
        partner_id = require_config(
            self.config, self.settings.SHOPEE_PARTNER_KEY
        )
        # Validated even though not sent: inline data is never accepted
        if self.image_url(product):
            self.logger.debug(
                "[shopee] Image upload not implemented, "
                "sending empty image_id_list for '%s'",
                product.name,
            )

        payload = {
            "item_name": product.name,
            "description": clamp_text(
                product.description,
                self.settings.SHOPEE_DESCRIPTION_MAX,
            ),
            "category_id": map_category(
                product.category, self.marketplace_id
            ),
            "brand": {"brand_id": self.settings.SHOPEE_BRAND_ID},
            "original_price": parse_price(product.price),
            "stock_info_v2": {
                "summary_info": {
                    "total_reserved_stock": 0,
                    "total_available_stock": (
                        self.settings.AVAILABLE_QUANTITY
                    ),
                },
            },
            "image": {"image_id_list": []},
        }

        return ExportRequest(
            url=self.settings.SHOPEE_ENDPOINT,
            payload=payload,
            headers={"Content-Type": "application/json"},
            params={"partner_id": partner_id},
        )
