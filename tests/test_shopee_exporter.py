# tests/test_shopee_exporter.py

"""Tests for the Shopee exporter."""

import unittest
from typing import Any
from unittest.mock import AsyncMock, MagicMock

from marketpush.config.settings import Settings
from marketpush.errors import InvalidImage, MarketplaceError, MissingConfig
from marketpush.exporters.shopee_exporter import ShopeeExporter
from marketpush.models.product import Product

CONFIG = {"SHOPEE_PARTNER_ID": "2001234"}


def _response(status: int, body: Any = None, reason: str = "") -> MagicMock:
    """Build a stand-in for a curl_cffi Response."""
    resp = MagicMock()
    resp.status_code = status
    resp.reason = reason
    resp.headers = {"content-type": "application/json; charset=utf-8"}
    resp.json.return_value = body
    return resp


def _session(resp: MagicMock) -> MagicMock:
    session = MagicMock()
    session.post = AsyncMock(return_value=resp)
    return session


def _product(**overrides: Any) -> Product:
    fields: dict[str, Any] = {
        "name": "Garrafa Térmica",
        "description": "Mantém a temperatura por 12 horas",
        "category": "Casa",
        "price": "89,90",
        "image": "https://cdn.example.com/garrafa.jpg",
    }
    fields.update(overrides)
    return Product(**fields)


class TestBuildRequest(unittest.TestCase):
    """Request body and query parameters for add_item."""

    def setUp(self) -> None:
        self.exporter = ShopeeExporter(CONFIG, MagicMock())

    def test_partner_id_query_parameter(self) -> None:
        """partner_id travels as the only query parameter."""
        request = self.exporter.build_request(_product())
        self.assertEqual(request.url, Settings.SHOPEE_ENDPOINT)
        self.assertEqual(request.params, {"partner_id": "2001234"})

    def test_request_is_not_signed(self) -> None:
        """No timestamp/sign/access_token are attached."""
        request = self.exporter.build_request(_product())
        for key in ("sign", "timestamp", "access_token"):
            self.assertNotIn(key, request.params)
        self.assertNotIn("Authorization", request.headers)

    def test_payload_fields(self) -> None:
        payload = self.exporter.build_request(_product()).payload
        self.assertEqual(payload["item_name"], "Garrafa Térmica")
        self.assertEqual(payload["original_price"], 89.9)
        self.assertEqual(
            payload["category_id"], Settings.SHOPEE_CATEGORY_ID
        )
        self.assertEqual(payload["brand"], {"brand_id": 0})
        self.assertEqual(
            payload["stock_info_v2"]["summary_info"],
            {"total_reserved_stock": 0, "total_available_stock": 1},
        )

    def test_image_id_list_always_empty(self) -> None:
        """Images are not uploaded, even with a valid URL."""
        payload = self.exporter.build_request(_product()).payload
        self.assertEqual(payload["image"], {"image_id_list": []})

    def test_description_clamped_to_3000(self) -> None:
        payload = self.exporter.build_request(
            _product(description="x" * 3500)
        ).payload
        self.assertEqual(len(payload["description"]), 3000)
        self.assertTrue(payload["description"].endswith("..."))

    def test_inline_image_rejected(self) -> None:
        with self.assertRaises(InvalidImage):
            self.exporter.build_request(
                _product(image="data:image/png;base64,iVBORw0KGgo=")
            )


class TestExport(unittest.IsolatedAsyncioTestCase):
    """HTTP behaviour of ShopeeExporter.export."""

    async def test_success_returns_body(self) -> None:
        body = {"response": {"item_id": 987}, "error": ""}
        session = _session(_response(200, body, "OK"))
        result = await ShopeeExporter(CONFIG, session).export(_product())
        self.assertEqual(result, body)
        _, kwargs = session.post.call_args
        self.assertEqual(kwargs["params"], {"partner_id": "2001234"})

    async def test_http_error_raises(self) -> None:
        body = {"error": "error_auth", "message": "Invalid sign"}
        session = _session(_response(403, body, "Forbidden"))
        with self.assertRaises(MarketplaceError) as ctx:
            await ShopeeExporter(CONFIG, session).export(_product())
        self.assertEqual(ctx.exception.status, 403)
        self.assertEqual(ctx.exception.body, body)
        self.assertIn("Shopee", str(ctx.exception))

    async def test_missing_partner_id_makes_no_request(self) -> None:
        session = _session(_response(200, {}))
        with self.assertRaises(MissingConfig) as ctx:
            await ShopeeExporter({}, session).export(_product())
        self.assertIn("SHOPEE_PARTNER_ID", str(ctx.exception))
        session.post.assert_not_called()

    async def test_inline_image_makes_no_request(self) -> None:
        session = _session(_response(200, {}))
        with self.assertRaises(InvalidImage):
            await ShopeeExporter(CONFIG, session).export(
                _product(image="data:image/jpeg;base64,/9j/4AAQ")
            )
        session.post.assert_not_called()


if __name__ == "__main__":
    unittest.main()
