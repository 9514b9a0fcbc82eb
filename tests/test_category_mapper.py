# tests/test_category_mapper.py

"""Tests for the placeholder category mapping."""

import unittest

from marketpush.config.settings import Settings
from marketpush.filters.category_mapper import map_category


class TestMapCategory(unittest.TestCase):
    """Every label resolves to the marketplace placeholder."""

    def test_mercado_livre_placeholder(self) -> None:
        """Any label maps to the fixed Mercado Livre category."""
        for label in ("Eletrônicos", "", "Casa > Cozinha"):
            with self.subTest(label=label):
                self.assertEqual(
                    map_category(label, "ml"),
                    Settings.MERCADO_LIVRE_CATEGORY_ID,
                )

    def test_shopee_placeholder(self) -> None:
        """Any label maps to the fixed Shopee category."""
        self.assertEqual(
            map_category("Beleza", "shopee"), Settings.SHOPEE_CATEGORY_ID
        )

    def test_label_never_used_as_id(self) -> None:
        """The free-text label is not passed through."""
        self.assertNotEqual(map_category("MLB9999", "ml"), "MLB9999")

    def test_unknown_marketplace_raises(self) -> None:
        with self.assertRaises(KeyError):
            map_category("x", "amazon")


if __name__ == "__main__":
    unittest.main()
