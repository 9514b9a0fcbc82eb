# marketpush/config/settings.py

"""Central configuration for marketpush."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for marketpush."""

    # --- Credentials (environment keys, values are never logged) ---
    MERCADO_LIVRE_TOKEN_KEY: str = "MERCADO_LIVRE_ACCESS_TOKEN"
    SHOPEE_PARTNER_KEY: str = "SHOPEE_PARTNER_ID"
    GEMINI_API_KEY_KEY: str = "GEMINI_API_KEY"
    CONFIG_KEYS: list[str] = [
        MERCADO_LIVRE_TOKEN_KEY,
        SHOPEE_PARTNER_KEY,
        GEMINI_API_KEY_KEY,
    ]

    # --- Mercado Livre ---
    MERCADO_LIVRE_ENDPOINT: str = "https://api.mercadolibre.com/items"
    MERCADO_LIVRE_CATEGORY_ID: str = "MLB1234"   # Placeholder, no mapping
    MERCADO_LIVRE_CURRENCY_ID: str = "BRL"
    MERCADO_LIVRE_LISTING_TYPE_ID: str = "gold_special"
    MERCADO_LIVRE_CONDITION: str = "new"
    MERCADO_LIVRE_DESCRIPTION_MAX: int = 4000

    # --- Shopee ---
    SHOPEE_ENDPOINT: str = (
        "https://partner.shopeemobile.com/api/v2/product/add_item"
    )
    SHOPEE_CATEGORY_ID: int = 100001             # Placeholder, no mapping
    SHOPEE_BRAND_ID: int = 0
    SHOPEE_DESCRIPTION_MAX: int = 3000

    # --- Listing defaults ---
    AVAILABLE_QUANTITY: int = 1

    # --- Enrichment ---
    GEMINI_MODEL: str = "gemini-3-flash-preview"
    ENRICHMENT_IMAGE_MIME: str = "image/jpeg"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Marketplaces (registry, order defines outcome slot order) ---
    AVAILABLE_MARKETPLACES: list[dict[str, str]] = [
        {
            "id": "ml",
            "label": "Mercado Livre",
            "exporter": (
                "marketpush.exporters.mercado_livre_exporter"
                ".MercadoLivreExporter"
            ),
        },
        {
            "id": "shopee",
            "label": "Shopee",
            "exporter": (
                "marketpush.exporters.shopee_exporter.ShopeeExporter"
            ),
        },
    ]


def load_config() -> dict[str, str]:
    """Snapshot the configuration keys present in the environment.

    The returned dict is injected into exporters and the enricher so
    nothing reads ``os.environ`` at call time.
    """
    return {
        key: os.environ[key]
        for key in Settings.CONFIG_KEYS
        if key in os.environ
    }
