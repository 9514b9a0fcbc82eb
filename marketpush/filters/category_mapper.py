# marketpush/filters/category_mapper.py

"""Free-text category label to marketplace category id.

No taxonomy mapping exists yet: every label resolves to the fixed
placeholder category of the marketplace.
"""

import logging

from marketpush.config.settings import Settings

logger = logging.getLogger("marketpush.filters")

_PLACEHOLDER_CATEGORIES: dict[str, str | int] = {
    "ml": Settings.MERCADO_LIVRE_CATEGORY_ID,
    "shopee": Settings.SHOPEE_CATEGORY_ID,
}


def map_category(label: str, marketplace_id: str) -> str | int:
    """Return the marketplace category id for *label*.

    Always the placeholder for *marketplace_id*; the label is only
    logged.
    """
    category_id = _PLACEHOLDER_CATEGORIES[marketplace_id]
    logger.debug(
        "Category '%s' not mapped for %s, using placeholder %s",
        label,
        marketplace_id,
        category_id,
    )
    return category_id
