# marketpush/storage/inventory.py

"""Session-only, insertion-ordered product inventory."""

import logging
from collections.abc import Iterator

from marketpush.models.product import Product

logger = logging.getLogger("marketpush.inventory")


class Inventory:
    """Ordered list of products for the current session.

    Nothing is persisted.  Exports receive :meth:`snapshot`, never the
    live list.
    """

    def __init__(self) -> None:
        self._products: list[Product] = []

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self.snapshot())

    def add(self, product: Product) -> Product:
        """Append *product*; ids must be unique within the session."""
        if any(p.id == product.id for p in self._products):
            msg = f"Product id {product.id} is already in the inventory"
            raise ValueError(msg)
        self._products.append(product)
        logger.info(
            "Added '%s' (id=%s), %d in inventory",
            product.name,
            product.id,
            len(self._products),
        )
        return product

    def remove(self, product_id: str) -> bool:
        """Remove the product with *product_id*; False if not present."""
        for idx, product in enumerate(self._products):
            if product.id == product_id:
                del self._products[idx]
                logger.info(
                    "Removed '%s' (id=%s)", product.name, product_id
                )
                return True
        return False

    def get(self, product_id: str) -> Product | None:
        return next(
            (p for p in self._products if p.id == product_id), None
        )

    def clear(self) -> None:
        self._products.clear()

    def snapshot(self) -> tuple[Product, ...]:
        """Immutable copy of the current products, in insertion order."""
        return tuple(self._products)
