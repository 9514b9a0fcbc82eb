# marketpush/models/product.py

"""Product data model shared by the inventory, enrichment and exporters."""

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any


def _new_id() -> str:
    return uuid.uuid4().hex[:9]


@dataclass(frozen=True)
class Product:
    """A single product entered by the seller.

    ``image`` is either an inline ``data:`` URI (from a local upload)
    or a public http(s) URL.  Only the latter can be sent to a
    marketplace.  ``category`` is a free human label and is never used
    as a marketplace category id.
    """

    name: str
    description: str = ""
    category: str = ""
    price: str = ""
    image: str | None = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            msg = "Product name must not be empty"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a Product from a loosely typed mapping (e.g. JSON)."""
        price = data.get("price", "")
        kwargs: dict[str, Any] = {
            "name": str(data.get("name", "")),
            "description": str(data.get("description") or ""),
            "category": str(data.get("category") or ""),
            "price": "" if price is None else str(price),
            "image": data.get("image") or None,
        }
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict."""
        return asdict(self)
