# marketpush/models/export_outcome.py

"""Per-product export outcome and the tagged result stored per marketplace."""

from dataclasses import dataclass, field
from typing import Any

from marketpush.errors import MarketplaceError

# Raw JSON as returned by a marketplace API
JSONValue = Any


@dataclass(frozen=True)
class Ok:
    """Successful marketplace call holding the parsed response body."""

    value: JSONValue

    @property
    def is_ok(self) -> bool:
        return True

    def to_dict(self) -> JSONValue:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed marketplace call holding the captured exception."""

    error: BaseException

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"error": self.message}
        if isinstance(self.error, MarketplaceError):
            data["status"] = self.error.status
            if self.error.body is not None:
                data["body"] = self.error.body
        return data


ExportResult = Ok | Err


@dataclass
class ExportOutcome:
    """Result of exporting one product to every marketplace."""

    product: str
    results: dict[str, ExportResult] = field(
        default_factory=lambda: dict[str, ExportResult]()
    )

    @property
    def ml(self) -> ExportResult | None:
        return self.results.get("ml")

    @property
    def shopee(self) -> ExportResult | None:
        return self.results.get("shopee")

    @property
    def succeeded(self) -> bool:
        """True when every marketplace slot is an ``Ok``."""
        return all(r.is_ok for r in self.results.values())

    @property
    def failed_marketplaces(self) -> list[str]:
        return [
            mp_id
            for mp_id, r in self.results.items()
            if not r.is_ok
        ]

    def to_dict(self) -> dict[str, Any]:
        """Render as ``{product, <marketplace id>: value | {error}}``."""
        data: dict[str, Any] = {"product": self.product}
        for mp_id, result in self.results.items():
            data[mp_id] = result.to_dict()
        return data
