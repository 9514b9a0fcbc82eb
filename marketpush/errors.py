# marketpush/errors.py

"""Exception taxonomy for export and enrichment failures."""

from typing import Any


class MarketpushError(Exception):
    """Base class for every error raised by marketpush."""


class MissingConfig(MarketpushError):
    """A required credential or identifier is absent or empty."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing required configuration: {name}")
        self.name = name


class InvalidImage(MarketpushError):
    """Image reference is inline data or not a public http(s) URL."""


class InvalidPrice(MarketpushError):
    """Price text does not parse to a non-negative number."""


class MarketplaceError(MarketpushError):
    """A marketplace answered with a non-success HTTP status."""

    def __init__(
        self,
        marketplace: str,
        status: int,
        status_text: str,
        body: Any = None,
    ) -> None:
        super().__init__(
            f"{marketplace} returned HTTP {status} {status_text}".rstrip()
        )
        self.marketplace = marketplace
        self.status = status
        self.status_text = status_text
        self.body = body


class EnrichmentError(MarketpushError):
    """The AI enrichment call failed or returned unusable content."""
