# marketpush/filters/payload_validator.py

"""Payload checks applied before any marketplace request is sent."""

import logging
import math
from collections.abc import Mapping
from urllib.parse import urlsplit

from marketpush.errors import InvalidImage, InvalidPrice, MissingConfig

logger = logging.getLogger("marketpush.filters")

TRUNCATION_MARKER = "..."

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def ensure_public_image_url(image: str) -> str:
    """Return the trimmed URL if *image* is a public http(s) URL.

    Raises:
        InvalidImage: for inline ``data:`` images, malformed URLs and
            any scheme other than http/https.
    """
    url = (image or "").strip()
    if url[:5].lower() == "data:":
        msg = "Inline image data cannot be sent; provide a public URL"
        raise InvalidImage(msg)

    if not url or any(ch.isspace() for ch in url):
        msg = f"Image is not a valid URL: {url[:80]!r}"
        raise InvalidImage(msg)

    try:
        parts = urlsplit(url)
    except ValueError as exc:
        msg = f"Image is not a valid URL: {url[:80]!r}"
        raise InvalidImage(msg) from exc

    if not parts.scheme or not parts.netloc:
        msg = f"Image is not a valid URL: {url[:80]!r}"
        raise InvalidImage(msg)

    if parts.scheme.lower() not in _ALLOWED_SCHEMES:
        msg = (
            f"Image URL scheme '{parts.scheme}' is not allowed "
            "(http/https only)"
        )
        raise InvalidImage(msg)

    return url


def clamp_text(text: str | None, max_length: int) -> str:
    """Trim *text* and cut it to *max_length* with a ``...`` marker."""
    cleaned = (text or "").strip()
    if len(cleaned) <= max_length:
        return cleaned
    logger.debug(
        "Clamped text from %d to %d characters",
        len(cleaned),
        max_length,
    )
    if max_length < len(TRUNCATION_MARKER):
        return cleaned[:max(max_length, 0)]
    keep = max_length - len(TRUNCATION_MARKER)
    return cleaned[:keep] + TRUNCATION_MARKER


def require_config(config: Mapping[str, str], name: str) -> str:
    """Look up a required configuration value.

    Raises:
        MissingConfig: if *name* is absent or blank.
    """
    value = config.get(name)
    if value is None or not str(value).strip():
        logger.warning("Required configuration %s is not set", name)
        raise MissingConfig(name)
    return str(value).strip()


def parse_price(text: str | None) -> float:
    """Parse a textual price such as ``"19.90"`` or ``"19,90"``.

    Raises:
        InvalidPrice: if the text is empty, not numeric, negative or
            not finite.
    """
    raw = (text or "").strip()
    if "," in raw and "." not in raw:
        raw = raw.replace(",", ".")
    try:
        price = float(raw)
    except ValueError as exc:
        msg = f"Price is not a number: {text!r}"
        raise InvalidPrice(msg) from exc

    if not math.isfinite(price) or price < 0:
        msg = f"Price must be a non-negative number: {text!r}"
        raise InvalidPrice(msg)
    return price
