# marketpush/services/enrichment.py

"""AI auto-fill of description, category and price for one product."""

import base64
import binascii
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from google import genai
from google.genai import types

from marketpush.config.settings import Settings
from marketpush.errors import EnrichmentError
from marketpush.filters.payload_validator import require_config

logger = logging.getLogger("marketpush.enrichment")

_PROMPT_TEMPLATE = """Você é um especialista em e-commerce.
Com base no nome do produto: "{name}" {image_hint}
por favor, forneça:
1. Uma descrição atraente e detalhada para o Mercado Livre.
2. Uma categoria apropriada.
3. Um preço sugerido em Reais (apenas o número).

Retorne APENAS um objeto JSON válido no seguinte formato:
{{
  "description": "...",
  "category": "...",
  "suggestedPrice": 0.00
}}"""


@dataclass(frozen=True)
class EnrichmentSuggestion:
    """Model-suggested values for the product form."""

    description: str
    category: str
    suggested_price: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "category": self.category,
            "suggestedPrice": self.suggested_price,
        }


def build_prompt(name: str, has_image: bool) -> str:
    image_hint = "e na imagem fornecida," if has_image else ""
    return _PROMPT_TEMPLATE.format(name=name, image_hint=image_hint)


def extract_json_object(text: str) -> str:
    """Return the first balanced ``{...}`` region of *text*.

    Braces inside JSON strings are ignored.

    Raises:
        EnrichmentError: if no balanced object is found.
    """
    start = text.find("{")
    if start == -1:
        msg = "Model response contains no JSON object"
        raise EnrichmentError(msg)

    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        ch = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:idx + 1]

    msg = "Model response contains an unbalanced JSON object"
    raise EnrichmentError(msg)


def parse_suggestion(text: str) -> EnrichmentSuggestion:
    """Parse the model answer into an EnrichmentSuggestion."""
    try:
        data = json.loads(extract_json_object(text))
    except json.JSONDecodeError as exc:
        msg = f"Model response is not valid JSON: {exc}"
        raise EnrichmentError(msg) from exc

    description = data.get("description")
    category = data.get("category")
    price = data.get("suggestedPrice")
    if not isinstance(description, str) or not isinstance(category, str):
        msg = "Model response lacks description/category strings"
        raise EnrichmentError(msg)
    # bool is an int subclass, reject it explicitly
    if isinstance(price, bool) or not isinstance(price, int | float):
        msg = f"Model suggestedPrice is not a number: {price!r}"
        raise EnrichmentError(msg)

    return EnrichmentSuggestion(
        description=description.strip(),
        category=category.strip(),
        suggested_price=float(price),
    )


def decode_inline_image(image: str | None) -> bytes | None:
    """Decode a ``data:...;base64,`` URI to raw bytes.

    Anything else (URLs, None, plain text) yields None; remote images
    are not downloaded.
    """
    if not image or not image.startswith("data:"):
        return None
    header, _, payload = image.partition(",")
    if ";base64" not in header or not payload:
        return None
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Inline image is not valid base64, ignoring it")
        return None


def load_enrichment_image(value: str | None) -> bytes | None:
    """Resolve the form's image field to bytes for the model.

    Accepts a ``data:`` URI or a path to a local file. Remote URLs and
    paths that are not files yield None.

    Raises:
        OSError: if the local file exists but cannot be read.
    """
    if not value or not value.strip():
        return None
    value = value.strip()
    if value.startswith("data:"):
        return decode_inline_image(value)
    if urlparse(value).scheme in ("http", "https"):
        return None
    path = Path(value).expanduser()
    if not path.is_file():
        logger.debug("Image field is not a local file: %s", value)
        return None
    return path.read_bytes()


class ProductEnricher:
    """Calls Gemini to suggest listing fields for a product name."""

    def __init__(
        self,
        client: genai.Client,
        model: str = Settings.GEMINI_MODEL,
    ) -> None:
        self.client = client
        self.model = model

    @classmethod
    def from_config(cls, config: Mapping[str, str]) -> "ProductEnricher":
        """Build an enricher from the injected configuration.

        Raises:
            MissingConfig: if the Gemini API key is not configured.
        """
        api_key = require_config(config, Settings.GEMINI_API_KEY_KEY)
        return cls(genai.Client(api_key=api_key))

    async def enrich(
        self, name: str, image: bytes | None = None,
    ) -> EnrichmentSuggestion:
        """Ask the model for description, category and price.

        Raises:
            EnrichmentError: if the call fails or the answer cannot be
                parsed.
        """
        prompt = build_prompt(name, image is not None)
        contents: list[Any] = [prompt]
        if image is not None:
            contents.append(
                types.Part.from_bytes(
                    data=image,
                    mime_type=Settings.ENRICHMENT_IMAGE_MIME,
                )
            )

        logger.info(
            "Enriching '%s' with %s (image=%s)",
            name,
            self.model,
            image is not None,
        )
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=contents,
            )
            text = response.text or ""
        except Exception as exc:
            logger.error(
                "Enrichment call failed for '%s'",
                name,
                exc_info=True,
            )
            msg = f"AI enrichment failed: {exc}"
            raise EnrichmentError(msg) from exc

        suggestion = parse_suggestion(text)
        logger.debug(
            "Enrichment for '%s': category=%s price=%.2f",
            name,
            suggestion.category,
            suggestion.suggested_price,
        )
        return suggestion
