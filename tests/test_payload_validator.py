# tests/test_payload_validator.py

"""Tests for the pre-request payload checks."""

import unittest

from marketpush.errors import InvalidImage, InvalidPrice, MissingConfig
from marketpush.filters.payload_validator import (
    TRUNCATION_MARKER,
    clamp_text,
    ensure_public_image_url,
    parse_price,
    require_config,
)


class TestEnsurePublicImageUrl(unittest.TestCase):
    """ensure_public_image_url accepts only public http(s) URLs."""

    def test_http_url_returned_unchanged(self) -> None:
        """A plain http URL passes through untouched."""
        url = "http://example.com/a.png"
        self.assertEqual(ensure_public_image_url(url), url)

    def test_https_url_is_trimmed(self) -> None:
        """Surrounding whitespace is stripped."""
        self.assertEqual(
            ensure_public_image_url("  https://cdn.example.com/x.jpg \n"),
            "https://cdn.example.com/x.jpg",
        )

    def test_data_uri_rejected(self) -> None:
        """Inline base64 image data is never accepted."""
        with self.assertRaises(InvalidImage):
            ensure_public_image_url("data:image/png;base64,iVBORw0KGgo=")

    def test_data_uri_rejected_case_insensitive(self) -> None:
        """The data: prefix is matched regardless of case."""
        with self.assertRaises(InvalidImage):
            ensure_public_image_url("DATA:image/jpeg;base64,AAAA")

    def test_ftp_scheme_rejected(self) -> None:
        """Only http and https schemes are allowed."""
        with self.assertRaises(InvalidImage):
            ensure_public_image_url("ftp://x")

    def test_not_a_url_rejected(self) -> None:
        """Free text is not a URL."""
        with self.assertRaises(InvalidImage):
            ensure_public_image_url("not a url")

    def test_missing_scheme_rejected(self) -> None:
        """A bare host/path without scheme is rejected."""
        with self.assertRaises(InvalidImage):
            ensure_public_image_url("example.com/a.png")

    def test_missing_host_rejected(self) -> None:
        """A scheme without host is rejected."""
        with self.assertRaises(InvalidImage):
            ensure_public_image_url("http://")

    def test_empty_string_rejected(self) -> None:
        """An empty reference is not a URL."""
        with self.assertRaises(InvalidImage):
            ensure_public_image_url("")


class TestClampText(unittest.TestCase):
    """clamp_text trims and truncates with a marker."""

    def test_long_text_clamped_to_exact_length(self) -> None:
        """5000 chars clamp to exactly 4000, ending in the marker."""
        result = clamp_text("a" * 5000, 4000)
        self.assertEqual(len(result), 4000)
        self.assertTrue(result.endswith(TRUNCATION_MARKER))
        self.assertEqual(result[:3997], "a" * 3997)

    def test_short_text_unchanged(self) -> None:
        """Text within the limit is returned as is."""
        self.assertEqual(clamp_text("short", 4000), "short")

    def test_text_at_limit_unchanged(self) -> None:
        """Exactly max_length characters are not truncated."""
        text = "b" * 3000
        self.assertEqual(clamp_text(text, 3000), text)

    def test_whitespace_trimmed(self) -> None:
        """Leading and trailing whitespace is removed."""
        self.assertEqual(clamp_text("  padded \n", 10), "padded")

    def test_none_treated_as_empty(self) -> None:
        """None never raises."""
        self.assertEqual(clamp_text(None, 10), "")

    def test_limit_too_small_for_marker(self) -> None:
        """A limit shorter than the marker cuts without it."""
        self.assertEqual(clamp_text("abcdef", 2), "ab")
        self.assertEqual(clamp_text("abcdef", 3), "...")
        self.assertEqual(clamp_text("abcdef", 0), "")


class TestRequireConfig(unittest.TestCase):
    """require_config fails fast on absent credentials."""

    def test_present_value_returned(self) -> None:
        """A configured value is returned."""
        config = {"SHOPEE_PARTNER_ID": "12345"}
        self.assertEqual(
            require_config(config, "SHOPEE_PARTNER_ID"), "12345"
        )

    def test_present_value_not_logged(self) -> None:
        """Resolving a credential emits no log record."""
        with self.assertNoLogs("marketpush.filters"):
            require_config({"TOKEN": "s3cret"}, "TOKEN")

    def test_missing_value_raises(self) -> None:
        """An absent key raises MissingConfig naming the key."""
        with self.assertRaises(MissingConfig) as ctx:
            require_config({}, "MERCADO_LIVRE_ACCESS_TOKEN")
        self.assertIn("MERCADO_LIVRE_ACCESS_TOKEN", str(ctx.exception))
        self.assertEqual(ctx.exception.name, "MERCADO_LIVRE_ACCESS_TOKEN")

    def test_blank_value_raises(self) -> None:
        """A whitespace-only value counts as missing."""
        with self.assertRaises(MissingConfig):
            require_config({"TOKEN": "   "}, "TOKEN")


class TestParsePrice(unittest.TestCase):
    """parse_price accepts non-negative decimals only."""

    def test_dot_decimal(self) -> None:
        self.assertAlmostEqual(parse_price("19.90"), 19.9)

    def test_comma_decimal(self) -> None:
        """Brazilian comma decimals are accepted."""
        self.assertAlmostEqual(parse_price("19,90"), 19.9)

    def test_zero_allowed(self) -> None:
        self.assertEqual(parse_price("0"), 0.0)

    def test_negative_rejected(self) -> None:
        with self.assertRaises(InvalidPrice):
            parse_price("-1")

    def test_non_numeric_rejected(self) -> None:
        with self.assertRaises(InvalidPrice):
            parse_price("abc")

    def test_empty_rejected(self) -> None:
        with self.assertRaises(InvalidPrice):
            parse_price("")

    def test_non_finite_rejected(self) -> None:
        """NaN and infinity are not prices."""
        for raw in ("nan", "inf", "-inf"):
            with self.subTest(raw=raw), self.assertRaises(InvalidPrice):
                parse_price(raw)


if __name__ == "__main__":
    unittest.main()
