"""Tests for locale validation, normalization and negotiation."""

import pytest

from shopper_site.services.locale import (
    DEFAULT_LOCALE,
    Locale,
    UnsupportedLocaleError,
    ensure_locale,
    negotiate_locale,
    normalize_locale,
    resolve_request_locale,
)


class TestNormalizeLocale:
    @pytest.mark.parametrize(
        "tag, expected",
        [
            ("en", Locale.EN),
            ("en-US", Locale.EN),
            ("ES-mx", Locale.ES),
            (" fr-CA ", Locale.FR),
        ],
    )
    def test_supported_tags(self, tag, expected):
        assert normalize_locale(tag) is expected

    @pytest.mark.parametrize("tag", [None, "", "de", "pt-BR", "*"])
    def test_unsupported_tags(self, tag):
        assert normalize_locale(tag) is None


class TestNegotiateLocale:
    def test_missing_header_uses_default(self):
        assert negotiate_locale(None) is DEFAULT_LOCALE
        assert negotiate_locale("") is DEFAULT_LOCALE

    def test_first_supported_tag_wins(self):
        assert negotiate_locale("de-DE, fr;q=0.9, en;q=0.8") is Locale.FR

    def test_quality_reorders_entries(self):
        assert negotiate_locale("en;q=0.5, es;q=0.9") is Locale.ES

    def test_ties_keep_header_order(self):
        assert negotiate_locale("fr, es") is Locale.FR

    def test_unparsable_quality_counts_as_one(self):
        assert negotiate_locale("en;q=0.4, es;q=abc") is Locale.ES

    def test_no_supported_tag_uses_default(self):
        assert negotiate_locale("de, it;q=0.8") is DEFAULT_LOCALE


class TestEnsureLocale:
    def test_accepts_codes_and_members(self):
        assert ensure_locale("es") is Locale.ES
        assert ensure_locale(Locale.FR) is Locale.FR

    @pytest.mark.parametrize("value", ["de", "en-US", "EN", "", None, 3])
    def test_rejects_everything_else(self, value):
        with pytest.raises(UnsupportedLocaleError):
            ensure_locale(value)


class TestResolveRequestLocale:
    def test_cookie_wins_over_header(self):
        assert resolve_request_locale("fr", "es") == (Locale.FR, True)

    def test_invalid_cookie_falls_back_to_header(self):
        assert resolve_request_locale("de", "es-MX") == (Locale.ES, False)

    def test_nothing_sent(self):
        assert resolve_request_locale(None, None) == (DEFAULT_LOCALE, False)
