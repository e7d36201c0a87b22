"""Locale validation and Accept-Language negotiation."""

from enum import Enum
from typing import List, Optional, Tuple


class Locale(str, Enum):
    EN = "en"
    ES = "es"
    FR = "fr"


DEFAULT_LOCALE = Locale.EN
SUPPORTED_LOCALES: Tuple[str, ...] = tuple(loc.value for loc in Locale)


class UnsupportedLocaleError(ValueError):
    """Raised when content is requested for a locale outside the supported set."""


def normalize_locale(tag: Optional[str]) -> Optional[Locale]:
    """Map a language tag such as ``en-US`` to a supported :class:`Locale`.

    Returns *None* when the base language is not supported.
    """
    if not tag:
        return None
    base = tag.strip().lower().split("-")[0]
    if base in SUPPORTED_LOCALES:
        return Locale(base)
    return None


def _quality(params: List[str]) -> float:
    for param in params:
        param = param.strip()
        if param.startswith("q="):
            try:
                return float(param[2:])
            except ValueError:
                return 1.0
    return 1.0


def negotiate_locale(header: Optional[str]) -> Locale:
    """Pick the best supported locale from an ``Accept-Language`` header.

    Entries are ordered by descending quality (``;q=``, default 1.0); ties
    keep header order. Falls back to :data:`DEFAULT_LOCALE`.
    """
    if not header:
        return DEFAULT_LOCALE

    scored = []
    for part in header.split(","):
        tag, *params = part.strip().split(";")
        scored.append((tag.strip(), _quality(params)))
    scored.sort(key=lambda item: item[1], reverse=True)

    for tag, _q in scored:
        candidate = normalize_locale(tag)
        if candidate:
            return candidate
    return DEFAULT_LOCALE


def ensure_locale(value) -> Locale:
    """Return *value* as a :class:`Locale` or raise :class:`UnsupportedLocaleError`.

    Only exact supported codes are accepted here; region tags belong to
    :func:`normalize_locale`.
    """
    if isinstance(value, Locale):
        return value
    if isinstance(value, str) and value in SUPPORTED_LOCALES:
        return Locale(value)
    raise UnsupportedLocaleError(f"Unsupported locale: {value!r}")


def resolve_request_locale(
    cookie_value: Optional[str], accept_language: Optional[str]
) -> Tuple[Locale, bool]:
    """Return *(locale, from_cookie)* for an incoming request.

    A valid ``lang`` cookie takes precedence over header negotiation.
    """
    from_cookie = normalize_locale(cookie_value)
    if from_cookie:
        return from_cookie, True
    return negotiate_locale(accept_language), False
