"""Projection of locale-suffixed records (``title_en``, ``title_es`` …) onto one locale."""

import re
from collections.abc import Mapping
from typing import Any, Dict, Optional, Tuple

from shopper_site.services.locale import SUPPORTED_LOCALES, Locale

_SUFFIX_RE = re.compile(r"^(.*)_(" + "|".join(SUPPORTED_LOCALES) + r")$")


def split_localized(record: Any, locale: Locale) -> Tuple[Dict[str, Any], Optional[str]]:
    """Return *(projection, body)* of *record* for *locale*.

    Suffixed keys are kept under their base name only when the suffix matches
    *locale*; unsuffixed keys are shared and copied as-is. A locale-matched
    value wins over a shared value with the same base name regardless of key
    order. ``body`` is returned separately when present as a string.
    """
    if not isinstance(record, Mapping):
        return {}, None

    lang = Locale(locale).value
    projection: Dict[str, Any] = {}
    matched = set()
    body: Optional[str] = None

    for key, value in record.items():
        match = _SUFFIX_RE.match(key) if isinstance(key, str) else None
        if match is None:
            if key not in matched:
                projection[key] = value
            continue

        base, suffix = match.group(1), match.group(2)
        if suffix != lang:
            continue
        projection[base] = value
        matched.add(base)
        if base == "body" and isinstance(value, str):
            body = value

    if not body:
        fallback = record.get(f"body_{lang}")
        if isinstance(fallback, str):
            body = fallback
    return projection, body
