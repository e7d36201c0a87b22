"""Flat ``key: value`` frontmatter parsing for legacy Markdown content."""

import re
from typing import Any, Dict, Tuple

_DELIMITER = "---"
_FIELD_RE = re.compile(r"^([A-Za-z0-9_-]+):\s*(.*)$")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _coerce(value: str) -> Any:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1]
    if _ISO_DATE_RE.match(value):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def parse_frontmatter(raw: str) -> Tuple[Dict[str, Any], str]:
    """Split *raw* into a frontmatter mapping and the remaining body.

    Malformed or missing frontmatter never raises: the whole input is
    returned as the body with an empty mapping.
    """
    if not raw or not raw.startswith(_DELIMITER):
        return {}, raw or ""

    end = raw.find("\n" + _DELIMITER, len(_DELIMITER))
    if end == -1:
        return {}, raw

    block = raw[len(_DELIMITER):end].strip()
    body = raw[end + len(_DELIMITER) + 1:].lstrip()

    fields: Dict[str, Any] = {}
    for line in block.splitlines():
        match = _FIELD_RE.match(line)
        if not match:
            continue
        fields[match.group(1)] = _coerce(match.group(2))
    return fields, body
