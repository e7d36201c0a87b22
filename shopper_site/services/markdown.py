"""Minimal Markdown rendering for CMS content.

Supports headings, bullet lists, paragraphs and the inline styles code,
bold, italic and links. Each non-blank, non-list line is its own paragraph.
Source text is HTML-escaped before inline styling so literal markup in
content is never interpreted.
"""

import html
import re
from typing import List

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
_BULLET_RE = re.compile(r"^[-*]\s+(.*)$")

_CODE_RE = re.compile(r"`([^`]+)`")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

_STRIP_HEADING_RE = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_STRIP_BULLET_RE = re.compile(r"^[-*]\s+", re.MULTILINE)

# Exactly the markup render_markdown produces
_RENDERED_TAG_RE = re.compile(r'</?(?:h[1-6]|p|ul|li|strong|em|code)>|<a href="[^"<>]*">|</a>')
_RENDERED_ENTITIES = {"&amp;": "&", "&lt;": "<", "&gt;": ">", "&quot;": '"', "&#x27;": "'"}
_RENDERED_ENTITY_RE = re.compile("|".join(map(re.escape, _RENDERED_ENTITIES)))
_SPACES_RE = re.compile(r"[ \t]+")


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _render_inline(escaped: str) -> str:
    s = _CODE_RE.sub(r"<code>\1</code>", escaped)
    s = _BOLD_RE.sub(r"<strong>\1</strong>", s)
    s = _ITALIC_RE.sub(r"<em>\1</em>", s)
    s = _LINK_RE.sub(r'<a href="\2">\1</a>', s)
    return s


def render_markdown(md: str) -> str:
    """Render *md* to an HTML fragment (blocks separated by newlines)."""
    if not md:
        return ""

    out: List[str] = []
    in_list = False

    for raw in _normalize_newlines(md).split("\n"):
        line = raw.rstrip()

        heading = _HEADING_RE.match(line)
        if heading:
            if in_list:
                out.append("</ul>")
                in_list = False
            level = len(heading.group(1))
            text = _render_inline(html.escape(heading.group(2)).strip())
            out.append(f"<h{level}>{text}</h{level}>")
            continue

        bullet = _BULLET_RE.match(line)
        if bullet:
            if not in_list:
                out.append("<ul>")
                in_list = True
            out.append(f"<li>{_render_inline(html.escape(bullet.group(1)).strip())}</li>")
            continue

        if in_list:
            out.append("</ul>")
            in_list = False

        if not line.strip():
            continue

        out.append(f"<p>{_render_inline(html.escape(line))}</p>")

    if in_list:
        out.append("</ul>")

    return "\n".join(out)


def strip_markdown(md: str) -> str:
    """Return *md* (or HTML rendered from it) as single-spaced plain text.

    Only the supported Markdown syntax and the tags :func:`render_markdown`
    emits are removed; any other angle brackets are kept as text.
    """
    if not md:
        return ""

    s = _CODE_RE.sub(r"\1", md)
    s = _BOLD_RE.sub(r"\1", s)
    s = _ITALIC_RE.sub(r"\1", s)
    s = _LINK_RE.sub(r"\1", s)
    s = _STRIP_HEADING_RE.sub("", s)
    s = _STRIP_BULLET_RE.sub("", s)
    s = _RENDERED_TAG_RE.sub("", _normalize_newlines(s))
    s = _RENDERED_ENTITY_RE.sub(lambda m: _RENDERED_ENTITIES[m.group(0)], s)

    lines = (_SPACES_RE.sub(" ", line).strip() for line in s.split("\n"))
    return " ".join(line for line in lines if line)


def excerpt(md: str, limit: int = 160) -> str:
    """Plain-text summary of *md*, cut on a word boundary with an ellipsis."""
    text = strip_markdown(md)
    if len(text) <= limit:
        return text
    cut = text[:limit].rsplit(" ", 1)[0].rstrip(" ,.;:")
    return f"{cut}…"
