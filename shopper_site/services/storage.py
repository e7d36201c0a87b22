"""Storage tiers for localized content.

Each tier implements the same two lookups and returns entries already
projected onto the requested locale. The content repository tries tiers in
order and the first one that answers wins:

1. ``collection`` – schema-validated YAML documents under ``collections/``
2. ``unified``    – one YAML file per entity holding every locale
3. ``legacy``     – per-locale Markdown files with frontmatter
4. ``defaults``   – hard-coded values for pages that must always render
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

import yaml
from pydantic import ValidationError

from shopper_site.models.collections import COLLECTION_SCHEMAS
from shopper_site.services.frontmatter import parse_frontmatter
from shopper_site.services.locale import Locale
from shopper_site.services.localize import split_localized

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_YAML_SUFFIXES = (".yml", ".yaml")


@dataclass(frozen=True)
class KindLayout:
    """Where one content kind lives on disk.

    ``entries_dir`` is relative to the content root for the unified tier and
    to ``collections/`` for the collection tier; an empty string means the
    root itself. ``legacy_dir`` is the Markdown prefix (``""`` places files
    directly under ``<locale>/``); *None* means the kind has no legacy form.
    """

    entries_dir: str
    legacy_dir: Optional[str] = None


KINDS: Dict[str, KindLayout] = {
    "pages": KindLayout("pages", ""),
    "blog": KindLayout("blog_entries", "blog"),
    "services": KindLayout("service_entries", "services"),
    "faq": KindLayout("faq_entries", "faq"),
    "testimonials": KindLayout("testimonial_entries", "testimonials"),
    "howitworks": KindLayout("howitworks_entries", "howitworks"),
    "menus": KindLayout("menus"),
    "settings": KindLayout(""),
}


@dataclass(frozen=True)
class LocalizedEntry:
    """One content record projected onto a single locale."""

    path: str
    slug: str
    fields: Dict[str, Any] = field(default_factory=dict)
    body: str = ""


class ContentTier(Protocol):
    name: str

    def find(self, kind: str, slug: str, locale: Locale) -> Optional[LocalizedEntry]:
        ...

    def entries(self, kind: str, locale: Locale) -> List[LocalizedEntry]:
        ...


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and bool(_SLUG_RE.match(slug))


def _layout(kind: str) -> KindLayout:
    try:
        return KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown content kind: {kind!r}") from None


def _display_path(root: Path, path: Path) -> str:
    try:
        return "/" + path.relative_to(root.parent).as_posix()
    except ValueError:
        return path.as_posix()


def _read_yaml(path: Path) -> Optional[Any]:
    """Load *path*; unreadable or malformed files are logged and treated as absent."""
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        logger.warning("Cannot read content file %s: %s", path, exc)
    except yaml.YAMLError as exc:
        logger.warning("Malformed YAML in %s: %s", path, exc)
    return None


def _yaml_file(directory: Path, slug: str) -> Optional[Path]:
    for suffix in _YAML_SUFFIXES:
        candidate = directory / f"{slug}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def _yaml_files(directory: Path) -> List[Path]:
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix in _YAML_SUFFIXES)


def _entry_slug(data: Any, path: Path) -> str:
    if isinstance(data, dict) and data.get("slug"):
        return str(data["slug"])
    return path.stem


class _YamlTier:
    """Shared lookup logic for the two YAML-backed tiers."""

    name = ""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _directory(self, kind: str) -> Path:
        raise NotImplementedError

    def _load(self, kind: str, path: Path) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def _localize(self, kind: str, path: Path, locale: Locale) -> Optional[LocalizedEntry]:
        record = self._load(kind, path)
        if record is None:
            return None
        fields, body = split_localized(record, locale)
        return LocalizedEntry(
            path=_display_path(self.root, path),
            slug=_entry_slug(record, path),
            fields=fields,
            body=body or "",
        )

    def find(self, kind: str, slug: str, locale: Locale) -> Optional[LocalizedEntry]:
        if not is_valid_slug(slug):
            return None
        path = _yaml_file(self._directory(kind), slug)
        if path is None:
            return None
        return self._localize(kind, path, locale)

    def entries(self, kind: str, locale: Locale) -> List[LocalizedEntry]:
        items = []
        for path in _yaml_files(self._directory(kind)):
            entry = self._localize(kind, path, locale)
            if entry is not None:
                items.append(entry)
        return items


class CollectionTier(_YamlTier):
    """Typed collection store: every document is validated against its kind's schema."""

    name = "collection"

    def _directory(self, kind: str) -> Path:
        return self.root / "collections" / _layout(kind).entries_dir

    def _load(self, kind: str, path: Path) -> Optional[Dict[str, Any]]:
        data = _read_yaml(path)
        if data is None:
            return None
        schema = COLLECTION_SCHEMAS[kind]
        try:
            return schema.model_validate(data).to_record()
        except ValidationError as exc:
            logger.warning(
                "Skipping invalid %s entry %s (%d errors)", kind, path, exc.error_count()
            )
            return None


class UnifiedYamlTier(_YamlTier):
    """One YAML file per entity, all locales side by side, no schema."""

    name = "unified"

    def _directory(self, kind: str) -> Path:
        return self.root / _layout(kind).entries_dir

    def _load(self, kind: str, path: Path) -> Optional[Dict[str, Any]]:
        data = _read_yaml(path)
        if not isinstance(data, dict):
            if data is not None:
                logger.warning("Ignoring %s: expected a mapping, got %s", path, type(data).__name__)
            return None
        return data


class LegacyMarkdownTier:
    """Per-locale Markdown files: ``<locale>/<page>.md`` and ``<kind>/<locale>/<slug>.md``."""

    name = "legacy"

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _directory(self, kind: str, locale: Locale) -> Optional[Path]:
        legacy_dir = _layout(kind).legacy_dir
        if legacy_dir is None:
            return None
        base = self.root / legacy_dir if legacy_dir else self.root
        return base / Locale(locale).value

    def _localize(self, path: Path, locale: Locale) -> Optional[LocalizedEntry]:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot read content file %s: %s", path, exc)
            return None
        frontmatter, body = parse_frontmatter(raw)
        fields, _ = split_localized(frontmatter, locale)
        return LocalizedEntry(
            path=_display_path(self.root, path),
            slug=path.stem,
            fields=fields,
            body=body,
        )

    def find(self, kind: str, slug: str, locale: Locale) -> Optional[LocalizedEntry]:
        directory = self._directory(kind, locale)
        if directory is None or not is_valid_slug(slug):
            return None
        path = directory / f"{slug}.md"
        if not path.is_file():
            return None
        return self._localize(path, locale)

    def entries(self, kind: str, locale: Locale) -> List[LocalizedEntry]:
        directory = self._directory(kind, locale)
        if directory is None or not directory.is_dir():
            return []
        items = []
        for path in sorted(directory.glob("*.md")):
            entry = self._localize(path, locale)
            if entry is not None:
                items.append(entry)
        return items


HOME_DEFAULTS: Dict[Locale, Dict[str, str]] = {
    Locale.EN: {
        "title": "Personal Shopper – EN",
        "description": "Personal shopper services in Canada",
        "hero_title": "Personal Shopper in Canada",
        "hero_subtitle": "Personal shopping and styling services in Canada.",
        "hero_cta_text": "Book a consult",
        "hero_cta_href": "/en/contact",
        "hero_image_alt": "Personal Shopper",
    },
    Locale.ES: {
        "title": "Personal Shopper – ES",
        "description": "Servicios de personal shopper en Canadá",
        "hero_title": "Personal Shopper en Canadá",
        "hero_subtitle": "Servicios de personal shopper en Canadá.",
        "hero_cta_text": "Reservar",
        "hero_cta_href": "/es/contact",
        "hero_image_alt": "Personal Shopper",
    },
    Locale.FR: {
        "title": "Personal Shopper – FR",
        "description": "Services de personal shopper au Canada",
        "hero_title": "Personal Shopper au Canada",
        "hero_subtitle": "Services de personal shopper au Canada.",
        "hero_cta_text": "Réserver",
        "hero_cta_href": "/fr/contact",
        "hero_image_alt": "Personal Shopper",
    },
}

NOT_FOUND_DEFAULTS: Dict[Locale, Dict[str, str]] = {
    Locale.EN: {
        "title": "Page not found",
        "description": "The page you're looking for doesn’t exist or was moved.",
        "cta_text": "Back to home",
        "cta_href": "/en",
    },
    Locale.ES: {
        "title": "Página no encontrada",
        "description": "La página que buscas no existe o se ha movido.",
        "cta_text": "Volver al inicio",
        "cta_href": "/es",
    },
    Locale.FR: {
        "title": "Page introuvable",
        "description": "La page que vous cherchez n’existe pas ou a été déplacée.",
        "cta_text": "Retour à l’accueil",
        "cta_href": "/fr",
    },
}

PAGE_DEFAULTS: Dict[str, Dict[Locale, Dict[str, str]]] = {
    "home": HOME_DEFAULTS,
    "not-found": NOT_FOUND_DEFAULTS,
}


class DefaultsTier:
    """Last resort for pages that must never fail to render."""

    name = "defaults"

    def find(self, kind: str, slug: str, locale: Locale) -> Optional[LocalizedEntry]:
        if kind != "pages" or slug not in PAGE_DEFAULTS:
            return None
        return LocalizedEntry(
            path=f"defaults:{slug}",
            slug=slug,
            fields=dict(PAGE_DEFAULTS[slug][Locale(locale)]),
        )

    def entries(self, kind: str, locale: Locale) -> List[LocalizedEntry]:
        return []


TIER_TYPES = {
    "collection": CollectionTier,
    "unified": UnifiedYamlTier,
    "legacy": LegacyMarkdownTier,
    "defaults": DefaultsTier,
}


def build_tiers(root: Path, names: Iterable[str]) -> List[ContentTier]:
    """Instantiate the named tiers, in order, over the content *root*."""
    tiers: List[ContentTier] = []
    for name in names:
        try:
            tier_type = TIER_TYPES[name]
        except KeyError:
            raise ValueError(f"Unknown content tier: {name!r}") from None
        tiers.append(tier_type() if tier_type is DefaultsTier else tier_type(Path(root)))
    return tiers


def first_found(
    tiers: Sequence[ContentTier], kind: str, slug: str, locale: Locale
) -> Optional[LocalizedEntry]:
    for tier in tiers:
        entry = tier.find(kind, slug, locale)
        if entry is not None:
            logger.debug("Resolved %s/%s from %s tier", kind, slug, tier.name)
            return entry
    return None


def first_non_empty(
    tiers: Sequence[ContentTier], kind: str, locale: Locale
) -> List[LocalizedEntry]:
    for tier in tiers:
        items = tier.entries(kind, locale)
        if items:
            logger.debug("Resolved %d %s entries from %s tier", len(items), kind, tier.name)
            return items
    return []
