"""Localized content resolution for pages, collections, menus and settings."""

import datetime
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from shopper_site.models.content import (
    BlogListItem,
    FaqItem,
    FooterLinkItem,
    HeaderMenuItem,
    HomePage,
    HowItWorksItem,
    NavigationItem,
    NotFoundPage,
    PageContent,
    ServiceItem,
    SiteSettings,
    TestimonialItem,
)
from shopper_site.services.locale import Locale, ensure_locale
from shopper_site.services.localize import split_localized
from shopper_site.services.markdown import excerpt
from shopper_site.services.storage import (
    HOME_DEFAULTS,
    NOT_FOUND_DEFAULTS,
    ContentTier,
    LocalizedEntry,
    build_tiers,
    first_found,
    first_non_empty,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Routes that exist for every locale; menu links with these slugs point at them
TOP_LEVEL_ROUTES = ("home", "about", "services", "testimonials", "faq", "blog", "contact")
# Header links to a single service are named "<service-slug>-link"
SERVICE_LINK_SUFFIX = "-link"

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

_printed_debug = False


class ContentNotFoundError(LookupError):
    """Raised when no storage tier holds the requested entry."""

    def __init__(self, kind: str, slug: str, locale: Locale) -> None:
        super().__init__(f"{kind} not found: {locale.value}/{slug}")
        self.kind = kind
        self.slug = slug
        self.locale = locale


def _text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _int(value: Any) -> Optional[int]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return None


def _float(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _iso(value: Any) -> Optional[str]:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return _text(value)


def _timestamp(value: Optional[str]) -> float:
    """Seconds since the epoch for an ISO date string; unparsable → 0."""
    if not value:
        return 0.0
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    for candidate in (text, text[:10]):
        try:
            parsed = datetime.datetime.fromisoformat(candidate)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=datetime.timezone.utc)
        return (parsed - _EPOCH).total_seconds()
    return 0.0


def sort_by_order(items: List[T], key: Callable[[T], Optional[int]] = lambda item: item.order) -> List[T]:
    """Ascending ``order`` (missing = 0); ties keep encounter order."""
    return sorted(items, key=lambda item: key(item) or 0)


def sort_by_date(items: List[BlogListItem]) -> List[BlogListItem]:
    """Newest first; missing or unparsable dates sort last as the epoch."""
    return sorted(items, key=lambda item: _timestamp(item.date), reverse=True)


class ContentRepository:
    """Resolves localized content by trying each storage tier in order.

    Every public method validates the locale before touching storage and
    returns fresh values; nothing is cached between calls.
    """

    def __init__(self, tiers: Sequence[ContentTier], debug: bool = False) -> None:
        self.tiers = list(tiers)
        self.debug = debug

    @classmethod
    def from_directory(
        cls, root: Path, tier_names: Sequence[str] = ("collection", "unified", "legacy", "defaults"),
        debug: bool = False,
    ) -> "ContentRepository":
        return cls(build_tiers(Path(root), tier_names), debug=debug)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def get_page(self, locale: Locale, key: str) -> PageContent:
        locale = ensure_locale(locale)
        entry = first_found(self.tiers, "pages", key, locale)
        if entry is None:
            self._log_missing_once(key, locale)
            raise ContentNotFoundError("pages", key, locale)
        return PageContent(
            locale=locale,
            path=entry.path,
            frontmatter=entry.fields,
            body=entry.body,
        )

    def get_home(self, locale: Locale) -> HomePage:
        page = self.get_page(locale, "home")
        fm = page.frontmatter
        d = HOME_DEFAULTS[page.locale]
        return HomePage(
            **page.model_dump(),
            title=_text(fm.get("title")) or d["title"],
            description=_text(fm.get("description")) or d["description"],
            hero_title=_text(fm.get("hero_title")) or _text(fm.get("title")) or d["hero_title"],
            hero_subtitle=(
                _text(fm.get("hero_subtitle")) or _text(fm.get("description")) or d["hero_subtitle"]
            ),
            hero_cta_text=_text(fm.get("hero_cta_text")) or d["hero_cta_text"],
            hero_cta_href=_text(fm.get("hero_cta_href")) or d["hero_cta_href"],
            hero_secondary_cta_text=_text(fm.get("hero_secondary_cta_text")),
            hero_secondary_cta_href=_text(fm.get("hero_secondary_cta_href")),
            hero_image=_text(fm.get("hero_image")),
            hero_image_alt=_text(fm.get("hero_image_alt")) or d["hero_image_alt"],
            services_title=_text(fm.get("services_title")),
            services_description=_text(fm.get("services_description")),
            services_cta_text=_text(fm.get("services_cta_text")),
            services_cta_href=_text(fm.get("services_cta_href")),
            steps_title=_text(fm.get("steps_title")),
            cta_text=_text(fm.get("cta_text")),
            cta_description=_text(fm.get("cta_description")),
            cta_link_text=_text(fm.get("cta_link_text")),
            cta_link_href=_text(fm.get("cta_link_href")),
        )

    def get_not_found(self, locale: Locale) -> NotFoundPage:
        page = self.get_page(locale, "not-found")
        fm = page.frontmatter
        d = NOT_FOUND_DEFAULTS[page.locale]
        return NotFoundPage(
            **page.model_dump(),
            title=_text(fm.get("title")) or d["title"],
            description=_text(fm.get("description")) or d["description"],
            cta_text=_text(fm.get("cta_text")) or d["cta_text"],
            cta_href=_text(fm.get("cta_href")) or d["cta_href"],
        )

    # ------------------------------------------------------------------
    # Blog
    # ------------------------------------------------------------------

    @staticmethod
    def _blog_item(locale: Locale, entry: LocalizedEntry) -> BlogListItem:
        fm = entry.fields
        description = _text(fm.get("description")) or ""
        frontmatter = {
            "title": fm.get("title"),
            "description": fm.get("description"),
            "date": _iso(fm.get("date")),
            "image": fm.get("image"),
        }
        return BlogListItem(
            locale=locale,
            path=entry.path,
            slug=entry.slug,
            frontmatter=frontmatter,
            body=entry.body,
            title=_text(fm.get("title")) or entry.slug,
            description=description,
            summary=description or excerpt(entry.body),
            date=frontmatter["date"],
            image=_text(fm.get("image")),
        )

    def get_blog_posts(self, locale: Locale) -> List[BlogListItem]:
        locale = ensure_locale(locale)
        entries = first_non_empty(self.tiers, "blog", locale)
        return sort_by_date([self._blog_item(locale, entry) for entry in entries])

    def get_post(self, locale: Locale, slug: str) -> BlogListItem:
        locale = ensure_locale(locale)
        entry = first_found(self.tiers, "blog", slug, locale)
        if entry is None:
            raise ContentNotFoundError("blog", slug, locale)
        return self._blog_item(locale, entry)

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    @staticmethod
    def _service_item(locale: Locale, entry: LocalizedEntry) -> ServiceItem:
        fm = entry.fields
        order = _int(fm.get("order"))
        price = _text(fm.get("price"))
        frontmatter = {
            "title": fm.get("title"),
            "description": fm.get("description"),
            "image": fm.get("image"),
            "price": price,
            "order": order,
        }
        return ServiceItem(
            locale=locale,
            path=entry.path,
            slug=entry.slug,
            frontmatter=frontmatter,
            body=entry.body,
            order=order,
            price=price,
            title=_text(fm.get("title")) or entry.slug,
            description=_text(fm.get("description")) or "",
            image=_text(fm.get("image")),
        )

    def get_services(self, locale: Locale) -> List[ServiceItem]:
        locale = ensure_locale(locale)
        entries = first_non_empty(self.tiers, "services", locale)
        return sort_by_order([self._service_item(locale, entry) for entry in entries])

    def get_service(self, locale: Locale, slug: str) -> ServiceItem:
        locale = ensure_locale(locale)
        entry = first_found(self.tiers, "services", slug, locale)
        if entry is None:
            raise ContentNotFoundError("services", slug, locale)
        return self._service_item(locale, entry)

    # ------------------------------------------------------------------
    # FAQ, testimonials, how it works
    # ------------------------------------------------------------------

    def get_faq(self, locale: Locale) -> List[FaqItem]:
        locale = ensure_locale(locale)
        items = []
        for entry in first_non_empty(self.tiers, "faq", locale):
            order = _int(entry.fields.get("order"))
            question = _text(entry.fields.get("question")) or entry.slug
            items.append(
                FaqItem(
                    locale=locale,
                    path=entry.path,
                    slug=entry.slug,
                    frontmatter={"question": question, "order": order},
                    body=entry.body,
                    order=order,
                    question=question,
                )
            )
        return sort_by_order(items)

    def get_testimonials(self, locale: Locale) -> List[TestimonialItem]:
        locale = ensure_locale(locale)
        items = []
        for entry in first_non_empty(self.tiers, "testimonials", locale):
            fm = entry.fields
            order = _int(fm.get("order"))
            rating = _float(fm.get("rating"))
            items.append(
                TestimonialItem(
                    locale=locale,
                    path=entry.path,
                    slug=entry.slug,
                    frontmatter={
                        "title": fm.get("title"),
                        "author": fm.get("author"),
                        "role": fm.get("role"),
                        "avatar": fm.get("avatar"),
                        "rating": rating,
                        "order": order,
                    },
                    body=entry.body,
                    order=order,
                    rating=rating,
                    title=_text(fm.get("title")) or entry.slug,
                    author=_text(fm.get("author")),
                    role=_text(fm.get("role")),
                    avatar=_text(fm.get("avatar")),
                )
            )
        return sort_by_order(items)

    def get_how_it_works(self, locale: Locale) -> List[HowItWorksItem]:
        locale = ensure_locale(locale)
        items = []
        for entry in first_non_empty(self.tiers, "howitworks", locale):
            fm = entry.fields
            order = _int(fm.get("order"))
            items.append(
                HowItWorksItem(
                    locale=locale,
                    path=entry.path,
                    slug=entry.slug,
                    frontmatter={
                        "title": fm.get("title"),
                        "description": fm.get("description"),
                        "icon": fm.get("icon"),
                        "link_text": fm.get("link_text"),
                        "link_href": fm.get("link_href"),
                        "order": order,
                    },
                    body=entry.body,
                    order=order,
                    title=_text(fm.get("title")) or entry.slug,
                    description=_text(fm.get("description")) or "",
                    icon=_text(fm.get("icon")),
                    link_text=_text(fm.get("link_text")),
                    link_href=_text(fm.get("link_href")),
                )
            )
        return sort_by_order(items)

    # ------------------------------------------------------------------
    # Menus and settings
    # ------------------------------------------------------------------

    def _menu_links(self, name: str, locale: Locale) -> List[Dict[str, Any]]:
        entry = first_found(self.tiers, "menus", name, locale)
        if entry is None:
            return []
        links = entry.fields.get("links")
        if not isinstance(links, list):
            logger.warning("Menu %s has no list of links", entry.path)
            return []
        localized = []
        for link in links:
            fields, _ = split_localized(link, locale)
            if fields.get("slug"):
                localized.append(fields)
        return localized

    def get_header_menu(self, locale: Locale) -> List[HeaderMenuItem]:
        locale = ensure_locale(locale)
        items = [
            HeaderMenuItem(
                slug=str(link["slug"]),
                order=_int(link.get("order")),
                parent=_text(link.get("parent")),
                text=_text(link.get("text")) or "",
                href=_text(link.get("url")) or "",
            )
            for link in self._menu_links("header", locale)
        ]
        return sort_by_order(items)

    def get_footer_links(self, locale: Locale) -> List[FooterLinkItem]:
        locale = ensure_locale(locale)
        items = [
            FooterLinkItem(
                slug=str(link["slug"]),
                order=_int(link.get("order")),
                section=_text(link.get("section")),
                text=_text(link.get("text")) or "",
                href=_text(link.get("url")) or "",
            )
            for link in self._menu_links("footer", locale)
        ]
        return sort_by_order(items)

    def get_navigation(self, locale: Locale) -> List[NavigationItem]:
        """Header menu as a tree, with routes computed for known pages and services.

        The first entry for a slug wins. Entries whose parent chain loops back
        to themselves are placed at the top level.
        """
        locale = ensure_locale(locale)
        service_slugs = {service.slug for service in self.get_services(locale)}

        nodes: Dict[str, NavigationItem] = {}
        parents: Dict[str, Optional[str]] = {}
        for item in self.get_header_menu(locale):
            if item.slug in nodes:
                logger.warning("Ignoring duplicate header menu entry %r", item.slug)
                continue
            nodes[item.slug] = NavigationItem(
                slug=item.slug,
                text=item.text,
                href=navigation_href(item, locale, service_slugs),
                order=item.order,
            )
            parents[item.slug] = item.parent

        cyclic = {slug for slug in nodes if _has_parent_cycle(slug, parents)}
        if cyclic:
            logger.warning("Header menu parents form a cycle; showing %s at the top level", sorted(cyclic))

        roots = []
        for slug, node in nodes.items():
            parent = parents[slug]
            if parent and parent in nodes and slug not in cyclic:
                nodes[parent].children.append(node)
            else:
                roots.append(node)
        return roots

    def get_site_settings(self, locale: Locale) -> SiteSettings:
        locale = ensure_locale(locale)
        entry = first_found(self.tiers, "settings", "settings", locale)
        if entry is None:
            logger.warning("No site settings found; using empty settings")
            return SiteSettings()
        fields = {key: _text(entry.fields.get(key)) for key in SiteSettings.model_fields}
        return SiteSettings(**fields)

    # ------------------------------------------------------------------

    def _log_missing_once(self, key: str, locale: Locale) -> None:
        global _printed_debug
        if not self.debug or _printed_debug:
            return
        _printed_debug = True
        roots = {getattr(tier, "root", None) for tier in self.tiers} - {None}
        sample: List[str] = []
        for root in sorted(roots):
            sample.extend(p.as_posix() for p in sorted(Path(root).rglob("*"))[:10] if p.is_file())
        logger.warning("Page %s/%s missing from every tier; content sample: %s", locale.value, key, sample[:10])


def navigation_href(item: HeaderMenuItem, locale: Locale, service_slugs) -> str:
    """Computed path for known routes and service links, else the stored URL."""
    lang = Locale(locale).value
    if item.slug in TOP_LEVEL_ROUTES:
        return f"/{lang}/" if item.slug == "home" else f"/{lang}/{item.slug}"
    if item.parent == "services" and item.slug.endswith(SERVICE_LINK_SUFFIX):
        service_slug = item.slug[: -len(SERVICE_LINK_SUFFIX)]
        if service_slug in service_slugs:
            return f"/{lang}/services/{service_slug}"
    return item.href


def _has_parent_cycle(slug: str, parents: Dict[str, Optional[str]]) -> bool:
    seen = set()
    current = parents.get(slug)
    while current is not None and current not in seen:
        if current == slug:
            return True
        seen.add(current)
        current = parents.get(current)
    return False
