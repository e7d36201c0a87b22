"""Tests for the content storage tiers."""

import pytest

from shopper_site.services.locale import Locale
from shopper_site.services.storage import (
    CollectionTier,
    DefaultsTier,
    LegacyMarkdownTier,
    UnifiedYamlTier,
    build_tiers,
    first_found,
    first_non_empty,
    is_valid_slug,
)


_BLOG_DOC = """
    slug: first-post
    date: 2024-05-01
    image: /img/first.jpg
    title_en: First post
    title_es: Primer artículo
    title_fr: Premier article
    body_en: "# Hello"
    body_es: "# Hola"
    body_fr: "# Bonjour"
"""


# ---------------------------------------------------------------------------
# Collection tier
# ---------------------------------------------------------------------------

class TestCollectionTier:
    def test_find_projects_locale(self, content_root, write):
        write("collections/blog_entries/first-post.yml", _BLOG_DOC)
        entry = CollectionTier(content_root).find("blog", "first-post", Locale.ES)
        assert entry is not None
        assert entry.slug == "first-post"
        assert entry.fields["title"] == "Primer artículo"
        assert entry.fields["date"] == "2024-05-01"
        assert entry.fields["image"] == "/img/first.jpg"
        assert entry.body == "# Hola"
        assert entry.path == "/content/collections/blog_entries/first-post.yml"

    def test_invalid_document_is_skipped(self, content_root, write):
        write("collections/blog_entries/first-post.yml", _BLOG_DOC)
        write(
            "collections/blog_entries/broken.yml",
            """
            slug: broken
            date: 2024-01-01
            title_en: Only English
            """,
        )
        tier = CollectionTier(content_root)
        assert tier.find("blog", "broken", Locale.EN) is None
        assert [e.slug for e in tier.entries("blog", Locale.EN)] == ["first-post"]

    def test_page_with_unknown_field_is_rejected(self, content_root, write):
        write(
            "collections/pages/about.yml",
            """
            title_en: About
            title_es: Acerca
            title_fr: À propos
            subtitle_en: Typo field
            """,
        )
        assert CollectionTier(content_root).find("pages", "about", Locale.EN) is None

    def test_page_with_unknown_shared_field_is_rejected(self, content_root, write):
        write(
            "collections/pages/about.yml",
            """
            title_en: About
            title_es: Acerca
            title_fr: À propos
            layout: wide
            """,
        )
        assert CollectionTier(content_root).find("pages", "about", Locale.EN) is None

    def test_page_with_known_fields(self, content_root, write):
        write(
            "collections/pages/about.yml",
            """
            hero_image: /img/about.jpg
            title_en: About
            title_es: Acerca
            title_fr: À propos
            body_fr: Bonjour
            """,
        )
        entry = CollectionTier(content_root).find("pages", "about", Locale.FR)
        assert entry.fields["title"] == "À propos"
        assert entry.fields["hero_image"] == "/img/about.jpg"
        assert entry.body == "Bonjour"

    def test_missing_directory(self, content_root):
        assert CollectionTier(content_root).entries("faq", Locale.EN) == []


# ---------------------------------------------------------------------------
# Unified YAML tier
# ---------------------------------------------------------------------------

class TestUnifiedYamlTier:
    def test_entries_are_sorted_by_file_name(self, content_root, write):
        write("service_entries/b.yml", "title_en: B\n")
        write("service_entries/a.yaml", "title_en: A\n")
        write("service_entries/notes.txt", "ignored")
        entries = UnifiedYamlTier(content_root).entries("services", Locale.EN)
        assert [e.slug for e in entries] == ["a", "b"]

    def test_slug_field_overrides_file_name(self, content_root, write):
        write("service_entries/file-name.yml", "slug: real-slug\ntitle_en: X\n")
        entry = UnifiedYamlTier(content_root).find("services", "file-name", Locale.EN)
        assert entry.slug == "real-slug"

    def test_non_mapping_document_is_ignored(self, content_root, write):
        write("faq_entries/list.yml", "- one\n- two\n")
        assert UnifiedYamlTier(content_root).entries("faq", Locale.EN) == []

    def test_malformed_yaml_is_ignored(self, content_root, write):
        write("faq_entries/bad.yml", "question_en: [unclosed\n")
        write("faq_entries/good.yml", "question_en: Fine?\n")
        entries = UnifiedYamlTier(content_root).entries("faq", Locale.EN)
        assert [e.slug for e in entries] == ["good"]

    def test_settings_live_at_root(self, content_root, write):
        write("settings.yml", "logo_src: /logo.svg\nheader_cta_text_es: Reservar\n")
        entry = UnifiedYamlTier(content_root).find("settings", "settings", Locale.ES)
        assert entry.fields == {"logo_src": "/logo.svg", "header_cta_text": "Reservar"}


# ---------------------------------------------------------------------------
# Legacy Markdown tier
# ---------------------------------------------------------------------------

class TestLegacyMarkdownTier:
    def test_page_under_locale_directory(self, content_root, write):
        write("fr/about.md", "---\ntitle: À propos\n---\n# Qui sommes-nous\n")
        entry = LegacyMarkdownTier(content_root).find("pages", "about", Locale.FR)
        assert entry.fields == {"title": "À propos"}
        assert entry.body == "# Qui sommes-nous\n"
        assert entry.path == "/content/fr/about.md"

    def test_collection_under_kind_directory(self, content_root, write):
        write("blog/en/hello.md", "---\ntitle: Hello\ndate: 2024-02-02\n---\nBody")
        write("blog/en/world.md", "---\ntitle: World\n---\nBody")
        entries = LegacyMarkdownTier(content_root).entries("blog", Locale.EN)
        assert [e.slug for e in entries] == ["hello", "world"]
        assert LegacyMarkdownTier(content_root).entries("blog", Locale.ES) == []

    def test_kind_without_legacy_form(self, content_root):
        assert LegacyMarkdownTier(content_root).find("menus", "header", Locale.EN) is None


# ---------------------------------------------------------------------------
# Defaults, slugs and tier selection
# ---------------------------------------------------------------------------

class TestDefaultsTier:
    def test_home_and_not_found_only(self):
        tier = DefaultsTier()
        home = tier.find("pages", "home", Locale.ES)
        assert home.fields["hero_cta_href"] == "/es/contact"
        assert tier.find("pages", "not-found", Locale.FR).fields["cta_href"] == "/fr"
        assert tier.find("pages", "about", Locale.EN) is None
        assert tier.find("blog", "home", Locale.EN) is None
        assert tier.entries("pages", Locale.EN) == []


class TestSlugs:
    @pytest.mark.parametrize("slug", ["about", "how_it-works", "2024-post"])
    def test_valid(self, slug):
        assert is_valid_slug(slug)

    @pytest.mark.parametrize("slug", ["", "../secret", "a/b", "a.b", "with space"])
    def test_invalid(self, slug):
        assert not is_valid_slug(slug)

    def test_traversal_is_not_followed(self, tmp_path, content_root, write):
        (tmp_path / "secret.yml").write_text("title_en: secret\n", encoding="utf-8")
        assert UnifiedYamlTier(content_root).find("pages", "../secret", Locale.EN) is None


class TestTierChain:
    def test_build_tiers_keeps_order(self, content_root):
        tiers = build_tiers(content_root, ["legacy", "defaults"])
        assert [t.name for t in tiers] == ["legacy", "defaults"]

    def test_unknown_tier_name(self, content_root):
        with pytest.raises(ValueError):
            build_tiers(content_root, ["database"])

    def test_first_found_prefers_earlier_tier(self, content_root, write):
        write("collections/faq_entries/q.yml", "slug: q\nquestion_en: From collection\nquestion_es: a\nquestion_fr: b\n")
        write("faq_entries/q.yml", "question_en: From unified\n")
        tiers = build_tiers(content_root, ["collection", "unified"])
        assert first_found(tiers, "faq", "q", Locale.EN).fields["question"] == "From collection"

    def test_first_non_empty_falls_through_empty_tiers(self, content_root, write):
        write("faq/en/q.md", "---\nquestion: From legacy\n---\n")
        tiers = build_tiers(content_root, ["collection", "unified", "legacy"])
        entries = first_non_empty(tiers, "faq", Locale.EN)
        assert [e.fields["question"] for e in entries] == ["From legacy"]
