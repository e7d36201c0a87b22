"""Tests for shopper_site.services.frontmatter.parse_frontmatter."""

from shopper_site.services.frontmatter import parse_frontmatter


class TestParseFrontmatter:
    def test_splits_fields_and_body(self):
        raw = "---\ntitle: Hello\ndescription: A page\n---\n\n# Heading\n\nText."
        fields, body = parse_frontmatter(raw)
        assert fields == {"title": "Hello", "description": "A page"}
        assert body == "# Heading\n\nText."

    def test_strips_matching_quotes(self):
        fields, _ = parse_frontmatter("---\ntitle: \"Quoted\"\nalt: 'single'\n---\nbody")
        assert fields["title"] == "Quoted"
        assert fields["alt"] == "single"

    def test_booleans_are_coerced(self):
        fields, _ = parse_frontmatter("---\ndraft: true\nfeatured: false\n---\n")
        assert fields["draft"] is True
        assert fields["featured"] is False

    def test_iso_dates_stay_strings(self):
        fields, _ = parse_frontmatter("---\ndate: 2024-05-01\n---\n")
        assert fields["date"] == "2024-05-01"

    def test_numbers_stay_strings(self):
        fields, _ = parse_frontmatter("---\norder: 3\n---\n")
        assert fields["order"] == "3"

    def test_lines_without_key_are_ignored(self):
        fields, _ = parse_frontmatter("---\ntitle: Ok\nnot a field\n  - item\n---\nbody")
        assert fields == {"title": "Ok"}

    def test_hyphenated_and_localized_keys(self):
        fields, _ = parse_frontmatter("---\nhero-title: A\ntitle_es: B\n---\n")
        assert fields == {"hero-title": "A", "title_es": "B"}

    def test_empty_value(self):
        fields, _ = parse_frontmatter("---\nimage:\n---\n")
        assert fields["image"] == ""


class TestParseFrontmatterMalformed:
    def test_no_frontmatter_returns_whole_body(self):
        raw = "# Just markdown\n\nNo fields here."
        assert parse_frontmatter(raw) == ({}, raw)

    def test_unterminated_block_returns_whole_body(self):
        raw = "---\ntitle: Missing close\nbody text"
        assert parse_frontmatter(raw) == ({}, raw)

    def test_empty_input(self):
        assert parse_frontmatter("") == ({}, "")

    def test_empty_block(self):
        fields, body = parse_frontmatter("---\n---\nContent")
        assert fields == {}
        assert body == "Content"
