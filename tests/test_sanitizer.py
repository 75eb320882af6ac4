"""
Tests for content sanitization.

Tests cover:
- Plain-text sanitization (markup removal, bracket escaping)
- Rich HTML sanitization (dangerous tags, handlers, script URLs)
- Slug normalization and derivation
- Investment card section content by kind
"""

from app.core.sanitizer import (
    ContentKind,
    classify_content,
    normalize_slug,
    sanitize_document,
    sanitize_html,
    sanitize_section_content,
    sanitize_text,
    slugify,
)


class TestSanitizeText:
    """Tests for plain-text fields."""

    def test_script_body_removed(self):
        assert sanitize_text("<script>alert(1)</script>Hello") == "Hello"

    def test_tags_stripped_text_kept(self):
        assert sanitize_text("<b>Bold</b> move") == "Bold move"

    def test_whitespace_trimmed(self):
        assert sanitize_text("   Title  ") == "Title"

    def test_non_string_returns_empty(self):
        assert sanitize_text(None) == ""
        assert sanitize_text(42) == ""
        assert sanitize_text("") == ""

    def test_style_body_removed(self):
        assert sanitize_text("<style>body{}</style>Text") == "Text"


class TestSanitizeHtml:
    """Tests for rich blog content."""

    def test_safe_markup_kept(self):
        html = "<p>Hello <strong>world</strong></p>"
        assert sanitize_html(html) == html

    def test_script_removed(self):
        assert sanitize_html("<script>alert(1)</script>Hello") == "Hello"

    def test_iframe_and_object_removed(self):
        result = sanitize_html('<p>a</p><iframe src="x"></iframe><object></object>')
        assert "iframe" not in result
        assert "object" not in result
        assert "<p>a</p>" in result

    def test_event_handlers_removed(self):
        result = sanitize_html('<img src="a.png" onerror="alert(1)">')
        assert "onerror" not in result
        assert 'src="a.png"' in result

    def test_javascript_href_removed(self):
        result = sanitize_html('<a href="javascript:alert(1)">x</a>')
        assert "javascript" not in result
        assert ">x</a>" in result

    def test_obfuscated_scheme_removed(self):
        result = sanitize_html('<a href=" java\tscript:alert(1)">x</a>')
        assert "script:" not in result

    def test_normal_link_kept(self):
        result = sanitize_html('<a href="https://example.com">x</a>')
        assert 'href="https://example.com"' in result


class TestSlugs:
    """Tests for slug normalization."""

    def test_normalize_lowercases_and_replaces(self):
        assert normalize_slug("My Post!") == "my-post-"

    def test_slugify_collapses_dashes(self):
        assert slugify("Hello,   World!") == "hello-world"

    def test_slugify_only_symbols_is_empty(self):
        assert slugify("!!!") == ""


class TestSectionContent:
    """Tests for investment card section content."""

    def test_classify_kinds(self):
        assert classify_content("text") is ContentKind.TEXT
        assert classify_content(["a", "b"]) is ContentKind.TEXT_LIST
        assert classify_content([{"item": "a"}]) is ContentKind.OBJECT_LIST
        assert classify_content({"k": "v"}) is ContentKind.OBJECT
        assert classify_content(12) is None

    def test_text_sanitized(self):
        assert sanitize_section_content("<b>Hi</b>") == "Hi"

    def test_text_list_sanitized(self):
        assert sanitize_section_content(["<i>a</i>", "b"]) == ["a", "b"]

    def test_object_list_sanitized(self):
        content = [{"item": "<script>x</script>Growth"}]
        assert sanitize_section_content(content) == [{"item": "Growth"}]

    def test_nested_object_sanitized(self):
        content = {"lead": {"name": "<b>Ann</b>", "years": 3}}
        assert sanitize_section_content(content) == {"lead": {"name": "Ann", "years": 3}}

    def test_document_recurses_through_lists(self):
        value = {"numbers": [{"value": "<b>10+</b>", "label": "Clients"}]}
        assert sanitize_document(value) == {"numbers": [{"value": "10+", "label": "Clients"}]}
