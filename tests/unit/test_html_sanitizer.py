"""
Unit tests for HTML sanitization (html_sanitizer.py).

Tests cover:
- Script/style removal with content
- Tag stripping that keeps text and placeholders
- Entity decoding; encoded markup stays encoded
- Linear-time handling of unclosed elements
- HTML document detection and html2text conversion
"""

import pytest

from prompt_cleaner.cleaning.html_sanitizer import (
    decode_entities,
    html_to_text,
    looks_like_html_document,
    sanitize_html,
    strip_html_tags,
)
from prompt_cleaner.models.rules import PARSE_DECODE_ENTITY, PARSE_SANITIZE_HTML
from tests.fixtures.samples import HTML_FRAGMENT
from tests.fixtures.timing import growth_ratio


class TestStripHtmlTags:
    """Tests for strip_html_tags()."""

    @pytest.mark.unit
    def test_strip_simple_tags(self):
        text, removed = strip_html_tags("<b>Bold</b> and <i>italic</i>")
        assert text == "Bold and italic"
        assert removed == 4

    @pytest.mark.unit
    def test_strip_tags_with_attributes(self):
        text, _ = strip_html_tags('<span class="x" data-id="1">Text</span>')
        assert text == "Text"

    @pytest.mark.unit
    def test_comments_removed(self):
        text, removed = strip_html_tags("a<!-- hidden -->b")
        assert text == "ab"
        assert removed == 1

    @pytest.mark.unit
    def test_placeholders_and_comparisons_survive(self):
        text = "Send to <EMAIL> via <URL>; 1 < 2 and 3 > 2"
        assert strip_html_tags(text) == (text, 0)


class TestDecodeEntities:
    """Tests for decode_entities()."""

    @pytest.mark.unit
    def test_named_and_numeric(self):
        text, count = decode_entities("Tom &amp; Jerry &#169; &#x263A;")
        assert text == "Tom & Jerry © ☺"
        assert count == 3

    @pytest.mark.unit
    def test_unknown_entity_left_alone(self):
        assert decode_entities("&zzzz; and &") == ("&zzzz; and &", 0)


class TestSanitizeHtml:
    """Tests for sanitize_html()."""

    @pytest.mark.unit
    def test_script_removed_with_content(self, counter):
        result = sanitize_html("Hi <script>alert(1)</script>there", counter)
        assert result == "Hi there"
        assert counter[PARSE_SANITIZE_HTML] >= 1

    @pytest.mark.unit
    def test_style_removed_with_content(self, counter):
        result = sanitize_html("<style>p { color: red }</style>Text", counter)
        assert result == "Text"

    @pytest.mark.unit
    def test_encoded_markup_stays_encoded(self, counter):
        text = "Say &lt;script&gt;alert(1)&lt;/script&gt; hi"
        result = sanitize_html(text, counter)

        assert result == text
        assert "<script" not in result
        assert counter[PARSE_DECODE_ENTITY] == 0

    @pytest.mark.unit
    def test_double_encoded_markup_decodes_one_level(self, counter):
        result = sanitize_html("&amp;lt;b&amp;gt;bold&amp;lt;/b&amp;gt;", counter)

        assert result == "&lt;b&gt;bold&lt;/b&gt;"
        assert counter[PARSE_DECODE_ENTITY] == 4
        assert sanitize_html(result, counter) == result

    @pytest.mark.unit
    def test_escaped_markup_in_prose_is_kept(self, counter):
        result = sanitize_html("Escape it as &amp;lt;b&amp;gt; in HTML", counter)
        assert result == "Escape it as &lt;b&gt; in HTML"

    @pytest.mark.unit
    def test_lone_encoded_brackets_decode(self, counter):
        result = sanitize_html("1 &lt; 2 &amp;&amp; 3 &gt; 2, &lt;URL&gt;", counter)
        assert result == "1 < 2 && 3 > 2, <URL>"

    @pytest.mark.unit
    def test_numeric_encoded_tag_stays_encoded(self, counter):
        text = "Use &#60;br /&#62; for breaks"
        assert sanitize_html(text, counter) == text

    @pytest.mark.unit
    def test_unclosed_script_keeps_following_text(self, counter):
        assert sanitize_html("a <script>b <style>c", counter) == "a b c"

    @pytest.mark.unit
    def test_closed_elements_after_unclosed_opener(self, counter):
        result = sanitize_html("<style>x</style>keep<script>y</script>", counter)
        assert result == "keep"

    @pytest.mark.unit
    def test_repeated_unclosed_openers_scale_linearly(self, counter):
        ratio = growth_ratio(
            lambda text: sanitize_html(text, counter), lambda n: "<script>" * n, 2000
        )
        assert ratio < 8

    @pytest.mark.unit
    def test_plain_text_untouched(self, counter):
        text = "No markup at all"
        assert sanitize_html(text, counter) == text
        assert counter.total() == 0

    @pytest.mark.unit
    def test_html_fragment(self, counter):
        result = sanitize_html(HTML_FRAGMENT, counter)

        assert "Welcome" in result
        assert "world" in result
        assert "& friends" in result
        assert "alert" not in result
        assert "<" not in result


class TestHtmlDocument:
    """Tests for document detection and html2text conversion."""

    @pytest.mark.unit
    def test_looks_like_html_document(self):
        assert looks_like_html_document("<p>Hello</p>")
        assert looks_like_html_document("<!DOCTYPE html><html><body>x</body></html>")
        assert not looks_like_html_document("Hello <b>world</b>")
        assert not looks_like_html_document("<p>unfinished")

    @pytest.mark.unit
    def test_html_to_text_keeps_structure(self):
        result = html_to_text("<h2>Title</h2><p>Some <strong>bold</strong> text</p>")

        assert "## Title" in result
        assert "**bold**" in result

    @pytest.mark.unit
    def test_html_to_text_empty(self):
        assert html_to_text("") == ""
