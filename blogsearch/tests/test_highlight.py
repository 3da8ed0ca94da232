"""Tests for search term highlighting."""

import re

from blogsearch.services import highlight
from blogsearch.services.highlight import highlight_html, highlight_text


class TestHighlightText:
    def test_preserves_original_case(self):
        assert highlight_text("Cats and Dogs", "cat") == "<mark>Cat</mark>s and Dogs"

    def test_marks_every_occurrence(self):
        assert (
            highlight_text("cat, Cat, CAT", "cat")
            == "<mark>cat</mark>, <mark>Cat</mark>, <mark>CAT</mark>"
        )

    def test_empty_term_is_noop(self):
        assert highlight_text("Cats and Dogs", "") == "Cats and Dogs"

    def test_regex_characters_are_escaped(self):
        assert highlight_text("costs $5 (maybe)", "$5 (") == "costs <mark>$5 (</mark>maybe)"
        assert highlight_text("a.b axb", "a.b") == "<mark>a.b</mark> axb"

    def test_pattern_failure_leaves_text_unchanged(self, monkeypatch):
        def _broken(term):
            raise re.error("bad pattern")

        monkeypatch.setattr(highlight, "_term_pattern", _broken)
        assert highlight_text("Cats and Dogs", "cat") == "Cats and Dogs"


class TestHighlightHtml:
    def test_skips_matches_inside_tags(self):
        assert (
            highlight_html("<a href=cat>cat</a>", "cat")
            == "<a href=cat><mark>cat</mark></a>"
        )

    def test_skips_tag_names_and_attributes(self):
        html = '<p class="em">Emphasis on <em>em</em></p>'
        assert (
            highlight_html(html, "em")
            == '<p class="em"><mark>Em</mark>phasis on <em><mark>em</mark></em></p>'
        )

    def test_unclosed_angle_bracket_is_text(self):
        assert highlight_html("1 < cat", "cat") == "1 < <mark>cat</mark>"

    def test_entities_are_not_split(self):
        assert (
            highlight_html("<p>Q&amp;A amp</p>", "amp")
            == "<p>Q&amp;A <mark>amp</mark></p>"
        )
        assert highlight_html("a&#38;b &#x26;", "38") == "a&#38;b &#x26;"

    def test_bare_ampersand_is_text(self):
        assert highlight_html("R&D amp", "&D") == "R<mark>&D</mark> amp"

    def test_empty_term_is_noop(self):
        assert highlight_html("<p>cat</p>", "") == "<p>cat</p>"

    def test_pattern_failure_leaves_html_unchanged(self, monkeypatch):
        def _broken(term):
            raise re.error("bad pattern")

        monkeypatch.setattr(highlight, "_term_pattern", _broken)
        assert highlight_html("<p>cat</p>", "cat") == "<p>cat</p>"
