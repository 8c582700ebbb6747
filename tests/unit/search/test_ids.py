"""Tests for page id helpers."""

import pytest

from pagelookup.search.ids import (
    clean_id,
    get_namespace,
    in_namespace,
    namespace_depth,
    strip_leading_namespace,
)


class TestCleanId:
    """Tests for clean_id."""

    def test_lowercases_and_trims(self):
        """Should lowercase and strip surrounding whitespace."""
        assert clean_id("  Start  ") == "start"

    def test_spaces_become_separator(self):
        """Whitespace inside the id should become the separator char."""
        assert clean_id("Some Page") == "some_page"

    def test_semicolon_is_namespace_separator(self):
        """Semicolons should be mapped to colons."""
        assert clean_id("wiki;syntax") == "wiki:syntax"

    def test_slash_only_with_use_slash(self):
        """Slashes are namespace separators only when enabled."""
        assert clean_id("wiki/syntax") == "wiki_syntax"
        assert clean_id("wiki/syntax", use_slash=True) == "wiki:syntax"

    def test_special_characters_replaced_and_collapsed(self):
        """Runs of disallowed characters collapse to one separator."""
        assert clean_id("what?!  now") == "what_now"

    def test_custom_separator(self):
        """A custom separator char should be used for replacements."""
        assert clean_id("some page", separator_char="-") == "some-page"

    def test_redundant_colons_collapsed(self):
        """Repeated and leading/trailing colons should be removed."""
        assert clean_id("::wiki:::syntax::") == "wiki:syntax"

    def test_punctuation_next_to_colon_removed(self):
        """Punctuation adjacent to a namespace separator is dropped."""
        assert clean_id("wiki_:_syntax") == "wiki:syntax"
        assert clean_id("wiki.:-syntax") == "wiki:syntax"

    def test_keeps_unicode_letters(self):
        """Non-ASCII word characters are kept as they are."""
        assert clean_id("Über Uns") == "über_uns"

    @pytest.mark.parametrize("raw", ["", "   ", None, "?!", ":::"])
    def test_empty_results(self, raw):
        """Inputs without id characters should clean to an empty string."""
        assert clean_id(raw) == ""


class TestNamespaceHelpers:
    """Tests for depth and namespace helpers."""

    def test_namespace_depth(self):
        """Depth counts separator-delimited segments."""
        assert namespace_depth("x") == 1
        assert namespace_depth("a:b") == 2
        assert namespace_depth("a:b:c") == 3

    def test_strip_leading_namespace(self):
        """Only the first segment should be removed."""
        assert strip_leading_namespace("a:b:c") == "b:c"
        assert strip_leading_namespace("a:b") == "b"
        assert strip_leading_namespace("x") == "x"

    def test_get_namespace(self):
        """Namespace is everything before the last separator."""
        assert get_namespace("a:b:c") == "a:b"
        assert get_namespace("x") is None

    def test_in_namespace(self):
        """Pages must sit below the namespace, not merely share a prefix."""
        assert in_namespace("wiki:syntax", "wiki") is True
        assert in_namespace("wiki:syntax:tables", "wiki") is True
        assert in_namespace("wikipedia:page", "wiki") is False
        assert in_namespace("wiki", "wiki") is False
