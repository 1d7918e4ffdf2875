"""Tests for command tokenizing helpers."""

import pytest
from cogdispatch.core.commands.parse import split_content, strip_prefix


class TestSplitContent:
    """Tests for split_content."""

    def test_quoted_substring_is_one_token(self):
        print("\n INPUT: 'foo \"bar baz\" qux'")
        result = split_content('foo "bar baz" qux')
        print(f" OUTPUT: {result}")
        assert result == ["foo", "bar baz", "qux"]

    def test_single_quotes(self):
        assert split_content("say 'hello world'") == ["say", "hello world"]

    def test_unmatched_quote_falls_back(self):
        print("\n INPUT: 'foo \"bar'")
        result = split_content('foo "bar')
        print(f" OUTPUT: {result}")
        assert result == ["foo", '"bar']

    def test_fallback_splits_on_any_whitespace(self):
        assert split_content("a  'b\tc") == ["a", "'b", "c"]

    def test_empty_string(self):
        assert split_content("") == []

    def test_whitespace_only(self):
        assert split_content("   \n ") == []


class TestStripPrefix:
    """Tests for strip_prefix."""

    def test_prefixed_command(self):
        print("\n INPUT: ['.help', 'tags']")
        result = strip_prefix([".help", "tags"], ".")
        print(f" OUTPUT: {result}")
        assert result == ("help", ["tags"])

    def test_multi_character_prefix(self):
        assert strip_prefix(["!!ping"], "!!") == ("ping", [])

    def test_missing_prefix_returns_none(self):
        assert strip_prefix(["help"], ".") is None

    def test_empty_tokens_return_none(self):
        assert strip_prefix([], ".") is None

    def test_bare_prefix_returns_none(self):
        assert strip_prefix([".", "help"], ".") is None

    def test_prefix_must_lead_the_token(self):
        assert strip_prefix(["x.help"], ".") is None

    def test_prefix_is_stripped_once(self):
        assert strip_prefix(["..help"], ".") == (".help", [])

    def test_args_preserve_case(self):
        assert strip_prefix([".use", "Claude", "SONNET"], ".") == ("use", ["Claude", "SONNET"])
