"""Unit tests for the tokenizer.

WHY: Every later stage indexes into the token list. A tokenizer that
emits empty strings or keeps punctuation breaks fixation offsets,
progress, and the time estimate.

HOW: Tests cover the reference example, separator handling, empty and
separator-only input, Unicode letters and digits, and the invariants
(no separators inside tokens, order preserved).

RULES:
- A token is a maximal run of str.isalnum() characters.
"""

from itertools import groupby

import pytest

from rsvp_reader.core.tokenizer import tokenize


class TestBasicSplitting:
    """Alphanumeric runs become tokens; everything else is dropped."""

    def test_reference_example(self):
        assert tokenize("Hello, World!! 123-abc") == ["Hello", "World", "123", "abc"]

    def test_plain_sentence(self):
        assert tokenize("The quick brown fox") == ["The", "quick", "brown", "fox"]

    def test_punctuation_is_stripped_from_both_ends(self):
        assert tokenize('"(quoted)" ...end.') == ["quoted", "end"]

    def test_apostrophes_split_words(self):
        assert tokenize("don't") == ["don", "t"]

    def test_underscore_is_a_separator(self):
        assert tokenize("snake_case_name") == ["snake", "case", "name"]

    def test_newlines_and_tabs(self):
        assert tokenize("one\ntwo\t\tthree\r\nfour") == ["one", "two", "three", "four"]

    def test_case_and_duplicates_are_kept(self):
        assert tokenize("Go go GO go") == ["Go", "go", "GO", "go"]

    def test_long_words_are_not_truncated(self):
        word = "a" * 500
        assert tokenize(word) == [word]


class TestEmptyInput:
    """Inputs with no alphanumeric characters produce no tokens."""

    def test_empty_string(self):
        assert tokenize("") == []

    def test_whitespace_only(self):
        assert tokenize("   \n\t ") == []

    def test_separators_only(self):
        assert tokenize("!!! --- ???") == []


class TestUnicode:
    """Non-ASCII letters and digits count as word characters."""

    def test_accented_letters(self):
        assert tokenize("Caf\u00e9, na\u00efve \u2014 r\u00e9sum\u00e9") == ["Caf\u00e9", "na\u00efve", "r\u00e9sum\u00e9"]

    def test_swedish_letters(self):
        assert tokenize("Åsa åt ärtsoppa på öar.") == ["Åsa", "åt", "ärtsoppa", "på", "öar"]

    def test_cjk_characters(self):
        assert tokenize("你好，世界") == ["你好", "世界"]

    def test_combining_mark_splits_run(self):
        # U+0301 (combining acute accent) is not alphanumeric
        assert tokenize("e\u0301t") == ["e", "t"]


class TestInvariants:
    """Properties that hold for any input."""

    @pytest.mark.parametrize("text", [
        "Hello, World!! 123-abc",
        "a-b-c d.e.f",
        "  leading and trailing  ",
        "mixed123numbers and_underscores!",
        "emoji 🙂 between words",
    ])
    def test_tokens_are_alphanumeric_and_ordered(self, text):
        tokens = tokenize(text)
        assert all(t and t.isalnum() for t in tokens)

        # Each token appears in the source after the previous one
        pos = 0
        for t in tokens:
            found = text.find(t, pos)
            assert found >= 0
            pos = found + len(t)

    @pytest.mark.parametrize("text", [
        "x1, y2; z3... (w4)",
        "snake_case and kebab-case",
        "Café 你好 42",
    ])
    def test_token_count_matches_alnum_runs(self, text):
        runs = [key for key, _ in groupby(text, str.isalnum) if key]
        assert len(tokenize(text)) == len(runs)
