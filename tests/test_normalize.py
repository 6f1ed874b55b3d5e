"""Unit tests for word normalization and corrected-text tokenization.

WHY: Speaker detection compares normalized words. A normalizer that strips
too much (internal apostrophes, leading quotes) or too little (stacked
trailing punctuation) changes which first tokens count as speaker labels.

HOW: Tests cover each normalization rule and both unit granularities.

RULES:
- Only trailing characters from . , ! ? ; : ' " are stripped
- normalize_word lowercases before stripping
"""

import pytest

from transcript_aligner.core.normalize import (
    build_vocabulary,
    normalize_word,
    split_tokens,
    split_units,
    strip_punctuation,
)


class TestStripPunctuation:
    """Trailing punctuation is removed, everything else is kept."""

    @pytest.mark.parametrize("word, expected", [
        ("hello,", "hello"),
        ("world!", "world"),
        ("okay.", "okay"),
        ("really?!", "really"),
        ('said:"', "said"),
        ("end;", "end"),
    ])
    def test_trailing_punctuation(self, word, expected):
        assert strip_punctuation(word) == expected

    def test_internal_apostrophe_kept(self):
        assert strip_punctuation("don't") == "don't"

    def test_leading_punctuation_kept(self):
        assert strip_punctuation('"quoted"') == '"quoted'

    def test_word_without_punctuation_unchanged(self):
        assert strip_punctuation("plain") == "plain"

    def test_all_punctuation_becomes_empty(self):
        assert strip_punctuation("...") == ""

    def test_other_symbols_not_stripped(self):
        assert strip_punctuation("wait-") == "wait-"


class TestNormalizeWord:
    """normalize_word lowercases and strips trailing punctuation."""

    def test_mixed_case_with_punctuation(self):
        assert normalize_word("Hello,") == "hello"

    def test_upper_case(self):
        assert normalize_word("WORLD!") == "world"

    def test_speaker_colon(self):
        assert normalize_word("Alice:") == "alice"


class TestBuildVocabulary:

    def test_vocabulary_is_normalized_set(self):
        vocab = build_vocabulary(["Hello,", "hello", "World."])
        assert vocab == frozenset({"hello", "world"})

    def test_empty(self):
        assert build_vocabulary([]) == frozenset()


class TestSplitUnits:
    """Corrected text is split per line or per blank-line block."""

    def test_line_granularity_splits_every_newline(self):
        assert split_units("a b\nc\n\nd", "line") == ["a b", "c", "", "d"]

    def test_blank_line_granularity_keeps_wrapped_lines_together(self):
        units = split_units("a b\nc\n  \nd", "blank_line")
        assert units == ["a b\nc", "d"]

    def test_unknown_granularity_raises(self):
        with pytest.raises(ValueError, match="Unknown granularity"):
            split_units("text", "sentence")


class TestSplitTokens:

    def test_whitespace_runs_collapse(self):
        assert split_tokens("  hello \t there  ") == ["hello", "there"]

    def test_blank_unit_has_no_tokens(self):
        assert split_tokens("   ") == []

    def test_multiline_unit(self):
        assert split_tokens("Alice: hello\nthere") == ["Alice:", "hello", "there"]
