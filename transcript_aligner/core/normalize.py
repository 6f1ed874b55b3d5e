"""Word normalization and corrected-text tokenization.

WHY: Speaker detection must decide whether "Hello," in the corrected text
is the same word as "hello" in the machine transcript. The comparison form
drops case and trailing punctuation; the original form is what gets
emitted downstream.

HOW: Regex-based trailing punctuation strip, lowercase, and two ways of
cutting corrected text into units (single newline or blank line).

RULES:
- Only TRAILING punctuation from config.PUNCTUATION_CHARS is stripped
- normalize_word() is for comparison only, never for output
- "line" granularity splits on every newline; "blank_line" on \\n\\s*\\n
"""

from __future__ import annotations

import re
from typing import FrozenSet, Iterable, List

from transcript_aligner.config import PUNCTUATION_CHARS, validate_granularity

_TRAILING_PUNCTUATION_RE = re.compile("[{}]+$".format(re.escape(PUNCTUATION_CHARS)))

_BLANK_LINE_RE = re.compile(r"\n\s*\n")


def strip_punctuation(word: str) -> str:
    """Remove one or more trailing punctuation characters from word.

    >>> strip_punctuation("okay?!")
    'okay'
    """
    return _TRAILING_PUNCTUATION_RE.sub("", word)


def normalize_word(word: str) -> str:
    """Lowercase word and strip its trailing punctuation."""
    return strip_punctuation(word.lower())


def build_vocabulary(words: Iterable[str]) -> FrozenSet[str]:
    """Normalized set of words, used for speaker-label membership tests."""
    return frozenset(normalize_word(w) for w in words)


def split_units(text: str, granularity: str = "line") -> List[str]:
    """Cut corrected text into units that may each become a paragraph.

    Raises:
        ValueError: If granularity is not one of config.GRANULARITIES.
    """
    validate_granularity(granularity)
    if granularity == "blank_line":
        return _BLANK_LINE_RE.split(text)
    return text.split("\n")


def split_tokens(unit: str) -> List[str]:
    """Whitespace tokens of a unit; empty list for a blank unit."""
    return unit.split()
