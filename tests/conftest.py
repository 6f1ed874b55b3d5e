"""Shared test fixtures for the transcript_aligner test suite.

WHY: Multiple test modules need the same machine transcript and corrected
text. Centralizing fixtures here avoids duplication and ensures all tests
reason about one worked example.

HOW: Pytest fixtures provide the raw machine transcript dict (as decoded
from the editor's JSON), the same transcript as a typed
TranscriptDocument, and the corrected text an editor produced from it.

RULES:
- The machine transcript mistakes "really" for "pretty" and drops the
  final period on "well"; the corrected text fixes both and adds speakers
- "Alice" and "Bob" never occur in the machine transcript, so the
  vocabulary policy treats them as speaker labels
- Timings are exact decimal literals; tests compare them with ==
"""

from typing import Any, Dict, List

import pytest

from transcript_aligner.core.ir import TimedWord, TranscriptDocument


# ---------------------------------------------------------------------------
# Worked example
# ---------------------------------------------------------------------------

MACHINE_WORDS: List[Dict[str, Any]] = [
    {"text": "Testing",    "start": 4.76, "end": 5.28},
    {"text": "the",        "start": 5.28, "end": 5.40},
    {"text": "production", "start": 5.40, "end": 5.96},
    {"text": "version",    "start": 5.96, "end": 6.40},
    {"text": "of",         "start": 6.40, "end": 6.52},
    {"text": "the",        "start": 6.52, "end": 6.60},
    {"text": "editor.",    "start": 6.60, "end": 7.10},
    {"text": "It",         "start": 7.50, "end": 7.62},
    {"text": "works",      "start": 7.62, "end": 8.00},
    {"text": "pretty",     "start": 8.00, "end": 8.30},
    {"text": "well",       "start": 8.30, "end": 8.70},
]

CORRECTED_TEXT = (
    "Alice: Testing the production version of the editor.\n"
    "Bob: It works really well."
)


@pytest.fixture
def machine_transcript_dict():
    """Machine transcript as decoded JSON, with one input paragraph."""
    return {
        "words": [dict(w) for w in MACHINE_WORDS],
        "paragraphs": [{"speaker": "Speaker 1", "start": 4.76, "end": 8.70}],
    }


@pytest.fixture
def machine_document():
    """The same machine transcript as a typed TranscriptDocument."""
    return TranscriptDocument(
        words=[TimedWord(text=w["text"], start=w["start"], end=w["end"]) for w in MACHINE_WORDS],
    )


@pytest.fixture
def corrected_text():
    """Editor-corrected text with bare "Name:" speaker labels, one per line."""
    return CORRECTED_TEXT


def make_document(*items):
    """Build a TranscriptDocument from (text, start, end) tuples."""
    return TranscriptDocument(words=[TimedWord(text=t, start=s, end=e) for t, s, e in items])
