"""Extraction of word arrays from the machine transcript and corrected text.

WHY: The aligner works on two flat word arrays. The machine side also
needs its timings kept positionally aligned with its words. The corrected
side needs speaker labels removed so they are not aligned as spoken
words, and its paragraph structure recorded as word-index ranges so the
reconstructor can rebuild paragraphs after alignment.

HOW: extract_source() walks the machine words. extract_target() and
detect_paragraphs() are both built on _scan_units(), a single generator
that splits the corrected text into units, lets the speaker policy cut
off each unit's first token, and asks the policy to classify it. Sharing
the scanner is what keeps the paragraph ranges indexed into exactly the
array extract_target() returns.

RULES:
- Machine words with empty trimmed text are skipped together with their timing
- Corrected text is split by granularity ("line" by default), blank units ignored
- A first token judged a speaker label is dropped from the word array
  (a bracket label may span several whitespace tokens)
- Units left with zero words (a lone speaker label) produce no paragraph
- An empty speaker name is reported as None
"""

from __future__ import annotations

from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

from transcript_aligner import config
from transcript_aligner.core.ir import ParagraphRange, Timing, TranscriptDocument
from transcript_aligner.core.normalize import build_vocabulary, split_tokens, split_units
from transcript_aligner.core.speakers import SpeakerDetectionPolicy, get_speaker_policy


class _Unit(NamedTuple):
    speaker: Optional[str]
    words: List[str]


def extract_source(doc: TranscriptDocument) -> Tuple[List[str], List[Timing]]:
    """Extract word texts and timings from a machine transcript.

    Args:
        doc: The machine transcript. Only doc.words is read.

    Returns:
        (words, timings) — positionally aligned lists; index i of one
        corresponds to index i of the other.
    """
    words: List[str] = []
    timings: List[Timing] = []
    for word in doc.words:
        text = word.text.strip()
        if not text:
            continue
        words.append(text)
        timings.append(Timing(start=word.start, end=word.end))
    return words, timings


def _scan_units(
    corrected_text: str,
    source_words: Sequence[str],
    policy: Optional[SpeakerDetectionPolicy],
    granularity: Optional[str],
) -> Iterator[_Unit]:
    """Yield (speaker, words) for every non-blank unit of corrected_text."""
    policy = get_speaker_policy(policy)
    vocabulary = build_vocabulary(source_words)
    for unit in split_units(corrected_text, granularity or config.DEFAULT_GRANULARITY):
        token, rest = policy.split_first_token(unit)
        if token is None:
            continue
        speaker = policy.classify_first_token(token, vocabulary)
        if speaker is None:
            yield _Unit(None, split_tokens(unit))
        else:
            yield _Unit(speaker or None, split_tokens(rest))


def extract_target(
    corrected_text: str,
    source_words: Sequence[str],
    policy: Optional[SpeakerDetectionPolicy] = None,
    granularity: Optional[str] = None,
) -> List[str]:
    """Extract the spoken words of the corrected text, without speaker labels.

    Args:
        corrected_text: Human-edited plain text, one utterance per unit.
        source_words: Machine-transcript words (the speaker vocabulary).
        policy: Speaker detection policy; None uses the configured default.
        granularity: "line" or "blank_line"; None uses the configured default.

    Returns:
        Flat list of target words in reading order.
    """
    words: List[str] = []
    for unit in _scan_units(corrected_text, source_words, policy, granularity):
        words.extend(unit.words)
    return words


def detect_paragraphs(
    corrected_text: str,
    source_words: Sequence[str],
    policy: Optional[SpeakerDetectionPolicy] = None,
    granularity: Optional[str] = None,
) -> List[ParagraphRange]:
    """Detect paragraph boundaries and speakers in the corrected text.

    WHY: Paragraph and speaker structure for the output comes entirely
    from the corrected text. Ranges are expressed as indices into the
    array returned by extract_target() with the same arguments.

    HOW: Walk the same units as extract_target(), tracking a running
    word index. Each unit with at least one word becomes one range.

    Example:
        "Alice: hello there\\nBob: hi" (Alice/Bob not in the vocabulary) →
        [ParagraphRange(0, 1, 2, "Alice"), ParagraphRange(2, 2, 1, "Bob")]
    """
    ranges: List[ParagraphRange] = []
    word_index = 0
    for unit in _scan_units(corrected_text, source_words, policy, granularity):
        count = len(unit.words)
        if count == 0:
            continue
        ranges.append(ParagraphRange(
            start_word_index=word_index,
            end_word_index=word_index + count - 1,
            word_count=count,
            speaker=unit.speaker,
        ))
        word_index += count
    return ranges
