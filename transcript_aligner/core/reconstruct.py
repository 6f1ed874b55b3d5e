"""Timing reconstruction and paragraph rebuilding from an alignment.

WHY: The alignment says which machine word each corrected word lines up
with. This module turns that mapping into the final timed transcript:
corrected text, machine timings, and the corrected text's own paragraph
and speaker structure.

HOW: One forward pass over the ops emits a timed word per target index.
Inserted words borrow the timing of the next timed op (looked up from a
table built in one backward pass), falling back to the previous timed op,
and finally to a placeholder. Paragraph ranges from detect_paragraphs()
are then mapped onto the emitted words by target index.

RULES:
- MATCH / SUBSTITUTE: target text, source timing (copied exactly)
- INSERT: next timing, else last timing, else (0.0, 0.1)
- DELETE: nothing emitted
- A range with no emitted words produces no paragraph
- No ranges at all → one paragraph over every emitted word (none if no words)
- Each paragraph records its word_count so formatters can split words
  without comparing borrowed timings
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from transcript_aligner.config import PLACEHOLDER_END, PLACEHOLDER_START
from transcript_aligner.core.extract import detect_paragraphs
from transcript_aligner.core.ir import (
    AlignmentOp,
    EmittedWord,
    OpType,
    Paragraph,
    TimedWord,
    Timing,
    TranscriptDocument,
)
from transcript_aligner.core.speakers import SpeakerDetectionPolicy

_PLACEHOLDER_TIMING = Timing(start=PLACEHOLDER_START, end=PLACEHOLDER_END)


def _next_timings(
    alignment: Sequence[AlignmentOp],
    timings: Sequence[Timing],
) -> List[Optional[Timing]]:
    """For each op index, the timing of the first timed op strictly after it."""
    result: List[Optional[Timing]] = [None] * len(alignment)
    upcoming: Optional[Timing] = None
    for idx in range(len(alignment) - 1, -1, -1):
        result[idx] = upcoming
        op = alignment[idx]
        if op.has_timing:
            upcoming = timings[op.source_idx]
    return result


def emit_words(
    alignment: Sequence[AlignmentOp],
    target_words: Sequence[str],
    timings: Sequence[Timing],
) -> List[EmittedWord]:
    """Assign a timing to every target word in alignment order."""
    upcoming = _next_timings(alignment, timings)
    emitted: List[EmittedWord] = []
    last_timing: Optional[Timing] = None

    for idx, op in enumerate(alignment):
        if op.op is OpType.DELETE:
            continue
        if op.has_timing:
            timing = timings[op.source_idx]
            last_timing = timing
        else:
            timing = upcoming[idx] or last_timing or _PLACEHOLDER_TIMING
        emitted.append(EmittedWord(
            text=target_words[op.target_idx],
            start=timing.start,
            end=timing.end,
            target_idx=op.target_idx,
        ))
    return emitted


def reconstruct(
    alignment: Sequence[AlignmentOp],
    source_words: Sequence[str],
    target_words: Sequence[str],
    timings: Sequence[Timing],
    corrected_text: str,
    policy: Optional[SpeakerDetectionPolicy] = None,
    granularity: Optional[str] = None,
) -> TranscriptDocument:
    """Build the aligned transcript from an alignment.

    Args:
        alignment: Forward-ordered ops from align_words().
        source_words: Machine-transcript words (speaker vocabulary).
        target_words: Corrected words, as returned by extract_target().
        timings: Machine timings, positionally aligned with source_words.
        corrected_text: The corrected text, re-scanned for paragraphs.
        policy: Must be the policy used for extract_target().
        granularity: Must be the granularity used for extract_target().

    Returns:
        A new TranscriptDocument owned by the caller.
    """
    emitted = emit_words(alignment, target_words, timings)
    words = [TimedWord(text=w.text, start=w.start, end=w.end) for w in emitted]

    ranges = detect_paragraphs(corrected_text, source_words, policy, granularity)
    paragraphs: List[Paragraph] = []

    if ranges:
        for rng in ranges:
            members = [
                w for w in emitted
                if rng.start_word_index <= w.target_idx <= rng.end_word_index
            ]
            if not members:
                continue
            paragraphs.append(Paragraph(
                start=members[0].start,
                end=members[-1].end,
                speaker=rng.speaker,
                word_count=len(members),
            ))
    elif emitted:
        paragraphs.append(Paragraph(
            start=emitted[0].start,
            end=emitted[-1].end,
            word_count=len(emitted),
        ))

    return TranscriptDocument(words=words, paragraphs=paragraphs)
