"""End-to-end alignment: machine transcript + corrected text → timed transcript.

WHY: Callers (CLI, HTTP API, other Python code) should not have to wire
the extractors, aligner, and reconstructor together themselves, or keep
the speaker policy and granularity consistent across the two corrected-
text passes. align_transcripts() is the one entry point.

HOW: Resolve the policy and granularity once, validate a raw dict at the
boundary, extract both word arrays, align, reconstruct. The *_with_stats
variant also returns operation counts for reporting.

RULES:
- machine_transcript may be a TranscriptDocument or a decoded JSON dict
- Raw dicts are validated; malformed input raises MalformedInputError
- Unknown policy names or granularities raise ValueError
- The same policy instance and granularity feed both extraction passes
- No state survives the call; the result is owned by the caller
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from transcript_aligner import config
from transcript_aligner.core.aligner import align_words, summarize_alignment
from transcript_aligner.core.extract import extract_source, extract_target
from transcript_aligner.core.ir import AlignmentStats, TranscriptDocument
from transcript_aligner.core.reconstruct import reconstruct
from transcript_aligner.core.speakers import SpeakerDetectionPolicy, get_speaker_policy
from transcript_aligner.core.validation import parse_transcript

logger = logging.getLogger(__name__)

MachineTranscript = Union[TranscriptDocument, Dict[str, Any]]


@dataclass
class AlignmentResult:
    """The aligned transcript together with its operation counts."""

    document: TranscriptDocument
    stats: AlignmentStats


def align_transcripts_with_stats(
    machine_transcript: MachineTranscript,
    corrected_text: str,
    speaker_policy: Union[str, SpeakerDetectionPolicy, None] = None,
    granularity: Optional[str] = None,
) -> AlignmentResult:
    """Align corrected text to a machine transcript and report edit counts.

    Args:
        machine_transcript: Timed machine words, typed or as decoded JSON.
        corrected_text: Human-corrected plain text without timings.
        speaker_policy: Registry key, policy instance, or None for the default.
        granularity: "line", "blank_line", or None for the default.

    Returns:
        AlignmentResult with the new TranscriptDocument and AlignmentStats.
    """
    if isinstance(machine_transcript, TranscriptDocument):
        document = machine_transcript
    else:
        document = parse_transcript(machine_transcript)

    policy = get_speaker_policy(speaker_policy)
    granularity = config.validate_granularity(granularity or config.DEFAULT_GRANULARITY)

    source_words, timings = extract_source(document)
    target_words = extract_target(corrected_text, source_words, policy, granularity)
    alignment = align_words(source_words, target_words)
    aligned = reconstruct(
        alignment,
        source_words,
        target_words,
        timings,
        corrected_text,
        policy,
        granularity,
    )

    stats = summarize_alignment(alignment)
    logger.debug(
        "Aligned %d machine words to %d corrected words (%s policy, %s units): "
        "%d match, %d substitute, %d insert, %d delete, %d paragraphs",
        len(source_words), len(target_words), policy.name, granularity,
        stats.matches, stats.substitutions, stats.insertions, stats.deletions,
        len(aligned.paragraphs),
    )
    return AlignmentResult(document=aligned, stats=stats)


def align_transcripts(
    machine_transcript: MachineTranscript,
    corrected_text: str,
    speaker_policy: Union[str, SpeakerDetectionPolicy, None] = None,
    granularity: Optional[str] = None,
) -> TranscriptDocument:
    """Align corrected text to a machine transcript.

    Example:
        >>> doc = align_transcripts(
        ...     {"words": [{"text": "hello", "start": 0, "end": 1},
        ...                {"text": "world", "start": 1, "end": 2}]},
        ...     "hello my world",
        ... )
        >>> [(w.text, w.start, w.end) for w in doc.words]
        [('hello', 0, 1), ('my', 1, 2), ('world', 1, 2)]
    """
    return align_transcripts_with_stats(
        machine_transcript, corrected_text, speaker_policy, granularity
    ).document
