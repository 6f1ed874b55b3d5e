"""Intermediate representation dataclasses for timed transcripts and alignments.

WHY: The machine transcript arrives as loosely-typed JSON and the
corrected text as a bare string. Every stage of the aligner needs the
same notions — a timed word, a paragraph, an edit operation — with
required and optional fields spelled out. The IR gives all stages one
well-typed vocabulary instead of dynamic property bags.

HOW: Dataclasses form two groups:
  Transcript side — Timing, TimedWord, Paragraph, TranscriptDocument
  Alignment side  — OpType, AlignmentOp, ParagraphRange, EmittedWord,
                    AlignmentStats

RULES:
- All times are float seconds, copied from the machine transcript as-is
- TimedWord and AlignmentOp are frozen; they are never mutated after creation
- Paragraph.speaker is optional and omitted from JSON output when None
- AlignmentOp.source_idx is None for INSERT, target_idx is None for DELETE
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Timing:
    """A start/end pair in seconds borrowed from a machine-transcript word."""

    start: float
    end: float


@dataclass(frozen=True)
class TimedWord:
    """One word with its start and end time.

    RULES:
    - text: the word as written, punctuation and case preserved
    - start <= end is expected from upstream but not enforced here
    """

    text: str
    start: float
    end: float

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end, "text": self.text}


@dataclass
class Paragraph:
    """A span of words attributed (optionally) to one speaker.

    RULES:
    - start is the start of the first word in the span
    - end is the end of the last word in the span
    - speaker is None when no speaker label was detected
    - word_count is set by the aligner (number of words in the span) and
      is not serialized; paragraphs parsed from JSON leave it None
    """

    start: float
    end: float
    speaker: Optional[str] = None
    word_count: Optional[int] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"start": self.start, "end": self.end}
        if self.speaker:
            data["speaker"] = self.speaker
        return data


@dataclass
class TranscriptDocument:
    """The complete timed transcript — input and output of the aligner.

    WHY: Machine transcripts and aligned output share the same JSON shape
    ({"words": [...], "paragraphs": [...]}), so one type serves both.

    RULES:
    - words is always present, possibly empty
    - paragraphs are intended to be disjoint and ordered by start time
    - to_dict() produces the exact JSON shape consumed by the editor
    """

    words: List[TimedWord] = field(default_factory=list)
    paragraphs: List[Paragraph] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "words": [w.to_dict() for w in self.words],
            "paragraphs": [p.to_dict() for p in self.paragraphs],
        }


class OpType(str, Enum):
    """The four Levenshtein edit operations."""

    MATCH = "match"
    SUBSTITUTE = "substitute"
    INSERT = "insert"
    DELETE = "delete"


@dataclass(frozen=True)
class AlignmentOp:
    """One step of an alignment between source and target word arrays.

    WHY: The reconstructor needs to know, for each corrected word, which
    machine word (if any) lends it a timing. An explicit tagged record
    keeps that mapping readable and hashable.

    RULES:
    - MATCH / SUBSTITUTE: both indices set
    - INSERT: source_idx is None (word exists only in the corrected text)
    - DELETE: target_idx is None (word exists only in the machine transcript)
    """

    op: OpType
    source_idx: Optional[int]
    target_idx: Optional[int]

    @classmethod
    def match(cls, source_idx: int, target_idx: int) -> "AlignmentOp":
        return cls(OpType.MATCH, source_idx, target_idx)

    @classmethod
    def substitute(cls, source_idx: int, target_idx: int) -> "AlignmentOp":
        return cls(OpType.SUBSTITUTE, source_idx, target_idx)

    @classmethod
    def insert(cls, target_idx: int) -> "AlignmentOp":
        return cls(OpType.INSERT, None, target_idx)

    @classmethod
    def delete(cls, source_idx: int) -> "AlignmentOp":
        return cls(OpType.DELETE, source_idx, None)

    @property
    def has_timing(self) -> bool:
        """True when this op maps a target word onto a timed source word."""
        return self.op in (OpType.MATCH, OpType.SUBSTITUTE)


@dataclass(frozen=True)
class ParagraphRange:
    """A paragraph detected in the corrected text, as target word indices.

    RULES:
    - start_word_index / end_word_index are inclusive indices into the
      flat target word array
    - word_count == end_word_index - start_word_index + 1
    - speaker is None when the unit had no speaker label
    """

    start_word_index: int
    end_word_index: int
    word_count: int
    speaker: Optional[str] = None


@dataclass(frozen=True)
class EmittedWord:
    """A corrected word with its borrowed timing, tagged for paragraph lookup."""

    text: str
    start: float
    end: float
    target_idx: int


@dataclass
class AlignmentStats:
    """Operation counts for one alignment."""

    matches: int = 0
    substitutions: int = 0
    insertions: int = 0
    deletions: int = 0

    @property
    def edit_distance(self) -> int:
        return self.substitutions + self.insertions + self.deletions

    def to_dict(self) -> Dict[str, int]:
        return {
            "matches": self.matches,
            "substitutions": self.substitutions,
            "insertions": self.insertions,
            "deletions": self.deletions,
            "edit_distance": self.edit_distance,
        }
