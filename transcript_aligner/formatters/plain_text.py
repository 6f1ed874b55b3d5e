"""Plain text formatter with one speaker-labeled line per paragraph.

WHY: Editors correct transcripts as plain text. Writing the aligned
transcript back out in the same line-per-utterance layout gives them a
file they can edit again and feed straight back into the aligner.

HOW: Paragraphs coming straight from the aligner carry a word_count, and
words are sliced off in order by those counts. Inserted words borrow
the timing of the next turn, so time alone cannot place them. For
paragraphs loaded from JSON (no counts) a word belongs to the last
paragraph whose start is at or before the word's start. Each paragraph
becomes one line, prefixed with "Speaker:" when it has a speaker.

RULES:
- One line per paragraph; paragraphs with no words produce no line
- Header format: "Name: " at the start of the line (vocabulary-policy layout)
- No paragraphs → all words on a single line
- Trailing newline after the last line; empty document → empty string
- Output suffix: "-aligned.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List, Optional

from transcript_aligner.core.ir import Paragraph, TimedWord, TranscriptDocument
from transcript_aligner.formatters.base import BaseFormatter, FormatterOutput


def _group_by_count(
    words: List[TimedWord],
    paragraphs: List[Paragraph],
) -> Optional[List[List[TimedWord]]]:
    """Slice words by each paragraph's word_count, or None if counts are unusable."""
    counts = [p.word_count for p in paragraphs]
    if any(c is None for c in counts) or sum(counts) != len(words):
        return None
    groups: List[List[TimedWord]] = []
    offset = 0
    for count in counts:
        groups.append(words[offset:offset + count])
        offset += count
    return groups


def _group_by_start(
    words: List[TimedWord],
    paragraphs: List[Paragraph],
) -> List[List[TimedWord]]:
    """Assign each word to the last paragraph starting at or before it."""
    groups: List[List[TimedWord]] = [[] for _ in paragraphs]
    current = 0
    for word in words:
        while current + 1 < len(paragraphs) and paragraphs[current + 1].start <= word.start:
            current += 1
        groups[current].append(word)
    return groups


def _group_words(
    words: List[TimedWord],
    paragraphs: List[Paragraph],
) -> List[List[TimedWord]]:
    """Split words into one group per paragraph, in reading order."""
    groups = _group_by_count(words, paragraphs)
    if groups is None:
        groups = _group_by_start(words, paragraphs)
    return groups


def _format_line(words: List[TimedWord], speaker: Optional[str]) -> str:
    text = " ".join(w.text for w in words)
    if speaker:
        return "{name}: {text}".format(name=speaker, text=text)
    return text


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces speaker-labeled plain text lines."""

    @property
    def name(self) -> str:
        return "Plain Text"

    @property
    def suffix(self) -> str:
        return "-aligned.txt"

    def format(self, document: TranscriptDocument) -> List[FormatterOutput]:
        """Convert the aligned transcript into editable plain text.

        Args:
            document: The aligned transcript.

        Returns:
            A single-element list containing the plain text output.
        """
        lines: List[str] = []
        if document.paragraphs:
            groups = _group_words(document.words, document.paragraphs)
            for paragraph, words in zip(document.paragraphs, groups):
                if words:
                    lines.append(_format_line(words, paragraph.speaker))
        elif document.words:
            lines.append(_format_line(document.words, None))

        content = "\n".join(lines)
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=content,
                media_type="text/plain",
            )
        ]
