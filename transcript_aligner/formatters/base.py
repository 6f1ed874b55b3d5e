"""Formatter interface shared by every aligned-transcript output.

WHY: The CLI writes files and the API returns downloads, but both only
need "give me the bytes for format X". A common interface lets them treat
aligned JSON, plain text, and any future format the same way.

HOW: BaseFormatter declares a display name, a file suffix, and format().
FormatterOutput carries one rendered file: its suffix, text content, and
MIME type.

RULES:
- format() never mutates the document it is given
- A formatter may return several outputs; the first uses ``suffix``
- Suffixes begin with "-" and include the extension ("-aligned.txt")
- Callers choose the file stem; formatters only know the suffix
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from transcript_aligner.core.ir import TranscriptDocument


@dataclass
class FormatterOutput:
    """A single rendered file.

    Attributes:
        suffix: Appended to the caller's stem, so ``"-aligned.txt"`` on
                ``"interview"`` gives ``"interview-aligned.txt"``.
        content: Rendered text, written as UTF-8.
        media_type: MIME type used for HTTP downloads.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Renders an aligned TranscriptDocument into file content.

    New formats subclass this, implement the three members below, and
    add their class to FORMATTERS in formatters/__init__.py.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name shown by GET /formats, e.g. 'Plain Text'."""

    @property
    @abstractmethod
    def suffix(self) -> str:
        """Suffix of the primary output file."""

    @abstractmethod
    def format(self, document: TranscriptDocument) -> list[FormatterOutput]:
        """Render document.

        Args:
            document: Aligned words and paragraphs.

        Returns:
            One FormatterOutput per file, primary file first.
        """
