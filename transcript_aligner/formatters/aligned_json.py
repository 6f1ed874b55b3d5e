"""Aligned JSON formatter — the editor's native timed-transcript format.

WHY: The transcript editor loads {"words": [...], "paragraphs": [...]}
JSON, the same shape the machine transcript came in. Writing the aligned
result in that shape lets it replace the machine transcript directly.

HOW: TranscriptDocument.to_dict() builds the structure; the result is
validated against the bundled transcript schema and serialized with
two-space indentation.

RULES:
- Word keys: start, end, text; paragraph keys: start, end, speaker (optional)
- Output is validated before returning; a violation raises MalformedInputError
- Non-ASCII text is written as-is (ensure_ascii=False)
- Output suffix: "-aligned.json"
- Media type: "application/json"
"""

from __future__ import annotations

import json
from typing import List

from transcript_aligner.core.ir import TranscriptDocument
from transcript_aligner.core.validation import validate_transcript_dict
from transcript_aligner.formatters.base import BaseFormatter, FormatterOutput


class AlignedJSONFormatter(BaseFormatter):
    """Formatter that writes the aligned transcript as editor JSON."""

    @property
    def name(self) -> str:
        return "Aligned JSON"

    @property
    def suffix(self) -> str:
        return "-aligned.json"

    def format(self, document: TranscriptDocument) -> List[FormatterOutput]:
        data = document.to_dict()
        validate_transcript_dict(data)
        return [
            FormatterOutput(
                suffix=self.suffix,
                content=json.dumps(data, indent=2, ensure_ascii=False) + "\n",
                media_type="application/json",
            )
        ]
