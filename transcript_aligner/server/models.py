"""Pydantic schemas for alignment requests and responses.

WHY: FastAPI derives request parsing, response shaping, and the /docs
page from these classes. Keeping them apart from the core dataclasses
lets the wire format be documented without leaking pydantic into the
alignment code.

HOW: The alignment request carries the machine transcript as a raw JSON
object (validated by core.validation so the CLI and API share one set of
rules) plus the corrected text and optional policy settings. Enums
represent closed sets like policy names and granularities.

RULES:
- Every field carries a description for the generated OpenAPI docs
- Enum values match internal registry keys exactly
- typing.Optional / List / Dict / Union rather than PEP 604 unions (Python 3.9)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SpeakerPolicyName(str, Enum):
    """Available speaker detection policies.

    RULES:
    - Values match keys in transcript_aligner.core.speakers.SPEAKER_POLICIES
    """

    vocabulary = "vocabulary"
    bracket = "bracket"
    none = "none"


class Granularity(str, Enum):
    """How corrected text is split into paragraphs."""

    line = "line"
    blank_line = "blank_line"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class AlignmentRequest(BaseModel):
    """Machine transcript and corrected text to align.

    RULES:
    - machine_transcript is validated against the transcript schema
    - speaker_policy and granularity fall back to the server defaults
    """

    machine_transcript: Dict[str, Any] = Field(
        description="Machine transcript JSON: {\"words\": [{\"text\", \"start\", \"end\"}, ...]}.",
    )
    corrected_text: str = Field(
        description="Human-corrected plain text, one utterance per line.",
    )
    speaker_policy: Optional[SpeakerPolicyName] = Field(
        default=None,
        description="Speaker label detection policy. Defaults to the server setting.",
    )
    granularity: Optional[Granularity] = Field(
        default=None,
        description="Paragraph split: every line or blank lines. Defaults to the server setting.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "machine_transcript": {
                    "words": [
                        {"text": "hello", "start": 0.0, "end": 0.4},
                        {"text": "world", "start": 0.5, "end": 0.9},
                    ],
                },
                "corrected_text": "Alice: hello my world",
                "speaker_policy": "vocabulary",
                "granularity": "line",
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class WordModel(BaseModel):
    """One timed word."""

    text: str = Field(description="Word text as written in the corrected transcript.")
    start: Union[int, float] = Field(description="Start time in seconds.")
    end: Union[int, float] = Field(description="End time in seconds.")


class ParagraphModel(BaseModel):
    """One paragraph span."""

    start: Union[int, float] = Field(description="Start of the first word, in seconds.")
    end: Union[int, float] = Field(description="End of the last word, in seconds.")
    speaker: Optional[str] = Field(default=None, description="Speaker label, when detected.")


class TranscriptModel(BaseModel):
    """Aligned transcript in the editor's JSON shape."""

    words: List[WordModel] = Field(description="Corrected words with borrowed timings.")
    paragraphs: List[ParagraphModel] = Field(description="Paragraphs rebuilt from the corrected text.")


class StatsModel(BaseModel):
    """Operation counts of the alignment."""

    matches: int = Field(description="Words identical in both transcripts (case-insensitive).")
    substitutions: int = Field(description="Machine words replaced by a corrected word.")
    insertions: int = Field(description="Corrected words with no machine counterpart.")
    deletions: int = Field(description="Machine words removed by the editor.")
    edit_distance: int = Field(description="Substitutions + insertions + deletions.")


class AlignmentResponse(BaseModel):
    """Result of an alignment request."""

    transcript: TranscriptModel = Field(description="The aligned transcript.")
    stats: StatsModel = Field(description="Alignment operation counts.")


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API paths.")
    name: str = Field(description="Display name, e.g. 'Plain Text'.")
    suffix: str = Field(description="File suffix produced (e.g. '-aligned.json').")


class ErrorResponse(BaseModel):
    """Body of every 4xx response raised by the app."""

    detail: str = Field(description="What was wrong with the request.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Always 'ok' while the process serves requests.", json_schema_extra={"example": "ok"})
    version: str = Field(description="Package version.", json_schema_extra={"example": "0.1.0"})
