"""Boundary validation and loading of machine transcripts and corrected text.

WHY: The alignment core is total — it never raises — but only because it
trusts its inputs to be well-typed. Raw JSON from files, HTTP requests,
or other tools must be checked once at the boundary so a missing "start"
or a string timestamp fails fast with a clear message instead of
surfacing as a TypeError deep inside the reconstructor.

HOW: parse_transcript() validates a decoded JSON value against the
bundled transcript_schema.json with jsonschema, then builds the typed IR.
load_transcript_file() and load_corrected_text() wrap the file I/O.

RULES:
- Top-level value must be an object; "words" and "paragraphs" are optional
- Each word needs string "text" and numeric "start"/"end" (bools rejected)
- Any violation raises MalformedInputError carrying the schema message
- Invalid JSON or non-UTF-8 bytes in a file raise MalformedInputError
- Missing files raise FileNotFoundError (not wrapped)
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
from jsonschema.exceptions import best_match

from transcript_aligner.core.ir import Paragraph, TimedWord, TranscriptDocument

_SCHEMA_PATH = Path(__file__).resolve().parent / "transcript_schema.json"


class MalformedInputError(ValueError):
    """Raised when a machine transcript does not have the expected shape.

    Inherits from ValueError so callers that already handle configuration
    and value errors (CLI, API) catch it without a separate branch.
    """


@lru_cache(maxsize=1)
def _get_schema() -> Dict[str, Any]:
    with open(_SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def validate_transcript_dict(data: Any) -> None:
    """Check data against the transcript schema.

    Raises:
        MalformedInputError: On the most relevant schema violation.
    """
    validator = jsonschema.Draft7Validator(_get_schema())
    error = best_match(validator.iter_errors(data))
    if error is None:
        return
    location = "/".join(str(part) for part in error.absolute_path) or "<root>"
    raise MalformedInputError(
        "Malformed transcript at {}: {}".format(location, error.message)
    )


def parse_transcript(data: Any) -> TranscriptDocument:
    """Validate a decoded JSON value and build a TranscriptDocument.

    Args:
        data: The decoded machine transcript, e.g. from json.load().

    Returns:
        The typed transcript. A missing "words" key yields an empty document.

    Raises:
        MalformedInputError: If data does not match the transcript schema.
    """
    validate_transcript_dict(data)

    words: List[TimedWord] = [
        TimedWord(text=w["text"], start=w["start"], end=w["end"])
        for w in data.get("words", [])
    ]
    paragraphs: List[Paragraph] = [
        Paragraph(
            start=p["start"],
            end=p["end"],
            speaker=p.get("speaker") or None,
        )
        for p in data.get("paragraphs", [])
    ]
    return TranscriptDocument(words=words, paragraphs=paragraphs)


def _read_utf8(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedInputError("{} is not valid UTF-8: {}".format(path, exc)) from exc


def load_transcript_file(path: str | Path) -> TranscriptDocument:
    """Load and validate a machine transcript JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedInputError: If the file is not UTF-8, not valid JSON, or
            has the wrong shape.
    """
    text = _read_utf8(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedInputError("Invalid JSON in {}: {}".format(path, exc)) from exc
    return parse_transcript(data)


def load_corrected_text(path: str | Path) -> str:
    """Load corrected transcript text from a UTF-8 file.

    Windows line endings are normalized to "\\n" so line splitting sees
    the same units on every platform.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedInputError: If the file is not valid UTF-8.
    """
    return _read_utf8(path).replace("\r\n", "\n")
