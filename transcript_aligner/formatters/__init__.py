"""Registry of output formats by key.

WHY: CLI --formats values and API render paths are plain strings. One
mapping from those strings to formatter classes keeps both surfaces in
step when a format is added.

HOW: FORMATTERS holds classes; callers instantiate per use, e.g.
``FORMATTERS["plain_text"]().format(document)``.

RULES:
- Keys are snake_case and double as CLI values and URL path segments
- Importing this package has no side effects beyond class definitions
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from transcript_aligner.formatters.aligned_json import AlignedJSONFormatter
from transcript_aligner.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from transcript_aligner.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "aligned_json": AlignedJSONFormatter,
    "plain_text": PlainTextFormatter,
}
