"""Configuration constants, alignment defaults, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Default speaker policy, paragraph granularity,
and the large-table warning threshold are plain data — not buried in
logic — so both humans and coding agents can modify them confidently.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level strings, tuples, and numbers. configure_logging() gives
the CLI and the API server one shared logging setup.

RULES:
- PUNCTUATION_CHARS are the trailing characters stripped for comparison
- PLACEHOLDER_START/END are used only when an alignment has no timing at all
- GRANULARITIES lists the supported ways to split corrected text
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Tokenization
# ---------------------------------------------------------------------------

PUNCTUATION_CHARS = ".,!?;:'\""
"""Trailing characters removed by normalize_word() before comparison."""

GRANULARITIES = ("line", "blank_line")
"""Supported corrected-text unit splits: single newline or blank line."""

# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------

PLACEHOLDER_START = 0.0
PLACEHOLDER_END = 0.1
"""Timing given to inserted words when the alignment has no timed word at all."""

# ---------------------------------------------------------------------------
# Alignment defaults
# ---------------------------------------------------------------------------

DEFAULT_SPEAKER_POLICY = os.getenv("ALIGNER_SPEAKER_POLICY", "vocabulary")
DEFAULT_GRANULARITY = os.getenv("ALIGNER_GRANULARITY", "line")

# The DP table is (m+1) x (n+1); 25M cells is roughly a 5k x 5k word pair.
LARGE_TABLE_WARNING_CELLS = int(os.getenv("ALIGNER_LARGE_TABLE_CELLS", "25000000"))

# ---------------------------------------------------------------------------
# Logging and server
# ---------------------------------------------------------------------------

DEFAULT_LOG_LEVEL = os.getenv("ALIGNER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

API_HOST = os.getenv("ALIGNER_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("ALIGNER_API_PORT", "8000"))


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the CLI and API entry points.

    WHY: Library modules only create named loggers; the process entry
    point decides where records go and how verbose they are.

    HOW: logging.basicConfig with the shared LOG_FORMAT. The level name
    falls back to DEFAULT_LOG_LEVEL.

    RULES:
    - Unknown level names raise ValueError
    - Safe to call more than once (basicConfig is a no-op after the first)
    """
    name = (level or DEFAULT_LOG_LEVEL).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError("Unknown log level: {}".format(level))
    logging.basicConfig(level=numeric, format=LOG_FORMAT)


def validate_granularity(granularity: str) -> str:
    """Return granularity unchanged, raising ValueError if unsupported."""
    if granularity not in GRANULARITIES:
        raise ValueError(
            "Unknown granularity '{}'. Available: {}".format(
                granularity, ", ".join(GRANULARITIES)
            )
        )
    return granularity
