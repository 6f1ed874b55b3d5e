"""Transcript Aligner — re-time human-corrected transcripts.

WHY: Speech-to-text engines produce word-level timestamps but get words
wrong. Editors fix the words in plain text and lose every timestamp.
This package carries the machine timings over to the corrected text so
the edited transcript can drive interactive, time-coded playback again.

HOW: Four-stage pipeline — extract (machine words + corrected words),
align (Levenshtein edit distance), reconstruct (timings + paragraphs),
format (pluggable formatters). Each stage is independently testable.

RULES:
- Every stage consumes and produces the typed IR in core/ir.py
- The alignment core never raises once inputs pass boundary validation
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
