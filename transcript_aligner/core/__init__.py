"""Core alignment modules and intermediate representation.

WHY: The core package is the algorithmic heart of the aligner — the IR
dataclasses, the extractors, the edit-distance aligner, and the timing
reconstructor. Formatters, the CLI, and the HTTP API all sit on top of it.

HOW: ir.py defines the data structures, normalize.py and speakers.py hold
the tokenization and speaker-label rules, extract.py turns inputs into
word arrays, aligner.py aligns them, reconstruct.py rebuilds the timed
transcript, and pipeline.py chains everything behind align_transcripts().

RULES:
- IR dataclasses are the contract — change with care
- No module-level mutable state; every call is independent
- validation.py is the only place that raises on malformed input
"""
