"""Command-line interface for the Transcript Aligner.

WHY: Users need a simple way to re-time a corrected transcript from the
terminal. The CLI wires together the full pipeline — input loading and
validation, alignment, pluggable formatter output, and file saving —
behind a single command.

HOW: Uses argparse to accept the machine transcript JSON, the corrected
text file, speaker policy and granularity options, output format
selection, and output directory. Status messages go to stderr; output
files are saved next to the corrected text (or to --output-dir).

RULES:
- Positional arguments: machine transcript JSON path, corrected text path
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix} where stem is the corrected text's stem,
  numeric suffix on conflict (-aligned-2.json)
- Status output goes to stderr (not stdout)
- Errors print "Error: ..." to stderr and exit with status 1
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from transcript_aligner import config
from transcript_aligner.core.pipeline import align_transcripts_with_stats
from transcript_aligner.core.speakers import SPEAKER_POLICIES
from transcript_aligner.core.validation import (
    MalformedInputError,
    load_corrected_text,
    load_transcript_file,
)
from transcript_aligner.formatters import FORMATTERS
from transcript_aligner.formatters.base import FormatterOutput


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Pick an output path that does not clobber an earlier run.

    Editors often re-run the aligner after another round of corrections,
    so existing files are kept and the new one gets a counter:
    interview-aligned.json, interview-aligned-2.json, interview-aligned-3.json.
    The counter goes before the extension; a suffix without one gets it
    appended.
    """
    head, dot, ext = suffix.rpartition(".")
    if head:
        ext = dot + ext
    else:
        head, ext = suffix, ""

    candidate = output_dir / (stem + suffix)
    counter = 2
    while candidate.exists():
        candidate = output_dir / "{}{}-{}{}".format(stem, head, counter, ext)
        counter += 1
    return candidate


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save a single formatter output to disk as UTF-8 and return its path."""
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _parse_formats(formats: Optional[str]) -> List[str]:
    if not formats:
        return list(FORMATTERS.keys())
    format_keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in format_keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return format_keys


def run(args: argparse.Namespace) -> List[Path]:
    """Execute the alignment pipeline for parsed CLI arguments.

    RULES:
    - Validate both input files and the output directory before aligning
    - Malformed transcripts and unknown options exit with status 1
    - Each formatter's outputs are saved with conflict avoidance

    Returns:
        Paths of the saved output files.
    """
    machine_path = Path(args.machine_json).resolve()
    corrected_path = Path(args.corrected_text).resolve()

    for path in (machine_path, corrected_path):
        if not path.is_file():
            _fail("File not found: {}".format(path))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else corrected_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    format_keys = _parse_formats(args.formats)

    _status("Loading {}...".format(machine_path.name))
    try:
        machine = load_transcript_file(machine_path)
    except MalformedInputError as exc:
        _fail(str(exc))
    try:
        corrected_text = load_corrected_text(corrected_path)
    except MalformedInputError as exc:
        _fail(str(exc))
    _status("  {} machine words".format(len(machine.words)))

    _status("Aligning {}...".format(corrected_path.name))
    try:
        result = align_transcripts_with_stats(
            machine,
            corrected_text,
            speaker_policy=args.speaker_policy,
            granularity=args.granularity,
        )
    except ValueError as exc:
        _fail(str(exc))

    stats = result.stats
    _status("  {} words, {} paragraphs".format(
        len(result.document.words), len(result.document.paragraphs),
    ))
    _status("  {} matched, {} substituted, {} inserted, {} deleted".format(
        stats.matches, stats.substitutions, stats.insertions, stats.deletions,
    ))

    _status("Writing {}...".format(", ".join(format_keys)))
    written: List[Path] = []
    for key in format_keys:
        for output in FORMATTERS[key]().format(result.document):
            path = _save_output(output, corrected_path.stem, output_dir)
            written.append(path)
            _status("  {}".format(path.name))

    _status("Saved {} file(s) to {}".format(len(written), output_dir))
    return written


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the transcript_aligner command; also used by tests."""
    parser = argparse.ArgumentParser(
        prog="transcript_aligner",
        description="Carry word timings from a machine transcript over to a "
                    "human-corrected text and rebuild paragraphs and speakers.",
    )

    parser.add_argument(
        "machine_json",
        help="Path to the machine transcript JSON ({\"words\": [...]}).",
    )

    parser.add_argument(
        "corrected_text",
        help="Path to the corrected plain text transcript.",
    )

    parser.add_argument(
        "--speaker-policy",
        choices=sorted(SPEAKER_POLICIES.keys()),
        default=config.DEFAULT_SPEAKER_POLICY,
        help="How to recognize speaker labels at the start of a line "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "--granularity",
        choices=config.GRANULARITIES,
        default=config.DEFAULT_GRANULARITY,
        help="Split corrected text into paragraphs on every line or on blank "
             "lines (default: %(default)s).",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as the corrected text).",
    )

    parser.add_argument(
        "--log-level",
        default=config.DEFAULT_LOG_LEVEL,
        help="Logging level for diagnostics (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Run the CLI on argv (sys.argv when None)."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config.configure_logging(args.log_level)
    except ValueError as exc:
        _fail(str(exc))
    run(args)


if __name__ == "__main__":
    main()
