"""Tests for the command-line interface.

WHY: The CLI is how most users run the aligner. It must write the right
files under the right names, never overwrite earlier output, and fail
with a clear message and exit status 1 on bad input.

HOW: main() is called with an explicit argv against files written to
pytest's tmp_path. Status output is read from stderr with capsys.

RULES:
- Output files are named {corrected stem}{formatter suffix}
- Existing outputs get a numeric suffix instead of being overwritten
- Every error path exits with status 1 and prints "Error: ..." to stderr
"""

import json

import pytest

from transcript_aligner.cli import _resolve_output_path, build_parser, main


@pytest.fixture
def input_files(tmp_path, machine_transcript_dict, corrected_text):
    """Machine JSON and corrected text written to a temp directory."""
    machine_path = tmp_path / "interview.json"
    machine_path.write_text(json.dumps(machine_transcript_dict), encoding="utf-8")
    corrected_path = tmp_path / "interview-edited.txt"
    corrected_path.write_text(corrected_text, encoding="utf-8")
    return machine_path, corrected_path


class TestMain:
    """Happy-path CLI runs."""

    def test_writes_all_formats(self, input_files, tmp_path, corrected_text):
        """Default run writes aligned JSON and plain text next to the input."""
        machine_path, corrected_path = input_files
        main([str(machine_path), str(corrected_path)])

        json_path = tmp_path / "interview-edited-aligned.json"
        text_path = tmp_path / "interview-edited-aligned.txt"
        data = json.loads(json_path.read_text(encoding="utf-8"))
        assert data["paragraphs"][0]["speaker"] == "Alice"
        assert text_path.read_text(encoding="utf-8") == corrected_text + "\n"

    def test_formats_flag(self, input_files, tmp_path):
        """--formats restricts output to the listed formatters."""
        machine_path, corrected_path = input_files
        main([str(machine_path), str(corrected_path), "--formats", "plain_text"])
        assert (tmp_path / "interview-edited-aligned.txt").exists()
        assert not (tmp_path / "interview-edited-aligned.json").exists()

    def test_output_dir(self, input_files, tmp_path):
        """--output-dir writes files to the given directory."""
        machine_path, corrected_path = input_files
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main([str(machine_path), str(corrected_path), "--output-dir", str(out_dir)])
        assert sorted(p.name for p in out_dir.iterdir()) == [
            "interview-edited-aligned.json",
            "interview-edited-aligned.txt",
        ]

    def test_rerun_does_not_overwrite(self, input_files, tmp_path):
        """A second run gets -2 suffixed files."""
        machine_path, corrected_path = input_files
        main([str(machine_path), str(corrected_path), "--formats", "aligned_json"])
        main([str(machine_path), str(corrected_path), "--formats", "aligned_json"])
        assert (tmp_path / "interview-edited-aligned.json").exists()
        assert (tmp_path / "interview-edited-aligned-2.json").exists()

    def test_speaker_policy_flag(self, input_files, tmp_path):
        """--speaker-policy none keeps speaker labels as words."""
        machine_path, corrected_path = input_files
        main([
            str(machine_path), str(corrected_path),
            "--speaker-policy", "none", "--formats", "aligned_json",
        ])
        data = json.loads((tmp_path / "interview-edited-aligned.json").read_text(encoding="utf-8"))
        assert data["words"][0]["text"] == "Alice:"
        assert all("speaker" not in p for p in data["paragraphs"])

    def test_status_goes_to_stderr(self, input_files, capsys):
        """Progress and stats are printed to stderr, stdout stays empty."""
        machine_path, corrected_path = input_files
        main([str(machine_path), str(corrected_path)])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "9 matched, 2 substituted, 0 inserted, 0 deleted" in captured.err
        assert "Saved 2 file(s)" in captured.err


class TestErrors:
    """Error paths exit with status 1."""

    def _assert_fails(self, argv, capsys, message):
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
        assert excinfo.value.code == 1
        assert message in capsys.readouterr().err

    def test_missing_machine_file(self, input_files, tmp_path, capsys):
        _, corrected_path = input_files
        self._assert_fails(
            [str(tmp_path / "nope.json"), str(corrected_path)], capsys, "Error: File not found",
        )

    def test_missing_corrected_file(self, input_files, tmp_path, capsys):
        machine_path, _ = input_files
        self._assert_fails(
            [str(machine_path), str(tmp_path / "nope.txt")], capsys, "Error: File not found",
        )

    def test_missing_output_dir(self, input_files, tmp_path, capsys):
        machine_path, corrected_path = input_files
        self._assert_fails(
            [str(machine_path), str(corrected_path), "--output-dir", str(tmp_path / "nope")],
            capsys,
            "Output directory does not exist",
        )

    def test_unknown_format(self, input_files, capsys):
        machine_path, corrected_path = input_files
        self._assert_fails(
            [str(machine_path), str(corrected_path), "--formats", "docx"],
            capsys,
            "Unknown format 'docx'",
        )

    def test_malformed_transcript(self, input_files, capsys):
        machine_path, corrected_path = input_files
        machine_path.write_text(json.dumps({"words": [{"text": "hi"}]}), encoding="utf-8")
        self._assert_fails(
            [str(machine_path), str(corrected_path)], capsys, "Malformed transcript at words/0",
        )

    def test_invalid_json(self, input_files, capsys):
        machine_path, corrected_path = input_files
        machine_path.write_text("{", encoding="utf-8")
        self._assert_fails([str(machine_path), str(corrected_path)], capsys, "Invalid JSON")

    def test_machine_file_not_utf8(self, input_files, capsys):
        machine_path, corrected_path = input_files
        machine_path.write_bytes(b"\xff")
        self._assert_fails([str(machine_path), str(corrected_path)], capsys, "not valid UTF-8")

    def test_corrected_file_not_utf8(self, input_files, capsys):
        machine_path, corrected_path = input_files
        corrected_path.write_bytes(b"Alice: caf\xe9")
        self._assert_fails([str(machine_path), str(corrected_path)], capsys, "not valid UTF-8")

    def test_unknown_log_level(self, input_files, capsys):
        machine_path, corrected_path = input_files
        self._assert_fails(
            [str(machine_path), str(corrected_path), "--log-level", "LOUD"],
            capsys,
            "Unknown log level",
        )


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["a.json", "b.txt"])
        assert args.speaker_policy == "vocabulary"
        assert args.granularity == "line"
        assert args.formats is None
        assert args.output_dir is None

    def test_rejects_unknown_policy(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["a.json", "b.txt", "--speaker-policy", "magic"])


class TestResolveOutputPath:

    def test_no_conflict(self, tmp_path):
        assert _resolve_output_path("talk", "-aligned.json", tmp_path) == tmp_path / "talk-aligned.json"

    def test_counter_increments(self, tmp_path):
        (tmp_path / "talk-aligned.txt").write_text("")
        (tmp_path / "talk-aligned-2.txt").write_text("")
        assert _resolve_output_path("talk", "-aligned.txt", tmp_path) == tmp_path / "talk-aligned-3.txt"
