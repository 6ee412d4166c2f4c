"""
Tests for the latexize command line.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from latexize.cli import main, output_path_for


def test_escape_reads_stdin_and_writes_stdout(monkeypatch, capsys) -> None:
    """With no paths the escape subcommand filters stdin to stdout."""

    monkeypatch.setattr("sys.stdin", io.StringIO("50% of {x}\n"))
    assert main(["escape"]) == 0
    assert capsys.readouterr().out == "50\\% of \\{x\\}\n"


def test_escape_writes_one_output_per_file(tmp_path: Path) -> None:
    """Each input gets an escaped sibling in the output directory."""

    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("a_b", encoding="utf-8")
    second.write_text("café & co", encoding="utf-8")
    out_dir = tmp_path / "out"

    status = main(
        [
            "escape",
            str(first),
            str(second),
            "-o",
            str(out_dir),
            "--unicode",
            "--no-progress",
        ]
    )

    assert status == 0
    assert (out_dir / "a.txt.tex").read_text(encoding="utf-8") == "a\\_b"
    assert (out_dir / "b.txt.tex").read_text(encoding="utf-8") == "caf\\'e \\& co"


def test_escape_reports_failures_and_continues(tmp_path: Path) -> None:
    """Unreadable inputs are counted and yield a non-zero exit status."""

    good = tmp_path / "good.txt"
    good.write_text("#1", encoding="utf-8")
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"\xff\xfe\x00bad")
    log_file = tmp_path / "logs" / "run.log"

    status = main(
        [
            "escape",
            str(bad),
            str(tmp_path / "missing.txt"),
            str(good),
            "--suffix",
            ".out",
            "--no-progress",
            "--log-file",
            str(log_file),
        ]
    )

    assert status == 1
    assert (tmp_path / "good.txt.out").read_text(encoding="utf-8") == "\\#1"
    assert not (tmp_path / "bad.txt.out").exists()
    assert "Failed to read" in log_file.read_text(encoding="utf-8")


def test_table_subcommand(tmp_path: Path) -> None:
    """The table subcommand renders CSV files and reports input errors."""

    csv_path = tmp_path / "t.csv"
    csv_path.write_text("k,v\nx,$1\n", encoding="utf-8")
    tex_path = tmp_path / "t.tex"

    assert main(["table", str(csv_path), str(tex_path), "--columns", "v,k"]) == 0
    assert r"\$1 & x \\" in tex_path.read_text(encoding="utf-8")

    assert main(["table", str(tmp_path / "nope.csv"), str(tex_path)]) == 2


def test_subcommand_is_required() -> None:
    """Running without a subcommand is an argparse error."""

    with pytest.raises(SystemExit):
        main([])


def test_output_path_for_defaults_to_input_directory(tmp_path: Path) -> None:
    """Without an output directory the escaped copy sits beside its input."""

    src = tmp_path / "notes.md"
    assert output_path_for(src, None, ".tex") == tmp_path / "notes.md.tex"
    assert output_path_for(src, tmp_path / "o", ".x") == tmp_path / "o" / "notes.md.x"


def test_escape_refuses_to_overwrite_input(tmp_path: Path) -> None:
    """An empty suffix without an output directory leaves the input intact."""

    src = tmp_path / "a.txt"
    src.write_text("{x}", encoding="utf-8")

    assert main(["escape", str(src), "--suffix", "", "--no-progress"]) == 1
    assert src.read_text(encoding="utf-8") == "{x}"


def test_escape_reports_undecodable_stdin(monkeypatch, capsys) -> None:
    """Non-UTF-8 stdin is logged and yields exit status 1."""

    stdin = io.TextIOWrapper(io.BytesIO(b"\xff\xfe bad"), encoding="utf-8")
    monkeypatch.setattr("sys.stdin", stdin)
    assert main(["escape"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Failed to read stdin" in captured.err


def test_table_reports_directory_as_csv(tmp_path: Path) -> None:
    """A directory passed as the CSV is an input error, not a traceback."""

    folder = tmp_path / "csvdir"
    folder.mkdir()
    assert main(["table", str(folder), str(tmp_path / "out.tex")]) == 2
