"""Command-line entry point for LaTeX escaping.

Subcommands:

- ``escape``: escape text files (or stdin) for inclusion in LaTeX source.
- ``table``: render a CSV file as a LaTeX ``tabular`` environment.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from tqdm import tqdm

from latexize.escape import escape_latex
from latexize.tables import csv_to_latex_tabular

DEFAULT_SUFFIX = ".tex"


def _configure_logging(verbose: bool, log_file: Optional[str]) -> logging.Logger:
    """Attach stream and optional file handlers to the ``latexize`` logger."""

    logger = logging.getLogger("latexize")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.INFO)
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO if verbose else logging.WARNING)
    ch.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(ch)
    if log_file:
        lf_path = Path(log_file).expanduser()
        lf_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(lf_path), encoding="utf-8")
        fh.setLevel(logging.INFO)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logger.addHandler(fh)
    return logger


def _split_columns(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def output_path_for(src: Path, out_dir: Optional[Path], suffix: str) -> Path:
    """Return where the escaped copy of ``src`` should be written."""

    target_dir = out_dir if out_dir is not None else src.parent
    return target_dir / (src.name + suffix)


def cmd_escape(args: argparse.Namespace) -> int:
    """Escape stdin to stdout, or each input path to ``<name><suffix>``.

    Returns the process exit status: 1 when any file failed, else 0.
    """

    logger = _configure_logging(args.verbose, args.log_file)

    if not args.paths:
        try:
            text = sys.stdin.read()
        except UnicodeDecodeError as exc:
            logger.error("Failed to read stdin: %s", exc)
            return 1
        sys.stdout.write(escape_latex(text, encode_unicode=args.unicode))
        return 0

    out_dir = Path(args.output_dir).expanduser() if args.output_dir else None
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)

    sources = [Path(p).expanduser() for p in args.paths]
    iterator = (
        sources
        if args.no_progress
        else tqdm(sources, desc="Files", unit="file", file=sys.stderr)
    )

    failed = 0
    for src in iterator:
        try:
            text = src.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            failed += 1
            logger.error("Failed to read %s: %s", src, exc)
            continue
        dest = output_path_for(src, out_dir, args.suffix)
        if dest.resolve() == src.resolve():
            failed += 1
            logger.error("Refusing to overwrite input %s; use --suffix or -o", src)
            continue
        try:
            dest.write_text(
                escape_latex(text, encode_unicode=args.unicode), encoding="utf-8"
            )
        except OSError as exc:
            failed += 1
            logger.error("Failed to write %s: %s", dest, exc)
            continue
        logger.info("%s -> %s", src, dest)

    logger.info("Escaped %d file(s), %d failed", len(sources) - failed, failed)
    return 1 if failed else 0


def cmd_table(args: argparse.Namespace) -> int:
    """Render a CSV file as a LaTeX table; input errors exit with status 2."""

    logger = _configure_logging(args.verbose, None)
    raw = _split_columns(args.raw_columns)
    try:
        csv_to_latex_tabular(
            Path(args.csv).expanduser(),
            Path(args.tex).expanduser(),
            columns=_split_columns(args.columns),
            col_spec=args.col_spec,
            raw_columns=set(raw) if raw else None,
            category_collapse_column=args.collapse,
            encode_unicode=args.unicode,
        )
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 2
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Return the ``latexize`` argument parser."""

    parser = argparse.ArgumentParser(
        prog="latexize",
        description="Escape text and CSV tables for inclusion in LaTeX documents",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_esc = sub.add_parser("escape", help="Escape text files or stdin")
    p_esc.add_argument(
        "paths", nargs="*", help="Files to escape (default: read stdin, write stdout)"
    )
    p_esc.add_argument(
        "-o",
        "--output-dir",
        help="Directory for escaped copies (default: beside each input)",
    )
    p_esc.add_argument(
        "--suffix",
        default=DEFAULT_SUFFIX,
        help=f"Suffix appended to output file names (default: {DEFAULT_SUFFIX})",
    )
    p_esc.add_argument("--log-file", help="Write a detailed log to this file")
    p_esc.add_argument(
        "--no-progress", action="store_true", help="Disable the progress bar"
    )

    p_tab = sub.add_parser("table", help="Render a CSV file as a LaTeX tabular")
    p_tab.add_argument("csv", help="Input CSV file with a header row")
    p_tab.add_argument("tex", help="Output .tex file")
    p_tab.add_argument("--columns", help="Comma-separated columns to include, in order")
    p_tab.add_argument(
        "--raw-columns", help="Comma-separated columns that already contain LaTeX"
    )
    p_tab.add_argument("--col-spec", help="Explicit LaTeX column specification")
    p_tab.add_argument(
        "--collapse", help="Column whose consecutive repeated values are blanked"
    )

    for p in (p_esc, p_tab):
        p.add_argument(
            "--unicode",
            action="store_true",
            help="Also encode non-ASCII characters as LaTeX macros",
        )
        p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments and dispatch to the selected subcommand."""

    args = build_parser().parse_args(argv)
    if args.cmd == "table":
        return cmd_table(args)
    return cmd_escape(args)


if __name__ == "__main__":
    sys.exit(main())
