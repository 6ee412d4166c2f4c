"""Render CSV data as LaTeX ``tabular`` environments.

Every cell and header label goes through :func:`latexize.escape.escape_latex`
unless its column is explicitly marked as raw LaTeX.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Set

from latexize.escape import escape_latex

LOGGER = logging.getLogger(__name__)

GENERATED_BANNER = "% NOTE: auto-generated by latexize; edits will be lost.\n"


def _collapse_repeats(
    rows: Sequence[Mapping[str, str]], column: str
) -> List[Mapping[str, str]]:
    """Blank ``column`` on rows that repeat the previous row's value."""

    last_value: Optional[str] = None
    collapsed: List[Mapping[str, str]] = []
    for row in rows:
        value = str(row.get(column, ""))
        if last_value is not None and value == last_value:
            new_row = dict(row)
            new_row[column] = ""
            collapsed.append(new_row)
        else:
            collapsed.append(row)
            last_value = value
    return collapsed


def rows_to_latex_tabular(
    rows: Sequence[Mapping[str, str]],
    columns: Sequence[str],
    *,
    header_labels: Optional[Mapping[str, str]] = None,
    col_spec: Optional[str] = None,
    raw_columns: Optional[Set[str]] = None,
    category_collapse_column: Optional[str] = None,
    encode_unicode: bool = False,
) -> str:
    """Return a ``booktabs`` style ``tabular`` for ``rows``.

    Parameters
    ----------
    rows:
        Row mappings keyed by column name. Missing keys render as empty cells.
    columns:
        Ordered column names to include.
    header_labels:
        Optional mapping from column name to header label.
    col_spec:
        Optional LaTeX column specification; defaults to one ``l`` per column.
    raw_columns:
        Column names whose values are already LaTeX and must not be escaped.
    category_collapse_column:
        Column whose consecutive repeated values are blanked after the first.
    encode_unicode:
        Forwarded to :func:`escape_latex` for every escaped cell.

    Returns
    -------
    str
        The complete ``tabular`` environment, newline terminated.
    """

    raw = raw_columns or set()
    labels = header_labels or {}
    spec = col_spec if col_spec is not None else "l" * len(columns)

    if category_collapse_column is not None:
        rows = _collapse_repeats(rows, category_collapse_column)

    def cell(name: str, value: object) -> str:
        if name in raw:
            return str(value)
        return escape_latex(value, encode_unicode=encode_unicode)

    lines = [r"\begin{tabular}{" + spec + "}", r"\toprule"]
    header = [cell(name, labels.get(name, name)) for name in columns]
    lines.append(" & ".join(header) + r" \\")
    lines.append(r"\midrule")
    for row in rows:
        cells = [cell(name, row.get(name, "") or "") for name in columns]
        lines.append(" & ".join(cells) + r" \\")
    lines.append(r"\bottomrule")
    lines.append(r"\end{tabular}")
    return "\n".join(lines) + "\n"


def csv_to_latex_tabular(
    csv_path: Path,
    tex_path: Path,
    *,
    columns: Optional[Sequence[str]] = None,
    header_labels: Optional[Mapping[str, str]] = None,
    col_spec: Optional[str] = None,
    raw_columns: Optional[Set[str]] = None,
    category_collapse_column: Optional[str] = None,
    encode_unicode: bool = False,
) -> None:
    """Convert a CSV file to a LaTeX ``tabular`` environment on disk.

    Parameters
    ----------
    csv_path:
        Path to the source CSV file (UTF-8, with a header row).
    tex_path:
        Destination ``.tex`` path. Parent directories are created.
    columns:
        Optional ordered subset of CSV columns; defaults to all columns.

    The remaining keyword arguments are passed to
    :func:`rows_to_latex_tabular`.

    Raises
    ------
    FileNotFoundError
        If ``csv_path`` does not exist.
    ValueError
        If the CSV has no header, no data rows, or lacks requested columns.
    """

    if not csv_path.exists():
        raise FileNotFoundError(f"Missing CSV for LaTeX table: {csv_path}")

    with csv_path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        fieldnames = reader.fieldnames
        rows: List[Mapping[str, str]] = list(reader)

    if fieldnames is None:
        raise ValueError(f"CSV has no header row: {csv_path}")
    if not rows:
        raise ValueError(f"CSV has no data rows: {csv_path}")

    ordered_columns = list(columns) if columns is not None else list(fieldnames)
    missing = [name for name in ordered_columns if name not in fieldnames]
    if missing:
        raise ValueError(f"Requested columns not in CSV header {csv_path}: {missing}")

    body = rows_to_latex_tabular(
        rows,
        ordered_columns,
        header_labels=header_labels,
        col_spec=col_spec,
        raw_columns=raw_columns,
        category_collapse_column=category_collapse_column,
        encode_unicode=encode_unicode,
    )

    tex_path.parent.mkdir(parents=True, exist_ok=True)
    with tex_path.open("w", encoding="utf-8") as handle:
        handle.write(GENERATED_BANNER)
        handle.write(body)
    LOGGER.info("Wrote %d-row table to %s", len(rows), tex_path)


__all__ = ["csv_to_latex_tabular", "rows_to_latex_tabular"]
