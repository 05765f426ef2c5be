"""CSV helpers for lesson-plan spreadsheets pasted as text.

Spreadsheet exports put whole dictation blocks and sentence lists inside one
quoted cell, so physical lines are first regrouped into records while a quote is
open, then each record is split with a small quote-aware scanner. Header names
are matched case-insensitively.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

LESSON_PLAN_HEADER = "lesson plan"


def iter_csv_records(lines: Iterable[str]) -> Iterator[str]:
    """Yield logical CSV records, joining physical lines inside open quotes.

    A record is complete when it holds an even number of ``"`` characters;
    escaped ``""`` pairs keep the parity unchanged. A trailing record with an
    unterminated quote is yielded as-is.
    """

    pending: list[str] = []
    quotes = 0
    for line in lines:
        pending.append(line.rstrip("\r"))
        quotes += line.count('"')
        if quotes % 2 == 0:
            yield "\n".join(pending)
            pending = []
            quotes = 0
    if pending:
        yield "\n".join(pending)


def split_csv_line(line: str) -> list[str]:
    """Split one CSV record on commas outside double quotes.

    ``""`` inside a quoted field is an escaped quote. Each field is trimmed of
    surrounding whitespace and of one leading/trailing quote left over from
    quoting.

    Args:
        line: One CSV record; quoted fields may contain newlines.

    Returns:
        Field values in column order; a line without commas yields one field.
    """

    fields: list[str] = []
    buf: list[str] = []
    in_quotes = False
    idx = 0
    while idx < len(line):
        ch = line[idx]
        if ch == '"':
            if in_quotes and idx + 1 < len(line) and line[idx + 1] == '"':
                buf.append('"')
                idx += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(buf))
            buf = []
        else:
            buf.append(ch)
        idx += 1
    fields.append("".join(buf))
    return [_clean_field(value) for value in fields]


def _clean_field(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value.strip()


def build_header_index(header_cells: Sequence[str]) -> dict[str, int]:
    """Map lower-cased trimmed header names to column indexes.

    A repeated header name keeps its last column, like a spreadsheet lookup
    that scans left to right and overwrites.
    """

    return {cell.strip().lower(): idx for idx, cell in enumerate(header_cells)}


def _cell(row: Sequence[str], idx: int | None) -> str:
    if idx is None or idx >= len(row):
        return ""
    return row[idx].strip()


def find_data_row(
    rows: Iterable[Sequence[str]],
    header_index: dict[str, int],
    target_identifier: str | None,
) -> list[str] | None:
    """Pick the lesson row to import from parsed data rows.

    Rows with fewer than two cells are skipped. With a target such as
    ``"3.1"``, the first row whose first cell equals it, or whose lesson-plan
    cell starts with it, wins. Without a target, the first row with a non-empty
    first cell or lesson-plan cell wins.

    Args:
        rows: Parsed rows following the header row.
        header_index: Output of :func:`build_header_index`.
        target_identifier: ``"{step}.{substep}"`` or ``None``.

    Returns:
        The chosen row, or ``None`` when nothing matches.
    """

    plan_idx = header_index.get(LESSON_PLAN_HEADER)
    for row in rows:
        if len(row) < 2:
            continue
        first = _cell(row, 0)
        plan = _cell(row, plan_idx)
        if target_identifier:
            if first == target_identifier or plan.startswith(target_identifier):
                return list(row)
        elif first or plan:
            return list(row)
    return None


def get_cell(row: Sequence[str], header_index: dict[str, int], aliases: Sequence[str]) -> str:
    """Return the first non-empty cell among header ``aliases``, in alias order."""

    for alias in aliases:
        value = _cell(row, header_index.get(alias.lower()))
        if value:
            return value
    return ""


def get_list(row: Sequence[str], header_index: dict[str, int], aliases: Sequence[str]) -> list[str]:
    """Return a list cell split on commas and newlines, trimmed, empties dropped."""

    raw = get_cell(row, header_index, aliases)
    if not raw:
        return []
    items = (item.strip() for chunk in raw.split("\n") for item in chunk.split(","))
    return [item for item in items if item]
