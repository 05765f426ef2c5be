"""Lesson-plan import: format detection and spreadsheet row extraction.

``import_lesson`` is the single entry point used by the lesson editor's paste
action. Spreadsheet exports (CSV) are read by header name from one lesson row;
anything else, including CSV-looking text without a usable header or row, goes
through the freeform parser.
"""

from __future__ import annotations

import logging
from typing import Sequence

from wrs_dojo.importer.csv_rows import (
    LESSON_PLAN_HEADER,
    build_header_index,
    find_data_row,
    get_cell,
    get_list,
    iter_csv_records,
    split_csv_line,
)
from wrs_dojo.importer.freeform import parse_dictation_block, parse_freeform
from wrs_dojo.models import LessonRecord, WordCard

logger = logging.getLogger(__name__)

HFW_HEADERS = ("new sight words", "sight words")
QUICK_DRILL_HEADERS = ("new sound cards", "pa drill", "spelling sounds")
VOCAB_HEADERS = ("new vocab words", "vocab from sentences", "vocab from connected text")
SENTENCE_HEADERS = ("sentences", "reading sentences")
PASSAGE_HEADERS = ("connected text", "reader")
DICTATION_HEADERS = ("dictation",)

KNOWN_HEADERS = frozenset(
    (LESSON_PLAN_HEADER,)
    + HFW_HEADERS
    + QUICK_DRILL_HEADERS
    + VOCAB_HEADERS
    + SENTENCE_HEADERS
    + PASSAGE_HEADERS
    + DICTATION_HEADERS
)


def _first_non_empty(lines: Sequence[str]) -> tuple[int, str] | None:
    for idx, line in enumerate(lines):
        if line.strip():
            return idx, line.strip()
    return None


def _has_known_header(header_line: str) -> bool:
    return any(cell.strip().lower() in KNOWN_HEADERS for cell in split_csv_line(header_line))


def looks_like_csv(text: str) -> bool:
    """Decide whether pasted text is a spreadsheet export.

    The first non-empty line must start with ``,,`` (blank leading columns),
    or contain a comma while the document has more than two lines. A two-line
    document also counts when its comma-bearing first line names a known
    lesson-plan column.
    """

    lines = text.split("\n")
    first = _first_non_empty(lines)
    if first is None:
        return False
    _, first_line = first
    if first_line.startswith(",,"):
        return True
    if "," not in first_line:
        return False
    return len(lines) > 2 or _has_known_header(first_line)


def _extract_csv(
    text: str,
    target_step: str | None,
    target_substep: str | None,
) -> LessonRecord | None:
    """Extract one lesson row from CSV text.

    Returns:
        The populated record, or ``None`` when the header names no known
        column or no data row matches the target.
    """

    lines = text.split("\n")
    first = _first_non_empty(lines)
    if first is None:
        return None
    start, _ = first

    records = iter_csv_records(lines[start:])
    header_line = next(records, "")
    header = split_csv_line(header_line.strip())
    header_index = build_header_index(header)
    if not KNOWN_HEADERS.intersection(header_index):
        logger.debug("CSV header has no known lesson columns: %s", header)
        return None

    target = f"{target_step}.{target_substep}" if target_step and target_substep else None
    rows = (split_csv_line(record) for record in records if record.strip())
    row = find_data_row(rows, header_index, target)
    if row is None:
        logger.debug("No CSV row matched target %s", target)
        return None
    logger.debug("Importing CSV row starting %r", row[0] if row else "")

    record = LessonRecord()
    record.hfw_list = get_list(row, header_index, HFW_HEADERS)
    record.quick_drill = get_list(row, header_index, QUICK_DRILL_HEADERS)
    for alias in VOCAB_HEADERS:
        words = get_list(row, header_index, (alias,))
        record.word_cards.extend(WordCard(word, "regular") for word in words)

    raw_sentences = get_cell(row, header_index, SENTENCE_HEADERS)
    if raw_sentences:
        sentences = (item.strip() for item in raw_sentences.split("\n"))
        record.sentences = [item for item in sentences if len(item) > 5]

    passage = get_cell(row, header_index, PASSAGE_HEADERS)
    if passage:
        record.passage = passage

    dictation_text = get_cell(row, header_index, DICTATION_HEADERS)
    if dictation_text:
        # The cell is never re-checked for CSV shape, so this is one level deep.
        record.dictation = parse_dictation_block(dictation_text)

    if record.step is None and target_step:
        record.step = target_step
    if record.substep is None and target_substep:
        record.substep = target_substep
    return record


def import_lesson(
    text: str | None,
    target_step: str | None = None,
    target_substep: str | None = None,
) -> LessonRecord:
    """Import a pasted lesson plan into a partial lesson record.

    Spreadsheet exports are read from the row for ``target_step.target_substep``
    (or the first lesson row without a target). Free text is parsed section by
    section. Malformed input never raises; fields that cannot be found stay
    empty.

    Args:
        text: Pasted document. ``None`` is treated as empty.
        target_step: Step to select in a spreadsheet, e.g. ``"3"``.
        target_substep: Substep to select in a spreadsheet, e.g. ``"1"``.

    Returns:
        A new :class:`~wrs_dojo.models.LessonRecord`.
    """

    text = text or ""
    if looks_like_csv(text):
        record = _extract_csv(text, target_step, target_substep)
        if record is not None:
            return record
        logger.debug("CSV-shaped input without a usable lesson row; parsing as free text")
    return parse_freeform(text)
