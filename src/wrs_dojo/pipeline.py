"""Top-level orchestration from a lesson-plan file to an imported lesson."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from wrs_dojo.importer.lesson_import import import_lesson
from wrs_dojo.io.source_io import read_lesson_source
from wrs_dojo.models import LessonRecord, Tile
from wrs_dojo.tiles.tokenizer import tokenize
from wrs_dojo.validation import validate_lesson_record


@dataclass(frozen=True)
class ImportResult:
    """Result bundle returned by :func:`run_import`.

    Attributes:
        record: Imported lesson fields.
        card_tiles: Tile breakdown of each word card, in card order.
    """

    record: LessonRecord
    card_tiles: tuple[tuple[str, tuple[Tile, ...]], ...]


def tile_breakdown(record: LessonRecord) -> tuple[tuple[str, tuple[Tile, ...]], ...]:
    """Tokenize every word card of ``record`` the way the card views display it."""

    return tuple((card.text, tuple(tokenize(card.text))) for card in record.word_cards)


def run_import(
    source_path: Path,
    target_step: str | None = None,
    target_substep: str | None = None,
    strict: bool = False,
) -> ImportResult:
    """Read a lesson-plan file, import it, and tokenize its word cards.

    Args:
        source_path: ``.txt``, ``.csv`` or ``.pdf`` lesson plan.
        target_step: Spreadsheet step to select.
        target_substep: Spreadsheet substep to select.
        strict: Whether to validate the record and reject empty imports.

    Returns:
        ``ImportResult`` with the record and per-card tiles.

    Raises:
        FileNotFoundError: If ``source_path`` does not exist.
        ValueError: In strict mode, if the record fails validation.
    """

    text = read_lesson_source(source_path)
    record = import_lesson(text, target_step, target_substep)
    if strict:
        validate_lesson_record(record, require_content=True)
    return ImportResult(record=record, card_tiles=tile_breakdown(record))
