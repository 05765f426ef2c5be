"""Validation helpers for imported lesson records and tile statistics."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from wrs_dojo.models import WORD_CARD_KINDS, LessonRecord
from wrs_dojo.tiles.tokenizer import tokenize


def _raise_if_errors(errors: list[str]) -> None:
    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:25])
        rest = len(errors) - min(25, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise ValueError(f"Lesson validation failed with {len(errors)} errors:\n{preview}{more}")


def has_content(record: LessonRecord) -> bool:
    """Return whether an import found anything besides step/substep."""

    return bool(
        record.quick_drill
        or record.hfw_list
        or record.word_cards
        or record.sentences
        or record.passage
        or not record.dictation.is_empty()
    )


def validate_lesson_record(record: LessonRecord, require_content: bool = False) -> None:
    """Validate an imported lesson before it is saved or printed.

    Args:
        record: Record to check.
        require_content: Whether an import without any lesson content fails.

    Raises:
        ValueError: If any field violates the expected shape.
    """

    errors: list[str] = []
    for label, value in (("step", record.step), ("substep", record.substep)):
        if value is not None and not value.isdigit():
            errors.append(f"invalid {label} '{value}'")

    for idx, card in enumerate(record.word_cards, start=1):
        if not card.text.strip():
            errors.append(f"Word card {idx}: empty text")
        if card.kind not in WORD_CARD_KINDS:
            errors.append(f"Word card {idx}: invalid kind '{card.kind}'")

    lists = {
        "quickDrill": record.quick_drill,
        "hfwList": record.hfw_list,
        "sentences": record.sentences,
        **{f"dictation.{key}": value for key, value in record.dictation.to_dict().items()},
    }
    for label, items in lists.items():
        for idx, item in enumerate(items, start=1):
            if not item.strip():
                errors.append(f"{label} item {idx}: empty text")

    if require_content and not has_content(record):
        errors.append("no lesson content was found")

    _raise_if_errors(errors)


def collect_tile_kind_counts(words: Iterable[str]) -> dict[str, int]:
    """Count tiles by kind across ``words``, ignoring ``space`` separators.

    Args:
        words: Card texts to tokenize.

    Returns:
        Dictionary of tile kind to count.
    """

    counter: Counter[str] = Counter()
    for word in words:
        for tile in tokenize(word):
            if tile.kind != "space":
                counter[tile.kind] += 1
    return dict(counter)
