"""Unit tests for lesson record validation and tile statistics."""

from __future__ import annotations

import pytest

from wrs_dojo.models import DictationSection, LessonRecord, WordCard
from wrs_dojo.validation import collect_tile_kind_counts, has_content, validate_lesson_record


def _record(**overrides: object) -> LessonRecord:
    values: dict[str, object] = {
        "step": "3",
        "substep": "1",
        "hfw_list": ["was"],
        "word_cards": [WordCard("cat")],
    }
    values.update(overrides)
    return LessonRecord(**values)  # type: ignore[arg-type]


def test_validate_lesson_record_accepts_valid_record() -> None:
    validate_lesson_record(_record(), require_content=True)


def test_validate_lesson_record_rejects_bad_card_kind() -> None:
    with pytest.raises(ValueError, match="invalid kind 'hfw'"):
        validate_lesson_record(_record(word_cards=[WordCard("cat", "hfw")]))


def test_validate_lesson_record_rejects_non_numeric_step() -> None:
    with pytest.raises(ValueError, match="invalid step 'three'"):
        validate_lesson_record(_record(step="three"))


def test_validate_lesson_record_reports_empty_dictation_items() -> None:
    record = _record(dictation=DictationSection(phrases=["in the van", " "]))

    with pytest.raises(ValueError, match="dictation.phrases item 2: empty text"):
        validate_lesson_record(record)


def test_validate_lesson_record_requires_content_when_asked() -> None:
    empty = LessonRecord(step="3", substep="1")

    validate_lesson_record(empty)
    assert not has_content(empty)
    with pytest.raises(ValueError, match="no lesson content was found"):
        validate_lesson_record(empty, require_content=True)


def test_collect_tile_kind_counts_skips_spaces() -> None:
    counts = collect_tile_kind_counts(["ship", "-ing", "a cat"])

    assert counts == {"digraph": 1, "vowel": 3, "consonant": 3, "suffix": 1}
