"""Unit tests for the freeform lesson-plan parser."""

from __future__ import annotations

from wrs_dojo.importer.freeform import (
    clean_line,
    detect_step,
    extract_list,
    parse_dictation_block,
    parse_freeform,
)
from wrs_dojo.models import WordCard


def test_extract_list_uses_text_after_first_colon() -> None:
    assert extract_list("Sounds: a, b; c") == ["a", "b", "c"]


def test_extract_list_strips_numbering_and_splits_on_wide_gaps() -> None:
    assert extract_list("1. cat,  dog") == ["cat", "dog"]
    assert extract_list("2) cat  dog\tpig") == ["cat", "dog", "pig"]


def test_extract_list_drops_word_count_notes() -> None:
    assert extract_list("a, b, Word count 12") == ["a", "b"]


def test_clean_line_strips_bullets_checkboxes_and_tabs() -> None:
    assert clean_line("• [ ] cat\tdog") == "cat dog"
    assert clean_line("1. keep numbering") == "1. keep numbering"
    assert clean_line("-ing") == "-ing"


def test_detect_step_prefers_step_keyword() -> None:
    assert detect_step("Review 1.2 then Step 3.4") == ("3", "4")
    assert detect_step("Lesson 12.4 review") == ("12", "4")
    assert detect_step("no numbers here") is None


def test_parse_freeform_sections() -> None:
    text = "Quick Drill: a, b, sh\nWord Cards:\ncat, dog\nSentences for Reading\nThe dog ran far."

    record = parse_freeform(text)

    assert record.quick_drill == ["a", "b", "sh"]
    assert record.word_cards == [WordCard("cat", "regular"), WordCard("dog", "regular")]
    assert record.sentences == ["The dog ran far."]
    assert record.step is None


def test_parse_freeform_sight_words_inline_and_following_lines() -> None:
    record = parse_freeform("High Frequency Words: was, the\nof, to\nNote: skip me")

    assert record.hfw_list == ["was", "the", "of", "to"]


def test_parse_freeform_quick_drill_ignores_stray_part_lines() -> None:
    record = parse_freeform("Quick Drill\nsh, ch\nthe party\n- th")

    assert record.quick_drill == ["sh", "ch", "th"]


def test_parse_freeform_sentence_filters() -> None:
    text = "Reading Sentences\nShort\nThe dog ran far.\nSee part 6 next."

    assert parse_freeform(text).sentences == ["The dog ran far."]


def test_parse_freeform_passage_accumulates_paragraphs() -> None:
    record = parse_freeform("Passage\nThe cat sat.\nIt was fun.")

    assert record.passage == "The cat sat.\n\nIt was fun.\n\n"


def test_parse_freeform_passage_inline_heading_content() -> None:
    assert parse_freeform("Story: The cat sat.").passage == "The cat sat.\n\n"


def test_parse_freeform_inline_sentences_are_list_split() -> None:
    record = parse_freeform("Sentences for Reading: The dog ran, then sat.\nHFW: was")

    assert record.sentences == ["The dog ran", "then sat."]
    assert record.hfw_list == ["was"]


def test_parse_freeform_inline_passage_items_become_paragraphs() -> None:
    record = parse_freeform("Passage: The cat sat; it was fun.")

    assert record.passage == "The cat sat\n\nit was fun.\n\n"


def test_parse_freeform_detects_step() -> None:
    record = parse_freeform("Step 2.3 Lesson Plan\nSight words: said")

    assert (record.step, record.substep) == ("2", "3")
    assert record.hfw_list == ["said"]


def test_dictation_numeric_fallback() -> None:
    record = parse_freeform("Dictation\n1. a, th\n2. cat, dog\n6. The sun is hot today.")

    assert record.dictation.sounds == ["a", "th"]
    assert record.dictation.real_words == ["cat", "dog"]
    assert record.dictation.sentences == ["The sun is hot today."]


def test_dictation_explicit_headers() -> None:
    text = "\n".join(
        [
            "Part 8 Dictation:",
            "Sounds: sh, ch",
            "Real words: ship, chat",
            "Word elements: -ing, -ed",
            "Nonsense: zib, vop",
            "Phrases: in the van; on a ship",
            "Sentences:",
            "The ship is big.",
            "Sentences",
        ]
    )

    dictation = parse_freeform(text).dictation

    assert dictation.sounds == ["sh", "ch"]
    assert dictation.real_words == ["ship", "chat"]
    assert dictation.word_elements == ["-ing", "-ed"]
    assert dictation.nonsense_words == ["zib", "vop"]
    assert dictation.phrases == ["in the van", "on a ship"]
    assert dictation.sentences == ["The ship is big."]


def test_dictation_heading_inline_content() -> None:
    assert parse_freeform("Dictation: 1. a, e").dictation.sounds == ["a", "e"]


def test_dictation_mode_carries_over_unnumbered_lines() -> None:
    dictation = parse_freeform("Dictation\n2. cat\ndog, sun").dictation

    assert dictation.real_words == ["cat", "dog", "sun"]


def test_dictation_lines_before_any_sub_list_are_ignored() -> None:
    assert parse_freeform("Dictation\ncat, dog").dictation.is_empty()


def test_parse_dictation_block_starts_inside_dictation() -> None:
    dictation = parse_dictation_block("1. a, th\n2. cat, dog\n6. The sun is hot today.")

    assert dictation.sounds == ["a", "th"]
    assert dictation.real_words == ["cat", "dog"]
    assert dictation.sentences == ["The sun is hot today."]


def test_lines_outside_sections_are_ignored() -> None:
    record = parse_freeform("Teacher notes\ncat, dog")

    assert record.quick_drill == []
    assert record.word_cards == []
    assert record.passage is None


def test_parse_freeform_empty_and_none() -> None:
    for text in ("", None, "\n\n  \n"):
        record = parse_freeform(text)
        assert record.quick_drill == []
        assert record.dictation.is_empty()


def test_parse_freeform_calls_are_independent() -> None:
    first = parse_freeform("Sight words: was")
    second = parse_freeform("Sight words: the")

    assert first.hfw_list == ["was"]
    assert second.hfw_list == ["the"]
