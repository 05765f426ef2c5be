"""Unit tests for word-to-tile decomposition."""

from __future__ import annotations

import pytest

from wrs_dojo.models import Tile
from wrs_dojo.tiles.tokenizer import tiles_text, tokenize


def _pairs(word: str) -> list[tuple[str, str]]:
    return [(tile.text, tile.kind) for tile in tokenize(word)]


def test_tokenize_empty_and_none_yield_no_tiles() -> None:
    assert tokenize("") == []
    assert tokenize(None) == []


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("{a}", [Tile("a", "consonant")]),
        ("[a]", [Tile("a", "vowel")]),
        ("/an/", [Tile("an", "welded")]),
        ("|bas|", [Tile("bas", "syllable")]),
        ("<un>", [Tile("un", "suffix")]),
    ],
)
def test_overrides_preempt_auto_detection(word: str, expected: list[Tile]) -> None:
    """Override brackets should decide the tile kind regardless of the interior."""

    assert tokenize(word) == expected


def test_auto_cascade_prefers_welded_then_vowel_team() -> None:
    assert _pairs("ing") == [("ing", "welded")]
    assert _pairs("ear") == [("ea", "vowelTeam"), ("r", "consonant")]


def test_table_order_wins_over_longer_entries() -> None:
    """Within one table the first listed prefix wins, so "an" beats "ang"."""

    assert _pairs("bang") == [("b", "consonant"), ("an", "welded"), ("g", "consonant")]


def test_auto_detection_covers_each_table() -> None:
    assert _pairs("sight") == [("s", "consonant"), ("igh", "vowelTeam"), ("t", "consonant")]
    assert _pairs("car") == [("c", "consonant"), ("ar", "rControl")]
    assert _pairs("match") == [("m", "consonant"), ("a", "vowel"), ("tch", "digraph")]


def test_single_letter_fallback() -> None:
    assert _pairs("x") == [("x", "consonant")]
    assert _pairs("y") == [("y", "vowel")]
    assert _pairs("!") == [("!", "consonant")]


def test_matching_is_case_insensitive_but_text_keeps_case() -> None:
    assert _pairs("Ship") == [("Sh", "digraph"), ("i", "vowel"), ("p", "consonant")]
    assert _pairs("EAt") == [("EA", "vowelTeam"), ("t", "consonant")]


def test_suffix_and_prefix_keep_hyphen() -> None:
    assert _pairs("-ing") == [("-ing", "suffix")]
    assert _pairs("run-") == [("run-", "prefix")]


def test_space_becomes_empty_separator_tile() -> None:
    assert _pairs("cat dog") == [
        ("c", "consonant"),
        ("a", "vowel"),
        ("t", "consonant"),
        ("", "space"),
        ("d", "consonant"),
        ("o", "vowel"),
        ("g", "consonant"),
    ]


def test_syllable_override_allows_empty_and_spaces() -> None:
    assert _pairs("||") == [("", "syllable")]
    assert _pairs("| |") == [(" ", "syllable")]
    assert _pairs("|bas|ket") == [
        ("bas", "syllable"),
        ("k", "consonant"),
        ("e", "vowel"),
        ("t", "consonant"),
    ]


def test_unterminated_override_falls_through_to_single_character() -> None:
    assert _pairs("{cat") == [
        ("{", "consonant"),
        ("c", "consonant"),
        ("a", "vowel"),
        ("t", "consonant"),
    ]
    assert _pairs("<un") == [("<", "consonant"), ("u", "vowel"), ("n", "consonant")]
    assert _pairs("[e") == [("[", "consonant"), ("e", "vowel")]


def test_empty_welded_override_is_not_a_tile() -> None:
    assert _pairs("//") == [("/", "consonant"), ("/", "consonant")]
    assert _pairs("//a/") == [("/", "consonant"), ("a", "welded")]


def test_override_mid_word() -> None:
    assert _pairs("ba{ck}") == [("b", "consonant"), ("a", "vowel"), ("ck", "consonant")]


@pytest.mark.parametrize(
    ("word", "stripped"),
    [
        ("the cat", "the cat"),
        ("{c}at", "cat"),
        ("|bas|[ke]t", "basket"),
        ("/ank/le rain", "ankle rain"),
        ("<re>play day", "replay day"),
    ],
)
def test_tiles_reconstruct_delimiter_stripped_text(word: str, stripped: str) -> None:
    assert tiles_text(tokenize(word)) == stripped


def test_each_call_returns_a_fresh_list() -> None:
    first = tokenize("cat")
    first.append(Tile("s", "consonant"))

    assert len(tokenize("cat")) == 3
