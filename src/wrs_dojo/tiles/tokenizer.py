"""Word-to-tile decomposition for flashcards and tile boards.

A word is scanned left to right. At each position explicit author overrides
win over automatic detection; automatic detection tries four pattern tables in
a fixed order and falls back to one letter at a time. Every call produces a
fresh list of immutable :class:`~wrs_dojo.models.Tile` objects.
"""

from __future__ import annotations

import re

from wrs_dojo.models import Tile

SYLLABLE_RE = re.compile(r"^\|([^|]*)\|")
SUFFIX_RE = re.compile(r"^-[a-zA-Z0-9]+")
PREFIX_RE = re.compile(r"^[a-zA-Z0-9]+-")

# Table order is significant: the first entry that prefixes the remainder wins,
# so e.g. "an" is claimed before "ang" can be considered.
WELDED_SOUNDS = (
    "all", "am", "an", "ang", "ing", "ong", "ung", "ank", "ink", "onk", "unk",
    "ild", "ind", "old", "ost", "olt", "ive",
)
VOWEL_TEAMS = (
    "eigh", "igh",
    "ai", "ay", "ee", "ea", "ey", "oi", "oy", "oa", "oe", "ow", "ou", "oo", "ue", "ew",
    "au", "aw", "ie", "ei", "ui",
)
R_CONTROLLED = ("ar", "or", "er", "ir", "ur")
DIGRAPHS = ("sh", "ch", "th", "wh", "ck", "ph", "qu", "wr", "kn", "gn", "mb", "tch", "dge")
VOWELS = frozenset("aeiouy")

AUTO_TABLES: tuple[tuple[tuple[str, ...], str], ...] = (
    (WELDED_SOUNDS, "welded"),
    (VOWEL_TEAMS, "vowelTeam"),
    (R_CONTROLLED, "rControl"),
    (DIGRAPHS, "digraph"),
)

# Bracketed overrides in priority order, after syllable bars and affix shorthand.
BRACKET_OVERRIDES: tuple[tuple[str, str, str], ...] = (
    ("[", "]", "vowel"),
    ("{", "}", "consonant"),
    ("/", "/", "welded"),
)


def _match_enclosed(
    remaining: str,
    opener: str,
    closer: str,
    allow_empty: bool = True,
) -> tuple[str, int] | None:
    """Match ``opener ... closer`` at the start of ``remaining``.

    The closing delimiter is searched from index 1 so a shared opener/closer
    such as ``/`` cannot close on itself.

    Returns:
        ``(interior_text, consumed_length)`` or ``None`` when ``remaining``
        does not start with ``opener``, the closer is absent, or the interior
        is empty and ``allow_empty`` is false.
    """

    if not remaining.startswith(opener):
        return None
    close = remaining.find(closer, 1)
    if close == -1 or (close == 1 and not allow_empty):
        return None
    return remaining[1:close], close + 1


def _match_override(remaining: str) -> tuple[Tile, int] | None:
    """Try override rules 1-8 at the start of ``remaining``."""

    if remaining.startswith(" "):
        return Tile("", "space"), 1

    match = SYLLABLE_RE.match(remaining)
    if match:
        return Tile(match.group(1), "syllable"), match.end()

    # Affix cards reuse the suffix colour.
    enclosed = _match_enclosed(remaining, "<", ">")
    if enclosed:
        return Tile(enclosed[0], "suffix"), enclosed[1]

    match = SUFFIX_RE.match(remaining)
    if match:
        return Tile(match.group(0), "suffix"), match.end()

    match = PREFIX_RE.match(remaining)
    if match:
        return Tile(match.group(0), "prefix"), match.end()

    for opener, closer, kind in BRACKET_OVERRIDES:
        # "//" is never an empty welded card.
        enclosed = _match_enclosed(remaining, opener, closer, allow_empty=opener != "/")
        if enclosed:
            return Tile(enclosed[0], kind), enclosed[1]

    return None


def _match_auto(remaining: str) -> tuple[Tile, int]:
    """Classify the next unit of ``remaining`` with the pattern tables.

    Comparison is case-insensitive but the emitted text keeps the original
    case. Always consumes at least one character.
    """

    for patterns, kind in AUTO_TABLES:
        for pattern in patterns:
            size = len(pattern)
            if remaining[:size].lower() == pattern:
                return Tile(remaining[:size], kind), size

    char = remaining[0]
    if char.lower() in VOWELS:
        return Tile(char, "vowel"), 1
    return Tile(char, "consonant"), 1


def tokenize(word: str | None) -> list[Tile]:
    """Split one word or phrase into typed tiles.

    Override syntax understood at any position, in priority order:

    * a single space gives an empty ``space`` separator tile;
    * ``|text|`` gives a ``syllable`` card (interior may be empty);
    * ``<text>`` gives an affix card (``suffix`` kind);
    * ``-text`` and ``text-`` give ``suffix``/``prefix`` tiles keeping the hyphen;
    * ``[text]``, ``{text}`` and ``/text/`` force ``vowel``, ``consonant`` and
      ``welded`` tiles.

    An opener without its closing delimiter is not an override; it falls
    through to automatic detection and usually becomes a one-character
    ``consonant`` tile.

    Args:
        word: Text to decompose. ``None`` is treated as an empty string.

    Returns:
        Tiles in source order; empty for empty input. Never raises.
    """

    tiles: list[Tile] = []
    remaining = word or ""

    while remaining:
        matched = _match_override(remaining)
        if matched is None:
            matched = _match_auto(remaining)
        tile, consumed = matched
        tiles.append(tile)
        remaining = remaining[consumed:]

    return tiles


def tiles_text(tiles: list[Tile], space: str = " ") -> str:
    """Join tile texts back into display text, rendering ``space`` tiles as ``space``."""

    return "".join(space if tile.kind == "space" else tile.text for tile in tiles)
