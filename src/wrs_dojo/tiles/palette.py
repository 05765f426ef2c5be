"""Card colour families for tile kinds."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CardColor:
    """Printed card colour: family name, fill and border hex codes."""

    family: str
    fill: str
    border: str


IVORY = CardColor("ivory", "#FFF8E7", "#E6DFC0")
PEACH = CardColor("peach", "#FFD6B5", "#EBC2A1")
GREEN = CardColor("green", "#A6D785", "#95C674")
YELLOW = CardColor("yellow", "#FFF275", "#EBE064")
WHITE = CardColor("white", "#FFFFFF", "#CCCCCC")
TRANSPARENT = CardColor("none", "transparent", "transparent")

KIND_COLORS = {
    "vowel": PEACH,
    "vowelTeam": PEACH,
    "rControl": PEACH,
    "welded": GREEN,
    "suffix": YELLOW,
    "prefix": YELLOW,
    "syllable": WHITE,
    "space": TRANSPARENT,
    "digraph": IVORY,
    "consonant": IVORY,
}


def tile_color(kind: str) -> CardColor:
    """Return the card colour for a tile kind; unknown kinds print on ivory."""

    return KIND_COLORS.get(kind, IVORY)
