"""Markdown rendering of an imported lesson for printing."""

from __future__ import annotations

from typing import Iterable, Sequence

from wrs_dojo.models import LessonRecord, Tile
from wrs_dojo.tiles.palette import tile_color
from wrs_dojo.tiles.tokenizer import tokenize
from wrs_dojo.validation import collect_tile_kind_counts

DICTATION_TITLES = (
    ("sounds", "Sounds"),
    ("realWords", "Real words"),
    ("wordElements", "Word elements"),
    ("nonsenseWords", "Nonsense words"),
    ("phrases", "Phrases"),
    ("sentences", "Sentences"),
)


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def _escape(text: str) -> str:
    return text.replace("|", "\\|")


def format_tiles(tiles: Sequence[Tile]) -> str:
    """Render tiles as adjacent ``[text]`` chips; ``space`` tiles become a gap."""

    chips = []
    for tile in tiles:
        if tile.kind == "space":
            chips.append(" ")
        else:
            chips.append(f"[{tile.text}]")
    return "".join(chips)


def _bullets(items: Sequence[str]) -> list[str]:
    return [f"- {item}" for item in items] if items else ["_(none)_"]


def build_lesson_md(record: LessonRecord, title: str | None = None) -> str:
    """Build a printable markdown page for one lesson.

    Args:
        record: Imported lesson fields.
        title: Optional heading; defaults to the step/substep label.

    Returns:
        Full markdown content.
    """

    if title is None:
        if record.step and record.substep:
            title = f"Lesson {record.step}.{record.substep}"
        else:
            title = "Lesson"

    card_rows = []
    for card in record.word_cards:
        tiles = tokenize(card.text)
        families = ", ".join(
            dict.fromkeys(tile_color(tile.kind).family for tile in tiles if tile.kind != "space")
        )
        card_rows.append((_escape(card.text), card.kind, _escape(format_tiles(tiles)), families))

    counts = collect_tile_kind_counts(card.text for card in record.word_cards)
    count_rows = [
        (kind, str(counts[kind])) for kind in sorted(counts, key=lambda item: (-counts[item], item))
    ]

    sections = [
        f"# {title}",
        "",
        "## Quick drill",
        " ".join(f"`{item}`" for item in record.quick_drill) or "_(none)_",
        "",
        "## Sight words",
        ", ".join(record.hfw_list) or "_(none)_",
        "",
        "## Word cards",
        _markdown_table(["word", "kind", "tiles", "colors"], card_rows),
        "",
        "## Tile kinds",
        _markdown_table(["kind", "count"], count_rows),
        "",
        "## Sentences",
        *_bullets(record.sentences),
        "",
        "## Dictation",
    ]

    dictation = record.dictation.to_dict()
    for key, label in DICTATION_TITLES:
        sections.extend(["", f"### {label}", *_bullets(dictation[key])])

    if record.passage:
        sections.extend(["", "## Passage", "", record.passage.rstrip()])

    return "\n".join(sections) + "\n"
