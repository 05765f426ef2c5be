"""Data models shared by the tokenizer, lesson importer, and save store.

Tiles and word cards are immutable value objects. Lesson records are plain
mutable containers because the importer fills them line by line; each import
call creates its own record so no state is shared across calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

TileKind = Literal[
    "consonant",
    "vowel",
    "vowelTeam",
    "digraph",
    "welded",
    "suffix",
    "rControl",
    "prefix",
    "syllable",
    "space",
]

WORD_CARD_KINDS = {"regular", "nonsense"}


@dataclass(frozen=True)
class Tile:
    """One visual/phonetic unit produced by :func:`wrs_dojo.tiles.tokenizer.tokenize`.

    ``text`` is the consumed substring with its original case (empty for
    ``space`` tiles); ``kind`` drives card colouring downstream.
    """

    text: str
    kind: TileKind

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "type": self.kind}


@dataclass(frozen=True)
class WordCard:
    """Word card extracted from a lesson plan.

    The kind records which source field produced the word, not how the word
    tokenizes.
    """

    text: str
    kind: str = "regular"

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "type": self.kind}


@dataclass
class DictationSection:
    """Six ordered dictation sub-lists filled by sub-section inference."""

    sounds: list[str] = field(default_factory=list)
    real_words: list[str] = field(default_factory=list)
    word_elements: list[str] = field(default_factory=list)
    nonsense_words: list[str] = field(default_factory=list)
    phrases: list[str] = field(default_factory=list)
    sentences: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(
            (
                self.sounds,
                self.real_words,
                self.word_elements,
                self.nonsense_words,
                self.phrases,
                self.sentences,
            )
        )

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "sounds": list(self.sounds),
            "realWords": list(self.real_words),
            "wordElements": list(self.word_elements),
            "nonsenseWords": list(self.nonsense_words),
            "phrases": list(self.phrases),
            "sentences": list(self.sentences),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DictationSection:
        return cls(
            sounds=_string_list(data.get("sounds")),
            real_words=_string_list(data.get("realWords")),
            word_elements=_string_list(data.get("wordElements")),
            nonsense_words=_string_list(data.get("nonsenseWords")),
            phrases=_string_list(data.get("phrases")),
            sentences=_string_list(data.get("sentences")),
        )


@dataclass
class LessonRecord:
    """Partial lesson produced by one call of the lesson importer.

    Every list field is present (empty by default) so callers never need to
    null-check. ``step``, ``substep`` and ``passage`` stay ``None`` until a
    source line or import target sets them. Serialization uses the camelCase
    keys of the lesson editor's JSON so a record can be merged straight into an
    in-progress lesson.
    """

    step: str | None = None
    substep: str | None = None
    quick_drill: list[str] = field(default_factory=list)
    hfw_list: list[str] = field(default_factory=list)
    word_cards: list[WordCard] = field(default_factory=list)
    sentences: list[str] = field(default_factory=list)
    passage: str | None = None
    dictation: DictationSection = field(default_factory=DictationSection)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the editor's lesson JSON shape, omitting unset scalars."""

        data: dict[str, Any] = {}
        if self.step is not None:
            data["step"] = self.step
        if self.substep is not None:
            data["substep"] = self.substep
        data["quickDrill"] = list(self.quick_drill)
        data["hfwList"] = list(self.hfw_list)
        data["wordCards"] = [card.to_dict() for card in self.word_cards]
        data["sentences"] = list(self.sentences)
        if self.passage is not None:
            data["passage"] = self.passage
        data["dictation"] = self.dictation.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LessonRecord:
        """Build a record from lesson JSON, tolerating missing or malformed keys."""

        cards: list[WordCard] = []
        for item in data.get("wordCards") or []:
            if isinstance(item, dict) and item.get("text"):
                kind = item.get("type", "regular")
                if not isinstance(kind, str) or kind not in WORD_CARD_KINDS:
                    kind = "regular"
                cards.append(WordCard(str(item["text"]), kind))
            elif isinstance(item, str) and item:
                cards.append(WordCard(item))

        dictation = data.get("dictation")
        if not isinstance(dictation, dict):
            dictation = {}
        passage = data.get("passage")
        return cls(
            step=_optional_str(data.get("step")),
            substep=_optional_str(data.get("substep")),
            quick_drill=_string_list(data.get("quickDrill")),
            hfw_list=_string_list(data.get("hfwList")),
            word_cards=cards,
            sentences=_string_list(data.get("sentences")),
            passage=passage if isinstance(passage, str) else None,
            dictation=DictationSection.from_dict(dictation),
        )

    def merged_into(self, lesson: dict[str, Any]) -> dict[str, Any]:
        """Return ``lesson`` shallow-overwritten with this record's fields.

        Mirrors the editor's "paste lesson plan" action: every key present in
        :meth:`to_dict` replaces the lesson's value, other keys are kept.
        The input mapping is not modified.
        """

        return {**lesson, **self.to_dict()}


@dataclass(frozen=True)
class SaveInfo:
    """Listing entry for one stored save blob (timestamps in epoch millis)."""

    id: str
    name: str
    created_at: int
    updated_at: int
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class SaveRecord:
    """Full save blob: listing fields plus the named string payload."""

    info: SaveInfo
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {**self.info.to_dict(), "data": dict(self.data)}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> SaveRecord:
        """Parse a stored save document.

        Raises:
            KeyError: If a required key is missing.
        """

        info = SaveInfo(
            id=str(payload["id"]),
            name=str(payload["name"]),
            created_at=int(payload["createdAt"]),
            updated_at=int(payload["updatedAt"]),
            metadata=dict(payload.get("metadata") or {}),
        )
        return cls(info=info, data=dict(payload["data"]))


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if isinstance(item, (str, int, float)) and str(item)]


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
