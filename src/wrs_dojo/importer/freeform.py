"""Freeform lesson-plan parsing for text pasted from documents.

The parser walks non-empty lines with an explicit state value: the active
lesson section and, inside the dictation section, the active dictation
sub-list. Headings switch state; other lines are content for the active
section. Keyword lists are tuned to the lesson-plan template teachers paste in
and are matched as lower-cased substrings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re

from wrs_dojo.models import DictationSection, LessonRecord, WordCard

logger = logging.getLogger(__name__)

STEP_RE = re.compile(r"\bStep\s*(\d+)\.(\d+)\b", re.IGNORECASE)
BARE_STEP_RE = re.compile(r"\b(\d+)\.(\d+)\b")
BULLET_RE = re.compile(r"^[-*•➢]\s+")
CHECKBOX_RE = re.compile(r"[\[\]]")
NUMBERING_RE = re.compile(r"^\d+[.)]\s*")
DICTATION_NUMBER_RE = re.compile(r"^([1-6])[.)]")
LIST_SPLIT_RE = re.compile(r",|;|\t|\s{2,}")

# Checked in order; the first section whose keywords appear in a line wins.
SECTION_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("quickDrill", ("quick drill", "visual drill", "part 1")),
    ("wordCards", ("word cards", "word list", "part 3", "words for reading")),
    ("hfw", ("sight words", "hfw", "high frequency")),
    ("sentences", ("sentences for reading", "part 5", "reading sentences")),
    ("dictation", ("dictation", "part 8")),
    ("passage", ("passage", "story", "part 9")),
)

# (sub-list, line prefixes, substrings). Order matters: the broad "words" test
# runs before the element and nonsense checks, so "Nonsense words:" lands in
# real words unless the line starts with "nonsense".
DICTATION_KEYWORDS: tuple[tuple[str, tuple[str, ...], tuple[str, ...]], ...] = (
    ("sounds", ("sound",), ("sounds:", "sounds")),
    ("real", ("real",), ("real words:", "words")),
    ("elements", ("element",), ("word elements:", "welded")),
    ("nonsense", ("nonsense",), ("nonsense words:",)),
    ("phrases", ("phrase",), ("phrases:",)),
    ("sentences", ("sentence",), ("sentences:",)),
)

DICTATION_NUMBERED_MODES = {
    "1": "sounds",
    "2": "real",
    "3": "elements",
    "4": "nonsense",
    "5": "phrases",
    "6": "sentences",
}

DICTATION_LIST_ATTRS = {
    "sounds": "sounds",
    "real": "real_words",
    "elements": "word_elements",
    "nonsense": "nonsense_words",
    "phrases": "phrases",
}


@dataclass
class FreeformState:
    """Per-call parser state threaded through the line loop."""

    record: LessonRecord = field(default_factory=LessonRecord)
    section: str = "none"
    dictation_mode: str = "none"


def detect_step(text: str) -> tuple[str, str] | None:
    """Find the first ``Step 3.1`` or bare ``3.1`` marker in ``text``."""

    match = STEP_RE.search(text) or BARE_STEP_RE.search(text)
    if not match:
        return None
    return match.group(1), match.group(2)


def clean_line(line: str) -> str:
    """Strip bullet markers and checkbox brackets, and turn tabs into spaces.

    Numbering such as ``1.`` is preserved; dictation uses it to pick sub-lists.
    """

    line = BULLET_RE.sub("", line.strip())
    line = CHECKBOX_RE.sub("", line)
    return line.replace("\t", " ").strip()


def _after_colon(text: str) -> str:
    return text.partition(":")[2]


def extract_list(text: str) -> list[str]:
    """Extract list items from one line of a lesson plan.

    Text after the first colon is used when a colon is present, a leading
    ``1.``/``1)`` numbering is dropped, and the rest is split on commas,
    semicolons, tabs, or runs of two or more spaces. Empty items and
    "word count" annotations are discarded.

    Args:
        text: Line or inline heading content.

    Returns:
        Trimmed items in source order.
    """

    if ":" in text:
        text = _after_colon(text)
    text = NUMBERING_RE.sub("", text.strip())
    items = (item.strip() for item in LIST_SPLIT_RE.split(text))
    return [item for item in items if item and "word count" not in item.lower()]


def _match_section(lower: str) -> str | None:
    for section, keywords in SECTION_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return section
    return None


def _detect_dictation_mode(lower: str, raw_line: str, current: str) -> str:
    """Resolve the dictation sub-list for one line.

    Explicit keywords in the cleaned line win; when they leave the mode
    unchanged, a leading ``1.``..``6.`` on the raw line selects the sub-list.
    """

    detected = current
    for mode, prefixes, substrings in DICTATION_KEYWORDS:
        if lower.startswith(prefixes) or any(item in lower for item in substrings):
            detected = mode
            break

    if detected == current:
        match = DICTATION_NUMBER_RE.match(raw_line)
        if match:
            detected = DICTATION_NUMBERED_MODES[match.group(1)]
    return detected


def _add_dictation_line(state: FreeformState, line: str, raw_line: str) -> None:
    state.dictation_mode = _detect_dictation_mode(line.lower(), raw_line, state.dictation_mode)

    if ":" in line:
        content = _after_colon(line)
    else:
        content = NUMBERING_RE.sub("", line)
    if not content.strip():
        return

    dictation = state.record.dictation
    if state.dictation_mode == "sentences":
        sentence = NUMBERING_RE.sub("", content.strip())
        # Skip headings such as "Sentences" echoed as content.
        if len(sentence) > 5 and "sentences" not in sentence.lower():
            dictation.sentences.append(sentence)
        return

    attr = DICTATION_LIST_ATTRS.get(state.dictation_mode)
    if attr is not None:
        getattr(dictation, attr).extend(extract_list(content))


def _add_content(state: FreeformState, line: str, raw_line: str) -> None:
    """Append one non-heading line to the active section."""

    record = state.record
    lower = line.lower()
    section = state.section

    if section == "quickDrill":
        if ":" not in line and "part" not in lower:
            record.quick_drill.extend(extract_list(line))
    elif section == "hfw":
        if ":" not in line:
            record.hfw_list.extend(extract_list(line))
    elif section == "wordCards":
        if ":" not in line:
            record.word_cards.extend(WordCard(word, "regular") for word in extract_list(line))
    elif section == "sentences":
        if len(line) > 5 and " " in line and "part 6" not in lower:
            record.sentences.append(line)
    elif section == "passage":
        record.passage = (record.passage or "") + line + "\n\n"
    elif section == "dictation":
        _add_dictation_line(state, line, raw_line)


def _add_inline_content(state: FreeformState, line: str) -> None:
    """Handle text after the colon of a heading such as ``Quick Drill: a, b``."""

    if ":" not in line:
        return
    content = _after_colon(line).strip()
    if not content:
        return

    record = state.record
    if state.section == "quickDrill":
        record.quick_drill.extend(extract_list(content))
    elif state.section == "hfw":
        record.hfw_list.extend(extract_list(content))
    elif state.section == "wordCards":
        record.word_cards.extend(WordCard(word, "regular") for word in extract_list(content))
    elif state.section == "sentences":
        record.sentences.extend(extract_list(content))
    elif state.section == "passage":
        for item in extract_list(content):
            record.passage = (record.passage or "") + item + "\n\n"
    elif state.section == "dictation":
        # Sub-list routing needs the dictation mode machine.
        _add_dictation_line(state, content, content)


def parse_freeform(text: str | None, start_section: str = "none") -> LessonRecord:
    """Parse a pasted lesson plan written as free text.

    Args:
        text: Document text; ``None`` is treated as empty.
        start_section: Section active before the first heading. The dictation
            cell of a spreadsheet row is parsed with ``"dictation"``.

    Returns:
        A new record; sections that never appear stay empty.
    """

    text = text or ""
    state = FreeformState(section=start_section)

    step = detect_step(text)
    if step:
        state.record.step, state.record.substep = step

    raw_lines = [line.strip() for line in text.splitlines()]
    for raw_line in raw_lines:
        if not raw_line:
            continue
        line = clean_line(raw_line)
        if not line:
            continue

        section = _match_section(line.lower())
        if section is not None:
            state.section = section
            if section == "dictation":
                state.dictation_mode = "none"
            _add_inline_content(state, line)
            continue

        _add_content(state, line, raw_line)

    logger.debug(
        "Freeform parse: step=%s.%s drill=%d hfw=%d cards=%d sentences=%d",
        state.record.step,
        state.record.substep,
        len(state.record.quick_drill),
        len(state.record.hfw_list),
        len(state.record.word_cards),
        len(state.record.sentences),
    )
    return state.record


def parse_dictation_block(text: str | None) -> DictationSection:
    """Parse dictation content that has no ``Dictation`` heading of its own."""

    return parse_freeform(text, start_section="dictation").dictation
