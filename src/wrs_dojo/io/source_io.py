"""Read lesson-plan sources and write imported lessons as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import pdfplumber


def extract_pdf_lines(
    pdf_path: Path,
    page_start: int | None = None,
    page_end: int | None = None,
) -> Iterator[str]:
    """Yield trimmed text lines from selected pages of a lesson-plan PDF.

    Page boundaries are inclusive and 1-based. Pages without a text layer are
    skipped.

    Args:
        pdf_path: Path to the exported lesson plan.
        page_start: 1-based start page, inclusive; ``None`` means first page.
        page_end: 1-based end page, inclusive; ``None`` means last page.

    Yields:
        Page text lines with surrounding whitespace removed.
    """

    with pdfplumber.open(pdf_path) as pdf:
        total_pages = len(pdf.pages)
        start_idx = 0 if page_start is None else max(page_start - 1, 0)
        end_idx = total_pages - 1 if page_end is None else min(page_end - 1, total_pages - 1)

        for page_idx in range(start_idx, end_idx + 1):
            text = pdf.pages[page_idx].extract_text()
            if not text:
                continue
            for line in text.splitlines():
                yield line.strip()


def read_lesson_source(path: Path) -> str:
    """Load lesson-plan text from a text, CSV, or PDF file.

    Args:
        path: Source file. ``.pdf`` files are read page by page; other
            suffixes are read as UTF-8 text (a byte-order mark is dropped).

    Returns:
        Document text ready for :func:`wrs_dojo.importer.lesson_import.import_lesson`.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """

    if not path.exists():
        raise FileNotFoundError(f"Lesson source not found: {path}")
    if path.suffix.lower() == ".pdf":
        return "\n".join(extract_pdf_lines(path))
    return path.read_text(encoding="utf-8-sig")


def write_json(payload: Any, output_path: Path) -> None:
    """Write ``payload`` as indented UTF-8 JSON."""

    with output_path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
        handle.write("\n")
