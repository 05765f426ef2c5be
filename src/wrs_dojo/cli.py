"""CLI entrypoint for tile decomposition, lesson import, and saves."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from wrs_dojo.io.source_io import write_json
from wrs_dojo.models import LessonRecord
from wrs_dojo.pipeline import run_import
from wrs_dojo.reporting.lesson_md import build_lesson_md
from wrs_dojo.storage.saves import LESSON_KEY, MAX_SAVES, SaveStore, lesson_from_save
from wrs_dojo.tiles.palette import tile_color
from wrs_dojo.tiles.tokenizer import tiles_text, tokenize
from wrs_dojo.validation import collect_tile_kind_counts


def _resolve_default_saves_dir() -> Path:
    """Resolve default save directory from project layout.

    Returns:
        ``data/saves`` when a ``data`` directory exists, else ``saves``.
    """

    if Path("data").is_dir():
        return Path("data") / "saves"
    return Path("saves")


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser with ``tiles``, ``import`` and ``saves`` commands.
    """

    parser = argparse.ArgumentParser(
        description="Decompose words into reading tiles and import lesson plans."
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    tiles_parser = subparsers.add_parser("tiles", help="Show the tile breakdown of words.")
    tiles_parser.add_argument("words", nargs="+", help="Words or phrases, override syntax allowed.")

    import_parser = subparsers.add_parser("import", help="Import a lesson plan file.")
    import_parser.add_argument("source", type=Path, help="Lesson plan .txt, .csv or .pdf file.")
    import_parser.add_argument("--step", default=None, help="Step to select from a spreadsheet.")
    import_parser.add_argument(
        "--substep", default=None, help="Substep to select from a spreadsheet."
    )
    import_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Lesson JSON output path (default: print to stdout).",
    )
    import_parser.add_argument(
        "--merge-into",
        type=Path,
        default=None,
        help="Existing lesson JSON to overwrite with the imported fields.",
    )
    import_parser.add_argument(
        "--report", type=Path, default=None, help="Markdown lesson output path."
    )
    import_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when the lesson is invalid or nothing was imported.",
    )

    saves_parser = subparsers.add_parser("saves", help="Manage stored saves.")
    saves_parser.add_argument(
        "--saves-dir",
        type=Path,
        default=_resolve_default_saves_dir(),
        help="Directory holding save files.",
    )
    saves_parser.add_argument(
        "--max-saves",
        type=int,
        default=MAX_SAVES,
        help=f"Maximum number of saves kept (default: {MAX_SAVES}).",
    )
    saves_sub = saves_parser.add_subparsers(dest="saves_command", required=True)
    saves_sub.add_parser("list", help="List saves, newest first.")
    show_parser = saves_sub.add_parser("show", help="Print one save as JSON.")
    show_parser.add_argument("save_id")
    show_parser.add_argument(
        "--lesson",
        action="store_true",
        help="Print only the stored lesson, decoded from its JSON string.",
    )
    delete_parser = saves_sub.add_parser("delete", help="Delete one save.")
    delete_parser.add_argument("save_id")
    create_parser = saves_sub.add_parser("create", help="Store a lesson JSON file as a new save.")
    create_parser.add_argument("name")
    create_parser.add_argument("lesson", type=Path, help="Lesson JSON file to store.")

    return parser


def _run_tiles(words: Sequence[str]) -> int:
    for word in words:
        tiles = tokenize(word)
        rows = [[tile.text or "␣", tile.kind, tile_color(tile.kind).family] for tile in tiles]
        print(f"{word}: {tiles_text(tiles)}")
        print(_format_table(["text", "kind", "color"], rows))
        print()
    return 0


def _load_json_object(path: Path) -> dict:
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise SystemExit(f"Expected a JSON object in {path}")
    return payload


def _run_import(args: argparse.Namespace) -> int:
    if not args.source.exists():
        raise SystemExit(f"Lesson source not found: {args.source}")

    try:
        result = run_import(
            args.source,
            target_step=args.step,
            target_substep=args.substep,
            strict=args.strict,
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    record = result.record
    if args.merge_into is not None:
        payload = record.merged_into(_load_json_object(args.merge_into))
    else:
        payload = record.to_dict()

    if args.output is not None:
        write_json(payload, args.output)
        print(f"Wrote lesson to {args.output}")
    else:
        print(json.dumps(payload, ensure_ascii=False, indent=2))

    if args.report is not None:
        args.report.write_text(build_lesson_md(record), encoding="utf-8")
        print(f"Wrote report to {args.report}")

    kind_counts = collect_tile_kind_counts(word for word, _ in result.card_tiles)
    if args.output is not None and kind_counts:
        rows = [
            [kind, str(count)]
            for kind, count in sorted(kind_counts.items(), key=lambda item: (-item[1], item[0]))
        ]
        print("\nTile kinds in word cards:")
        print(_format_table(["kind", "count"], rows))
    return 0


def _run_saves(args: argparse.Namespace) -> int:
    try:
        store = SaveStore(args.saves_dir, max_saves=args.max_saves)
        if args.saves_command == "list":
            saves = store.list_saves()
            if not saves:
                print("No saves found.")
                return 0
            rows = [[info.id, info.name, str(info.updated_at)] for info in saves]
            print(_format_table(["id", "name", "updated_at"], rows))
            print(f"\n{len(saves)} of {store.max_saves} saves used.")
        elif args.saves_command == "show":
            record = store.get(args.save_id)
            if args.lesson:
                lesson = lesson_from_save(record)
                if lesson is None:
                    raise SystemExit(f"Save {args.save_id} holds no readable lesson")
                print(json.dumps(lesson.to_dict(), ensure_ascii=False, indent=2))
            else:
                print(json.dumps(record.to_dict(), ensure_ascii=False, indent=2))
        elif args.saves_command == "delete":
            store.delete(args.save_id)
            print(f"Deleted save {args.save_id}")
        elif args.saves_command == "create":
            lesson = LessonRecord.from_dict(_load_json_object(args.lesson))
            data = {LESSON_KEY: json.dumps(lesson.to_dict(), ensure_ascii=False)}
            metadata = {"step": lesson.step, "substep": lesson.substep}
            info = store.create(args.name, data, metadata={k: v for k, v in metadata.items() if v})
            print(f"Created save {info.id}")
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments.

    Returns:
        Zero exit status on success.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "tiles":
        return _run_tiles(args.words)
    if args.command == "import":
        return _run_import(args)
    return _run_saves(args)


if __name__ == "__main__":
    raise SystemExit(main())
