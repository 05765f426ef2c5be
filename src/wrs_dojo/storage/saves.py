"""File-backed store for named save blobs.

Each save is one ``<id>.json`` document holding a name, a string-keyed data
payload, free-form metadata, and epoch-millisecond timestamps. The store keeps
at most ``max_saves`` documents and evicts the least recently updated ones
before creating a new save.
"""

from __future__ import annotations

import json
import logging
import re
import time
import uuid
from pathlib import Path
from typing import Any, Callable

from wrs_dojo.models import LessonRecord, SaveInfo, SaveRecord

logger = logging.getLogger(__name__)

MAX_SAVES = 100
LESSON_KEY = "lesson"
SAVE_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def _now_millis() -> int:
    return int(time.time() * 1000)


class SaveStore:
    """Create, read, update, and delete save blobs in one directory."""

    def __init__(
        self,
        directory: str | Path,
        max_saves: int = MAX_SAVES,
        clock: Callable[[], int] = _now_millis,
    ):
        if max_saves < 1:
            raise ValueError(f"max_saves must be positive, got {max_saves}")
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.max_saves = max_saves
        self._clock = clock

    def _get_path(self, save_id: str) -> Path:
        if not SAVE_ID_RE.fullmatch(save_id):
            raise ValueError(f"Invalid save id: {save_id!r}")
        return self.directory / f"{save_id}.json"

    def _read(self, path: Path) -> SaveRecord:
        with path.open("r", encoding="utf-8") as handle:
            return SaveRecord.from_dict(json.load(handle))

    def _write(self, record: SaveRecord) -> None:
        path = self._get_path(record.info.id)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(record.to_dict(), handle, ensure_ascii=False, indent=2)

    def list_saves(self) -> list[SaveInfo]:
        """List readable saves, most recently updated first.

        Unreadable documents are logged and skipped.
        """

        saves: list[SaveInfo] = []
        for path in self.directory.glob("*.json"):
            try:
                saves.append(self._read(path).info)
            except (OSError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Could not read save file %s: %s", path.name, exc)
        return sorted(saves, key=lambda info: (info.updated_at, info.created_at), reverse=True)

    def get(self, save_id: str) -> SaveRecord:
        """Load one save.

        Raises:
            FileNotFoundError: If no save has ``save_id``.
            ValueError: If the id is malformed or the stored document is corrupt.
        """

        path = self._get_path(save_id)
        if not path.exists():
            raise FileNotFoundError(f"Save not found: {save_id}")
        try:
            return self._read(path)
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Corrupt save file %s: %s", path.name, exc)
            raise ValueError(f"Save {save_id} is not a valid save document") from exc

    def _enforce_max_saves(self) -> None:
        """Delete the oldest saves so one more fits under ``max_saves``."""

        saves = self.list_saves()
        if len(saves) < self.max_saves:
            return
        for info in saves[self.max_saves - 1 :]:
            try:
                self._get_path(info.id).unlink()
                logger.info("Deleted old save: %s (%s)", info.name, info.id)
            except (OSError, ValueError):
                logger.exception("Error deleting save %s", info.id)

    def create(
        self,
        name: str,
        data: dict[str, Any],
        metadata: dict[str, Any] | None = None,
    ) -> SaveInfo:
        """Store a new save and return its listing entry.

        Raises:
            ValueError: If ``name`` or ``data`` is empty.
        """

        if not name or not data:
            raise ValueError("Name and data are required")

        self._enforce_max_saves()

        now = self._clock()
        info = SaveInfo(
            id=f"save_{now}_{uuid.uuid4().hex[:9]}",
            name=name,
            created_at=now,
            updated_at=now,
            metadata=dict(metadata or {}),
        )
        self._write(SaveRecord(info=info, data=dict(data)))
        return info

    def update(
        self,
        save_id: str,
        data: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> SaveInfo:
        """Replace the data and/or metadata of a save, keeping omitted parts.

        Raises:
            FileNotFoundError: If no save has ``save_id``.
        """

        existing = self.get(save_id)
        info = SaveInfo(
            id=existing.info.id,
            name=existing.info.name,
            created_at=existing.info.created_at,
            updated_at=self._clock(),
            metadata=dict(metadata) if metadata is not None else existing.info.metadata,
        )
        self._write(SaveRecord(info=info, data=dict(data) if data is not None else existing.data))
        return info

    def delete(self, save_id: str) -> None:
        """Remove a save.

        Raises:
            FileNotFoundError: If no save has ``save_id``.
        """

        path = self._get_path(save_id)
        if not path.exists():
            raise FileNotFoundError(f"Save not found: {save_id}")
        path.unlink()


def lesson_from_save(record: SaveRecord, key: str = LESSON_KEY) -> LessonRecord | None:
    """Decode the lesson JSON string stored under ``key`` in a save payload.

    Saves hold string values, the way the lesson editor stores its state.
    A missing key or an undecodable value is logged and yields ``None``.
    """

    raw = record.data.get(key)
    if not isinstance(raw, str):
        logger.warning("Save %s has no %r entry", record.info.id, key)
        return None
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.error("Save %s holds invalid lesson JSON: %s", record.info.id, exc)
        return None
    if not isinstance(payload, dict):
        logger.error("Save %s lesson entry is not a JSON object", record.info.id)
        return None
    return LessonRecord.from_dict(payload)
