from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from domain.schemas import AppData, MonthlyRecord, WeekEntry
from infrastructure.persistence.store import Store, StoreError
from infrastructure.remote.remote_mirror import RemoteMirror

logger = logging.getLogger(__name__)

_WEEK = TypeAdapter(WeekEntry)


class JsonFileStore(Store):
    """
    Local JSON snapshot on disk, mirrored to a remote table after each save.

    Records are validated one by one: an invalid week or month is skipped on
    load without affecting the others. When a load had to skip anything, the
    next save first copies the file on disk to `<name>.bak` so the skipped
    records are never overwritten.
    """

    name = "json_file"

    def __init__(self, path: str | Path | None = None, mirror: RemoteMirror | None = None) -> None:
        self._path = Path(path or os.getenv("WEEKLY_REVIEW_DATA_PATH", "data/weekly_review.json"))
        self._mirror = mirror
        self.skipped: list[str] = []
        self._lossy = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        return self._path.with_name(self._path.name + ".bak")

    def load(self) -> AppData:
        self.skipped = []
        self._lossy = False
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("JsonFileStore no snapshot at path=%s, starting empty", self._path)
            return AppData()
        except OSError:
            logger.exception("JsonFileStore failed to read path=%s", self._path)
            self._lossy = True
            return AppData()

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            logger.exception("JsonFileStore snapshot is not valid JSON path=%s", self._path)
            self._lossy = True
            return AppData()
        data = self._parse(payload)
        self._lossy = self._lossy or bool(self.skipped)
        return data

    def save(self, data: AppData) -> None:
        payload = data.model_dump(mode="json", by_alias=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            if self._lossy and self._path.exists():
                shutil.copy2(self._path, self.backup_path)
                logger.warning("JsonFileStore kept unreadable snapshot at path=%s", self.backup_path)
            tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            raise StoreError(f"Could not write snapshot to {self._path}: {exc}") from exc
        self._lossy = False

        logger.info("JsonFileStore saved weeks=%d months=%d path=%s", len(data.weeks), len(data.months), self._path)
        if self._mirror is not None:
            self._mirror.push(payload)

    def restore_from_mirror(self) -> AppData | None:
        """Replace the local snapshot with the remote copy, if one exists."""
        if self._mirror is None:
            return None
        payload = self._mirror.fetch()
        if payload is None:
            return None
        self.skipped = []
        data = self._parse(payload)
        # The local file is replaced wholesale; keep it.
        self._lossy = True
        self.save(data)
        return data

    def _parse(self, payload: Any) -> AppData:
        if not isinstance(payload, dict):
            logger.warning("JsonFileStore snapshot is %s, expected an object", type(payload).__name__)
            self._lossy = True
            return AppData()

        weeks = self._entries(payload, "weeks", _WEEK.validate_python)
        months = self._entries(payload, "months", MonthlyRecord.model_validate)
        return AppData(weeks=weeks, months=months)

    def _entries(self, payload: dict[str, Any], section: str, validate: Any) -> dict[str, Any]:
        raw = payload.get(section) or {}
        if not isinstance(raw, dict):
            logger.warning("JsonFileStore %s is %s, expected an object", section, type(raw).__name__)
            self.skipped.append(section)
            return {}
        entries: dict[str, Any] = {}
        for key, value in raw.items():
            try:
                entries[key] = validate(value)
            except ValidationError as exc:
                logger.warning("JsonFileStore skipped invalid record %s[%s]: %s", section, key, exc.errors()[:3])
                self.skipped.append(f"{section}[{key}]")
        return entries
