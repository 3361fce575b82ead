from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class JsonFileSnapshotRepository:
    """Key-value snapshots kept in one JSON file; handy without a MySQL server."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def _read_for_write(self) -> dict[str, str]:
        """Current contents, or an empty dict when the file cannot be decoded.

        A corrupt file is overwritten by the next write instead of blocking it.
        """
        try:
            return self._read_all()
        except ValueError:
            logger.warning("Snapshot file %s is corrupt, overwriting it", self._path)
            return {}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self._path)

    def load(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return str(value) if value is not None else None

    def save(self, key: str, value: str) -> None:
        data = self._read_for_write()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> bool:
        data = self._read_for_write()
        if key not in data:
            return False
        del data[key]
        self._write_all(data)
        return True
