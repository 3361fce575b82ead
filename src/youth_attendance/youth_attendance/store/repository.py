from __future__ import annotations

from typing import Optional, Protocol


class SnapshotRepository(Protocol):
    """Flat key-value storage for serialized snapshots."""

    def load(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def save(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError
