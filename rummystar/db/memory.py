"""In-memory snapshot store for testing and local CLI."""

from __future__ import annotations


class InMemorySnapshotStore:
    def __init__(self) -> None:
        self._snapshots: dict[str, str] = {}

    def load(self, key: str) -> str | None:
        return self._snapshots.get(key)

    def save(self, key: str, data: str) -> None:
        self._snapshots[key] = data

    def delete(self, key: str) -> None:
        self._snapshots.pop(key, None)
