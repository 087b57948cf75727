"""Snapshot store protocol for Rummy Star persistence."""

from __future__ import annotations

from typing import Protocol


class SnapshotStore(Protocol):
    """Opaque key-value store holding whole serialized sessions."""

    def load(self, key: str) -> str | None:
        ...

    def save(self, key: str, data: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...
