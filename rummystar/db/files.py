"""JSON file snapshot store for the local CLI."""

from __future__ import annotations

import os
import tempfile


class FileSnapshotStore:
    """One ``<key>.json`` file per key, always rewritten whole."""

    def __init__(self, directory: str) -> None:
        self._directory = directory

    def path_for(self, key: str) -> str:
        return os.path.join(self._directory, f"{key}.json")

    def load(self, key: str) -> str | None:
        path = self.path_for(key)
        if not os.path.exists(path):
            return None
        with open(path, encoding="utf-8") as f:
            return f.read()

    def save(self, key: str, data: str) -> None:
        """Write atomically (tmp + rename)."""
        os.makedirs(self._directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_path, self.path_for(key))
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        if os.path.exists(path):
            os.remove(path)
