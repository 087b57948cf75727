"""Store construction from CLI flags and environment."""

from __future__ import annotations

import os

from rummystar.db.repository import SnapshotStore

STORE_MEMORY = "memory"
STORE_FILE = "file"
STORE_DYNAMODB = "dynamodb"
STORE_KINDS = [STORE_MEMORY, STORE_FILE, STORE_DYNAMODB]

DEFAULT_DATA_DIR = os.path.join(os.path.expanduser("~"), ".rummystar")


def create_store(kind: str, data_dir: str | None = None) -> SnapshotStore:
    """Build a snapshot store. DynamoDB (and boto3) is only imported on demand."""
    if kind == STORE_MEMORY:
        from rummystar.db.memory import InMemorySnapshotStore

        return InMemorySnapshotStore()
    if kind == STORE_FILE:
        from rummystar.db.files import FileSnapshotStore

        directory = data_dir or os.environ.get("RUMMYSTAR_DATA_DIR", DEFAULT_DATA_DIR)
        return FileSnapshotStore(directory)
    if kind == STORE_DYNAMODB:
        from rummystar.db.dynamodb import DynamoDBSnapshotStore

        return DynamoDBSnapshotStore()
    raise ValueError(f"Unknown store kind: {kind}")
