"""DynamoDB snapshot store for production."""

from __future__ import annotations

import os

import boto3
from botocore.exceptions import ClientError


# Initialize DynamoDB resource lazily, shared by all stores
_dynamodb = None
_prefix = os.environ.get("RUMMYSTAR_TABLE_PREFIX", "RummyStar")


def _get_dynamodb():
    global _dynamodb
    if _dynamodb is None:
        _dynamodb = boto3.resource("dynamodb")
    return _dynamodb


class DynamoDBSnapshotStore:
    def __init__(self, table_name: str | None = None) -> None:
        self._table_name = table_name or f"{_prefix}_Sessions"
        self._table = _get_dynamodb().Table(self._table_name)

    def load(self, key: str) -> str | None:
        response = self._table.get_item(
            Key={"sessionKey": key},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return item["snapshot"]

    def save(self, key: str, data: str) -> None:
        try:
            self._table.put_item(Item={"sessionKey": key, "snapshot": data})
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                raise ValueError(f"Table {self._table_name} does not exist") from e
            raise

    def delete(self, key: str) -> None:
        self._table.delete_item(Key={"sessionKey": key})
