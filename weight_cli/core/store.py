"""DynamoDB-backed store for weight records."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from weight_cli.core.config import AWSCredentials
from weight_cli.core.constants import DEFAULT_TABLE_NAME, KEY_FIELD, STRING_TAG
from weight_cli.core.errors import StoreUnavailable
from weight_cli.core.models import WeightRecord
from weight_cli.core.series import Item, record_to_item

# One attempt per call; failures surface immediately.
_CLIENT_CONFIG = Config(retries={"max_attempts": 1, "mode": "standard"})


class WeightStore:
    """Thin wrapper around the weight table's scan/put/delete calls."""

    def __init__(
        self,
        table_name: str = DEFAULT_TABLE_NAME,
        credentials: Optional[AWSCredentials] = None,
        client: Any = None,
    ) -> None:
        self.table_name = table_name
        self.credentials = credentials
        self._client = client

    def _make_client(self) -> Any:
        kwargs: Dict[str, Any] = {"config": _CLIENT_CONFIG}
        if self.credentials is not None:
            kwargs.update(
                aws_access_key_id=self.credentials.access_key_id,
                aws_secret_access_key=self.credentials.secret_access_key,
                region_name=self.credentials.region,
            )
        return boto3.client("dynamodb", **kwargs)

    @property
    def client(self) -> Any:
        if self._client is None:
            try:
                self._client = self._make_client()
            except BotoCoreError as exc:
                raise StoreUnavailable(f"Could not create DynamoDB client: {exc}") from exc
        return self._client

    def scan(self) -> List[Item]:
        """Return every raw item in the table."""
        items: List[Item] = []
        try:
            paginator = self.client.get_paginator("scan")
            for page in paginator.paginate(TableName=self.table_name):
                items.extend(page.get("Items", []))
        except (BotoCoreError, ClientError) as exc:
            raise StoreUnavailable(f"Scan of table {self.table_name} failed: {exc}") from exc
        return items

    def put(self, record: WeightRecord) -> Item:
        """Upsert a record keyed by its timestamp and return the stored item."""
        item = record_to_item(record)
        try:
            self.client.put_item(TableName=self.table_name, Item=item)
        except (BotoCoreError, ClientError) as exc:
            raise StoreUnavailable(f"Put into table {self.table_name} failed: {exc}") from exc
        return item

    def delete(self, key: str) -> Dict[str, Dict[str, str]]:
        """Delete the item whose timestamp equals `key`."""
        item_key = {KEY_FIELD: {STRING_TAG: key}}
        try:
            self.client.delete_item(TableName=self.table_name, Key=item_key)
        except (BotoCoreError, ClientError) as exc:
            raise StoreUnavailable(f"Delete from table {self.table_name} failed: {exc}") from exc
        return item_key
