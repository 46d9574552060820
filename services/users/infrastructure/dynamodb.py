from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import boto3
from boto3.dynamodb.conditions import Key
from botocore.client import Config as BotoConfig

from ..application.interfaces import DocumentStore, Item, KeyPage
from ..config import UsersConfig

logger = logging.getLogger(__name__)


def create_dynamodb_resource(config: UsersConfig):
    return boto3.resource(
        "dynamodb",
        endpoint_url=config.endpoint_url,
        region_name=config.region,
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        config=BotoConfig(connect_timeout=5, read_timeout=10),
    )


class DynamoDBDocumentStore(DocumentStore):
    def __init__(self, resource) -> None:
        self._resource = resource

    def get(self, table: str, key: Mapping[str, Any]) -> Item | None:
        response = self._resource.Table(table).get_item(Key=dict(key))
        return response.get("Item")

    def put(self, table: str, item: Mapping[str, Any]) -> None:
        self._resource.Table(table).put_item(Item=dict(item))

    def delete(self, table: str, key: Mapping[str, Any]) -> Item | None:
        response = self._resource.Table(table).delete_item(
            Key=dict(key), ReturnValues="ALL_OLD"
        )
        return response.get("Attributes")

    def query(
        self,
        table: str,
        *,
        index: str,
        field: str,
        value: str,
        limit: int,
        start_key: Mapping[str, Any] | None = None,
    ) -> KeyPage:
        params: dict[str, Any] = {
            "IndexName": index,
            "KeyConditionExpression": Key(field).eq(value),
            "Limit": limit,
        }
        if start_key:
            params["ExclusiveStartKey"] = dict(start_key)
        response = self._resource.Table(table).query(**params)
        return KeyPage(
            items=response.get("Items", []),
            last_key=response.get("LastEvaluatedKey"),
        )

    def scan(
        self,
        table: str,
        *,
        limit: int,
        start_key: Mapping[str, Any] | None = None,
    ) -> KeyPage:
        params: dict[str, Any] = {"Limit": limit}
        if start_key:
            params["ExclusiveStartKey"] = dict(start_key)
        response = self._resource.Table(table).scan(**params)
        return KeyPage(
            items=response.get("Items", []),
            last_key=response.get("LastEvaluatedKey"),
        )

    def batch_get(
        self, table: str, keys: Sequence[Mapping[str, Any]]
    ) -> Mapping[str, list[Item]]:
        response = self._resource.batch_get_item(
            RequestItems={table: {"Keys": [dict(key) for key in keys]}}
        )
        unprocessed = response.get("UnprocessedKeys") or {}
        if unprocessed:
            unprocessed_keys = unprocessed.get(table, {}).get("Keys", [])
            logger.warning(
                f"Batch get left {len(unprocessed_keys)} keys unprocessed "
                f"for table {table}"
            )
        return response.get("Responses") or {}


def create_document_store(config: UsersConfig) -> DocumentStore:
    resource = create_dynamodb_resource(config)
    return DynamoDBDocumentStore(resource)
