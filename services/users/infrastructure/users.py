"""User repository implementation over a document store."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from ..application.dto import UserInput
from ..application.interfaces import DocumentStore, IdProvider, Item
from ..application.user_interfaces import UserRepository
from ..application.validation import require_creation_fields, validate_user_input
from ..domain.errors import InternalError, NotFoundError
from ..domain.user import User, UserPage
from .cursors import decode_cursor, encode_cursor

logger = logging.getLogger(__name__)

NAME_ATTRIBUTE = "name"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def user_to_item(user: User) -> Item:
    item: Item = {
        "id": user.id,
        "name": user.name,
        "address": user.address,
        "createdAt": format_timestamp(user.created_at),
    }
    if user.description is not None:
        item["description"] = user.description
    if user.dob is not None:
        item["dob"] = format_timestamp(user.dob)
    if user.updated_at is not None:
        item["updatedAt"] = format_timestamp(user.updated_at)
    return item


def user_from_item(item: Mapping[str, Any]) -> User:
    dob = item.get("dob")
    updated_at = item.get("updatedAt")
    return User(
        id=item["id"],
        name=item["name"],
        address=item["address"],
        created_at=parse_timestamp(item["createdAt"]),
        description=item.get("description"),
        dob=parse_timestamp(dob) if dob else None,
        updated_at=parse_timestamp(updated_at) if updated_at else None,
    )


class DocumentUserRepository(UserRepository):
    """UserRepository backed by a DocumentStore table and its name index.

    Writes are unconditional puts, so concurrent updates to the same user
    are last-writer-wins.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        table_name: str,
        name_index: str,
        id_provider: IdProvider,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._table_name = table_name
        self._name_index = name_index
        self._id_provider = id_provider
        self._clock = clock

    def _now(self) -> datetime:
        # Stored timestamps keep millisecond precision only.
        now = self._clock()
        return now.replace(microsecond=now.microsecond // 1000 * 1000)

    def create_user(self, data: UserInput) -> User:
        require_creation_fields(data)
        validated = validate_user_input(data)

        user = User(
            id=self._id_provider.generate(),
            name=validated.name,
            address=validated.address,
            description=validated.description,
            dob=validated.dob,
            created_at=self._now(),
        )
        self._store.put(self._table_name, user_to_item(user))
        logger.info(f"Created user {user.id}")
        return user

    def update_user(self, user_id: str, data: UserInput) -> User:
        validated = validate_user_input(data)
        existing = self.get_user(user_id)

        user = dataclasses.replace(
            existing,
            name=validated.name or existing.name,
            address=validated.address or existing.address,
            dob=validated.dob or existing.dob,
            description=validated.description or existing.description,
            updated_at=self._now(),
        )
        # TODO: switch to a conditional update keyed on updatedAt so concurrent
        # writers cannot silently overwrite each other.
        self._store.put(self._table_name, user_to_item(user))
        logger.info(f"Updated user {user.id}")
        return user

    def get_user(self, user_id: str) -> User:
        item = self._store.get(self._table_name, {"id": user_id})
        if not item:
            raise NotFoundError(user_id)
        return user_from_item(item)

    def delete_user(self, user_id: str) -> User | None:
        attributes = self._store.delete(self._table_name, {"id": user_id})
        if not attributes:
            logger.info(f"Delete requested for missing user {user_id}")
            return None
        logger.info(f"Deleted user {user_id}")
        return user_from_item(attributes)

    def list_users(
        self, query: str | None, limit: int, cursor: str | None
    ) -> UserPage:
        # An exact match on the name index stands in for a real search engine.
        start_key = decode_cursor(cursor)

        if query:
            page = self._store.query(
                self._table_name,
                index=self._name_index,
                field=NAME_ATTRIBUTE,
                value=query,
                limit=limit,
                start_key=start_key,
            )
        else:
            page = self._store.scan(
                self._table_name, limit=limit, start_key=start_key
            )

        user_ids = list(dict.fromkeys(item["id"] for item in page.items))
        logger.debug(f"Discovered {len(user_ids)} user keys (query={query!r})")

        users = self._hydrate(user_ids) if user_ids else []
        return UserPage(items=users, cursor=encode_cursor(page.last_key))

    def _hydrate(self, user_ids: list[str]) -> list[User]:
        responses = self._store.batch_get(
            self._table_name, [{"id": user_id} for user_id in user_ids]
        )
        if self._table_name not in responses:
            logger.error(
                f"Batch get response is missing table {self._table_name}: "
                f"got {sorted(responses)}"
            )
            raise InternalError("Unexpected batch get items result")

        by_id = {item["id"]: item for item in responses[self._table_name]}
        if len(by_id) < len(user_ids):
            logger.warning(
                f"Hydrated {len(by_id)} of {len(user_ids)} discovered users"
            )
        # Batch get is unordered; restore the order keys were discovered in.
        return [
            user_from_item(by_id[user_id]) for user_id in user_ids if user_id in by_id
        ]
