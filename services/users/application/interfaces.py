from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence

Item = dict[str, Any]


@dataclass(frozen=True)
class KeyPage:
    """Partial items from a query or scan plus the store's continuation key."""

    items: list[Item] = field(default_factory=list)
    last_key: Item | None = None


class IdProvider(Protocol):
    def generate(self) -> str: ...


class DocumentStore(Protocol):
    def get(self, table: str, key: Mapping[str, Any]) -> Item | None: ...

    def put(self, table: str, item: Mapping[str, Any]) -> None: ...

    def delete(self, table: str, key: Mapping[str, Any]) -> Item | None:
        """Delete ``key`` and return the attributes it had, if any."""
        ...

    def query(
        self,
        table: str,
        *,
        index: str,
        field: str,
        value: str,
        limit: int,
        start_key: Mapping[str, Any] | None = None,
    ) -> KeyPage: ...

    def scan(
        self,
        table: str,
        *,
        limit: int,
        start_key: Mapping[str, Any] | None = None,
    ) -> KeyPage: ...

    def batch_get(
        self, table: str, keys: Sequence[Mapping[str, Any]]
    ) -> Mapping[str, list[Item]]:
        """Return hydrated items grouped by table name."""
        ...
