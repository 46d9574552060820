"""User domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class User:
    """User entity."""

    id: str
    name: str
    address: str
    created_at: datetime
    description: str | None = None
    dob: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class UserPage:
    """One page of users plus the cursor to resume from, if any."""

    items: list[User] = field(default_factory=list)
    cursor: str | None = None
