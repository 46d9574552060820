from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserInput:
    name: str | None = None
    address: str | None = None
    description: str | None = None
    dob: str | None = None


@dataclass(frozen=True)
class ValidatedUserInput:
    name: str | None
    address: str | None
    description: str | None
    dob: datetime | None
