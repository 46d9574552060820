"""Interfaces for user repositories."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from ..domain.user import User, UserPage
from .dto import UserInput


class UserRepository(Protocol):
    """Repository for user persistence."""

    @abstractmethod
    def create_user(self, data: UserInput) -> User:
        """Validate and store a new user."""
        ...

    @abstractmethod
    def update_user(self, user_id: str, data: UserInput) -> User:
        """Merge the supplied fields into an existing user."""
        ...

    @abstractmethod
    def delete_user(self, user_id: str) -> User | None:
        """Delete a user, returning it as it was before deletion."""
        ...

    @abstractmethod
    def get_user(self, user_id: str) -> User:
        """Get user by ID."""
        ...

    @abstractmethod
    def list_users(
        self, query: str | None, limit: int, cursor: str | None
    ) -> UserPage:
        """List users, optionally restricted to an exact name."""
        ...
