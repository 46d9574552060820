"""Errors raised by user operations."""

from __future__ import annotations


class UserError(Exception):
    """Base class for user domain failures."""


class ValidationError(UserError):
    """Caller supplied data that violates a precondition."""


class NotFoundError(UserError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"Could not find user with id {user_id}")
        self.user_id = user_id


class InternalError(UserError):
    """The store returned a response in a shape it should never have."""
