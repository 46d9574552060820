from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, HTTPException, Query, Response, status
from pydantic import BaseModel

from ..application.dto import UserInput
from ..application.user_interfaces import UserRepository
from ..domain.errors import InternalError, NotFoundError, UserError, ValidationError
from ..domain.user import User, UserPage

logger = logging.getLogger(__name__)

IMAGE_URL_TEMPLATE = "https://picsum.photos/seed/{user_id}/200/300"


def _isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class UserRequest(BaseModel):
    name: str | None = None
    address: str | None = None
    description: str | None = None
    dob: str | None = None

    def to_input(self) -> UserInput:
        return UserInput(
            name=self.name,
            address=self.address,
            description=self.description,
            dob=self.dob,
        )


class UserResponse(BaseModel):
    id: str
    name: str
    address: str
    description: str | None
    dob: str | None
    created_at: str
    updated_at: str | None
    image_url: str

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            address=user.address,
            description=user.description,
            dob=_isoformat(user.dob),
            created_at=_isoformat(user.created_at),
            updated_at=_isoformat(user.updated_at),
            image_url=IMAGE_URL_TEMPLATE.format(user_id=user.id),
        )


class UserPageResponse(BaseModel):
    items: List[UserResponse]
    cursor: str | None

    @classmethod
    def from_domain(cls, page: UserPage) -> "UserPageResponse":
        return cls(
            items=[UserResponse.from_domain(user) for user in page.items],
            cursor=page.cursor,
        )


def _to_http_error(exc: UserError) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InternalError):
        logger.error(f"Internal error while handling user request: {exc}")
    return HTTPException(status_code=500, detail="Internal server error")


def create_router(
    user_repository: UserRepository,
    *,
    default_limit: int = 10,
    max_limit: int = 100,
) -> APIRouter:
    router = APIRouter()
    users_router = APIRouter(prefix="/v1/users", tags=["users"])

    @users_router.post("", response_model=UserResponse, status_code=201)
    def create_user_endpoint(payload: UserRequest):
        try:
            user = user_repository.create_user(payload.to_input())
        except UserError as exc:
            raise _to_http_error(exc) from exc
        return UserResponse.from_domain(user)

    @users_router.get("", response_model=UserPageResponse, status_code=200)
    def list_users_endpoint(
        query: str | None = None,
        limit: int = Query(default=default_limit, ge=1, le=max_limit),
        cursor: str | None = None,
    ):
        try:
            page = user_repository.list_users(query, limit, cursor)
        except UserError as exc:
            raise _to_http_error(exc) from exc
        return UserPageResponse.from_domain(page)

    @users_router.get("/{user_id}", response_model=UserResponse, status_code=200)
    def get_user_endpoint(user_id: str):
        try:
            user = user_repository.get_user(user_id)
        except UserError as exc:
            raise _to_http_error(exc) from exc
        return UserResponse.from_domain(user)

    @users_router.patch("/{user_id}", response_model=UserResponse, status_code=200)
    def update_user_endpoint(user_id: str, payload: UserRequest):
        try:
            user = user_repository.update_user(user_id, payload.to_input())
        except UserError as exc:
            raise _to_http_error(exc) from exc
        return UserResponse.from_domain(user)

    @users_router.delete(
        "/{user_id}",
        response_model=UserResponse,
        responses={204: {"description": "Nothing to delete"}},
    )
    def delete_user_endpoint(user_id: str):
        """Delete a user; a missing user is not an error."""
        try:
            user = user_repository.delete_user(user_id)
        except UserError as exc:
            raise _to_http_error(exc) from exc
        if user is None:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return UserResponse.from_domain(user)

    router.include_router(users_router)

    return router
