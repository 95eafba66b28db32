"""
mvcbasic — User Resource Mapping
==================================

What:  Resource-style URL design for a user collection.

    GET    /mapping/users            list users
    POST   /mapping/users            create a user
    GET    /mapping/users/{userId}   fetch a user
    PATCH  /mapping/users/{userId}   update a user
    DELETE /mapping/users/{userId}   delete a user

Must be included before routes.mapping: "/mapping/{user_id}" would
otherwise claim GET /mapping/users.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(
    prefix="/mapping/users",
    tags=["Request Mapping"],
    default_response_class=PlainTextResponse,
)


@router.get("")
async def users() -> str:
    return "get users"


@router.post("")
async def add_user() -> str:
    return "post user"


@router.get("/{user_id}")
async def find_user(user_id: str) -> str:
    return f"get userId={user_id}"


@router.patch("/{user_id}")
async def update_user(user_id: str) -> str:
    return f"update userId={user_id}"


@router.delete("/{user_id}")
async def delete_user(user_id: str) -> str:
    return f"delete userId={user_id}"
