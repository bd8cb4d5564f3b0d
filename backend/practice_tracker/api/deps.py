"""FastAPI dependencies: token service, current user id from the bearer token, clock."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import Depends, Request

from practice_tracker.core.auth import TokenService
from practice_tracker.core.exceptions import Unauthorized


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_now() -> datetime:
    """Current UTC time; overridden in tests to pin the calendar date."""
    return datetime.now(timezone.utc)


async def get_current_user_id(
    request: Request,
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> int:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise Unauthorized("Missing authorization header")
    token = auth_header[7:].strip()
    if not token:
        raise Unauthorized("Missing authorization header")
    return token_service.validate(token)
