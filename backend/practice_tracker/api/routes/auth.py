"""Auth: register, login."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from practice_tracker.api.deps import get_token_service
from practice_tracker.core.auth import TokenService
from practice_tracker.db.session import get_db
from practice_tracker.schemas.auth import LoginBody, LoginResponse, RegisterBody
from practice_tracker.schemas.practice import UserOut
from practice_tracker.services.accounts import authenticate_user, register_user

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=LoginResponse,
    summary="Register a new user",
    responses={
        409: {"description": "Username already registered"},
    },
)
async def register(
    session: Annotated[AsyncSession, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    body: RegisterBody,
) -> LoginResponse:
    user = await register_user(session, body.username, body.password)
    return LoginResponse(token=token_service.issue(user.id), user=UserOut.from_model(user))


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login with username and password",
    responses={
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    session: Annotated[AsyncSession, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    body: LoginBody,
) -> LoginResponse:
    user = await authenticate_user(session, body.username, body.password)
    return LoginResponse(token=token_service.issue(user.id), user=UserOut.from_model(user))
