"""Authentication routes: registration, login and the current profile."""

from fastapi import APIRouter, status

from cortexcloud.api.deps import T_CurrentUser, T_Store
from cortexcloud.core.schemas import (
    AuthPublic,
    ErrorResponse,
    ProfilePublic,
    UserLogin,
    UserPublic,
    UserRegister,
)
from cortexcloud.services import users as users_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthPublic,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def register(store: T_Store, payload: UserRegister) -> AuthPublic:
    """Create an account and return a bearer token for it."""
    user = await users_service.register_user(store, payload)
    return AuthPublic(
        message="Registration successful",
        user=UserPublic.model_validate(user),
        token=users_service.issue_token(user),
    )


@router.post("/login", response_model=AuthPublic, responses={401: {"model": ErrorResponse}})
async def login(store: T_Store, payload: UserLogin) -> AuthPublic:
    user = await users_service.authenticate_user(store, payload.email, payload.password)
    return AuthPublic(
        message="Login successful",
        user=UserPublic.model_validate(user),
        token=users_service.issue_token(user),
    )


@router.get("/me", response_model=ProfilePublic)
async def me(store: T_Store, user: T_CurrentUser) -> ProfilePublic:
    """Return the authenticated user with dataset and analysis counts."""
    return ProfilePublic(
        user=UserPublic.model_validate(user),
        stats=await users_service.get_user_stats(store, user.id),
    )
