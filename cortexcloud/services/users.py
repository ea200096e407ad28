"""User service layer for registration, login and profile stats."""

import uuid

from cortexcloud.core.config import settings
from cortexcloud.core.errors import ConflictError, InvalidRequestError, UnauthorizedError
from cortexcloud.core.logging import get_logger
from cortexcloud.core.schemas import AnalysisStatus, UserRegister, UserStats
from cortexcloud.core.security import (
    INVALID_TOKEN_DETAIL,
    create_access_token,
    hash_password,
    verify_password,
)
from cortexcloud.db.models import User
from cortexcloud.db.store import Store

logger = get_logger(__name__)


def issue_token(user: User) -> str:
    return create_access_token(user_id=user.id, email=user.email, name=user.name)


async def register_user(store: Store, payload: UserRegister) -> User:
    """Create an account, rejecting short passwords and taken emails."""
    if len(payload.password) < settings.password_min_length:
        raise InvalidRequestError(
            f"Password must be at least {settings.password_min_length} characters."
        )

    if await store.get_user_by_email(payload.email) is not None:
        logger.info("users.register.email_taken")
        raise ConflictError("Email already registered.")

    user = await store.create_user(
        User(
            email=payload.email,
            name=payload.name,
            password_hash=hash_password(payload.password),
        )
    )
    logger.info("users.register.completed", user_id=str(user.id))
    return user


async def authenticate_user(store: Store, email: str, password: str) -> User:
    user = await store.get_user_by_email(email.strip())
    if user is None or not verify_password(password, user.password_hash):
        logger.info("users.login.rejected")
        raise UnauthorizedError("Invalid email or password.")

    logger.info("users.login.completed", user_id=str(user.id))
    return user


async def get_user_or_unauthorized(store: Store, user_id: uuid.UUID) -> User:
    """Resolve the user behind a verified token."""
    user = await store.get_user(user_id)
    if user is None:
        raise UnauthorizedError(INVALID_TOKEN_DETAIL)
    return user


async def get_user_stats(store: Store, user_id: uuid.UUID) -> UserStats:
    """Count the user's datasets, analyses and generated insights."""
    datasets = await store.list_datasets(user_id)
    analyses = await store.list_analyses_by_user(user_id)
    completed = [a for a in analyses if a.status == AnalysisStatus.completed]
    return UserStats(
        total_datasets=len(datasets),
        total_analyses=len(analyses),
        completed_analyses=len(completed),
        total_insights=sum(len(a.results.insights) for a in completed if a.results),
    )
