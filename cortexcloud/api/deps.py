"""Shared FastAPI dependencies for authentication, storage and randomness."""

import random
from typing import Annotated

from fastapi import Depends, Header

from cortexcloud.core.errors import UnauthorizedError
from cortexcloud.core.logging import bind_context
from cortexcloud.core.security import decode_access_token, get_token_from_header
from cortexcloud.db.models import User
from cortexcloud.db.store import Store, get_store
from cortexcloud.services.users import get_user_or_unauthorized

T_Store = Annotated[Store, Depends(get_store)]


def get_rng() -> random.Random | None:
    """Random source for analysis jitter; ``None`` means a fresh generator."""
    return None


async def get_current_user(
    store: T_Store,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the bearer token to a stored user."""
    token = get_token_from_header(authorization)
    if token is None:
        raise UnauthorizedError()
    user = await get_user_or_unauthorized(store, decode_access_token(token))
    bind_context(user_id=str(user.id))
    return user


T_CurrentUser = Annotated[User, Depends(get_current_user)]
T_Rng = Annotated[random.Random | None, Depends(get_rng)]
