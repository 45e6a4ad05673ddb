from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.database import get_db_session
from pulse.logger import logger
from pulse.models import User
from pulse.repositories.user_repository import UserRepository
from pulse.utils.exceptions import UnauthorizedError
from pulse.utils.token.auth.token_util import verify_token

DBSessionDep = Annotated[AsyncSession, Depends(get_db_session)]

security = HTTPBearer(auto_error=False)


async def get_current_user(
    session: DBSessionDep,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    """Resolve the caller from the bearer token"""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    payload = verify_token(credentials.credentials)  # raises UnauthorizedError
    user_id = payload.get("user_id")
    if user_id is None:
        raise UnauthorizedError("Invalid token payload")

    try:
        user_uuid = UUID(user_id)
    except (TypeError, ValueError):
        logger.warning(f"Token carries malformed user id: {user_id!r}")
        raise UnauthorizedError("Invalid user ID format")

    user = await UserRepository(session).find_by_id(user_uuid)
    if user is None:
        raise UnauthorizedError("User not found")

    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]
