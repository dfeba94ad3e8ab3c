"""
FastAPI dependencies for resolving the acting user.
"""

from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.user import User
from .auth import verify_token
from .exceptions import AuthenticationError
from .logging_config import log_security_event


# auto_error=False so a missing header is reported through AuthenticationError
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Get the current authenticated user from JWT token.

    Raises:
        AuthenticationError: If the token is missing or invalid, or the user
            does not exist or is inactive
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    token_data = verify_token(credentials.credentials)
    if token_data is None or token_data.user_id is None:
        log_security_event("invalid_token", {"reason": "token verification failed"})
        raise AuthenticationError("Could not validate credentials")

    try:
        user_id = UUID(token_data.user_id)
    except ValueError:
        raise AuthenticationError("Could not validate credentials")

    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Could not validate credentials")

    if not user.is_active:
        log_security_event("inactive_user", {"user_id": user.id})
        raise AuthenticationError("Inactive user")

    return user
