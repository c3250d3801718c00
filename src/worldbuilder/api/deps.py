"""FastAPI dependencies for dependency injection.

Provides the database session and the authenticated user. The access
token is read from the auth cookie set at login, or from an
``Authorization: Bearer`` header for API clients.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Path, Query, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from worldbuilder.core.config import get_settings
from worldbuilder.core.security import decode_access_token
from worldbuilder.models.database import get_session
from worldbuilder.models.user import User

# Security scheme
security = HTTPBearer(auto_error=False)

# Database session dependency
DBSession = Annotated[AsyncSession, Depends(get_session)]

# Row ids are positive 32-bit integers
MAX_ID = 2**31 - 1

# Owner query parameters and resource id shared by every scoped resource route
SeriesIdQuery = Annotated[int | None, Query(alias="seriesId", ge=1, le=MAX_ID)]
BookIdQuery = Annotated[int | None, Query(alias="bookId", ge=1, le=MAX_ID)]
ResourceIdPath = Annotated[int, Path(ge=1, le=MAX_ID)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: DBSession,
) -> User:
    """Get the current authenticated user from the access token.

    Args:
        request: Incoming request, for the auth cookie
        credentials: Bearer token from Authorization header
        db: Database session

    Returns:
        Authenticated user

    Raises:
        HTTPException: If authentication fails
    """
    settings = get_settings()

    token = request.cookies.get(settings.auth_cookie_name)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        raise _unauthorized("Missing authentication token.")

    payload = decode_access_token(token)
    if payload is None:
        raise _unauthorized("Invalid or expired token.")

    try:
        user_id = int(payload.get("sub", ""))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload.")

    user = await db.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found.")

    # ids can be handed out again once an account is gone
    if payload.get("email") != user.email or payload.get("username") != user.username:
        raise _unauthorized("Invalid token payload.")

    return user


# Type aliases for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
