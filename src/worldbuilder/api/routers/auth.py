"""Authentication router for signup, login and account removal.

A successful signup or login sets an http-only cookie carrying a JWT
access token; every other router authenticates with it.
"""

from fastapi import APIRouter, Response, status

from worldbuilder.api.deps import CurrentUser, DBSession
from worldbuilder.api.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from worldbuilder.core.config import get_settings
from worldbuilder.core.security import create_access_token, hash_password, verify_password
from worldbuilder.models.contracts import (
    CamelModel,
    DeleteAccountRequest,
    LoginRequest,
    MessageResponse,
    SignupRequest,
)
from worldbuilder.models.user import User
from worldbuilder.services.gateway import UserGateway

router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================


class SignupResponse(CamelModel):
    """Signup confirmation with the new user's id."""

    message: str
    user_id: int


class LoginResponse(CamelModel):
    user_id: int


# =============================================================================
# Cookie Helpers
# =============================================================================


def set_auth_cookie(response: Response, user: User) -> None:
    """Issue an access token for the user and store it in the auth cookie."""
    settings = get_settings()
    token = create_access_token(
        user.id,
        extra_claims={"username": user.username, "email": user.email},
    )
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(get_settings().auth_cookie_name)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    response: Response,
    db: DBSession,
) -> SignupResponse:
    """Register a new user and log them in.

    Args:
        request: Registration data
        response: Outgoing response, for the auth cookie
        db: Database session

    Returns:
        Confirmation with the new user id

    Raises:
        UnauthorizedError: If the email is already registered
        ConflictError: If the username is taken
    """
    users = UserGateway(db)

    if await users.get_by_email(request.email):
        raise UnauthorizedError("A user with this email already exists.")
    if await users.get_by_username(request.username):
        raise ConflictError("A user with this username already exists.")

    user = users.create(
        {
            "username": request.username,
            "email": request.email,
            "hashed_password": hash_password(request.password),
        }
    )
    await users.save(user)

    set_auth_cookie(response, user)
    return SignupResponse(message="User created.", user_id=user.id)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    db: DBSession,
) -> LoginResponse:
    """Login with email and password.

    Raises:
        UnauthorizedError: If the email is unknown or the password is wrong
    """
    user = await UserGateway(db).get_by_email(request.email)

    if user is None:
        raise UnauthorizedError("A user with this email could not be found.")
    if not verify_password(request.password, user.hashed_password):
        raise UnauthorizedError("Incorrect password.")

    set_auth_cookie(response, user)
    return LoginResponse(user_id=user.id)


@router.get("/logout", response_model=MessageResponse)
async def logout(user: CurrentUser, response: Response) -> MessageResponse:
    """Clear the auth cookie.

    Tokens are stateless, so an already-issued token stays valid until it
    expires.
    """
    clear_auth_cookie(response)
    return MessageResponse(message="Successfully logged out.")


@router.delete("/delete-account", response_model=MessageResponse)
async def delete_account(
    request: DeleteAccountRequest,
    user: CurrentUser,
    response: Response,
    db: DBSession,
) -> MessageResponse:
    """Delete the caller's account, together with their series and books.

    Raises:
        ForbiddenError: If the id is not the caller's
        NotFoundError: If the user no longer exists
    """
    if request.id != user.id:
        raise ForbiddenError()

    if not await UserGateway(db).delete(request.id):
        raise NotFoundError("User")

    clear_auth_cookie(response)
    return MessageResponse(message="Successfully deleted user.")
