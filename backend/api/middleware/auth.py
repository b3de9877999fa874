"""
Session authentication middleware.

Resolves the session cookie to an identity and gates protected routes.
Also owns the session cookie attributes, so every route sets and clears the
cookie the same way.
"""

from typing import Optional
from fastapi import Depends, Request, Response

from shared.config import Settings
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser
from modules.sessions.interfaces import ISessionManager

from ..dependencies import get_app_settings, get_session_manager


class AuthError(AuthenticationError):
    """Raised when a protected route is called without a live session."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="NOT_AUTHENTICATED")


def get_session_token(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Optional[str]:
    """Read the session token from the request cookie, if any."""
    return request.cookies.get(settings.session_cookie_name) or None


async def get_optional_user(
    token: Optional[str] = Depends(get_session_token),
    sessions: ISessionManager = Depends(get_session_manager),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally resolves the session's user.

    Use this for endpoints that work with or without authentication.

    Usage:
        @router.get("/public")
        async def public_route(user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
            if user:
                return {"message": f"Hello, {user.email}"}
            return {"message": "Hello, anonymous"}
    """
    return await sessions.resolve(token)


async def get_current_user(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if user is None:
        raise AuthError()
    return user


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session cookie to a response."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        domain=settings.session_cookie_domain,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Tell the client to drop the session cookie."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        domain=settings.session_cookie_domain,
        path="/",
    )
