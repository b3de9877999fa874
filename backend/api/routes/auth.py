"""
Authentication endpoints.

Local login and registration, session status, logout and the Google
authorization-code flow. Successful sign-ins start a server-side session
and set the session cookie.
"""

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from shared.config import Settings
from shared.exceptions import SecretsAPIError
from shared.models import AuthenticatedUser
from modules.auth.exceptions import OAuthStateMismatchError
from modules.auth.interfaces import IAuthService
from modules.auth.models import (
    AuthResponse,
    CheckAuthResponse,
    CredentialsRequest,
    User,
    UserResponse,
)
from modules.sessions.interfaces import ISessionManager

from ..dependencies import get_app_settings, get_auth_service, get_session_manager
from ..middleware.auth import (
    clear_session_cookie,
    get_optional_user,
    get_session_token,
    set_session_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter()
google_router = APIRouter()

OAUTH_STATE_COOKIE = "oauth_state"
OAUTH_STATE_MAX_AGE = 600  # seconds


async def _start_session(
    user: User,
    response: Response,
    sessions: ISessionManager,
    settings: Settings,
) -> None:
    token = await sessions.create(user.to_identity())
    set_session_cookie(response, token, settings)


@router.get("/check-auth", response_model=CheckAuthResponse, response_model_exclude_none=True)
async def check_auth(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> CheckAuthResponse:
    """
    Report whether the request carries a live session.
    """
    if user is None:
        return CheckAuthResponse(isAuthenticated=False)
    return CheckAuthResponse(
        isAuthenticated=True,
        user=UserResponse(id=user.id, email=user.email),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: CredentialsRequest,
    response: Response,
    auth: IAuthService = Depends(get_auth_service),
    sessions: ISessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    """
    Log in with email and password.

    Any credential failure gives the same 401 response.
    """
    user = await auth.login(request.username, request.password)
    await _start_session(user, response, sessions, settings)
    return AuthResponse(user=UserResponse(id=user.id, email=user.email))


@router.post("/register", response_model=AuthResponse)
async def register(
    request: CredentialsRequest,
    response: Response,
    auth: IAuthService = Depends(get_auth_service),
    sessions: ISessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    """
    Create a local account and log it in.
    """
    user = await auth.register(request.username, request.password)
    await _start_session(user, response, sessions, settings)
    return AuthResponse(user=UserResponse(id=user.id, email=user.email))


@router.get("/logout")
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    sessions: ISessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """
    End the current session, if any, and clear the cookie.
    """
    await sessions.destroy(token)
    clear_session_cookie(response, settings)
    return {"success": True}


@google_router.get("/api/auth/google")
@google_router.get("/auth/google")
async def google_login(
    auth: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> RedirectResponse:
    """
    Redirect to Google's consent screen.

    A random state value goes into a short-lived cookie and must come back
    unchanged on the callback.
    """
    state = secrets.token_urlsafe(24)
    try:
        url = auth.google_authorization_url(state)
    except SecretsAPIError as e:
        logger.error("Google sign-in unavailable: %s", e.message)
        frontend = settings.frontend_url.rstrip("/")
        return RedirectResponse(f"{frontend}/login?error=oauth_failed", status_code=302)

    redirect = RedirectResponse(url, status_code=302)
    redirect.set_cookie(
        key=OAUTH_STATE_COOKIE,
        value=state,
        max_age=OAUTH_STATE_MAX_AGE,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )
    return redirect


@google_router.get("/auth/google/secrets")
async def google_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    auth: IAuthService = Depends(get_auth_service),
    sessions: ISessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_app_settings),
) -> RedirectResponse:
    """
    Complete the Google flow.

    On success the user lands on the secrets page with a session cookie;
    on any failure they land on the login page with a generic error flag.
    """
    frontend = settings.frontend_url.rstrip("/")
    expected_state = request.cookies.get(OAUTH_STATE_COOKIE)

    try:
        if not code or not state or not expected_state \
                or not secrets.compare_digest(state, expected_state):
            raise OAuthStateMismatchError()
        user = await auth.login_with_google(code)
    except SecretsAPIError as e:
        logger.warning("Google sign-in failed: %s", e.code)
        redirect = RedirectResponse(f"{frontend}/login?error=oauth_failed", status_code=302)
        redirect.delete_cookie(OAUTH_STATE_COOKIE, path="/")
        return redirect

    redirect = RedirectResponse(f"{frontend}/secrets", status_code=302)
    redirect.delete_cookie(OAUTH_STATE_COOKIE, path="/")
    await _start_session(user, redirect, sessions, settings)
    return redirect
