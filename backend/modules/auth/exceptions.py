"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the API error
handlers, which turn them into HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    InternalError,
    ValidationError,
)


GENERIC_LOGIN_FAILURE = "Invalid email or password"


class AuthFailure(AuthenticationError):
    """Base class for failures of an authentication strategy."""

    pass


class InvalidCredentialsError(AuthFailure):
    """
    Raised when local credentials don't match a usable account.

    ``reason`` is either ``"user_not_found"`` or ``"invalid_password"``. It is
    kept for logging only; the message is the same for both so that callers
    cannot enumerate accounts.
    """

    USER_NOT_FOUND = "user_not_found"
    INVALID_PASSWORD = "invalid_password"

    def __init__(self, reason: str):
        super().__init__(GENERIC_LOGIN_FAILURE, code="INVALID_CREDENTIALS")
        self.reason = reason


class ProfileIncompleteError(AuthFailure):
    """Raised when the OAuth provider profile carries no verified email."""

    def __init__(self, message: str = "OAuth profile has no verified email"):
        super().__init__(message, code="PROFILE_INCOMPLETE")


class OAuthStateMismatchError(AuthFailure):
    """Raised when the OAuth callback state doesn't match the one we issued."""

    def __init__(self):
        super().__init__("OAuth state mismatch", code="OAUTH_STATE_MISMATCH")


class AuthInternalError(InternalError):
    """Raised when an auth flow fails for reasons unrelated to the credentials."""

    def __init__(self, message: str = "Authentication failed due to a server error"):
        super().__init__(message, code="AUTH_INTERNAL_ERROR")


class DuplicateEmailError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "Email already registered",
            code="EMAIL_ALREADY_REGISTERED",
            details={"email": email},
        )


class InvalidRegistrationError(ValidationError):
    """Raised when registration input fails validation."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message,
            code="INVALID_REGISTRATION",
            details={"field": field} if field else None,
        )


class OAuthExchangeError(ExternalServiceError):
    """Raised when the Google token exchange or profile fetch fails."""

    def __init__(self, message: str = "Google sign-in failed"):
        super().__init__(message, service="google", code="OAUTH_EXCHANGE_FAILED")
