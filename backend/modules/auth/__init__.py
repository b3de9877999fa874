"""
Authentication module.

Handles local (email + password) and Google sign-in.

Public API:
- IAuthService: Interface for auth operations
- AuthService: Default implementation
- User, GoogleProfile: Account and provider profile models
- Auth exceptions: InvalidCredentialsError, DuplicateEmailError, etc.
"""

from .interfaces import IAuthService, IUserRepository
from .models import User, GoogleProfile, OAUTH_PASSWORD_SENTINEL
from .exceptions import (
    AuthFailure,
    InvalidCredentialsError,
    ProfileIncompleteError,
    OAuthStateMismatchError,
    AuthInternalError,
    DuplicateEmailError,
    InvalidRegistrationError,
    OAuthExchangeError,
)
from .service import AuthService

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    # Implementation
    "AuthService",
    # Models
    "User",
    "GoogleProfile",
    "OAUTH_PASSWORD_SENTINEL",
    # Exceptions
    "AuthFailure",
    "InvalidCredentialsError",
    "ProfileIncompleteError",
    "OAuthStateMismatchError",
    "AuthInternalError",
    "DuplicateEmailError",
    "InvalidRegistrationError",
    "OAuthExchangeError",
]
