"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and in-memory fakes.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import GoogleProfile, User


@runtime_checkable
class IUserRepository(Protocol):
    """Storage operations for user accounts."""

    async def get_by_email(self, email: str) -> Optional[User]:
        """Return the user with exactly this email, or None."""
        ...

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Return the user with this ID, or None."""
        ...

    async def create(self, email: str, password_hash: str) -> User:
        """
        Insert a user and return the stored row.

        Raises:
            DuplicateEmailError: If the email is already taken
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer. Implementations must provide all these methods.
    """

    async def register(self, email: str, password: str) -> User:
        """
        Create a local account.

        Raises:
            InvalidRegistrationError: If the email or password is unacceptable
            DuplicateEmailError: If the email already has an account
        """
        ...

    async def login(self, email: str, password: str) -> User:
        """
        Verify local credentials.

        Raises:
            InvalidCredentialsError: If the credentials don't match
        """
        ...

    def google_authorization_url(self, state: str) -> str:
        """Build the Google consent URL for the given CSRF state."""
        ...

    async def login_with_google(self, code: str) -> User:
        """
        Complete the Google flow and return the linked or created user.

        Raises:
            OAuthExchangeError: If Google rejects the code
            ProfileIncompleteError: If the profile has no verified email
            AuthInternalError: If the user can't be stored
        """
        ...

    async def login_with_profile(self, profile: GoogleProfile) -> User:
        """Link or create the user for an already-fetched Google profile."""
        ...
