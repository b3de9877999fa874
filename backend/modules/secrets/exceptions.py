"""
Secrets module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class SecretNotFoundError(NotFoundError):
    """
    Raised when no secret with this ID belongs to the caller.

    Used both when the ID doesn't exist and when it belongs to another user,
    so responses never reveal other users' records.
    """

    def __init__(self, secret_id: str):
        super().__init__(
            "Secret not found",
            code="SECRET_NOT_FOUND",
            details={"secret_id": secret_id},
        )


class EmptySecretError(ValidationError):
    """Raised when secret content is empty or whitespace only."""

    def __init__(self):
        super().__init__("Secret cannot be empty", code="EMPTY_SECRET")


class SecretTooLongError(ValidationError):
    """Raised when secret content exceeds the configured maximum length."""

    def __init__(self, max_length: int):
        super().__init__(
            f"Secret must be at most {max_length} characters",
            code="SECRET_TOO_LONG",
            details={"max_length": max_length},
        )
