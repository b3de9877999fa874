"""
Secret API endpoints.

Paths match what the front end already calls; all of them require a session.
Domain errors propagate to the application's exception handlers.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_secret_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import ISecretService
from .models import (
    DeleteSecretRequest,
    DeleteSecretResponse,
    SecretListResponse,
    SubmitSecretRequest,
    SubmitSecretResponse,
)

router = APIRouter()


@router.get("/secrets", response_model=SecretListResponse)
async def list_secrets(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISecretService = Depends(get_secret_service),
) -> SecretListResponse:
    """
    List the current user's secrets, most recent first.
    """
    secrets = await service.list_secrets(user.id)
    return SecretListResponse(secrets=[s.to_response() for s in secrets])


@router.post("/submit", response_model=SubmitSecretResponse)
async def submit_secret(
    request: SubmitSecretRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISecretService = Depends(get_secret_service),
) -> SubmitSecretResponse:
    """
    Create a secret, or update one when ``secretId`` is given.
    """
    if request.secretId:
        secret = await service.update_secret(user.id, request.secretId, request.secret)
    else:
        secret = await service.create_secret(user.id, request.secret)
    return SubmitSecretResponse(secret=secret.to_response())


@router.post("/secrets/delete", response_model=DeleteSecretResponse)
async def delete_secret(
    request: DeleteSecretRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISecretService = Depends(get_secret_service),
) -> DeleteSecretResponse:
    """
    Delete one of the current user's secrets.
    """
    await service.delete_secret(user.id, request.secretId)
    return DeleteSecretResponse()
