"""
Google OAuth 2.0 client.

Handles the two outbound legs of the authorization-code flow: building the
consent URL and exchanging the returned code for the user's profile.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from .exceptions import OAuthExchangeError
from .models import GoogleProfile

logger = logging.getLogger(__name__)

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
GOOGLE_SCOPES = ("openid", "email", "profile")


class GoogleOAuthClient:
    """
    Google authorization-code client.

    Args:
        client_id: OAuth client ID
        client_secret: OAuth client secret
        callback_url: Redirect URI registered with Google
        timeout: Timeout in seconds for each outbound call
        transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        callback_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._callback_url = callback_url
        self._timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._client_id and self._client_secret)

    def authorization_url(self, state: str) -> str:
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._callback_url,
            "response_type": "code",
            "scope": " ".join(GOOGLE_SCOPES),
            "state": state,
            "prompt": "select_account",
        }
        return f"{GOOGLE_AUTHORIZE_URL}?{urlencode(params)}"

    async def fetch_profile(self, code: str) -> GoogleProfile:
        """
        Exchange an authorization code for the user's Google profile.

        Raises:
            OAuthExchangeError: On any transport, HTTP or payload error
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                token_response = await client.post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "code": code,
                        "client_id": self._client_id,
                        "client_secret": self._client_secret,
                        "redirect_uri": self._callback_url,
                        "grant_type": "authorization_code",
                    },
                )
                token_response.raise_for_status()
                access_token = token_response.json().get("access_token")
                if not access_token:
                    raise OAuthExchangeError("Google returned no access token")

                userinfo_response = await client.get(
                    GOOGLE_USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                userinfo_response.raise_for_status()
                return GoogleProfile(**userinfo_response.json())
        except OAuthExchangeError:
            raise
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Google OAuth request to %s failed with status %s",
                e.request.url, e.response.status_code,
            )
            raise OAuthExchangeError() from e
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers undecodable JSON and pydantic validation errors
            logger.warning("Google OAuth exchange failed: %s", e)
            raise OAuthExchangeError() from e
