"""OAuth token exchange and refresh against the Spotify token endpoint"""

import logging
import time
from typing import Any, Callable, Dict, Optional

import httpx

from .errors import ApiError, MalformedResponseError, NetworkError
from .models import Credential, OAuthConfig


logger = logging.getLogger(__name__)

TOKEN_REQUEST_TIMEOUT = 30.0


class TokenExchanger:
    """Turns an authorization code or a refresh token into a Credential

    Neither operation retries; every failure is raised to the caller.
    """

    def __init__(
        self,
        config: Optional[OAuthConfig] = None,
        clock: Callable[[], float] = time.time,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = TOKEN_REQUEST_TIMEOUT,
    ):
        """Initialize the exchanger

        Args:
            config: OAuth client configuration
            clock: Source of the current epoch time
            transport: Optional httpx transport (tests use httpx.MockTransport)
            timeout: Request timeout in seconds
        """
        self.config = config or OAuthConfig()
        self._clock = clock
        self._transport = transport
        self._timeout = timeout

    async def exchange_code(self, code: str, verifier: str) -> Credential:
        """Exchange authorization code for a credential

        Args:
            code: Authorization code from the OAuth callback
            verifier: PKCE code verifier of the same attempt

        Returns:
            Credential with a freshly computed expiry
        """
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.config.redirect_uri,
            "client_id": self.config.client_id,
            "code_verifier": verifier,
        }

        logger.info(f"Exchanging authorization code for tokens at {self.config.token_url}")
        payload = await self._post(data)

        refresh_token = payload.get("refresh_token")
        if not isinstance(refresh_token, str) or not refresh_token:
            raise MalformedResponseError("Token response missing refresh_token")

        credential = self._build_credential(payload, refresh_token)
        logger.info("Successfully exchanged authorization code for tokens")
        return credential

    async def refresh(self, refresh_token: str) -> Credential:
        """Refresh an expired access token

        Spotify does not always rotate refresh tokens; when the response has
        none, the one sent is kept.

        Args:
            refresh_token: Refresh token from the stored credential

        Returns:
            Credential with a freshly computed expiry
        """
        data = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": self.config.client_id,
        }

        logger.info("Refreshing Spotify access token...")
        payload = await self._post(data)

        new_refresh_token = payload.get("refresh_token")
        if new_refresh_token is not None and not isinstance(new_refresh_token, str):
            raise MalformedResponseError("Token response has a non-string refresh_token")

        credential = self._build_credential(payload, new_refresh_token or refresh_token)
        logger.info("Successfully refreshed Spotify access token")
        return credential

    async def _post(self, data: Dict[str, str]) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                response = await client.post(
                    self.config.token_url,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
        except httpx.RequestError as e:
            logger.error(f"Token request failed: {e}")
            raise NetworkError(f"Token request to {self.config.token_url} failed: {e}") from e

        logger.debug(f"Token endpoint response status: {response.status_code}")

        if not response.is_success:
            logger.error(f"Token request failed with status {response.status_code}")
            raise ApiError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            # JSONDecodeError, or UnicodeDecodeError for a body that is not UTF-8
            raise MalformedResponseError(f"Token response is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise MalformedResponseError("Token response is not a JSON object")

        return payload

    def _build_credential(self, payload: Dict[str, Any], refresh_token: str) -> Credential:
        access_token = payload.get("access_token")
        expires_in = payload.get("expires_in")

        if not isinstance(access_token, str) or not access_token:
            raise MalformedResponseError("Token response missing access_token")
        if not isinstance(expires_in, int) or isinstance(expires_in, bool):
            raise MalformedResponseError("Token response missing integer expires_in")

        return Credential(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=int(self._clock()) + expires_in,
        )
