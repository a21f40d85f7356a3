"""Data models for Spotify OAuth authentication"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping
from urllib.parse import urlparse

from .constants import (
    AUTHORIZE_URL,
    CLIENT_ID,
    EXPIRY_MARGIN_SECONDS,
    OAUTH_CALLBACK_TIMEOUT,
    REDIRECT_URI,
    SCOPES,
    TOKEN_URL,
)


@dataclass(frozen=True)
class Credential:
    """OAuth credential persisted between invocations

    Attributes:
        access_token: Bearer token for API requests
        refresh_token: Token used to obtain a new access token
        expires_at: Absolute expiry as epoch seconds
    """
    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    expires_at: int

    def is_expired(self, now: float) -> bool:
        """Check if the access token is expired or about to expire

        Args:
            now: Current time as epoch seconds

        Returns:
            True once `now` is within the safety margin of `expires_at`
        """
        return now >= self.expires_at - EXPIRY_MARGIN_SECONDS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Credential":
        """Load from dictionary

        Raises:
            ValueError: If a field is missing or has the wrong type
        """
        access_token = data.get("access_token")
        refresh_token = data.get("refresh_token")
        expires_at = data.get("expires_at")

        if not isinstance(access_token, str) or not access_token:
            raise ValueError("access_token must be a non-empty string")
        if not isinstance(refresh_token, str) or not refresh_token:
            raise ValueError("refresh_token must be a non-empty string")
        # bool is an int subclass
        if not isinstance(expires_at, int) or isinstance(expires_at, bool):
            raise ValueError("expires_at must be an integer")

        return cls(access_token=access_token, refresh_token=refresh_token, expires_at=expires_at)


@dataclass(frozen=True)
class PKCEPair:
    """PKCE code verifier and challenge pair

    Attributes:
        verifier: Random secret proving possession at code exchange
        challenge: SHA-256 of the verifier, sent in the authorization request
    """
    verifier: str = field(repr=False)
    challenge: str


@dataclass(frozen=True)
class AuthorizationFlow:
    """One authorization attempt: PKCE pair, anti-CSRF state and browser URL"""
    pkce: PKCEPair
    state: str = field(repr=False)
    url: str = field(repr=False)


@dataclass(frozen=True)
class OAuthConfig:
    """OAuth client configuration injected into the token manager

    The callback listener binds to the host, port and path of `redirect_uri`,
    so the two can never disagree.
    """
    client_id: str = CLIENT_ID
    authorize_url: str = AUTHORIZE_URL
    token_url: str = TOKEN_URL
    redirect_uri: str = REDIRECT_URI
    scopes: List[str] = field(default_factory=lambda: list(SCOPES))
    callback_timeout: float = OAUTH_CALLBACK_TIMEOUT

    @property
    def callback_host(self) -> str:
        return urlparse(self.redirect_uri).hostname or "localhost"

    @property
    def callback_port(self) -> int:
        return urlparse(self.redirect_uri).port or 80

    @property
    def callback_path(self) -> str:
        return urlparse(self.redirect_uri).path or "/"
