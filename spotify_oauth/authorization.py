"""
Spotify OAuth authorization URL construction
"""
import secrets
from typing import Optional
from urllib.parse import urlencode

from .models import AuthorizationFlow, OAuthConfig
from .pkce import generate_pkce


def create_state() -> str:
    """
    Generate random state parameter for CSRF protection.

    Returns:
        str: 32-byte random state string
    """
    return secrets.token_urlsafe(32)


def build_authorize_url(config: OAuthConfig, code_challenge: str, state: str) -> str:
    """
    Build the Spotify authorization URL.

    Args:
        config: OAuth client configuration
        code_challenge: S256 PKCE challenge
        state: Anti-CSRF value echoed back on the redirect

    Returns:
        str: Full authorization URL
    """
    params = {
        "client_id": config.client_id,
        "response_type": "code",
        "redirect_uri": config.redirect_uri,
        "code_challenge_method": "S256",
        "code_challenge": code_challenge,
        "scope": " ".join(config.scopes),
        "state": state,
    }
    return f"{config.authorize_url}?{urlencode(params)}"


def create_authorization_flow(config: Optional[OAuthConfig] = None) -> AuthorizationFlow:
    """
    Create a Spotify OAuth authorization flow.

    Generates a fresh PKCE pair and state, then the authorization URL carrying
    both.

    Returns:
        AuthorizationFlow: pkce, state and url for one attempt
    """
    config = config or OAuthConfig()
    pkce = generate_pkce()
    state = create_state()
    url = build_authorize_url(config, pkce.challenge, state)

    return AuthorizationFlow(pkce=pkce, state=state, url=url)
