"""
Spotify OAuth authentication module

Authorization-Code-with-PKCE flow, credential storage and refresh.
"""
from .constants import (
    CLIENT_ID,
    AUTHORIZE_URL,
    TOKEN_URL,
    REDIRECT_URI,
    SCOPES,
    EXPIRY_MARGIN_SECONDS,
)
from .errors import (
    SpotifyFetchError,
    TokenStorageError,
    NetworkError,
    ApiError,
    MalformedResponseError,
    CallbackRejectedError,
    CallbackTimeoutError,
    ListenerBindError,
)
from .models import Credential, PKCEPair, AuthorizationFlow, OAuthConfig
from .pkce import generate_pkce, compute_challenge
from .authorization import create_state, build_authorize_url, create_authorization_flow
from .callback_server import OAuthCallbackServer, await_authorization_code
from .token_exchange import TokenExchanger
from .storage import TokenStorage
from .token_manager import SpotifyOAuthManager, TokenState, classify

__all__ = [
    # Constants
    "CLIENT_ID",
    "AUTHORIZE_URL",
    "TOKEN_URL",
    "REDIRECT_URI",
    "SCOPES",
    "EXPIRY_MARGIN_SECONDS",
    # Errors
    "SpotifyFetchError",
    "TokenStorageError",
    "NetworkError",
    "ApiError",
    "MalformedResponseError",
    "CallbackRejectedError",
    "CallbackTimeoutError",
    "ListenerBindError",
    # Models
    "Credential",
    "PKCEPair",
    "AuthorizationFlow",
    "OAuthConfig",
    # Authorization
    "generate_pkce",
    "compute_challenge",
    "create_state",
    "build_authorize_url",
    "create_authorization_flow",
    # Callback Server
    "OAuthCallbackServer",
    "await_authorization_code",
    # Token Exchange
    "TokenExchanger",
    # Storage
    "TokenStorage",
    # Token Manager
    "SpotifyOAuthManager",
    "TokenState",
    "classify",
]
