"""PKCE (Proof Key for Code Exchange) generation"""

import base64
import hashlib
import secrets

from .models import PKCEPair

# 32 random bytes -> 43 character base64url verifier
VERIFIER_BYTES = 32


def _b64url_nopad(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def compute_challenge(verifier: str) -> str:
    """Derive the S256 code challenge for a verifier

    Args:
        verifier: PKCE code verifier

    Returns:
        Base64url encoded SHA-256 digest of the verifier, without padding
    """
    return _b64url_nopad(hashlib.sha256(verifier.encode("utf-8")).digest())


def generate_pkce() -> PKCEPair:
    """
    Generate PKCE code verifier and challenge.

    RFC 7636 PKCE standard:
    - Verifier: 43-128 characters, base64url encoded (32 bytes -> 43 chars)
    - Challenge: SHA-256 hash of verifier, base64url encoded

    Returns:
        PKCEPair with a fresh verifier and its challenge
    """
    verifier = _b64url_nopad(secrets.token_bytes(VERIFIER_BYTES))
    return PKCEPair(verifier=verifier, challenge=compute_challenge(verifier))
