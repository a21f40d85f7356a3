"""Tests for PKCE verifier and challenge generation."""

import base64
import hashlib

from spotify_oauth.pkce import compute_challenge, generate_pkce


class TestComputeChallenge:
    """Test S256 challenge derivation."""

    def test_matches_rfc7636_example(self):
        # Arrange
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

        # Act
        challenge = compute_challenge(verifier)

        # Assert
        assert challenge == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"

    def test_is_unpadded_base64url_of_sha256(self):
        verifier = "some-verifier_value"

        expected = base64.urlsafe_b64encode(
            hashlib.sha256(verifier.encode("utf-8")).digest()
        ).decode().rstrip("=")

        assert compute_challenge(verifier) == expected
        assert "=" not in compute_challenge(verifier)

    def test_is_deterministic(self):
        assert compute_challenge("abc") == compute_challenge("abc")


class TestGeneratePkce:
    """Test fresh verifier generation."""

    def test_challenge_belongs_to_verifier(self):
        pkce = generate_pkce()

        assert pkce.challenge == compute_challenge(pkce.verifier)

    def test_verifier_encodes_at_least_32_bytes(self):
        pkce = generate_pkce()

        # 32 bytes -> 43 unpadded base64url characters
        assert len(pkce.verifier) >= 43
        padded = pkce.verifier + "=" * (-len(pkce.verifier) % 4)
        assert len(base64.urlsafe_b64decode(padded)) >= 32

    def test_verifier_is_url_safe(self):
        pkce = generate_pkce()

        allowed = set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")
        assert set(pkce.verifier) <= allowed

    def test_independent_verifiers_differ(self):
        verifiers = {generate_pkce().verifier for _ in range(20)}

        assert len(verifiers) == 20

    def test_repr_hides_verifier(self):
        pkce = generate_pkce()

        assert pkce.verifier not in repr(pkce)
