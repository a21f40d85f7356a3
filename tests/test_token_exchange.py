"""Tests for authorization code exchange and token refresh.

Covers:
- Form-encoded request bodies for both grants
- Expiry computation from expires_in
- Refresh token retention when the provider does not rotate it
- Error mapping for HTTP status, transport and shape failures
"""

from urllib.parse import parse_qs

import httpx
import pytest

from spotify_oauth import OAuthConfig
from spotify_oauth.errors import ApiError, MalformedResponseError, NetworkError
from spotify_oauth.token_exchange import TokenExchanger

NOW = 1_700_000_000


class RecordingTransport:
    """Builds an httpx.MockTransport answering every request the same way"""

    def __init__(self, status_code=200, json=None, text=None, content=None, exc=None):
        self.requests = []
        self.content = content
        self.status_code = status_code
        self.json = json
        self.text = text
        self.exc = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.json is not None:
            return httpx.Response(self.status_code, json=self.json)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, text=self.text or "")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def form(self, index=0) -> dict:
        body = self.requests[index].content.decode()
        return {key: values[0] for key, values in parse_qs(body).items()}


def make_exchanger(recorder: RecordingTransport) -> TokenExchanger:
    config = OAuthConfig(client_id="client-456", token_url="https://auth.example.com/api/token")
    return TokenExchanger(config, clock=lambda: NOW + 0.7, transport=recorder.transport)


class TestExchangeCode:
    """Test authorization code to credential exchange."""

    async def test_successful_exchange(self):
        # Arrange
        recorder = RecordingTransport(json={
            "access_token": "access-token-xyz",
            "token_type": "Bearer",
            "expires_in": 3600,
            "refresh_token": "refresh-token-abc",
            "scope": "user-top-read",
        })
        exchanger = make_exchanger(recorder)

        # Act
        credential = await exchanger.exchange_code("ABC123", "verifier-value")

        # Assert
        assert credential.access_token == "access-token-xyz"
        assert credential.refresh_token == "refresh-token-abc"
        assert credential.expires_at == NOW + 3600

        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://auth.example.com/api/token"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert recorder.form() == {
            "grant_type": "authorization_code",
            "code": "ABC123",
            "redirect_uri": "http://localhost:8888/callback",
            "client_id": "client-456",
            "code_verifier": "verifier-value",
        }

    async def test_non_success_status_raises_api_error_with_body(self):
        recorder = RecordingTransport(
            status_code=400, text='{"error":"invalid_grant","error_description":"Invalid authorization code"}'
        )

        with pytest.raises(ApiError) as exc_info:
            await make_exchanger(recorder).exchange_code("used-code", "verifier")

        assert exc_info.value.status_code == 400
        assert exc_info.value.body == '{"error":"invalid_grant","error_description":"Invalid authorization code"}'
        assert len(recorder.requests) == 1

    async def test_missing_refresh_token_is_malformed(self):
        recorder = RecordingTransport(json={"access_token": "a", "expires_in": 3600})

        with pytest.raises(MalformedResponseError):
            await make_exchanger(recorder).exchange_code("ABC123", "verifier")

    async def test_non_json_body_is_malformed(self):
        recorder = RecordingTransport(text="<html>oops</html>")

        with pytest.raises(MalformedResponseError):
            await make_exchanger(recorder).exchange_code("ABC123", "verifier")

    async def test_non_utf8_body_is_malformed(self):
        recorder = RecordingTransport(content=b"\x80\x81not-json")

        with pytest.raises(MalformedResponseError):
            await make_exchanger(recorder).exchange_code("ABC123", "verifier")

    async def test_string_expires_in_is_malformed(self):
        recorder = RecordingTransport(json={"access_token": "a", "refresh_token": "r", "expires_in": "3600"})

        with pytest.raises(MalformedResponseError):
            await make_exchanger(recorder).exchange_code("ABC123", "verifier")

    async def test_transport_failure_raises_network_error(self):
        recorder = RecordingTransport(exc=httpx.ConnectError("connection refused"))

        with pytest.raises(NetworkError):
            await make_exchanger(recorder).exchange_code("ABC123", "verifier")

        # No retry
        assert len(recorder.requests) == 1


class TestRefresh:
    """Test refresh token grant."""

    async def test_refresh_with_rotated_token(self):
        # Arrange
        recorder = RecordingTransport(json={
            "access_token": "new-access",
            "refresh_token": "new-refresh",
            "expires_in": 3600,
        })

        # Act
        credential = await make_exchanger(recorder).refresh("old-refresh")

        # Assert
        assert credential.access_token == "new-access"
        assert credential.refresh_token == "new-refresh"
        assert credential.expires_at == NOW + 3600
        assert recorder.form() == {
            "grant_type": "refresh_token",
            "refresh_token": "old-refresh",
            "client_id": "client-456",
        }

    async def test_refresh_keeps_previous_token_when_omitted(self):
        recorder = RecordingTransport(json={"access_token": "new-access", "expires_in": 3600})

        credential = await make_exchanger(recorder).refresh("old-refresh")

        assert credential.refresh_token == "old-refresh"

    async def test_refresh_rejected(self):
        recorder = RecordingTransport(status_code=401, text="invalid refresh token")

        with pytest.raises(ApiError) as exc_info:
            await make_exchanger(recorder).refresh("revoked")

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == "invalid refresh token"

    async def test_refresh_timeout_raises_network_error(self):
        recorder = RecordingTransport(exc=httpx.ReadTimeout("timed out"))

        with pytest.raises(NetworkError):
            await make_exchanger(recorder).refresh("old-refresh")

    async def test_refresh_missing_access_token_is_malformed(self):
        recorder = RecordingTransport(json={"expires_in": 3600})

        with pytest.raises(MalformedResponseError):
            await make_exchanger(recorder).refresh("old-refresh")

    async def test_refresh_undecodable_body_is_malformed(self):
        recorder = RecordingTransport(content=b"\x80\x81not-json")

        with pytest.raises(MalformedResponseError):
            await make_exchanger(recorder).refresh("old-refresh")
