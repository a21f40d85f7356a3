"""Exception hierarchy for spotifyfetch

Each failure kind of the authentication lifecycle and the statistics client
has its own exception type so the CLI can report it precisely.
"""

from typing import Optional


class SpotifyFetchError(Exception):
    """Base exception for all spotifyfetch errors"""


class TokenStorageError(SpotifyFetchError):
    """Raised when the token file or its directory cannot be written"""


class NetworkError(SpotifyFetchError):
    """Raised when an outbound request fails at the transport level"""


class ApiError(SpotifyFetchError):
    """Raised when Spotify answers with a non-success HTTP status

    Attributes:
        status_code: HTTP status returned by the provider
        body: Response body, verbatim
    """

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error {status_code}: {body}")


class MalformedResponseError(SpotifyFetchError):
    """Raised when a provider response does not have the expected shape"""


class CallbackRejectedError(SpotifyFetchError):
    """Raised when the authorization redirect carries no usable code"""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Authorization callback rejected: {reason}")


class CallbackTimeoutError(SpotifyFetchError):
    """Raised when no authorization redirect arrives in time"""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"No authorization callback received after {timeout:g} seconds")


class ListenerBindError(SpotifyFetchError):
    """Raised when the local callback port cannot be bound"""

    def __init__(self, host: str, port: int, cause: Optional[BaseException] = None):
        self.host = host
        self.port = port
        message = f"Could not listen on {host}:{port}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)
