"""
Local OAuth callback server
"""
import asyncio
import logging
from typing import Optional

from aiohttp import web

from .errors import CallbackRejectedError, CallbackTimeoutError, ListenerBindError

logger = logging.getLogger(__name__)

SUCCESS_PAGE = """
<html>
    <body>
        <h1>Authorization complete</h1>
        <p>You can now close this window and return to the terminal.</p>
        <script>
            setTimeout(function() {
                window.close();
            }, 2000);
        </script>
    </body>
</html>
"""


class OAuthCallbackServer:
    """Local HTTP server that captures a single authorization redirect

    The server answers every callback with the same page, keeps only the first
    one, and is reachable only between start() and stop().
    """

    def __init__(self, expected_state: str, host: str, port: int, path: str = "/callback"):
        self.expected_state = expected_state
        self.host = host
        self.port = port
        self.path = path
        self.app = web.Application()
        self.runner: Optional[web.AppRunner] = None
        self._code: Optional[str] = None
        self._rejection: Optional[str] = None
        self._event = asyncio.Event()

        # Register callback route
        self.app.router.add_get(self.path, self._handle_callback)

    async def _handle_callback(self, request: web.Request) -> web.Response:
        """Handle OAuth callback request"""
        if self._event.is_set():
            logger.debug("Ignoring additional callback request")
            return web.Response(text=SUCCESS_PAGE, content_type="text/html")

        code = request.query.get("code")
        state = request.query.get("state")
        error = request.query.get("error")
        error_description = request.query.get("error_description")

        if error:
            self._rejection = f"{error}: {error_description}" if error_description else error
            logger.warning(f"Authorization denied by provider: {self._rejection}")
        elif not code:
            self._rejection = "missing authorization code"
            logger.warning("Callback request carried no authorization code")
        elif state != self.expected_state:
            self._rejection = "state mismatch"
            logger.warning("Callback state does not match this authorization attempt")
        else:
            self._code = code
            logger.debug(f"Received authorization code (length: {len(code)})")

        self._event.set()

        # Same page regardless of outcome so the browser tab ends cleanly
        return web.Response(text=SUCCESS_PAGE, content_type="text/html")

    async def start(self) -> None:
        """Start the callback server

        Raises:
            ListenerBindError: If the callback port cannot be bound
        """
        # access_log=None keeps the code out of the logs
        self.runner = web.AppRunner(self.app, access_log=None)
        await self.runner.setup()

        site = web.TCPSite(self.runner, host=self.host, port=self.port)

        try:
            await site.start()
        except OSError as e:
            await self.runner.cleanup()
            self.runner = None
            raise ListenerBindError(self.host, self.port, e) from e

        logger.info(f"OAuth callback server listening on {self.host}:{self.port}")

    async def wait_for_callback(self, timeout: float) -> str:
        """
        Wait for OAuth callback.

        Args:
            timeout: Maximum time to wait in seconds

        Returns:
            The authorization code

        Raises:
            CallbackTimeoutError: If no callback arrives in time
            CallbackRejectedError: If the callback carries an error, no code
                or a foreign state
        """
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"OAuth callback timeout after {timeout} seconds")
            raise CallbackTimeoutError(timeout) from None

        if self._rejection is not None:
            raise CallbackRejectedError(self._rejection)

        return self._code

    async def stop(self) -> None:
        """Stop the callback server"""
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
            logger.debug("OAuth callback server stopped")


async def await_authorization_code(
    expected_state: str,
    host: str,
    port: int,
    path: str = "/callback",
    timeout: float = 300,
) -> str:
    """
    Listen for one authorization redirect and return its code.

    The listener is torn down before this returns, whatever the outcome.

    Args:
        expected_state: State value sent in the authorization request
        host: Bind host, must match the registered redirect URI
        port: Bind port, must match the registered redirect URI
        path: Callback path
        timeout: Maximum time to wait in seconds

    Returns:
        The authorization code
    """
    server = OAuthCallbackServer(expected_state, host, port, path)
    await server.start()
    try:
        return await server.wait_for_callback(timeout)
    finally:
        await server.stop()
