"""
OAuth token lifecycle management

The manager is the only entry point the rest of the application uses: it
returns a currently valid access token, running the browser authorization or
a refresh when needed.
"""
import enum
import logging
import time
import webbrowser
from typing import Callable, Optional

from rich.console import Console

from .authorization import create_authorization_flow
from .callback_server import OAuthCallbackServer
from .models import Credential, OAuthConfig
from .storage import TokenStorage
from .token_exchange import TokenExchanger

logger = logging.getLogger(__name__)


class TokenState(enum.Enum):
    """Where the stored session stands"""
    NO_CREDENTIAL = "no_credential"
    FRESH = "fresh"
    STALE = "stale"


def classify(credential: Optional[Credential], now: float) -> TokenState:
    """Classify a loaded credential against the current time"""
    if credential is None:
        return TokenState.NO_CREDENTIAL
    if credential.is_expired(now):
        return TokenState.STALE
    return TokenState.FRESH


class SpotifyOAuthManager:
    """Manages the Spotify credential across invocations"""

    def __init__(
        self,
        config: Optional[OAuthConfig] = None,
        storage: Optional[TokenStorage] = None,
        exchanger: Optional[TokenExchanger] = None,
        browser_opener: Callable[[str], bool] = webbrowser.open,
        callback_server_factory: Callable[..., OAuthCallbackServer] = OAuthCallbackServer,
        clock: Callable[[], float] = time.time,
        console: Optional[Console] = None,
    ):
        """
        Initialize the manager.

        Args:
            config: OAuth client configuration
            storage: Token storage (creates default if None)
            exchanger: Token exchanger (creates one from config if None)
            browser_opener: Opens the authorization URL, returns success
            callback_server_factory: Builds the callback listener
            clock: Source of the current epoch time
            console: Rich console for user-facing messages
        """
        self.config = config or OAuthConfig()
        self.storage = storage or TokenStorage()
        self.exchanger = exchanger or TokenExchanger(self.config, clock=clock)
        self._open_browser = browser_opener
        self._callback_server_factory = callback_server_factory
        self._clock = clock
        self.console = console or Console()

    def get_state(self) -> TokenState:
        """Classify the stored credential without touching the network"""
        return classify(self.storage.load(), self._clock())

    async def get_valid_token(self) -> str:
        """Get a valid access token, authorizing or refreshing as needed

        Returns:
            Bearer access token

        Raises:
            SpotifyFetchError: Any exchange, refresh, listener or storage
                failure; the token file is left untouched
        """
        credential = self.storage.load()
        state = classify(credential, self._clock())

        if state is TokenState.FRESH:
            logger.debug("Using stored Spotify access token")
            return credential.access_token

        if state is TokenState.STALE:
            self.console.print("[yellow]Access token expired, refreshing...[/yellow]")
            credential = await self.exchanger.refresh(credential.refresh_token)
            self.storage.save(credential)
            logger.info("Token refreshed and saved")
            return credential.access_token

        self.console.print("No tokens found, starting authorization flow...")
        credential = await self.authorize()
        self.storage.save(credential)
        logger.info("Authorization complete, tokens saved")
        return credential.access_token

    async def authorize(self) -> Credential:
        """Run the browser authorization flow and exchange the code

        Returns:
            Newly issued credential (not yet saved)
        """
        flow = create_authorization_flow(self.config)

        server = self._callback_server_factory(
            flow.state,
            self.config.callback_host,
            self.config.callback_port,
            self.config.callback_path,
        )
        await server.start()
        try:
            self.console.print("Opening browser for authorization...")
            if not self._open_browser(flow.url):
                self.console.print("[yellow]Could not open browser automatically[/yellow]")
                self.console.print(f"Please open this URL manually:\n{flow.url}")

            self.console.print("Waiting for authorization callback...")
            code = await server.wait_for_callback(self.config.callback_timeout)
        finally:
            await server.stop()

        return await self.exchanger.exchange_code(code, flow.pkce.verifier)
