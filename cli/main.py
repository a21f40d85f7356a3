"""CLI entry point and argument parsing"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

import settings
from config.display import DisplayConfig, ItemType, TimeRange, load_display_config
from spotify_api import SpotifyClient
from spotify_oauth import OAuthConfig, SpotifyFetchError, SpotifyOAuthManager, TokenStorage
from cli.render import image_caption, list_lines, render_image_lines, render_stats
from cli.status_display import show_token_status
from utils.debug_console import create_debug_console, setup_debug_logging
from utils.image_cache import download_image, get_best_image_url


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="spotifyfetch",
        description="Show your Spotify listening stats in the terminal",
    )
    parser.add_argument("--debug", "-d", action="store_true",
                        help=f"Enable debug logging to {settings.DEBUG_LOG_FILE}")
    parser.add_argument("--status", action="store_true",
                        help="Show stored token status and exit")
    parser.add_argument("--time-range", "-t", choices=[r.value for r in TimeRange], default=None,
                        help="Listening period (default: from config)")
    parser.add_argument("--limit", "-n", type=int, default=None,
                        help="Number of items to list, 1-20 (default: from config)")
    return parser.parse_args(argv)


async def run(config: DisplayConfig, manager: SpotifyOAuthManager, console: Console) -> int:
    """Fetch the stats and render them

    Returns:
        Process exit status
    """
    access_token = await manager.get_valid_token()

    track_count, artist_count = config.item_counts()
    async with SpotifyClient(access_token, config.time_range) as client:
        tracks = await client.fetch_top_tracks(track_count)
        artists = await client.fetch_top_artists(artist_count)

    if not tracks or not artists:
        console.print(
            f"You have no Spotify listening data from the most recent {config.time_range.label}"
        )
        return 0

    images = tracks[0].album.images if config.image_view is ItemType.TRACK else artists[0].images
    image_url = get_best_image_url(images)

    image_lines = []
    if image_url:
        try:
            image_path = await download_image(image_url)
            image_lines = render_image_lines(image_path, config.image_width)
        except (SpotifyFetchError, OSError) as e:
            logger.warning(f"Cover image unavailable: {e}")

    render_stats(
        console,
        config,
        list_lines(config, tracks, artists),
        image_lines,
        image_caption(config, tracks, artists),
    )
    return 0


def main(argv: Optional[List[str]] = None):
    """Entry point for the CLI"""
    args = parse_args(argv)

    console = Console()
    if args.debug:
        debug_logger = setup_debug_logging(settings.DEBUG_LOG_FILE)
        console = create_debug_console(debug_enabled=True, debug_logger=debug_logger)
        debug_logger.debug("[CLI] ===== CLI SESSION STARTED =====")

    storage = TokenStorage()

    if args.status:
        show_token_status(storage, console)
        sys.exit(0)

    config = load_display_config(
        settings.DISPLAY_CONFIG_FILE,
        overrides={
            "time_range": args.time_range or settings.TIME_RANGE,
            "list_count": args.limit if args.limit is not None else settings.LIST_COUNT,
        },
    )
    manager = SpotifyOAuthManager(
        config=OAuthConfig(callback_timeout=settings.OAUTH_CALLBACK_TIMEOUT),
        storage=storage,
        console=console,
    )

    try:
        status = asyncio.run(run(config, manager, console))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except SpotifyFetchError as e:
        console.print(f"[red]ERROR:[/red] {escape(str(e))}")
        if args.debug:
            logger.exception("Fatal error")
        sys.exit(1)

    sys.exit(status)


if __name__ == "__main__":
    main()
