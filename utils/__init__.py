"""Shared utilities package for spotifyfetch"""

from .debug_console import (
    DebugCapturingConsole,
    create_debug_console,
    setup_debug_logging,
)
from .image_cache import cache_filename, download_image, get_best_image_url

__all__ = [
    "DebugCapturingConsole",
    "create_debug_console",
    "setup_debug_logging",
    "cache_filename",
    "download_image",
    "get_best_image_url",
]
