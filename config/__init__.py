"""Configuration management package for spotifyfetch"""

from .loader import ConfigLoader, get_config_loader, load_json_config
from .display import DisplayConfig, ItemType, TimeRange, load_display_config

__all__ = [
    "ConfigLoader",
    "get_config_loader",
    "load_json_config",
    "DisplayConfig",
    "ItemType",
    "TimeRange",
    "load_display_config",
]
