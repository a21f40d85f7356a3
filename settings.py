import os
from pathlib import Path
from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

APP_NAME = "spotifyfetch"

# Per-application directories (XDG layout, overridable)
_XDG_CONFIG_HOME = os.getenv("XDG_CONFIG_HOME") or str(Path.home() / ".config")
_XDG_CACHE_HOME = os.getenv("XDG_CACHE_HOME") or str(Path.home() / ".cache")

CONFIG_DIR = config.get("SPOTIFYFETCH_CONFIG_DIR", str(Path(_XDG_CONFIG_HOME) / APP_NAME))
CACHE_DIR = config.get("SPOTIFYFETCH_CACHE_DIR", str(Path(_XDG_CACHE_HOME) / APP_NAME))

# Token storage
TOKEN_FILE = str(Path(CONFIG_DIR) / "tokens.json")

# Display configuration file
DISPLAY_CONFIG_FILE = str(Path(CONFIG_DIR) / "config.json")

# Cover image cache
IMAGE_CACHE_DIR = str(Path(CACHE_DIR) / "images")

# Debug log written with --debug
DEBUG_LOG_FILE = str(Path(CONFIG_DIR) / "debug.log")

# Spotify Web API
API_BASE = "https://api.spotify.com/v1"

# Timeout configuration
# Connection timeout: Time to establish TCP connection
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
# Request timeout: Total timeout for API and image requests
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 30.0)

# Seconds to wait for the browser to come back to the callback listener
OAUTH_CALLBACK_TIMEOUT = config.get("OAUTH_CALLBACK_TIMEOUT", 300.0)

# Display overrides (applied on top of config.json)
TIME_RANGE = config.get("SPOTIFYFETCH_TIME_RANGE", None)
LIST_COUNT = config.get("SPOTIFYFETCH_LIST_COUNT", None)
