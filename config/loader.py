"""Configuration sources for spotifyfetch

Tunables are resolved environment first:
1. Environment variables
2. A .env file in the working directory (never overrides the real environment)
3. The defaults passed by settings.py

Display preferences live in a JSON object file in the configuration
directory and are read with load_json_config.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("true", "1", "yes", "on")


# Parsers keyed on the exact type of the default value
_PARSERS: Dict[type, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: int,
    float: float,
}


class ConfigLoader:
    """Environment lookup with typed coercion"""

    def __init__(self, env_path: Optional[Union[str, Path]] = None):
        self.env_path = Path(env_path) if env_path else Path(".env")
        if self.env_path.is_file():
            load_dotenv(dotenv_path=self.env_path, override=False)
            logger.debug(f"Loaded {self.env_path}")

    def get(self, env_var: str, default: Any) -> Any:
        """Value of `env_var`, coerced to the type of `default`

        A value that doesn't parse is reported and the default used instead.
        A None default returns the raw string.
        """
        raw = os.getenv(env_var)
        if raw is None:
            return default

        parser = _PARSERS.get(type(default))
        if parser is None:
            return raw
        try:
            return parser(raw)
        except ValueError:
            logger.warning(f"Ignoring {env_var}={raw!r}: not a valid {type(default).__name__}")
            return default


_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Process-wide ConfigLoader"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def load_json_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a JSON object from `path`

    A missing, unreadable or malformed file yields an empty dict, as does
    a file whose top level isn't an object.
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No config file at {path}")
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Could not load {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring {path}: top level is {type(data).__name__}, not an object")
        return {}
    return data
