"""Token storage for Spotify OAuth"""

import datetime
import json
import logging
import os
import platform
import tempfile
import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

from settings import TOKEN_FILE
from .errors import TokenStorageError
from .models import Credential


logger = logging.getLogger(__name__)


class TokenStorage:
    """Persists the Spotify credential as a single JSON file

    A missing, unreadable or malformed file reads as "no session"; write
    failures are raised.
    """

    def __init__(self, token_file: Optional[Union[str, Path]] = None):
        """Initialize token storage

        Args:
            token_file: Path to token file (default: settings.TOKEN_FILE)
        """
        self.token_path = Path(token_file if token_file else TOKEN_FILE)

    def _ensure_directory(self) -> None:
        """Create parent directory with secure permissions"""
        parent_dir = self.token_path.parent
        if parent_dir.exists():
            return

        try:
            parent_dir.mkdir(parents=True, exist_ok=True)
            # Set directory permissions to 700 on Unix-like systems
            if platform.system() != "Windows":
                os.chmod(parent_dir, 0o700)
        except OSError as e:
            raise TokenStorageError(f"Could not create token directory {parent_dir}: {e}") from e

    def load(self) -> Optional[Credential]:
        """Load the stored credential

        Returns:
            Credential, or None if there is no usable token file
        """
        if not self.token_path.exists():
            logger.debug("No Spotify token file found")
            return None

        try:
            data = json.loads(self.token_path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("token file is not a JSON object")
            credential = Credential.from_dict(data)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning(f"Ignoring unusable token file {self.token_path}: {e}")
            return None

        logger.debug(f"Loaded Spotify tokens from {self.token_path}")
        return credential

    def save(self, credential: Credential) -> None:
        """Write the credential, replacing any previous file

        The JSON is written to a temporary file in the same directory and
        moved over the target, so readers never see a partial file.

        Raises:
            TokenStorageError: If the file cannot be written
        """
        self._ensure_directory()

        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                prefix=".tokens-", suffix=".json", dir=str(self.token_path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(credential.to_dict(), f, indent=2)

            # Set file permissions to 600 on Unix-like systems
            if platform.system() != "Windows":
                os.chmod(tmp_path, 0o600)

            os.replace(tmp_path, self.token_path)
            tmp_path = None
        except OSError as e:
            raise TokenStorageError(f"Could not write token file {self.token_path}: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug(f"Saved Spotify tokens to {self.token_path}")

    def get_status(self) -> Dict[str, Any]:
        """Get token status without exposing secrets"""
        credential = self.load()
        if not credential:
            return {
                "has_tokens": False,
                "is_expired": True,
                "expires_at": None,
                "time_until_expiry": "No tokens",
            }

        current_time = int(time.time())
        expires_str = datetime.datetime.fromtimestamp(credential.expires_at).isoformat()

        if current_time >= credential.expires_at:
            time_since = current_time - credential.expires_at
            hours_since = time_since // 3600
            mins_since = (time_since % 3600) // 60

            if hours_since > 0:
                time_str = f"{hours_since}h {mins_since}m ago"
            else:
                time_str = f"{mins_since}m ago"
        else:
            time_remaining = credential.expires_at - current_time
            hours = time_remaining // 3600
            minutes = (time_remaining % 3600) // 60
            time_str = f"{hours}h {minutes}m" if hours > 0 else f"{minutes}m"

        return {
            "has_tokens": True,
            "is_expired": credential.is_expired(current_time),
            "expires_at": expires_str,
            "time_until_expiry": time_str,
        }

    @property
    def token_file(self) -> Path:
        """Get the token file path"""
        return self.token_path
