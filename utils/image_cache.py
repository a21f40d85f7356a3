"""Content-addressed cache for cover images"""

import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence, Union

import httpx

from settings import CONNECT_TIMEOUT, IMAGE_CACHE_DIR, REQUEST_TIMEOUT
from spotify_api.models import Image
from spotify_oauth.errors import ApiError, NetworkError

logger = logging.getLogger(__name__)


def cache_filename(url: str) -> str:
    """File name for a cached image: SHA-256 of the URL"""
    return f"{hashlib.sha256(url.encode('utf-8')).hexdigest()}.jpg"


def get_best_image_url(images: Sequence[Image]) -> Optional[str]:
    """Pick the largest image

    Returns:
        URL of the image with the largest area, or None if there are none
    """
    if not images:
        return None
    return max(images, key=lambda image: image.area()).url


def _write_atomic(file_path: Path, data: bytes) -> None:
    """Move a fully written temp file into place so a cache hit is never partial"""
    fd, tmp_path = tempfile.mkstemp(prefix=".image-", suffix=".part", dir=str(file_path.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_path, file_path)
        tmp_path = None
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)


async def download_image(
    url: str,
    cache_dir: Optional[Union[str, Path]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Path:
    """Download an image into the cache, or reuse the cached copy

    Args:
        url: Image URL
        cache_dir: Cache directory (default: settings.IMAGE_CACHE_DIR)
        transport: Optional httpx transport

    Returns:
        Path to the cached file
    """
    cache_path = Path(cache_dir if cache_dir else IMAGE_CACHE_DIR)
    cache_path.mkdir(parents=True, exist_ok=True)

    file_path = cache_path / cache_filename(url)
    if file_path.exists():
        logger.debug(f"Image cache hit: {file_path.name}")
        return file_path

    try:
        async with httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT),
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
    except httpx.RequestError as e:
        raise NetworkError(f"Failed to download image: {e}") from e

    if not response.is_success:
        raise ApiError(response.status_code, response.text)

    _write_atomic(file_path, response.content)
    logger.debug(f"Cached image {file_path.name} ({len(response.content)} bytes)")
    return file_path
