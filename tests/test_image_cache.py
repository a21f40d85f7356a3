"""Tests for the cover image cache."""

import hashlib

import httpx
import pytest

from spotify_api.models import Image
from spotify_oauth.errors import ApiError
from utils import image_cache
from utils.image_cache import cache_filename, download_image, get_best_image_url

URL = "https://i.scdn.co/image/abc"


class TestBestImage:
    def test_largest_area_wins(self):
        images = [
            Image(url="small", width=64, height=64),
            Image(url="large", width=640, height=640),
            Image(url="medium", width=300, height=300),
        ]

        assert get_best_image_url(images) == "large"

    def test_no_images(self):
        assert get_best_image_url([]) is None


class TestDownloadImage:
    def test_cache_filename_is_url_hash(self):
        assert cache_filename(URL) == hashlib.sha256(URL.encode()).hexdigest() + ".jpg"

    async def test_downloads_then_reuses_cache(self, tmp_path):
        # Arrange
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, content=b"jpeg-bytes")

        transport = httpx.MockTransport(handler)

        # Act
        first = await download_image(URL, cache_dir=tmp_path / "images", transport=transport)
        second = await download_image(URL, cache_dir=tmp_path / "images", transport=transport)

        # Assert
        assert first == second
        assert first.read_bytes() == b"jpeg-bytes"
        assert len(calls) == 1

    async def test_error_status(self, tmp_path):
        transport = httpx.MockTransport(lambda request: httpx.Response(404, text="missing"))

        with pytest.raises(ApiError):
            await download_image(URL, cache_dir=tmp_path, transport=transport)

        assert list(tmp_path.iterdir()) == []

    async def test_failed_write_leaves_no_cache_entry(self, tmp_path, monkeypatch):
        # Arrange
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"jpeg-bytes"))

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(image_cache.os, "replace", fail_replace)

        # Act
        with pytest.raises(OSError):
            await download_image(URL, cache_dir=tmp_path, transport=transport)

        # Assert
        assert list(tmp_path.iterdir()) == []
