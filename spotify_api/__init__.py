"""Spotify Web API client for listening statistics"""

from .client import SpotifyClient
from .models import Album, Artist, Image, SimpleArtist, Track

__all__ = [
    "SpotifyClient",
    "Album",
    "Artist",
    "Image",
    "SimpleArtist",
    "Track",
]
