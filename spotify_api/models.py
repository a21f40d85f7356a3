"""
Pydantic models for Spotify Web API responses.
"""
from typing import List, Optional

from pydantic import BaseModel


class Image(BaseModel):
    """Cover or portrait image"""
    url: str
    # Spotify sends null sizes for some user-uploaded images
    height: Optional[int] = None
    width: Optional[int] = None

    def area(self) -> int:
        return (self.width or 0) * (self.height or 0)


class Artist(BaseModel):
    """Full artist object from /me/top/artists"""
    name: str
    genres: List[str] = []
    popularity: int = 0
    images: List[Image] = []


class SimpleArtist(BaseModel):
    """Artist reference inside a track"""
    name: str


class Album(BaseModel):
    name: str
    images: List[Image] = []


class Track(BaseModel):
    """Track object from /me/top/tracks"""
    name: str
    artists: List[SimpleArtist] = []
    album: Album
    popularity: int = 0

    def artist_names(self) -> str:
        return ", ".join(artist.name for artist in self.artists)

    def display_name(self) -> str:
        return f"{self.name} - {self.artist_names()}"


class TopArtistsResponse(BaseModel):
    items: List[Artist]


class TopTracksResponse(BaseModel):
    items: List[Track]
