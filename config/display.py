"""Display configuration: what to show and how to lay it out"""

import enum
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationError

from .loader import load_json_config

logger = logging.getLogger(__name__)


class ItemType(str, enum.Enum):
    ARTIST = "artist"
    TRACK = "track"


class TimeRange(str, enum.Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def api_value(self) -> str:
        """Value of the Spotify `time_range` query parameter"""
        return f"{self.value}_term"

    @property
    def label(self) -> str:
        """Human readable span, as in "the most recent 6 months" """
        return _TIME_RANGE_LABELS[self]


_TIME_RANGE_LABELS = {
    TimeRange.SHORT: "4 weeks",
    TimeRange.MEDIUM: "6 months",
    TimeRange.LONG: "year",
}


class DisplayConfig(BaseModel):
    """Layout and content of the stats view"""
    offset_x: int = Field(default=0, ge=0)
    offset_y: int = Field(default=0, ge=0)
    image_view: ItemType = ItemType.TRACK
    image_width: int = Field(default=30, ge=5, le=50)
    list_view: ItemType = ItemType.ARTIST
    list_count: int = Field(default=10, ge=1, le=20)
    time_range: TimeRange = TimeRange.MEDIUM
    gap: int = Field(default=4, ge=0, le=20)

    def item_counts(self) -> Tuple[int, int]:
        """Number of (tracks, artists) to fetch

        The listed kind needs list_count items, the pictured kind only one.
        """
        track_count = 1
        artist_count = 1
        if self.list_view is ItemType.TRACK:
            track_count = self.list_count
        else:
            artist_count = self.list_count
        return track_count, artist_count


def load_display_config(
    path: Union[str, Path],
    overrides: Optional[Dict[str, Any]] = None,
) -> DisplayConfig:
    """Load the display configuration

    Values from the JSON file are merged with overrides (None values are
    skipped). An invalid result falls back to the defaults with a warning.

    Args:
        path: Path to config.json
        overrides: Values taking precedence over the file

    Returns:
        Validated DisplayConfig
    """
    data = load_json_config(Path(path))
    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    try:
        return DisplayConfig(**data)
    except ValidationError as e:
        logger.warning(f"Invalid display config, using defaults: {e}")
        return DisplayConfig()
