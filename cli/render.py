"""Terminal rendering of the stats view"""

import math
from pathlib import Path
from typing import List, Sequence

from PIL import Image as PILImage
from rich.console import Console, Group
from rich.padding import Padding
from rich.style import Style
from rich.table import Table
from rich.text import Text

from config.display import DisplayConfig, ItemType
from spotify_api.models import Artist, Track

# Upper half block: foreground paints the top pixel, background the bottom one
HALF_BLOCK = "▀"


def image_terminal_height(width_px: int, height_px: int, width_columns: int) -> int:
    """Rows needed to draw an image `width_columns` wide

    Each terminal row is roughly twice as tall as it is wide.
    """
    aspect_ratio = height_px / width_px
    return max(1, math.ceil(width_columns * aspect_ratio / 2))


def render_image_lines(path: Path, width_columns: int) -> List[Text]:
    """Render an image file as half-block text lines

    Raises:
        OSError: If the image cannot be opened or decoded
    """
    with PILImage.open(path) as img:
        rgb = img.convert("RGB")
        rows = image_terminal_height(rgb.width, rgb.height, width_columns)
        resized = rgb.resize((width_columns, rows * 2))

    pixels = resized.load()
    lines = []
    for row in range(rows):
        line = Text()
        for col in range(width_columns):
            top = pixels[col, row * 2]
            bottom = pixels[col, row * 2 + 1]
            line.append(HALF_BLOCK, Style(color=f"rgb({top[0]},{top[1]},{top[2]})",
                                          bgcolor=f"rgb({bottom[0]},{bottom[1]},{bottom[2]})"))
        lines.append(line)
    return lines


def image_caption(config: DisplayConfig, tracks: Sequence[Track], artists: Sequence[Artist]) -> str:
    if config.image_view is ItemType.TRACK:
        return f"\U0001F3B6 Favorite track: {tracks[0].display_name()}"
    return f"\U0001F3A4 Favorite artist: {artists[0].name}"


def list_lines(config: DisplayConfig, tracks: Sequence[Track], artists: Sequence[Artist]) -> List[str]:
    """Heading plus numbered entries for the listed kind"""
    if config.list_view is ItemType.ARTIST:
        lines = [f"\U0001F3A4 Top {config.list_count} Artists:"]
        lines.extend(f"  {i}. {artist.name}" for i, artist in enumerate(artists, start=1))
    else:
        lines = [f"\U0001F3B6 Top {config.list_count} Tracks:"]
        lines.extend(f"  {i}. {track.display_name()}" for i, track in enumerate(tracks, start=1))
    return lines


def render_stats(
    console: Console,
    config: DisplayConfig,
    text_lines: Sequence[str],
    image_lines: Sequence[Text] = (),
    caption: str = "",
) -> None:
    """Print the heading, then the image and caption beside the list"""
    console.print(f"Your Spotify stats from the most recent {config.time_range.label}:")

    listing = Text("\n".join(text_lines))

    if image_lines:
        picture = Group(*image_lines, Text(caption))
        layout = Table.grid(padding=(0, config.gap))
        layout.add_column(min_width=config.image_width)
        layout.add_column()
        layout.add_row(picture, listing)
    else:
        layout = listing

    console.print(Padding(layout, (config.offset_y, 0, 0, config.offset_x)))
