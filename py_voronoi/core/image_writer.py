"""
Plain-text PPM (P3) output.

Layout:
    P3
    <width> <height>
    255
    r g b r g b ...   one image row per line, top row first
"""

from pathlib import Path
from typing import Union

import numpy as np
import structlog

from .exceptions import ImageWriteError, InvalidInputError
from .pixel_grid import CHANNEL_MAX, PixelGrid

logger = structlog.get_logger()

PPM_MAGIC = "P3"


def format_ppm(grid: PixelGrid) -> str:
    """Serialize a grid to P3 text."""
    lines = [PPM_MAGIC, f"{grid.width} {grid.height}", str(CHANNEL_MAX)]
    for row in grid.data:
        lines.append(" ".join(str(int(c)) for c in row.ravel()))
    return "\n".join(lines) + "\n"


def write_ppm(grid: PixelGrid, destination: Union[str, Path]) -> Path:
    """
    Write a grid to a P3 file, creating parent directories as needed.

    Args:
        grid: Fully rendered grid
        destination: Output file path

    Returns:
        Path that was written

    Raises:
        ImageWriteError: If the file cannot be written. The grid is left
            untouched so the caller may retry elsewhere.
    """
    path = Path(destination)
    text = format_ppm(grid)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="ascii") as f:
            f.write(text)
    except OSError as e:
        logger.error("Failed to write image", destination=str(path), error=str(e))
        raise ImageWriteError(path, str(e)) from e

    logger.info("Image written", destination=str(path), width=grid.width, height=grid.height)
    return path


def parse_ppm(text: str) -> PixelGrid:
    """Parse P3 text back into a grid. Comments (#) and any whitespace are allowed."""
    tokens = []
    for line in text.splitlines():
        tokens.extend(line.split("#", 1)[0].split())

    if len(tokens) < 4 or tokens[0] != PPM_MAGIC:
        raise InvalidInputError("Not a P3 pixel map")
    try:
        width, height, max_value = (int(t) for t in tokens[1:4])
        values = np.array([int(t) for t in tokens[4:]], dtype=np.int64)
    except ValueError as e:
        raise InvalidInputError(f"Malformed P3 pixel map: {e}") from e

    if max_value != CHANNEL_MAX:
        raise InvalidInputError(f"Unsupported maximum channel value {max_value}")
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Grid dimensions must be positive, got {width}x{height}")
    # Check the payload against the header before allocating anything
    if values.size != width * height * 3:
        raise InvalidInputError(
            f"Expected {width * height * 3} channel values, found {values.size}"
        )
    if values.min() < 0 or values.max() > CHANNEL_MAX:
        raise InvalidInputError("Channel value out of range")

    grid = PixelGrid(width, height)
    grid.data[...] = values.reshape(height, width, 3)
    return grid


def read_ppm(source: Union[str, Path]) -> PixelGrid:
    """Load a P3 file written by write_ppm (or any other P3 writer)."""
    with open(source, "r", encoding="ascii") as f:
        return parse_ppm(f.read())
