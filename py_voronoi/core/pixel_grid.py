"""Points, colors and the dense pixel grid a render pass writes into."""

import numbers
from typing import Iterator, NamedTuple, Set, Tuple

import numpy as np

from .exceptions import InvalidInputError

CHANNEL_MAX = 255


class Point(NamedTuple):
    """Integer (x, y) grid coordinate.

    Fields may also hold equally shaped NumPy integer arrays, in which case
    the point stands for a batch of coordinates evaluated elementwise.
    """
    x: int
    y: int


class Color(NamedTuple):
    """RGB color with 8-bit channels, no alpha."""
    red: int
    green: int
    blue: int

    @classmethod
    def validated(cls, red, green, blue, clamp: bool = False) -> "Color":
        """
        Build a color, rejecting channels outside [0, 255].

        Args:
            red, green, blue: Channel values
            clamp: Clamp out-of-range channels instead of raising

        Returns:
            Color with plain int channels

        Raises:
            InvalidInputError: If a channel is not integral, or is out of
                range and clamp is False
        """
        channels = []
        for name, value in (("red", red), ("green", green), ("blue", blue)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidInputError(f"{name} channel must be an integer, got {value!r}")
            value = int(value)
            if not 0 <= value <= CHANNEL_MAX:
                if not clamp:
                    raise InvalidInputError(
                        f"{name} channel {value} outside [0, {CHANNEL_MAX}]"
                    )
                value = min(max(value, 0), CHANNEL_MAX)
            channels.append(value)
        return cls(*channels)

    @classmethod
    def lerp(cls, begin: "Color", end: "Color", t: float) -> "Color":
        """Linear interpolation between two colors, channels truncated to int."""
        return cls(*(int(a + t * (b - a)) for a, b in zip(begin, end)))

    def __str__(self) -> str:
        return f"{self.red} {self.green} {self.blue}"


class PixelGrid:
    """
    Dense width x height raster of colors.

    Backed by a uint8 array of shape (height, width, 3) so row bands map to
    contiguous slices. Cells are addressed as grid[x, y].
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise InvalidInputError(
                f"Grid dimensions must be positive, got {width}x{height}"
            )
        self.width = int(width)
        self.height = int(height)
        self.data = np.zeros((self.height, self.width, 3), dtype=np.uint8)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.width, self.height

    def __getitem__(self, xy) -> Color:
        x, y = xy
        return Color(*(int(c) for c in self.data[y, x]))

    def __setitem__(self, xy, color: Color):
        x, y = xy
        self.data[y, x] = color

    def pixels(self) -> Iterator[Color]:
        """Iterate cell colors row by row, starting top-left."""
        for row in self.data:
            for r, g, b in row:
                yield Color(int(r), int(g), int(b))

    def colors(self) -> Set[Color]:
        """Distinct colors present in the grid."""
        unique = np.unique(self.data.reshape(-1, 3), axis=0)
        return {Color(int(r), int(g), int(b)) for r, g, b in unique}

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self.data, other.data)

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height})"
