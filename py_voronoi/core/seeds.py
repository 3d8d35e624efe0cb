"""
Seed points and their generation.

A SeedSet is created once per run and then shared read-only by every render
pass. Positions come from an injected NumPy Generator, colors from a caller
supplied color function, so the renderer never cares how either was made.
"""

import numbers
from collections.abc import Sequence
from typing import Callable, Dict, Iterable, Iterator, NamedTuple, Optional

import numpy as np
import structlog

from .exceptions import InvalidInputError
from .pixel_grid import CHANNEL_MAX, Color, Point

logger = structlog.get_logger()

ColorFunction = Callable[[Point], Color]


class Seed(NamedTuple):
    """A labeled reference point defining one Voronoi region."""
    position: Point
    color: Color


def _validated_point(x, y) -> Point:
    for name, value in (("x", x), ("y", y)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidInputError(f"Seed {name} coordinate must be an integer, got {value!r}")
    return Point(int(x), int(y))


class SeedSet(Sequence):
    """
    Immutable, ordered, non-empty collection of seeds.

    Order carries no meaning for the diagram itself, but it decides ties
    (the first seed wins) and must therefore be stable.
    """

    def __init__(self, seeds: Iterable[Seed]):
        self._seeds = tuple(
            Seed(_validated_point(*s[0]), Color.validated(*s[1])) for s in seeds
        )
        if not self._seeds:
            raise InvalidInputError("Seed set must contain at least one seed")

        self.xs = np.array([s.position.x for s in self._seeds], dtype=np.int64)
        self.ys = np.array([s.position.y for s in self._seeds], dtype=np.int64)
        self.colors = np.array([s.color for s in self._seeds], dtype=np.uint8)
        for arr in (self.xs, self.ys, self.colors):
            arr.setflags(write=False)

    def __getitem__(self, index):
        return self._seeds[index]

    def __len__(self) -> int:
        return len(self._seeds)

    def __iter__(self) -> Iterator[Seed]:
        return iter(self._seeds)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SeedSet):
            return NotImplemented
        return self._seeds == other._seeds

    def __hash__(self) -> int:
        return hash(self._seeds)

    def __repr__(self) -> str:
        return f"SeedSet({len(self._seeds)} seeds)"


def generate_seeds(
    count: int,
    width: int,
    height: int,
    color_function: ColorFunction,
    rng: np.random.Generator,
) -> SeedSet:
    """
    Scatter seeds uniformly over a width x height grid.

    For every seed the x coordinate is drawn first, then y, then the color
    function is evaluated, so a fixed generator state always yields the same
    SeedSet.

    Args:
        count: Number of seeds
        width: Grid width, x is drawn from [0, width)
        height: Grid height, y is drawn from [0, height)
        color_function: Maps a seed position to its color
        rng: Random source for positions

    Returns:
        SeedSet with exactly count seeds

    Raises:
        InvalidInputError: On non-positive count or dimensions, or when the
            color function returns an out-of-range color
    """
    if count <= 0:
        raise InvalidInputError(f"Seed count must be positive, got {count}")
    if width <= 0 or height <= 0:
        raise InvalidInputError(
            f"Grid dimensions must be positive, got {width}x{height}"
        )

    seeds = []
    for _ in range(count):
        x = int(rng.integers(width))
        y = int(rng.integers(height))
        point = Point(x, y)
        color = color_function(point)
        try:
            r, g, b = color
        except (TypeError, ValueError):
            raise InvalidInputError(
                f"Color function returned {color!r} for {point}, expected an RGB triple"
            ) from None
        seeds.append(Seed(point, Color.validated(r, g, b)))

    logger.debug("Generated seeds", count=count, width=width, height=height)
    return SeedSet(seeds)


# Color functions


def horizontal_gradient(begin: Color, end: Color, width: int) -> ColorFunction:
    """Blend from begin at the left edge towards end at the right edge."""
    def color_at(point: Point) -> Color:
        return Color.lerp(begin, end, point.x / float(width))
    return color_at


def vertical_gradient(begin: Color, end: Color, height: int) -> ColorFunction:
    """Blend from begin at the top edge towards end at the bottom edge."""
    def color_at(point: Point) -> Color:
        return Color.lerp(begin, end, point.y / float(height))
    return color_at


def random_colors(rng: np.random.Generator) -> ColorFunction:
    """Uniformly random channels, ignoring the seed position."""
    def color_at(point: Point) -> Color:
        r, g, b = rng.integers(CHANNEL_MAX + 1, size=3)
        return Color(int(r), int(g), int(b))
    return color_at


def solid_color(color: Color) -> ColorFunction:
    """Same color everywhere."""
    return lambda point: color


COLOR_SCHEMES = ("horizontal_gradient", "vertical_gradient", "random", "solid")


def make_color_function(
    scheme: str,
    width: int,
    height: int,
    begin: Color = Color(0, 0, 0),
    end: Color = Color(CHANNEL_MAX, CHANNEL_MAX, CHANNEL_MAX),
    rng: Optional[np.random.Generator] = None,
) -> ColorFunction:
    """
    Build a color function from its scheme name.

    Gradient schemes run from begin to end; "solid" paints everything in
    begin; "random" needs rng.
    """
    builders: Dict[str, Callable[[], ColorFunction]] = {
        "horizontal_gradient": lambda: horizontal_gradient(begin, end, width),
        "vertical_gradient": lambda: vertical_gradient(begin, end, height),
        "random": lambda: random_colors(rng),
        "solid": lambda: solid_color(begin),
    }
    if scheme not in builders:
        raise InvalidInputError(
            f"Unknown color scheme '{scheme}', expected one of {list(COLOR_SCHEMES)}"
        )
    if scheme == "random" and rng is None:
        raise InvalidInputError("The random color scheme requires a random source")
    return builders[scheme]()
