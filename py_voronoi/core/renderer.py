"""
Brute-force Voronoi renderer.

Every cell is compared against every seed, O(width x height x seeds), with
no spatial index. Rows are split into disjoint bands which are rendered on a
thread pool; each band task writes only its own slice of the grid and reads
the seed arrays, so no locking is needed. NumPy releases the GIL inside the
elementwise kernels, which is what lets the band tasks overlap.

Ties go to the first seed in SeedSet order: the scan keeps the current best
and only replaces it on a strictly smaller distance, which is exactly what a
sequential left-to-right scan produces regardless of how bands are scheduled.
"""

import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

import numpy as np
import structlog

from .distance import DistanceMetric, metric_name
from .exceptions import InvalidInputError
from .pixel_grid import PixelGrid, Point
from .seeds import Seed, SeedSet

logger = structlog.get_logger()

# Bands per worker, keeps the pool busy when bands finish unevenly
BANDS_PER_WORKER = 4


def as_seed_set(seeds) -> SeedSet:
    """Coerce any iterable of seeds to a validated, non-empty SeedSet."""
    if isinstance(seeds, SeedSet):
        return seeds
    if seeds is None:
        raise InvalidInputError("Seed set must contain at least one seed")
    return SeedSet(seeds)


class VoronoiRenderer:
    """
    Renders the nearest-seed diagram of a SeedSet into a PixelGrid.

    Args:
        workers: Thread pool size, defaults to the CPU count
        band_height: Rows per task, derived from the worker count if omitted
        vectorized: Evaluate the metric on whole bands at once. Custom
            metrics that only handle scalar points need vectorized=False.
    """

    def __init__(
        self,
        workers: Optional[int] = None,
        band_height: Optional[int] = None,
        vectorized: bool = True,
    ):
        if workers is not None and workers < 1:
            raise InvalidInputError(f"Worker count must be positive, got {workers}")
        if band_height is not None and band_height < 1:
            raise InvalidInputError(f"Band height must be positive, got {band_height}")
        self.workers = workers or os.cpu_count() or 1
        self.band_height = band_height
        self.vectorized = vectorized

    def bands(self, height: int) -> List[Tuple[int, int]]:
        """Split [0, height) into contiguous, disjoint row ranges."""
        step = self.band_height or max(1, -(-height // (self.workers * BANDS_PER_WORKER)))
        return [(start, min(start + step, height)) for start in range(0, height, step)]

    def render(self, seeds: SeedSet, metric: DistanceMetric, grid: PixelGrid) -> PixelGrid:
        """
        Populate grid in place with the color of each cell's nearest seed.

        Args:
            seeds: Non-empty SeedSet (any iterable of seeds is accepted)
            metric: Distance function (Point, Point) -> float
            grid: Target grid, fully overwritten

        Returns:
            The same grid, for chaining

        Raises:
            InvalidInputError: If the seed set is empty
        """
        seeds = as_seed_set(seeds)
        if not isinstance(grid, PixelGrid):
            raise InvalidInputError(f"Expected a PixelGrid, got {type(grid).__name__}")

        name = metric_name(metric)
        bands = self.bands(grid.height)
        band_fn = self._render_band if self.vectorized else self._render_band_scalar

        logger.debug(
            "Render pass started",
            metric=name,
            width=grid.width,
            height=grid.height,
            seeds=len(seeds),
            workers=self.workers,
            bands=len(bands),
        )
        start_time = time.perf_counter()

        if self.workers == 1 or len(bands) == 1:
            for y0, y1 in bands:
                band_fn(seeds, metric, grid, y0, y1)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [
                    executor.submit(band_fn, seeds, metric, grid, y0, y1)
                    for y0, y1 in bands
                ]
                for future in futures:
                    future.result()

        logger.info(
            "Render pass finished",
            metric=name,
            width=grid.width,
            height=grid.height,
            seeds=len(seeds),
            elapsed_seconds=round(time.perf_counter() - start_time, 3),
        )
        return grid

    def _render_band(self, seeds: SeedSet, metric: DistanceMetric,
                     grid: PixelGrid, y0: int, y1: int) -> None:
        """Render rows [y0, y1), scoring all band cells against one seed per step."""
        ys, xs = np.mgrid[y0:y1, 0:grid.width]
        cells = Point(xs.astype(np.int64), ys.astype(np.int64))

        nearest = np.zeros(xs.shape, dtype=np.intp)
        best = np.broadcast_to(metric(Point(seeds.xs[0], seeds.ys[0]), cells), xs.shape)

        for i in range(1, len(seeds)):
            dist = np.broadcast_to(metric(Point(seeds.xs[i], seeds.ys[i]), cells), xs.shape)
            closer = dist < best
            nearest[closer] = i
            best = np.where(closer, dist, best)

        grid.data[y0:y1] = seeds.colors[nearest]

    def _render_band_scalar(self, seeds: SeedSet, metric: DistanceMetric,
                            grid: PixelGrid, y0: int, y1: int) -> None:
        """Per-cell fallback for metrics that only accept scalar points."""
        for y in range(y0, y1):
            for x in range(grid.width):
                grid.data[y, x] = seeds.colors[nearest_seed_index(seeds, metric, Point(x, y))]


def nearest_seed_index(seeds: Iterable[Seed], metric: DistanceMetric, point: Point) -> int:
    """
    Index of the seed closest to point, first one on ties.

    Raises:
        InvalidInputError: If seeds is empty
    """
    best_index = -1
    best_dist = None
    for i, seed in enumerate(seeds):
        dist = metric(seed.position, point)
        if best_dist is None or dist < best_dist:
            best_index, best_dist = i, dist
    if best_index < 0:
        raise InvalidInputError("Seed set must contain at least one seed")
    return best_index


def render_voronoi(
    seeds: SeedSet,
    metric: DistanceMetric,
    width: int,
    height: int,
    workers: Optional[int] = None,
    vectorized: bool = True,
) -> PixelGrid:
    """
    Render a fresh width x height grid.

    The seed set is validated before the grid is allocated, and the grid
    dimensions before any band is dispatched.
    """
    seeds = as_seed_set(seeds)
    grid = PixelGrid(width, height)
    return VoronoiRenderer(workers=workers, vectorized=vectorized).render(seeds, metric, grid)
