"""Concurrent render passes, one per distance metric."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import structlog

from .distance import METRICS, DistanceMetric, get_metric, metric_name
from .exceptions import InvalidInputError, RenderPassError
from .image_writer import write_ppm
from .pixel_grid import PixelGrid
from .renderer import VoronoiRenderer, as_seed_set
from .seeds import SeedSet

logger = structlog.get_logger()

OUTPUT_TEMPLATE = "output_{metric}.ppm"


@dataclass
class PassResult:
    """Outcome of one render pass."""

    metric: str
    destination: Path
    grid: Optional[PixelGrid] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _resolve_metric(metric) -> Tuple[str, DistanceMetric]:
    """Name and callable for a metric given by name, callable or (name, callable)."""
    if isinstance(metric, str):
        return metric, get_metric(metric)
    if isinstance(metric, tuple) and len(metric) == 2:
        name, fn = metric
    elif metric in METRICS.values():
        name, fn = metric_name(metric), metric
    else:
        # Lambdas and partials have no usable name of their own
        name, fn = getattr(metric, "__name__", None), metric
    if not callable(fn):
        raise InvalidInputError(f"Distance metric {fn!r} is not callable")
    if not isinstance(name, str) or not name.isidentifier():
        raise InvalidInputError(
            f"Cannot name output for metric {name!r}, pass it as a (name, metric) pair"
        )
    return name, fn


def _run_pass(seeds: SeedSet, metric: DistanceMetric, result: PassResult,
              width: int, height: int, workers: Optional[int]) -> PassResult:
    grid = PixelGrid(width, height)
    VoronoiRenderer(workers=workers).render(seeds, metric, grid)
    # Keep the grid even if the write fails so it can be written elsewhere
    result.grid = grid
    write_ppm(grid, result.destination)
    return result


def render_passes(
    seeds: SeedSet,
    metrics: Sequence[Union[str, DistanceMetric, Tuple[str, DistanceMetric]]],
    width: int,
    height: int,
    output_dir: Union[str, Path] = ".",
    workers: Optional[int] = None,
    raise_on_error: bool = True,
) -> List[PassResult]:
    """
    Render and write one image per metric, all passes running concurrently.

    Each pass owns its grid and output file; the seed set is the only thing
    they share, and only for reading. Waits for every pass before returning,
    and a failing pass never stops its siblings.

    Args:
        seeds: Seed set shared by all passes
        metrics: Metric names, callables, or (name, callable) pairs. The
            name labels the pass and its output file and must be a
            Python identifier
        width: Grid width
        height: Grid height
        output_dir: Directory for output_<metric>.ppm files
        workers: Band worker count per pass
        raise_on_error: Raise RenderPassError if any pass failed

    Returns:
        One PassResult per metric, in input order

    Raises:
        InvalidInputError: Empty seed set, bad dimensions, unknown,
            unnamed or duplicate metrics. Raised before any pass starts.
        RenderPassError: If a pass failed and raise_on_error is set
    """
    seeds = as_seed_set(seeds)
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Grid dimensions must be positive, got {width}x{height}")
    if not metrics:
        raise InvalidInputError("At least one distance metric is required")

    names, resolved = zip(*(_resolve_metric(m) for m in metrics))
    names, resolved = list(names), list(resolved)
    if len(set(names)) != len(names):
        raise InvalidInputError(f"Duplicate distance metrics: {names}")

    output_dir = Path(output_dir)
    results = [
        PassResult(metric=name, destination=output_dir / OUTPUT_TEMPLATE.format(metric=name))
        for name in names
    ]

    logger.info("Starting render passes", metrics=names, width=width, height=height,
                seeds=len(seeds))

    with ThreadPoolExecutor(max_workers=len(resolved)) as executor:
        futures = [
            executor.submit(_run_pass, seeds, metric, result, width, height, workers)
            for metric, result in zip(resolved, results)
        ]
        for future, result in zip(futures, results):
            error = future.exception()
            if error is not None:
                result.error = error
                logger.error("Render pass failed", metric=result.metric, error=str(error))

    if raise_on_error and any(not r.ok for r in results):
        raise RenderPassError(results)
    return results
