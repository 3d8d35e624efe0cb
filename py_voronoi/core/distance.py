"""Distance metrics used by the nearest-seed search.

A metric is any callable (Point, Point) -> non-negative real. The built-in
metrics work on scalar points as well as on points whose coordinates are
NumPy arrays, which lets the renderer score a whole band of cells against
one seed per call.
"""

from typing import Callable, Dict

import numpy as np

from .exceptions import InvalidInputError
from .pixel_grid import Point

DistanceMetric = Callable[[Point, Point], float]


def euclidean_distance(a: Point, b: Point) -> float:
    """Straight-line distance, hypot of the absolute coordinate deltas."""
    dx = np.abs(a.x - b.x)
    dy = np.abs(a.y - b.y)
    return np.hypot(dx, dy)


def manhattan_distance(a: Point, b: Point) -> int:
    """Taxicab distance, integer arithmetic only."""
    return abs(a.x - b.x) + abs(a.y - b.y)


METRICS: Dict[str, DistanceMetric] = {
    "euclidean": euclidean_distance,
    "manhattan": manhattan_distance,
}


def get_metric(name: str) -> DistanceMetric:
    """Look up a built-in metric by name."""
    try:
        return METRICS[name]
    except KeyError:
        raise InvalidInputError(
            f"Unknown distance metric '{name}', expected one of {sorted(METRICS)}"
        ) from None


def metric_name(metric: DistanceMetric) -> str:
    """Registry name of a metric, or the callable's own name for custom ones."""
    for name, fn in METRICS.items():
        if fn is metric:
            return name
    return getattr(metric, "__name__", type(metric).__name__)
