"""Error kinds raised by the Voronoi rendering pipeline."""


class VoronoiError(Exception):
    """Base class for all rendering pipeline errors."""


class InvalidInputError(VoronoiError, ValueError):
    """Raised when inputs are rejected before any rendering work starts.

    Covers empty seed sets, degenerate grid dimensions, unknown metric or
    color scheme names, out-of-range color channels and malformed PPM data.
    """


class ImageWriteError(VoronoiError, OSError):
    """Raised when a rendered grid cannot be written to its destination."""

    def __init__(self, destination, message: str):
        super().__init__(f"Failed to write {destination}: {message}")
        self.destination = destination


class RenderPassError(VoronoiError):
    """Raised after all render passes joined and at least one of them failed."""

    def __init__(self, results):
        failed = [r for r in results if r.error is not None]
        names = ", ".join(f"{r.metric} ({r.error})" for r in failed)
        super().__init__(f"{len(failed)} render pass(es) failed: {names}")
        self.results = results
