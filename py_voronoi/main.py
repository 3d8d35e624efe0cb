"""Program entry point: render one Voronoi image per distance metric."""

import logging
import sys
from typing import List, Optional

import structlog

from .config import RenderConfig
from .core.exceptions import RenderPassError, VoronoiError
from .core.passes import PassResult, render_passes
from .core.seeds import generate_seeds, make_color_function
from .utils.random import make_rng

logger = structlog.get_logger()


def configure_logging(level: str = "INFO", fmt: str = "plain") -> None:
    """Route structlog through stdlib logging with a plain or JSON renderer."""
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def run(config: Optional[RenderConfig] = None, raise_on_error: bool = True) -> List[PassResult]:
    """
    Generate seeds and render every configured metric concurrently.

    Args:
        config: Run settings, defaults to RenderConfig()
        raise_on_error: Raise RenderPassError if any pass failed

    Returns:
        One PassResult per configured metric
    """
    config = config or RenderConfig()
    rng = make_rng(config.random_seed)

    color_function = make_color_function(
        config.color_scheme,
        config.width,
        config.height,
        begin=config.begin_color,
        end=config.end_color,
        rng=rng,
    )
    seeds = generate_seeds(config.seed_count, config.width, config.height, color_function, rng)

    logger.info(
        "Seeds generated",
        count=len(seeds),
        color_scheme=config.color_scheme,
        random_seed=config.random_seed,
    )

    return render_passes(
        seeds,
        config.metrics,
        config.width,
        config.height,
        output_dir=config.output_dir,
        workers=config.workers,
        raise_on_error=raise_on_error,
    )


def main() -> int:
    config = RenderConfig()
    configure_logging(config.log_level, config.log_format)

    try:
        results = run(config)
    except RenderPassError as e:
        logger.error("Rendering finished with failures", error=str(e))
        return 1
    except VoronoiError as e:
        logger.error("Rendering aborted", error=str(e))
        return 1

    for result in results:
        logger.info("Output ready", metric=result.metric, destination=str(result.destination))
    return 0


if __name__ == "__main__":
    sys.exit(main())
