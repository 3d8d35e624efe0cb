"""Configuration management."""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from .core.distance import METRICS
from .core.pixel_grid import CHANNEL_MAX, Color
from .core.seeds import COLOR_SCHEMES


class RenderConfig(BaseModel):
    """Render run settings.

    Passed explicitly to the pipeline; nothing is read from the environment.
    """

    # Grid
    width: int = Field(default=800, ge=1, description="Grid width in pixels")
    height: int = Field(default=600, ge=1, description="Grid height in pixels")

    # Seeds
    seed_count: int = Field(default=100, ge=1, description="Number of Voronoi seeds")
    color_scheme: str = Field(
        default="vertical_gradient", description="Seed color function"
    )
    gradient_begin: Tuple[int, int, int] = Field(
        default=(0, 0, 0), description="First gradient color (also the solid color)"
    )
    gradient_end: Tuple[int, int, int] = Field(
        default=(CHANNEL_MAX, CHANNEL_MAX, CHANNEL_MAX), description="Last gradient color"
    )
    random_seed: Optional[str] = Field(
        default=None, description="Seed for reproducible output, fresh entropy if unset"
    )

    # Rendering
    metrics: List[str] = Field(
        default_factory=lambda: ["euclidean", "manhattan"],
        description="Distance metrics, one render pass each",
    )
    workers: Optional[int] = Field(
        default=None, ge=1, description="Band workers per pass, CPU count if unset"
    )

    # Output
    output_dir: str = Field(default=".", description="Directory for output images")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain, json)")

    @field_validator("metrics")
    @classmethod
    def check_metrics(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one metric is required")
        unknown = [m for m in value if m not in METRICS]
        if unknown:
            raise ValueError(f"unknown metrics {unknown}, expected {sorted(METRICS)}")
        if len(set(value)) != len(value):
            raise ValueError("metrics must be unique")
        return value

    @field_validator("color_scheme")
    @classmethod
    def check_color_scheme(cls, value: str) -> str:
        if value not in COLOR_SCHEMES:
            raise ValueError(f"unknown color scheme '{value}', expected one of {list(COLOR_SCHEMES)}")
        return value

    @field_validator("gradient_begin", "gradient_end")
    @classmethod
    def check_color(cls, value: Tuple[int, int, int]) -> Tuple[int, int, int]:
        if any(not 0 <= c <= CHANNEL_MAX for c in value):
            raise ValueError(f"color channels must be within [0, {CHANNEL_MAX}]")
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level '{value}'")
        return value

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, value: str) -> str:
        if value not in ("plain", "json"):
            raise ValueError("log format must be 'plain' or 'json'")
        return value

    @property
    def begin_color(self) -> Color:
        return Color(*self.gradient_begin)

    @property
    def end_color(self) -> Color:
        return Color(*self.gradient_end)
