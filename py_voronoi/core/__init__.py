"""
Core Voronoi rendering functionality.
"""

from .exceptions import VoronoiError, InvalidInputError, ImageWriteError, RenderPassError
from .pixel_grid import Point, Color, PixelGrid
from .distance import euclidean_distance, manhattan_distance, get_metric, METRICS
from .seeds import Seed, SeedSet, generate_seeds, make_color_function, COLOR_SCHEMES
from .renderer import VoronoiRenderer, render_voronoi
from .image_writer import write_ppm, read_ppm
from .passes import PassResult, render_passes

__all__ = ['VoronoiError', 'InvalidInputError', 'ImageWriteError', 'RenderPassError',
           'Point', 'Color', 'PixelGrid',
           'euclidean_distance', 'manhattan_distance', 'get_metric', 'METRICS',
           'Seed', 'SeedSet', 'generate_seeds', 'make_color_function', 'COLOR_SCHEMES',
           'VoronoiRenderer', 'render_voronoi', 'write_ppm', 'read_ppm',
           'PassResult', 'render_passes']
