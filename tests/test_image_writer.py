"""Tests for PPM output."""

import pytest
import numpy as np
from py_voronoi.core.distance import euclidean_distance, manhattan_distance
from py_voronoi.core.exceptions import ImageWriteError, InvalidInputError
from py_voronoi.core.image_writer import format_ppm, parse_ppm, read_ppm, write_ppm
from py_voronoi.core.pixel_grid import Color, PixelGrid, Point
from py_voronoi.core.renderer import render_voronoi
from py_voronoi.core.seeds import Seed, SeedSet, generate_seeds, random_colors
from py_voronoi.utils.random import make_rng


@pytest.fixture
def two_pixel_grid():
    """2x1 grid rendered from one seed on each pixel."""
    seeds = SeedSet([
        Seed(Point(0, 0), Color(10, 20, 30)),
        Seed(Point(1, 0), Color(200, 100, 0)),
    ])
    return render_voronoi(seeds, euclidean_distance, 2, 1)


class TestFormatPPM:
    """Test P3 serialization."""

    def test_two_pixel_dump(self, two_pixel_grid):
        """Test header and pixel entries of a 2x1 render."""
        text = format_ppm(two_pixel_grid)
        lines = text.splitlines()

        assert lines[0] == "P3"
        assert lines[1] == "2 1"
        assert lines[2] == "255"
        assert text.split()[4:] == ["10", "20", "30", "200", "100", "0"]

    def test_row_major_order(self):
        """Test that rows are written top to bottom, left to right."""
        grid = PixelGrid(2, 2)
        grid[0, 0] = Color(1, 1, 1)
        grid[1, 0] = Color(2, 2, 2)
        grid[0, 1] = Color(3, 3, 3)
        grid[1, 1] = Color(4, 4, 4)
        lines = format_ppm(grid).splitlines()
        assert lines[3:] == ["1 1 1 2 2 2", "3 3 3 4 4 4"]

    def test_trailing_newline(self, two_pixel_grid):
        """Test that the dump ends with a newline."""
        assert format_ppm(two_pixel_grid).endswith("\n")


class TestWritePPM:
    """Test writing and reading files."""

    def test_write_and_read_back(self, tmp_path, two_pixel_grid):
        """Test that a written file parses back to the same grid."""
        path = write_ppm(two_pixel_grid, tmp_path / "out.ppm")
        assert path.exists()
        assert read_ppm(path) == two_pixel_grid

    def test_creates_parent_directories(self, tmp_path, two_pixel_grid):
        """Test that missing parent directories are created."""
        path = write_ppm(two_pixel_grid, tmp_path / "a" / "b" / "out.ppm")
        assert path.read_text().startswith("P3\n2 1\n255\n")

    def test_idempotent(self, tmp_path):
        """Test that rendering the same inputs twice gives identical files."""
        rng = make_rng("idempotent")
        seeds = generate_seeds(15, 20, 12, random_colors(rng), rng)

        first = write_ppm(render_voronoi(seeds, manhattan_distance, 20, 12), tmp_path / "1.ppm")
        second = write_ppm(render_voronoi(seeds, manhattan_distance, 20, 12, workers=3),
                           tmp_path / "2.ppm")
        assert first.read_bytes() == second.read_bytes()

    def test_unwritable_destination(self, tmp_path, two_pixel_grid):
        """Test that I/O failure names the destination and keeps the grid."""
        destination = tmp_path / "taken"
        destination.mkdir()
        before = two_pixel_grid.data.copy()

        with pytest.raises(ImageWriteError) as exc_info:
            write_ppm(two_pixel_grid, destination)

        assert exc_info.value.destination == destination
        assert isinstance(exc_info.value, OSError)
        np.testing.assert_array_equal(two_pixel_grid.data, before)


class TestParsePPM:
    """Test P3 parsing."""

    def test_comments_and_whitespace(self):
        """Test that comments and arbitrary whitespace are accepted."""
        grid = parse_ppm("P3\n# made by hand\n2 1\n255\n1 2 3\n\t4 5 6 # last\n")
        assert grid[0, 0] == Color(1, 2, 3)
        assert grid[1, 0] == Color(4, 5, 6)

    @pytest.mark.parametrize("text", [
        "P6\n1 1\n255\n0 0 0\n",
        "P3\n1 1\n255\n0 0\n",
        "P3\n1 1\n255\n0 0 256\n",
        "P3\n1 1\n15\n0 0 0\n",
        "P3\n1 x\n255\n0 0 0\n",
        "P3\n",
        "P3\n1000000 1000000\n255\n0 0 0\n",
        "P3\n0 1\n255\n",
        "P3\n-1 -1\n255\n0 0 0\n",
    ])
    def test_malformed(self, text):
        """Test that malformed dumps are rejected."""
        with pytest.raises(InvalidInputError):
            parse_ppm(text)
