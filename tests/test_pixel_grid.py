"""Tests for points, colors and the pixel grid."""

import pytest
import numpy as np
from py_voronoi.core.exceptions import InvalidInputError
from py_voronoi.core.pixel_grid import Color, PixelGrid, Point


class TestColor:
    """Test color validation and interpolation."""

    def test_validated_accepts_range(self):
        """Test that boundary channel values are accepted."""
        assert Color.validated(0, 128, 255) == Color(0, 128, 255)

    @pytest.mark.parametrize("channels", [(-1, 0, 0), (0, 256, 0), (0, 0, 1000)])
    def test_validated_rejects_out_of_range(self, channels):
        """Test that out-of-range channels raise instead of clamping."""
        with pytest.raises(InvalidInputError):
            Color.validated(*channels)

    def test_validated_clamp_opt_in(self):
        """Test that clamping only happens when requested."""
        assert Color.validated(-5, 300, 12, clamp=True) == Color(0, 255, 12)

    def test_validated_rejects_non_integer(self):
        """Test that fractional channels are rejected."""
        with pytest.raises(InvalidInputError):
            Color.validated(1.5, 0, 0)

    def test_validated_accepts_numpy_integers(self):
        """Test that NumPy integer channels become plain ints."""
        color = Color.validated(np.uint8(10), np.int64(20), 30)
        assert color == Color(10, 20, 30)
        assert all(type(c) is int for c in color)

    def test_lerp(self):
        """Test interpolation endpoints and midpoint truncation."""
        black, white = Color(0, 0, 0), Color(255, 255, 255)
        assert Color.lerp(black, white, 0.0) == black
        assert Color.lerp(black, white, 1.0) == white
        assert Color.lerp(black, white, 0.5) == Color(127, 127, 127)

    def test_str(self):
        """Test the text form used in pixel dumps."""
        assert str(Color(1, 22, 255)) == "1 22 255"


class TestPixelGrid:
    """Test grid storage and addressing."""

    def test_shape_and_storage(self):
        """Test that storage is rows of RGB triples."""
        grid = PixelGrid(4, 3)
        assert grid.shape == (4, 3)
        assert grid.data.shape == (3, 4, 3)
        assert grid.data.dtype == np.uint8

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 5)])
    def test_degenerate_dimensions(self, width, height):
        """Test that zero or negative dimensions are rejected."""
        with pytest.raises(InvalidInputError):
            PixelGrid(width, height)

    def test_xy_addressing(self):
        """Test that grid[x, y] addresses column x of row y."""
        grid = PixelGrid(3, 2)
        grid[2, 1] = Color(9, 8, 7)
        assert grid[2, 1] == Color(9, 8, 7)
        np.testing.assert_array_equal(grid.data[1, 2], [9, 8, 7])
        assert grid[1, 1] == Color(0, 0, 0)

    def test_pixels_row_major(self):
        """Test iteration order, left to right then top to bottom."""
        grid = PixelGrid(2, 2)
        grid[0, 0] = Color(1, 1, 1)
        grid[1, 0] = Color(2, 2, 2)
        grid[0, 1] = Color(3, 3, 3)
        grid[1, 1] = Color(4, 4, 4)
        assert [p.red for p in grid.pixels()] == [1, 2, 3, 4]

    def test_colors(self):
        """Test the set of distinct colors."""
        grid = PixelGrid(2, 1)
        grid[1, 0] = Color(5, 6, 7)
        assert grid.colors() == {Color(0, 0, 0), Color(5, 6, 7)}

    def test_equality(self):
        """Test that grids compare by content."""
        a, b = PixelGrid(2, 2), PixelGrid(2, 2)
        assert a == b
        b[0, 0] = Color(1, 0, 0)
        assert a != b
        assert PixelGrid(2, 1) != PixelGrid(1, 2)
