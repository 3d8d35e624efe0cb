"""
py-voronoi: brute-force Voronoi diagram renderer.
"""

__version__ = "0.1.0"
