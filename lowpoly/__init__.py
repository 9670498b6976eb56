"""
lowpoly - Low-poly image stylization through Delaunay triangulation.

This package detects regions of high detail in a raster image, samples
points there, triangulates them and renders each triangle with the color
of the source image under its centroid.
"""

__version__ = "1.0.0"

from .delaunay import Point, Edge, Circle, Triangle, Delaunay, DegenerateTriangleError
from .filters import blur_filter, edge_filter, convolve
from .sampler import sample_points
from .pipeline import Triangulation
from .renderer import Drawer, EmptyDrawingError
from .config import LowPolyConfig, load_config, validate_config

__all__ = [
    'Point',
    'Edge',
    'Circle',
    'Triangle',
    'Delaunay',
    'DegenerateTriangleError',
    'blur_filter',
    'edge_filter',
    'convolve',
    'sample_points',
    'Triangulation',
    'Drawer',
    'EmptyDrawingError',
    'LowPolyConfig',
    'load_config',
    'validate_config'
]
