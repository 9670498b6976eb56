from .geometry import (
    EPSILON, Point, Edge, Circle, Triangle, DegenerateTriangleError
)
from .triangulator import Delaunay, DegenerateGeometryWarning

__all__ = [
    'EPSILON',
    'Point',
    'Edge',
    'Circle',
    'Triangle',
    'DegenerateTriangleError',
    'Delaunay',
    'DegenerateGeometryWarning'
]
