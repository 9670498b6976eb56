import warnings
from typing import Iterable, List

import numpy as np
from tqdm import tqdm

from .geometry import DegenerateTriangleError, Edge, Point, Triangle


class DegenerateGeometryWarning(UserWarning):
    """Emitted when an insertion would create a zero-area triangle."""


class Delaunay:
    """
    Incremental Delaunay-style triangulation of a rectangular domain.

    The mesh starts as the two triangles obtained by splitting the domain
    rectangle along its top-right / bottom-left diagonal. Each inserted point
    removes every triangle whose circumcircle contains it and fans the
    resulting cavity out from the new point. No edge flipping is performed.
    """

    def __init__(self, height: float, width: float):
        self.height = float(height)
        self.width = float(width)
        self._triangles: List[Triangle] = []
        self.duplicates_skipped = 0
        self.degenerate_skipped = 0
        self.initialize()

    def initialize(self) -> None:
        """Reset the mesh to the two triangles tiling the domain."""
        self._triangles = []
        self.duplicates_skipped = 0
        self.degenerate_skipped = 0

        a = Point(0.0, 0.0)
        b = Point(self.width, 0.0)
        c = Point(self.width, self.height)
        d = Point(0.0, self.height)

        self._triangles.append(Triangle(a, b, c))
        self._triangles.append(Triangle(a, c, d))

    def _has_vertex(self, point: Point) -> bool:
        return any(vertex == point
                   for triangle in self._triangles
                   for vertex in triangle.vertices)

    def insert_point(self, point: Point) -> bool:
        """
        Insert a single point into the mesh.

        Returns:
            True if the mesh changed, False if the point coincides with an
            existing vertex and was skipped.
        """
        if self._has_vertex(point):
            self.duplicates_skipped += 1
            return False

        kept = []
        edges = []
        for triangle in self._triangles:
            if triangle.circumcircle.contains(point):
                edges.extend(triangle.edges)
            else:
                kept.append(triangle)

        # Edges shared by two doomed triangles cancel out; the rest bound the cavity
        polygon: List[Edge] = []
        for edge in edges:
            for i, existing in enumerate(polygon):
                if existing == edge:
                    del polygon[i]
                    break
            else:
                polygon.append(edge)

        for edge in polygon:
            try:
                kept.append(Triangle(edge.a, edge.b, point))
            except DegenerateTriangleError as e:
                # The point sits on this cavity edge, the zero-area fan triangle covers nothing
                self.degenerate_skipped += 1
                warnings.warn(f"Skipping degenerate triangle: {e}", DegenerateGeometryWarning)

        self._triangles = kept
        return True

    def add_points(self, points: Iterable[Point], progress: bool = False) -> None:
        """Insert points sequentially in the given order."""
        points = list(points)
        for point in tqdm(points, desc='Triangulating', disable=not progress):
            self.insert_point(point)

    def triangles(self) -> List[Triangle]:
        """Current triangle set, including triangles attached to the domain corners."""
        return list(self._triangles)

    def vertices(self) -> List[Point]:
        """Distinct vertices of the current mesh."""
        unique: List[Point] = []
        for triangle in self._triangles:
            for vertex in triangle.vertices:
                if not any(vertex == seen for seen in unique):
                    unique.append(vertex)
        return unique

    def to_array(self) -> np.ndarray:
        """
        Triangle vertex coordinates.

        Returns:
            Array of shape (N, 3, 2) with (x, y) per vertex
        """
        if not self._triangles:
            return np.zeros((0, 3, 2), dtype=np.float64)
        return np.array([[vertex.as_tuple() for vertex in triangle.vertices]
                         for triangle in self._triangles], dtype=np.float64)

    def __len__(self):
        return len(self._triangles)
