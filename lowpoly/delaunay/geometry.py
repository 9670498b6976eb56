import math
from dataclasses import dataclass
from typing import Tuple


# Coordinate tolerance used by every identity check in the mesh
EPSILON = 1e-4

# Twice the signed area below which three vertices are treated as collinear
DEGENERATE_TOLERANCE = 1e-9


class DegenerateTriangleError(ValueError):
    """Raised when three vertices do not span a proper triangle."""


@dataclass(frozen=True, eq=False)
class Point:
    """2D point with tolerance-based equality."""
    x: float
    y: float

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return abs(self.x - other.x) < EPSILON and abs(self.y - other.y) < EPSILON

    __hash__ = None

    def dist(self, other: 'Point') -> float:
        """Squared euclidean distance to another point."""
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, eq=False)
class Edge:
    """Unordered pair of points."""
    a: Point
    b: Point

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return ((self.a == other.a and self.b == other.b) or
                (self.a == other.b and self.b == other.a))

    __hash__ = None


@dataclass(frozen=True)
class Circle:
    """
    Circle given by its center and the SQUARED radius.

    ``radius`` holds the value returned by ``Point.dist``, so containment
    compares squared distances on both sides.
    """
    center: Point
    radius: float

    def contains(self, point: Point) -> bool:
        return point.dist(self.center) < self.radius


class Triangle:
    """Triangle with its edges and circumcircle computed at construction."""

    __hash__ = None

    def __init__(self, p0: Point, p1: Point, p2: Point):
        self._vertices = (p0, p1, p2)
        self._edges = (Edge(p0, p1), Edge(p1, p2), Edge(p2, p0))
        self._circumcircle = self._compute_circumcircle(p0, p1, p2)

    @staticmethod
    def _compute_circumcircle(p0: Point, p1: Point, p2: Point) -> Circle:
        ax = p1.x - p0.x
        ay = p1.y - p0.y
        bx = p2.x - p0.x
        by = p2.y - p0.y

        det = 2.0 * (ax * by - ay * bx)
        if abs(det) < DEGENERATE_TOLERANCE:
            raise DegenerateTriangleError(
                f"collinear or coincident vertices: {p0}, {p1}, {p2}")

        m = p1.x * p1.x - p0.x * p0.x + p1.y * p1.y - p0.y * p0.y
        u = p2.x * p2.x - p0.x * p0.x + p2.y * p2.y - p0.y * p0.y
        s = 1.0 / det

        center_x = ((p2.y - p0.y) * m + (p0.y - p1.y) * u) * s
        center_y = ((p0.x - p2.x) * m + (p1.x - p0.x) * u) * s
        if not (math.isfinite(center_x) and math.isfinite(center_y)):
            raise DegenerateTriangleError(
                f"non-finite circumcenter for vertices: {p0}, {p1}, {p2}")

        center = Point(center_x, center_y)
        return Circle(center=center, radius=center.dist(p0))

    @property
    def vertices(self) -> Tuple[Point, Point, Point]:
        return self._vertices

    @property
    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return self._edges

    @property
    def circumcircle(self) -> Circle:
        return self._circumcircle

    def center(self) -> Point:
        """Centroid of the three vertices."""
        return Point(sum(p.x for p in self._vertices) / 3.0,
                     sum(p.y for p in self._vertices) / 3.0)

    def area(self) -> float:
        p0, p1, p2 = self._vertices
        return 0.5 * abs((p1.x - p0.x) * (p2.y - p0.y) - (p2.x - p0.x) * (p1.y - p0.y))

    def __eq__(self, other):
        if not isinstance(other, Triangle):
            return NotImplemented
        # Multiset comparison: every vertex of ``other`` is matched to a distinct one here
        remaining = list(self._vertices)
        for vertex in other._vertices:
            for i, candidate in enumerate(remaining):
                if candidate == vertex:
                    del remaining[i]
                    break
            else:
                return False
        return True

    def __repr__(self):
        p0, p1, p2 = self._vertices
        return (f"Triangle(({p0.x:g}, {p0.y:g}), ({p1.x:g}, {p1.y:g}), "
                f"({p2.x:g}, {p2.y:g}))")
