"""
Cross-type geometry helpers.

Stateless free functions that either forward to the methods of the geometry
types or implement algorithms spanning several of them (skew-line distance,
plane-plane and three-plane intersections).  Optional results are ``None``
when no unique answer exists.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Union

import numpy as np

from ..config import EPSILON
from ..geometry import Line, Plane, Point, Polygon, cross_product, dot_product

__all__ = [
    "distance",
    "intersection",
    "is_point_on_line",
    "is_point_on_plane",
    "are_collinear",
    "are_coplanar",
    "triangle_area",
    "tetrahedron_volume",
    "angle_between",
    "convex_hull_2d",
    "radians_to_degrees",
    "degrees_to_radians",
]

LOGGER = logging.getLogger("geomkernel.utils")

Entity = Union[Point, Line, Plane]

# dispatch order: the lower-ranked argument comes first
_RANK = {Point: 0, Line: 1, Plane: 2}


def _ordered(a: Entity, b: Entity):
    for obj in (a, b):
        if type(obj) not in _RANK:
            raise TypeError(f"Unsupported geometry type: {type(obj).__name__}.")
    return (a, b) if _RANK[type(a)] <= _RANK[type(b)] else (b, a)


# ---------------------------------------------------------------------------
# Distances -----------------------------------------------------------------
# ---------------------------------------------------------------------------
def distance(a: Entity, b: Entity) -> float:
    """
    Shortest distance between two of Point, Line and Plane, in either order.

    Line/Line uses the skew-line formula on the lines carrying the segments;
    parallel lines fall back to the distance from the second start point to
    the first segment.  Line/Plane and Plane/Plane are zero unless parallel.
    """
    a, b = _ordered(a, b)

    if isinstance(a, Point):
        if isinstance(b, Point):
            return a.distance_to(b)
        return b.distance_to(a)

    if isinstance(a, Line):
        if isinstance(b, Line):
            return _line_line_distance(a, b)
        # line / plane
        if abs(dot_product(b.normal, a.direction())) < EPSILON:
            return b.distance_to(a.start)
        return 0.0

    # plane / plane
    if a.is_parallel_to(b):
        return a.distance_to(b.point)
    return 0.0


def _line_line_distance(line1: Line, line2: Line) -> float:
    cross = cross_product(line1.direction(), line2.direction())
    cross_magnitude = cross.magnitude()

    if cross_magnitude < EPSILON:
        # parallel or coincident
        return line1.distance_to(line2.start)

    connecting = line2.start - line1.start
    return abs(dot_product(connecting, cross)) / cross_magnitude


# ---------------------------------------------------------------------------
# Intersections -------------------------------------------------------------
# ---------------------------------------------------------------------------
def intersection(a: Entity, b: Entity, c: Optional[Plane] = None) -> Optional[Union[Point, Line]]:
    """
    Intersection of two entities, or of three planes.

    Supported combinations:
        Line / Plane   -> Point or None (see :meth:`Plane.intersection_with`)
        Line / Line    -> Point or None; both lines are taken as infinite lines in z=0
        Plane / Plane  -> Line or None (a unit-length piece of the intersection line)
        Plane x 3      -> Point or None

    Raises:
        TypeError: for any other combination.
    """
    if c is not None:
        if not all(isinstance(p, Plane) for p in (a, b, c)):
            raise TypeError("Three-way intersection is only defined for three planes.")
        return _three_plane_intersection(a, b, c)

    a, b = _ordered(a, b)
    if isinstance(a, Line) and isinstance(b, Plane):
        return b.intersection_with(a)
    if isinstance(a, Line) and isinstance(b, Line):
        return _line_line_intersection(a, b)
    if isinstance(a, Plane) and isinstance(b, Plane):
        return _plane_plane_intersection(a, b)
    raise TypeError(f"No intersection defined between {type(a).__name__} and {type(b).__name__}.")


def _line_line_intersection(line1: Line, line2: Line) -> Optional[Point]:
    dir1 = line1.direction()
    dir2 = line2.direction()

    cross_z = dir1.x * dir2.y - dir1.y * dir2.x
    if abs(cross_z) < EPSILON:
        LOGGER.debug("Lines %s and %s are parallel", line1, line2)
        return None

    p1, p2 = line1.start, line2.start
    t1 = ((p2.x - p1.x) * dir2.y - (p2.y - p1.y) * dir2.x) / cross_z
    return p1 + dir1 * t1


def _plane_plane_intersection(plane1: Plane, plane2: Plane) -> Optional[Line]:
    if plane1.is_parallel_to(plane2):
        LOGGER.debug("Planes %s and %s are parallel", plane1, plane2)
        return None

    direction = cross_product(plane1.normal, plane2.normal).normalized()
    d = direction.get_point()

    # Set the coordinate along the dominant direction axis to zero; the 2x2
    # determinant of the remaining system equals that cross component.
    k = max(range(3), key=lambda idx: abs(d[idx]))
    i, j = [idx for idx in range(3) if idx != k]

    n1 = plane1.normal.get_point()
    n2 = plane2.normal.get_point()
    a1, b1, c1 = n1[i], n1[j], -plane1.d()
    a2, b2, c2 = n2[i], n2[j], -plane2.d()

    det = a1 * b2 - a2 * b1
    coords = [0.0, 0.0, 0.0]
    coords[i] = (c1 * b2 - c2 * b1) / det
    coords[j] = (a1 * c2 - a2 * c1) / det

    point = Point(*coords)
    return Line(point, point + direction)


def _three_plane_intersection(plane1: Plane, plane2: Plane, plane3: Plane) -> Optional[Point]:
    if (plane1.is_parallel_to(plane2) or plane1.is_parallel_to(plane3)
            or plane2.is_parallel_to(plane3)):
        return None

    # Cramer's rule on  n . p = -d
    planes = (plane1, plane2, plane3)
    coeffs = np.array([p.normal.get_point() for p in planes], dtype=float)
    rhs = np.array([-p.d() for p in planes], dtype=float)

    det = float(np.linalg.det(coeffs))
    if abs(det) < EPSILON:
        LOGGER.debug("Planes do not meet in a single point (det=%.3g)", det)
        return None

    solution = []
    for col in range(3):
        replaced = coeffs.copy()
        replaced[:, col] = rhs
        solution.append(float(np.linalg.det(replaced)) / det)
    return Point(*solution)


# ---------------------------------------------------------------------------
# Predicates ----------------------------------------------------------------
# ---------------------------------------------------------------------------
def is_point_on_line(point: Point, line: Line, epsilon: float = EPSILON) -> bool:
    return line.contains(point, epsilon)


def is_point_on_plane(point: Point, plane: Plane, epsilon: float = EPSILON) -> bool:
    return plane.contains(point, epsilon)


def are_collinear(p1: Point, p2: Point, p3: Point, epsilon: float = EPSILON) -> bool:
    return Line.are_collinear(p1, p2, p3, epsilon)


def are_coplanar(p1: Point, p2: Point, p3: Point, p4: Point, epsilon: float = EPSILON) -> bool:
    """True when the scalar triple product of the edge vectors from p1 vanishes."""
    triple = dot_product(cross_product(p2 - p1, p3 - p1), p4 - p1)
    return abs(triple) < epsilon


# ---------------------------------------------------------------------------
# Measures ------------------------------------------------------------------
# ---------------------------------------------------------------------------
def triangle_area(p1: Point, p2: Point, p3: Point) -> float:
    return cross_product(p2 - p1, p3 - p1).magnitude() * 0.5


def tetrahedron_volume(p1: Point, p2: Point, p3: Point, p4: Point) -> float:
    triple = dot_product(cross_product(p2 - p1, p3 - p1), p4 - p1)
    return abs(triple) / 6.0


def angle_between(v1: Point, v2: Point) -> float:
    """Angle between two vectors in radians, in [0, pi]; 0 if either is (near) zero."""
    mag1 = v1.magnitude()
    mag2 = v2.magnitude()
    if mag1 < EPSILON or mag2 < EPSILON:
        return 0.0
    cos_angle = dot_product(v1, v2) / (mag1 * mag2)
    return math.acos(max(-1.0, min(1.0, cos_angle)))


def convex_hull_2d(points: Iterable[Point]) -> Polygon:
    """Graham-scan hull of a point set (see :meth:`Polygon.convex_hull`)."""
    return Polygon(list(points)).convex_hull()


def radians_to_degrees(radians: float) -> float:
    return math.degrees(radians)


def degrees_to_radians(degrees: float) -> float:
    return math.radians(degrees)
