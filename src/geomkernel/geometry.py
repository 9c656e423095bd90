"""geomkernel.geometry - core geometric primitives
-----------------------------------------------------------------------------
This module defines the value types of the kernel: :class:`Point` (which also
plays the role of a 3-D vector), the finite segment :class:`Line`, the
:class:`Plane` and the planar :class:`Polygon`.  Every operation is pure and
works in fixed-precision floating point with absolute-epsilon comparisons
(see :mod:`geomkernel.config`).

Polygons carry 2-D semantics (x/y) while keeping the z coordinate of their
vertices, so that they can live on any horizontal level of a 3-D model.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import Point as _ShpPoint, LineString as _ShpLine, Polygon as _ShpPolygon

from .config import EPSILON, ANGLE_EPSILON
from .core.geomobject import GeometryObject
from .errors import DivisionByZero, DomainError, EmptyInput, InvalidArgument

__all__ = [
    "Point",
    "Line",
    "Plane",
    "Polygon",
    "dot_product",
    "cross_product",
]

LOGGER = logging.getLogger("geomkernel.geometry")


# ---------------------------------------------------------------------------
# Point / Vector ------------------------------------------------------------
# ---------------------------------------------------------------------------
class Point(GeometryObject):
    """
    Immutable three-dimensional point, also used as a free vector.

    Arithmetic operators return new instances.  Equality is exact component
    equality; use :meth:`is_close` for an epsilon-tolerant comparison.
    """

    __slots__ = ("_x", "_y", "_z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._x = float(x)
        self._y = float(y)
        self._z = float(z)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "Point":
        """Build a point from an (x, y) or (x, y, z) sequence or array."""
        coords = [float(v) for v in values]
        if len(coords) not in (2, 3):
            raise ValueError(f"Expected 2 or 3 coordinates, got {len(coords)}.")
        return cls(*coords)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> float:
        return self._z

    def get_point(self) -> Tuple[float, float, float]:
        """Return the coordinates as a tuple."""
        return (self._x, self._y, self._z)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def __add__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self._x + other._x, self._y + other._y, self._z + other._z)

    def __sub__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self._x - other._x, self._y - other._y, self._z - other._z)

    def __mul__(self, scalar: float) -> "Point":
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return Point(self._x * scalar, self._y * scalar, self._z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Point":
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        if scalar == 0:
            raise DivisionByZero("Cannot divide a Point by zero.")
        return Point(self._x / scalar, self._y / scalar, self._z / scalar)

    def __neg__(self) -> "Point":
        return Point(-self._x, -self._y, -self._z)

    # ------------------------------------------------------------------
    # Metric helpers
    # ------------------------------------------------------------------
    def magnitude(self) -> float:
        """Euclidean norm, computed with :func:`math.hypot` to avoid overflow."""
        return math.hypot(self._x, self._y, self._z)

    def magnitude_squared(self) -> float:
        return self._x * self._x + self._y * self._y + self._z * self._z

    def normalized(self) -> "Point":
        """
        Return the unit vector with the same direction.

        Raises:
            DomainError: if the magnitude is below ``EPSILON``.
        """
        mag = self.magnitude()
        if mag < EPSILON:
            raise DomainError(f"Cannot normalize a zero-length vector {self}.")
        return Point(self._x / mag, self._y / mag, self._z / mag)

    def distance_to(self, other: "Point") -> float:
        """Calculate Euclidean distance to another Point."""
        if not isinstance(other, Point):
            raise TypeError("Can only calculate distance to another Point instance.")
        return math.hypot(self._x - other._x, self._y - other._y, self._z - other._z)

    def dot(self, other: "Point") -> float:
        return self._x * other._x + self._y * other._y + self._z * other._z

    def cross(self, other: "Point") -> "Point":
        return Point(
            self._y * other._z - self._z * other._y,
            self._z * other._x - self._x * other._z,
            self._x * other._y - self._y * other._x,
        )

    def is_close(self, other: "Point", epsilon: float = EPSILON) -> bool:
        """Component-wise comparison with an absolute tolerance."""
        return (
            math.isclose(self._x, other._x, abs_tol=epsilon) and
            math.isclose(self._y, other._y, abs_tol=epsilon) and
            math.isclose(self._z, other._z, abs_tol=epsilon)
        )

    # ------------------------------------------------------------------
    # Interop
    # ------------------------------------------------------------------
    def to_array(self) -> np.ndarray:
        return np.array([self._x, self._y, self._z], dtype=float)

    def to_shapely(self) -> _ShpPoint:
        """Return *shapely.geometry.Point* projected to the XY plane."""
        return _ShpPoint(self._x, self._y)

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self._x == other._x and self._y == other._y and self._z == other._z

    def __hash__(self):
        return hash((self._x, self._y, self._z))

    def __iter__(self) -> Iterator[float]:
        return iter((self._x, self._y, self._z))

    def __str__(self) -> str:
        return f"Point({self._x!r}, {self._y!r}, {self._z!r})"

    def __repr__(self) -> str:
        return f"<geomkernel.Point x={self._x:.3f}, y={self._y:.3f}, z={self._z:.3f}>"


def dot_product(a: Point, b: Point) -> float:
    """Standard 3-D dot product of two vectors."""
    return a.dot(b)


def cross_product(a: Point, b: Point) -> Point:
    """Standard 3-D cross product of two vectors."""
    return a.cross(b)


def _cross_z(p1: Point, p2: Point, p3: Point) -> float:
    """z-component of (p2 - p1) x (p3 - p2); positive for a left turn."""
    return (p2.x - p1.x) * (p3.y - p2.y) - (p2.y - p1.y) * (p3.x - p2.x)


def _orientation(p: Point, q: Point, r: Point, epsilon: float = EPSILON) -> int:
    """0 when p, q, r are collinear in XY, 1 for clockwise, 2 for counter-clockwise."""
    val = (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)
    if abs(val) < epsilon:
        return 0
    return 1 if val > 0 else 2


def _on_segment(p: Point, q: Point, r: Point, epsilon: float = EPSILON) -> bool:
    """True if q lies inside the XY bounding box of segment p-r."""
    return (
        min(p.x, r.x) - epsilon <= q.x <= max(p.x, r.x) + epsilon and
        min(p.y, r.y) - epsilon <= q.y <= max(p.y, r.y) + epsilon
    )


def _require_point(value, what: str) -> Point:
    if not isinstance(value, Point):
        raise TypeError(f"{what} must be a Point instance, got {type(value).__name__}.")
    return value


# ---------------------------------------------------------------------------
# Line (finite segment) -----------------------------------------------------
# ---------------------------------------------------------------------------
class Line(GeometryObject):
    """
    Finite straight segment from ``start`` to ``end``.

    Length, containment, projection and segment-segment intersection honour the
    segment's extent.  Plane intersection and reflection use the infinite line
    carrying the segment.
    """

    __slots__ = ("_start", "_end")

    def __init__(self, start: Point, end: Point):
        self._start = _require_point(start, "Line start")
        self._end = _require_point(end, "Line end")

    @property
    def start(self) -> Point:
        return self._start

    @property
    def end(self) -> Point:
        return self._end

    # --------------- basic measures ----------------------------------
    def length(self) -> float:
        return self._start.distance_to(self._end)

    def vector(self) -> Point:
        """Unnormalized direction ``end - start``."""
        return self._end - self._start

    def direction(self) -> Point:
        """
        Unit vector from start to end.

        Raises:
            DomainError: for a zero-length segment.
        """
        return self.vector().normalized()

    def midpoint(self) -> Point:
        return (self._start + self._end) * 0.5

    def point_at(self, t: float) -> Point:
        """Point at parameter ``t`` along the segment; t is not clamped."""
        return self._start + self.vector() * t

    def reverse(self) -> "Line":
        return Line(self._end, self._start)

    # --------------- point relations ---------------------------------
    def contains(self, point: Point, epsilon: float = EPSILON) -> bool:
        """
        True if ``point`` lies on the segment.

        The point must be collinear with the segment (cross product below
        epsilon) and inside the segment's bounding box grown by epsilon on
        every axis.
        """
        if self.vector().cross(point - self._start).magnitude() > epsilon:
            return False
        s, e = self._start, self._end
        return (
            min(s.x, e.x) - epsilon <= point.x <= max(s.x, e.x) + epsilon and
            min(s.y, e.y) - epsilon <= point.y <= max(s.y, e.y) + epsilon and
            min(s.z, e.z) - epsilon <= point.z <= max(s.z, e.z) + epsilon
        )

    def _parameter_of(self, point: Point) -> Optional[float]:
        """Unclamped projection parameter of ``point``; None for a zero-length segment."""
        v = self.vector()
        len_sq = v.magnitude_squared()
        if len_sq == 0.0:
            return None
        return (point - self._start).dot(v) / len_sq

    def project(self, point: Point) -> Point:
        """Closest point of the segment to ``point`` (parameter clamped to [0, 1])."""
        t = self._parameter_of(point)
        if t is None:
            return self._start
        return self.point_at(min(1.0, max(0.0, t)))

    def distance_to(self, point: Point) -> float:
        return point.distance_to(self.project(point))

    def reflect(self, point: Point) -> Point:
        """Mirror ``point`` across the infinite line through the segment."""
        t = self._parameter_of(point)
        foot = self._start if t is None else self.point_at(t)
        return foot * 2.0 - point

    # --------------- segment relations -------------------------------
    def angle_with(self, other: "Line") -> float:
        """Acute angle in radians between the two directions, in [0, pi/2]."""
        cos_angle = abs(self.direction().dot(other.direction()))
        return math.acos(min(1.0, cos_angle))

    def intersects(self, other: "Line") -> bool:
        """Orientation test for two finite segments in the XY plane."""
        p1, q1 = self._start, self._end
        p2, q2 = other._start, other._end

        o1 = _orientation(p1, q1, p2)
        o2 = _orientation(p1, q1, q2)
        o3 = _orientation(p2, q2, p1)
        o4 = _orientation(p2, q2, q1)

        if o1 != o2 and o3 != o4:
            return True

        # collinear special cases
        if o1 == 0 and _on_segment(p1, p2, q1):
            return True
        if o2 == 0 and _on_segment(p1, q2, q1):
            return True
        if o3 == 0 and _on_segment(p2, p1, q2):
            return True
        if o4 == 0 and _on_segment(p2, q1, q2):
            return True
        return False

    @staticmethod
    def are_collinear(a: Point, b: Point, c: Point, epsilon: float = EPSILON) -> bool:
        return (b - a).cross(c - a).magnitude() < epsilon

    @staticmethod
    def bezier_interpolate(control_points: Sequence[Point], t: float) -> Point:
        """
        Evaluate a linear, quadratic or cubic Bezier curve with de Casteljau.

        Args:
            control_points: 2, 3 or 4 control points.
            t: curve parameter; values outside [0, 1] extrapolate.

        Returns:
            The point on the curve at ``t``.
        """
        pts = list(control_points)
        if len(pts) not in (2, 3, 4):
            raise InvalidArgument(f"Bezier interpolation needs 2, 3 or 4 control points, got {len(pts)}.")
        for p in pts:
            _require_point(p, "Bezier control point")
        if len(pts) == 2:
            return pts[0] + (pts[1] - pts[0]) * t
        blended = [Line.bezier_interpolate(pts[i:i + 2], t) for i in range(len(pts) - 1)]
        return Line.bezier_interpolate(blended, t)

    # --------------- interop / dunder --------------------------------
    def to_shapely(self) -> _ShpLine:
        """Return *shapely.geometry.LineString* projected to the XY plane."""
        return _ShpLine([(self._start.x, self._start.y), (self._end.x, self._end.y)])

    def __eq__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return self._start == other._start and self._end == other._end

    def __hash__(self):
        return hash((self._start, self._end))

    def __str__(self) -> str:
        return f"Line({self._start}, {self._end})"

    def __repr__(self) -> str:
        return f"<geomkernel.Line start={self._start!r} end={self._end!r}>"


# ---------------------------------------------------------------------------
# Plane ---------------------------------------------------------------------
# ---------------------------------------------------------------------------
class Plane(GeometryObject):
    """
    Infinite plane stored as a unit normal plus a reference point.

    The implicit form ``a*x + b*y + c*z + d = 0`` uses the normal's
    components for (a, b, c) and ``d = -normal . point``.  Signed distances are
    positive on the side the normal points toward.
    """

    __slots__ = ("_normal", "_point")

    def __init__(self, normal: Point, point: Point):
        _require_point(normal, "Plane normal")
        _require_point(point, "Plane point")
        if normal.magnitude() < EPSILON:
            raise InvalidArgument("Plane normal must be non-zero.")
        self._normal = normal.normalized()
        self._point = point

    @classmethod
    def from_points(cls, p1: Point, p2: Point, p3: Point) -> "Plane":
        """Plane through three points; the normal follows (p2 - p1) x (p3 - p1)."""
        normal = (p2 - p1).cross(p3 - p1)
        if normal.magnitude() < EPSILON:
            raise InvalidArgument("Cannot build a plane from collinear points.")
        return cls(normal, p1)

    @classmethod
    def from_coefficients(cls, a: float, b: float, c: float, d: float) -> "Plane":
        """
        Plane ``a*x + b*y + c*z + d = 0``.

        The reference point is solved on the axis with the largest coefficient
        magnitude, the other two coordinates being zero.
        """
        normal = Point(a, b, c)
        if normal.magnitude() < EPSILON:
            raise InvalidArgument("Plane coefficients (a, b, c) must not all be zero.")
        if abs(a) >= abs(b) and abs(a) >= abs(c):
            point = Point(-d / a, 0.0, 0.0)
        elif abs(b) >= abs(c):
            point = Point(0.0, -d / b, 0.0)
        else:
            point = Point(0.0, 0.0, -d / c)
        return cls(normal, point)

    @property
    def normal(self) -> Point:
        return self._normal

    @property
    def point(self) -> Point:
        return self._point

    def d(self) -> float:
        return -self._normal.dot(self._point)

    def coefficients(self) -> Tuple[float, float, float, float]:
        """Return (a, b, c, d) of the normalized implicit equation."""
        n = self._normal
        return (n.x, n.y, n.z, self.d())

    # --------------- point relations ---------------------------------
    def signed_distance_to(self, point: Point) -> float:
        return self._normal.dot(point) + self.d()

    def distance_to(self, point: Point) -> float:
        return abs(self.signed_distance_to(point))

    def contains(self, point: Point, epsilon: float = EPSILON) -> bool:
        return self.distance_to(point) < epsilon

    def project(self, point: Point) -> Point:
        return point - self._normal * self.signed_distance_to(point)

    def reflect(self, point: Point) -> Point:
        return point - self._normal * (2.0 * self.signed_distance_to(point))

    # --------------- line relations ----------------------------------
    def intersects(self, line: Line) -> bool:
        """
        True if the line through ``line`` meets the plane.

        A segment parallel to the plane intersects only when it lies in the
        plane.  Non-parallel segments always report True; the segment extent
        is not taken into account.
        """
        denom = self._normal.dot(line.direction())
        if abs(denom) < EPSILON:
            return self.contains(line.start)
        return True

    def intersection_with(self, line: Line) -> Optional[Point]:
        """Point where the infinite line through ``line`` crosses the plane, or None if parallel."""
        direction = line.direction()
        denom = self._normal.dot(direction)
        if abs(denom) < EPSILON:
            LOGGER.debug("Line %s is parallel to plane %s", line, self)
            return None
        t = -self.signed_distance_to(line.start) / denom
        return line.start + direction * t

    # --------------- plane relations ---------------------------------
    def angle_with(self, other: "Plane") -> float:
        """Acute dihedral angle in radians, in [0, pi/2]."""
        return math.acos(min(1.0, abs(self._normal.dot(other._normal))))

    def is_parallel_to(self, other: "Plane", epsilon: float = EPSILON) -> bool:
        return self._normal.cross(other._normal).magnitude() < epsilon

    def __eq__(self, other):
        if not isinstance(other, Plane):
            return NotImplemented
        return self._normal == other._normal and self._point == other._point

    def __hash__(self):
        return hash((self._normal, self._point))

    def __str__(self) -> str:
        return f"Plane(normal={self._normal}, point={self._point})"

    def __repr__(self) -> str:
        a, b, c, d = self.coefficients()
        return f"<geomkernel.Plane {a:.3f}x + {b:.3f}y + {c:.3f}z + {d:.3f} = 0>"


# ---------------------------------------------------------------------------
# Polygon -------------------------------------------------------------------
# ---------------------------------------------------------------------------
class Polygon(GeometryObject):
    """
    Ordered vertex sequence with an implicit closing edge.

    Edge ``i`` joins vertex ``i`` to vertex ``(i + 1) % N``; the first vertex
    is never repeated at the end.  Any vertex count is accepted, and
    self-intersecting boundaries are allowed.  Area, containment, convexity
    and the hull work on the x/y coordinates.
    """

    __slots__ = ("_vertices",)

    def __init__(self, vertices: Optional[List[Point]] = None):
        self._vertices: List[Point] = []
        for v in vertices or []:
            self.add_vertex(v)

    @classmethod
    def from_rectangle(cls, x_min: float, y_min: float, x_max: float, y_max: float, z: float = 0.0) -> "Polygon":
        """Axis-aligned rectangle, counter-clockwise from (x_min, y_min)."""
        if x_min > x_max or y_min > y_max:
            raise InvalidArgument("x_min and y_min should be less than x_max and y_max.")
        return cls([
            Point(x_min, y_min, z),
            Point(x_max, y_min, z),
            Point(x_max, y_max, z),
            Point(x_min, y_max, z),
        ])

    # ---------------- mutation ---------------------------------------
    def add_vertex(self, point: Point) -> None:
        """Append a vertex to the boundary."""
        self._vertices.append(_require_point(point, "Polygon vertex"))

    @property
    def vertices(self) -> List[Point]:
        return list(self._vertices)

    def _vertex_pairs(self) -> Iterator[Tuple[Point, Point]]:
        vs = self._vertices
        return zip(vs, vs[1:] + vs[:1])

    # ---------------- measures ---------------------------------------
    def signed_area(self) -> float:
        """Shoelace area; positive for counter-clockwise vertex order."""
        if len(self._vertices) < 3:
            return 0.0
        return 0.5 * sum(cur.x * nxt.y - nxt.x * cur.y for cur, nxt in self._vertex_pairs())

    def area(self) -> float:
        return abs(self.signed_area())

    def perimeter(self) -> float:
        if len(self._vertices) < 2:
            return 0.0
        return sum(cur.distance_to(nxt) for cur, nxt in self._vertex_pairs())

    def centroid(self) -> Point:
        """
        Area-weighted centroid of the boundary.

        One vertex yields the vertex itself and two yield their midpoint.  When
        the signed area vanishes (degenerate or self-cancelling outline) the
        plain vertex average is returned.  The z coordinate is the mean vertex z.

        Raises:
            EmptyInput: if the polygon has no vertices.
        """
        vs = self._vertices
        n = len(vs)
        if n == 0:
            raise EmptyInput("Cannot compute centroid of an empty polygon.")
        if n == 1:
            return vs[0]
        if n == 2:
            return Line(vs[0], vs[1]).midpoint()

        area_sum = 0.0
        cx = 0.0
        cy = 0.0
        for cur, nxt in self._vertex_pairs():
            tri_area = (cur.x * nxt.y - nxt.x * cur.y) * 0.5
            area_sum += tri_area
            cx += (cur.x + nxt.x) * tri_area / 3.0
            cy += (cur.y + nxt.y) * tri_area / 3.0

        mean_z = sum(v.z for v in vs) / n
        if abs(area_sum) < EPSILON:
            LOGGER.debug("Degenerate polygon (signed area %.3g), using vertex average as centroid", area_sum)
            return Point(sum(v.x for v in vs) / n, sum(v.y for v in vs) / n, mean_z)
        return Point(cx / area_sum, cy / area_sum, mean_z)

    def bounding_box(self) -> Tuple[Point, Point]:
        """Return (min corner, max corner); both are the origin for an empty polygon."""
        if not self._vertices:
            return Point(0.0, 0.0, 0.0), Point(0.0, 0.0, 0.0)
        xs = [v.x for v in self._vertices]
        ys = [v.y for v in self._vertices]
        zs = [v.z for v in self._vertices]
        return Point(min(xs), min(ys), min(zs)), Point(max(xs), max(ys), max(zs))

    def edges(self) -> List[Line]:
        if len(self._vertices) < 2:
            return []
        return [Line(cur, nxt) for cur, nxt in self._vertex_pairs()]

    # ---------------- shape tests ------------------------------------
    def is_convex(self) -> bool:
        """
        True when every turn along the boundary has the same orientation.

        Collinear vertex triples are skipped; a polygon with no turn at all
        (every vertex on one line) is not convex.
        """
        vs = self._vertices
        n = len(vs)
        if n < 3:
            return False

        sign = 0
        for i in range(n):
            cross_z = _cross_z(vs[i], vs[(i + 1) % n], vs[(i + 2) % n])
            if abs(cross_z) < EPSILON:
                continue
            current = 1 if cross_z > 0 else -1
            if sign == 0:
                sign = current
            elif current != sign:
                return False
        return sign != 0

    def is_planar(self, epsilon: float = EPSILON) -> bool:
        """True if all vertices lie on one plane (trivially so for collinear or < 4 vertices)."""
        vs = self._vertices
        if len(vs) < 4:
            return True
        p0 = vs[0]
        normal = None
        for i in range(1, len(vs) - 1):
            v1 = vs[i] - p0
            for j in range(i + 1, len(vs)):
                candidate = v1.cross(vs[j] - p0)
                if candidate.magnitude() > epsilon:
                    normal = candidate.normalized()
                    break
            if normal is not None:
                break
        if normal is None:
            # all vertices collinear
            return True
        return all(abs(normal.dot(v - p0)) < epsilon for v in vs)

    def contains_point(self, point: Point, include_boundary: bool = True) -> bool:
        """
        Ray-casting containment test.

        Args:
            point: the query point; only x and y take part in the parity test.
            include_boundary: report points lying on an edge as inside.

        Returns:
            True if the point is inside (or on the boundary, if requested).
        """
        vs = self._vertices
        n = len(vs)
        if n < 3:
            return False

        inside = False
        j = n - 1
        for i in range(n):
            vi, vj = vs[i], vs[j]
            if include_boundary and Line(vi, vj).contains(point):
                return True
            if (vi.y > point.y) != (vj.y > point.y):
                x_cross = (vj.x - vi.x) * (point.y - vi.y) / (vj.y - vi.y) + vi.x
                if point.x < x_cross:
                    inside = not inside
            j = i
        return inside

    def distance_to(self, point: Point) -> float:
        """0 inside or on the boundary, otherwise the distance to the nearest edge."""
        if self.contains_point(point, True):
            return 0.0
        return min((edge.distance_to(point) for edge in self.edges()), default=math.inf)

    def intersects(self, other: "Polygon") -> bool:
        """True if any edges cross or either polygon contains a vertex of the other."""
        if not isinstance(other, Polygon):
            raise TypeError("Can only test intersection with another Polygon instance.")
        other_edges = other.edges()
        for edge in self.edges():
            for other_edge in other_edges:
                if edge.intersects(other_edge):
                    return True
        if any(other.contains_point(v) for v in self._vertices):
            return True
        return any(self.contains_point(v) for v in other._vertices)

    # ---------------- derived polygons -------------------------------
    def convex_hull(self) -> "Polygon":
        """
        Graham scan over the vertices.

        The pivot is the lowest vertex (ties: lowest x); the others are sorted
        by polar angle around it, nearest first on equal angles.  The result is
        counter-clockwise starting at the pivot and keeps strict left turns
        only.  Fewer than three vertices are returned unchanged.
        """
        vs = self._vertices
        if len(vs) < 3:
            return Polygon(vs)

        pivot_idx = min(range(len(vs)), key=lambda i: (vs[i].y, vs[i].x))
        points = list(vs)
        points[0], points[pivot_idx] = points[pivot_idx], points[0]
        pivot = points[0]

        def _polar_key(p: Point) -> Tuple[int, float]:
            # angles are bucketed so that near ties order consistently by distance
            angle = math.atan2(p.y - pivot.y, p.x - pivot.x)
            return round(angle / ANGLE_EPSILON), pivot.distance_to(p)

        rest = sorted(points[1:], key=_polar_key)

        hull = [pivot, rest[0]]
        for candidate in rest[1:]:
            while len(hull) > 1 and _cross_z(hull[-2], hull[-1], candidate) <= 0:
                hull.pop()
            hull.append(candidate)

        LOGGER.debug("Convex hull kept %d of %d vertices", len(hull), len(vs))
        return Polygon(hull)

    def simplify(self, epsilon: float = EPSILON) -> "Polygon":
        """Drop interior vertices collinear with their neighbours; the end vertices are kept."""
        vs = self._vertices
        if len(vs) < 3:
            return Polygon(vs)
        kept = [vs[0]]
        for prev, curr, nxt in zip(vs, vs[1:], vs[2:]):
            if not Line.are_collinear(prev, curr, nxt, epsilon):
                kept.append(curr)
        kept.append(vs[-1])
        return Polygon(kept)

    # ---------------- interop ----------------------------------------
    def to_array(self) -> np.ndarray:
        """Vertices as an (N, 3) array."""
        return np.array([v.get_point() for v in self._vertices], dtype=float).reshape(-1, 3)

    def to_shapely(self) -> _ShpPolygon:
        """Return a *shapely.geometry.Polygon* projected to the XY plane."""
        return _ShpPolygon([(v.x, v.y) for v in self._vertices])

    # ---------------- container --------------------------------------
    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._vertices)

    def __getitem__(self, idx) -> Point:
        return self._vertices[idx]

    def __eq__(self, other):
        if not isinstance(other, Polygon):
            return NotImplemented
        return self._vertices == other._vertices

    __hash__ = None  # mutable through add_vertex

    def __str__(self) -> str:
        return "Polygon[" + ", ".join(str(v) for v in self._vertices) + "]"

    def __repr__(self) -> str:
        return f"<geomkernel.Polygon n_vertices={len(self)} area={self.area():.3f}>"
