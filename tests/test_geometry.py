import math
import unittest

import numpy as np

from geomkernel.errors import DivisionByZero, DomainError, InvalidArgument
from geomkernel.geometry import Point, Line, dot_product, cross_product


class TestPoint(unittest.TestCase):
    def test_point_basic(self):
        """Point creation and basic properties (x, y, z)."""
        p = Point(1.2, 3.4, -5.6)
        self.assertAlmostEqual(p.x, 1.2)
        self.assertAlmostEqual(p.y, 3.4)
        self.assertAlmostEqual(p.z, -5.6)
        self.assertEqual(p.get_point(), (1.2, 3.4, -5.6))
        # z defaults to zero, ints are stored as floats
        q = Point(1, 2)
        self.assertEqual(q.get_point(), (1.0, 2.0, 0.0))
        self.assertIsInstance(q.x, float)
        # __repr__ contains coordinates to 3 decimal places
        rep = repr(p)
        self.assertIn("x=1.200", rep)
        self.assertIn("y=3.400", rep)
        self.assertIn("z=-5.600", rep)
        # str is the bracketed text form
        self.assertEqual(str(Point(1, 2, 3)), "Point(1.0, 2.0, 3.0)")

    def test_point_is_immutable(self):
        """Coordinates are read-only."""
        p = Point(1, 2, 3)
        with self.assertRaises(AttributeError):
            p.x = 5

    def test_point_arithmetic(self):
        """Operators work component-wise and return new points."""
        p1 = Point(1, 2, 3)
        p2 = Point(4, 5, 6)
        self.assertEqual(p1 + p2, Point(5, 7, 9))
        self.assertEqual(p2 - p1, Point(3, 3, 3))
        self.assertEqual(p1 * 2.5, Point(2.5, 5.0, 7.5))
        self.assertEqual(2 * p1, Point(2, 4, 6))
        self.assertEqual(p2 / 2.0, Point(2.0, 2.5, 3.0))
        self.assertEqual(-p1, Point(-1, -2, -3))
        # operands are untouched
        self.assertEqual(p1.get_point(), (1.0, 2.0, 3.0))

    def test_point_division_by_zero(self):
        """Dividing by exactly zero raises DivisionByZero, a ZeroDivisionError."""
        with self.assertRaises(DivisionByZero):
            Point(1, 1, 1) / 0
        with self.assertRaises(ZeroDivisionError):
            Point(1, 1, 1) / 0.0
        # a tiny but non-zero divisor is allowed
        self.assertEqual(Point(1e-12, 0, 0) / 1e-12, Point(1, 0, 0))

    def test_point_distance_and_equality(self):
        """distance_to is Euclidean and symmetric; equality is exact."""
        p1 = Point(0, 0, 0)
        p2 = Point(3, 4, 0)
        self.assertAlmostEqual(p1.distance_to(p2), 5.0)
        self.assertEqual(p1.distance_to(p2), p2.distance_to(p1))
        self.assertEqual(p2.distance_to(p2), 0.0)
        # Non-Point argument raises TypeError
        with self.assertRaises(TypeError):
            p1.distance_to((3, 4, 0))
        # exact equality, tolerant comparison through is_close
        p3 = Point(0.0, 0.0, 1e-10)
        self.assertNotEqual(p1, p3)
        self.assertTrue(p1.is_close(p3))
        self.assertFalse(p1.is_close(Point(0, 0, 1e-3)))
        self.assertEqual(hash(p1), hash(Point(0.0, 0.0, 0.0)))

    def test_magnitude_does_not_overflow(self):
        """magnitude and distance use hypot and survive huge components."""
        big = Point(1e200, 1e200, 0)
        self.assertTrue(math.isfinite(big.magnitude()))
        self.assertAlmostEqual(big.magnitude() / 1e200, math.sqrt(2))
        self.assertAlmostEqual(Point(1, 2, 2).magnitude(), 3.0)
        self.assertEqual(Point(1, 2, 2).magnitude_squared(), 9.0)

    def test_normalized(self):
        """Unit length for non-zero vectors, DomainError for (near-)zero ones."""
        for v in (Point(3, 4, 0), Point(-1, 2, 7), Point(1e-3, 0, 0)):
            self.assertAlmostEqual(v.normalized().magnitude(), 1.0)
        with self.assertRaises(DomainError):
            Point(0, 0, 0).normalized()
        with self.assertRaises(DomainError):
            Point(1e-8, 0, 0).normalized()
        # DomainError is also a ValueError
        with self.assertRaises(ValueError):
            Point().normalized()

    def test_dot_and_cross(self):
        """Free functions match the methods and the textbook formulas."""
        a = Point(1, 2, 3)
        b = Point(4, 5, 6)
        self.assertEqual(dot_product(a, b), 32.0)
        self.assertEqual(cross_product(a, b), Point(-3, 6, -3))
        self.assertEqual(cross_product(Point(1, 0, 0), Point(0, 1, 0)), Point(0, 0, 1))
        # cross product is orthogonal to both operands
        c = cross_product(a, b)
        self.assertAlmostEqual(dot_product(c, a), 0.0)
        self.assertAlmostEqual(dot_product(c, b), 0.0)

    def test_point_interop(self):
        """to_array / from_array / to_shapely."""
        p = Point(1, 2, 3)
        arr = p.to_array()
        self.assertIsInstance(arr, np.ndarray)
        self.assertEqual(arr.tolist(), [1.0, 2.0, 3.0])
        self.assertEqual(Point.from_array(arr), p)
        self.assertEqual(Point.from_array([1, 2]), Point(1, 2, 0))
        with self.assertRaises(ValueError):
            Point.from_array([1])
        shp = p.to_shapely()
        self.assertEqual((shp.x, shp.y), (1.0, 2.0))
        # unpacking
        x, y, z = p
        self.assertEqual((x, y, z), (1.0, 2.0, 3.0))


class TestLine(unittest.TestCase):
    def setUp(self):
        self.seg = Line(Point(0, 0, 0), Point(3, 4, 0))
        self.x_axis = Line(Point(0, 0, 0), Point(2, 0, 0))

    def test_line_basic(self):
        """Length, direction, midpoint and text form."""
        self.assertEqual(self.seg.length(), 5.0)
        self.assertTrue(self.seg.direction().is_close(Point(0.6, 0.8, 0)))
        self.assertEqual(self.seg.midpoint(), Point(1.5, 2.0, 0))
        self.assertEqual(self.seg.vector(), Point(3, 4, 0))
        self.assertEqual(self.seg.reverse(), Line(Point(3, 4, 0), Point(0, 0, 0)))
        self.assertEqual(str(self.seg), "Line(Point(0.0, 0.0, 0.0), Point(3.0, 4.0, 0.0))")
        self.assertIn("Line", repr(self.seg))

    def test_line_type_checks(self):
        """Endpoints must be Points."""
        with self.assertRaises(TypeError):
            Line((0, 0, 0), Point(1, 1, 1))
        with self.assertRaises(TypeError):
            Line(Point(0, 0, 0), "end")

    def test_zero_length_segment(self):
        """A degenerate segment is valid data but has no direction."""
        p = Point(1, 1, 1)
        seg = Line(p, p)
        self.assertEqual(seg.length(), 0.0)
        with self.assertRaises(DomainError):
            seg.direction()
        # it still contains its only point and projects everything onto it
        self.assertTrue(seg.contains(p))
        self.assertEqual(seg.project(Point(5, 5, 5)), p)
        self.assertAlmostEqual(seg.distance_to(Point(1, 1, 4)), 3.0)

    def test_contains_parametric_points(self):
        """Points at t in [0, 1] are on the segment and at distance zero."""
        seg3d = Line(Point(1, -2, 3), Point(4, 2, -1))
        for seg in (self.seg, seg3d):
            for t in (0.0, 0.1, 0.5, 0.9, 1.0):
                p = seg.point_at(t)
                self.assertTrue(seg.contains(p), f"t={t}")
                self.assertAlmostEqual(seg.distance_to(p), 0.0)

    def test_contains_rejects_outside_points(self):
        """Collinear points beyond the ends and off-line points are rejected."""
        self.assertFalse(self.seg.contains(self.seg.point_at(1.5)))
        self.assertFalse(self.seg.contains(self.seg.point_at(-0.2)))
        self.assertFalse(self.seg.contains(Point(1, 1, 0)))
        # a point within epsilon of the line is accepted
        self.assertTrue(self.x_axis.contains(Point(1, 1e-8, 0)))
        self.assertFalse(self.x_axis.contains(Point(1, 0, 1e-3)))

    def test_project_clamps_to_segment(self):
        """Projection stays on the segment; distance to the projection is zero."""
        self.assertEqual(self.x_axis.project(Point(1, 5, 0)), Point(1, 0, 0))
        self.assertEqual(self.x_axis.project(Point(3, 1, 0)), Point(2, 0, 0))
        self.assertEqual(self.x_axis.project(Point(-4, -1, 2)), Point(0, 0, 0))
        for p in (Point(1, 2, 0), Point(-3, 7, 1), Point(10, -1, 0)):
            proj = self.seg.project(p)
            self.assertAlmostEqual(self.seg.distance_to(proj), 0.0)
        self.assertAlmostEqual(self.x_axis.distance_to(Point(3, 1, 0)), math.sqrt(2))

    def test_reflect(self):
        """Reflection mirrors across the carrying line and is an involution."""
        self.assertTrue(self.x_axis.reflect(Point(1, 1, 0)).is_close(Point(1, -1, 0)))
        # beyond the segment extent the infinite line is used
        self.assertTrue(self.x_axis.reflect(Point(5, 3, 0)).is_close(Point(5, -3, 0)))
        for p in (Point(1, 2, 0), Point(-3, 7, 1), Point(10, -1, 4)):
            self.assertTrue(self.seg.reflect(self.seg.reflect(p)).is_close(p))

    def test_angle_with(self):
        """Angle is acute: parallel and anti-parallel both give zero."""
        opposite = Line(Point(5, 5, 0), Point(2, 1, 0))
        self.assertAlmostEqual(self.seg.angle_with(self.seg), 0.0)
        self.assertAlmostEqual(self.seg.angle_with(opposite), 0.0)
        y_axis = Line(Point(0, 0, 0), Point(0, 3, 0))
        self.assertAlmostEqual(self.x_axis.angle_with(y_axis), math.pi / 2)
        diagonal = Line(Point(0, 0, 0), Point(-1, 1, 0))
        self.assertAlmostEqual(self.x_axis.angle_with(diagonal), math.pi / 4)

    def test_intersects(self):
        """Orientation-based segment intersection."""
        a = Line(Point(0, 0), Point(2, 2))
        b = Line(Point(0, 2), Point(2, 0))
        self.assertTrue(a.intersects(b))
        self.assertTrue(b.intersects(a))
        # parallel, disjoint
        self.assertFalse(a.intersects(Line(Point(1, 0), Point(3, 2))))
        # crossing lines but the segments stop short
        self.assertFalse(a.intersects(Line(Point(3, 0), Point(2.5, 0.5))))
        # touching at an endpoint
        self.assertTrue(a.intersects(Line(Point(2, 2), Point(4, 0))))
        # T junction
        self.assertTrue(self.x_axis.intersects(Line(Point(1, 0), Point(1, 5))))
        # collinear overlapping / collinear disjoint
        self.assertTrue(self.x_axis.intersects(Line(Point(1, 0), Point(5, 0))))
        self.assertFalse(self.x_axis.intersects(Line(Point(3, 0), Point(5, 0))))

    def test_are_collinear(self):
        self.assertTrue(Line.are_collinear(Point(0, 0, 0), Point(1, 1, 1), Point(3, 3, 3)))
        self.assertFalse(Line.are_collinear(Point(0, 0, 0), Point(1, 1, 1), Point(3, 3, 2)))
        self.assertTrue(Line.are_collinear(Point(0, 0), Point(1, 0), Point(2, 1e-3), epsilon=1e-2))

    def test_bezier_interpolate(self):
        """Linear, quadratic and cubic de Casteljau; t is not clamped."""
        p0, p1 = Point(0, 0), Point(2, 0)
        self.assertEqual(Line.bezier_interpolate([p0, p1], 0.5), Point(1, 0))
        # extrapolation outside [0, 1]
        self.assertEqual(Line.bezier_interpolate([p0, p1], 2.0), Point(4, 0))
        quad = [Point(0, 0), Point(1, 2), Point(2, 0)]
        self.assertTrue(Line.bezier_interpolate(quad, 0.5).is_close(Point(1, 1)))
        self.assertEqual(Line.bezier_interpolate(quad, 0.0), quad[0])
        self.assertEqual(Line.bezier_interpolate(quad, 1.0), quad[2])
        cubic = [Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)]
        self.assertTrue(Line.bezier_interpolate(cubic, 0.5).is_close(Point(0.5, 0.75)))
        self.assertEqual(Line.bezier_interpolate(cubic, 1.0), cubic[3])
        with self.assertRaises(InvalidArgument):
            Line.bezier_interpolate([p0], 0.5)
        with self.assertRaises(InvalidArgument):
            Line.bezier_interpolate(cubic + [Point(2, 2)], 0.5)

    def test_line_to_shapely(self):
        shp = self.seg.to_shapely()
        self.assertAlmostEqual(shp.length, 5.0)
