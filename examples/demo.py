# demo.py: prints sample computations for every geometry type and helper
import logging
import math

from geomkernel.config import LOG_LEVEL
from geomkernel import Point, Line, Plane, Polygon, dot_product, cross_product
from geomkernel.utils import (
    distance,
    intersection,
    triangle_area,
    tetrahedron_volume,
    angle_between,
    are_coplanar,
    convex_hull_2d,
    radians_to_degrees,
)

LOGGER = logging.getLogger("geomkernel.demo")


# ----------------------------- output helpers -----------------------------

def section(title: str) -> None:
    print("\n" + "-" * 50)
    print(f"  {title}")
    print("-" * 50)


def show(label: str, value) -> None:
    print(f"{label} = {value}")


# ----------------------------- demos -----------------------------

def demo_points() -> None:
    section("Points")
    p1 = Point(1.0, 2.0, 3.0)
    p2 = Point(4.0, 5.0, 6.0)
    show("p1", p1)
    show("p2", p2)
    show("p1 + p2", p1 + p2)
    show("p2 - p1", p2 - p1)
    show("p1 * 2.5", p1 * 2.5)
    show("p2 / 2.0", p2 / 2.0)
    show("|p1|", p1.magnitude())
    show("p1 normalized", p1.normalized())
    show("distance p1-p2", p1.distance_to(p2))
    show("p1 . p2", dot_product(p1, p2))
    show("p1 x p2", cross_product(p1, p2))


def demo_lines() -> None:
    section("Lines")
    line1 = Line(Point(0, 0, 0), Point(3, 4, 0))
    line2 = Line(Point(1, 1, 0), Point(4, 2, 0))
    test_point = Point(1, 2, 0)
    show("line1", line1)
    show("line2", line2)
    show("length", line1.length())
    show("direction", line1.direction())
    show("midpoint", line1.midpoint())
    show("distance to test point", line1.distance_to(test_point))
    show("projection of test point", line1.project(test_point))
    show("reflection of test point", line1.reflect(test_point))
    show("line1 intersects line2", line1.intersects(line2))
    angle = line1.angle_with(line2)
    show("angle (rad)", angle)
    show("angle (deg)", radians_to_degrees(angle))

    controls = [Point(0, 0, 0), Point(1, 2, 0), Point(2, 0, 0)]
    for t in (0.0, 0.25, 0.5, 0.75, 1.0):
        show(f"quadratic bezier t={t}", Line.bezier_interpolate(controls, t))


def demo_planes() -> None:
    section("Planes")
    plane = Plane.from_points(Point(0, 0, 0), Point(1, 0, 0), Point(0, 1, 0))
    other = Plane(Point(1, 1, 1), Point(0, 0, 1))
    test_point = Point(1, 2, 3)
    segment = Line(Point(1, 1, -1), Point(1, 1, 3))
    show("plane", plane)
    show("coefficients", plane.coefficients())
    show("distance to test point", plane.distance_to(test_point))
    show("signed distance", plane.signed_distance_to(test_point))
    show("projection", plane.project(test_point))
    show("reflection", plane.reflect(test_point))
    show("intersects segment", plane.intersects(segment))
    show("intersection with segment", plane.intersection_with(segment))
    show("dihedral angle (deg)", radians_to_degrees(plane.angle_with(other)))
    show("plane/plane intersection", intersection(plane, other))


def demo_polygons() -> None:
    section("Polygons")
    square = Polygon([Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)])
    show("square", square)
    show("area", square.area())
    show("perimeter", square.perimeter())
    show("centroid", square.centroid())
    show("convex", square.is_convex())
    for p in (Point(1, 1), Point(3, 3), Point(2, 1)):
        show(f"contains {p}", square.contains_point(p))
    show("bounding box", tuple(str(p) for p in square.bounding_box()))

    cloud = [Point(3, 1), Point(1, 1), Point(2, 2), Point(2, 3), Point(3, 3), Point(4, 2)]
    show("hull", convex_hull_2d(cloud))

    shifted = Polygon([p + Point(1, 1) for p in square])
    show("square intersects shifted copy", square.intersects(shifted))


def demo_utils() -> None:
    section("Utilities")
    a, b, c, d = Point(0, 0, 0), Point(1, 0, 0), Point(0, 1, 0), Point(0, 0, 1)
    show("triangle area", triangle_area(a, b, c))
    show("tetrahedron volume", tetrahedron_volume(a, b, c, d))
    show("coplanar a,b,c,d", are_coplanar(a, b, c, d))
    show("angle x/y (deg)", radians_to_degrees(angle_between(b, c)))
    skew1 = Line(Point(0, 0, 0), Point(1, 0, 0))
    skew2 = Line(Point(0, 0, 1), Point(0, 1, 1))
    show("skew line distance", distance(skew1, skew2))
    planes = [Plane.from_coefficients(1, 0, 0, 0),
              Plane.from_coefficients(0, 1, 0, 0),
              Plane.from_coefficients(0, 0, 1, 0)]
    show("three-plane intersection", intersection(*planes))
    show("pi/2 in degrees", radians_to_degrees(math.pi / 2))


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    LOGGER.info("Running geometry demo")
    demo_points()
    demo_lines()
    demo_planes()
    demo_polygons()
    demo_utils()


if __name__ == "__main__":
    main()
