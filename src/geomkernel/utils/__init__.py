"""
Expose the cross-type geometry helpers as a small utility module.
"""

from __future__ import annotations

from .geomutils import (
    distance,
    intersection,
    is_point_on_line,
    is_point_on_plane,
    are_collinear,
    are_coplanar,
    triangle_area,
    tetrahedron_volume,
    angle_between,
    convex_hull_2d,
    radians_to_degrees,
    degrees_to_radians,
)

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
