"""geomkernel - a small 2D/3D computational-geometry kernel.

Value types (:class:`Point`, :class:`Line`, :class:`Plane`, :class:`Polygon`),
their predicates, and the free-function layer in :mod:`geomkernel.utils`.
"""

from .errors import (
    GeometryError,
    DomainError,
    DivisionByZero,
    InvalidArgument,
    EmptyInput,
)
from .geometry import Point, Line, Plane, Polygon, dot_product, cross_product
from . import utils

__version__ = "0.1.0"

__all__ = [
    # Geometry
    "Point",
    "Line",
    "Plane",
    "Polygon",
    "dot_product",
    "cross_product",

    # Errors
    "GeometryError",
    "DomainError",
    "DivisionByZero",
    "InvalidArgument",
    "EmptyInput",

    "utils",
]
