"""geomkernel.errors - exception taxonomy
=========================================
Malformed construction fails loudly with one of the classes below.  Well-formed
input that merely has a degenerate geometric answer (parallel lines, too few
vertices, ...) never raises; those operations return ``0``, ``False`` or
``None`` instead.
"""

from __future__ import annotations

__all__ = [
    "GeometryError",
    "DomainError",
    "DivisionByZero",
    "InvalidArgument",
    "EmptyInput",
]


class GeometryError(Exception):
    """Common base for every error raised by geomkernel."""


class DomainError(GeometryError, ValueError):
    """A (near-)zero vector was normalized, or a direction was asked of a zero-length segment."""


class DivisionByZero(GeometryError, ZeroDivisionError):
    """A vector was divided by a scalar that is exactly zero."""


class InvalidArgument(GeometryError, ValueError):
    """Construction input does not describe a valid object (collinear points, zero normal, ...)."""


class EmptyInput(GeometryError, ValueError):
    """An operation needs at least one element but received none."""
