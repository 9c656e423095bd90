from .geomobject import SerializableBase, GeometryObject

__all__ = [
    "SerializableBase",
    "GeometryObject",
]
