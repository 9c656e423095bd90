from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Tuple, Type, TypeVar
import copy as _py_copy
import inspect
import json

from ..errors import InvalidArgument

T = TypeVar("T", bound="SerializableBase")

TYPE_KEY = "__type__"
VERSION_KEY = "__version__"


# ############################## Meta #################################
class SerializableMeta(type):
    """
    Collects the @property names of every geometry class into
    ``__serialize_fields__`` and registers the class under its dotted name so
    that tagged dictionaries can be revived without knowing their type up front.
    """
    registry: Dict[str, type] = {}

    def __new__(mcs, name: str, bases: Tuple[type, ...], dct: Dict[str, Any]) -> SerializableMeta:
        cls = super().__new__(mcs, name, bases, dct)
        if "__serialize_fields__" not in dct:
            discovered: List[str] = []
            for klass in inspect.getmro(cls):
                if klass is object:
                    break
                discovered.extend(attr for attr, member in klass.__dict__.items() if isinstance(member, property))
            # first occurrence wins
            setattr(cls, "__serialize_fields__", list(dict.fromkeys(discovered)))
        mcs.registry[f"{cls.__module__}.{cls.__name__}"] = cls
        return cls  # type: ignore[return-value]


def _encode(value: Any) -> Any:
    if isinstance(value, SerializableBase):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    return value


def _decode(value: Any) -> Any:
    if isinstance(value, dict) and TYPE_KEY in value:
        return SerializableBase.from_dict(value)
    if isinstance(value, list):
        return [_decode(item) for item in value]
    return value


# ########################### Serializable ############################
class SerializableBase(metaclass=SerializableMeta):
    """
    Dictionary / JSON round trip for geometry value objects.

    ``to_dict`` writes every field in ``__serialize_fields__`` plus a
    ``__type__`` / ``__version__`` envelope.  ``from_dict`` feeds the fields
    back through the constructor, reviving nested tagged dictionaries first.
    Calling it on a base class dispatches on the ``__type__`` tag.
    """
    __slots__: Tuple[str, ...] = tuple()
    _SERIAL_VERSION: int = 1
    __serialize_fields__: ClassVar[List[str]]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {k: _encode(getattr(self, k)) for k in self.__serialize_fields__}
        out[TYPE_KEY] = f"{self.__class__.__module__}.{self.__class__.__name__}"
        out[VERSION_KEY] = self._SERIAL_VERSION
        return out

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        target = cls
        tag = data.get(TYPE_KEY)
        if tag is not None:
            target = SerializableMeta.registry.get(tag)
            if target is None or not issubclass(target, cls):
                raise InvalidArgument(f"Cannot build {cls.__name__} from a '{tag}' record.")
        if not target.__serialize_fields__:
            raise InvalidArgument(f"{target.__name__} has no fields; the record needs a concrete __type__ tag.")
        version = data.get(VERSION_KEY, target._SERIAL_VERSION)
        if version > target._SERIAL_VERSION:
            raise InvalidArgument(
                f"{target.__name__} record version {version} is newer than supported ({target._SERIAL_VERSION})."
            )

        kwargs = {k: _decode(v) for k, v in data.items() if not k.startswith("__")}
        return target(**kwargs)  # type: ignore[call-arg]

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls: Type[T], s: str) -> T:
        return cls.from_dict(json.loads(s))


class GeometryObject(SerializableBase):
    """
    Common base for all geometry value types.
    Instances carry no identity beyond their coordinates; `copy` exists so that
    callers can take an independent snapshot of mutable aggregates (Polygon).
    """
    __slots__: Tuple[str, ...] = tuple()

    def copy(self: T, *, deep: bool = True) -> T:
        """Return a copy of this object; deep by default."""
        return _py_copy.deepcopy(self) if deep else _py_copy.copy(self)
