"""
Runtime introspection of object graphs.

Every value met during a walk is classified into one of a closed set of
kinds (scalar, text, sequence, mapping, composite). Composites are
pydantic models, dataclasses and plain objects; their members are
enumerated together with their declared types so the walker can skip
members that can never hold text without reading them.

Nothing here is registered per type: everything comes from annotations,
pydantic field info, dataclass fields and instance dictionaries.
"""

from __future__ import annotations

import dataclasses
import logging
import types
import typing
from collections import abc
from dataclasses import dataclass
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from functools import lru_cache
from typing import Any, Iterator
from uuid import UUID

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ValueKind(str, Enum):
    """Kinds of values found in an object graph."""

    SCALAR = "scalar"        # Never translated, terminates the branch
    TEXT = "text"            # A string leaf
    SEQUENCE = "sequence"    # Integer-indexed (list, tuple)
    MAPPING = "mapping"      # Key-indexed (dict and other mappings)
    COMPOSITE = "composite"  # Named members (models, dataclasses, objects)


class IntrospectionError(Exception):
    """Raised when a member of a composite cannot be read."""
    pass


# Leaf types that are never translated. `datetime` is a `date` subclass.
SCALAR_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    date,
    time,
    timedelta,
    UUID,
    bytes,
    bytearray,
    set,
    frozenset,
)

_NON_COMPOSITE_TYPES: tuple[type, ...] = (
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
)

_UNION_ORIGINS = (typing.Union, types.UnionType)


@dataclass(frozen=True)
class Member:
    """A named member of a composite type."""

    name: str
    declared_type: Any = None  # None when the annotation is missing or unresolvable
    writable: bool = True


# =============================================================================
# Classification
# =============================================================================


def classify_value(value: Any) -> ValueKind:
    """Classify a runtime value."""
    if value is None or isinstance(value, Enum):
        return ValueKind.SCALAR
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, SCALAR_TYPES):
        return ValueKind.SCALAR
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, abc.Mapping):
        return ValueKind.MAPPING
    if is_composite(value):
        return ValueKind.COMPOSITE
    return ValueKind.SCALAR


def is_composite(value: Any) -> bool:
    """Whether a value has named members worth walking."""
    if isinstance(value, BaseModel):
        return True
    if isinstance(value, _NON_COMPOSITE_TYPES):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return hasattr(value, "__dict__")


def unwrap_optional(tp: Any) -> Any:
    """Strip `Optional[...]`, `X | None` and `Annotated[...]` wrappers."""
    while True:
        origin = typing.get_origin(tp)
        if origin is typing.Annotated:
            tp = typing.get_args(tp)[0]
            continue
        if origin in _UNION_ORIGINS:
            args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
            if len(args) == 1:
                tp = args[0]
                continue
        return tp


def declared_class(tp: Any) -> type | None:
    """The runtime class behind a declared type, if there is exactly one."""
    tp = unwrap_optional(tp)
    origin = typing.get_origin(tp)
    if origin in _UNION_ORIGINS or origin is typing.Literal:
        return None
    cls = origin or tp
    return cls if isinstance(cls, type) else None


def classify_type(tp: Any) -> ValueKind | None:
    """
    Classify a declared type.

    Returns None when the declaration doesn't determine the kind
    (`Any`, `object`, unions, type variables, missing annotations);
    callers then fall back to the runtime value.
    """
    if tp is None or tp is Any or tp is object:
        return None

    cls = declared_class(tp)
    if cls is None or cls is object:
        return None

    if issubclass(cls, Enum):
        return ValueKind.SCALAR
    if issubclass(cls, str):
        return ValueKind.TEXT
    if issubclass(cls, SCALAR_TYPES) or issubclass(cls, abc.Set):
        return ValueKind.SCALAR
    if issubclass(cls, abc.Mapping):
        return ValueKind.MAPPING
    if issubclass(cls, (list, tuple)) or issubclass(cls, abc.Sequence):
        return ValueKind.SEQUENCE
    if issubclass(cls, BaseModel) or dataclasses.is_dataclass(cls):
        return ValueKind.COMPOSITE
    if issubclass(cls, _NON_COMPOSITE_TYPES):
        return None
    if cls.__module__ in ("builtins", "typing", "collections.abc"):
        return None
    return ValueKind.COMPOSITE


def item_types(tp: Any) -> tuple[Any, ...]:
    """
    Declared element types of a sequence, or value types of a mapping.

    Empty when the declaration has no type arguments.
    """
    tp = unwrap_optional(tp)
    cls = declared_class(tp)
    args = typing.get_args(tp)
    if cls is None or not args:
        return ()
    if issubclass(cls, abc.Mapping):
        return (args[1],) if len(args) == 2 else ()
    if issubclass(cls, tuple):
        return tuple(arg for arg in args if arg is not Ellipsis)
    return args[:1]


def key_type(tp: Any) -> Any:
    """Declared key type of a mapping, or None."""
    tp = unwrap_optional(tp)
    args = typing.get_args(tp)
    return args[0] if len(args) == 2 else None


def holds_only_scalars(tp: Any) -> bool:
    """True when a container's declared items can never hold text."""
    declared = item_types(tp)
    return bool(declared) and all(
        classify_type(item) is ValueKind.SCALAR for item in declared
    )


# =============================================================================
# Members
# =============================================================================


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except Exception:
        # Unresolvable forward references leave the annotation undetermined.
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            for name, annotation in vars(klass).get("__annotations__", {}).items():
                hints[name] = None if isinstance(annotation, str) else annotation
        return hints


def _property_type(prop: property) -> Any:
    if prop.fget is None:
        return None
    try:
        return typing.get_type_hints(prop.fget).get("return")
    except Exception:
        return None


@lru_cache(maxsize=512)
def declared_members(cls: type) -> tuple[Member, ...]:
    """
    Members declared on a composite class, in declaration order.

    - pydantic models: `model_fields`
    - dataclasses: `dataclasses.fields`
    - other classes: public annotations plus public properties
    """
    if issubclass(cls, BaseModel):
        model_frozen = bool(cls.model_config.get("frozen", False))
        return tuple(
            Member(name, info.annotation, writable=not (model_frozen or info.frozen))
            for name, info in cls.model_fields.items()
        )

    hints = _type_hints(cls)

    if dataclasses.is_dataclass(cls):
        params = getattr(cls, "__dataclass_params__", None)
        frozen = bool(params and params.frozen)
        return tuple(
            Member(
                f.name,
                hints.get(f.name, None if isinstance(f.type, str) else f.type),
                writable=not frozen,
            )
            for f in dataclasses.fields(cls)
        )

    members: dict[str, Member] = {}
    for name, annotation in hints.items():
        if name.startswith("_") or typing.get_origin(annotation) is typing.ClassVar:
            continue
        members[name] = Member(name, annotation)

    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, property) and not name.startswith("_"):
                members[name] = Member(
                    name, _property_type(attr), writable=attr.fset is not None
                )

    return tuple(members.values())


def iter_members(obj: Any) -> Iterator[Member]:
    """
    Members of a composite instance.

    Declared members come first; plain objects also yield public instance
    attributes that have no annotation.
    """
    declared = declared_members(type(obj))
    yield from declared

    if isinstance(obj, BaseModel) or dataclasses.is_dataclass(obj):
        return

    seen = {member.name for member in declared}
    for name in list(getattr(obj, "__dict__", {})):
        if name not in seen and not name.startswith("_"):
            yield Member(name)


def find_member(obj: Any, name: str) -> Member | None:
    """Look up a member of a composite instance by exact name."""
    for member in iter_members(obj):
        if member.name == name:
            return member
    return None


def read_member(obj: Any, name: str) -> Any:
    """
    Read a member value.

    A missing attribute reads as None; any other failure raised while
    reading (a property that blows up) is an IntrospectionError.
    """
    try:
        return getattr(obj, name)
    except AttributeError:
        return None
    except Exception as e:
        raise IntrospectionError(
            f"Cannot read member '{name}' of {type(obj).__name__}: {e}"
        ) from e
