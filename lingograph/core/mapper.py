"""
Result mapper - writes translated text back into a cloned graph.

Each translated pair carries the address it was extracted from. The mapper
strips the root name, descends the clone segment by segment and assigns the
text at the final member or element, converting it to the declared type of
the slot it lands in.

An address that no longer resolves (missing member, missing key, index out
of range, read-only member, immutable container) is skipped on its own;
the other pairs still apply. A value that cannot be converted to its slot's
type raises MappingError.
"""

from __future__ import annotations

import logging
from collections import abc
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from fractions import Fraction
from typing import Any, Callable
from uuid import UUID

from lingograph.core.introspection import (
    declared_class,
    find_member,
    is_composite,
    item_types,
    key_type,
)
from lingograph.core.paths import (
    AddressError,
    Segment,
    format_key,
    parse_address,
    relative_to,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class MappingError(Exception):
    """Raised when a translated value cannot be written back."""
    pass


class UnresolvedAddress(Exception):
    """Raised when an address doesn't lead anywhere in the clone."""
    pass


@dataclass(frozen=True)
class Cursor:
    """A value reached while descending an address, with its declared type."""

    value: Any
    declared_type: Any = None


# =============================================================================
# Coercion
# =============================================================================


_TRUE_WORDS = {"true", "1", "yes"}
_FALSE_WORDS = {"false", "0", "no"}


def _to_bool(text: str) -> bool:
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"'{text}' is not a boolean")


def coerce_text(text: Any, target: Any) -> Any:
    """
    Convert a translated string to a target type.

    Undetermined targets and string types keep the text as it is.
    """
    cls = declared_class(target)
    if cls is None or cls is object or isinstance(text, cls):
        return text

    try:
        if issubclass(cls, Enum):
            return cls(text)
        if cls is bool:
            return _to_bool(text)
        if issubclass(cls, str):
            return cls(text)
        if issubclass(cls, (datetime, date, time)):
            return cls.fromisoformat(text.strip())
        if issubclass(cls, (int, float, complex, Decimal, Fraction, UUID)):
            return cls(text.strip())
    except (ValueError, TypeError, ArithmeticError, InvalidOperation) as e:
        raise MappingError(f"Cannot convert '{text}' to {cls.__name__}: {e}") from e

    raise MappingError(f"Cannot convert text to {cls.__name__}")


def _to_position(token: str) -> int:
    position = int(token)
    if position < 0:
        raise ValueError(f"Negative index '{token}'")
    return position


# Sequence index lookups, tried in order: position, string, ISO datetime.
# Tokens are already strings, so the string attempt doubles as the raw one.
INDEX_COERCIONS: tuple[Callable[[str], Any], ...] = (
    _to_position,
    str,
    datetime.fromisoformat,
)


# =============================================================================
# Descent
# =============================================================================


def resolve_key(mapping: Mapping, token: str, declared_key: Any = None) -> Any:
    """Find the key of `mapping` that an index token refers to."""
    if declared_key is not None:
        try:
            key = coerce_text(token, declared_key)
        except MappingError:
            key = _MISSING
        if key is not _MISSING and key in mapping:
            return key

    if token in mapping:
        return token

    for key in mapping:
        if format_key(key) == token:
            return key

    raise UnresolvedAddress(f"No key '{token}'")


def load_member(cursor: Cursor, name: str) -> Cursor:
    """Read a named member from the cursor's value."""
    if not name:
        return cursor

    value = cursor.value
    if value is None or not is_composite(value):
        raise UnresolvedAddress(f"Cannot read '{name}' from {type(value).__name__}")

    loaded = getattr(value, name, _MISSING)
    if loaded is _MISSING:
        raise UnresolvedAddress(f"No member '{name}' on {type(value).__name__}")

    member = find_member(value, name)
    return Cursor(loaded, member.declared_type if member else None)


def load_item(cursor: Cursor, token: str) -> Cursor:
    """Resolve an index token against a mapping or sequence cursor."""
    container = cursor.value
    declared = item_types(cursor.declared_type)
    declared_item = declared[0] if len(declared) == 1 else None

    if isinstance(container, Mapping):
        key = resolve_key(container, token, key_type(cursor.declared_type))
        return Cursor(container[key], declared_item)

    if container is None or not hasattr(container, "__getitem__"):
        raise UnresolvedAddress(f"{type(container).__name__} is not indexable")

    for coerce in INDEX_COERCIONS:
        try:
            return Cursor(container[coerce(token)], declared_item)
        except (ValueError, TypeError, KeyError, IndexError):
            continue

    raise UnresolvedAddress(f"No element '{token}' in {type(container).__name__}")


def descend(cursor: Cursor, segment: Segment) -> Cursor:
    """
    Follow one segment: load the member, then resolve each index in turn.

    Pure: returns a new cursor and never touches the graph.
    """
    cursor = load_member(cursor, segment.name)
    for token in segment.indices:
        cursor = load_item(cursor, token)
    return cursor


# =============================================================================
# Assignment
# =============================================================================


def set_member(owner: Any, name: str, text: str) -> None:
    """Assign text to a named member, converted to its declared type."""
    if owner is None or not is_composite(owner):
        raise UnresolvedAddress(f"Cannot set '{name}' on {type(owner).__name__}")

    member = find_member(owner, name)
    current = getattr(owner, name, _MISSING)
    if member is None and current is _MISSING:
        raise UnresolvedAddress(f"No member '{name}' on {type(owner).__name__}")
    if member is not None and not member.writable:
        raise UnresolvedAddress(f"Member '{name}' of {type(owner).__name__} is read-only")

    target = member.declared_type if member else None
    if declared_class(target) is None and current not in (_MISSING, None):
        target = type(current)

    value = coerce_text(text, target)
    try:
        setattr(owner, name, value)
    except AttributeError as e:
        raise UnresolvedAddress(f"Member '{name}' of {type(owner).__name__} is read-only") from e
    except ValueError as e:
        raise MappingError(f"Rejected value for '{name}': {e}") from e


def set_item(cursor: Cursor, token: str, text: str) -> None:
    """Assign text to an existing element of a mapping or list."""
    container = cursor.value
    declared = item_types(cursor.declared_type)
    declared_item = declared[0] if len(declared) == 1 else None

    if isinstance(container, abc.MutableMapping):
        key = resolve_key(container, token, key_type(cursor.declared_type))
        target = declared_item
        if declared_class(target) is None and container[key] is not None:
            target = type(container[key])
        container[key] = coerce_text(text, target)
        return

    if isinstance(container, abc.MutableSequence):
        try:
            position = _to_position(token)
        except ValueError as e:
            raise UnresolvedAddress(f"'{token}' is not a position") from e
        if position >= len(container):
            raise UnresolvedAddress(f"Index {position} out of range")
        target = declared_item
        if declared_class(target) is None and container[position] is not None:
            target = type(container[position])
        container[position] = coerce_text(text, target)
        return

    raise UnresolvedAddress(f"{type(container).__name__} cannot be updated in place")


def assign(cursor: Cursor, segment: Segment, text: str) -> None:
    """Write text at the last segment of an address."""
    if not segment.indices:
        set_member(cursor.value, segment.name, text)
        return

    owner = load_member(cursor, segment.name)
    for token in segment.indices[:-1]:
        owner = load_item(owner, token)
    set_item(owner, segment.indices[-1], text)


# =============================================================================
# Mapper
# =============================================================================


class ResultMapper:
    """
    Applies translated pairs to a cloned graph.

    Usage:
        mapper = ResultMapper("Employee")
        clone = mapper.apply(clone, {"Employee.Orders[2].Name": "Commande"})
    """

    def __init__(self, root_name: str, root_type: Any = None):
        self.root_name = root_name
        self.root_type = root_type

    def apply(
        self,
        root: Any,
        translations: Mapping[str, str] | Iterable[tuple[str, str]],
    ) -> Any:
        """Write every pair into `root` and return the (possibly replaced) root."""
        pairs = translations.items() if isinstance(translations, Mapping) else translations
        applied = 0

        for address, text in pairs:
            try:
                root = self.apply_one(root, address, text)
                applied += 1
            except (UnresolvedAddress, AddressError) as e:
                logger.debug(f"Skipped '{address}': {e}")

        logger.debug(f"Applied {applied} translations to '{self.root_name}'")
        return root

    def apply_one(self, root: Any, address: str, text: str) -> Any:
        remainder = relative_to(address, self.root_name)
        if remainder is None:
            raise UnresolvedAddress(f"Not under root '{self.root_name}'")

        if remainder == "":
            target = self.root_type if declared_class(self.root_type) else type(root)
            return coerce_text(text, target)

        segments = parse_address(remainder)
        cursor = Cursor(root, self.root_type)
        for segment in segments[:-1]:
            cursor = descend(cursor, segment)
        assign(cursor, segments[-1], text)
        return root


def apply(
    root: Any,
    root_name: str,
    translations: Mapping[str, str] | Iterable[tuple[str, str]],
) -> Any:
    """Write translated pairs into `root` (a clone) and return it."""
    return ResultMapper(root_name).apply(root, translations)
