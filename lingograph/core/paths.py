"""
Path addresses - textual locations of values inside an object graph.

An address is a dot-separated list of segments. Each segment is a member
name followed by zero or more bracketed indices:

    Employee.Description
    Employee.Orders[3].Items[gift.wrap].Name

Indices are sequence positions or mapping keys. A dot inside brackets belongs
to the index token, so mapping keys may themselves be dotted strings.

Addresses are the only link between extraction and remapping: nothing else
survives the round trip to the translation service.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


_INDEX_PATTERN = re.compile(r"\[[^\]]*\]")


class AddressError(Exception):
    """Raised when an address cannot be parsed."""
    pass


@dataclass(frozen=True)
class Segment:
    """One parsed address segment: a member name plus its index tokens."""

    name: str
    indices: tuple[str, ...] = ()

    @property
    def is_indexed(self) -> bool:
        return bool(self.indices)

    def __str__(self) -> str:
        return self.name + "".join(f"[{index}]" for index in self.indices)


# =============================================================================
# Composing
# =============================================================================


def format_key(key: Any) -> str:
    """Render a mapping key or sequence position in its natural string form."""
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def join_member(base: str, name: str) -> str:
    """`Employee` + `Name` -> `Employee.Name`."""
    return f"{base}.{name}" if base else name


def join_index(base: str, key: Any) -> str:
    """`Employee.Orders` + 3 -> `Employee.Orders[3]`."""
    return f"{base}[{format_key(key)}]"


# =============================================================================
# Parsing
# =============================================================================


def split_address(address: str) -> list[str]:
    """
    Split an address on the dots that are not inside brackets.

    Example:
        split_address("Orders[2].Tags[a.b].Name")
        # -> ["Orders[2]", "Tags[a.b]", "Name"]
    """
    parts: list[str] = []
    current: list[str] = []
    in_brackets = False

    for char in address:
        if char == "[":
            in_brackets = True
        elif char == "]":
            in_brackets = False

        if char == "." and not in_brackets:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)

    parts.append("".join(current))
    return parts


def parse_segment(raw: str) -> Segment:
    """Parse `Items[3][key]` into `Segment("Items", ("3", "key"))`."""
    bracket = raw.find("[")
    if bracket < 0:
        if "]" in raw:
            raise AddressError(f"Unbalanced ']' in segment '{raw}'")
        return Segment(raw)

    name = raw[:bracket]
    if "]" in name:
        raise AddressError(f"Unbalanced ']' in segment '{raw}'")

    indices: list[str] = []
    position = bracket
    while position < len(raw):
        if raw[position] != "[":
            raise AddressError(f"Unexpected text after index in segment '{raw}'")
        end = raw.find("]", position)
        if end < 0:
            raise AddressError(f"Unclosed '[' in segment '{raw}'")
        indices.append(raw[position + 1:end])
        position = end + 1

    return Segment(name, tuple(indices))


def parse_address(address: str) -> list[Segment]:
    """
    Parse an address (or the root-relative remainder of one) into segments.

    Only the first segment may have an empty name, and only when it carries
    indices: `[2].Name` addresses element 2 of the current value.
    """
    if not address:
        return []

    segments = [parse_segment(raw) for raw in split_address(address)]
    for position, segment in enumerate(segments):
        if segment.name:
            continue
        if position == 0 and segment.indices:
            continue
        raise AddressError(f"Empty segment in address '{address}'")
    return segments


def strip_indices(address: str) -> str:
    """`Employee.Orders[3].Name` -> `Employee.Orders.Name`."""
    return _INDEX_PATTERN.sub("", address)


def relative_to(address: str, root_name: str) -> str | None:
    """
    Strip the leading root name from an address.

    Returns "" for the root itself, the remainder for descendants
    (`Name`, `[2].Name`), or None when the address is not under the root.
    """
    if address == root_name:
        return ""
    if address.startswith(f"{root_name}."):
        return address[len(root_name) + 1:]
    if address.startswith(f"{root_name}["):
        return address[len(root_name):]
    return None
