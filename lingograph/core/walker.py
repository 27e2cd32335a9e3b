"""
Graph walker - extracts translatable text from an object graph.

The walk is depth-first and pre-order. Each visited node gets an address
built top-down from the root name; text leaves that pass the filter are
collected into an ExtractionSet in visiting order.

Recursion through self-referential types (`Employee.manager: Employee`)
is stopped with an ancestor guard: the set of composite classes on the
current branch. The guard is branch-local, so siblings never see each
other's additions: sibling members of one class (`home` and `work`) are both
walked, where a guard list shared across the whole walk would skip the second.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from lingograph.core.filters import FilterSpec, is_eligible
from lingograph.core.introspection import (
    ValueKind,
    classify_type,
    classify_value,
    declared_class,
    holds_only_scalars,
    iter_members,
    read_member,
)
from lingograph.core.paths import join_index, join_member

logger = logging.getLogger(__name__)


class ExtractionSet:
    """
    Ordered, deduplicated address -> text mapping.

    The first value recorded for an address wins; empty text is ignored.
    """

    def __init__(self):
        self._items: dict[str, str] = {}

    def add(self, address: str, text: str | None) -> bool:
        """Record a text leaf. Returns whether it was added."""
        if not address or not text or address in self._items:
            return False
        self._items[address] = text
        return True

    def as_dict(self) -> dict[str, str]:
        return dict(self._items)

    def addresses(self) -> list[str]:
        return list(self._items)

    def __getitem__(self, address: str) -> str:
        return self._items[address]

    def __contains__(self, address: object) -> bool:
        return address in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"<ExtractionSet({len(self._items)} items)>"


class GraphWalker:
    """
    Walks a value and collects its eligible text leaves.

    Usage:
        walker = GraphWalker(FilterSpec.of(include=["Manager.Description"]).expanded())
        items = walker.extract(employee, "Employee")
        items.as_dict()  # {"Employee.Manager.Description": "..."}
    """

    def __init__(self, filter_spec: FilterSpec | None = None):
        self.filter_spec = filter_spec or FilterSpec()

    def extract(self, root: Any, root_name: str, declared_type: Any = None) -> ExtractionSet:
        """Walk `root` and return its extraction set."""
        items = ExtractionSet()
        if root is None or not root_name:
            return items
        self._visit(root, root_name, root_name, declared_type, frozenset(), items)
        logger.debug(f"Extracted {len(items)} text items from '{root_name}'")
        return items

    # =========================================================================
    # Traversal
    # =========================================================================

    def _visit(
        self,
        value: Any,
        address: str,
        root_name: str,
        declared_type: Any,
        guard: frozenset[type],
        items: ExtractionSet,
    ) -> None:
        if value is None:
            return
        if classify_type(declared_type) is ValueKind.SCALAR:
            return
        if not is_eligible(address, self.filter_spec, root_name):
            logger.debug(f"Pruned '{address}'")
            return

        kind = classify_value(value)

        if kind is ValueKind.TEXT:
            items.add(address, value)
        elif kind is ValueKind.SEQUENCE:
            self._visit_sequence(value, address, root_name, declared_type, guard, items)
        elif kind is ValueKind.MAPPING:
            self._visit_mapping(value, address, root_name, declared_type, guard, items)
        elif kind is ValueKind.COMPOSITE:
            self._visit_composite(value, address, root_name, guard, items)

    def _visit_sequence(
        self,
        value: Any,
        address: str,
        root_name: str,
        declared_type: Any,
        guard: frozenset[type],
        items: ExtractionSet,
    ) -> None:
        if holds_only_scalars(declared_type):
            return
        for position, element in enumerate(value):
            if element is not None:
                # Elements are classified by their runtime type.
                self._visit(
                    element, join_index(address, position), root_name, None, guard, items
                )

    def _visit_mapping(
        self,
        value: Mapping,
        address: str,
        root_name: str,
        declared_type: Any,
        guard: frozenset[type],
        items: ExtractionSet,
    ) -> None:
        if holds_only_scalars(declared_type):
            return
        for key, element in value.items():
            if element is not None:
                self._visit(
                    element, join_index(address, key), root_name, None, guard, items
                )

    def _visit_composite(
        self,
        value: Any,
        address: str,
        root_name: str,
        guard: frozenset[type],
        items: ExtractionSet,
    ) -> None:
        enclosing = type(value)

        for member in iter_members(value):
            if classify_type(member.declared_type) is ValueKind.SCALAR:
                continue

            member_value = read_member(value, member.name)
            if member_value is None:
                continue

            member_class = declared_class(member.declared_type) or type(member_value)
            member_address = join_member(address, member.name)

            if member_class in guard:
                logger.debug(f"Skipped '{member_address}': {member_class.__name__} is an ancestor")
                continue

            self._visit(
                member_value,
                member_address,
                root_name,
                member.declared_type,
                guard | {enclosing},
                items,
            )


def extract(root: Any, root_name: str, filter_spec: FilterSpec | None = None) -> ExtractionSet:
    """
    Extract translatable text from `root`.

    `filter_spec` is used as given; pass `spec.expanded()` to make deep
    include patterns reachable.
    """
    return GraphWalker(filter_spec).extract(root, root_name)
