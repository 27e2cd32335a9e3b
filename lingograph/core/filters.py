"""
Extraction filters.

A FilterSpec says which addresses may be extracted. Patterns are addresses
without indices (`Employee.Orders.Name` matches `Employee.Orders[3].Name`)
and are compared case-insensitively.

Eligibility is checked at every node of the walk, not just at text leaves,
so an ineligible container prunes everything below it. That is why include
patterns are expanded with their ancestors before a walk: `Manager.Description`
is unreachable unless `Manager` itself is eligible.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from lingograph.core.paths import relative_to, strip_indices


def _normalize(pattern: str) -> str:
    return strip_indices(pattern).strip().lower()


def parent_patterns(pattern: str) -> list[str]:
    """
    Proper prefixes of a multi-segment pattern.

    Example:
        parent_patterns("A.B.C")  # -> ["A", "A.B"]
    """
    parts = strip_indices(pattern).strip().split(".")
    return [".".join(parts[:end]) for end in range(1, len(parts))]


def expand_includes(include: Iterable[str]) -> tuple[str, ...]:
    """Add the ancestors of every include pattern, keeping first-seen order."""
    expanded: list[str] = []
    seen: set[str] = set()

    def add(pattern: str) -> None:
        key = _normalize(pattern)
        if key and key not in seen:
            seen.add(key)
            expanded.append(pattern.strip())

    patterns = list(include)
    for pattern in patterns:
        add(pattern)
    for pattern in patterns:
        for parent in parent_patterns(pattern):
            add(parent)
    return tuple(expanded)


class FilterSpec(BaseModel):
    """
    Include/exclude address patterns.

    Both empty means "extract everything". Exclude patterns match exactly
    and are never expanded.
    """

    model_config = ConfigDict(frozen=True)

    include: tuple[str, ...] = Field(default_factory=tuple)
    exclude: tuple[str, ...] = Field(default_factory=tuple)

    @classmethod
    def of(
        cls,
        include: Iterable[str] | None = None,
        exclude: Iterable[str] | None = None,
    ) -> FilterSpec:
        """Build a spec from optional lists, dropping blank patterns."""
        return cls(
            include=tuple(p for p in include or () if p and p.strip()),
            exclude=tuple(p for p in exclude or () if p and p.strip()),
        )

    @property
    def is_empty(self) -> bool:
        return not self.include and not self.exclude

    def expanded(self) -> FilterSpec:
        """The spec with ancestor prefixes added to the include patterns."""
        return FilterSpec(include=expand_includes(self.include), exclude=self.exclude)


def _relative_form(address: str, root_name: str | None) -> str | None:
    """
    Normalized root-relative form of an address, or None outside the root.

    Element addresses under a sequence or mapping root start with an index
    (`Staff[0].Description`), so the leading "." left after stripping it is
    dropped too. The root and its bare elements give "".
    """
    if not root_name:
        return None
    relative = relative_to(address, root_name)
    if relative is None:
        return None
    return _normalize(relative).lstrip(".")


def _matches(forms: set[str], patterns: Iterable[str]) -> bool:
    return any(_normalize(pattern) in forms for pattern in patterns)


def is_eligible(address: str, spec: FilterSpec, root_name: str | None = None) -> bool:
    """
    Decide whether an address may be visited.

    An address matches a pattern through its full form (`Employee.Name`)
    or, given the root name, its root-relative form (`Name`). The root
    node itself, and the elements of a sequence or mapping root, are only
    subject to exclusion.
    """
    if spec.is_empty:
        return True

    relative = _relative_form(address, root_name)
    forms = {_normalize(address)}
    if relative:
        forms.add(relative)

    if spec.exclude and _matches(forms, spec.exclude):
        return False

    if not spec.include:
        return True
    if relative == "":
        return True
    return _matches(forms, spec.include)
