"""
Core module - the extraction and remapping engine.

This module contains:
- paths: address parsing and composition
- introspection: value kinds and composite members
- filters: include/exclude eligibility
- walker: text extraction into an ExtractionSet
- mapper: writing translated text back by address
- cloning: deep copies
"""

from lingograph.core.paths import (
    AddressError,
    Segment,
    format_key,
    join_index,
    join_member,
    parse_address,
    relative_to,
    split_address,
    strip_indices,
)

from lingograph.core.introspection import (
    IntrospectionError,
    Member,
    ValueKind,
    classify_type,
    classify_value,
    iter_members,
)

from lingograph.core.filters import (
    FilterSpec,
    expand_includes,
    is_eligible,
)

from lingograph.core.walker import (
    ExtractionSet,
    GraphWalker,
    extract,
)

from lingograph.core.mapper import (
    Cursor,
    MappingError,
    ResultMapper,
    apply,
    descend,
)

from lingograph.core.cloning import (
    CloneError,
    clone,
)

__all__ = [
    # Paths
    "AddressError",
    "Segment",
    "format_key",
    "join_index",
    "join_member",
    "parse_address",
    "relative_to",
    "split_address",
    "strip_indices",
    # Introspection
    "IntrospectionError",
    "Member",
    "ValueKind",
    "classify_type",
    "classify_value",
    "iter_members",
    # Filters
    "FilterSpec",
    "expand_includes",
    "is_eligible",
    # Extraction
    "ExtractionSet",
    "GraphWalker",
    "extract",
    # Remapping
    "Cursor",
    "MappingError",
    "ResultMapper",
    "apply",
    "descend",
    # Cloning
    "CloneError",
    "clone",
]
