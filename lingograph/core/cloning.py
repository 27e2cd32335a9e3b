"""
Deep copies of object graphs.

Translations are always written into a clone; the caller's graph is never
touched. `copy.deepcopy` is reentrant, so no lock is taken.
"""

from __future__ import annotations

import copy
from typing import Any, TypeVar

T = TypeVar("T")


class CloneError(Exception):
    """Raised when a graph cannot be copied."""
    pass


def clone(value: T) -> T:
    """
    Return an independent copy of `value`.

    Raises CloneError instead of falling back to the original, so callers
    can never end up writing into the caller's graph.
    """
    try:
        return copy.deepcopy(value)
    except Exception as e:
        raise CloneError(f"Cannot clone {type(value).__name__}: {e}") from e
