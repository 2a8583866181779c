"""Last-write-wins merging for tag and field maps."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import TypeVar

__all__ = ["merge_into"]

V = TypeVar("V")


def merge_into(dst: MutableMapping[str, V], src: Mapping[str, V]) -> MutableMapping[str, V]:
    """Copy every entry of ``src`` into ``dst``, overwriting existing keys.

    Nothing is removed from ``dst``.  The same rule is used for tags and for
    fields, so merge order alone decides which value survives.

    Returns:
        ``dst`` itself, mutated in place.
    """
    for key, value in src.items():
        dst[key] = value
    return dst
