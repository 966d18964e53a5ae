"""Shared mutable containers: Array and Map.

Both wrap a Python container that every holder of the value aliases, so an
in-place update through one binding is visible through all the others. Python's
own reference counting reclaims the cell once nothing refers to it.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from tailscheme import SchemeValue


class Array:
    """Growable, indexable sequence of values with shared ownership."""

    __slots__ = ("items",)

    def __init__(self, items: Iterable[SchemeValue] | None = None):
        self.items: list[SchemeValue] = list(items) if items is not None else []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[SchemeValue]:
        return iter(self.items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        from tailscheme.types.values import equal
        return equal(self, other)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        from tailscheme.types.values import to_string
        return to_string(self)


class Map:
    """Mutable mapping from text keys to values with shared ownership."""

    __slots__ = ("entries",)

    def __init__(self, entries: Mapping[str, SchemeValue] | None = None):
        self.entries: dict[str, SchemeValue] = dict(entries) if entries is not None else {}

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        from tailscheme.types.values import equal
        return equal(self, other)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        from tailscheme.types.values import to_string
        return to_string(self)
