from __future__ import annotations
import sys


class Symbol:
    """An identifier. Symbols are data too: `'x` evaluates to Symbol("x").

    The empty symbol is what the reader hands back for blank input; it never
    names a binding and evaluates to Nil.
    """

    __slots__ = ("id",)

    def __init__(self, name: str):
        # Interned so equal names share one string and compare by identity
        self.id = sys.intern(name)

    @property
    def is_blank(self) -> bool:
        return not self.id

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.id is other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Symbol({self.id!r})"

    def __str__(self) -> str:
        return self.id
