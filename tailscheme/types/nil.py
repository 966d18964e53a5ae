from __future__ import annotations


class NilType:
    def __repr__(self): return "()"
    def __bool__(self): return False

    # Nil is equal only to Nil (not to the empty list)
    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)


Nil = NilType()
