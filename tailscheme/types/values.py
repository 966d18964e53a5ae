"""Contracts shared by every value: type labels, printing, equality and truth.

Booleans are Python ``bool`` and integers are Python ``int``. Because ``bool``
subclasses ``int``, every check here tests for ``bool`` first.
"""

from __future__ import annotations

from io import StringIO

from tailscheme import SchemeValue
from tailscheme.errors import SchemeRuntimeError, SchemeTypeError
from tailscheme.types.nil import NilType
from tailscheme.types.symbol import Symbol
from tailscheme.types.containers import Array, Map
from tailscheme.types.procedure import Closure, Builtin

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


def is_integer(value: SchemeValue) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_procedure(value: SchemeValue) -> bool:
    return isinstance(value, (Closure, Builtin))


def is_true(value: SchemeValue) -> bool:
    """Only the boolean #f is false; Nil, 0 and the empty list are all true."""
    return value is not False


def type_name(value: SchemeValue) -> str:
    """Stable lowercase label used in every type-mismatch fault."""
    match value:
        case bool():
            return "boolean"
        case int():
            return "integer"
        case Symbol():
            return "symbol"
        case str():
            return "string"
        case NilType():
            return "nil"
        case list():
            return "list"
        case Array():
            return "array"
        case Map():
            return "map"
        case Closure() | Builtin():
            return "procedure"
    return type(value).__name__


def type_error(expected: str, found: SchemeValue) -> SchemeTypeError:
    return SchemeTypeError(expected, type_name(found))


def check_int(value: int) -> int:
    """Keep integer results inside the signed 64-bit range."""
    if value < INT_MIN or value > INT_MAX:
        raise SchemeRuntimeError("Integer overflow")
    return value


def _write(value: SchemeValue, buffer: StringIO, quote_strings: bool) -> None:
    match value:
        case bool():
            buffer.write("#t" if value else "#f")
        case int():
            buffer.write(str(value))
        case Symbol():
            buffer.write(value.id)
        case str():
            buffer.write(f'"{value}"' if quote_strings else value)
        case NilType():
            buffer.write("()")
        case list():
            buffer.write("(")
            for i, item in enumerate(value):
                if i:
                    buffer.write(" ")
                _write(item, buffer, True)
            buffer.write(")")
        case Array():
            buffer.write("[")
            for i, item in enumerate(value.items):
                if i:
                    buffer.write(", ")
                _write(item, buffer, True)
            buffer.write("]")
        case Map():
            buffer.write("{")
            for i, (k, v) in enumerate(value.entries.items()):
                if i:
                    buffer.write(", ")
                buffer.write(f"{k}: ")
                _write(v, buffer, True)
            buffer.write("}")
        case _:
            # Closures and builtins print an opaque tag, never their body
            buffer.write(repr(value))


def _render(value: SchemeValue, quote_strings: bool) -> str:
    with StringIO() as buffer:
        try:
            _write(value, buffer, quote_strings)
        except RecursionError:
            # An array or map that contains itself has no finite printed form
            raise SchemeRuntimeError("Value is nested too deeply to print") from None
        return buffer.getvalue()


def to_string(value: SchemeValue) -> str:
    """Printed form of a value, as the REPL shows it."""
    return _render(value, True)


def display_string(value: SchemeValue) -> str:
    """Like to_string, but a top-level string is written without quotes."""
    return _render(value, False)


def equal(a: SchemeValue, b: SchemeValue) -> bool:
    """Structural equality (equal?).

    Lists compare element-wise; arrays and maps are equal when they are the
    same cell or hold equal contents; closures and builtins only by identity.
    """
    if a is b:
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        # `a is b` already covered two equal booleans
        return False
    match a:
        case int():
            return is_integer(b) and a == b
        case Symbol():
            return isinstance(b, Symbol) and a.id == b.id
        case str():
            return isinstance(b, str) and a == b
        case NilType():
            return isinstance(b, NilType)
        case list():
            return isinstance(b, list) and _equal_seq(a, b)
        case Array():
            return isinstance(b, Array) and _equal_seq(a.items, b.items)
        case Map():
            if not isinstance(b, Map) or len(a.entries) != len(b.entries):
                return False
            for k, v in a.entries.items():
                if k not in b.entries or not equal(v, b.entries[k]):
                    return False
            return True
    return False


def _equal_seq(xs: list[SchemeValue], ys: list[SchemeValue]) -> bool:
    if len(xs) != len(ys):
        return False
    return all(equal(x, y) for x, y in zip(xs, ys))
