"""Built-in procedures for the tailscheme runtime environment.

This module defines integer arithmetic, comparison, list processing,
predicates, arrays, maps, output and `eval`, plus the registration helper that
binds them into a global environment. Every builtin takes the caller's
environment and the already-evaluated argument list.
"""
from __future__ import annotations

import logging

from tailscheme import SchemeValue
from tailscheme.errors import SchemeArityError, SchemeRuntimeError
from tailscheme.types.containers import Array, Map
from tailscheme.types.environment import Environment
from tailscheme.types.nil import Nil
from tailscheme.types.procedure import Builtin, BuiltinFn
from tailscheme.types.symbol import Symbol
from tailscheme.types.values import (
    check_int,
    display_string,
    equal,
    is_integer,
    is_procedure,
    type_error,
)
from tailscheme.evaluation.evaluator import evaluate

logger = logging.getLogger(__name__)


# -------------------------------
# Argument checking
# -------------------------------
def check_arity(args: list[SchemeValue], expected: int) -> None:
    if len(args) != expected:
        raise SchemeArityError(str(expected), len(args))


def check_arity_range(args: list[SchemeValue], low: int, high: int) -> None:
    if len(args) < low or len(args) > high:
        raise SchemeArityError(f"between {low} and {high}", len(args))


def check_min_arity(args: list[SchemeValue], minimum: int) -> None:
    if len(args) < minimum:
        raise SchemeArityError(f"at least {minimum}", len(args))


def expect_int(value: SchemeValue) -> int:
    if not is_integer(value):
        raise type_error("integer", value)
    return value


def expect_array(value: SchemeValue) -> Array:
    if not isinstance(value, Array):
        raise type_error("array", value)
    return value


def expect_map(value: SchemeValue) -> Map:
    if not isinstance(value, Map):
        raise type_error("map", value)
    return value


def map_key(value: SchemeValue) -> str:
    """Map keys are text; both symbols and strings name a key."""
    if isinstance(value, Symbol):
        return value.id
    if isinstance(value, str):
        return value
    raise type_error("symbol or string", value)


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[SchemeValue]) -> int:
    """Return the sum of all arguments; 0 with none."""
    total = 0
    for x in args:
        total = check_int(total + expect_int(x))
    return total


def sub(env: Environment, args: list[SchemeValue]) -> int:
    """Subtract all subsequent integers from the first; unary negation for one arg."""
    check_min_arity(args, 1)
    first = expect_int(args[0])
    if len(args) == 1:
        return check_int(-first)
    result = first
    for x in args[1:]:
        result = check_int(result - expect_int(x))
    return result


def mul(env: Environment, args: list[SchemeValue]) -> int:
    """Return the product of all arguments; 1 with none."""
    result = 1
    for x in args:
        result = check_int(result * expect_int(x))
    return result


def _truncating_div(n: int, d: int) -> int:
    # Python's // floors; integer division here rounds toward zero
    q = abs(n) // abs(d)
    return q if (n < 0) == (d < 0) else -q


def div(env: Environment, args: list[SchemeValue]) -> int:
    """Divide left-to-right with truncation. A single argument has no integer reciprocal and is rejected."""
    check_min_arity(args, 1)
    first = expect_int(args[0])
    if len(args) == 1:
        if first == 0:
            raise SchemeRuntimeError("Division by zero")
        raise SchemeArityError("at least 2 for integer division", 1)
    result = first
    for x in args[1:]:
        divisor = expect_int(x)
        if divisor == 0:
            raise SchemeRuntimeError("Division by zero")
        result = check_int(_truncating_div(result, divisor))
    return result


# -------------------------------
# Comparison
# -------------------------------
def _chain(args: list[SchemeValue], holds) -> bool:
    check_min_arity(args, 2)
    values = [expect_int(a) for a in args]
    return all(holds(a, b) for a, b in zip(values, values[1:]))


def num_eq(env: Environment, args: list[SchemeValue]) -> bool:
    """Chainable integer equality."""
    return _chain(args, lambda a, b: a == b)


def lt(env: Environment, args: list[SchemeValue]) -> bool:
    """Chainable less-than: #t if a0 < a1 < a2 ... holds for all pairs."""
    return _chain(args, lambda a, b: a < b)


def gt(env: Environment, args: list[SchemeValue]) -> bool:
    """Chainable greater-than: #t if a0 > a1 > a2 ... holds for all pairs."""
    return _chain(args, lambda a, b: a > b)


def lte(env: Environment, args: list[SchemeValue]) -> bool:
    """Chainable less-or-equal."""
    return _chain(args, lambda a, b: a <= b)


def gte(env: Environment, args: list[SchemeValue]) -> bool:
    """Chainable greater-or-equal."""
    return _chain(args, lambda a, b: a >= b)


# -------------------------------
# Lists
# -------------------------------
def cons(env: Environment, args: list[SchemeValue]) -> list[SchemeValue]:
    """Construct a new list by prepending head to tail.

    Only proper lists exist: the tail must be a list or Nil, and the result
    never shares structure with it.
    """
    check_arity(args, 2)
    head, tail = args
    if tail is Nil:
        return [head]
    if isinstance(tail, list):
        return [head] + tail
    raise type_error("list or nil", tail)


def car(env: Environment, args: list[SchemeValue]) -> SchemeValue:
    check_arity(args, 1)
    xs = args[0]
    if isinstance(xs, list) and xs:
        return xs[0]
    raise type_error("non-empty list", xs)


def cdr(env: Environment, args: list[SchemeValue]) -> SchemeValue:
    """Return all but the first element; Nil once nothing is left."""
    check_arity(args, 1)
    xs = args[0]
    if isinstance(xs, list) and xs:
        return xs[1:] if len(xs) > 1 else Nil
    raise type_error("non-empty list", xs)


def list_builtin(env: Environment, args: list[SchemeValue]) -> list[SchemeValue]:
    return list(args)


# -------------------------------
# Predicates
# -------------------------------
def _predicate(test):
    def predicate(env: Environment, args: list[SchemeValue]) -> bool:
        check_arity(args, 1)
        return test(args[0])
    return predicate


is_null = _predicate(lambda x: x is Nil or (isinstance(x, list) and not x))
is_boolean = _predicate(lambda x: isinstance(x, bool))
is_symbol = _predicate(lambda x: isinstance(x, Symbol))
is_integer_p = _predicate(is_integer)
is_string = _predicate(lambda x: isinstance(x, str))
is_list = _predicate(lambda x: isinstance(x, list))
is_procedure_p = _predicate(is_procedure)
is_array = _predicate(lambda x: isinstance(x, Array))
is_map = _predicate(lambda x: isinstance(x, Map))


def equal_p(env: Environment, args: list[SchemeValue]) -> bool:
    """(equal? a b): structural equality; procedures only equal themselves."""
    check_arity(args, 2)
    return equal(args[0], args[1])


# -------------------------------
# Arrays
# -------------------------------
def make_array(env: Environment, args: list[SchemeValue]) -> Array:
    """(make-array k [fill]) -> new array of k copies of fill (default Nil)."""
    check_arity_range(args, 1, 2)
    k = expect_int(args[0])
    if k < 0:
        raise SchemeRuntimeError(f"Array size must be non-negative: {k}")
    fill = args[1] if len(args) == 2 else Nil
    try:
        items = [fill] * k
    except (MemoryError, OverflowError):
        raise SchemeRuntimeError(f"Array size too large: {k}") from None
    return Array(items)


def _index(arr: Array, value: SchemeValue) -> int:
    index = expect_int(value)
    if index < 0 or index >= len(arr.items):
        raise SchemeRuntimeError(f"Array index out of bounds: {index}")
    return index


def array_ref(env: Environment, args: list[SchemeValue]) -> SchemeValue:
    check_arity(args, 2)
    arr = expect_array(args[0])
    return arr.items[_index(arr, args[1])]


def array_set(env: Environment, args: list[SchemeValue]) -> SchemeValue:
    """(array-set! a i v): in-place update visible through every reference to `a`."""
    check_arity(args, 3)
    arr = expect_array(args[0])
    arr.items[_index(arr, args[1])] = args[2]
    return Nil


def array_length(env: Environment, args: list[SchemeValue]) -> int:
    check_arity(args, 1)
    return len(expect_array(args[0]).items)


def array_push(env: Environment, args: list[SchemeValue]) -> SchemeValue:
    """(array-push! a v): append v, growing the array in place."""
    check_arity(args, 2)
    expect_array(args[0]).items.append(args[1])
    return Nil


# -------------------------------
# Maps
# -------------------------------
def make_map(env: Environment, args: list[SchemeValue]) -> Map:
    # Arguments are accepted and ignored; the map always starts empty
    return Map()


def map_ref(env: Environment, args: list[SchemeValue]) -> SchemeValue:
    """(map-ref m k) -> value for k, or Nil when absent."""
    check_arity(args, 2)
    key = map_key(args[1])
    return expect_map(args[0]).entries.get(key, Nil)


def map_set(env: Environment, args: list[SchemeValue]) -> SchemeValue:
    check_arity(args, 3)
    key = map_key(args[1])
    expect_map(args[0]).entries[key] = args[2]
    return Nil


def map_keys(env: Environment, args: list[SchemeValue]) -> list[SchemeValue]:
    """(map-keys m) -> list of the keys as symbols."""
    check_arity(args, 1)
    return [Symbol(k) for k in expect_map(args[0]).entries]


# -------------------------------
# Output
# -------------------------------
def display(env: Environment, args: list[SchemeValue]) -> SchemeValue:
    """Print space-separated values followed by newline; strings print without quotes."""
    print(" ".join(display_string(a) for a in args))
    return Nil


def newline(env: Environment, args: list[SchemeValue]) -> SchemeValue:
    check_arity(args, 0)
    print()
    return Nil


# -------------------------------
# Evaluation
# -------------------------------
def eval_builtin(env: Environment, args: list[SchemeValue]) -> SchemeValue:
    """(eval expr): evaluate a datum as code in the caller's environment."""
    check_arity(args, 1)
    logger.debug("eval re-entering the trampoline with %r", args[0])
    return evaluate(args[0], env)


BUILTINS: dict[str, BuiltinFn] = {
    # Arithmetic
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    # Comparison
    "=": num_eq,
    "<": lt,
    ">": gt,
    "<=": lte,
    ">=": gte,
    # Lists
    "cons": cons,
    "car": car,
    "cdr": cdr,
    "list": list_builtin,
    # Predicates
    "null?": is_null,
    "boolean?": is_boolean,
    "symbol?": is_symbol,
    "integer?": is_integer_p,
    "string?": is_string,
    "list?": is_list,
    "procedure?": is_procedure_p,
    "array?": is_array,
    "map?": is_map,
    "equal?": equal_p,
    # Arrays
    "make-array": make_array,
    "array-ref": array_ref,
    "array-set!": array_set,
    "array-length": array_length,
    "array-push!": array_push,
    # Maps
    "make-map": make_map,
    "map-ref": map_ref,
    "map-set!": map_set,
    "map-keys": map_keys,
    # Other
    "display": display,
    "newline": newline,
    "eval": eval_builtin,
}


def register(env: Environment) -> None:
    """Register all builtin procedures into the given environment."""
    env.update({name: Builtin(fn, name) for name, fn in BUILTINS.items()})
