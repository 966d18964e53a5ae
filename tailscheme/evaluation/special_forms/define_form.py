from tailscheme import EvaluatorFn
from tailscheme import SExpression, SchemeValue
from tailscheme.errors import SchemeArityError
from tailscheme.types.nil import Nil
from tailscheme.types.symbol import Symbol
from tailscheme.types.values import type_error
from tailscheme.types.environment import Environment


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: EvaluatorFn,
) -> SchemeValue:
    """
    (define name value)
    Binds in the current scope only; an outer binding of the same name is shadowed, not touched.
    """
    if len(tail) != 2:
        raise SchemeArityError("2", len(tail))

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise type_error("symbol", name)
    value = evaluate_fn(val_expr, env)
    env.define(name.id, value)
    return Nil
