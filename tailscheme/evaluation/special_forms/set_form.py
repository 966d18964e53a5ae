from tailscheme import EvaluatorFn
from tailscheme import SExpression, SchemeValue
from tailscheme.errors import SchemeArityError
from tailscheme.types.nil import Nil
from tailscheme.types.symbol import Symbol
from tailscheme.types.values import type_error
from tailscheme.types.environment import Environment


def set_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: EvaluatorFn,
) -> SchemeValue:
    if len(tail) != 2:
        raise SchemeArityError("2", len(tail))
    var_sym, val_expr = tail
    if not isinstance(var_sym, Symbol):
        raise type_error("symbol", var_sym)
    value = evaluate_fn(val_expr, env)
    # Raises SchemeUndefinedVariable when nothing in the chain binds the name
    env.set(var_sym.id, value)
    return Nil
