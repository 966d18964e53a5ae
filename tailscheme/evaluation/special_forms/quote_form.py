from tailscheme import SExpression, SchemeValue, EvaluatorFn
from tailscheme.errors import SchemeArityError
from tailscheme.types.environment import Environment


def quote_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    step_fn: EvaluatorFn,
) -> SchemeValue:
    if len(tail) != 1:
        raise SchemeArityError("1", len(tail))
    # Returned as-is, nested lists included
    return tail[0]
