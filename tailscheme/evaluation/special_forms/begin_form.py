from tailscheme import EvaluatorFn
from tailscheme import SExpression, SchemeValue
from tailscheme.types.nil import Nil
from tailscheme.types.environment import Environment


def begin_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    step_fn: EvaluatorFn,
) -> SchemeValue:
    if not tail:
        return Nil
    for e in tail[:-1]:
        evaluate_fn(e, env)
    return step_fn(tail[-1], env)
