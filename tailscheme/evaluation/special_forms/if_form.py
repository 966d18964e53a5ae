from tailscheme import EvaluatorFn
from tailscheme import SExpression, SchemeValue
from tailscheme.errors import SchemeArityError
from tailscheme.types.nil import Nil
from tailscheme.types.environment import Environment
from tailscheme.types.values import is_true


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    step_fn: EvaluatorFn,
) -> SchemeValue:
    """
    (if test then [else])
    The test is evaluated to completion; the chosen branch is only stepped, so a
    call in either branch goes back to the trampoline as a tail call.
    """
    if len(tail) not in (2, 3):
        raise SchemeArityError("2 or 3", len(tail))

    if is_true(evaluate_fn(tail[0], env)):
        return step_fn(tail[1], env)
    if len(tail) == 3:
        return step_fn(tail[2], env)
    return Nil
