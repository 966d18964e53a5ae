from tailscheme.errors import SchemeEvalError
from tailscheme.types.procedure import Closure

from tailscheme import EvaluatorFn
from tailscheme import SExpression, SchemeValue
from tailscheme.types.environment import Environment
from tailscheme.types.symbol import Symbol


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: EvaluatorFn,
) -> SchemeValue:
    # (lambda (params) body...) allows zero or more body forms.
    # When there are several, the body is an implicit begin; with none,
    # calling the procedure yields Nil.
    if not tail:
        raise SchemeEvalError("Invalid lambda syntax: requires parameters and body")

    params = tail[0]
    body_forms = tail[1:]

    if not isinstance(params, list):
        raise SchemeEvalError("Lambda parameters must be a list of symbols")
    names = []
    for p in params:
        if not isinstance(p, Symbol):
            raise SchemeEvalError("Lambda parameters must be symbols")
        names.append(p.id)

    if len(body_forms) == 1:
        body = body_forms[0]
    else:
        body = [Symbol("begin"), *body_forms]

    return Closure(tuple(names), body, env)
