"""Core evaluator and trampoline for the tailscheme interpreter.

`eval_step` classifies one expression and either produces its value or, for
any procedure application, returns a TailCall describing the call to make.
`evaluate` drives `eval_step` in a loop: a call to a closure replaces the
current expression and environment and loops again, so tail-recursive
programs run in constant Python stack depth. Native recursion happens only for
non-tail sub-evaluations (operands, an `if` test, `define`/`set!` values and
the non-final forms of a `begin`).
"""

from __future__ import annotations

from tailscheme import SExpression, SchemeValue
from tailscheme.types.environment import Environment
from tailscheme.types.nil import Nil
from tailscheme.types.procedure import Closure
from tailscheme.types.symbol import Symbol
from tailscheme.types.tail_call import TailCall
from tailscheme.evaluation.apply import check_procedure
from tailscheme.evaluation.special_forms import SPECIAL_FORMS


def evaluate(expr: SExpression, env: Environment) -> SchemeValue:
    """
    Trampoline driver: evaluate `expr` in `env` to a final value.
    Faults propagate to the caller unchanged.
    """
    while True:
        result = eval_step(expr, env)
        if not isinstance(result, TailCall):
            return result
        proc = result.proc
        if isinstance(proc, Closure):
            # Arity is checked before the child scope is populated
            env = proc.extend_env(result.args)
            expr = proc.body
            continue
        # Builtins never re-enter this loop; their result ends it
        return proc(result.env, result.args)


def eval_step(expr: SExpression, env: Environment) -> SchemeValue | TailCall:
    """
    Single evaluation step.
    Returns either a value or a TailCall for the trampoline to perform.
    """
    match expr:
        case Symbol():
            # The reader's blank-input sentinel is inert
            if expr.is_blank:
                return Nil
            return env.lookup(expr.id)

        case list():
            if not expr:
                return Nil
            head = expr[0]
            operands = expr[1:]

            # --- Special forms handling ---
            if isinstance(head, Symbol):
                form = SPECIAL_FORMS.get(head.id)
                if form is not None:
                    return form(operands, env, evaluate, eval_step)

            # --- Application ---
            # The call itself is always deferred, whether or not it sits in
            # syntactic tail position; `env` is the call-site scope builtins run in.
            proc = check_procedure(evaluate(head, env))
            args = [evaluate(arg, env) for arg in operands]
            return TailCall(proc, args, env)

    # --- Atoms (integers, booleans, strings, Nil, arrays, maps, procedures) return as-is ---
    return expr
