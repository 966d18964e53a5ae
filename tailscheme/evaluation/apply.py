"""Application engine for tailscheme.

This module centralizes procedure-call semantics:
- Checking that an application's operator is callable at all, before any
  operand is evaluated.
- Running a call to completion from host code (builtins and the interpreter
  facade) with the same binding rules the trampoline uses.

Keeping this logic in one place prevents drift between the evaluator, the
`eval` primitive and Python callers.
"""

from tailscheme import SchemeValue, EvaluatorFn
from tailscheme.errors import SchemeNotProcedure
from tailscheme.types.environment import Environment
from tailscheme.types.procedure import Closure, Builtin
from tailscheme.types.values import to_string


def check_procedure(proc: SchemeValue) -> Closure | Builtin:
    """Return `proc` if it can be called, else raise SchemeNotProcedure naming its printed form."""
    if isinstance(proc, (Closure, Builtin)):
        return proc
    raise SchemeNotProcedure(to_string(proc))


def apply(
    proc: SchemeValue,
    args: list[SchemeValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> SchemeValue:
    """Call `proc` with already-evaluated `args` and return its final value.

    - For a Closure, bind the arguments and run the body through `evaluate_fn`
      (the trampoline), so tail calls inside it stay flat.
    - For a Builtin, invoke it with the caller's env and the argument list.
    - Otherwise, raise SchemeNotProcedure.
    """
    proc = check_procedure(proc)
    if isinstance(proc, Closure):
        return evaluate_fn(proc.body, proc.extend_env(list(args)))
    return proc(env, list(args))
