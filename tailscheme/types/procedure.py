"""Procedure values: user closures and native builtins."""

from __future__ import annotations

from typing import Callable

from tailscheme import SExpression, SchemeValue
from tailscheme.errors import SchemeArityError
from tailscheme.types.environment import Environment

# Native primitive signature: (caller environment, evaluated arguments) -> value
BuiltinFn = Callable[[Environment, list[SchemeValue]], SchemeValue]


class Closure:
    """A first-class procedure with parameter names, a body, and its captured env.

    Closures compare by identity only; two closures with identical code are
    still different procedures.
    """

    __slots__ = ("params", "body", "env")

    def __init__(self, params: tuple[str, ...], body: SExpression, env: Environment):
        self.params: tuple[str, ...] = params
        self.body: SExpression = body
        # Captured by reference: later define/set! in this scope stays visible
        self.env: Environment = env

    def extend_env(self, args: list[SchemeValue]) -> Environment:
        """
        Bind the given argument values to this closure's parameters and return
        a new child of the captured environment for evaluating the body.

        The count is checked before anything is bound, so a mismatched call
        never leaves a half-populated scope behind.
        """
        if len(args) != len(self.params):
            raise SchemeArityError(str(len(self.params)), len(args))
        call_env = Environment(outer=self.env)
        # Duplicate parameter names: the later position wins
        for name, value in zip(self.params, args):
            call_env.vars[name] = value
        return call_env

    def __repr__(self) -> str:
        return f"#<procedure:{' '.join(self.params)}>"


class Builtin:
    """A native primitive bound into the global environment under `name`."""

    __slots__ = ("fn", "name")

    def __init__(self, fn: BuiltinFn, name: str):
        self.fn = fn
        self.name = name

    def __call__(self, env: Environment, args: list[SchemeValue]) -> SchemeValue:
        return self.fn(env, args)

    def __repr__(self) -> str:
        return f"#<builtin:{self.name}>"
