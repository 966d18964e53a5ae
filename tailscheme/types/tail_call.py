from __future__ import annotations

from tailscheme import SchemeValue
from tailscheme.types.environment import Environment


class TailCall:
    """A call the evaluator step hands back to the trampoline instead of making it."""

    __slots__ = ("proc", "args", "env")

    def __init__(self, proc: SchemeValue, args: list[SchemeValue], env: Environment):
        self.proc = proc
        self.args = args
        # Environment active at the call site; builtins run in it
        self.env = env

    def __repr__(self) -> str:
        return f"TailCall({self.proc!r}, {self.args!r})"
