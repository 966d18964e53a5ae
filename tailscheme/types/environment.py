"""Runtime environment for tailscheme.

The Environment stores bindings of names to evaluated values and supports
nested scopes via an `outer` link. A scope is shared by reference between the
evaluator and every closure created while it was active, so mutations through
`define` or `set` are seen by all of them.
"""

from __future__ import annotations

from typing import Iterable, Optional

from tailscheme import SchemeValue
from tailscheme.errors import SchemeUndefinedVariable


class Environment:
    """Hierarchical mapping from names to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, SchemeValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: str, value: SchemeValue) -> None:
        """Bind `name` to `value` in this scope only, shadowing any outer binding."""
        self.vars[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def set(self, name: str, value: SchemeValue) -> None:
        """Update the nearest existing binding for `name` in the chain.

        Raises SchemeUndefinedVariable if no scope up to the global one binds it.
        """
        env = self.find(name)
        if env is None:
            raise SchemeUndefinedVariable(name)
        env.vars[name] = value

    def lookup(self, name: str) -> SchemeValue:
        """Return the value of the nearest binding for `name`.

        Raises SchemeUndefinedVariable if not found.
        """
        env: Optional[Environment] = self
        while env is not None:
            try:
                return env.vars[name]
            except KeyError:
                env = env.outer
        raise SchemeUndefinedVariable(name)

    def update(self, mapping: dict[str, SchemeValue]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.vars[k] = v

    def names(self) -> Iterable[str]:
        """All names visible from this scope, innermost first, without duplicates."""
        seen: set[str] = set()
        env: Optional[Environment] = self
        while env is not None:
            for k in env.vars:
                if k not in seen:
                    seen.add(k)
                    yield k
            env = env.outer

    def depth(self) -> int:
        """Number of scopes between this one and the global scope."""
        n = 0
        env = self.outer
        while env is not None:
            n += 1
            env = env.outer
        return n

    def __str__(self) -> str:
        # Printed forms, so a closure bound here shows its tag and not its scope
        from tailscheme.types.values import to_string
        bindings = ", ".join(f"{k}: {to_string(v)}" for k, v in self.vars.items())
        return "{" + bindings + "}"

    def __repr__(self) -> str:
        if self.outer is None:
            return f"<Environment global ({len(self.vars)} bindings)>"
        return f"<Environment depth={self.depth()} {self}>"
