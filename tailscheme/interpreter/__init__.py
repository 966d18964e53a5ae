from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from tailscheme import SExpression, SchemeValue
from tailscheme.config import get_prelude_path
from tailscheme.errors import SchemeParserError, SchemeRuntimeError
from tailscheme.reader.parser import read_all
from tailscheme.types.nil import Nil
from tailscheme.types.environment import Environment
from tailscheme.builtin.env_builtin import register
from tailscheme.evaluation.apply import apply
from tailscheme.evaluation.evaluator import evaluate

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating tailscheme code.
    Maintains one global Environment across calls, so definitions persist.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            path = get_prelude_path()
            if path is not None:
                self.load_file(path)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        logger.debug("Evaluating prelude (%d characters)", len(code))
        self.eval(code)

    def load_file(self, path: str | Path) -> SchemeValue:
        """Evaluate every form in the file at `path`; returns the last value."""
        logger.debug("Loading %s", path)
        return self.eval(Path(path).read_text(encoding="utf-8"))

    def eval_expr(self, expr: SExpression) -> SchemeValue:
        """Evaluate one already-read expression in the global environment."""
        try:
            return evaluate(expr, self.env)
        except RecursionError:
            # Deep non-tail recursion exhausts the Python stack; report it as a fault
            raise SchemeRuntimeError("Maximum recursion depth exceeded") from None

    def eval(self, code: str) -> SchemeValue:
        """Read every form in `code`, evaluate them in order and return the last value (Nil if none)."""
        try:
            exprs = read_all(code)
        except RecursionError:
            raise SchemeParserError("Expression nested too deeply") from None
        result: SchemeValue = Nil
        for expr in exprs:
            logger.debug("Evaluating %r", expr)
            result = self.eval_expr(expr)
        return result

    def call(self, proc: SchemeValue, *args: SchemeValue) -> SchemeValue:
        """Call a procedure value from Python with already-evaluated arguments."""
        try:
            return apply(proc, list(args), self.env, evaluate)
        except RecursionError:
            raise SchemeRuntimeError("Maximum recursion depth exceeded") from None
