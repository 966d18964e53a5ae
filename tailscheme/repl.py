"""
Interactive front end and command-line entry point for tailscheme.

Each line typed at the prompt is one input unit: it is read as a single
expression, evaluated in the session's global environment and its printed
form echoed back. A fault is reported and the loop keeps going; the core never
retries anything itself.
"""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory, InMemoryHistory

from tailscheme import SchemeValue, __version__
from tailscheme.config import (
    get_history_path,
    get_prompt,
    get_recursion_limit,
    normalize_log_level,
)
from tailscheme.errors import SchemeError
from tailscheme.evaluation.special_forms import SPECIAL_FORMS
from tailscheme.interpreter import Interpreter
from tailscheme.reader.parser import read
from tailscheme.types.symbol import Symbol
from tailscheme.types.values import to_string

logger = logging.getLogger(__name__)

BANNER = f"tailscheme {__version__}"

# Completion works on whole identifiers such as `set!` or `array-ref`
_WORD_RE = re.compile(r"[^\s()\[\]{}':,]+")


class Repl:
    """Line-oriented read-eval-print loop over one Interpreter."""

    def __init__(
        self,
        interpreter: Interpreter | None = None,
        session: PromptSession | None = None,
        prompt: str | None = None,
    ):
        self.interp = interpreter if interpreter is not None else Interpreter()
        self.prompt = prompt if prompt is not None else get_prompt()
        self._session = session

    @property
    def session(self) -> PromptSession:
        if self._session is None:
            self._session = self._build_session()
        return self._session

    def _build_session(self) -> PromptSession:
        history_path = get_history_path()
        history = FileHistory(str(history_path)) if history_path else InMemoryHistory()
        completer = WordCompleter(self._completion_words, pattern=_WORD_RE)
        return PromptSession(history=history, completer=completer)

    def _completion_words(self) -> list[str]:
        # Re-read on every completion so fresh definitions show up
        return sorted(set(SPECIAL_FORMS) | set(self.interp.env.names()))

    def eval_line(self, line: str) -> SchemeValue | None:
        """Evaluate one input unit. Returns None for blank or comment-only input.

        Faults propagate to the caller.
        """
        if not line.strip():
            return None
        expr = read(line)
        if isinstance(expr, Symbol) and expr.is_blank:
            return None
        return self.interp.eval_expr(expr)

    def handle_line(self, line: str) -> bool:
        """Evaluate and print one line; returns False if it faulted."""
        try:
            result = self.eval_line(line)
            if result is not None:
                print(to_string(result))
        except SchemeError as e:
            logger.debug("Input %r raised a %s fault: %s", line, e.kind, e.message)
            print(f"Error: {e}", file=sys.stderr)
            return False
        return True

    def run(self) -> None:
        print(BANNER)
        print("Press Ctrl+C or Ctrl+D to exit")
        while True:
            try:
                line = self.session.prompt(self.prompt)
            except KeyboardInterrupt:
                print("Interrupted (Ctrl+C)")
                break
            except EOFError:
                print("Exiting (Ctrl+D)")
                break
            self.handle_line(line)


app = typer.Typer(add_completion=False, help="A small Scheme with proper tail calls.")


@app.command()
def main(
    files: Annotated[
        Optional[list[Path]],
        typer.Argument(help="Source files to run in order; starts the REPL when omitted."),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL."),
    ] = None,
) -> None:
    logging.basicConfig(
        level=normalize_log_level(log_level),
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    )
    limit = get_recursion_limit()
    if limit is not None:
        sys.setrecursionlimit(limit)

    try:
        interp = Interpreter()
        for path in files or []:
            interp.load_file(path)
    except (SchemeError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not files:
        Repl(interp).run()


if __name__ == "__main__":
    app()
