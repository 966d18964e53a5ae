import pytest

from tailscheme.builtin.env_builtin import register
from tailscheme.evaluation.evaluator import evaluate
from tailscheme.interpreter import Interpreter
from tailscheme.reader.parser import read_all
from tailscheme.types.environment import Environment


@pytest.fixture
def env():
    """Fresh global environment with the builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def run(env):
    """Evaluate every form of a source string in `env`, returning the last value."""
    def _run(source):
        result = None
        for expr in read_all(source):
            result = evaluate(expr, env)
        return result
    return _run


@pytest.fixture
def interp(monkeypatch):
    """Interpreter with no prelude, isolated from any configured prelude file."""
    monkeypatch.delenv("TAILSCHEME_PRELUDE_PATH", raising=False)
    return Interpreter(prelude=None)
