import pytest

from tailscheme.errors import SchemeParserError, SchemeUndefinedVariable
from tailscheme.interpreter import Interpreter
from tailscheme.types.nil import Nil
from tailscheme.types.symbol import Symbol


def test_eval_returns_last_value(interp):
    assert interp.eval("(define x 2) (define y 3) (* x y)") == 6


def test_eval_of_blank_input_is_nil(interp):
    assert interp.eval("") is Nil
    assert interp.eval("; nothing") is Nil


def test_definitions_persist_across_calls(interp):
    interp.eval("(define greeting \"hello\")")
    assert interp.eval("greeting") == "hello"


def test_fault_does_not_corrupt_environment(interp):
    interp.eval("(define x 1)")
    with pytest.raises(SchemeUndefinedVariable):
        interp.eval("(set! x (+ x missing))")
    assert interp.eval("x") == 1


def test_parser_errors_surface(interp):
    with pytest.raises(SchemeParserError):
        interp.eval("(+ 1")


def test_deeply_nested_source_is_a_parser_fault(interp):
    with pytest.raises(SchemeParserError) as excinfo:
        interp.eval("(" * 100000 + ")" * 100000)
    assert excinfo.value.message == "Expression nested too deeply"


def test_prelude_string(monkeypatch):
    monkeypatch.delenv("TAILSCHEME_PRELUDE_PATH", raising=False)
    interp = Interpreter(prelude="(define square (lambda (x) (* x x)))")
    assert interp.eval("(square 7)") == 49


def test_prelude_from_configured_path(monkeypatch, tmp_path):
    prelude = tmp_path / "prelude.scm"
    prelude.write_text("(define answer 42)\n", encoding="utf-8")
    monkeypatch.setenv("TAILSCHEME_PRELUDE_PATH", str(prelude))
    assert Interpreter().eval("answer") == 42


def test_no_prelude_without_configuration(monkeypatch):
    monkeypatch.delenv("TAILSCHEME_PRELUDE_PATH", raising=False)
    interp = Interpreter()
    with pytest.raises(SchemeUndefinedVariable):
        interp.eval("answer")


def test_load_file(interp, tmp_path):
    source = tmp_path / "program.scm"
    source.write_text(
        "; a small program\n"
        "(define inc (lambda (n) (+ n 1)))\n"
        "(inc 41)\n",
        encoding="utf-8",
    )
    assert interp.load_file(source) == 42
    assert interp.eval("(inc 1)") == 2


def test_eval_expr_takes_read_forms(interp):
    assert interp.eval_expr([Symbol("+"), 1, 2]) == 3


def test_call_closure_from_python(interp):
    f = interp.eval("(lambda (a b) (- a b))")
    assert interp.call(f, 10, 4) == 6


def test_call_builtin_from_python(interp):
    assert interp.call(interp.env.lookup("list"), 1, 2) == [1, 2]
