import pytest

from tailscheme.errors import (
    SchemeArityError,
    SchemeEvalError,
    SchemeNotProcedure,
    SchemeTypeError,
    SchemeUndefinedVariable,
)
from tailscheme.evaluation.evaluator import evaluate, eval_step
from tailscheme.types.containers import Array, Map
from tailscheme.types.nil import Nil
from tailscheme.types.procedure import Closure
from tailscheme.types.symbol import Symbol
from tailscheme.types.tail_call import TailCall
from tailscheme.types.values import to_string


# -----------------------------------------------------
# Atoms and symbols
# -----------------------------------------------------

@pytest.mark.parametrize("value", [1, -5, True, False, "hello", Nil])
def test_self_evaluating_atoms(env, value):
    assert evaluate(value, env) is value


def test_containers_evaluate_to_themselves(env):
    arr = Array([1, [Symbol("+"), 1, 2]])
    m = Map({"a": Symbol("x")})
    assert evaluate(arr, env) is arr
    assert evaluate(m, env) is m


def test_symbol_lookup(env):
    env.define("x", 42)
    assert evaluate(Symbol("x"), env) == 42
    with pytest.raises(SchemeUndefinedVariable):
        evaluate(Symbol("z"), env)


def test_blank_sentinel_and_empty_list_are_nil(env):
    assert evaluate(Symbol(""), env) is Nil
    assert evaluate([], env) is Nil


def test_literal_is_shared_when_reevaluated(run):
    assert run("(define f (lambda () [0])) (array-set! (f) 0 9) (array-ref (f) 0)") == 9


# -----------------------------------------------------
# quote
# -----------------------------------------------------

def test_quote(run):
    assert run("'x") == Symbol("x")
    assert run("'(1 (2 x))") == [1, [2, Symbol("x")]]
    assert run("(quote ())") == []


def test_quote_arity(run):
    with pytest.raises(SchemeArityError) as excinfo:
        run("(quote 1 2)")
    assert str(excinfo.value) == "Arity Mismatch: Expected 1, got 2"


def test_quoted_literal_reevaluates_to_itself(env, run):
    for source in ["'5", "'\"s\"", "'#t", "'[1, 2]"]:
        once = run(source)
        assert evaluate(once, env) == once


def test_quoted_special_form_reevaluates(env, run):
    form = run("'(if #f 1 2)")
    assert evaluate(form, env) == 2


# -----------------------------------------------------
# if
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source, expected",
    [
        ("(if #t 1 2)", 1),
        ("(if #f 1 2)", 2),
        ("(if 0 1 2)", 1),
        ("(if '() 1 2)", 1),
        ("(if \"\" 1 2)", 1),
        ("(if (< 1 2) 'yes 'no)", Symbol("yes")),
    ]
)
def test_if(run, source, expected):
    assert run(source) == expected


def test_if_without_else_yields_nil(run):
    assert run("(if #f 1)") is Nil


def test_if_treats_nil_and_empty_values_as_true(run):
    assert run("(if (cdr '(1)) 'yes 'no)") == Symbol("yes")
    assert run("(if (make-map) 'yes 'no)") == Symbol("yes")
    assert run("(if (if #f #f) 'yes 'no)") == Symbol("yes")


def test_if_only_evaluates_chosen_branch(run):
    assert run("(if #t 1 (undefined-thing))") == 1


@pytest.mark.parametrize("source, got", [("(if #t)", 1), ("(if #t 1 2 3)", 4)])
def test_if_arity(run, source, got):
    with pytest.raises(SchemeArityError) as excinfo:
        run(source)
    assert excinfo.value.expected == "2 or 3"
    assert excinfo.value.got == got


# -----------------------------------------------------
# define / set!
# -----------------------------------------------------

def test_define_returns_nil_and_binds(env, run):
    assert run("(define x (+ 1 2))") is Nil
    assert env.lookup("x") == 3


def test_define_errors(run):
    with pytest.raises(SchemeArityError):
        run("(define x)")
    with pytest.raises(SchemeTypeError) as excinfo:
        run("(define 1 2)")
    assert str(excinfo.value) == "Type Error: Expected symbol, found integer"


def test_set_updates_existing(run):
    assert run("(define x 1) (set! x 2) x") == 2


def test_set_unbound_is_fault(run):
    with pytest.raises(SchemeUndefinedVariable) as excinfo:
        run("(set! nothing 1)")
    assert str(excinfo.value) == "Undefined variable: nothing"


def test_set_target_must_be_symbol(run):
    with pytest.raises(SchemeTypeError):
        run('(set! "x" 1)')


# -----------------------------------------------------
# lambda / begin
# -----------------------------------------------------

def test_lambda_builds_closure(env, run):
    f = run("(lambda (a b) (+ a b))")
    assert isinstance(f, Closure)
    assert f.params == ("a", "b")
    assert f.env is env
    assert to_string(f) == "#<procedure:a b>"


def test_lambda_multiple_body_forms(run):
    assert run("((lambda (x) (define y (* x 2)) (+ y 1)) 5)") == 11


def test_lambda_empty_body_yields_nil(run):
    assert run("((lambda ()))") is Nil


@pytest.mark.parametrize(
    "source, message",
    [
        ("(lambda)", "Invalid lambda syntax: requires parameters and body"),
        ("(lambda x x)", "Lambda parameters must be a list of symbols"),
        ("(lambda (1) 1)", "Lambda parameters must be symbols"),
    ]
)
def test_lambda_syntax_errors(run, source, message):
    with pytest.raises(SchemeEvalError) as excinfo:
        run(source)
    assert str(excinfo.value) == f"Evaluation Error: {message}"


def test_begin(run):
    assert run("(begin)") is Nil
    assert run("(begin 1 2 3)") == 3
    assert run("(begin (define a 1) (set! a (+ a 1)) a)") == 2


# -----------------------------------------------------
# Application
# -----------------------------------------------------

def test_application(run):
    assert run("((lambda (x y) (- x y)) 10 3)") == 7


def test_not_a_procedure(run):
    with pytest.raises(SchemeNotProcedure) as excinfo:
        run("(1 2 3)")
    assert str(excinfo.value) == "Not a procedure: 1"


def test_operator_checked_before_operands(env, run):
    with pytest.raises(SchemeNotProcedure):
        run("(5 (undefined-name))")


def test_operands_evaluated_left_to_right(capsys, run):
    run('(list (display "a") (display "b") (display "c"))')
    assert capsys.readouterr().out == "a\nb\nc\n"


def test_closure_arity_mismatch(run):
    with pytest.raises(SchemeArityError) as excinfo:
        run("(define f (lambda (a b) a)) (f 1)")
    assert str(excinfo.value) == "Arity Mismatch: Expected 2, got 1"


def test_special_form_names_are_not_shadowed(run):
    assert run("(define if 5) (if #f 1 2)") == 2


def test_eval_step_defers_application(env):
    step = eval_step([Symbol("+"), 1, 2], env)
    assert isinstance(step, TailCall)
    assert step.args == [1, 2]
    assert step.env is env


def test_eval_step_returns_atoms(env):
    assert eval_step(7, env) == 7
