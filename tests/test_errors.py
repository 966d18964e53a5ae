import pytest

from tailscheme.errors import (
    SchemeArityError,
    SchemeError,
    SchemeEvalError,
    SchemeNotProcedure,
    SchemeParserError,
    SchemeRuntimeError,
    SchemeTypeError,
    SchemeUndefinedVariable,
)


@pytest.mark.parametrize(
    "fault, kind, text",
    [
        (SchemeParserError("Unmatched '('"), "parser", "Parser Error: Unmatched '('"),
        (SchemeEvalError("bad form"), "eval", "Evaluation Error: bad form"),
        (SchemeRuntimeError("Division by zero"), "runtime", "Runtime Error: Division by zero"),
        (SchemeTypeError("integer", "string"), "type", "Type Error: Expected integer, found string"),
        (SchemeUndefinedVariable("x"), "undefined-variable", "Undefined variable: x"),
        (SchemeNotProcedure("1"), "not-a-procedure", "Not a procedure: 1"),
        (SchemeArityError("2", 1), "arity", "Arity Mismatch: Expected 2, got 1"),
    ]
)
def test_fault_taxonomy(fault, kind, text):
    assert isinstance(fault, SchemeError)
    assert fault.kind == kind
    assert str(fault) == text


def test_fault_kinds_are_distinct():
    kinds = [cls.kind for cls in SchemeError.__subclasses__()]
    assert len(kinds) == len(set(kinds)) == 7
