import pytest

from tailscheme.errors import SchemeArityError, SchemeUndefinedVariable


def test_closure_sees_later_mutation(run):
    assert run("""
    (define x 1)
    (define get-x (lambda () x))
    (set! x 2)
    (get-x)
    """) == 2


def test_closure_sees_later_definition(run):
    assert run("""
    (define f (lambda () later))
    (define later 7)
    (f)
    """) == 7


def test_counter_keeps_private_state(run):
    run("""
    (define make-counter
      (lambda ()
        (begin
          (define n 0)
          (lambda () (begin (set! n (+ n 1)) n)))))
    (define c1 (make-counter))
    (define c2 (make-counter))
    """)
    assert run("(c1)") == 1
    assert run("(c1)") == 2
    assert run("(c2)") == 1


def test_parameters_shadow_outer_names(run):
    run("(define x 10) (define f (lambda (x) (* x 2)))")
    assert run("(f 3)") == 6
    assert run("x") == 10


def test_inner_define_does_not_leak(run):
    run("(define x 1) (define f (lambda () (begin (define x 99) x)))")
    assert run("(f)") == 99
    assert run("x") == 1


def test_sibling_calls_do_not_share_scopes(run):
    run("""
    (define f
      (lambda (a)
        (begin
          (define local (* a 10))
          local)))
    """)
    assert run("(list (f 1) (f 2))") == [10, 20]
    with pytest.raises(SchemeUndefinedVariable):
        run("local")


def test_set_inside_closure_reaches_global(run):
    assert run("(define total 0) ((lambda (n) (set! total n)) 5) total") == 5


def test_higher_order_procedures(run):
    run("""
    (define compose (lambda (f g) (lambda (x) (f (g x)))))
    (define inc (lambda (x) (+ x 1)))
    (define double (lambda (x) (* x 2)))
    """)
    assert run("((compose inc double) 5)") == 11
    assert run("((compose double inc) 5)") == 12


def test_failed_call_leaves_no_partial_bindings(env, run):
    run("(define f (lambda (a b) a))")
    before = dict(env.vars)
    with pytest.raises(SchemeArityError):
        run("(f 1)")
    assert env.vars == before
    assert run("(f 1 2)") == 1
