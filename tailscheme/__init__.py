# Core type aliases for tailscheme's data model.
# Values are plain Python objects (int, bool, str, list) plus a handful of small
# classes for the variants Python has no natural type for (Symbol, Nil, Array,
# Map, Closure, Builtin). Code and data share one representation.
#
# Naming guidance:
# - SExpression: Use in reader and special-form code to denote unevaluated forms.
# - SchemeValue: Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

__version__ = "0.1.0"

# Runtime value alias
SchemeValue = Any
# Forms alias
SExpression = SchemeValue

# Evaluator function type handed to special forms for non-tail sub-evaluation
EvaluatorFn = Callable[..., SchemeValue]
