"""Registry of special forms for the tailscheme evaluator.

Maps keyword names to handler functions that implement non-standard evaluation
rules. The evaluator consults this table purely syntactically, before any
environment lookup, so a variable that happens to be named `if` never shadows
the form.

Every handler takes (operands, env, evaluate_fn, step_fn): `evaluate_fn` runs a
sub-expression to completion (non-tail), `step_fn` hands an expression in tail
position back towards the trampoline.
"""

from tailscheme.evaluation.special_forms.quote_form import quote_form
from tailscheme.evaluation.special_forms.if_form import if_form
from tailscheme.evaluation.special_forms.define_form import define_form
from tailscheme.evaluation.special_forms.set_form import set_form
from tailscheme.evaluation.special_forms.lambda_form import lambda_form
from tailscheme.evaluation.special_forms.begin_form import begin_form

SPECIAL_FORMS = {
    "quote": quote_form,
    "if": if_form,
    "define": define_form,
    "set!": set_form,
    "lambda": lambda_form,
    "begin": begin_form,
}
