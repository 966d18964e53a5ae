"""Fault taxonomy for tailscheme.

Every fault is an exception raised where the problem is detected and left to
propagate to whoever called ``evaluate``. The core never catches these.
"""


class SchemeError(Exception):
    """Base class for all tailscheme faults"""

    kind = "error"
    prefix = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class SchemeParserError(SchemeError):
    """Raised by the reader on malformed source text"""

    kind = "parser"
    prefix = "Parser Error"


class SchemeEvalError(SchemeError):
    """Raised when a special form is written with invalid syntax"""

    kind = "eval"
    prefix = "Evaluation Error"


class SchemeRuntimeError(SchemeError):
    """Raised for domain faults without a dedicated kind (division by zero, bounds)"""

    kind = "runtime"
    prefix = "Runtime Error"


class SchemeTypeError(SchemeError):
    """Raised when an operation receives a value of the wrong variant"""

    kind = "type"

    def __init__(self, expected: str, found: str):
        super().__init__(f"Expected {expected}, found {found}")
        self.expected = expected
        self.found = found

    def __str__(self) -> str:
        return f"Type Error: {self.message}"


class SchemeUndefinedVariable(SchemeError):
    """Raised when a symbol has no binding anywhere in the environment chain"""

    kind = "undefined-variable"

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Undefined variable: {self.name}"


class SchemeNotProcedure(SchemeError):
    """Raised when the operator of an application is not callable"""

    kind = "not-a-procedure"

    def __init__(self, printed: str):
        super().__init__(printed)
        self.printed = printed

    def __str__(self) -> str:
        return f"Not a procedure: {self.printed}"


class SchemeArityError(SchemeError):
    """Raised when a procedure or special form gets the wrong number of arguments"""

    kind = "arity"

    def __init__(self, expected: str, got: int):
        super().__init__(f"Expected {expected}, got {got}")
        self.expected = expected
        self.got = got

    def __str__(self) -> str:
        return f"Arity Mismatch: {self.message}"
