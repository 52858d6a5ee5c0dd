"""
Exception hierarchy for the symbolic engine.

Everything raised by the package derives from CasError. Failures that only
concern a single numeric evaluation derive from EvaluationError, so callers
that sample an expression point by point can skip a bad point without
aborting the whole run.
"""

from typing import Optional


class CasError(Exception):
    """Base class for all symbolic engine failures"""


class ParseError(CasError):
    """Input text does not match the expression grammar"""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} at position {offset}")
        self.message = message
        self.offset = offset


class EvaluationError(CasError):
    """Numeric evaluation failed for one set of bindings"""


class UndefinedVariable(EvaluationError):

    def __init__(self, name: str):
        super().__init__(f"Undefined variable: {name}")
        self.name = name


class DivisionByZero(EvaluationError, ZeroDivisionError):

    def __init__(self, message: str = "Division by zero"):
        super().__init__(message)


class DomainError(EvaluationError, ValueError):
    """Math function called outside its real domain (log of 0, sqrt of -1, ...)"""

    def __init__(self, operation: str, value: float):
        super().__init__(f"{operation} is undefined for {value!r}")
        self.operation = operation
        self.value = value


class UnknownFunction(EvaluationError):

    def __init__(self, name: str):
        super().__init__(f"Unknown function: {name}")
        self.name = name


class FunctionArityError(EvaluationError):

    def __init__(self, name: str, expected: int, received: int):
        super().__init__(f"Function {name} expects {expected} argument(s), got {received}")
        self.name = name
        self.expected = expected
        self.received = received


class UnsupportedDifferentiation(CasError):

    def __init__(self, reason: str):
        super().__init__(f"Differentiation not supported: {reason}")
        self.reason = reason


class UnsupportedIntegration(CasError):

    def __init__(self, reason: str):
        super().__init__(f"Integration not supported: {reason}")
        self.reason = reason


class UnsupportedEquation(CasError):

    def __init__(self, reason: Optional[str] = None):
        message = "Only linear equations of the form a*x + b = 0 can be solved"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.reason = reason


class NoExpression(CasError):

    def __init__(self, operation: str = "operate on"):
        super().__init__(f"No expression to {operation}")
        self.operation = operation


class UnrecognizedNode(CasError):

    def __init__(self, node: object):
        super().__init__(f"Unknown AST node type: {type(node).__name__}")
        self.node = node
