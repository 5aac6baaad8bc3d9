"""Error taxonomy for the URM simulator.

Hierarchy:
    URMError
        URMSyntaxError   - malformed program text (carries a location)
        URMSemanticError - well-formed text violating a structural rule
        ValidationError  - program does not fit a concrete input vector
    ExecutionDefect      - internal invariant violation (not recoverable)
"""

from typing import Optional


class URMError(Exception):
    """Base class for recoverable errors raised by the URM pipeline."""


class URMSyntaxError(URMError):
    """Program text does not match the URM grammar.

    Attributes:
        line: 1-based line of the offending token (if known)
        column: 1-based column of the offending token (if known)
        context: Excerpt of the source around the error with a caret marker
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        context: str = ""
    ):
        self.line = line
        self.column = column
        self.context = context
        prefix = ""
        if line is not None and column is not None:
            prefix = f"line {line}, column {column}: "
        text = f"Parsing error: {prefix}{message}"
        if context:
            text = f"{text}\n{context}"
        super().__init__(text)


class URMSemanticError(URMError):
    """Program text parsed but breaks a top-level rule (e.g. no output)."""


class ValidationError(URMError):
    """Program cannot be run against the supplied input vector.

    Attributes:
        expected: Number of inputs the program declares (arity errors only)
        actual: Number of inputs supplied (arity errors only)
    """

    def __init__(self, message: str, expected: Optional[int] = None, actual: Optional[int] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(message)


class ExecutionDefect(RuntimeError):
    """The engine reached a state that valid parsing should make impossible."""
