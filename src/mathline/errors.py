"""Mathline exception hierarchy.

Keep this module small and dependency-free: it is imported by every layer of
the evaluator, by the CLI and by tests.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Closed set of reasons an evaluation can fail."""

    UNEXPECTED_SYMBOL = "unexpected_symbol"
    UNEXPECTED_END_OF_EXPRESSION = "unexpected_end_of_expression"
    UNEXPECTED_CLOSE_BRACKET = "unexpected_close_bracket"
    UNEXPECTED_COMMA = "unexpected_comma"
    EXPECTED_VALUE = "expected_value"
    EXPECTED_OPEN_BRACKET_AFTER_FUNCTION_NAME = "expected_open_bracket_after_function_name"
    DIVISION_BY_ZERO = "division_by_zero"
    NEGATIVE_FACTORIAL_ARGUMENT = "negative_factorial_argument"
    NUMERIC_OVERFLOW_OR_COMPLEX_RESULT = "numeric_overflow_or_complex_result"
    VALUE_TOO_LARGE = "value_too_large"
    CONSECUTIVE_UNARY_PLUS_NOT_ALLOWED = "consecutive_unary_plus_not_allowed"
    NESTING_TOO_DEEP = "nesting_too_deep"


class MathlineError(Exception):
    """Base exception for all Mathline errors."""


class MathlineConfigError(MathlineError):
    """Raised for invalid user configuration."""


class EvaluationError(MathlineError):
    """Raised when an expression cannot be evaluated.

    `offset` is the cursor position (in characters) at which the failure was
    detected, which is not necessarily where the malformed construct began.
    """

    def __init__(self, kind: ErrorKind, message: str, offset: int, expression: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.offset = offset
        self.expression = expression

    def __repr__(self) -> str:
        return f"EvaluationError({self.kind.name}, {self.message!r}, offset={self.offset})"
