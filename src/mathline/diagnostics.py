"""Error rendering and actionable hints for Mathline output.

Keep this module small and dependency-light: it is imported by the CLI and
MCP layers and only depends on the error hierarchy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mathline.errors import ErrorKind, EvaluationError, MathlineConfigError

if TYPE_CHECKING:  # pragma: no cover
    from mathline.evaluator import EvaluationResult

_HINTS: dict[ErrorKind, str] = {
    ErrorKind.UNEXPECTED_END_OF_EXPRESSION: "check for a missing close round bracket or operand",
    ErrorKind.UNEXPECTED_CLOSE_BRACKET: "check for a surplus close round bracket",
    ErrorKind.UNEXPECTED_COMMA: "commas only separate arguments of max, min, avg, pow and log",
    ErrorKind.EXPECTED_OPEN_BRACKET_AFTER_FUNCTION_NAME: "function arguments go in round brackets, e.g. `sin(pi/2)`",
    ErrorKind.CONSECUTIVE_UNARY_PLUS_NOT_ALLOWED: "drop the second `+` or write `2+(+2)`",
    ErrorKind.NUMERIC_OVERFLOW_OR_COMPLEX_RESULT: (
        "set `catch_fp_exceptions = false` in mathline.toml to get raw nan/inf values"
    ),
    ErrorKind.NESTING_TOO_DEEP: "raise `max_nesting` in the [evaluator] table of mathline.toml",
}


def render_error(error: EvaluationError, expression: str | None = None) -> str:
    """Render message, expression and a caret line pointing at the failure."""
    text = error.expression if expression is None else expression
    caret = " " * error.offset + "^"
    return f"{error.message}\n{text}\n{caret}\n"


def error_payload(error: EvaluationError) -> dict[str, Any]:
    """Return a JSON-serialisable description of an evaluation error."""
    return {
        "kind": error.kind.value,
        "message": error.message,
        "offset": error.offset,
    }


def format_hint(exc: BaseException) -> str | None:
    """Return an actionable hint for a known error, or None."""
    if isinstance(exc, EvaluationError):
        return _HINTS.get(exc.kind)

    if isinstance(exc, MathlineConfigError):
        msg = str(exc)
        if "TOML" in msg:
            return "fix the syntax of mathline.toml"
        if "version" in msg:
            return "start mathline.toml with `version = 1`"
        return None

    return None


def format_error_with_hint(exc: BaseException) -> str:
    """Format error message + optional hint for stderr output."""
    msg = (str(exc) or repr(exc)).strip()
    result = f"error: {msg}"
    hint = format_hint(exc)
    if hint:
        result += f"\nhint: {hint}"
    return result


def result_payload(result: EvaluationResult, *, precision: int) -> dict[str, Any]:
    """Return the JSON envelope shared by `mathline eval --json` and the MCP tools."""
    payload: dict[str, Any] = {
        "command": "eval",
        "ok": result.ok,
        "expression": result.expression,
    }
    if result.error is None:
        payload["result"] = result.value
        payload["formatted"] = f"{result.value:.{precision}f}"
    else:
        payload["error"] = error_payload(result.error)
    return payload
