"""Built-in functions callable from expressions.

The evaluator only knows how to parse an argument list; how many arguments a
function takes and what it computes lives in `FUNCTIONS`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from mathline import numeric
from mathline.tokens import TokenKind


@dataclass(frozen=True)
class FunctionSpec:
    name: str
    min_args: int
    max_args: int | None  # None: any number of arguments
    compute: Callable[[Sequence[float]], float]
    usage: str
    description: str
    non_negative: bool = False  # first argument must be >= 0


def _unary(func: Callable[[float], float]) -> Callable[[Sequence[float]], float]:
    return lambda args: func(args[0])


def _log(args: Sequence[float]) -> float:
    if len(args) == 1:
        return numeric.log(args[0])
    # log(b, n): the base comes first.
    base, value = args
    return numeric.divide(numeric.log(value), numeric.log(base))


def _average(args: Sequence[float]) -> float:
    return sum(args) / len(args)


FUNCTIONS: dict[TokenKind, FunctionSpec] = {
    TokenKind.SIN: FunctionSpec("sin", 1, 1, _unary(numeric.sin), "sin(r)", "sine"),
    TokenKind.COS: FunctionSpec("cos", 1, 1, _unary(numeric.cos), "cos(r)", "cosine"),
    TokenKind.TAN: FunctionSpec("tan", 1, 1, _unary(numeric.tan), "tan(r)", "tangent"),
    TokenKind.ASIN: FunctionSpec("asin", 1, 1, _unary(numeric.asin), "asin(n)", "arcsine"),
    TokenKind.ACOS: FunctionSpec("acos", 1, 1, _unary(numeric.acos), "acos(n)", "arccosine"),
    TokenKind.ATAN: FunctionSpec("atan", 1, 1, _unary(numeric.atan), "atan(n)", "arctangent"),
    TokenKind.FACT: FunctionSpec(
        "fact",
        1,
        1,
        _unary(numeric.factorial),
        "fact(n)",
        "factorial of n (Gamma(n+1)); equivalent to n!",
        non_negative=True,
    ),
    TokenKind.EXP: FunctionSpec("exp", 1, 1, _unary(numeric.exp), "exp(n)", "equivalent to e^n"),
    TokenKind.POW: FunctionSpec(
        "pow", 2, 2, lambda args: numeric.power(args[0], args[1]), "pow(b, n)", "equivalent to b^n"
    ),
    TokenKind.LOG: FunctionSpec(
        "log",
        1,
        2,
        _log,
        "log(n) | log(b, n)",
        "natural logarithm of n, or logarithm of n with base b",
    ),
    TokenKind.MAX: FunctionSpec("max", 1, None, max, "max(n1, n2, ...)", "maximum of 1 or more numbers"),
    TokenKind.MIN: FunctionSpec("min", 1, None, min, "min(n1, n2, ...)", "minimum of 1 or more numbers"),
    TokenKind.AVG: FunctionSpec(
        "average",
        1,
        None,
        _average,
        "average(n1, n2, ...) | avg(n1, n2, ...)",
        "arithmetic mean of 1 or more numbers",
    ),
}
