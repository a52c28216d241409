"""Built-in self-test: a table of expressions with their expected outcome.

`mathline selftest` runs it against the installed evaluator. Every case
assumes the default `EvaluatorConfig`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from mathline.config import EvaluatorConfig
from mathline.evaluator import EvaluationResult, Evaluator


@dataclass(frozen=True)
class Case:
    expression: str
    ok: bool
    value: float = 0.0


def _ok(expression: str, value: float) -> Case:
    return Case(expression, True, value)


def _fail(expression: str) -> Case:
    return Case(expression, False)


CASES: tuple[Case, ...] = (
    # Unary and binary signs
    _ok("+2", 2),
    _ok("2+-2", 0),
    _ok("2-+2", 0),
    _ok("2--2", 4),
    _ok("+2-(+2)", 0),
    _ok("+2*(+3)", 6),
    _ok("1*-3", -3),
    _ok("2*+3", 6),
    _fail("-+3"),
    _fail("+-3"),
    _fail("2++2"),
    _fail("2---2"),
    _fail("--2"),
    # Numbers
    _ok("2", 2),
    _ok("02", 2),
    _ok(".2", 0.2),
    _ok("-.2", -0.2),
    _ok("12.34", 12.34),
    _ok("12E2", 1200),
    _ok("12E-2", 0.12),
    _fail("12a0"),
    _fail("12E2.5"),
    _fail(".-2"),
    # Round brackets
    _ok("(1)", 1),
    _ok("1+(2*(3+(4+5+6))-1)+6", 42),
    _ok("(((((((((((1)))))))))))", 1),
    _ok("-(((((((((((-1)))))))))))", 1),
    _fail("1+(2*(3+(4+5+6))-1+6"),
    _fail("1+(2*(3+(4+5+6))-1))+6"),
    _fail("1+()"),
    # Constants and functions
    _ok("-pi", -math.pi),
    _ok("e", math.e),
    _ok("pow(6,5)", math.pow(6, 5)),
    _ok("log(2,3)", math.log(3) / math.log(2)),
    _ok("log(4)", math.log(4)),
    _ok("sin(pi*.3)", math.sin(math.pi * 0.3)),
    _ok("max(-1,2,3)", 3),
    _ok("min(-1,2,3)", -1),
    _ok("average(1,2,3)", 2),
    _ok("avg(10,20,30)", 20),
    _fail("max()"),
    _fail("pow(1,2,3)"),
    _fail("sin(4,5)"),
    # Factorial
    _ok("4!", 24),
    _ok("0!", 1),
    _ok("3.456!", math.gamma(1 + 3.456)),
    _ok("-fact(4)", -24),
    _fail("(-4)!"),
    _fail("fact(-4)"),
    _fail("fact(1,2)"),
    # Exponentiation
    _ok("2^3", 8),
    _ok("2^3^4", math.pow(2, 81)),
    _ok("(-3)^3", -27),
    _ok("2^-1/3", 0.5 / 3),
    _ok("-1*2^(-1/2)", -math.pow(2, -0.5)),
    _fail("^3"),
    _fail("3^"),
    # Equivalent forms
    _ok("e        -  exp(1)", 0),
    _ok("log(3.2) -  log(e,3.2)", 0),
    _ok("1.234!   -  fact(1.234)", 0),
    _ok("1.2^3.4  -  pow(1.2,3.4)", 0),
    # Precedence
    _ok("2+3*4", 14),
    _ok("1+2*3^2", 19),
    _ok("2^3*3", 24),
    _ok("2^3!", 64),
    _ok("3/-2", -1.5),
    _ok("-3^2", 9),
    _ok("5+-2^2", 9),
    _fail("-3!"),
    # Whitespace
    _ok("  +  2  ", 2),
    _ok("1+\t(2*(3 +\n\n( 4 +5+6) )-1)+6", 42),
    _ok("   min(-1,2 ,3   ) ", -1),
    _fail("2+  +2"),
    # Floating-point exceptions
    _fail("1/0"),
    _fail("(-1)!"),
    _fail("(-2)^0.5"),
    _fail("pow(-2,-1/2)"),
    _fail("9^9^9"),
    _fail("-(9^9^9)"),
    _fail("pow(9,pow(9,9))"),
)


@dataclass(frozen=True)
class Failure:
    case: Case
    result: EvaluationResult

    def describe(self) -> str:
        expected = "success" if self.case.ok else "failure"
        actual = "success" if self.result.ok else "failure"
        return (
            f"Expression: {self.case.expression}\n"
            f"Expected status is: {expected}\n"
            f"Test     status is: {actual}\n"
            f"Expected result is: {self.case.value!r}\n"
            f"Test     result is: {self.result.value!r}\n"
        )


def _passes(case: Case, result: EvaluationResult) -> bool:
    if case.ok != result.ok:
        return False
    if not case.ok:
        return result.value == 0
    return result.value == case.value or math.isclose(
        result.value, case.value, rel_tol=1e-12, abs_tol=1e-12
    )


def run_selftest(cases: tuple[Case, ...] = CASES) -> list[Failure]:
    """Evaluate every case and return the ones that did not match."""
    evaluator = Evaluator(EvaluatorConfig())
    failures: list[Failure] = []
    for case in cases:
        result = evaluator.evaluate(case.expression)
        if not _passes(case, result):
            failures.append(Failure(case, result))
    return failures
