"""Single-pass recursive-descent evaluator.

Parsing and evaluation are fused: every rule returns the value it computed
together with the operator token that ended it, so no syntax tree is built.

Grammar, lowest precedence first::

    expr          := addend
    addend        := factorchain (('+' | '-') factorchain)*
    factorchain   := signed (postfix)? (('*' | '/') signed (postfix)?)*
    signed        := ('+' | '-')? operand
    operand       := literal | constant | '(' addend ')' | function_call
    postfix       := '!' | '^' factorchain      (a single factor, right-assoc.)
    function_call := name '(' addend (',' addend)* ')'

Round brackets are tracked with a signed depth counter on the context: an
addend chain started after an open bracket returns once the counter drops
back to the depth it was started at.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mathline import numeric
from mathline.config import EvaluatorConfig
from mathline.context import EvaluationContext
from mathline.errors import ErrorKind, EvaluationError
from mathline.functions import FUNCTIONS
from mathline.tokenizer import next_token
from mathline.tokens import FUNCTION_KINDS, Token, TokenKind

logger = logging.getLogger("mathline.evaluator")

COMPLEX_OR_TOO_BIG = "result is complex or too big"
NEGATIVE_FACTORIAL = "attempt to evaluate factorial of negative number"

_STOP_ERRORS: dict[TokenKind, tuple[ErrorKind, str]] = {
    TokenKind.EOF: (ErrorKind.UNEXPECTED_END_OF_EXPRESSION, "unexpected end of expression"),
    TokenKind.RPAREN: (ErrorKind.UNEXPECTED_CLOSE_BRACKET, "unexpected close round bracket"),
    TokenKind.COMMA: (ErrorKind.UNEXPECTED_COMMA, "unexpected comma"),
}


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of one evaluation: a value, or an error and a value of 0."""

    expression: str
    value: float = 0.0
    error: EvaluationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        """Return the value, or raise the evaluation error."""
        if self.error is not None:
            raise self.error
        return self.value


class Evaluator:
    """Evaluates arithmetic expressions under a fixed `EvaluatorConfig`.

    An instance holds no per-evaluation state and can be shared between
    threads.
    """

    def __init__(self, config: EvaluatorConfig | None = None) -> None:
        self.config = config if config is not None else EvaluatorConfig()

    def evaluate(self, expression: str) -> EvaluationResult:
        if not isinstance(expression, str):
            raise TypeError(f"expression must be a str, not {type(expression).__name__}")

        ctx = EvaluationContext(expression, max_nesting=self.config.max_nesting)
        try:
            value, _ = self._eval_addends(ctx, None, break_on_eof=True)
        except EvaluationError as e:
            logger.debug("Evaluation of %r failed at offset %d: %s", expression, e.offset, e)
            return EvaluationResult(expression, 0.0, e)
        except RecursionError:
            # Only reachable when max_nesting exceeds what the interpreter stack allows.
            e = ctx.error(ErrorKind.NESTING_TOO_DEEP, "expression is nested too deeply")
            logger.debug("Evaluation of %r exhausted the stack at offset %d", expression, e.offset)
            return EvaluationResult(expression, 0.0, e)
        return EvaluationResult(expression, value)

    # -- helpers -----------------------------------------------------------

    def _next(self, ctx: EvaluationContext) -> Token:
        return next_token(ctx, catch_fp_exceptions=self.config.catch_fp_exceptions)

    def _check(self, ctx: EvaluationContext, value: float, message: str = COMPLEX_OR_TOO_BIG) -> None:
        if self.config.catch_fp_exceptions and numeric.is_exceptional(value):
            raise ctx.error(ErrorKind.NUMERIC_OVERFLOW_OR_COMPLEX_RESULT, message)

    # -- addends -----------------------------------------------------------

    def _eval_addends(
        self,
        ctx: EvaluationContext,
        break_depth: int | None,
        *,
        break_on_eof: bool = False,
        break_on_comma: bool = False,
    ) -> tuple[float, TokenKind]:
        """Evaluate `A1 [(+|-) A2 ...]` and return (value, stop token).

        The chain is accepted when it stops with the bracket depth back at
        `break_depth`, at end of input when `break_on_eof`, or at a comma
        when `break_on_comma`. Anything else is an error.
        """
        with ctx.nested():
            # Start from `0 + ...`.
            total = 0.0
            right_op = TokenKind.PLUS
            while True:
                left_op = right_op
                value, right_op = self._eval_factors(ctx, 1.0, TokenKind.STAR, is_exponent=False)
                total = total + value if left_op is TokenKind.PLUS else total - value
                if right_op is not TokenKind.PLUS and right_op is not TokenKind.MINUS:
                    break

            if right_op is TokenKind.RPAREN:
                ctx.depth -= 1
                if ctx.depth < 0:
                    raise ctx.error(*_STOP_ERRORS[TokenKind.RPAREN])

            if (
                (break_depth is not None and ctx.depth == break_depth)
                or (break_on_eof and right_op is TokenKind.EOF)
                or (break_on_comma and right_op is TokenKind.COMMA)
            ):
                self._check(ctx, total)
                return total, right_op

            kind, message = _STOP_ERRORS.get(
                right_op, (ErrorKind.UNEXPECTED_SYMBOL, "unexpected symbol")
            )
            raise ctx.error(kind, message)

    # -- factors -----------------------------------------------------------

    def _eval_factors(
        self,
        ctx: EvaluationContext,
        left: float,
        op: TokenKind,
        *,
        is_exponent: bool,
    ) -> tuple[float, TokenKind]:
        """Evaluate `F1 [(*|/) F2 ...]` onto `left` and return (value, next operator).

        In exponent mode exactly one factor is consumed, so that in `2^3*4`
        the `*4` is left to the caller.
        """
        highest = self.config.unary_minus_highest_precedence
        while True:
            token = self._next(ctx)
            sign = 1.0
            if token.kind is TokenKind.MINUS or token.kind is TokenKind.PLUS:
                if token.kind is TokenKind.MINUS:
                    sign = -1.0
                token = self._next(ctx)

            value = self._resolve_operand(ctx, token)

            next_op = self._next(ctx).kind
            if next_op is TokenKind.BANG:
                if highest:
                    value, sign = value * sign, 1.0
                value, next_op = self._eval_factorial(ctx, value)
            if next_op is TokenKind.CARET:
                if highest:
                    value, sign = value * sign, 1.0
                value, next_op = self._eval_exponentiation(ctx, value)

            if op is TokenKind.STAR:
                left = left * value * sign
            else:
                if value == 0:
                    raise ctx.error(ErrorKind.DIVISION_BY_ZERO, "division by zero")
                left = left / value * sign
            self._check(ctx, left, "result is too big")

            op = next_op
            if is_exponent or (op is not TokenKind.STAR and op is not TokenKind.SLASH):
                return left, op

    def _resolve_operand(self, ctx: EvaluationContext, token: Token) -> float:
        if token.kind is TokenKind.LPAREN:
            ctx.depth += 1
            value, _ = self._eval_addends(ctx, ctx.depth - 1)
            return value
        if token.kind in FUNCTION_KINDS:
            return self._eval_function(ctx, token.kind)
        if token.kind is TokenKind.VALUE:
            return token.value
        raise ctx.error(ErrorKind.EXPECTED_VALUE, "expected value")

    # -- postfix operators -------------------------------------------------

    def _eval_exponentiation(self, ctx: EvaluationContext, base: float) -> tuple[float, TokenKind]:
        with ctx.nested():
            exponent, right_op = self._eval_factors(ctx, 1.0, TokenKind.STAR, is_exponent=True)
        result = numeric.power(base, exponent)
        self._check(ctx, result)
        return result, right_op

    def _eval_factorial(self, ctx: EvaluationContext, value: float) -> tuple[float, TokenKind]:
        result = self._factorial(ctx, value)
        return result, self._next(ctx).kind

    def _factorial(self, ctx: EvaluationContext, value: float) -> float:
        if value < 0:
            raise ctx.error(ErrorKind.NEGATIVE_FACTORIAL_ARGUMENT, NEGATIVE_FACTORIAL)
        result = numeric.factorial(value)
        self._check(ctx, result)
        return result

    # -- functions ---------------------------------------------------------

    def _eval_function(self, ctx: EvaluationContext, kind: TokenKind) -> float:
        spec = FUNCTIONS[kind]
        if self._next(ctx).kind is not TokenKind.LPAREN:
            raise ctx.error(
                ErrorKind.EXPECTED_OPEN_BRACKET_AFTER_FUNCTION_NAME,
                "expected open round bracket after function name",
            )

        ctx.depth += 1
        close_depth = ctx.depth - 1
        args: list[float] = []
        while True:
            position = len(args) + 1
            more_allowed = spec.max_args is None or position < spec.max_args
            if not more_allowed:
                # Last possible argument: only the closing bracket may follow.
                value, stop = self._eval_addends(ctx, close_depth)
            elif position < spec.min_args:
                # A required argument: only a comma may follow.
                value, stop = self._eval_addends(ctx, None, break_on_comma=True)
            else:
                value, stop = self._eval_addends(ctx, close_depth, break_on_comma=True)
            args.append(value)
            if stop is not TokenKind.COMMA:
                break

        if spec.non_negative and args[0] < 0:
            raise ctx.error(ErrorKind.NEGATIVE_FACTORIAL_ARGUMENT, NEGATIVE_FACTORIAL)
        result = spec.compute(args)
        self._check(ctx, result)
        return result


def evaluate(expression: str, config: EvaluatorConfig | None = None) -> EvaluationResult:
    """Evaluate `expression` with a fresh `Evaluator`."""
    return Evaluator(config).evaluate(expression)
