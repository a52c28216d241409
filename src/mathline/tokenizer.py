from __future__ import annotations

from mathline.context import EvaluationContext
from mathline.errors import ErrorKind
from mathline.scanner import scan_number
from mathline.tokens import CONSTANTS, KEYWORDS, SINGLE_CHAR_TOKENS, Token, TokenKind

DIGITS = "0123456789"


def next_token(ctx: EvaluationContext, *, catch_fp_exceptions: bool = True) -> Token:
    """Return the next token and advance the cursor past it.

    Whitespace is skipped. Once the end of input is reached every further call
    returns an EOF token without moving the cursor.
    """
    ctx.skip_whitespace()
    start = ctx.cursor
    if ctx.at_end():
        return Token(TokenKind.EOF, offset=start)

    ch = ctx.text[start]
    if ch in DIGITS or ch == ".":
        value = scan_number(ctx, catch_fp_exceptions=catch_fp_exceptions)
        return Token(TokenKind.VALUE, value, start)

    if ch == "+":
        return _plus_token(ctx)

    kind = SINGLE_CHAR_TOKENS.get(ch)
    if kind is not None:
        ctx.advance()
        return Token(kind, offset=start)

    for word, kind in KEYWORDS:
        if ctx.text.startswith(word, start, ctx.end):
            ctx.advance(len(word))
            if kind is TokenKind.VALUE:
                return Token(kind, CONSTANTS[word], start)
            return Token(kind, offset=start)

    raise ctx.error(ErrorKind.UNEXPECTED_SYMBOL, "unexpected symbol")


def _plus_token(ctx: EvaluationContext) -> Token:
    # A binary plus directly followed by a unary plus (`2++2`, `2+ +2`) is
    # rejected; the error points at the second sign.
    start = ctx.cursor
    ctx.advance()
    ctx.skip_whitespace()
    if ctx.peek() == "+":
        raise ctx.error(
            ErrorKind.CONSECUTIVE_UNARY_PLUS_NOT_ALLOWED,
            "two consecutive plus signs are not allowed",
        )
    return Token(TokenKind.PLUS, offset=start)
