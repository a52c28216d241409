from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """All lexical token kinds produced by the tokenizer."""

    EOF = auto()  # end of input (or an embedded NUL)
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /
    CARET = auto()  # ^ exponentiation
    BANG = auto()  # ! factorial
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COMMA = auto()  # , argument separator
    VALUE = auto()  # numeric literal, `pi` or `e`
    SIN = auto()
    COS = auto()
    TAN = auto()
    ASIN = auto()
    ACOS = auto()
    ATAN = auto()
    FACT = auto()
    EXP = auto()
    POW = auto()
    LOG = auto()
    MAX = auto()
    MIN = auto()
    AVG = auto()  # avg(...) and average(...)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    `value` is only meaningful for VALUE tokens; `offset` is where the token
    started in the input text.
    """

    kind: TokenKind
    value: float = 0.0
    offset: int = 0


FUNCTION_KINDS = frozenset(
    {
        TokenKind.SIN,
        TokenKind.COS,
        TokenKind.TAN,
        TokenKind.ASIN,
        TokenKind.ACOS,
        TokenKind.ATAN,
        TokenKind.FACT,
        TokenKind.EXP,
        TokenKind.POW,
        TokenKind.LOG,
        TokenKind.MAX,
        TokenKind.MIN,
        TokenKind.AVG,
    }
)

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "^": TokenKind.CARET,
    "!": TokenKind.BANG,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}

CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}

_KEYWORDS: list[tuple[str, TokenKind]] = [
    ("sin", TokenKind.SIN),
    ("cos", TokenKind.COS),
    ("tan", TokenKind.TAN),
    ("asin", TokenKind.ASIN),
    ("acos", TokenKind.ACOS),
    ("atan", TokenKind.ATAN),
    ("fact", TokenKind.FACT),
    ("exp", TokenKind.EXP),
    ("pow", TokenKind.POW),
    ("log", TokenKind.LOG),
    ("max", TokenKind.MAX),
    ("min", TokenKind.MIN),
    ("avg", TokenKind.AVG),
    ("average", TokenKind.AVG),
    ("pi", TokenKind.VALUE),
    ("e", TokenKind.VALUE),
]

# Longest keyword first, so `average` wins over `avg` and `exp` over `e`.
KEYWORDS: tuple[tuple[str, TokenKind], ...] = tuple(
    sorted(_KEYWORDS, key=lambda kw: len(kw[0]), reverse=True)
)
