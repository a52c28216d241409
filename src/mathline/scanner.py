"""Numeric literal scanning.

Literals are decimal with an optional fractional part and an optional
integer exponent: `2`, `02`, `.2`, `12.34`, `12E-2`. Signs are unary
operators and are never part of a literal.
"""

from __future__ import annotations

import re

from mathline.context import EvaluationContext
from mathline.errors import ErrorKind
from mathline.numeric import is_exceptional

NUMBER_RE = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def scan_number(ctx: EvaluationContext, *, catch_fp_exceptions: bool = True) -> float:
    """Consume the longest literal at the cursor and return its value."""
    m = NUMBER_RE.match(ctx.text, ctx.cursor, ctx.end)
    if m is None:
        raise ctx.error(ErrorKind.EXPECTED_VALUE, "expected value")

    ctx.advance(m.end() - m.start())
    value = float(m.group())
    if catch_fp_exceptions and is_exceptional(value):
        raise ctx.error(ErrorKind.VALUE_TOO_LARGE, "value is too big")
    return value
