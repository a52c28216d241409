"""Floating-point helpers with IEEE 754 results.

Python's `math` module raises where C's libm returns an exceptional value.
These wrappers return the libm value instead, so that the evaluator can
classify NaN and infinities in one place (`is_exceptional`) and pass them
through untouched when that check is disabled.
"""

from __future__ import annotations

import math
from collections.abc import Callable


def is_exceptional(value: float) -> bool:
    """True when `value` is NaN or an infinity."""
    return math.isnan(value) or math.isinf(value)


def divide(numerator: float, denominator: float) -> float:
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and exponent.is_integer() and exponent % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ** negative is a pole; a negative base with a fractional
        # exponent has no real result.
        if base == 0:
            return math.inf
        return math.nan


def factorial(value: float) -> float:
    """Gamma(value + 1); the caller rejects negative arguments."""
    try:
        return math.gamma(value + 1)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def log(value: float) -> float:
    if value == 0:
        return -math.inf
    try:
        return math.log(value)
    except ValueError:
        return math.nan


def _ieee(func: Callable[[float], float]) -> Callable[[float], float]:
    def wrapper(value: float) -> float:
        try:
            return func(value)
        except OverflowError:
            return math.inf
        except ValueError:
            return math.nan

    wrapper.__name__ = func.__name__
    wrapper.__doc__ = func.__doc__
    return wrapper


sin = _ieee(math.sin)
cos = _ieee(math.cos)
tan = _ieee(math.tan)
asin = _ieee(math.asin)
acos = _ieee(math.acos)
atan = _ieee(math.atan)
exp = _ieee(math.exp)
