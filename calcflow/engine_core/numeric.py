"""
Numeric helpers - parsing the display, formatting results, binary arithmetic.

Plain IEEE floats throughout. Results such as 0.1 + 0.2 keep their
rounding artifacts; the display rules below decide how they are shown.
"""

from __future__ import annotations
import math
from typing import NamedTuple

from .state import MAX_DISPLAY_LENGTH, ERROR_DISPLAY, Operator, ErrorKind


class Computation(NamedTuple):
    """Result of a binary operation. value is meaningless when error is set."""
    value: float
    error: ErrorKind | None = None


def parse_display(text: str) -> float:
    """
    Parse a display string as a decimal literal.

    Anything unparseable is 0, including the spellings float() accepts
    beyond decimal literals (inf, nan, digit separators).
    """
    if not isinstance(text, str) or "_" in text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def format_number(value: float) -> str:
    """
    Render a computed value for the fixed-width display.

    Non-finite values render as "Error" without touching the sticky
    error field. Otherwise the plain rendering is used when it fits,
    then exponential with 10 fractional digits, then with 6.
    """
    if not math.isfinite(value):
        return ERROR_DISPLAY

    text = number_to_string(value)
    if len(text) <= MAX_DISPLAY_LENGTH:
        return text

    text = to_exponential(value, 10)
    if len(text) <= MAX_DISPLAY_LENGTH:
        return text
    return to_exponential(value, 6)


def number_to_string(value: float) -> str:
    """
    Shortest round-trip rendering of a finite float.

    Integral values carry no fractional part, positional notation is
    used for decimal exponents from -6 to 20, scientific notation
    outside that range (1e+21, 1.5e-7).
    """
    if value == 0:
        return "0"  # also -0
    sign = "-" if value < 0 else ""
    digits, point = _shortest_digits(abs(value))
    k = len(digits)

    if k <= point <= 21:
        return sign + digits + "0" * (point - k)
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * (-point) + digits

    exponent = point - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"


def to_exponential(value: float, fraction_digits: int) -> str:
    """Exponential notation with a signed, unpadded exponent (1.5e+21)."""
    text = f"{value:.{fraction_digits}e}"
    mantissa, _, exponent = text.partition("e")
    exp_sign = exponent[0]
    exp_digits = exponent[1:].lstrip("0") or "0"
    return f"{mantissa}e{exp_sign}{exp_digits}"


def _shortest_digits(value: float) -> tuple[str, int]:
    """
    Split a positive float into significant digits and point position.

    The value equals 0.<digits> * 10 ** point.
    """
    mantissa, _, exp_text = repr(value).partition("e")
    exponent = int(exp_text) if exp_text else 0
    whole, _, fraction = mantissa.partition(".")
    combined = whole + fraction
    stripped = combined.lstrip("0")
    leading_zeros = len(combined) - len(stripped)
    point = len(whole) + exponent - leading_zeros
    return stripped.rstrip("0"), point


def compute(a: float, b: float, operator: Operator) -> Computation:
    """Apply a binary operator. Division by zero is reported, not raised."""
    a = float(a)
    b = float(b)
    if operator == Operator.ADD:
        return Computation(a + b)
    if operator == Operator.SUBTRACT:
        return Computation(a - b)
    if operator == Operator.MULTIPLY:
        return Computation(a * b)
    if operator == Operator.DIVIDE:
        if b == 0:
            return Computation(0.0, ErrorKind.DIV_BY_ZERO)
        return Computation(a / b)
    # Unreachable for sanitized states
    return Computation(b)
