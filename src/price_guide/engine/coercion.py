"""
Coercion helpers for loosely-typed form answers.

Form answers arrive as text, numbers, booleans, lists of selected options or
nothing at all. Rule conditions compare them using "loose" semantics: numbers
parsed out of text, everything else compared by its printed form. These helpers
spell those conversions out so the condition evaluator never relies on
Python's own implicit conversions (which differ, e.g. ``True == 1``).
"""
import math
import re
from decimal import Decimal
from typing import Any

NAN = float('nan')

# ASCII digits only; \d would also accept e.g. Arabic-Indic digits
_DECIMAL_RE = re.compile(r'^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$')
_RADIX_DIGITS = {
    '0x': (16, re.compile(r'^[0-9a-fA-F]+$')),
    '0o': (8, re.compile(r'^[0-7]+$')),
    '0b': (2, re.compile(r'^[01]+$')),
}
_INFINITIES = {'Infinity': math.inf, '+Infinity': math.inf, '-Infinity': -math.inf}

# Floats print as plain decimals inside this magnitude range
_PLAIN_MIN = 1e-7
_PLAIN_MAX = 1e21


def is_number(value: Any) -> bool:
    """True for int/float values (bool is not a number here)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number_or_nan(value: Any) -> float:
    """
    Coerce a value to a float, returning NaN when it is not numeric.

    Text is trimmed first; empty text and None count as zero. Lists coerce
    through their printed form, so ``[]`` is 0, ``[5]`` is 5 and ``[1, 2]``
    is NaN.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        return _parse_numeric_text(value)
    if isinstance(value, (list, tuple)):
        return _parse_numeric_text(to_comparable_string(value))
    return NAN


def _parse_numeric_text(text: str) -> float:
    text = text.strip()
    if text == '':
        return 0.0

    if _DECIMAL_RE.match(text):
        return float(text)

    if text in _INFINITIES:
        return _INFINITIES[text]

    # Radix literals never carry a sign or digit separators
    radix = _RADIX_DIGITS.get(text[:2].lower())
    if radix:
        base, digits_re = radix
        digits = text[2:]
        if digits_re.match(digits):
            return float(int(digits, base))

    return NAN


def to_comparable_string(value: Any) -> str:
    """Render a value the way it prints in a loose text comparison."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ','.join('' if item is None else to_comparable_string(item) for item in value)
    if isinstance(value, dict):
        return '[object Object]'
    return str(value)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value.is_integer() and abs(value) < _PLAIN_MAX:
        return str(int(value))

    # repr() gives the shortest round-tripping digits; only the layout differs
    exact = Decimal(repr(value))
    if _PLAIN_MIN <= abs(value) < _PLAIN_MAX:
        return format(exact, 'f')

    sign, digits, exponent = exact.as_tuple()
    digits = ''.join(str(d) for d in digits)
    power = exponent + len(digits) - 1
    mantissa = digits[0] if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{'-' if sign else ''}{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"


def strict_equals(a: Any, b: Any) -> bool:
    """
    Same-kind equality used for list membership.

    Booleans only equal booleans and numbers only equal numbers, so ``1`` is
    not found in ``[True]`` and ``"1"`` is not found in ``[1]``. NaN equals NaN.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) and is_number(b):
        if math.isnan(a) and math.isnan(b):
            return True
        return a == b
    if is_number(a) or is_number(b):
        return False
    if type(a) is not type(b) and not (isinstance(a, str) and isinstance(b, str)):
        return False
    return a == b
