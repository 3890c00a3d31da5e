"""Placeholder substitution for value formulas.

``@VALUE`` is replaced verbatim with the decimal text of the bound value
before any tokenizing happens.
"""

from __future__ import annotations

import math
import numbers
from decimal import Decimal, InvalidOperation
from typing import Any

from mathconv.formulas.errors import PlaceholderSubstitutionError

PLACEHOLDER = "@VALUE"


def normalize_formula(formula: str) -> str:
    """Remove all whitespace from *formula*."""
    return "".join(formula.split())


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise PlaceholderSubstitutionError(value, "not a number")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, numbers.Real):
        # repr gives the shortest round-tripping digits
        return Decimal(repr(float(value)))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as exc:
            raise PlaceholderSubstitutionError(value, "not a numeral") from exc
    raise PlaceholderSubstitutionError(value, f"unsupported type {type(value).__name__}")


def render_value(value: Any) -> str:
    """Render *value* as positional decimal text.

    Negative values come back as ``(0-<magnitude>)`` because the tokenizer
    treats a leading ``-`` as an operator.

    Raises:
        PlaceholderSubstitutionError: For non-numeric or non-finite values.
    """
    number = _to_decimal(value)
    if not number.is_finite() or not math.isfinite(float(number)):
        raise PlaceholderSubstitutionError(value, "not finite")

    text = format(abs(number), "f")
    if number.is_signed() and number != 0:
        return f"(0-{text})"
    return text


def substitute(formula: str, value: Any) -> str:
    """Replace every ``@VALUE`` in *formula* with the rendered *value*.

    The value is only rendered when the placeholder occurs.
    """
    if PLACEHOLDER not in formula:
        return formula
    return formula.replace(PLACEHOLDER, render_value(value))
