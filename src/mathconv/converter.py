"""Value converter: bind a value into a formula and evaluate it.

``MathConverter.convert`` never raises.  A formula that cannot be
evaluated yields the ``UNSET`` sentinel, the same way a display binding
falls back to "no value" instead of failing.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, NoReturn

from mathconv.formulas.errors import (
    ConvertBackNotSupportedError,
    FormulaError,
    MalformedExpressionError,
    NestingDepthError,
)
from mathconv.formulas.evaluator import evaluate_expression
from mathconv.formulas.placeholder import normalize_formula, substitute
from mathconv.logging.events import EventType, emit_warning


class _Unset:
    """Marker for "conversion not possible"."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNSET"


UNSET = _Unset()


@dataclass(frozen=True)
class EvaluationOutcome:
    """Either a numeric result or the error that prevented one."""

    value: float | None = None
    error: FormulaError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: Any) -> Any:
        return self.value if self.error is None else default


class MathConverter:
    """Evaluates ``@VALUE`` formulas strictly left to right.

    Args:
        max_nesting_depth: Maximum grouping recursion depth, ``None`` for
            no explicit limit.
        max_formula_length: Reject formulas longer than this many
            characters (after whitespace removal), ``None`` for no limit.
    """

    def __init__(
        self,
        max_nesting_depth: int | None = 200,
        max_formula_length: int | None = None,
    ) -> None:
        self.max_nesting_depth = max_nesting_depth
        self.max_formula_length = max_formula_length

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> MathConverter:
        return cls(
            max_nesting_depth=config.get("max_nesting_depth"),
            max_formula_length=config.get("max_formula_length"),
        )

    def try_convert(self, value: Any, formula: Any) -> EvaluationOutcome:
        """Evaluate *formula* with *value* bound, capturing any failure."""
        try:
            return EvaluationOutcome(value=self._evaluate(value, formula))
        except FormulaError as exc:
            error = exc
        except RecursionError:
            error = NestingDepthError(self.max_nesting_depth or sys.getrecursionlimit())
        except (ArithmeticError, ValueError, TypeError) as exc:
            error = MalformedExpressionError(str(exc))

        emit_warning(
            EventType.conversion_failed,
            str(error),
            {"formula": formula if isinstance(formula, str) else repr(formula),
             "value": repr(value)},
            error_code=error.error_code,
        )
        return EvaluationOutcome(error=error)

    def convert(self, value: Any, formula: Any) -> float | _Unset:
        """Return the formula result, or ``UNSET`` if it cannot be computed."""
        return self.try_convert(value, formula).unwrap_or(UNSET)

    def convert_back(self, value: Any, formula: Any = None) -> NoReturn:
        """Always raises: a result cannot be mapped back to its input."""
        emit_warning(
            EventType.convert_back_rejected,
            "convert_back is not supported",
            {"value": repr(value)},
            error_code=ConvertBackNotSupportedError.error_code,
        )
        raise ConvertBackNotSupportedError()

    def _evaluate(self, value: Any, formula: Any) -> float:
        if not isinstance(formula, str):
            raise MalformedExpressionError(
                f"formula must be a string, got {type(formula).__name__}"
            )
        text = normalize_formula(formula)
        if self.max_formula_length is not None and len(text) > self.max_formula_length:
            raise MalformedExpressionError(
                f"formula exceeds {self.max_formula_length} characters"
            )
        text = substitute(text, value)
        return evaluate_expression(text, max_depth=self.max_nesting_depth)


_default_converter = MathConverter()


def try_evaluate(bound_value: Any, formula: str) -> EvaluationOutcome:
    """Module-level shortcut for ``MathConverter().try_convert``."""
    return _default_converter.try_convert(bound_value, formula)


def evaluate(bound_value: Any, formula: str) -> float | _Unset:
    """Evaluate *formula* with *bound_value* substituted for ``@VALUE``.

    Returns:
        The numeric result, or ``UNSET`` when the formula is malformed.
    """
    return _default_converter.convert(bound_value, formula)
