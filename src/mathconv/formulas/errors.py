"""Error types for formula tokenizing, evaluation and substitution."""

from __future__ import annotations

from typing import Any


class FormulaError(Exception):
    """Base class for all formula-related errors."""

    error_code = "formula_error"


class MalformedNumberError(FormulaError):
    """A fragment between operators is not a decimal number.

    Attributes:
        fragment: The offending text.
        position: Character offset of the fragment, when known.
    """

    error_code = "malformed_number"

    def __init__(self, fragment: str, position: int | None = None) -> None:
        self.fragment = fragment
        self.position = position
        msg = f"Malformed number: {fragment!r}"
        if position is not None:
            msg += f" (at position {position})"
        super().__init__(msg)


class MalformedExpressionError(FormulaError):
    """An operator is not followed by the operand it expects.

    Attributes:
        position: Character offset where the problem was detected.
    """

    error_code = "malformed_expression"

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        full = f"Malformed expression: {message}"
        if position is not None:
            full += f" (at position {position})"
        super().__init__(full)


class UnbalancedGroupingError(FormulaError):
    """Unmatched ``(`` or ``)``."""

    error_code = "unbalanced_grouping"

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        full = f"Unbalanced grouping: {message}"
        if position is not None:
            full += f" (at position {position})"
        super().__init__(full)


class NestingDepthError(FormulaError):
    """Parenthesis nesting exceeds the configured maximum."""

    error_code = "nesting_depth_exceeded"

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Grouping nested deeper than {max_depth} levels")


class PlaceholderSubstitutionError(FormulaError):
    """The bound value cannot be rendered as a decimal numeral."""

    error_code = "placeholder_substitution"

    def __init__(self, value: Any, reason: str | None = None) -> None:
        self.value = value
        msg = f"Cannot substitute value {value!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ConvertBackNotSupportedError(FormulaError, NotImplementedError):
    """Reverse conversion (result back to bound value) is never supported."""

    error_code = "convert_back_not_supported"

    def __init__(self) -> None:
        super().__init__("Converting a formula result back to its value is not supported")
