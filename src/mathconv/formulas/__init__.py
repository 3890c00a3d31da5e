"""Left-to-right value formula tokenizing and evaluation.

Public API::

    from mathconv.formulas import evaluate_expression, next_token, substitute
"""

from mathconv.formulas.errors import (
    ConvertBackNotSupportedError,
    FormulaError,
    MalformedExpressionError,
    MalformedNumberError,
    NestingDepthError,
    PlaceholderSubstitutionError,
    UnbalancedGroupingError,
)
from mathconv.formulas.evaluator import collect_operands, evaluate_expression
from mathconv.formulas.placeholder import (
    PLACEHOLDER,
    normalize_formula,
    render_value,
    substitute,
)
from mathconv.formulas.tokenizer import (
    Token,
    TokenKind,
    next_token,
    parse_number,
    tokenize,
)

__all__ = [
    "ConvertBackNotSupportedError",
    "FormulaError",
    "MalformedExpressionError",
    "MalformedNumberError",
    "NestingDepthError",
    "PLACEHOLDER",
    "PlaceholderSubstitutionError",
    "Token",
    "TokenKind",
    "UnbalancedGroupingError",
    "collect_operands",
    "evaluate_expression",
    "next_token",
    "normalize_formula",
    "parse_number",
    "render_value",
    "substitute",
    "tokenize",
]
