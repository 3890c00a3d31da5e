"""Left-to-right evaluator for substituted value formulas.

Evaluation has no operator precedence: ``2+3*4`` is ``(2+3)*4 = 20``.
Parentheses are the only way to change the order.

The evaluator works on two pieces of state owned by one top-level call:

- the remaining formula text, consumed one token at a time, and
- the pending values: every operand of the formula in textual order,
  collapsed in place as each binary operator is applied.

An operator at cursor ``index`` combines ``pending[index]`` with
``pending[index + 1]``.  When an operator is followed by ``(`` the
evaluator consumes the ``(`` and recurses at ``index + 1``; that level
collapses the group into ``pending[index + 1]`` and returns at the
matching ``)``, so ``2*(3+4)+1`` is ``(2*7)+1 = 15``.  Recursion depth
follows the nesting of parentheses only.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Callable

from mathconv.formulas.errors import (
    MalformedExpressionError,
    NestingDepthError,
    UnbalancedGroupingError,
)
from mathconv.formulas.tokenizer import Token, TokenKind, next_token, parse_number

_OPERAND_RE = re.compile(r"[^-+*/%()]+")


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _modulo(left: float, right: float) -> float:
    # IEEE remainder semantics: sign follows the dividend
    if right == 0 or math.isinf(left):
        return math.nan
    return math.fmod(left, right)


_OPERATIONS: dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "%": _modulo,
}


def collect_operands(text: str) -> list[float]:
    """Validate every operand of *text* and return them in order.

    Splits on operator and grouping characters; each non-empty fragment
    must be a decimal number.

    Raises:
        MalformedNumberError: If a fragment is not numeric.
    """
    return [parse_number(m.group(), m.start()) for m in _OPERAND_RE.finditer(text)]


@dataclass
class _EvalState:
    """Mutable working copies for a single evaluation."""

    text: str
    pending: list[float]
    max_depth: int | None = None
    offset: int = 0
    open_groups: int = 0
    _remaining: str = field(init=False)

    def __post_init__(self) -> None:
        self._remaining = self.text

    @property
    def remaining(self) -> str:
        return self._remaining

    def peek(self) -> Token | None:
        return next_token(self._remaining)

    def consume(self, token: Token) -> None:
        self._remaining = self._remaining[len(token.text):]
        self.offset += len(token.text)


def evaluate_expression(text: str, *, max_depth: int | None = None) -> float:
    """Evaluate a placeholder-free, whitespace-free formula.

    Args:
        text: Formula text, e.g. ``"2*(3+4)"``.
        max_depth: Maximum recursion depth for grouping; ``None`` for no
            limit beyond the interpreter's own.

    Returns:
        The single remaining pending value.

    Raises:
        MalformedNumberError: A fragment is not a decimal number.
        MalformedExpressionError: An operator lacks a consistent operand,
            or the formula does not reduce to exactly one value.
        UnbalancedGroupingError: Unmatched ``(`` or ``)``.
        NestingDepthError: Grouping recursion exceeds *max_depth*.
    """
    state = _EvalState(text, collect_operands(text), max_depth=max_depth)
    _evaluate_level(state, 0, 0)

    if state.remaining:
        raise UnbalancedGroupingError("unexpected ')'", position=state.offset - 1)
    if state.open_groups:
        raise UnbalancedGroupingError(
            f"{state.open_groups} unclosed '('", position=state.offset
        )
    if not state.pending:
        raise MalformedExpressionError("formula has no operands")
    if len(state.pending) > 1:
        raise MalformedExpressionError(
            f"{len(state.pending) - 1} operand(s) not joined by an operator"
        )
    return state.pending[0]


def _evaluate_level(state: _EvalState, index: int, level: int) -> None:
    """Consume tokens at one recursion level until the input ends or ``)``."""
    if state.max_depth is not None and level > state.max_depth:
        raise NestingDepthError(state.max_depth)

    token = state.peek()
    while token is not None:
        state.consume(token)

        if token.kind is TokenKind.lparen:
            state.open_groups += 1
            _evaluate_level(state, index, level + 1)
        elif token.kind is TokenKind.rparen:
            if state.open_groups == 0:
                raise UnbalancedGroupingError(
                    "unexpected ')'", position=state.offset - 1
                )
            state.open_groups -= 1
            return
        elif token.kind is TokenKind.operator:
            _apply_operator(state, token, index, level)
        # Number tokens are already in pending

        token = state.peek()


def _apply_operator(state: _EvalState, token: Token, index: int, level: int) -> None:
    position = state.offset - 1
    following = state.peek()

    if following is not None and following.is_group_open:
        state.consume(following)
        state.open_groups += 1
        _evaluate_level(state, index + 1, level + 1)
    elif following is None or following.kind is not TokenKind.number:
        raise MalformedExpressionError(
            f"operator {token.text!r} is not followed by a number", position
        )

    pending = state.pending
    if len(pending) <= index + 1:
        raise MalformedExpressionError(
            f"operator {token.text!r} is missing an operand", position
        )
    # The operand after the operator must be the one waiting in pending
    if following.kind is TokenKind.number and following.value != pending[index + 1]:
        raise MalformedExpressionError(
            "next token is not the expected number", position + 1
        )

    pending[index] = _OPERATIONS[token.text](pending[index], pending[index + 1])
    del pending[index + 1]
