"""Single-token scanner for value formulas.

The scanner never advances on its own: ``next_token`` peeks at the front of
whatever text it is given and the caller slices ``len(token.text)``
characters off before asking again.  The evaluator depends on this to
re-enter the scan from any recursion level.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterator, NamedTuple

from mathconv.formulas.errors import MalformedNumberError

OPERATORS = frozenset("+-*/%")
GROUPING = frozenset("()")
ALL_OPERATORS = OPERATORS | GROUPING

# ASCII digits with at most one decimal point: "12", "1.5", "1.", ".5"
_NUMBER_RE = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)\Z")


class TokenKind(str, Enum):
    number = "number"
    operator = "operator"
    lparen = "lparen"
    rparen = "rparen"


class Token(NamedTuple):
    kind: TokenKind
    text: str
    value: float | None = None

    @property
    def is_group_open(self) -> bool:
        return self.kind is TokenKind.lparen

    @property
    def is_group_close(self) -> bool:
        return self.kind is TokenKind.rparen


def parse_number(text: str, position: int | None = None) -> float:
    """Parse a decimal numeral.

    Raises:
        MalformedNumberError: If *text* is not digits with at most one ``.``.
    """
    if not _NUMBER_RE.match(text):
        raise MalformedNumberError(text, position)
    return float(text)


def next_token(text: str) -> Token | None:
    """Return the token at the front of *text*, or ``None`` if it is empty.

    Operator and grouping characters are always single-character tokens,
    so a leading ``-`` is an operator and never part of a numeral.
    Anything else runs up to the next operator or grouping character and
    must parse as a number.
    """
    if not text:
        return None

    first = text[0]
    if first == "(":
        return Token(TokenKind.lparen, first)
    if first == ")":
        return Token(TokenKind.rparen, first)
    if first in OPERATORS:
        return Token(TokenKind.operator, first)

    end = 1
    while end < len(text) and text[end] not in ALL_OPERATORS:
        end += 1
    run = text[:end]
    return Token(TokenKind.number, run, parse_number(run))


def tokenize(text: str) -> Iterator[Token]:
    """Lazily yield every token of *text* in order."""
    remaining = text
    while True:
        token = next_token(remaining)
        if token is None:
            return
        yield token
        remaining = remaining[len(token.text):]
