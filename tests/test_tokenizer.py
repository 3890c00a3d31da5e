"""Tests for the single-token formula scanner."""

from __future__ import annotations

import pytest

from mathconv.formulas import (
    MalformedNumberError,
    Token,
    TokenKind,
    next_token,
    parse_number,
    tokenize,
)


class TestNextToken:
    def test_empty_input_has_no_token(self) -> None:
        assert next_token("") is None

    def test_number_runs_to_next_operator(self) -> None:
        token = next_token("12.5*2")
        assert token == Token(TokenKind.number, "12.5", 12.5)

    def test_number_at_end_of_input(self) -> None:
        assert next_token("42") == Token(TokenKind.number, "42", 42.0)

    @pytest.mark.parametrize("op", ["+", "-", "*", "/", "%"])
    def test_operators_are_single_characters(self, op: str) -> None:
        token = next_token(f"{op}3")
        assert token.kind is TokenKind.operator
        assert token.text == op
        assert token.value is None

    def test_leading_minus_is_an_operator(self) -> None:
        """A sign is never folded into the numeral."""
        assert next_token("-3.5").kind is TokenKind.operator

    def test_grouping_tokens(self) -> None:
        assert next_token("(1)").kind is TokenKind.lparen
        assert next_token(")+1").kind is TokenKind.rparen
        assert next_token("(1").is_group_open
        assert next_token(")").is_group_close

    def test_does_not_advance(self) -> None:
        text = "3+4"
        assert next_token(text) == next_token(text)

    def test_non_numeric_run_is_malformed(self) -> None:
        with pytest.raises(MalformedNumberError, match="abc"):
            next_token("abc+1")


class TestParseNumber:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("7", 7.0), ("0.25", 0.25), ("1.", 1.0), (".5", 0.5), ("007", 7.0)],
    )
    def test_decimal_numerals(self, text: str, expected: float) -> None:
        assert parse_number(text) == expected

    @pytest.mark.parametrize(
        "text", ["1e5", "inf", "nan", "1_000", "1.2.3", "", "x", "\u0663", "\uff12.5"]
    )
    def test_rejects_anything_but_digits_and_one_point(self, text: str) -> None:
        with pytest.raises(MalformedNumberError):
            parse_number(text)

    def test_position_is_reported(self) -> None:
        with pytest.raises(MalformedNumberError) as exc_info:
            parse_number("x", position=4)
        assert exc_info.value.position == 4
        assert "position 4" in str(exc_info.value)


class TestTokenize:
    def test_token_stream(self) -> None:
        kinds = [t.kind for t in tokenize("2*(3+4)")]
        assert kinds == [
            TokenKind.number,
            TokenKind.operator,
            TokenKind.lparen,
            TokenKind.number,
            TokenKind.operator,
            TokenKind.number,
            TokenKind.rparen,
        ]

    def test_texts_reassemble_the_input(self) -> None:
        text = "(10.5-2)%3/.5"
        assert "".join(t.text for t in tokenize(text)) == text

    def test_is_lazy(self) -> None:
        """Tokens before a bad fragment are produced before the failure."""
        stream = tokenize("1+bad")
        assert next(stream).value == 1.0
        assert next(stream).text == "+"
        with pytest.raises(MalformedNumberError):
            next(stream)
