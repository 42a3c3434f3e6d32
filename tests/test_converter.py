"""Test the infix to postfix converter."""
import pytest

from infix_calculator.common.converter import lex, to_postfix
from infix_calculator.common.errors import InvalidExpression, LexError
from infix_calculator.common.tokens import Token, TokenKind

ADD = Token.operator(TokenKind.ADD)
SUB = Token.operator(TokenKind.SUB)
MUL = Token.operator(TokenKind.MUL)
DIV = Token.operator(TokenKind.DIV)


def n(value: float) -> Token:
    return Token.number(value)


def test_lex_basic():
    """lex splits numbers and operators regardless of spacing."""
    assert lex("3 + 4.25*(2)") == ["3", "+", "4.25", "*", "(", "2", ")"]


def test_lex_skips_unknown_characters():
    """Whitespace and unknown characters are neither matched nor reported."""
    assert lex(" 1 ? x + \t2 ") == ["1", "+", "2"]


def test_lex_dot_without_fraction_is_skipped():
    """A dot must be followed by digits to belong to a number."""
    assert lex("1.") == ["1"]
    assert lex(".5") == ["5"]


def test_lex_invalid_pattern_raises_lex_error():
    """An uncompilable matcher is reported as a LexError."""
    with pytest.raises(LexError):
        lex("1+1", pattern="([0-9")


def test_to_postfix_simple_sum():
    """1+2 converts to 1 2 +."""
    assert to_postfix("1+2") == [n(1), n(2), ADD]


@pytest.mark.parametrize("expr,expected", [
    ("2+3*4", [n(2), n(3), n(4), MUL, ADD]),
    ("2*3+4", [n(2), n(3), MUL, n(4), ADD]),
    ("10-2-3", [n(10), n(2), SUB, n(3), SUB]),
    ("8/4/2", [n(8), n(4), DIV, n(2), DIV]),
    ("1-2+3", [n(1), n(2), SUB, n(3), ADD]),
    ("(1+2)*3", [n(1), n(2), ADD, n(3), MUL]),
    ("4*(6-3)+(8-6)/2", [n(4), n(6), n(3), SUB, MUL, n(8), n(6), SUB, n(2), DIV, ADD]),
    ("((7))", [n(7)]),
    ("1.5 * 2", [n(1.5), n(2), MUL]),
])
def test_to_postfix_various(expr, expected):
    """to_postfix honours precedence, associativity and grouping."""
    assert to_postfix(expr) == expected


@pytest.mark.parametrize("expr", ["", "   ", "()", "abc"])
def test_to_postfix_empty(expr):
    """Expressions without lexemes convert to an empty sequence."""
    assert to_postfix(expr) == []


def test_to_postfix_never_emits_parentheses():
    """Parentheses never reach the output."""
    kinds = {token.kind for token in to_postfix("((1+2)*(3-(4/5)))")}
    assert TokenKind.OPEN not in kinds
    assert TokenKind.CLOSE not in kinds


@pytest.mark.parametrize("expr", ["(1+2", "((3)", "1+2)", "(1))", "1)"])
def test_to_postfix_unbalanced_parentheses(expr):
    """Unbalanced parentheses raise InvalidExpression."""
    with pytest.raises(InvalidExpression):
        to_postfix(expr)


def test_to_postfix_keeps_malformed_operator_sequences():
    """Operator placement is not validated by the converter."""
    assert to_postfix("1+") == [n(1), ADD]


def test_to_postfix_invalid_pattern_raises_lex_error():
    """A matcher that cannot be built stops the conversion with a LexError."""
    with pytest.raises(LexError):
        to_postfix("1+2", pattern="([0-9")


def test_to_postfix_malformed_number_is_a_bug():
    """A numeric lexeme float() rejects is an internal error, not a LexError."""
    with pytest.raises(RuntimeError):
        to_postfix("1..2", pattern=r"[0-9.]+|[-+*/()]")
