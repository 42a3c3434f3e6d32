"""Convert infix arithmetic expressions to postfix (Reverse Polish) token sequences."""
from functools import lru_cache
import re
from typing import List

from infix_calculator.common.errors import InvalidExpression, LexError
from infix_calculator.common.logger import logger
from infix_calculator.common.tokens import SYMBOLS, Token, TokenKind, priority

# A numeric literal (digits with an optional fractional part) or one operator/parenthesis
LEXEME_PATTERN = r"[0-9]+(?:\.[0-9]+)?|[-+*/()]"


@lru_cache(maxsize=8)
def _compile_lexer(pattern: str) -> re.Pattern:
    """
    Compile and cache the lexical matcher.

    :param str pattern: Regular expression recognizing lexemes

    :return: Compiled matcher
    :rtype: re.Pattern
    :raises LexError: If the pattern cannot be compiled
    """
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise LexError(f"Could not build lexical matcher {pattern!r}: {exc}") from exc


def lex(expression: str, pattern: str = LEXEME_PATTERN) -> List[str]:
    """
    Split an expression into lexemes.

    Whitespace and any character the matcher does not recognize are skipped.

    :param str expression: Raw arithmetic expression
    :param str pattern: Regular expression recognizing lexemes

    :return: Lexemes in input order
    :rtype: List[str]
    :raises LexError: If the matcher cannot be built
    """
    matcher = _compile_lexer(pattern)
    return [match.group(0) for match in matcher.finditer(expression)]


def _parse_number(lexeme: str) -> float:
    # The lexer only matches well-formed literals, so a failure here is a bug
    try:
        return float(lexeme)
    except ValueError as exc:
        raise RuntimeError(f"Lexer produced a malformed numeric literal: {lexeme!r}") from exc


def _close_group(stack: List[TokenKind], output: List[Token], expression: str) -> None:
    """Pop operators to the output until the matching Open is popped and discarded."""
    while stack:
        kind = stack.pop()
        if kind is TokenKind.OPEN:
            return
        output.append(Token.operator(kind))
    raise InvalidExpression(f"Unmatched ')' in expression: {expression!r}")


def to_postfix(expression: str, pattern: str = LEXEME_PATTERN) -> List[Token]:
    """
    Convert an infix expression into postfix order using the Shunting-yard algorithm.

    The input is wrapped in an implicit pair of parentheses, so the closing
    one flushes whatever is left on the operator stack. Operators of equal
    priority are emitted before the new one is pushed, which makes them
    left-associative.

    Examples:
        - ``"1+2"`` -> ``1 2 +``
        - ``"2+3*4"`` -> ``2 3 4 * +``
        - ``"10-2-3"`` -> ``10 2 - 3 -``

    :param str expression: Raw arithmetic expression
    :param str pattern: Regular expression recognizing lexemes

    :return: Tokens in postfix order
    :rtype: List[Token]
    :raises LexError: If the matcher cannot be built
    :raises InvalidExpression: If the parentheses are unbalanced
    """
    output: List[Token] = []
    stack: List[TokenKind] = []

    for lexeme in lex(f"({expression})", pattern):
        kind = SYMBOLS.get(lexeme)
        if kind is None:
            output.append(Token.number(_parse_number(lexeme)))
        elif kind is TokenKind.OPEN:
            stack.append(kind)
        elif kind is TokenKind.CLOSE:
            _close_group(stack, output, expression)
        else:
            # Emit pending operators that bind at least as tightly, stopping at a group barrier
            prec = priority(kind)
            while stack and stack[-1] is not TokenKind.OPEN and priority(stack[-1]) >= prec:
                output.append(Token.operator(stack.pop()))
            stack.append(kind)

    if stack:
        raise InvalidExpression(f"Unclosed '(' in expression: {expression!r}")

    logger.debug(f"Postfix for {expression!r}: {' '.join(str(token) for token in output)}")
    return output
