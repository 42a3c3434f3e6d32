"""Evaluate postfix token sequences with a value stack."""
import math
import operator
from typing import Callable, Iterable, List, Optional

from infix_calculator.common.errors import InvalidExpression
from infix_calculator.common.logger import logger
from infix_calculator.common.tokens import Token, TokenKind


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn = Callable[[float, float], float]


def divide(left: float, right: float) -> float:
    """
    Floating-point division with IEEE-754 results for a zero divisor.

    ``x / 0`` gives a signed infinity, ``0 / 0`` gives ``nan``.
    """
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


OPERATIONS: dict[TokenKind, OperatorFn] = {
    TokenKind.ADD: operator.add,
    TokenKind.SUB: operator.sub,
    TokenKind.MUL: operator.mul,
    TokenKind.DIV: divide,
}


def _pop_operand(stack: List[float], token: Token) -> float:
    if not stack:
        raise InvalidExpression(f"Not enough operands for operator {token}")
    return stack.pop()


def evaluate_postfix(tokens: Iterable[Token], strict: bool = False) -> Optional[float]:
    """
    Reduce a postfix token sequence to a single value.

    Parenthesis tokens never appear in converter output; they are ignored
    if present.

    :param Iterable[Token] tokens: Tokens in postfix order
    :param bool strict: Reject operands left over on the stack instead of returning the top one

    :return: The computed value, or None if the sequence is empty
    :rtype: Optional[float]
    :raises InvalidExpression: If an operator lacks operands, or (strict) operands are left over
    """
    stack: List[float] = []

    for token in tokens:
        if token.is_number:
            stack.append(token.value)
        elif token.kind in OPERATIONS:
            # Right-hand operand is on top
            right = _pop_operand(stack, token)
            left = _pop_operand(stack, token)
            stack.append(OPERATIONS[token.kind](left, right))

    if not stack:
        return None

    if len(stack) > 1:
        if strict:
            raise InvalidExpression(f"Invalid expression (remaining operands): {len(stack)} values left")
        logger.debug(f"Discarding {len(stack) - 1} leftover operand(s): {stack[:-1]}")

    return stack[-1]
