"""Exceptions raised while converting or evaluating an expression."""


class CalculatorError(ValueError):
    """Base class for every failure reported back to the caller."""


class LexError(CalculatorError):
    """The lexical matcher could not be built."""


class InvalidExpression(CalculatorError):
    """
    The expression is structurally invalid.

    Raised for an unmatched ``)``, an unclosed ``(``, an operator without
    enough operands, and (in strict mode) operands left over after evaluation.
    """
