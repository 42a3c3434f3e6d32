"""Token kinds, tokens and the fixed lookup tables used by the converter."""
from enum import Enum
import math

from pydantic import BaseModel, ConfigDict, Field


class TokenKind(str, Enum):
    """Closed set of token kinds. Operator kinds use their symbol as value."""

    NUMBER = "number"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    OPEN = "("
    CLOSE = ")"


# Mapping of lexeme symbols to token kinds
SYMBOLS: dict[str, TokenKind] = {
    "+": TokenKind.ADD,
    "-": TokenKind.SUB,
    "*": TokenKind.MUL,
    "/": TokenKind.DIV,
    "(": TokenKind.OPEN,
    ")": TokenKind.CLOSE,
}

# Precedence class of each operator kind (higher binds tighter)
PRIORITIES: dict[TokenKind, int] = {
    TokenKind.ADD: 0,
    TokenKind.SUB: 0,
    TokenKind.MUL: 1,
    TokenKind.DIV: 1,
    TokenKind.OPEN: 2,
    TokenKind.CLOSE: 2,
}


def priority(kind: TokenKind) -> int:
    """
    Return the precedence class of an operator kind.

    :param TokenKind kind: Operator or parenthesis kind

    :return: Precedence class
    :rtype: int
    :raises KeyError: If ``kind`` is ``TokenKind.NUMBER``
    """
    return PRIORITIES[kind]


def format_value(value: float) -> str:
    """
    Format a number for display.

    Integral finite values lose their trailing ``.0`` (``3.0`` -> ``"3"``),
    everything else uses ``repr`` (``2.5``, ``inf``, ``nan``). Negative zero
    keeps its sign (``"-0"``).
    """
    if math.isfinite(value) and value.is_integer():
        if value == 0.0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return repr(value)


class Token(BaseModel):
    """A single lexeme of an expression: a number or an operator/parenthesis."""

    model_config = ConfigDict(frozen=True)

    kind: TokenKind = Field(..., description="Kind of the token")
    value: float = Field(default=0.0, description="Numeric payload, only meaningful for numbers")

    @classmethod
    def number(cls, value: float) -> "Token":
        """Build a Number token."""
        return cls(kind=TokenKind.NUMBER, value=value)

    @classmethod
    def operator(cls, kind: TokenKind) -> "Token":
        """Build an operator or parenthesis token."""
        if kind is TokenKind.NUMBER:
            raise ValueError("Use Token.number() for numeric tokens")
        return cls(kind=kind)

    @property
    def is_number(self) -> bool:
        return self.kind is TokenKind.NUMBER

    def __str__(self) -> str:
        if self.is_number:
            return format_value(self.value)
        return self.kind.value
