"""Pydantic models for calculation requests and results."""
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from infix_calculator.common.tokens import format_value


class OperationRequest(BaseModel):
    """Represents a single infix expression to evaluate."""

    expression: str = Field(..., description="Arithmetic expression as a string")


class OperationResult(BaseModel):
    """Represents the outcome of evaluating an expression."""

    expression: str = Field(..., description="Original arithmetic expression")
    result: Optional[float] = Field(default=None, description="Computed value, None if the expression reduced to nothing")
    error: Optional[str] = Field(default=None, description="Description of the failure")

    @model_validator(mode="after")
    def result_and_error_are_exclusive(self) -> "OperationResult":
        """Ensure a result does not carry both a value and an error."""
        if self.result is not None and self.error is not None:
            raise ValueError("An operation result cannot hold both a value and an error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        """
        Render the outcome for display.

        :return: ``Result : <value>``, the error description, or ``No result``
        :rtype: str
        """
        if self.error is not None:
            return self.error
        if self.result is None:
            return "No result"
        return f"Result : {format_value(self.result)}"
