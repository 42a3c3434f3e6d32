"""Chain the converter and the evaluator for single expressions."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from infix_calculator.common.converter import LEXEME_PATTERN, to_postfix
from infix_calculator.common.errors import CalculatorError
from infix_calculator.common.evaluator import evaluate_postfix
from infix_calculator.common.logger import logger
from infix_calculator.common.operations import OperationRequest, OperationResult
from infix_calculator.common.tokens import Token


class Calculator(BaseModel):
    """
    Evaluate infix arithmetic expressions.

    Design constraints:
        - No eval(), no dynamic code execution
        - Pure function of the input: no state is kept between calls

    Algorithm:
        1. Lex the expression with a regular expression
        2. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        3. Evaluate RPN using a stack
    """

    # Make the Pydantic instance immutable (read-only) so it can be shared freely
    model_config = ConfigDict(frozen=True)

    strict: bool = Field(default=False, description="Reject expressions leaving extra operands")
    pattern: str = Field(default=LEXEME_PATTERN, description="Regular expression recognizing lexemes")

    def postfix(self, expression: str) -> List[Token]:
        """
        Return the postfix token sequence of an expression.

        :param str expression: Arithmetic expression

        :return: Tokens in postfix order
        :rtype: List[Token]
        """
        return to_postfix(expression, self.pattern)

    def evaluate(self, expression: str) -> Optional[float]:
        """
        Evaluate an arithmetic expression.

        :param str expression: Arithmetic expression

        :return: Computed result, or None for an empty expression
        :rtype: Optional[float]
        :raises LexError: If the lexer cannot be built
        :raises InvalidExpression: If the expression is malformed
        """
        return evaluate_postfix(to_postfix(expression, self.pattern), strict=self.strict)

    def calculate(self, request: OperationRequest) -> OperationResult:
        """
        Evaluate a request and wrap the outcome, reporting failures instead of raising them.

        :param OperationRequest request: Expression to evaluate

        :return: Result carrying either the value or the error description
        :rtype: OperationResult
        """
        logger.info(f"🧮🏁 Evaluating: {request.expression!r}")

        try:
            result = self.evaluate(request.expression)
        except CalculatorError as exc:
            logger.error(
                f"🧮❌ Evaluation failed: {exc}\n"
                f"Invalid arithmetic expression, could not evaluate: {request.expression!r}"
            )
            return OperationResult(expression=request.expression, error=str(exc))

        logger.info(f"🧮✅ Evaluated {request.expression!r}: {result}")
        return OperationResult(expression=request.expression, result=result)
