"""
Command-line entrypoint.

This script:
- Reads one expression from the command line, or prompts for it
- Or evaluates every line of an operations file provided with ``--file``
- Prints the result, or the reason the expression could not be evaluated
"""

import argparse
from pathlib import Path
import sys
from typing import List, Optional

from pydantic import BaseModel, FilePath, ValidationError, model_validator

from infix_calculator.client.batch import BatchRunner, build_output_path
from infix_calculator.common.calculator import Calculator
from infix_calculator.common.config import Settings
from infix_calculator.common.errors import CalculatorError
from infix_calculator.common.logger import set_log_level
from infix_calculator.common.operations import OperationRequest

PROMPT = "Input equation: "


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expression : str, optional
        Expression to evaluate.
    file_path : FilePath, optional
        Path to a file containing one expression per line.
    strict : bool, optional
        Reject leftover operands; None keeps the configured value.
    show_postfix : bool
        Print the postfix form before the result.
    log_level : str, optional
        Overrides the configured log level.
    """

    expression: Optional[str] = None
    file_path: Optional[FilePath] = None
    strict: Optional[bool] = None
    show_postfix: bool = False
    log_level: Optional[str] = None

    @model_validator(mode="after")
    def expression_or_file(self) -> "CliArgs":
        """Ensure at most one input source is given."""
        if self.expression is not None and self.file_path is not None:
            raise ValueError("Give either an expression or --file, not both")
        return self


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param list argv: Arguments, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="infix-calc",
        description="Evaluate infix arithmetic expressions (+ - * / and parentheses)",
    )

    parser.add_argument("expression", nargs="?", help="Expression to evaluate, prompted for if omitted")
    parser.add_argument("--file", dest="file_path", help="File or archive with one expression per line")
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on expressions leaving extra operands",
    )
    parser.add_argument("--postfix", dest="show_postfix", action="store_true", help="Print the postfix form")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")

    args = parser.parse_args(argv)

    try:
        return CliArgs(**vars(args))
    except ValidationError as exc:
        parser.error(str(exc))


def load_settings(cli_args: CliArgs) -> Settings:
    """
    Merge environment settings with command-line overrides.

    :param CliArgs cli_args: Validated CLI arguments

    :return: Effective settings
    :rtype: Settings
    """
    overrides = {}
    if cli_args.strict is not None:
        overrides["strict"] = cli_args.strict
    if cli_args.log_level is not None:
        overrides["log_level"] = cli_args.log_level
    settings = Settings.from_env()
    return Settings(**{**settings.model_dump(), **overrides})


def run_expression(calculator: Calculator, expression: str, show_postfix: bool = False) -> int:
    """
    Evaluate one expression and print the outcome.

    :return: Process exit status
    :rtype: int
    """
    if show_postfix:
        try:
            postfix = calculator.postfix(expression)
        except CalculatorError:
            # Reported below by calculate()
            pass
        else:
            print(f"Postfix : {' '.join(str(token) for token in postfix)}")

    result = calculator.calculate(OperationRequest(expression=expression))
    print(result.render())
    return 0 if result.ok else 1


def run_file(calculator: Calculator, input_path: Path) -> int:
    """
    Evaluate every line of a file and print where the results were written.

    :return: Process exit status
    :rtype: int
    """
    output_path = build_output_path(input_path)
    try:
        BatchRunner(calculator=calculator).run(input_path, output_path)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Results written to {output_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the ``infix-calc`` command.
    """
    cli_args = parse_args(argv)
    try:
        settings = load_settings(cli_args)
    except ValidationError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    set_log_level(settings.log_level)
    calculator = Calculator(strict=settings.strict)

    if cli_args.file_path is not None:
        return run_file(calculator, Path(cli_args.file_path))

    expression = cli_args.expression
    if expression is None:
        try:
            expression = input(PROMPT)
        except EOFError:
            expression = ""
    return run_expression(calculator, expression, cli_args.show_postfix)


if __name__ == "__main__":
    sys.exit(main())
