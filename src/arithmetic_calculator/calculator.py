"""Parse-then-evaluate entry point for arithmetic expressions."""
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_calculator.common.errors import ExpressionError, ParseError
from arithmetic_calculator.common.evaluator import evaluate
from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.common.operations import OperationRequest, OperationResult
from arithmetic_calculator.common.parser import ExpressionParser


class CalculationSuccess(BaseModel):
    """A successfully evaluated expression."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    source: str = Field(..., description="Whitespace-stripped expression")
    result: float = Field(..., description="Evaluated numeric result")

    def unwrap(self) -> float:
        return self.result

    def raise_for_error(self) -> None:
        """Do nothing; a success has no error to raise."""


class CalculationFailure(BaseModel):
    """An expression rejected by the parser, with its rendered message."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    source: str = Field(..., description="Whitespace-stripped expression")
    error: ParseError = Field(..., description="First error found in the expression")

    @property
    def message(self) -> str:
        return self.error.format(self.source)

    def raise_for_error(self) -> None:
        """
        Raise the failure as an exception.

        :raises ExpressionError: Always
        """
        raise ExpressionError(self.error, self.message)

    def unwrap(self) -> float:
        self.raise_for_error()


CalculationResult = Union[CalculationSuccess, CalculationFailure]


def calculate(text: str) -> CalculationResult:
    """
    Parse and evaluate an arithmetic expression.

    User-input errors come back as a CalculationFailure. Exceptions only
    escape for internal defects (EvaluationError).

    :param str text: Arithmetic expression, whitespace allowed anywhere

    :return: Success carrying the value, or failure carrying the error
    :rtype: CalculationResult
    """
    state = ExpressionParser.parse(text)
    source = state.cursor.source

    if state.error is not None:
        logger.debug(f"❌ Parse failed at {state.error.position}: {state.error.message}")
        return CalculationFailure(source=source, error=state.error)

    logger.debug(f"🧮 Parsed {len(state.operations)} operations from {source!r}")
    return CalculationSuccess(source=source, result=evaluate(state.operations))


def to_operation_result(request: OperationRequest) -> OperationResult:
    """
    Calculate the requested expression and describe the outcome as an OperationResult.

    The error text is kept on one line: the message and the offset it refers to.

    :param OperationRequest request: Expression to calculate

    :return: Result or error for the expression
    :rtype: OperationResult
    """
    expression = request.expression
    outcome = calculate(expression)
    if outcome.ok:
        return OperationResult(expression=expression, result=outcome.result)
    return OperationResult(
        expression=expression,
        error=f"{outcome.error.message} at position {outcome.error.position}",
    )
