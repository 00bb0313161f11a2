"""Error types for parsing and evaluation."""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


ERROR_PREFIX: str = "ERROR | "
ERROR_MARKER: str = "└─ "


class ParseErrorKind(str, Enum):
    """User-input errors detected while parsing, with their message text."""

    EMPTY_INPUT = "no user input"
    EXPECTED_NUMBER = "expected number"
    EXPECTED_CLOSE_PAREN = "expected )"
    UNEXPECTED_CHARACTER = "unexpected character"
    NESTING_TOO_DEEP = "parentheses nested too deeply"


class ParseError(BaseModel):
    """The first user-input error found in an expression."""

    model_config = ConfigDict(frozen=True)

    kind: ParseErrorKind = Field(..., description="Category of the error")
    position: int = Field(..., ge=0, description="Offset into the whitespace-stripped source")

    @property
    def message(self) -> str:
        return self.kind.value

    def format(self, source: str) -> str:
        """
        Render the error against the source it was found in.

        The second line points a marker at the offending offset:

            ERROR | 1+2@
                       └─ unexpected character here

        Empty input has nothing to point at and renders as the bare message.

        :param str source: Whitespace-stripped source text

        :return: Human-readable error message
        :rtype: str
        """
        if self.kind is ParseErrorKind.EMPTY_INPUT:
            return self.message
        padding = " " * (len(ERROR_PREFIX) + self.position)
        return f"{ERROR_PREFIX}{source}\n{padding}{ERROR_MARKER}{self.message} here"


class CalculatorError(Exception):
    """Base class for every exception raised by the calculator."""


class ExpressionError(CalculatorError, ValueError):
    """Raised on request when a calculation failed because of invalid input."""

    def __init__(self, error: ParseError, message: str):
        super().__init__(message)
        self.error = error


class EvaluationError(CalculatorError):
    """The operation sequence is not a valid postfix program."""


class StackUnderflowError(EvaluationError):
    """An operator ran with fewer operands on the stack than it needs."""
