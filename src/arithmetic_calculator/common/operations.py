"""Pydantic models for postfix operations and calculation requests."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OpCode(str, Enum):
    """Kind of a single postfix operation."""

    NUMBER = "number"
    NEGATE = "negate"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class Operation(BaseModel):
    """
    One instruction of the postfix program produced by the parser.

    Only NUMBER operations carry a value; every other code is a bare operator.
    Operations are immutable so two parses of the same expression compare equal.
    """

    model_config = ConfigDict(frozen=True)

    code: OpCode = Field(..., description="Kind of operation")
    value: Optional[float] = Field(default=None, description="Literal pushed by a NUMBER operation")

    @model_validator(mode="after")
    def value_only_for_numbers(self) -> "Operation":
        """Ensure a value is present for NUMBER and absent otherwise."""
        if self.code is OpCode.NUMBER and self.value is None:
            raise ValueError("NUMBER operation requires a value")
        if self.code is not OpCode.NUMBER and self.value is not None:
            raise ValueError(f"{self.code.value} operation takes no value")
        return self

    @classmethod
    def number(cls, value: float) -> "Operation":
        return cls(code=OpCode.NUMBER, value=value)

    def __str__(self) -> str:
        if self.code is OpCode.NUMBER:
            return repr(self.value)
        return _SYMBOLS[self.code]


_SYMBOLS: dict[OpCode, str] = {
    OpCode.NEGATE: "neg",
    OpCode.ADD: "+",
    OpCode.SUBTRACT: "-",
    OpCode.MULTIPLY: "*",
    OpCode.DIVIDE: "/",
}

NEGATE = Operation(code=OpCode.NEGATE)
ADD = Operation(code=OpCode.ADD)
SUBTRACT = Operation(code=OpCode.SUBTRACT)
MULTIPLY = Operation(code=OpCode.MULTIPLY)
DIVIDE = Operation(code=OpCode.DIVIDE)


class OperationRequest(BaseModel):
    """Represents a single arithmetic expression submitted for calculation."""

    expression: str = Field(..., description="Arithmetic expression as a string")


class OperationResult(BaseModel):
    """Represents the evaluated outcome of one arithmetic expression."""

    expression: str = Field(..., description="Original arithmetic expression")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result of the expression")
    error: Optional[str] = Field(default=None, description="Error description when the expression is invalid")

    def to_line(self) -> str:
        """
        Render the result as one line of a batch results file.

        :return: "<expr> = <result>" or "<expr> -> ERROR: <error>"
        :rtype: str
        """
        if self.error is None:
            return f"{self.expression} = {self.result}"
        return f"{self.expression} -> ERROR: {self.error}"
