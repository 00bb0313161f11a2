"""Test the postfix evaluator."""
import math

import pytest

from arithmetic_calculator.common.errors import EvaluationError, StackUnderflowError
from arithmetic_calculator.common.evaluator import evaluate, ieee_divide
from arithmetic_calculator.common.operations import (
    ADD,
    DIVIDE,
    MULTIPLY,
    NEGATE,
    SUBTRACT,
    Operation,
)


def num(value):
    return Operation.number(value)


@pytest.mark.parametrize("program,expected", [
    ([num(7)], 7.0),
    ([num(3), num(4), ADD], 7.0),
    ([num(3), num(4), MULTIPLY], 12.0),
    ([num(5), NEGATE], -5.0),
    ([num(5), NEGATE, NEGATE], 5.0),
    ([num(2), num(3), num(4), MULTIPLY, ADD], 14.0),
])
def test_evaluate_valid(program, expected):
    """evaluate returns the value left on the stack."""
    assert evaluate(program) == expected


def test_subtract_uses_second_pop_as_left_operand():
    """'8 3 -' computes 8 - 3, not 3 - 8."""
    assert evaluate([num(8), num(3), SUBTRACT]) == 5.0


def test_divide_uses_second_pop_as_left_operand():
    """'8 2 /' computes 8 / 2, not 2 / 8."""
    assert evaluate([num(8), num(2), DIVIDE]) == 4.0


@pytest.mark.parametrize("left,right,expected", [
    (1.0, 0.0, math.inf),
    (-1.0, 0.0, -math.inf),
    (1.0, -0.0, -math.inf),
])
def test_division_by_zero_gives_infinity(left, right, expected):
    """Division by zero follows IEEE 754 instead of raising."""
    assert ieee_divide(left, right) == expected


def test_zero_divided_by_zero_is_nan():
    """0 / 0 is NaN."""
    assert math.isnan(evaluate([num(0), num(0), DIVIDE]))


@pytest.mark.parametrize("program", [
    [],
    [ADD],
    [num(1), ADD],
    [NEGATE],
    [num(1), SUBTRACT],
])
def test_underflow_raises(program):
    """Operators without enough operands are an internal error."""
    with pytest.raises(EvaluationError):
        evaluate(program)


def test_underflow_is_specific():
    """Missing operands raise StackUnderflowError."""
    with pytest.raises(StackUnderflowError):
        evaluate([num(1), DIVIDE])


def test_leftover_values_raise():
    """A program leaving more than one value is rejected."""
    with pytest.raises(EvaluationError, match="2 values"):
        evaluate([num(1), num(2)])
