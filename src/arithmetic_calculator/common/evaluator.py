"""Stack machine running postfix operation sequences."""
import math
import operator
from typing import Callable, Iterable, List

from arithmetic_calculator.common.errors import EvaluationError, StackUnderflowError
from arithmetic_calculator.common.operations import OpCode, Operation


# Type alias for binary operator functions (left, right) -> result
OperatorFn = Callable[[float, float], float]


def ieee_divide(left: float, right: float) -> float:
    """
    Divide with IEEE 754 semantics instead of raising ZeroDivisionError.

    :param float left: Dividend
    :param float right: Divisor

    :return: left / right, or +-inf / nan when right is zero
    :rtype: float
    """
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


BINARY_OPERATORS: dict[OpCode, OperatorFn] = {
    OpCode.ADD: operator.add,
    OpCode.SUBTRACT: operator.sub,
    OpCode.MULTIPLY: operator.mul,
    OpCode.DIVIDE: ieee_divide,
}


def _pop(stack: List[float], operation: Operation) -> float:
    if not stack:
        raise StackUnderflowError(f"Stack underflow while executing {operation}")
    return stack.pop()


def evaluate(operations: Iterable[Operation]) -> float:
    """
    Run a postfix program and return the single value it leaves behind.

    Binary operators pop their right operand first, then their left one, so
    subtraction and division keep the order in which they were emitted.

    :param Iterable[Operation] operations: Postfix operation sequence

    :return: Computed result
    :rtype: float
    :raises StackUnderflowError: If an operator lacks operands
    :raises EvaluationError: If the program does not leave exactly one value
    """
    stack: List[float] = []
    for operation in operations:
        if operation.code is OpCode.NUMBER:
            stack.append(operation.value)
        elif operation.code is OpCode.NEGATE:
            stack.append(-_pop(stack, operation))
        else:
            right = _pop(stack, operation)
            left = _pop(stack, operation)
            stack.append(BINARY_OPERATORS[operation.code](left, right))

    if len(stack) != 1:
        raise EvaluationError(f"Program left {len(stack)} values on the stack, expected 1")
    return stack[0]
