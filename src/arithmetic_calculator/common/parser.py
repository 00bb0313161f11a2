"""Recursive-descent parser emitting postfix operations."""
import sys
from typing import List, Optional

from arithmetic_calculator.common.cursor import Cursor, strip_whitespace
from arithmetic_calculator.common.errors import ParseError, ParseErrorKind
from arithmetic_calculator.common.operations import (
    ADD,
    DIVIDE,
    MULTIPLY,
    NEGATE,
    SUBTRACT,
    Operation,
)


# Interpreter frames used per parenthesis level (expression, term, factor, atom, group)
FRAMES_PER_LEVEL: int = 5
# Upper bound for the recursion limit while parsing; deeper input is reported as an error
MAX_RECURSION_LIMIT: int = 10000


class ParseState:
    """
    Mutable state shared by every grammar rule during one parse.

    Holds the cursor, the postfix operations emitted so far and the first
    error reported. Later errors are ignored.
    """

    def __init__(self, source: str):
        self.cursor = Cursor(source)
        self.operations: List[Operation] = []
        self.error: Optional[ParseError] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def emit(self, operation: Operation) -> None:
        self.operations.append(operation)

    def report(self, kind: ParseErrorKind, position: int) -> None:
        """Record an error unless one was already recorded."""
        if self.error is None:
            self.error = ParseError(kind=kind, position=position)


class ExpressionParser:
    """
    Parse arithmetic expressions into a flat postfix program.

    Grammar, lowest precedence first:

        expression := term (('+' | '-') term)*
        term       := factor (('*' | '/') factor | '(' expression ')')*
        factor     := '-'* atom
        atom       := '(' expression ')' | number

    Each rule parses its left operand, then loops over (operator, operand)
    pairs and emits the operator right after its right operand, which yields
    left-associative postfix order without an operator stack.

    Examples:
        - Infix expression: 2 + 3 * 4
        - Emitted postfix: 2 3 4 * +

    Errors never interrupt the walk: they are recorded on the ParseState and
    the rules keep going until the call stack unwinds.
    """

    @staticmethod
    def parse(text: str) -> ParseState:
        """
        Strip whitespace from `text` and parse it completely.

        :param str text: Raw arithmetic expression

        :return: Final parse state; check `error` before using `operations`
        :rtype: ParseState
        """
        state = ParseState(strip_whitespace(text))
        if state.cursor.at_end():
            state.report(ParseErrorKind.EMPTY_INPUT, 0)
            return state

        previous_limit = sys.getrecursionlimit()
        depth_needed = previous_limit + FRAMES_PER_LEVEL * len(state.cursor.source)
        sys.setrecursionlimit(max(previous_limit, min(depth_needed, MAX_RECURSION_LIMIT)))
        try:
            ExpressionParser.parse_expression(state)
        except RecursionError:
            state.report(ParseErrorKind.NESTING_TOO_DEEP, state.cursor.position)
            return state
        finally:
            sys.setrecursionlimit(previous_limit)

        # Anything left over means the expression ended before the input did
        if not state.cursor.at_end():
            state.report(ParseErrorKind.UNEXPECTED_CHARACTER, state.cursor.position)
        return state

    @staticmethod
    def parse_expression(state: ParseState) -> None:
        ExpressionParser.parse_term(state)
        while True:
            if state.cursor.match_literal("+"):
                ExpressionParser.parse_term(state)
                state.emit(ADD)
            elif state.cursor.match_literal("-"):
                ExpressionParser.parse_term(state)
                state.emit(SUBTRACT)
            else:
                break

    @staticmethod
    def parse_term(state: ParseState) -> None:
        ExpressionParser.parse_factor(state)
        while True:
            if state.cursor.match_literal("*"):
                ExpressionParser.parse_factor(state)
                state.emit(MULTIPLY)
            elif state.cursor.match_literal("/"):
                ExpressionParser.parse_factor(state)
                state.emit(DIVIDE)
            elif state.cursor.match_literal("("):
                # Implicit multiplication: 2(3), (1)(2), -0.5(1+2)
                ExpressionParser.parse_group(state)
                state.emit(MULTIPLY)
            else:
                break

    @staticmethod
    def parse_factor(state: ParseState) -> None:
        negate = False
        while state.cursor.match_literal("-"):
            negate = not negate
        ExpressionParser.parse_atom(state)
        if negate:
            state.emit(NEGATE)

    @staticmethod
    def parse_atom(state: ParseState) -> None:
        if state.cursor.match_literal("("):
            ExpressionParser.parse_group(state)
        else:
            ExpressionParser.parse_number(state)

    @staticmethod
    def parse_group(state: ParseState) -> None:
        """Parse the inside of a parenthesized expression whose "(" is already consumed."""
        ExpressionParser.parse_expression(state)
        if not state.cursor.match_literal(")"):
            state.report(ParseErrorKind.EXPECTED_CLOSE_PAREN, state.cursor.position)

    @staticmethod
    def parse_number(state: ParseState) -> None:
        position = state.cursor.position
        value = state.cursor.match_number()
        if value is None:
            state.report(ParseErrorKind.EXPECTED_NUMBER, position)
        else:
            state.emit(Operation.number(value))
