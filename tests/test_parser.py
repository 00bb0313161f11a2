"""Test class ExpressionParser."""

import sys

import pytest

from arithmetic_calculator.common.errors import ParseErrorKind
from arithmetic_calculator.common.parser import ExpressionParser, ParseState


def postfix(expr):
    """Parse `expr` and render its operations as space-separated postfix."""
    state = ExpressionParser.parse(expr)
    assert state.error is None
    return " ".join(str(op) for op in state.operations)


@pytest.mark.parametrize("expr,expected", [
    ("3", "3.0"),
    ("3 + 4", "3.0 4.0 +"),
    ("2 + 3 * 4", "2.0 3.0 4.0 * +"),        # precedence
    ("10 / 2 - 1", "10.0 2.0 / 1.0 -"),
    ("8 - 3 - 2", "8.0 3.0 - 2.0 -"),        # left associativity
    ("16 / 4 / 2", "16.0 4.0 / 2.0 /"),
    ("(2 + 3) * 4", "2.0 3.0 + 4.0 *"),
    ("-5", "5.0 neg"),
    ("--5", "5.0"),
    ("---5", "5.0 neg"),
    ("1--2", "1.0 2.0 neg -"),
    ("-(1 + 2)", "1.0 2.0 + neg"),
])
def test_parse_postfix_order(expr, expected):
    """Operations are emitted in postfix order respecting precedence."""
    assert postfix(expr) == expected


@pytest.mark.parametrize("expr,expected", [
    ("2(3)", "2.0 3.0 *"),
    ("-0.5(1 + 2)", "0.5 neg 1.0 2.0 + *"),
    ("(1)(2)", "1.0 2.0 *"),
    ("2(3)(4)", "2.0 3.0 * 4.0 *"),
    ("2 * 3(4)", "2.0 3.0 * 4.0 *"),
])
def test_parse_implicit_multiplication(expr, expected):
    """A factor directly followed by '(' multiplies, including after ')'."""
    assert postfix(expr) == expected


def test_parse_ignores_whitespace():
    """Whitespace does not change the operation sequence."""
    compact = ExpressionParser.parse("1+2")
    spaced = ExpressionParser.parse("  1  +  2  ")
    assert compact.operations == spaced.operations
    assert spaced.cursor.source == "1+2"


def test_parse_whitespace_inside_numbers():
    """Whitespace is stripped before numbers are read."""
    assert postfix("1 2 . 5") == "12.5"


@pytest.mark.parametrize("expr,kind,position", [
    ("", ParseErrorKind.EMPTY_INPUT, 0),
    (" \t\n", ParseErrorKind.EMPTY_INPUT, 0),
    ("(1 + 2", ParseErrorKind.EXPECTED_CLOSE_PAREN, 4),
    ("1 + ", ParseErrorKind.EXPECTED_NUMBER, 2),
    ("1 + 2 @", ParseErrorKind.UNEXPECTED_CHARACTER, 3),
    ("+1", ParseErrorKind.EXPECTED_NUMBER, 0),
    ("1 * / 2", ParseErrorKind.EXPECTED_NUMBER, 2),
    ("2(3", ParseErrorKind.EXPECTED_CLOSE_PAREN, 3),
    ("1)", ParseErrorKind.UNEXPECTED_CHARACTER, 1),
    ("()", ParseErrorKind.EXPECTED_NUMBER, 1),
    ("1..2", ParseErrorKind.UNEXPECTED_CHARACTER, 2),
])
def test_parse_errors(expr, kind, position):
    """Invalid input records one error with the offset it was found at."""
    state = ExpressionParser.parse(expr)
    assert state.error is not None
    assert state.error.kind is kind
    assert state.error.position == position


def test_first_error_wins():
    """Only the first error is kept; parsing still runs to completion."""
    state = ExpressionParser.parse("(+")
    assert state.error.kind is ParseErrorKind.EXPECTED_NUMBER
    assert state.error.position == 1


def test_report_ignores_later_errors():
    """ParseState.report keeps the first error it receives."""
    state = ParseState("1")
    state.report(ParseErrorKind.EXPECTED_NUMBER, 0)
    state.report(ParseErrorKind.UNEXPECTED_CHARACTER, 1)
    assert state.error.kind is ParseErrorKind.EXPECTED_NUMBER
    assert state.failed


def test_cursor_reaches_end_on_success():
    """A successful parse consumes the whole source."""
    state = ExpressionParser.parse("-0.5(1 + 2) - 3 * 4 / 5")
    assert state.error is None
    assert state.cursor.at_end()


def test_parse_deep_nesting():
    """Hundreds of nested parentheses parse without exhausting the stack."""
    state = ExpressionParser.parse("(" * 300 + "1" + ")" * 300)
    assert state.error is None
    assert [str(op) for op in state.operations] == ["1.0"]


def test_parse_nesting_too_deep_is_reported():
    """Nesting beyond the supported depth is a recorded error, not a crash."""
    state = ExpressionParser.parse("(" * 5000 + "1" + ")" * 5000)
    assert state.error is not None
    assert state.error.kind is ParseErrorKind.NESTING_TOO_DEEP
    assert 0 < state.error.position <= 5000


def test_parse_restores_recursion_limit():
    """The interpreter recursion limit is unchanged after parsing."""
    limit = sys.getrecursionlimit()
    ExpressionParser.parse("(" * 5000 + "1" + ")" * 5000)
    ExpressionParser.parse("((1))")
    assert sys.getrecursionlimit() == limit
