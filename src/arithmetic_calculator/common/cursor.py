"""Position-tracked view over the whitespace-stripped source."""
from typing import Optional


DIGITS: str = "0123456789"
DECIMAL_POINT: str = "."


def strip_whitespace(text: str) -> str:
    """Remove every whitespace character, including those inside digit runs."""
    return "".join(text.split())


class Cursor:
    """
    Read position into an immutable source buffer.

    The position only moves forward, and only through the match methods.
    """

    def __init__(self, source: str):
        self._source = source
        self._position = 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def position(self) -> int:
        return self._position

    def at_end(self) -> bool:
        return self._position == len(self._source)

    def remainder(self) -> str:
        """Return the part of the source not consumed yet."""
        return self._source[self._position:]

    def match_literal(self, literal: str) -> bool:
        """
        Consume `literal` if the remainder starts with it.

        :param str literal: Exact text to match, e.g. an operator or parenthesis

        :return: True if matched and consumed, else False with the cursor unchanged
        :rtype: bool
        """
        if self._source.startswith(literal, self._position):
            self._position += len(literal)
            return True
        return False

    def match_number(self) -> Optional[float]:
        """
        Consume the longest run of ASCII digits containing at most one decimal point.

        A second decimal point ends the run and is left in place. If the run is
        empty or is not a valid float (a lone "."), nothing is consumed.

        :return: Parsed value, or None if no number starts here
        :rtype: Optional[float]
        """
        start = self._position
        end = start
        seen_point = False
        for char in self.remainder():
            if char == DECIMAL_POINT:
                if seen_point:
                    break
                seen_point = True
            elif char not in DIGITS:
                break
            end += 1

        try:
            value = float(self._source[start:end])
        except ValueError:
            return None

        self._position = end
        return value
