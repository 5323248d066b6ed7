"""
Exceptions raised at the input boundary.
"""


class InputFormatError(ValueError):
    """
    Raised when the input feed cannot be replayed.

    Covers a malformed header, a malformed event line and events that are
    out of chronological order. The offending raw line is kept so the
    caller can report it verbatim.

    Attributes:
        line: Raw input line that failed validation ("" if it was missing)
    """

    def __init__(self, line: str, reason: str = ""):
        self.line = line
        self.reason = reason
        super().__init__(line)

    def __repr__(self) -> str:
        return f"InputFormatError(line={self.line!r}, reason={self.reason!r})"
