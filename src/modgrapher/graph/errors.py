"""Exceptions raised while turning module graph output into a Graph.

Content problems (a line that cannot be read as a parent/child pair) derive
from LineValidationError and always carry the offending line verbatim. Stream
failures are reported as ReadError, chained to the underlying exception.
"""


class ModGraphError(Exception):
    """Base class for all errors raised while building a module graph."""

    def __init__(self, message: str):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the failure
        """
        super().__init__(message)
        self.message = message


class LineValidationError(ModGraphError):
    """A single input line could not be parsed into a (parent, child) pair.

    Attributes:
        line: The offending line, exactly as read
        line_number: 1-based position of the line in the input, or None when
            the line was validated on its own
    """

    reason = "invalid line"

    def __init__(self, line: str, line_number: int | None = None):
        self.line = line
        self.line_number = line_number
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        location = f" (line {self.line_number})" if self.line_number is not None else ""
        return f"{self.reason}{location}: '{self.line}'"

    def at_line(self, line_number: int) -> "LineValidationError":
        """Record where the line was found in the input and return self."""
        self.line_number = line_number
        self.message = self._format_message()
        self.args = (self.message,)
        return self


class MalformedLineError(LineValidationError):
    """The line does not contain two elements separated by a space."""

    reason = "a line must have two elements separated by white space"


class InvalidIdentifierError(LineValidationError):
    """The parent or child element does not begin with an ASCII letter."""

    reason = "elements of parent or child must start with a letter of the alphabet"


class ReadError(ModGraphError):
    """The input stream failed while being read.

    This is distinct from content errors: the text itself was never seen.
    """
