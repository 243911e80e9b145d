"""
Error types and source location tracking for the jackparse parser.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from jackparse.compiler.tokens import Token

PARSE_ERROR_MESSAGE = "An Exception occurred while parsing!"


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """
    Represents a location in a token stream or its source file.

    Attributes:
        line: 1-indexed line number
        column: 1-indexed column number
        offset: 0-indexed offset from the start of the stream
        filename: Optional filename for error reporting
    """

    line: int
    column: int = 1
    offset: int = 0
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


class JackParseError(Exception):
    """Base exception for all jackparse errors."""

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
    ) -> None:
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.location:
            return f"[{self.location}] {self.message}"
        return self.message


class ParseError(JackParseError):
    """
    Raised when the token stream does not match the grammar.

    Wrong token type, wrong token value and a premature end of input all
    collapse into this one error. ``str()`` is always the fixed parse
    message; the optional fields below only feed ``detail``.

    Attributes:
        expected_type: Token type the parser was looking for, if known
        expected_value: Token value the parser was looking for, if any
        token: The offending token, or None at end of input
    """

    def __init__(
        self,
        expected_type: Optional[str] = None,
        expected_value: str = "",
        token: Optional["Token"] = None,
    ) -> None:
        self.expected_type = expected_type
        self.expected_value = expected_value
        self.token = token
        super().__init__(PARSE_ERROR_MESSAGE)

    @property
    def at_end(self) -> bool:
        """True when the error was caused by running out of tokens."""
        return self.token is None

    @property
    def detail(self) -> str:
        """Human-readable description of the mismatch."""
        if self.expected_type:
            expected = str(self.expected_type)
            if self.expected_value:
                expected += f" '{self.expected_value}'"
        else:
            expected = "a different token"

        if self.token is None:
            return f"expected {expected} but reached end of input"

        found = f"{self.token.type} '{self.token.value}'"
        if self.token.location:
            found += f" at {self.token.location}"
        return f"expected {expected} but found {found}"


class TokenFormatError(JackParseError):
    """Raised when a token file cannot be read as a token stream."""

    pass
