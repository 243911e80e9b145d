"""
Token definitions consumed by the jackparse parser.

Tokens are produced by an external tokenizer. Each one carries a type tag
(one of the five ``TokenType`` tags) and the literal text of the token.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from jackparse.utils.errors import SourceLocation


class TokenType(str, Enum):
    """Enumeration of the token type tags understood by the parser."""

    KEYWORD = "keyword"
    SYMBOL = "symbol"
    IDENTIFIER = "identifier"
    INTEGER_CONSTANT = "integerConstant"
    STRING_CONSTANT = "stringConstant"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def is_tag(cls, tag: str) -> bool:
        """Check whether ``tag`` names one of the known token types."""
        return tag in cls._value2member_map_


@dataclass(frozen=True, slots=True)
class Token:
    """
    Represents a single token from the tokenizer.

    Attributes:
        type: The token type tag (e.g. "keyword")
        value: The literal text of the token
        location: Optional position of this token; ignored by equality
    """

    type: str
    value: str
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Store plain strings so hashing and rendering never see enum members
        if isinstance(self.type, TokenType):
            object.__setattr__(self, "type", self.type.value)

    def __repr__(self) -> str:
        if self.location is not None:
            return f"Token({self.type}, {self.value!r}, {self.location})"
        return f"Token({self.type}, {self.value!r})"

    def __str__(self) -> str:
        return f"{self.type} {self.value}"
