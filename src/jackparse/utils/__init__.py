"""
jackparse Utilities Package.

Error types and source locations shared by the parser and its loaders.
"""

from jackparse.utils.errors import (
    PARSE_ERROR_MESSAGE,
    JackParseError,
    ParseError,
    SourceLocation,
    TokenFormatError,
)

__all__ = [
    "PARSE_ERROR_MESSAGE",
    "JackParseError",
    "ParseError",
    "SourceLocation",
    "TokenFormatError",
]
