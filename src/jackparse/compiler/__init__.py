"""
jackparse Compiler Package.

This package contains the parsing front end:
- Tokens: the token type tags and the Token carrier
- Token I/O: reading token streams from tokenizer XML or JSON
- Parser: recursive descent over tokens, one method per grammar rule
- ParseTree: the concrete tree the parser builds
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from jackparse.compiler.parse_tree import ParseTree
from jackparse.compiler.parser import CompilerParser, ParseResult
from jackparse.compiler.token_io import load_tokens
from jackparse.compiler.tokens import Token, TokenType
from jackparse.utils.errors import ParseError


def parse_tokens(tokens: Iterable[Token], entry: str = "class") -> ParseTree:
    """
    Parse a token sequence into a tree.

    Args:
        tokens: The token sequence for one compilation unit
        entry: Entry rule, "class" or "program"

    Returns:
        The root ParseTree

    Raises:
        ParseError: If the tokens do not match the grammar
    """
    return CompilerParser(tokens).parse(entry)


def try_parse_tokens(tokens: Iterable[Token], entry: str = "class") -> ParseResult:
    """Parse a token sequence, reporting a syntax error as a value."""
    try:
        return ParseResult(tree=parse_tokens(tokens, entry))
    except ParseError as e:
        return ParseResult(error=e)


def parse_file(path: Path, entry: str = "class") -> ParseTree:
    """
    Load a token file and parse it.

    Raises:
        TokenFormatError: If the file cannot be read as tokens
        ParseError: If the tokens do not match the grammar
    """
    return parse_tokens(load_tokens(path), entry)


__all__ = [
    "CompilerParser",
    "ParseResult",
    "ParseTree",
    "Token",
    "TokenType",
    "load_tokens",
    "parse_file",
    "parse_tokens",
    "try_parse_tokens",
]
