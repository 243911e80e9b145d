"""
Pytest configuration and shared fixtures for jackparse tests.
"""

import pytest

from jackparse.compiler.parse_tree import ParseTree
from jackparse.compiler.parser import CompilerParser
from jackparse.compiler.tokens import Token, TokenType

# Words classified as keywords by the ``tokenize`` fixture
KEYWORDS = {
    "class", "constructor", "function", "method", "field", "static", "var",
    "int", "char", "boolean", "void", "true", "false", "null", "this",
    "let", "do", "if", "else", "while", "return", "skip",
}

SYMBOLS = set("{}()[].,;+-*/&|<>=~")


@pytest.fixture
def make_tokens():
    """
    Factory fixture building tokens from ``type:value`` words.

    Example: ``make_tokens("keyword:class identifier:Main")``. Only the first
    colon separates type from value, so ``symbol::`` is a colon symbol.
    """

    def _make(words: str) -> list[Token]:
        tokens = []
        for word in words.split():
            kind, _, value = word.partition(":")
            tokens.append(Token(kind, value))
        return tokens

    return _make


@pytest.fixture
def tokenize():
    """
    Fixture classifying space-separated words into tokens.

    A stand-in for the external tokenizer: digits become integer constants,
    known keywords and single-character symbols keep their type, everything
    else is an identifier.
    """

    def _tokenize(source: str) -> list[Token]:
        tokens = []
        for word in source.split():
            if word.isdigit():
                tokens.append(Token(TokenType.INTEGER_CONSTANT, word))
            elif word in KEYWORDS:
                tokens.append(Token(TokenType.KEYWORD, word))
            elif word in SYMBOLS:
                tokens.append(Token(TokenType.SYMBOL, word))
            else:
                tokens.append(Token(TokenType.IDENTIFIER, word))
        return tokens

    return _tokenize


@pytest.fixture
def parser_factory(tokenize):
    """Factory fixture for creating parsers from space-separated source."""

    def _create_parser(source: str) -> CompilerParser:
        return CompilerParser(tokenize(source))

    return _create_parser


@pytest.fixture
def parse(parser_factory):
    """Fixture to parse source into a tree from the class entry rule."""

    def _parse(source: str, entry: str = "class") -> ParseTree:
        return parser_factory(source).parse(entry)

    return _parse
