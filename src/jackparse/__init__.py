"""
jackparse - A recursive descent parser for a small class-based teaching language.

jackparse reads the token stream of one class definition, as produced by an
external tokenizer, and builds a concrete parse tree for downstream code
generators and pretty-printers.
"""

from jackparse.compiler import parse_file, parse_tokens, try_parse_tokens
from jackparse.compiler.parse_tree import ParseTree
from jackparse.compiler.parser import CompilerParser
from jackparse.compiler.tokens import Token, TokenType
from jackparse.utils.errors import ParseError

__version__ = "0.1.0"
__all__ = [
    "parse_tokens",
    "try_parse_tokens",
    "parse_file",
    "CompilerParser",
    "ParseTree",
    "Token",
    "TokenType",
    "ParseError",
]
