"""
jackparse Parser.

A recursive descent parser that turns a pre-classified token stream into a
concrete ParseTree for a single class. There is one method per grammar rule;
each consumes tokens strictly left to right and returns one interior node
labelled with the rule name.

Parsing fails fast: the first mismatch raises ParseError and no tree is
returned. Lookahead decisions live in the module-level tables below.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from jackparse.compiler.parse_tree import ParseTree
from jackparse.compiler.tokens import Token, TokenType
from jackparse.utils.errors import ParseError

logger = logging.getLogger(__name__)

KEYWORD = TokenType.KEYWORD
SYMBOL = TokenType.SYMBOL
IDENTIFIER = TokenType.IDENTIFIER
INTEGER_CONSTANT = TokenType.INTEGER_CONSTANT
STRING_CONSTANT = TokenType.STRING_CONSTANT

# A lookahead is a (type, value) pair; an empty value matches any token of that type
Lookahead = tuple[TokenType, str]

CLASS_VAR_LOOKAHEAD: tuple[Lookahead, ...] = (
    (KEYWORD, "static"),
    (KEYWORD, "field"),
)

SUBROUTINE_LOOKAHEAD: tuple[Lookahead, ...] = (
    (KEYWORD, "constructor"),
    (KEYWORD, "function"),
    (KEYWORD, "method"),
)

# Return types spelled as keywords; any identifier is also accepted
BUILTIN_RETURN_TYPES = ("void", "int", "char", "boolean")

# Expressions starting with one of these are a single term, no operator scan.
# The keyword entries match keyword tokens spelled like type tags.
SINGLE_TERM_LOOKAHEAD: tuple[Lookahead, ...] = (
    (KEYWORD, "integerConstant"),
    (KEYWORD, "stringConstant"),
    (KEYWORD, "keyword"),
    (KEYWORD, "identifier"),
    (SYMBOL, "("),
    (SYMBOL, "-"),
    (SYMBOL, "~"),
)

BINARY_OPERATOR_LOOKAHEAD: tuple[Lookahead, ...] = tuple(
    (SYMBOL, op) for op in ("+", "-", "*", "/", "&", "|", "<", ">", "=")
)

# Terms that are exactly one token, kept under their own type
LEAF_TERM_LOOKAHEAD: tuple[Lookahead, ...] = (
    (INTEGER_CONSTANT, ""),
    (STRING_CONSTANT, ""),
    (KEYWORD, "true"),
    (KEYWORD, "false"),
    (KEYWORD, "null"),
    (KEYWORD, "this"),
    (IDENTIFIER, ""),
)

UNARY_OPERATOR_LOOKAHEAD: tuple[Lookahead, ...] = (
    (SYMBOL, "-"),
    (SYMBOL, "~"),
)


@dataclass
class ParseResult:
    """
    Outcome of a parse that reports failure as a value instead of raising.

    Exactly one of ``tree`` and ``error`` is set.
    """

    tree: Optional[ParseTree] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ParseTree:
        """Return the tree, or raise the stored ParseError."""
        if self.error is not None:
            raise self.error
        return self.tree


class CompilerParser:
    """
    Recursive descent parser for a single class definition.

    The parser copies the token sequence at construction and owns a cursor
    over it. An instance is single-use and not reentrant.

    Usage:
        parser = CompilerParser(tokens)
        tree = parser.parse()
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        """
        Initialize the parser.

        Args:
            tokens: The complete token sequence for one compilation unit
        """
        self.tokens: list[Token] = list(tokens)
        self.pos = 0

    # -------------------------------------------------------------------------
    # Cursor primitives
    # -------------------------------------------------------------------------

    @property
    def remaining(self) -> tuple[Token, ...]:
        """The tokens not consumed yet, front first."""
        return tuple(self.tokens[self.pos:])

    def _is_at_end(self) -> bool:
        """Check if every token has been consumed."""
        return self.pos >= len(self.tokens)

    def current(self) -> Token:
        """Return the front token without consuming it."""
        if self._is_at_end():
            logger.debug("Read past end of input after %d tokens", self.pos)
            raise ParseError()
        return self.tokens[self.pos]

    def advance(self) -> None:
        """Drop the front token. Does nothing at end of input."""
        if not self._is_at_end():
            self.pos += 1

    def have(self, expected_type: str, expected_value: str = "") -> bool:
        """Check the front token's type and, if given, its value."""
        if self._is_at_end():
            return False
        token = self.tokens[self.pos]
        if token.type != expected_type:
            return False
        return not expected_value or token.value == expected_value

    def must_be(self, expected_type: str, expected_value: str = "") -> ParseTree:
        """Consume the front token as a leaf if it matches, else raise ParseError."""
        if self.have(expected_type, expected_value):
            return self._take()

        found = None if self._is_at_end() else self.tokens[self.pos]
        logger.debug(
            "Expected %s %r, found %r", expected_type, expected_value, found
        )
        raise ParseError(expected_type, expected_value, found)

    def _have_any(self, lookaheads: Iterable[Lookahead]) -> bool:
        """Check the front token against several lookaheads."""
        return any(self.have(kind, value) for kind, value in lookaheads)

    def _take(self, label: Optional[str] = None) -> ParseTree:
        """Consume the front token unconditionally, as a leaf under ``label``."""
        token = self.current()
        self.advance()
        return ParseTree.from_token(token, label)

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def parse(self, entry: str = "class") -> ParseTree:
        """
        Parse the token stream from a named entry rule.

        Args:
            entry: "class" for a full class, "program" for the fixed
                ``class Main { }`` shape

        Returns:
            The root of the parse tree

        Raises:
            ParseError: If the tokens do not match the grammar, or nest
                deeper than the interpreter's recursion limit
            ValueError: If ``entry`` is not a known entry rule
        """
        try:
            rule = ENTRY_RULES[entry]
        except KeyError:
            raise ValueError(f"Unknown entry rule: {entry!r}") from None

        logger.debug("Parsing %d tokens from entry rule %r", len(self.tokens), entry)
        try:
            tree = rule(self)
        except RecursionError:
            logger.debug("Nesting too deep at token %d", self.pos)
            token = None if self._is_at_end() else self.tokens[self.pos]
            raise ParseError(token=token) from None

        if not self._is_at_end():
            logger.debug(
                "%d trailing tokens left after %r", len(self.tokens) - self.pos, entry
            )
        return tree

    # -------------------------------------------------------------------------
    # Program structure
    # -------------------------------------------------------------------------

    def compile_program(self) -> ParseTree:
        """Parse the fixed compilation unit ``class Main { }``."""
        result = ParseTree("class")
        result.add_child(self.must_be(KEYWORD, "class"))
        result.add_child(self.must_be(IDENTIFIER, "Main"))
        result.add_child(self.must_be(SYMBOL, "{"))
        result.add_child(self.must_be(SYMBOL, "}"))
        return result

    def compile_class(self) -> ParseTree:
        """
        Parse a class.

        At most one classVarDec group and one subroutine are attached, in
        that order; anything else before the closing brace is an error.
        """
        result = ParseTree("class")
        result.add_child(self.must_be(KEYWORD, "class"))
        result.add_child(self.must_be(IDENTIFIER, "Main"))
        result.add_child(self.must_be(SYMBOL, "{"))

        if self._have_any(CLASS_VAR_LOOKAHEAD):
            result.add_child(self.compile_class_var_dec())

        if self._have_any(SUBROUTINE_LOOKAHEAD):
            result.add_child(self.compile_subroutine())

        result.add_child(self.must_be(SYMBOL, "}"))
        return result

    def compile_class_var_dec(self) -> ParseTree:
        """Parse a static or field declaration: kind, type, names, semicolon."""
        result = ParseTree("classVarDec")
        result.add_child(self._take(KEYWORD))
        result.add_child(self._take(KEYWORD))

        while True:
            if self.current().type == IDENTIFIER:
                result.add_child(self._take())
            elif self.have(SYMBOL, ","):
                result.add_child(self._take())
            elif self.have(SYMBOL, ";"):
                result.add_child(self._take())
                break
            else:
                raise ParseError(SYMBOL, ";", self.current())

        return result

    def compile_subroutine(self) -> ParseTree:
        """Parse a constructor, function or method declaration."""
        result = ParseTree("subroutine")
        result.add_child(self._take(KEYWORD))

        return_type = self.current()
        if return_type.value in BUILTIN_RETURN_TYPES:
            result.add_child(self._take(KEYWORD))
        elif return_type.type == IDENTIFIER:
            result.add_child(self._take(IDENTIFIER))
        else:
            raise ParseError(IDENTIFIER, "", return_type)

        result.add_child(self._take(IDENTIFIER))
        result.add_child(self.must_be(SYMBOL, "("))
        result.add_child(self.compile_parameter_list())
        result.add_child(self.must_be(SYMBOL, ")"))
        result.add_child(self.compile_subroutine_body())
        return result

    def compile_parameter_list(self) -> ParseTree:
        """Parse zero or more ``type name`` pairs separated by commas."""
        result = ParseTree("parameterList")
        if self.have(SYMBOL, ")"):
            return result

        result.add_child(self._take(KEYWORD))
        result.add_child(self._take(IDENTIFIER))

        while self.have(SYMBOL, ","):
            result.add_child(self.must_be(SYMBOL, ","))
            result.add_child(self._take(KEYWORD))
            result.add_child(self._take(IDENTIFIER))

        return result

    def compile_subroutine_body(self) -> ParseTree:
        """Parse ``{ [varDec] statements }``."""
        result = ParseTree("subroutineBody")
        result.add_child(self.must_be(SYMBOL, "{"))

        if self.have(KEYWORD, "var"):
            result.add_child(self.compile_var_dec())

        result.add_child(self.compile_statements())
        result.add_child(self.must_be(SYMBOL, "}"))
        return result

    def compile_var_dec(self) -> ParseTree:
        """Parse ``var type name (, name)* ;``."""
        result = ParseTree("varDec")
        result.add_child(self.must_be(KEYWORD, "var"))
        result.add_child(self._take(KEYWORD))
        result.add_child(self._take(IDENTIFIER))

        while self.have(SYMBOL, ","):
            result.add_child(self.must_be(SYMBOL, ","))
            result.add_child(self._take(IDENTIFIER))

        result.add_child(self.must_be(SYMBOL, ";"))
        return result

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def compile_statements(self) -> ParseTree:
        """Parse statements until the front token does not start one."""
        result = ParseTree("statements")
        while True:
            rule = self._statement_rule()
            if rule is None:
                return result
            result.add_child(rule(self))

    def _statement_rule(self) -> Optional[Callable[["CompilerParser"], ParseTree]]:
        """Look up the statement rule for the front token, if any."""
        if self._is_at_end():
            return None
        token = self.tokens[self.pos]
        if token.type != KEYWORD:
            return None
        return STATEMENT_RULES.get(token.value)

    def compile_let(self) -> ParseTree:
        """Parse ``let name [ [expr] ] = expr ;``."""
        result = ParseTree("letStatement")
        result.add_child(self.must_be(KEYWORD, "let"))
        result.add_child(self._take(IDENTIFIER))

        if self.have(SYMBOL, "["):
            result.add_child(self.must_be(SYMBOL, "["))
            result.add_child(self.compile_expression())
            result.add_child(self.must_be(SYMBOL, "]"))

        result.add_child(self.must_be(SYMBOL, "="))
        result.add_child(self.compile_expression())
        result.add_child(self.must_be(SYMBOL, ";"))
        return result

    def compile_if(self) -> ParseTree:
        """Parse an if statement with an optional else block."""
        result = ParseTree("ifStatement")
        result.add_child(self.must_be(KEYWORD, "if"))
        result.add_child(self.must_be(SYMBOL, "("))
        result.add_child(self.compile_expression())
        result.add_child(self.must_be(SYMBOL, ")"))
        result.add_child(self.must_be(SYMBOL, "{"))
        result.add_child(self.compile_statements())
        result.add_child(self.must_be(SYMBOL, "}"))

        if self.have(KEYWORD, "else"):
            result.add_child(self.must_be(KEYWORD, "else"))
            result.add_child(self.must_be(SYMBOL, "{"))
            result.add_child(self.compile_statements())
            result.add_child(self.must_be(SYMBOL, "}"))

        return result

    def compile_while(self) -> ParseTree:
        """Parse ``while ( expr ) { statements }``."""
        result = ParseTree("whileStatement")
        result.add_child(self.must_be(KEYWORD, "while"))
        result.add_child(self.must_be(SYMBOL, "("))
        result.add_child(self.compile_expression())
        result.add_child(self.must_be(SYMBOL, ")"))
        result.add_child(self.must_be(SYMBOL, "{"))
        result.add_child(self.compile_statements())
        result.add_child(self.must_be(SYMBOL, "}"))
        return result

    def compile_do(self) -> ParseTree:
        """Parse ``do expr ;``."""
        result = ParseTree("doStatement")
        result.add_child(self.must_be(KEYWORD, "do"))
        result.add_child(self.compile_expression())
        result.add_child(self.must_be(SYMBOL, ";"))
        return result

    def compile_return(self) -> ParseTree:
        """
        Parse a return statement.

        With a value, the expression is the last child and the terminating
        semicolon is left in the stream. Without one, a synthetic ``;`` leaf
        is appended and the real semicolon is not consumed either.
        """
        result = ParseTree("returnStatement")
        result.add_child(self.must_be(KEYWORD, "return"))

        if not self.have(SYMBOL, ";"):
            result.add_child(self.compile_expression())
        else:
            result.add_child(ParseTree.from_token(Token(SYMBOL, ";")))

        return result

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def compile_expression(self) -> ParseTree:
        """
        Parse an expression.

        Alternatives, in order:
            1. ``skip`` keyword: that keyword alone
            2. a single-term lookahead: one term, no operators
            3. ``;``: an empty expression
            4. otherwise: term (op term)*
        """
        result = ParseTree("expression")

        if self.have(KEYWORD, "skip"):
            result.add_child(self._take(KEYWORD))
            return result

        if self._have_any(SINGLE_TERM_LOOKAHEAD):
            result.add_child(self.compile_term())
            return result

        if self.have(SYMBOL, ";"):
            return result

        result.add_child(self.compile_term())

        while self._have_any(BINARY_OPERATOR_LOOKAHEAD):
            result.add_child(self._take(SYMBOL))
            result.add_child(self.compile_term())

        return result

    def compile_term(self) -> Optional[ParseTree]:
        """
        Parse a term.

        Returns None, without consuming anything, when the front token
        starts no term.
        """
        result = ParseTree("term")

        if self._have_any(LEAF_TERM_LOOKAHEAD):
            result.add_child(self._take())
        elif self.have(SYMBOL, "("):
            result.add_child(self.must_be(SYMBOL, "("))
            result.add_child(self.compile_expression())
            result.add_child(self.must_be(SYMBOL, ")"))
        elif self._have_any(UNARY_OPERATOR_LOOKAHEAD):
            result.add_child(self._take(SYMBOL))
            result.add_child(self.compile_term())
        else:
            logger.debug("No term starts at token %d", self.pos)
            return None

        return result

    def compile_expression_list(self) -> ParseTree:
        """Parse zero or more comma-separated expressions, up to ``)``."""
        result = ParseTree("expressionList")
        if self.have(SYMBOL, ")"):
            return result

        result.add_child(self.compile_expression())
        while self.have(SYMBOL, ","):
            result.add_child(self.must_be(SYMBOL, ","))
            result.add_child(self.compile_expression())

        return result


# Statement keyword -> rule
STATEMENT_RULES: dict[str, Callable[[CompilerParser], ParseTree]] = {
    "let": CompilerParser.compile_let,
    "if": CompilerParser.compile_if,
    "while": CompilerParser.compile_while,
    "do": CompilerParser.compile_do,
    "return": CompilerParser.compile_return,
}

ENTRY_RULES: dict[str, Callable[[CompilerParser], ParseTree]] = {
    "class": CompilerParser.compile_class,
    "program": CompilerParser.compile_program,
}
