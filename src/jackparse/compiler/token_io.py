"""
Reading and writing token streams.

Two on-disk layouts are supported:

- Tokenizer XML: a ``<tokens>`` root whose children are named after the
  token type, with the value padded by one space on each side::

      <tokens>
      <keyword> class </keyword>
      <identifier> Main </identifier>
      </tokens>

- JSON: an array of ``{"type": ..., "value": ...}`` objects.
"""

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from jackparse.compiler.tokens import Token, TokenType
from jackparse.utils.errors import SourceLocation, TokenFormatError

logger = logging.getLogger(__name__)


def _unpad(text: Optional[str]) -> str:
    """Strip the single space the tokenizer writes around each value."""
    text = text or ""
    if text.startswith(" "):
        text = text[1:]
    if text.endswith(" "):
        text = text[:-1]
    return text


def tokens_from_xml(text: str, filename: Optional[str] = None) -> list[Token]:
    """
    Read tokens from tokenizer XML.

    Each token's location records its position in the stream as the line.

    Raises:
        TokenFormatError: If the document is not a well-formed ``<tokens>`` list
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise TokenFormatError(f"Malformed token XML: {e}") from e

    if root.tag != "tokens":
        raise TokenFormatError(f"Expected a <tokens> root element, found <{root.tag}>")

    tokens: list[Token] = []
    for index, element in enumerate(root, start=1):
        location = SourceLocation(index, offset=index - 1, filename=filename)
        if not TokenType.is_tag(element.tag):
            raise TokenFormatError(f"Unknown token type <{element.tag}>", location)
        tokens.append(Token(element.tag, _unpad(element.text), location))

    logger.debug("Read %d tokens from XML %s", len(tokens), filename or "<string>")
    return tokens


def tokens_from_json(text: str, filename: Optional[str] = None) -> list[Token]:
    """
    Read tokens from a JSON array of ``{"type", "value"}`` objects.

    Raises:
        TokenFormatError: If the document is not such an array
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TokenFormatError(f"Malformed token JSON: {e}") from e

    if not isinstance(data, list):
        raise TokenFormatError("Expected a JSON array of tokens")

    tokens: list[Token] = []
    for index, entry in enumerate(data, start=1):
        location = SourceLocation(index, offset=index - 1, filename=filename)
        if not isinstance(entry, dict):
            raise TokenFormatError("Token entry is not an object", location)

        kind = entry.get("type")
        value = entry.get("value")
        if not isinstance(kind, str) or not isinstance(value, str):
            raise TokenFormatError("Token needs string 'type' and 'value'", location)
        if not TokenType.is_tag(kind):
            raise TokenFormatError(f"Unknown token type {kind!r}", location)

        tokens.append(Token(kind, value, location))

    logger.debug("Read %d tokens from JSON %s", len(tokens), filename or "<string>")
    return tokens


# File suffix -> reader
TOKEN_READERS = {
    ".xml": tokens_from_xml,
    ".json": tokens_from_json,
}


def load_tokens(path: Path) -> list[Token]:
    """
    Load a token file, choosing the reader by file suffix.

    Raises:
        TokenFormatError: If the suffix is unsupported or the content is malformed
    """
    path = Path(path)
    reader = TOKEN_READERS.get(path.suffix.lower())
    if reader is None:
        supported = ", ".join(sorted(TOKEN_READERS))
        raise TokenFormatError(
            f"Unsupported token file '{path.name}' (expected one of: {supported})"
        )
    return reader(path.read_text(encoding="utf-8"), str(path))


def tokens_to_xml(tokens: Iterable[Token]) -> str:
    """Write tokens as tokenizer XML."""
    lines = ["<tokens>"]
    for token in tokens:
        lines.append(f"<{token.type}> {escape(token.value)} </{token.type}>")
    lines.append("</tokens>")
    return "\n".join(lines) + "\n"


def tokens_to_json(tokens: Iterable[Token]) -> str:
    """Write tokens as a JSON array."""
    return json.dumps(
        [{"type": token.type, "value": token.value} for token in tokens],
        indent=2,
    )
