"""
Concrete parse tree produced by the jackparse parser.

A node is either an interior node labelled with a grammar-rule name (empty
value, ordered children) or a leaf wrapping one token's type and value.
Children are only ever appended, in grammar order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional
from xml.sax.saxutils import escape

from jackparse.compiler.tokens import Token


@dataclass
class ParseTree:
    """
    A parse tree node.

    Attributes:
        label: Grammar-rule name for interior nodes, token type for leaves
        value: Empty for interior nodes, the token text for leaves
        children: Ordered child nodes
        terminal: True for leaves built from a token
    """

    label: str
    value: str = ""
    children: list[ParseTree] = field(default_factory=list)
    terminal: bool = False

    @classmethod
    def from_token(cls, token: Token, label: Optional[str] = None) -> ParseTree:
        """Wrap a token as a leaf, optionally under a different type label."""
        return cls(str(label) if label else token.type, token.value, terminal=True)

    def add_child(self, child: Optional[ParseTree]) -> None:
        """Append a child node. ``None`` (an unmatched term) is ignored."""
        if child is None:
            return
        self.children.append(child)

    @property
    def is_leaf(self) -> bool:
        """Check if this node wraps a token rather than a grammar rule."""
        return self.terminal

    def leaves(self) -> Iterator[ParseTree]:
        """Yield every leaf below this node, left to right."""
        if self.is_leaf:
            yield self
            return
        for child in self.children:
            yield from child.leaves()

    def leaf_values(self) -> list[str]:
        """Token values of all leaves, in input order."""
        return [leaf.value for leaf in self.leaves()]

    def find_all(self, label: str) -> list[ParseTree]:
        """Collect every node (including this one) carrying ``label``, pre-order."""
        found = [self] if self.label == label else []
        for child in self.children:
            found.extend(child.find_all(label))
        return found

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def to_text(self, indent: int = 0) -> str:
        """Render as indented ``label value`` lines, two spaces per level."""
        lines: list[str] = []
        self._text_lines(indent, lines)
        return "\n".join(lines)

    def _text_lines(self, depth: int, lines: list[str]) -> None:
        prefix = "  " * depth
        if self.value:
            lines.append(f"{prefix}{self.label} {self.value}")
        else:
            lines.append(f"{prefix}{self.label}")
        for child in self.children:
            child._text_lines(depth + 1, lines)

    def to_xml(self) -> str:
        """Render in the tokenizer's XML layout, leaves as ``<type> value </type>``."""
        lines: list[str] = []
        self._xml_lines(0, lines)
        return "\n".join(lines) + "\n"

    def _xml_lines(self, depth: int, lines: list[str]) -> None:
        prefix = "  " * depth
        if self.is_leaf:
            lines.append(f"{prefix}<{self.label}> {escape(self.value)} </{self.label}>")
            return
        lines.append(f"{prefix}<{self.label}>")
        for child in self.children:
            child._xml_lines(depth + 1, lines)
        lines.append(f"{prefix}</{self.label}>")

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain dicts and lists, ready for ``json.dumps``."""
        return {
            "label": self.label,
            "value": self.value,
            "children": [child.to_dict() for child in self.children],
        }

    def __str__(self) -> str:
        return self.to_text()
