"""
Unit tests for the ParseTree node type and its renderings.
"""

import json

from jackparse.compiler.parse_tree import ParseTree
from jackparse.compiler.tokens import Token, TokenType


def _class_tree() -> ParseTree:
    tree = ParseTree("class")
    for kind, value in [
        ("keyword", "class"),
        ("identifier", "Main"),
        ("symbol", "{"),
        ("symbol", "}"),
    ]:
        tree.add_child(ParseTree.from_token(Token(kind, value)))
    return tree


class TestParseTreeConstruction:
    """Tests for building trees."""

    def test_interior_node_defaults(self):
        node = ParseTree("statements")
        assert node.value == ""
        assert node.children == []
        assert not node.is_leaf

    def test_from_token(self):
        leaf = ParseTree.from_token(Token("identifier", "x"))
        assert leaf.label == "identifier"
        assert leaf.value == "x"
        assert leaf.is_leaf

    def test_from_token_with_label(self):
        """A leaf can be recorded under a different type label."""
        leaf = ParseTree.from_token(Token("identifier", "Point"), TokenType.KEYWORD)
        assert leaf.label == "keyword"
        assert type(leaf.label) is str

    def test_empty_string_constant_is_leaf(self):
        leaf = ParseTree.from_token(Token("stringConstant", ""))
        assert leaf.is_leaf

    def test_children_keep_insertion_order(self):
        tree = _class_tree()
        assert [child.value for child in tree.children] == ["class", "Main", "{", "}"]

    def test_add_none_is_ignored(self):
        """An absent term never becomes a child."""
        node = ParseTree("expression")
        node.add_child(None)
        assert node.children == []

    def test_structural_equality(self):
        assert _class_tree() == _class_tree()
        other = _class_tree()
        other.children[1].value = "Other"
        assert _class_tree() != other


class TestParseTreeQueries:
    """Tests for traversal helpers."""

    def test_leaf_values_in_order(self):
        expression = ParseTree("expression")
        term = ParseTree("term")
        term.add_child(ParseTree.from_token(Token("integerConstant", "1")))
        expression.add_child(term)
        expression.add_child(ParseTree.from_token(Token("symbol", "+")))
        term2 = ParseTree("term")
        term2.add_child(ParseTree.from_token(Token("identifier", "x")))
        expression.add_child(term2)
        assert expression.leaf_values() == ["1", "+", "x"]

    def test_empty_interior_has_no_leaves(self):
        assert list(ParseTree("parameterList").leaves()) == []

    def test_find_all(self):
        outer = ParseTree("term")
        inner = ParseTree("term")
        outer.add_child(ParseTree.from_token(Token("symbol", "-")))
        outer.add_child(inner)
        assert outer.find_all("term") == [outer, inner]
        assert outer.find_all("expression") == []


class TestParseTreeRendering:
    """Tests for text, XML and dict output."""

    def test_to_text(self):
        assert _class_tree().to_text() == (
            "class\n"
            "  keyword class\n"
            "  identifier Main\n"
            "  symbol {\n"
            "  symbol }"
        )

    def test_str_matches_text(self):
        tree = _class_tree()
        assert str(tree) == tree.to_text()

    def test_to_xml(self):
        assert _class_tree().to_xml() == (
            "<class>\n"
            "  <keyword> class </keyword>\n"
            "  <identifier> Main </identifier>\n"
            "  <symbol> { </symbol>\n"
            "  <symbol> } </symbol>\n"
            "</class>\n"
        )

    def test_to_xml_escapes_values(self):
        node = ParseTree("expression")
        node.add_child(ParseTree.from_token(Token("symbol", "<")))
        node.add_child(ParseTree.from_token(Token("symbol", "&")))
        xml = node.to_xml()
        assert "<symbol> &lt; </symbol>" in xml
        assert "<symbol> &amp; </symbol>" in xml

    def test_to_xml_empty_interior(self):
        assert ParseTree("parameterList").to_xml() == (
            "<parameterList>\n</parameterList>\n"
        )

    def test_to_dict_is_json_ready(self):
        data = _class_tree().to_dict()
        assert data["label"] == "class"
        assert data["children"][1] == {
            "label": "identifier",
            "value": "Main",
            "children": [],
        }
        assert json.loads(json.dumps(data)) == data
