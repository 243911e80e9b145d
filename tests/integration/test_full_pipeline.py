"""
Integration tests for the full token-file-to-tree pipeline.
"""

import pytest

from jackparse import ParseError, parse_file, parse_tokens, try_parse_tokens
from jackparse.cli import main
from jackparse.compiler.token_io import tokens_to_json, tokens_to_xml

COUNTER_SOURCE = (
    "class Main { "
    "static int count , limit ; "
    "function void main ( int start ) { "
    "var int i , total ; "
    "let i = start ; "
    "let total = 0 ; "
    "while ( i < limit ) { "
    "if ( i & 1 ) { let total = total + i ; } else { do skip ; } "
    "let count [ i ] = ~ total ; "
    "let i = i + 1 ; "
    "} "
    "} "
    "}"
)


@pytest.fixture
def counter_tokens(tokenize):
    return tokenize(COUNTER_SOURCE)


class TestPipelineFromFiles:
    """Parsing token files end to end."""

    @pytest.mark.parametrize("suffix", [".xml", ".json"])
    def test_parse_file(self, tmp_path, counter_tokens, suffix):
        """Both file formats give the same tree as the in-memory tokens."""
        writer = tokens_to_xml if suffix == ".xml" else tokens_to_json
        path = tmp_path / f"MainT{suffix}"
        path.write_text(writer(counter_tokens), encoding="utf-8")

        tree = parse_file(path)
        assert tree == parse_tokens(counter_tokens)

    def test_cli_writes_tree_xml(self, tmp_path, counter_tokens):
        source = tmp_path / "MainT.xml"
        source.write_text(tokens_to_xml(counter_tokens), encoding="utf-8")
        output = tmp_path / "Main.xml"

        assert main(["parse", str(source), "--format", "xml", "-o", str(output)]) == 0

        xml = output.read_text(encoding="utf-8")
        assert xml.startswith("<class>\n")
        assert xml.count("<letStatement>") == 5
        assert "<symbol> &amp; </symbol>" in xml
        assert "<parameterList>" in xml


class TestPipelineTreeShape:
    """Shape of a realistic class."""

    def test_top_level(self, counter_tokens):
        tree = parse_tokens(counter_tokens)
        assert [child.label for child in tree.children] == [
            "keyword",
            "identifier",
            "symbol",
            "classVarDec",
            "subroutine",
            "symbol",
        ]

    def test_rule_counts(self, counter_tokens):
        tree = parse_tokens(counter_tokens)
        assert len(tree.find_all("letStatement")) == 5
        assert len(tree.find_all("whileStatement")) == 1
        assert len(tree.find_all("ifStatement")) == 1
        assert len(tree.find_all("doStatement")) == 1
        assert len(tree.find_all("varDec")) == 1

    def test_skip_expression(self, counter_tokens):
        """do skip ; holds a bare skip keyword in its expression."""
        tree = parse_tokens(counter_tokens)
        do_statement = tree.find_all("doStatement")[0]
        expression = do_statement.children[1]
        assert [(c.label, c.value) for c in expression.children] == [("keyword", "skip")]

    def test_leaves_match_tokens(self, counter_tokens):
        tree = parse_tokens(counter_tokens)
        assert tree.leaf_values() == [token.value for token in counter_tokens]


class TestPipelineErrors:
    """Fail-fast behaviour on malformed input."""

    @pytest.mark.parametrize(
        "source",
        [
            "class Main { static int x ; static int y ; }",
            "class Main { function void f ( ) { let x = 1 } }",
            "class Main { function void f ( ) { while x { } } }",
            "class Main { function void f ( ) { if ( x ) let y = 1 ; } }",
            "class Main { function void f ( ) { return ; } }",
            "class Main { function void f ( ) {",
            "",
        ],
    )
    def test_rejected(self, tokenize, source):
        tokens = tokenize(source)
        with pytest.raises(ParseError):
            parse_tokens(tokens)
        result = try_parse_tokens(tokens)
        assert not result.ok
        assert result.tree is None
