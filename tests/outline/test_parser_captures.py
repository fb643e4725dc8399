"""Tests for parsing and mechanical capture extraction."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from codeoutline.core.errors import ErrorCode, ExtractionError
from codeoutline.outline import captures
from codeoutline.outline.grammars import GrammarRegistry, LoadedGrammar
from codeoutline.outline.parser import count_errors, parse


@pytest.fixture(scope="module")
def registry() -> GrammarRegistry:
    return GrammarRegistry()


@pytest.fixture
def python_grammar(registry: GrammarRegistry) -> LoadedGrammar:
    return registry.load("python")


PYTHON_SOURCE = b"""\
class Greeter:
    def greet(self, name):
        message = "hi " + name
        return message
"""


class TestParse:
    """Parsing behavior."""

    def test_valid_source_has_no_errors(self, python_grammar: LoadedGrammar) -> None:
        result = parse(python_grammar, PYTHON_SOURCE)

        assert result.language_id == "python"
        assert result.root_node.type == "module"
        assert result.error_count == 0

    def test_malformed_source_yields_partial_tree(self, python_grammar: LoadedGrammar) -> None:
        """Syntax errors are recovered from, not raised."""
        result = parse(python_grammar, b"def broken(:\n    pass\n\nclass Ok:\n    pass\n")

        assert result.error_count > 0
        assert result.root_node is not None

    def test_deterministic(self, python_grammar: LoadedGrammar) -> None:
        first = parse(python_grammar, PYTHON_SOURCE)
        second = parse(python_grammar, PYTHON_SOURCE)

        assert str(first.root_node) == str(second.root_node)

    def test_parser_fault_is_parse_failure(self, python_grammar: LoadedGrammar) -> None:
        with patch("codeoutline.outline.parser.tree_sitter.Parser") as parser_cls:
            parser_cls.return_value.parse.side_effect = RuntimeError("parser crashed")

            with pytest.raises(ExtractionError) as exc_info:
                parse(python_grammar, PYTHON_SOURCE)

        assert exc_info.value.code == ErrorCode.PARSE_FAILURE


class TestCountErrors:
    def test_counts_error_and_missing_nodes(self) -> None:
        def node(type_: str, *, missing: bool = False, children: list[Any] | None = None) -> Any:
            n = MagicMock()
            n.type = type_
            n.is_missing = missing
            n.children = children or []
            n.has_error = type_ == "ERROR" or missing or bool(children)
            return n

        root = node("module", children=[node("ERROR"), node(")", missing=True), node("ok")])
        root.children[2].has_error = False

        assert count_errors(root) == 2


class TestCaptureExtractor:
    """Query execution without filtering."""

    def test_returns_block_and_name_captures(self, python_grammar: LoadedGrammar) -> None:
        tree = parse(python_grammar, PYTHON_SOURCE).tree

        found = captures.run(python_grammar.query, tree, language_id="python")

        names = sorted(c.name for c in found)
        assert names == [
            "definition.class",
            "definition.function",
            "name.definition.class",
            "name.definition.function",
        ]

    def test_capture_spans_come_from_nodes(self, python_grammar: LoadedGrammar) -> None:
        tree = parse(python_grammar, PYTHON_SOURCE).tree

        found = captures.run(python_grammar.query, tree)
        by_name = {c.name: c for c in found}

        assert (by_name["definition.class"].start_line, by_name["definition.class"].end_line) == (0, 3)
        assert (by_name["definition.function"].start_line, by_name["definition.function"].end_line) == (
            1,
            3,
        )
        name_capture = by_name["name.definition.function"]
        assert name_capture.start_line == name_capture.end_line == 1
        assert name_capture.node.parent.type == "function_definition"

    def test_no_matches_returns_empty_list(self, python_grammar: LoadedGrammar) -> None:
        tree = parse(python_grammar, b"x = 1\n").tree
        assert captures.run(python_grammar.query, tree) == []

    def test_cursor_failure_is_query_execution_failure(self, python_grammar: LoadedGrammar) -> None:
        tree = parse(python_grammar, PYTHON_SOURCE).tree

        with patch("codeoutline.outline.captures.QueryCursor", side_effect=RuntimeError("bad")):
            with pytest.raises(ExtractionError) as exc_info:
                captures.run(python_grammar.query, tree, language_id="python")

        assert exc_info.value.code == ErrorCode.QUERY_EXECUTION_FAILURE
        assert exc_info.value.details["language"] == "python"
