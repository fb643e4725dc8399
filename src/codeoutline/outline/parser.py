"""Tree-sitter parsing.

Tree-sitter grammars recover from malformed input, so syntax errors yield a
partial tree (``error_count > 0``) rather than an exception. Only a fault in
the parser itself raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import tree_sitter

from codeoutline.core.errors import ExtractionError
from codeoutline.outline.grammars import LoadedGrammar


@dataclass
class ParseResult:
    """Result of parsing one source buffer."""

    tree: Any  # Tree-sitter Tree (not serializable)
    root_node: Any  # Tree-sitter Node
    language_id: str
    error_count: int


def parse(grammar: LoadedGrammar, source: bytes) -> ParseResult:
    """Parse ``source`` with ``grammar``.

    A fresh ``tree_sitter.Parser`` is created per call; parsers are cheap
    and not safe to share across threads, while the grammar is.

    Raises:
        ExtractionError: PARSE_FAILURE if the parser faults.
    """
    try:
        parser = tree_sitter.Parser(grammar.language)
        tree = parser.parse(source)
    except Exception as e:
        raise ExtractionError.parse_failure(grammar.language_id, str(e)) from e
    if tree is None:
        raise ExtractionError.parse_failure(grammar.language_id, "parser returned no tree")

    root = tree.root_node
    return ParseResult(
        tree=tree,
        root_node=root,
        language_id=grammar.language_id,
        error_count=count_errors(root) if root.has_error else 0,
    )


def count_errors(root: Any) -> int:
    """Count ERROR and missing nodes (iterative; deep trees are common)."""
    errors = 0
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            errors += 1
        if node.has_error:
            stack.extend(node.children)
    return errors
