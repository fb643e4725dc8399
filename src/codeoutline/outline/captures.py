"""Mechanical query execution: compiled query + tree -> captures."""

from __future__ import annotations

from typing import Any

from tree_sitter import QueryCursor

from codeoutline.core.errors import ExtractionError
from codeoutline.outline.models import Capture


def run(query: Any, tree: Any, *, language_id: str = "unknown") -> list[Capture]:
    """Run ``query`` over ``tree`` and flatten matches in match order.

    No filtering or labeling happens here.

    Raises:
        ExtractionError: QUERY_EXECUTION_FAILURE if the query cannot run
            against the tree.
    """
    try:
        cursor = QueryCursor(query)
        matches: list[tuple[int, dict[str, list[Any]]]] = cursor.matches(tree.root_node)
    except Exception as e:
        raise ExtractionError.query_execution_failure(language_id, str(e)) from e

    captures: list[Capture] = []
    for _pattern_idx, captured in matches:
        for name, nodes in captured.items():
            for node in nodes:
                captures.append(Capture.from_node(name, node))
    return captures
