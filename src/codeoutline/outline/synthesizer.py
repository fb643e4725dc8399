"""Capture-to-outline synthesis.

Turns raw query captures (from tree-sitter or a fallback text parser) into
the ordered, deduplicated list of :class:`DefinitionRecord`. The pipeline:

1. Keep captures tagged ``definition``; drop helpers.
2. Resolve the span. ``name.definition.*`` captures tag an identifier, so
   the span comes from the identifier's parent (the declaration).
3. Drop spans shorter than ``min_lines``.
4. Stable-sort by start line.
5. Skip spans already emitted (export wrapper + inner declaration, or a
   block capture + its name capture).
6. Drop block captures whose first line looks like inline markup
   (``<div>``, ``<span>`` ...). Name captures are exempt.
7. Label each record with the trimmed source line at its start.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from codeoutline.config.constants import MIN_DEFINITION_LINES
from codeoutline.outline.models import Capture, DefinitionRecord

DEFINITION_TAG = "definition"
NAME_DEFINITION_TAG = "name.definition"

InlineMarkupPredicate = Callable[[str], bool]

# Content-level tags only. Structural tags (html, head, body, nav, section,
# template, script, style ...) stay in HTML outlines.
INLINE_MARKUP_ELEMENTS: frozenset[str] = frozenset(
    {
        "a", "abbr", "b", "blockquote", "br", "button", "canvas", "caption",
        "cite", "code", "dd", "del", "details", "dfn", "div", "dl", "dt",
        "em", "fieldset", "figcaption", "figure", "form", "h1", "h2", "h3",
        "h4", "h5", "h6", "hr", "i", "iframe", "img", "input", "ins", "kbd",
        "label", "legend", "li", "mark", "ol", "optgroup", "option", "p",
        "picture", "pre", "q", "s", "samp", "select", "small", "source",
        "span", "strong", "sub", "summary", "sup", "svg", "table", "tbody",
        "td", "textarea", "tfoot", "th", "thead", "time", "tr", "u", "ul",
        "var", "video",
    }
)  # fmt: skip

_TAG_RE = re.compile(r"^</?([A-Za-z][A-Za-z0-9-]*)")


def looks_like_inline_markup(line: str) -> bool:
    """Heuristic: does this line open (or close) a lowercase inline element?

    Capitalized tags (``<Layout>``) are components and never match.
    """
    match = _TAG_RE.match(line.strip())
    return match is not None and match.group(1) in INLINE_MARKUP_ELEMENTS


def split_source_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, matching tree-sitter row numbering.

    A trailing newline does not open an extra empty line.
    """
    lines = text.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


@dataclass(frozen=True)
class _Candidate:
    start_line: int
    end_line: int
    from_name: bool


def _resolve_span(capture: Capture, from_name: bool) -> tuple[int, int]:
    node = capture.node
    if node is None:
        return capture.start_line, capture.end_line
    if from_name and node.parent is not None:
        node = node.parent
    return node.start_point[0], node.end_point[0]


def synthesize(
    captures: Sequence[Capture],
    source_lines: Sequence[str],
    min_lines: int = MIN_DEFINITION_LINES,
    is_inline_markup: InlineMarkupPredicate = looks_like_inline_markup,
) -> list[DefinitionRecord] | None:
    """Build the outline for one file.

    Args:
        captures: Raw captures in query order.
        source_lines: File content split with :func:`split_source_lines`.
        min_lines: Minimum inclusive span length for a definition.
        is_inline_markup: Predicate applied to block captures' first line.

    Returns:
        Records sorted by start line, or ``None`` if none qualified.
    """
    if min_lines < 1:
        raise ValueError(f"min_lines must be >= 1, got {min_lines}")

    candidates: list[_Candidate] = []
    for capture in captures:
        if DEFINITION_TAG not in capture.name:
            continue
        from_name = NAME_DEFINITION_TAG in capture.name
        start_line, end_line = _resolve_span(capture, from_name)
        if end_line - start_line + 1 < min_lines:
            continue
        candidates.append(_Candidate(start_line, end_line, from_name))

    # list.sort is stable: ties keep query order
    candidates.sort(key=lambda c: c.start_line)

    records: list[DefinitionRecord] = []
    emitted: set[tuple[int, int]] = set()
    for candidate in candidates:
        key = (candidate.start_line, candidate.end_line)
        if key in emitted:
            continue

        first_line = (
            source_lines[candidate.start_line].strip()
            if candidate.start_line < len(source_lines)
            else ""
        )
        if not candidate.from_name and is_inline_markup(first_line):
            continue

        records.append(DefinitionRecord(candidate.start_line, candidate.end_line, first_line))
        emitted.add(key)

    return records or None
