"""Scan-based section parser for Markdown-like text.

Produces ``definition.section`` captures with the same span contract as
tree-sitter captures, so the output feeds the synthesizer unchanged.

Recognized headings:
- ATX: ``#`` run (1-6) + whitespace + text; level = run length
- Setext: non-blank text line followed by ``===`` (level 1) or ``---``
  (level 2), three or more characters

A section runs from its heading to the line before the next heading of the
same or higher rank, or to the last line. Fenced code blocks and a leading
front matter block never contain headings.
"""

from __future__ import annotations

import re

from codeoutline.outline.models import Capture
from codeoutline.outline.synthesizer import split_source_lines

SECTION_CAPTURE = "definition.section"

_ATX_RE = re.compile(r"^(#{1,6})\s+\S")
_SETEXT_RE = re.compile(r"^(={3,}|-{3,})\s*$")
_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


def _front_matter_end(lines: list[str]) -> int:
    """Index of the first line after a leading ``---`` metadata block."""
    if not lines or lines[0].strip() != "---":
        return 0
    for i in range(1, len(lines)):
        if lines[i].strip() in ("---", "..."):
            return i + 1
    return 0


def find_headings(lines: list[str]) -> list[tuple[int, int]]:
    """Return ``(line, level)`` for every heading, in document order."""
    headings: list[tuple[int, int]] = []
    fence: str | None = None  # opening marker run while inside a block
    prev_is_text = False

    for i in range(_front_matter_end(lines), len(lines)):
        line = lines[i]
        fence_match = _FENCE_RE.match(line)
        if fence_match:
            run, rest = fence_match.groups()
            if fence is None:
                fence = run
            elif run[0] == fence[0] and len(run) >= len(fence) and not rest.strip():
                fence = None
            else:
                continue
            prev_is_text = False
            continue
        if fence is not None:
            continue

        atx = _ATX_RE.match(line)
        if atx:
            headings.append((i, len(atx.group(1))))
            prev_is_text = False
            continue

        underline = _SETEXT_RE.match(line)
        if underline and prev_is_text:
            headings.append((i - 1, 1 if underline.group(1)[0] == "=" else 2))
            prev_is_text = False
            continue

        prev_is_text = bool(line.strip())

    return headings


def parse_markdown(source: str) -> list[Capture]:
    """Emit one ``definition.section`` capture per heading."""
    lines = split_source_lines(source)
    last_line = max(len(lines) - 1, 0)
    headings = find_headings(lines)

    captures: list[Capture] = []
    for idx, (start, level) in enumerate(headings):
        end = last_line
        for next_start, next_level in headings[idx + 1 :]:
            if next_level <= level:
                end = next_start - 1
                break
        captures.append(Capture(name=SECTION_CAPTURE, start_line=start, end_line=end))
    return captures
