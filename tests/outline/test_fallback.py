"""Tests for the Markdown section scanner."""

from codeoutline.outline.fallback import SECTION_CAPTURE, find_headings, parse_markdown
from codeoutline.outline.models import DefinitionRecord
from codeoutline.outline.synthesizer import split_source_lines, synthesize


def spans(source: str) -> list[tuple[int, int]]:
    return [(c.start_line, c.end_line) for c in parse_markdown(source)]


class TestParseMarkdown:
    """Section spans from ATX headings."""

    def test_two_top_level_headings(self) -> None:
        """Headings at 0 and 5 split the document into [0,4] and [5,last]."""
        source = "# One\na\nb\nc\nd\n# Two\ne\nf\ng\n"

        captures = parse_markdown(source)

        assert [(c.start_line, c.end_line) for c in captures] == [(0, 4), (5, 8)]
        assert all(c.name == SECTION_CAPTURE and c.node is None for c in captures)

    def test_two_headings_through_synthesizer(self) -> None:
        """Fallback output feeds the synthesizer unchanged."""
        source = "# One\na\nb\nc\nd\n# Two\ne\nf\ng\n"

        result = synthesize(parse_markdown(source), split_source_lines(source))

        assert result == [DefinitionRecord(0, 4, "# One"), DefinitionRecord(5, 8, "# Two")]

    def test_subsections_end_at_same_or_higher_rank(self) -> None:
        source = "# A\n\n## B\nb\n\n## C\nc\n\n# D\nd\n"

        assert spans(source) == [(0, 7), (2, 4), (5, 7), (8, 9)]

    def test_deeper_heading_does_not_end_section(self) -> None:
        source = "## A\n### B\nx\n#### C\ny\n"

        assert spans(source) == [(0, 4), (1, 4), (3, 4)]

    def test_marker_needs_whitespace(self) -> None:
        """'#tag' and '#######' runs are not headings."""
        assert spans("#tag\n####### seven\ntext\n") == []

    def test_empty_document(self) -> None:
        assert parse_markdown("") == []


class TestSetextHeadings:
    """Underlined headings."""

    def test_equals_is_level_one_dash_is_level_two(self) -> None:
        source = "Title\n=====\nintro\n\nPart\n----\nbody\n"

        assert find_headings(split_source_lines(source)) == [(0, 1), (4, 2)]
        assert spans(source) == [(0, 6), (4, 6)]

    def test_rule_after_blank_line_is_not_heading(self) -> None:
        """A '---' with no text above is a thematic break."""
        assert find_headings(["text", "", "---", "more"]) == []

    def test_short_underline_ignored(self) -> None:
        assert find_headings(["Title", "=="]) == []


class TestBlocksWithoutHeadings:
    def test_fenced_code_is_skipped(self) -> None:
        source = "# Real\n```python\n# comment, not a heading\n```\n~~~\n## nope\n~~~\n"

        assert find_headings(split_source_lines(source)) == [(0, 1)]

    def test_fence_with_info_string_does_not_close(self) -> None:
        """Only a bare marker run closes a block."""
        source = "```\n```python\n# still code\n```\n# After\n"

        assert find_headings(split_source_lines(source)) == [(4, 1)]

    def test_shorter_run_does_not_close(self) -> None:
        source = "````\n```\n# still code\n````\n# After\n"

        assert find_headings(split_source_lines(source)) == [(4, 1)]

    def test_other_marker_does_not_close(self) -> None:
        source = "~~~\n```\n# still code\n~~~\n# After\n"

        assert find_headings(split_source_lines(source)) == [(4, 1)]

    def test_longer_run_closes(self) -> None:
        source = "```\ncode\n`````  \n# After\n"

        assert find_headings(split_source_lines(source)) == [(3, 1)]

    def test_front_matter_is_skipped(self) -> None:
        source = "---\ntitle: Notes\n---\n# Heading\ntext\n"

        assert find_headings(split_source_lines(source)) == [(3, 1)]
