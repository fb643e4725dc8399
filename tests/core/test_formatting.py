"""Tests for outline formatting."""

from pathlib import Path

from codeoutline.core.errors import ExtractionError
from codeoutline.core.formatting import (
    NO_DEFINITIONS,
    format_definition,
    format_definitions,
    format_outline,
    pluralize,
)
from codeoutline.outline.models import DefinitionRecord, ExtractionResult


class TestFormatDefinition:
    """Single record rendering."""

    def test_bounds_are_one_based(self) -> None:
        """Internal 0-based bounds are shifted by one on output."""
        record = DefinitionRecord(0, 2, "function add(a,b) {")
        assert format_definition(record) == "1--3 | function add(a,b) {"

    def test_multiple_records_one_per_line(self) -> None:
        records = [DefinitionRecord(0, 3, "class A:"), DefinitionRecord(5, 9, "def f():")]
        assert format_definitions(records) == "1--4 | class A:\n6--10 | def f():"


class TestFormatOutline:
    """Per-file section rendering."""

    def test_result_with_definitions(self) -> None:
        result = ExtractionResult(
            path=Path("/repo/a.py"),
            language="python",
            definitions=[DefinitionRecord(0, 3, "def f():")],
        )
        assert format_outline(result.path, result) == "# a.py\n1--4 | def f():"

    def test_result_without_definitions(self) -> None:
        """An empty result renders a note, not an error."""
        result = ExtractionResult(path=Path("a.py"), language="python", definitions=None)
        assert format_outline("a.py", result) == f"# a.py\n{NO_DEFINITIONS}"

    def test_error_renders_kind_and_message(self) -> None:
        """Failures are one line under the header."""
        error = ExtractionError.unsupported_language("notes.xyz")
        rendered = format_outline("notes.xyz", error)

        assert rendered.startswith("# notes.xyz\n[UNSUPPORTED_LANGUAGE] ")
        assert "notes.xyz" in rendered.splitlines()[1]


class TestPluralize:
    def test_singular(self) -> None:
        assert pluralize(1, "file") == "1 file"

    def test_plural(self) -> None:
        assert pluralize(0, "file") == "0 files"
        assert pluralize(3, "file") == "3 files"
