"""Outline formatting for terminal and document output.

Definition records are 0-based internally; this is the only place where
line numbers are shifted to 1-based.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from codeoutline.core.errors import ExtractionError

if TYPE_CHECKING:
    from codeoutline.outline.models import DefinitionRecord, ExtractionResult

NO_DEFINITIONS = "No source code definitions found."


def format_definition(record: DefinitionRecord) -> str:
    """Render one record as ``"<start>--<end> | <label>"`` (1-based).

    Example:
        DefinitionRecord(0, 2, "def f():") -> "1--3 | def f():"
    """
    return f"{record.start_line + 1}--{record.end_line + 1} | {record.label}"


def format_definitions(records: Iterable[DefinitionRecord]) -> str:
    return "\n".join(format_definition(r) for r in records)


def format_outline(path: str | Path, outcome: ExtractionResult | ExtractionError) -> str:
    """Render a per-file section: ``# <name>`` followed by records.

    Failures render as a one-line note so a listing never fails as a whole.
    """
    header = f"# {Path(path).name}"
    if isinstance(outcome, ExtractionError):
        return f"{header}\n[{outcome.kind}] {outcome.message}"
    if not outcome.definitions:
        return f"{header}\n{NO_DEFINITIONS}"
    return f"{header}\n{format_definitions(outcome.definitions)}"


def pluralize(count: int, noun: str) -> str:
    """Grammatically correct count: 1 file, 2 files."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
