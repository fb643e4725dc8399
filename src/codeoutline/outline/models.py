"""Value types shared by the outline pipeline.

All line numbers are 0-based and inclusive. Conversion to 1-based happens
only in :mod:`codeoutline.core.formatting`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Capture:
    """One (node, tag) pair produced by a structural query.

    ``node`` is the tree-sitter node, or ``None`` for captures produced by a
    fallback text parser (their span is authoritative).
    """

    name: str
    start_line: int
    end_line: int
    start_byte: int | None = None
    end_byte: int | None = None
    node: Any = None

    @classmethod
    def from_node(cls, name: str, node: Any) -> Capture:
        return cls(
            name=name,
            start_line=node.start_point[0],
            end_line=node.end_point[0],
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            node=node,
        )


@dataclass(frozen=True)
class DefinitionRecord:
    """A synthesized, line-range-bounded outline entry."""

    start_line: int
    end_line: int
    label: str

    def __post_init__(self) -> None:
        if self.start_line > self.end_line:
            raise ValueError(
                f"start_line ({self.start_line}) must not exceed end_line ({self.end_line})"
            )

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass
class ExtractionResult:
    """Definitions extracted from a single file.

    ``definitions`` is ``None`` when the file parsed but nothing qualified,
    which is distinct from an :class:`~codeoutline.core.errors.ExtractionError`.
    """

    path: Path
    language: str
    definitions: list[DefinitionRecord] | None = None

    @property
    def found(self) -> bool:
        return bool(self.definitions)
