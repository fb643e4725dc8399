"""Outline module - multi-language definition extraction.

This module provides:
- Language table: extension/filename -> grammar + definition query
- GrammarRegistry: lazy, single-flight grammar and query loading
- Parsing and capture extraction over tree-sitter trees
- Markdown section scanning for formats without a grammar
- Synthesis of captures into ordered, deduplicated DefinitionRecords

Public entry point is ExtractionCoordinator (single file and batch).
"""

from codeoutline.outline.coordinator import ExtractionCoordinator
from codeoutline.outline.fallback import parse_markdown
from codeoutline.outline.grammars import GrammarRegistry, LoadedGrammar, load_language
from codeoutline.outline.languages import (
    PACKS,
    LanguagePack,
    get_pack,
    resolve_language,
    supported_extensions,
)
from codeoutline.outline.models import Capture, DefinitionRecord, ExtractionResult
from codeoutline.outline.synthesizer import looks_like_inline_markup, synthesize

__all__ = [
    "PACKS",
    "Capture",
    "DefinitionRecord",
    "ExtractionCoordinator",
    "ExtractionResult",
    "GrammarRegistry",
    "LanguagePack",
    "LoadedGrammar",
    "get_pack",
    "load_language",
    "looks_like_inline_markup",
    "parse_markdown",
    "resolve_language",
    "supported_extensions",
    "synthesize",
]
