"""Lazy tree-sitter grammar and query loading.

Grammars are imported and their definition queries compiled only for the
languages a request actually needs, then cached for the registry's lifetime.

Usage::

    registry = GrammarRegistry()
    failures: dict[str, ExtractionError] = {}
    loaded = registry.ensure_loaded({"python", "go"}, failures)
    loaded["python"].query  # compiled tree_sitter.Query

Loads are single-flight: concurrent first use of a language imports the
grammar once. Failures are reported, never cached, so a later call retries.
"""

from __future__ import annotations

import importlib
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from importlib.util import find_spec
from typing import Any

import structlog
import tree_sitter

from codeoutline.core.errors import ExtractionError
from codeoutline.outline.languages import PACKS, LanguagePack

log = structlog.get_logger(__name__)

LanguageLoader = Callable[[LanguagePack], Any]


@dataclass(frozen=True)
class LoadedGrammar:
    """A grammar and the definition query compiled against it."""

    language_id: str
    language: Any  # tree_sitter.Language
    query: Any  # tree_sitter.Query


def load_language(pack: LanguagePack) -> tree_sitter.Language:
    """Import a grammar module and wrap its language pointer.

    Uses ``pack.language_func`` for grammars that ship several languages
    (typescript/tsx, php, ocaml); ``language()`` otherwise.
    """
    if pack.grammar_module is None:
        raise ValueError(f"Language has no grammar: {pack.name}")
    module = importlib.import_module(pack.grammar_module)
    lang_fn = getattr(module, pack.language_func or "language")
    return tree_sitter.Language(lang_fn())


def is_grammar_installed(pack: LanguagePack) -> bool:
    """Check if a pack's grammar module is importable (without importing it)."""
    return pack.grammar_module is not None and find_spec(pack.grammar_module) is not None


class GrammarRegistry:
    """Process-wide cache of loaded grammars and compiled queries.

    Construct once and inject into :class:`ExtractionCoordinator`. Tests can
    pass their own ``packs`` table and ``loader``.
    """

    def __init__(
        self,
        packs: Mapping[str, LanguagePack] | None = None,
        loader: LanguageLoader = load_language,
    ) -> None:
        self._packs: dict[str, LanguagePack] = dict(PACKS if packs is None else packs)
        self._loader = loader
        self._cache: dict[str, LoadedGrammar] = {}
        self._lock = threading.Lock()
        self._load_locks: dict[str, threading.Lock] = {}

    @property
    def packs(self) -> Mapping[str, LanguagePack]:
        return self._packs

    def is_loaded(self, language_id: str) -> bool:
        return language_id in self._cache

    def loaded_languages(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._cache)

    def load(self, language_id: str) -> LoadedGrammar:
        """Load one language, raising ExtractionError on failure.

        Raises:
            ExtractionError: UNSUPPORTED_LANGUAGE for unknown or fallback-only
                ids, GRAMMAR_LOAD_FAILURE if the grammar cannot be imported,
                QUERY_EXECUTION_FAILURE if the query does not compile.
        """
        cached = self._cache.get(language_id)
        if cached is not None:
            return cached

        pack = self._packs.get(language_id)
        if pack is None or pack.is_fallback:
            raise ExtractionError.unsupported_language(language_id)

        with self._lock:
            load_lock = self._load_locks.setdefault(language_id, threading.Lock())

        with load_lock:
            # Another thread may have finished while we waited
            cached = self._cache.get(language_id)
            if cached is not None:
                return cached
            entry = self._load_pack(pack)
            with self._lock:
                self._cache[language_id] = entry
        return entry

    def ensure_loaded(
        self,
        language_ids: Iterable[str],
        failures: dict[str, ExtractionError] | None = None,
    ) -> dict[str, LoadedGrammar]:
        """Load every requested language that can be loaded.

        Unknown and fallback-only ids are omitted. A failing language is
        logged and, if ``failures`` is given, recorded there; it never
        affects the other languages in the request.
        """
        loaded: dict[str, LoadedGrammar] = {}
        for language_id in sorted(set(language_ids)):
            pack = self._packs.get(language_id)
            if pack is None:
                log.warning("unknown_language_skipped", language=language_id)
                continue
            if pack.is_fallback:
                log.debug("fallback_language_skipped", language=language_id)
                continue
            try:
                loaded[language_id] = self.load(language_id)
            except ExtractionError as e:
                log.warning(
                    "grammar_load_failed",
                    language=language_id,
                    error=e.error_name,
                    reason=e.details.get("reason"),
                )
                if failures is not None:
                    failures[language_id] = e
        return loaded

    def _load_pack(self, pack: LanguagePack) -> LoadedGrammar:
        try:
            language = self._loader(pack)
        except Exception as e:
            raise ExtractionError.grammar_load_failure(pack.name, f"{type(e).__name__}: {e}") from e

        try:
            query = tree_sitter.Query(language, pack.query)
        except Exception as e:
            raise ExtractionError.query_execution_failure(pack.name, str(e)) from e

        log.debug("grammar_loaded", language=pack.name)
        return LoadedGrammar(language_id=pack.name, language=language, query=query)
