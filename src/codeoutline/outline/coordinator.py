"""Per-file and batch definition extraction with error isolation.

Flow for one file::

    resolve_language(path)
        -> fallback pack:  parse_markdown(text)
        -> grammar pack:   registry -> parse() -> captures.run()
    -> synthesize() -> ExtractionResult

Every failure becomes an :class:`ExtractionError` value; nothing raised for
one file can abort a batch. Batch calls load each needed grammar once up
front and remember load failures for that call only.
"""

from __future__ import annotations

import contextvars
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from codeoutline.config.constants import DEFAULT_MAX_WORKERS, MIN_DEFINITION_LINES
from codeoutline.core.errors import ErrorCode, ExtractionError
from codeoutline.core.logging import clear_batch_id, get_batch_id, set_batch_id
from codeoutline.outline import captures as capture_extractor
from codeoutline.outline.grammars import GrammarRegistry, LoadedGrammar
from codeoutline.outline.languages import LanguagePack, resolve_language
from codeoutline.outline.models import ExtractionResult
from codeoutline.outline.parser import parse
from codeoutline.outline.synthesizer import (
    InlineMarkupPredicate,
    looks_like_inline_markup,
    split_source_lines,
    synthesize,
)

if TYPE_CHECKING:
    from codeoutline.config.models import CodeOutlineConfig

log = structlog.get_logger(__name__)

AccessCheck = Callable[[Path], bool]
Outcome = ExtractionResult | ExtractionError


class ExtractionCoordinator:
    """Orchestrates definition extraction for files and batches.

    Args:
        registry: Shared grammar registry (inject a fake in tests).
        min_lines: Minimum definition span in lines.
        max_workers: Default worker threads for batches; 1 is sequential.
        access_check: Optional veto; paths it rejects are skipped silently.
        is_inline_markup: Replaceable inline-markup heuristic.
    """

    def __init__(
        self,
        registry: GrammarRegistry,
        *,
        min_lines: int = MIN_DEFINITION_LINES,
        max_workers: int = DEFAULT_MAX_WORKERS,
        access_check: AccessCheck | None = None,
        is_inline_markup: InlineMarkupPredicate = looks_like_inline_markup,
    ) -> None:
        if min_lines < 1:
            raise ValueError(f"min_lines must be >= 1, got {min_lines}")
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._registry = registry
        self._min_lines = min_lines
        self._max_workers = max_workers
        self._access_check = access_check
        self._is_inline_markup = is_inline_markup

    @classmethod
    def from_config(
        cls,
        config: CodeOutlineConfig,
        registry: GrammarRegistry | None = None,
        access_check: AccessCheck | None = None,
    ) -> ExtractionCoordinator:
        return cls(
            registry or GrammarRegistry(),
            min_lines=config.extraction.min_lines,
            max_workers=config.extraction.max_workers,
            access_check=access_check,
        )

    @property
    def min_lines(self) -> int:
        return self._min_lines

    # ------------------------------------------------------------------
    # Single file
    # ------------------------------------------------------------------

    def extract_file(self, path: str | Path) -> Outcome | None:
        """Extract definitions from one file.

        Returns:
            ExtractionResult, an ExtractionError describing the failure, or
            None if the access check vetoed the path.
        """
        path = Path(path)
        if not self._is_allowed(path):
            return None

        pack = resolve_language(path)
        if pack is None:
            return self._fail(path, ExtractionError.unsupported_language(str(path)))

        grammar: LoadedGrammar | None = None
        if not pack.is_fallback:
            try:
                grammar = self._registry.load(pack.name)
            except ExtractionError as e:
                return self._fail(path, e)

        return self._guarded(path, pack, grammar)

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    def extract_directory(
        self,
        paths: Iterable[str | Path],
        max_workers: int | None = None,
    ) -> dict[Path, Outcome]:
        """Extract definitions from many files with per-file isolation.

        Grammars for all languages in the batch are loaded once before any
        file is processed. A grammar that fails to load is not retried for
        the rest of this call.

        Returns:
            Map of path to outcome in input order. Vetoed paths are absent.
        """
        previous_batch = get_batch_id()
        batch_id = set_batch_id()
        try:
            unique = list(dict.fromkeys(Path(p) for p in paths))
            allowed = [p for p in unique if self._is_allowed(p)]
            plan: dict[Path, LanguagePack | None] = {p: resolve_language(p) for p in allowed}

            failures: dict[str, ExtractionError] = {}
            loaded = self._registry.ensure_loaded(
                {pack.name for pack in plan.values() if pack is not None and not pack.is_fallback},
                failures,
            )

            def work(path: Path) -> Outcome:
                pack = plan[path]
                if pack is None:
                    return self._fail(path, ExtractionError.unsupported_language(str(path)))
                if pack.is_fallback:
                    return self._guarded(path, pack, None)
                if pack.name in failures:
                    return self._fail(path, failures[pack.name])
                grammar = loaded.get(pack.name)
                if grammar is None:
                    return self._fail(path, ExtractionError.unsupported_language(str(path)))
                return self._guarded(path, pack, grammar)

            workers = min(max_workers or self._max_workers, max(len(allowed), 1))
            if workers <= 1:
                outcomes = {path: work(path) for path in allowed}
            else:
                with ThreadPoolExecutor(max_workers=workers) as executor:
                    futures = {
                        path: executor.submit(contextvars.copy_context().run, work, path)
                        for path in allowed
                    }
                    outcomes = {path: future.result() for path, future in futures.items()}

            failed = sum(1 for o in outcomes.values() if isinstance(o, ExtractionError))
            log.info(
                "batch_extracted",
                batch_id=batch_id,
                files=len(outcomes),
                failed=failed,
                skipped=len(unique) - len(allowed),
                languages=sorted(loaded),
            )
            return outcomes
        finally:
            if previous_batch is None:
                clear_batch_id()
            else:
                set_batch_id(previous_batch)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _is_allowed(self, path: Path) -> bool:
        if self._access_check is None:
            return True
        try:
            allowed = self._access_check(path)
        except Exception as e:
            # Fail closed: a broken access check vetoes the path
            log.warning("access_check_failed", path=str(path), reason=str(e))
            return False
        if not allowed:
            log.debug("file_vetoed", path=str(path))
        return allowed

    def _guarded(self, path: Path, pack: LanguagePack, grammar: LoadedGrammar | None) -> Outcome:
        try:
            return self._extract(path, pack, grammar)
        except ExtractionError as e:
            return self._fail(path, e)
        except Exception as e:
            log.exception("file_extraction_crashed", path=str(path), language=pack.name)
            return self._fail(path, ExtractionError.unexpected(str(path), f"{type(e).__name__}: {e}"))

    def _extract(self, path: Path, pack: LanguagePack, grammar: LoadedGrammar | None) -> Outcome:
        try:
            source = path.read_bytes()
        except OSError as e:
            return self._fail(path, ExtractionError.io_failure(str(path), e.strerror or str(e)))

        text = source.decode("utf-8", errors="replace")
        if pack.fallback_parser is not None:
            found = pack.fallback_parser(text)
        else:
            assert grammar is not None
            result = parse(grammar, source)
            if result.error_count:
                log.debug("partial_parse", path=str(path), errors=result.error_count)
            found = capture_extractor.run(grammar.query, result.tree, language_id=pack.name)

        definitions = synthesize(
            found,
            split_source_lines(text),
            self._min_lines,
            self._is_inline_markup,
        )
        log.debug(
            "file_extracted",
            path=str(path),
            language=pack.name,
            definitions=len(definitions) if definitions else 0,
        )
        return ExtractionResult(path=path, language=pack.name, definitions=definitions)

    def _fail(self, path: Path, error: ExtractionError) -> ExtractionError:
        if error.code == ErrorCode.UNSUPPORTED_LANGUAGE:
            log.debug("file_unsupported", path=str(path))
        else:
            log.warning(
                "file_extraction_failed",
                path=str(path),
                error=error.error_name,
                reason=error.details.get("reason"),
            )
        return error
