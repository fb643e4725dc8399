"""Language registration table -- single source of truth for outline languages.

Every language CodeOutline understands has exactly ONE LanguagePack row:
- Grammar metadata (import module, non-standard loader function)
- File extension / exact filename detection
- Definition query text (see ``queries.py``)
- Or, for formats without a grammar, a fallback text parser

Adding a language is a data change here, never new control flow elsewhere.
``PACKS["python"]`` is the canonical lookup.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from codeoutline.outline import queries
from codeoutline.outline.fallback import parse_markdown
from codeoutline.outline.models import Capture

FallbackParser = Callable[[str], list[Capture]]


@dataclass(frozen=True)
class LanguagePack:
    """Registration row for a single language."""

    # -- Identity --
    name: str

    # -- Grammar --
    grammar_module: str | None = None  # Python import ("tree_sitter_python")
    grammar_package: str | None = None  # PyPI distribution ("tree-sitter-python")
    # Non-standard function name (e.g. "language_typescript", "language_tsx")
    language_func: str | None = None
    query: str = ""

    # -- Fallback (formats with no grammar) --
    fallback_parser: FallbackParser | None = None

    # -- File detection --
    extensions: frozenset[str] = field(default_factory=frozenset)
    filenames: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_fallback(self) -> bool:
        return self.fallback_parser is not None


def _grammar_pack(
    name: str,
    package: str,
    query: str,
    extensions: set[str],
    *,
    language_func: str | None = None,
    filenames: set[str] | None = None,
) -> LanguagePack:
    return LanguagePack(
        name=name,
        grammar_module=package.replace("-", "_"),
        grammar_package=package,
        language_func=language_func,
        query=query,
        extensions=frozenset(extensions),
        filenames=frozenset(filenames or ()),
    )


# =========================================================================
# Grammar-backed languages
# =========================================================================

PYTHON_PACK = _grammar_pack("python", "tree-sitter-python", queries.PYTHON_QUERY, {"py", "pyi", "pyw"})
JAVASCRIPT_PACK = _grammar_pack(
    "javascript",
    "tree-sitter-javascript",
    queries.JAVASCRIPT_QUERY,
    {"js", "jsx", "mjs", "cjs"},
)
TYPESCRIPT_PACK = _grammar_pack(
    "typescript",
    "tree-sitter-typescript",
    queries.TYPESCRIPT_QUERY,
    {"ts", "mts", "cts"},
    language_func="language_typescript",
)
TSX_PACK = _grammar_pack(
    "tsx",
    "tree-sitter-typescript",
    queries.TSX_QUERY,
    {"tsx"},
    language_func="language_tsx",
)
GO_PACK = _grammar_pack("go", "tree-sitter-go", queries.GO_QUERY, {"go"})
RUST_PACK = _grammar_pack("rust", "tree-sitter-rust", queries.RUST_QUERY, {"rs"})
JAVA_PACK = _grammar_pack("java", "tree-sitter-java", queries.JAVA_QUERY, {"java"})
KOTLIN_PACK = _grammar_pack("kotlin", "tree-sitter-kotlin", queries.KOTLIN_QUERY, {"kt", "kts"})
SCALA_PACK = _grammar_pack("scala", "tree-sitter-scala", queries.SCALA_QUERY, {"scala", "sc"})
C_PACK = _grammar_pack("c", "tree-sitter-c", queries.C_QUERY, {"c", "h"})
CPP_PACK = _grammar_pack(
    "cpp",
    "tree-sitter-cpp",
    queries.CPP_QUERY,
    {"cpp", "cc", "cxx", "hpp", "hh", "hxx"},
)
C_SHARP_PACK = _grammar_pack("c_sharp", "tree-sitter-c-sharp", queries.C_SHARP_QUERY, {"cs"})
SWIFT_PACK = _grammar_pack("swift", "tree-sitter-swift", queries.SWIFT_QUERY, {"swift"})
RUBY_PACK = _grammar_pack(
    "ruby",
    "tree-sitter-ruby",
    queries.RUBY_QUERY,
    {"rb", "rake", "gemspec"},
    filenames={"rakefile", "gemfile"},
)
PHP_PACK = _grammar_pack(
    "php", "tree-sitter-php", queries.PHP_QUERY, {"php"}, language_func="language_php"
)
LUA_PACK = _grammar_pack("lua", "tree-sitter-lua", queries.LUA_QUERY, {"lua"})
BASH_PACK = _grammar_pack("bash", "tree-sitter-bash", queries.BASH_QUERY, {"sh", "bash"})
OCAML_PACK = _grammar_pack(
    "ocaml", "tree-sitter-ocaml", queries.OCAML_QUERY, {"ml"}, language_func="language_ocaml"
)
HTML_PACK = _grammar_pack("html", "tree-sitter-html", queries.HTML_QUERY, {"html", "htm"})
CSS_PACK = _grammar_pack("css", "tree-sitter-css", queries.CSS_QUERY, {"css"})
TOML_PACK = _grammar_pack("toml", "tree-sitter-toml", queries.TOML_QUERY, {"toml"})

# =========================================================================
# Fallback-only formats
# =========================================================================

MARKDOWN_PACK = LanguagePack(
    name="markdown",
    fallback_parser=parse_markdown,
    extensions=frozenset({"md", "markdown", "mdx"}),
)


# =========================================================================
# Canonical registries
# =========================================================================

_ALL_PACKS: tuple[LanguagePack, ...] = (
    PYTHON_PACK,
    JAVASCRIPT_PACK,
    TYPESCRIPT_PACK,
    TSX_PACK,
    GO_PACK,
    RUST_PACK,
    JAVA_PACK,
    KOTLIN_PACK,
    SCALA_PACK,
    C_PACK,
    CPP_PACK,
    C_SHARP_PACK,
    SWIFT_PACK,
    RUBY_PACK,
    PHP_PACK,
    LUA_PACK,
    BASH_PACK,
    OCAML_PACK,
    HTML_PACK,
    CSS_PACK,
    TOML_PACK,
    MARKDOWN_PACK,
)

# name -> Pack
PACKS: dict[str, LanguagePack] = {pack.name: pack for pack in _ALL_PACKS}

# Extension -> Pack
_EXT_TO_PACK: dict[str, LanguagePack] = {}
for _pack in _ALL_PACKS:
    for _ext in _pack.extensions:
        _EXT_TO_PACK[_ext] = _pack

# Filename -> Pack
_FILENAME_TO_PACK: dict[str, LanguagePack] = {}
for _pack in _ALL_PACKS:
    for _fn in _pack.filenames:
        _FILENAME_TO_PACK[_fn] = _pack


# =========================================================================
# Public API
# =========================================================================


def get_pack(name: str) -> LanguagePack | None:
    """Get a LanguagePack by language name."""
    return PACKS.get(name)


def get_pack_for_ext(ext: str) -> LanguagePack | None:
    """Get a LanguagePack for a file extension (without leading dot)."""
    return _EXT_TO_PACK.get(ext.lower())


def get_pack_for_filename(filename: str) -> LanguagePack | None:
    """Get a LanguagePack for an exact filename (case-insensitive)."""
    return _FILENAME_TO_PACK.get(filename.lower())


def resolve_language(path: str | Path) -> LanguagePack | None:
    """Resolve a path to its pack: extension first, then exact filename."""
    path = Path(path)
    ext = path.suffix.lower().lstrip(".")
    pack = get_pack_for_ext(ext) if ext else None
    if pack is None:
        pack = get_pack_for_filename(path.name)
    return pack


def supported_extensions() -> frozenset[str]:
    """All extensions with a grammar or a fallback parser."""
    return frozenset(_EXT_TO_PACK)
