"""CodeOutline CLI - codeoutline command."""

import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from codeoutline.config.constants import MAX_WORKERS_LIMIT
from codeoutline.config.loader import load_config
from codeoutline.core.errors import ConfigError, ExtractionError
from codeoutline.core.formatting import format_outline, pluralize
from codeoutline.core.logging import configure_logging
from codeoutline.outline.coordinator import ExtractionCoordinator, Outcome
from codeoutline.outline.grammars import GrammarRegistry
from codeoutline.outline.languages import resolve_language


def expand_paths(paths: tuple[Path, ...], max_files: int) -> list[Path]:
    """Expand directory arguments to their direct child source files.

    Children are sorted by name, limited to files with a known language and
    capped at ``max_files`` per directory. File arguments pass through as-is
    so unsupported ones are still reported.
    """
    expanded: list[Path] = []
    for path in paths:
        if not path.is_dir():
            expanded.append(path)
            continue
        children = sorted(
            child
            for child in path.iterdir()
            if child.is_file() and resolve_language(child) is not None
        )
        expanded.extend(children[:max_files])
    return expanded


def _outcome_to_dict(path: Path, outcome: Outcome) -> dict[str, Any]:
    if isinstance(outcome, ExtractionError):
        return {"path": str(path), "error": outcome.to_dict()}
    return {
        "path": str(path),
        "language": outcome.language,
        "definitions": [
            {"start": d.start_line + 1, "end": d.end_line + 1, "label": d.label}
            for d in outcome.definitions or []
        ],
    }


@click.command()
@click.version_option(version="0.1.0", prog_name="codeoutline")
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--min-lines", type=click.IntRange(min=1), help="Minimum definition span in lines")
@click.option(
    "--workers",
    type=click.IntRange(min=1, max=MAX_WORKERS_LIMIT),
    help="Worker threads for batch extraction",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(
    paths: tuple[Path, ...],
    min_lines: int | None,
    workers: int | None,
    as_json: bool,
    verbose: bool,
) -> None:
    """Print a definition outline for each source file.

    PATHS are files or directories (a directory lists its direct children).
    Files that cannot be outlined are reported and never stop the listing.
    """
    overrides: dict[str, Any] = {}
    if min_lines is not None:
        overrides["extraction"] = {"min_lines": min_lines}
    try:
        config = load_config(**overrides)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)

    coordinator = ExtractionCoordinator.from_config(config, registry=GrammarRegistry())
    files = expand_paths(paths, config.limits.max_files)
    outcomes = coordinator.extract_directory(files, max_workers=workers)

    if as_json:
        click.echo(
            json.dumps(
                {"files": [_outcome_to_dict(path, outcome) for path, outcome in outcomes.items()]},
                indent=2,
            )
        )
    else:
        click.echo("\n\n".join(format_outline(path, outcome) for path, outcome in outcomes.items()))

    failed = [path for path, outcome in outcomes.items() if isinstance(outcome, ExtractionError)]
    if failed and not as_json:
        console = Console(stderr=True)
        console.print(
            f"[yellow]{pluralize(len(failed), 'file')} could not be outlined[/yellow] "
            f"({len(outcomes) - len(failed)} of {len(outcomes)} succeeded)"
        )


if __name__ == "__main__":
    cli()
