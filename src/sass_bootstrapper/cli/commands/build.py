"""``sass-bootstrapper build`` command."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from sass_bootstrapper.bootstrap import run_bootstrap
from sass_bootstrapper.cli.helpers import configure_logging, console, exit_with_error, resolve_options
from sass_bootstrapper.errors import BootstrapperError


def build(
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-C", help="Directory paths are resolved against"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Options file (default: .sass-bootstrapper.yaml)"),
    src: Optional[List[str]] = typer.Option(None, "--src", "-s", help="Source glob pattern (repeatable)"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Glob pattern of files to leave out (repeatable)"),
    bootstrap_file: Optional[str] = typer.Option(None, "--bootstrap-file", "-o", help="Generated file path"),
    filter_root_paths: Optional[List[str]] = typer.Option(None, "--filter-root-path", help="Prefix stripped from emitted paths (repeatable)"),
    require_keyword: Optional[str] = typer.Option(None, "--require-keyword", help="Keyword marking requires declarations"),
    use_relative_paths: Optional[bool] = typer.Option(
        None,
        "--relative-paths/--root-paths",
        help="Emit paths relative to the bootstrap file instead of root-stripped paths",
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Parse every file and leave the cache untouched"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Resolve partial dependencies and write the bootstrap file."""
    configure_logging(verbose)
    project_root = project_dir.resolve()

    try:
        options = resolve_options(
            project_root,
            config_file,
            src=src,
            exclude=exclude,
            bootstrap_file=bootstrap_file,
            filter_root_paths=filter_root_paths,
            require_keyword=require_keyword,
            use_relative_paths=use_relative_paths,
        )
        result = run_bootstrap(options, project_root, use_cache=not no_cache)
    except BootstrapperError as exc:
        exit_with_error(exc)
        return

    console.print(
        f"[green]✓[/green] Wrote {options.bootstrap_file} "
        f"({len(result.order)} partial(s), {result.parsed_count} parsed, "
        f"{len(result.pruned)} imported elsewhere)"
    )
