"""``sass-bootstrapper order`` command: show the resolved order without writing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from sass_bootstrapper.bootstrap import run_bootstrap
from sass_bootstrapper.cli.helpers import configure_logging, console, exit_with_error, resolve_options
from sass_bootstrapper.errors import BootstrapperError
from sass_bootstrapper.formatter import import_path


def order(
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-C", help="Directory paths are resolved against"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Options file (default: .sass-bootstrapper.yaml)"),
    src: Optional[List[str]] = typer.Option(None, "--src", "-s", help="Source glob pattern (repeatable)"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Glob pattern of files to leave out (repeatable)"),
    bootstrap_file: Optional[str] = typer.Option(None, "--bootstrap-file", "-o", help="Bootstrap file the import paths are computed for"),
    filter_root_paths: Optional[List[str]] = typer.Option(None, "--filter-root-path", help="Prefix stripped from emitted paths (repeatable)"),
    require_keyword: Optional[str] = typer.Option(None, "--require-keyword", help="Keyword marking requires declarations"),
    use_relative_paths: Optional[bool] = typer.Option(
        None,
        "--relative-paths/--root-paths",
        help="Show paths relative to the bootstrap file instead of root-stripped paths",
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Parse every file and leave the cache untouched"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Print the resolved partial order."""
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
        result = run_bootstrap(options, project_root, use_cache=not no_cache, write_output=False)
    except BootstrapperError as exc:
        exit_with_error(exc)
        return

    if json_output:
        payload = {
            "order": [
                {
                    "key": partial.canonical_key,
                    "file": partial.file_path,
                    "group": partial.group_key,
                    "import": import_path(partial, options),
                }
                for partial in result.order
            ],
            "pruned": result.pruned,
            "parsed": result.parsed_count,
        }
        print(json.dumps(payload, indent=2))
        return

    table = Table(title="Resolved Partial Order")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Group", style="magenta")
    table.add_column("Partial", style="bold")
    table.add_column("Requires", style="cyan")
    for index, partial in enumerate(result.order, start=1):
        requires = ", ".join(req.pattern for req in partial.declared_requires)
        table.add_row(str(index), partial.group_key, partial.file_path, requires)
    console.print(table)
