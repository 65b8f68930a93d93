"""Shared helpers for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from sass_bootstrapper.config import BootstrapOptions, load_options
from sass_bootstrapper.errors import BootstrapperError

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route library log records through a Rich handler on stderr."""
    root = logging.getLogger("sass_bootstrapper")
    root.handlers.clear()
    handler = RichHandler(console=err_console, show_time=False, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def resolve_options(
    project_root: Path,
    config_file: Optional[Path],
    *,
    src: Optional[List[str]] = None,
    exclude: Optional[List[str]] = None,
    bootstrap_file: Optional[str] = None,
    filter_root_paths: Optional[List[str]] = None,
    require_keyword: Optional[str] = None,
    use_relative_paths: Optional[bool] = None,
) -> BootstrapOptions:
    """Load options from the config file and apply command-line overrides."""
    options = load_options(project_root, config_file)
    return options.with_overrides(
        src=src or None,
        exclude=exclude or None,
        bootstrap_file=bootstrap_file,
        filter_root_paths=filter_root_paths or None,
        require_keyword=require_keyword,
        use_relative_paths=use_relative_paths,
    )


def exit_with_error(exc: BootstrapperError) -> None:
    """Print a fatal error and stop with exit code 1."""
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    raise typer.Exit(1)
