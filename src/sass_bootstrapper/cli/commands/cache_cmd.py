"""``sass-bootstrapper clean-cache`` command."""

from __future__ import annotations

from pathlib import Path

import typer

from sass_bootstrapper.cache import cache_path, clear_cache
from sass_bootstrapper.cli.helpers import console


def clean_cache(
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-C", help="Project directory"),
) -> None:
    """Delete the incremental parse cache so every file is parsed again."""
    path = cache_path(project_dir.resolve())
    if clear_cache(path):
        console.print(f"[green]✓[/green] Removed {path}")
    else:
        console.print(f"[dim]No cache at {path}[/dim]")
