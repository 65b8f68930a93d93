"""``sass-bootstrapper init`` command: write a default options file."""

from __future__ import annotations

from pathlib import Path

import typer

from sass_bootstrapper.cli.helpers import console
from sass_bootstrapper.config import BootstrapOptions, config_path, save_options


def init(
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-C", help="Project directory"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing options file"),
) -> None:
    """Create .sass-bootstrapper.yaml with default options."""
    project_root = project_dir.resolve()
    path = config_path(project_root)
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    save_options(project_root, BootstrapOptions())
    console.print(f"[green]✓[/green] Created {path}")
