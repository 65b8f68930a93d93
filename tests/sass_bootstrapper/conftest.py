from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

import pytest

from sass_bootstrapper.config import BootstrapOptions
from sass_bootstrapper.registry import PartialRegistry
from sass_bootstrapper.sources import modification_time


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture()
def write_partial(project: Path) -> Callable[..., Path]:
    def _write(relative: str, content: str = "") -> Path:
        path = project / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def options() -> BootstrapOptions:
    return BootstrapOptions(
        src=["src/**/*.scss"],
        filter_root_paths=["src/"],
        bootstrap_file="src/bootstrap.scss",
    )


@pytest.fixture()
def make_registry(project: Path) -> Callable[..., PartialRegistry]:
    """Register already-written files, in the given order, into a fresh registry."""

    def _make(paths: Iterable[str], *, root_paths: Iterable[str] = ()) -> PartialRegistry:
        registry = PartialRegistry(
            import_keyword="@import",
            require_keyword="#requires",
            root_paths=list(root_paths),
            base_dir=project,
        )
        for relative in paths:
            registry.register(relative, modification_time(project / relative))
        return registry

    return _make
