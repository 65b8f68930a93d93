"""Rendering of the generated bootstrap file."""

from __future__ import annotations

from typing import Iterable, List

from sass_bootstrapper.config import BootstrapOptions
from sass_bootstrapper.models import Partial
from sass_bootstrapper.paths import clean_file_path, relative_to_output, strip_root_path

HEADER_LINES = (
    "// This file has been generated by sass-bootstrapper.",
    "// A SASS/SCSS dependency resolver module.",
)


def import_path(partial: Partial, options: BootstrapOptions) -> str:
    """Return the path written into the import statement for ``partial``."""
    if options.use_relative_paths:
        return relative_to_output(clean_file_path(partial.file_path), options.bootstrap_file)
    return clean_file_path(strip_root_path(partial.file_path, options.filter_root_paths))


def render_bootstrap(partials: Iterable[Partial], options: BootstrapOptions) -> str:
    """Render the bootstrap file content for partials in resolved order.

    A ``// <group>`` comment precedes every run of partials sharing a
    top-level folder.
    """
    lines: List[str] = list(HEADER_LINES)
    current_group = None
    for partial in partials:
        if partial.group_key != current_group:
            lines.append("")
            lines.append(f"// {partial.group_key}")
            current_group = partial.group_key
        lines.append(
            f'{options.import_keyword} "{import_path(partial, options)}"{options.statement_terminator}'
        )
    return "\n".join(lines) + "\n"
