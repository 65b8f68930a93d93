"""Path helpers for partial files.

All helpers work on POSIX-style strings, which is what the style-sheet
import syntax uses regardless of platform.
"""

from __future__ import annotations

import posixpath
import re
from typing import Iterable

ROOT_GROUP = "*root*"
PARTIAL_MARKER = "_"
PARTIAL_EXTENSIONS = (".sass", ".scss")


def to_posix(path: str) -> str:
    """Normalise separators to forward slashes."""
    return path.replace("\\", "/")


def canonical_key(file_path: str) -> str:
    """Return the path with its extension removed."""
    return posixpath.splitext(to_posix(file_path))[0]


def clean_file_path(path: str) -> str:
    """Return a path in partial form.

    The leading underscore of the final segment is removed along with the
    first ``.sass`` / ``.scss`` occurrence in that segment.

    Examples:
        >>> clean_file_path("app/styles/_button.scss")
        'app/styles/button'
        >>> clean_file_path("grid")
        'grid'
    """
    elements = to_posix(path).split("/")
    last = elements[-1]
    if last.startswith(PARTIAL_MARKER):
        last = last[len(PARTIAL_MARKER):]
    for extension in PARTIAL_EXTENSIONS:
        last = last.replace(extension, "", 1)
    elements[-1] = last
    return "/".join(elements)


def root_folder(path: str) -> str:
    """Return the first folder of ``path`` or ``*root*`` for a bare file name."""
    parts = to_posix(path).split("/")
    if len(parts) > 1:
        return parts[0]
    return ROOT_GROUP


def normalize_root_path(prefix: str) -> str:
    normalized = posixpath.normpath(to_posix(prefix))
    if not normalized.endswith("/"):
        normalized += "/"
    return normalized


def strip_root_path(path: str, root_paths: Iterable[str]) -> str:
    """Strip the longest configured root prefix from ``path``."""
    path = to_posix(path)
    best = ""
    for prefix in root_paths:
        normalized = normalize_root_path(prefix)
        if path.startswith(normalized) and len(normalized) > len(best):
            best = normalized
    return path[len(best):]


def group_key(file_path: str, root_paths: Iterable[str]) -> str:
    return root_folder(strip_root_path(file_path, root_paths))


def resolve_import_target(value: str, declaring_file: str) -> str:
    """Resolve an imported name against the declaring file's directory.

    Examples:
        >>> resolve_import_target("_button", "app/styles/main.scss")
        'app/styles/button'
        >>> resolve_import_target("../base/_reset.scss", "app/styles/layout/grid.scss")
        'app/styles/base/reset'
    """
    directory = posixpath.dirname(to_posix(declaring_file))
    joined = posixpath.normpath(posixpath.join(directory, to_posix(value)))
    return clean_file_path(joined)


def relative_to_output(path: str, output_file: str) -> str:
    """Return ``path`` relative to the directory holding ``output_file``."""
    start = posixpath.dirname(to_posix(output_file)) or "."
    return posixpath.relpath(to_posix(path), start)


def matches_pattern(pattern: str, partial_path: str) -> bool:
    """Return True when ``pattern`` occurs anywhere in ``partial_path``.

    The pattern is an unanchored regular expression, so ``"grid"`` matches
    ``"layout/grid"`` and also ``"layout/grid-extra"``. A pattern that is not
    a valid expression is matched literally.
    """
    try:
        return re.search(pattern, partial_path) is not None
    except re.error:
        return pattern in partial_path
