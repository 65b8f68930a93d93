"""Expansion of source glob patterns into the input file set."""

from __future__ import annotations

import glob
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

from sass_bootstrapper.paths import to_posix

logger = logging.getLogger(__name__)

GLOB_CHARS = ("*", "?", "[")


@dataclass(frozen=True)
class SourceFile:
    """One candidate input file."""

    path: str
    exists: bool
    mod_time: int


def is_glob(pattern: str) -> bool:
    return any(char in pattern for char in GLOB_CHARS)


def modification_time(path: Path) -> int:
    """Return the modification time of ``path`` in whole milliseconds."""
    return path.stat().st_mtime_ns // 1_000_000


def expand_patterns(patterns: Iterable[str], base_dir: Path) -> List[str]:
    """Expand glob patterns relative to ``base_dir``.

    Patterns are applied in order. A pattern starting with ``!`` removes
    previously matched paths. Literal paths are kept even when they do not
    exist so the caller can report them.
    """
    paths: dict[str, None] = {}
    for raw in patterns:
        negate = raw.startswith("!")
        pattern = to_posix(raw[1:] if negate else raw)
        if is_glob(pattern):
            matches = [
                to_posix(match)
                for match in sorted(glob.glob(pattern, root_dir=str(base_dir), recursive=True))
                if (base_dir / match).is_file()
            ]
        else:
            matches = [pattern]
        for match in matches:
            if negate:
                paths.pop(match, None)
            else:
                paths[match] = None
    return list(paths)


def collect_sources(
    patterns: Sequence[str],
    base_dir: Path,
    *,
    exclude: Sequence[str] = (),
) -> List[SourceFile]:
    """Return the input file set for ``patterns`` minus ``exclude``."""
    excluded = set(expand_patterns(exclude, base_dir))
    sources: List[SourceFile] = []
    for path in expand_patterns(patterns, base_dir):
        if path in excluded:
            continue
        full = base_dir / path
        try:
            sources.append(SourceFile(path, True, modification_time(full)))
        except OSError:
            sources.append(SourceFile(path, False, 0))
    logger.debug(f"Collected {len(sources)} source file(s)")
    return sources
