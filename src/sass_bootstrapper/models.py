"""Data structures shared by the parser, registry and orderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from sass_bootstrapper.paths import canonical_key, clean_file_path, matches_pattern


class Requirement(NamedTuple):
    """One ``requires`` declaration: an unresolved pattern and its source file."""

    pattern: str
    declaring_file: str


@dataclass(frozen=True)
class ParsedDeclarations:
    """Raw result of scanning one file."""

    imports: tuple[str, ...] = ()
    requires: tuple[Requirement, ...] = ()


@dataclass(frozen=True)
class PartialMetadata:
    """Everything about a partial that is worth caching between runs."""

    last_modified: int
    imports: tuple[str, ...] = ()
    requires: tuple[Requirement, ...] = ()
    group_key: str = ""


@dataclass(frozen=True)
class Partial:
    """A single style-sheet input file tracked by its canonical key."""

    file_path: str
    last_modified: int
    declared_imports: tuple[str, ...] = ()
    declared_requires: tuple[Requirement, ...] = ()
    group_key: str = ""
    canonical_key: str = field(init=False)
    partial_path: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "canonical_key", canonical_key(self.file_path))
        object.__setattr__(self, "partial_path", clean_file_path(self.file_path))

    @classmethod
    def from_metadata(cls, file_path: str, metadata: PartialMetadata) -> "Partial":
        return cls(
            file_path=file_path,
            last_modified=metadata.last_modified,
            declared_imports=metadata.imports,
            declared_requires=metadata.requires,
            group_key=metadata.group_key,
        )

    def matches(self, pattern: str) -> bool:
        """Return True when an import target or requires pattern selects this partial."""
        return matches_pattern(pattern, self.partial_path)
