"""Registry of partials discovered during a run.

The registry is rebuilt from scratch on every run. It consults the previous
run's cache so unchanged files are not parsed again, and collects fresh
cache entries for the caller to persist.

Key concepts:
- register() adds one file, from cache when its modification time is unchanged
- Excluded files are registered as importers only; they are never emitted
- prune() removes every partial that another partial already imports
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from sass_bootstrapper.cache import CacheEntry, options_hash, resolve_metadata
from sass_bootstrapper.errors import MissingFileWarning
from sass_bootstrapper.models import Partial, PartialMetadata
from sass_bootstrapper.parser import ensure_distinct_keywords, parse_partial
from sass_bootstrapper.paths import canonical_key, group_key, to_posix

logger = logging.getLogger(__name__)


class PartialRegistry:
    """Canonical key -> Partial mapping for a single run.

    Attributes:
        import_keyword: Token marking import lines
        require_keyword: Token marking requires lines
        root_paths: Prefixes stripped to compute group keys
        options_hash: Fingerprint of the parsing options; cache entries
            recorded under another fingerprint are parsed again
        cache_buffer: Entries to persist after the run (every registered file)
        parsed_count: Number of files actually parsed (cache misses)
        base_dir: Directory relative file paths are read from
    """

    def __init__(
        self,
        *,
        import_keyword: str,
        require_keyword: str,
        root_paths: Sequence[str] = (),
        previous_cache: Optional[Mapping[str, CacheEntry]] = None,
        base_dir: Optional[Path] = None,
    ):
        ensure_distinct_keywords(import_keyword, require_keyword)
        self.base_dir = base_dir or Path.cwd()
        self.import_keyword = import_keyword
        self.require_keyword = require_keyword
        self.root_paths = list(root_paths)
        self.options_hash = options_hash(import_keyword, require_keyword, self.root_paths)
        self.previous_cache: Mapping[str, CacheEntry] = previous_cache or {}
        self.cache_buffer: Dict[str, CacheEntry] = {}
        self.parsed_count = 0
        self._partials: Dict[str, Partial] = {}
        self._importers: Dict[str, Partial] = {}

    def __len__(self) -> int:
        return len(self._partials)

    def __iter__(self) -> Iterator[str]:
        return iter(self._partials)

    def __contains__(self, key: object) -> bool:
        return key in self._partials

    def __getitem__(self, key: str) -> Partial:
        return self._partials[key]

    def get(self, key: str) -> Optional[Partial]:
        return self._partials.get(key)

    def keys(self) -> List[str]:
        return list(self._partials)

    def partials(self) -> List[Partial]:
        return list(self._partials.values())

    @property
    def cache_dirty(self) -> bool:
        """True when at least one file was parsed and the cache should be written."""
        return self.parsed_count > 0

    def register(
        self, file_path: str, current_mod_time: int, *, included: bool = True
    ) -> Optional[Partial]:
        """Add a file to the registry.

        Args:
            file_path: Path of the partial as supplied by the file-set provider
            current_mod_time: Modification time in milliseconds
            included: False for files from the exclude set; they still prune
                the partials they import but are never emitted themselves

        Returns:
            The registered Partial, or None when the file could not be read
        """
        file_path = to_posix(file_path)
        key = canonical_key(file_path)

        try:
            metadata, cache_hit = resolve_metadata(
                self.previous_cache,
                key,
                file_path,
                current_mod_time,
                lambda: self._parse_file(file_path, current_mod_time),
                self.options_hash,
            )
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                f'Source file "{file_path}" not found or unreadable: {exc}',
                extra={"category": MissingFileWarning},
            )
            return None

        if cache_hit:
            logger.debug(f"Cache hit for {file_path}")
        else:
            self.parsed_count += 1

        self.cache_buffer[key] = CacheEntry.from_metadata(
            file_path, metadata, self.options_hash
        )

        partial = Partial.from_metadata(file_path, metadata)
        if key in self._importers and self._importers[key].file_path != file_path:
            logger.warning(
                f'Partials "{self._importers[key].file_path}" and "{file_path}" '
                f'share the name "{key}"; keeping "{file_path}".'
            )
        self._importers[key] = partial
        if included:
            self._partials[key] = partial
        else:
            self._partials.pop(key, None)
        return partial

    def _parse_file(self, file_path: str, mod_time: int) -> PartialMetadata:
        text = (self.base_dir / file_path).read_text(encoding="utf-8")
        declarations = parse_partial(
            text, file_path, self.import_keyword, self.require_keyword
        )
        return PartialMetadata(
            last_modified=mod_time,
            imports=declarations.imports,
            requires=declarations.requires,
            group_key=group_key(file_path, self.root_paths),
        )

    def prune(self) -> List[str]:
        """Remove every partial that is imported by another partial.

        Works from a snapshot of all registered files (excluded ones
        included), so a partial removed here still prunes whatever it imports
        itself. Only direct import targets are matched; running prune() again
        removes nothing further.

        Returns:
            Canonical keys removed by this call, in removal order
        """
        removed: List[str] = []
        snapshot = list(self._importers.values())
        for importer in snapshot:
            for target in importer.declared_imports:
                for key, partial in list(self._partials.items()):
                    if key == importer.canonical_key:
                        continue
                    if partial.matches(target):
                        del self._partials[key]
                        removed.append(key)
                        logger.debug(f"{partial.file_path} is imported by {importer.file_path}")
        return removed
