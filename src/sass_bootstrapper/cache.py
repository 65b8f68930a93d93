"""Incremental parse cache keyed on file modification time.

The cache is a JSON document mapping canonical keys to the declarations
found in each file the last time it was parsed::

    {
      "app/styles/main": {
        "lastModified": 1700000000000,
        "fileName": "app/styles/main.scss",
        "imports": {"app/styles/button": "app/styles/main.scss"},
        "requires": {"base/reset": "app/styles/main.scss"},
        "removedRoot": "*root*",
        "optionsHash": "9c1d4e0a7b52f3e6"
      }
    }

Canonical keys are written sorted. The nested ``imports`` and ``requires``
mappings keep declaration order, which the orderer depends on. ``optionsHash``
records the options the entry was parsed under (see :func:`options_hash`);
an entry recorded under different options is never reused.

A missing, unreadable or malformed cache never blocks a run. It only means
files get parsed again.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Callable, Dict, Mapping, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sass_bootstrapper.models import PartialMetadata, Requirement

logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "sass-bootstrapper"
CACHE_FILENAME = "cache.json"


class CacheEntry(BaseModel):
    """Persisted declarations of one partial."""

    model_config = ConfigDict(populate_by_name=True)

    last_modified: int = Field(..., alias="lastModified")
    file_name: str = Field(..., min_length=1, alias="fileName")
    imports: Dict[str, str] = Field(default_factory=dict)
    requires: Dict[str, str] = Field(default_factory=dict)
    removed_root: str = Field(..., alias="removedRoot")
    options_hash: str = Field(default="", alias="optionsHash")

    def to_metadata(self) -> PartialMetadata:
        return PartialMetadata(
            last_modified=self.last_modified,
            imports=tuple(self.imports),
            requires=tuple(
                Requirement(pattern, declaring_file)
                for pattern, declaring_file in self.requires.items()
            ),
            group_key=self.removed_root,
        )

    @classmethod
    def from_metadata(
        cls, file_name: str, metadata: PartialMetadata, options_hash: str = ""
    ) -> "CacheEntry":
        return cls(
            last_modified=metadata.last_modified,
            file_name=file_name,
            imports={target: file_name for target in metadata.imports},
            requires={req.pattern: req.declaring_file for req in metadata.requires},
            removed_root=metadata.group_key,
            options_hash=options_hash,
        )


CacheData = Dict[str, CacheEntry]


def options_hash(
    import_keyword: str, require_keyword: str, root_paths: Sequence[str]
) -> str:
    """Fingerprint of the options that shape parsed metadata.

    The keywords decide which lines are parsed and the root paths decide the
    group key, so a change to any of them invalidates every cache entry.
    """
    payload = json.dumps(
        {
            "import_keyword": import_keyword,
            "require_keyword": require_keyword,
            "root_paths": list(root_paths),
        },
        sort_keys=True,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]


def cache_path(project_root: Path) -> Path:
    """Return the cache file location for a project."""
    return project_root / f".{CACHE_NAMESPACE}" / CACHE_FILENAME


def load_cache(path: Path) -> CacheData:
    """Load cache entries from ``path``.

    Returns an empty mapping when the file does not exist or cannot be
    decoded. Individual entries that fail validation are dropped.
    """
    if not path.exists():
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning(f'Ignoring unreadable cache file "{path}": {exc}')
        return {}
    if not isinstance(payload, dict):
        logger.warning(f'Ignoring cache file "{path}": expected a JSON object')
        return {}

    entries: CacheData = {}
    for key, raw in payload.items():
        try:
            entries[str(key)] = CacheEntry.model_validate(raw)
        except ValidationError:
            logger.debug(f"Dropping invalid cache entry for {key}")
    return entries


def save_cache(path: Path, entries: Mapping[str, CacheEntry]) -> bool:
    """Write cache entries as pretty-printed JSON.

    Returns:
        True when the file was written, False on I/O failure (logged)
    """
    # Only the top level is sorted; nested mappings keep declaration order.
    data = {
        key: entries[key].model_dump(by_alias=True) for key in sorted(entries)
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning(f'Could not write cache file "{path}": {exc}')
        return False
    return True


def clear_cache(path: Path) -> bool:
    """Delete the cache file. Returns True if a file was removed."""
    if not path.exists():
        return False
    path.unlink()
    return True


def resolve_metadata(
    previous_cache: Mapping[str, CacheEntry],
    key: str,
    file_name: str,
    mod_time: int,
    parse: Callable[[], PartialMetadata],
    fingerprint: str = "",
) -> Tuple[PartialMetadata, bool]:
    """Return metadata for a file, from cache when still valid.

    An entry is reused only when it was recorded for the same file name,
    under the same options fingerprint, and its ``lastModified`` equals
    ``mod_time`` exactly. Otherwise ``parse`` is called.

    Returns:
        Tuple of (metadata, cache_hit)
    """
    cached = previous_cache.get(key)
    if (
        cached is not None
        and cached.file_name == file_name
        and cached.last_modified == mod_time
        and cached.options_hash == fingerprint
    ):
        return cached.to_metadata(), True
    return parse(), False
