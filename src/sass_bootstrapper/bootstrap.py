"""End-to-end bootstrap generation.

run_bootstrap() wires the pipeline together:

1. validate options (keyword collision fails before any file is touched)
2. delete the existing bootstrap file
3. collect sources and register them through the cache
4. prune imported partials, order the rest, render and write the output
5. persist the cache when at least one file was parsed

A fatal error in steps 3-4 leaves no bootstrap file behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from sass_bootstrapper.cache import cache_path, load_cache, save_cache
from sass_bootstrapper.config import BootstrapOptions
from sass_bootstrapper.errors import MissingFileWarning
from sass_bootstrapper.formatter import render_bootstrap
from sass_bootstrapper.models import Partial
from sass_bootstrapper.ordering import order_partials
from sass_bootstrapper.paths import to_posix
from sass_bootstrapper.registry import PartialRegistry
from sass_bootstrapper.sources import collect_sources

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    """Outcome of a bootstrap run."""

    order: List[Partial] = field(default_factory=list)
    content: str = ""
    parsed_count: int = 0
    cache_written: bool = False
    output_path: Optional[Path] = None
    pruned: List[str] = field(default_factory=list)


def build_registry(
    options: BootstrapOptions,
    project_root: Path,
    *,
    use_cache: bool = True,
) -> PartialRegistry:
    """Collect and register every source and excluded file for a run."""
    previous_cache = load_cache(cache_path(project_root)) if use_cache else {}
    registry = PartialRegistry(
        import_keyword=options.import_keyword,
        require_keyword=options.require_keyword,
        root_paths=options.filter_root_paths,
        previous_cache=previous_cache,
        base_dir=project_root,
    )

    bootstrap_file = to_posix(options.bootstrap_file)
    for source in collect_sources(options.src, project_root, exclude=options.exclude):
        if source.path == bootstrap_file:
            continue
        if not source.exists:
            logger.warning(
                f'Source file "{source.path}" not found.',
                extra={"category": MissingFileWarning},
            )
            continue
        registry.register(source.path, source.mod_time)

    for source in collect_sources(options.exclude, project_root):
        if source.exists and source.path != bootstrap_file:
            registry.register(source.path, source.mod_time, included=False)

    return registry


def run_bootstrap(
    options: BootstrapOptions,
    project_root: Path,
    *,
    use_cache: bool = True,
    write_output: bool = True,
) -> BootstrapResult:
    """Resolve partial order and (optionally) write the bootstrap file.

    Args:
        options: Run options
        project_root: Directory that source patterns and output paths are relative to
        use_cache: Read and write the incremental parse cache
        write_output: Delete and regenerate the bootstrap file; when False the
            pipeline only computes the order and content

    Returns:
        BootstrapResult describing the run

    Raises:
        ConfigurationError: If options are invalid
        CycleError: If partials require each other
    """
    options.validate()

    output_path = project_root / options.bootstrap_file
    if write_output and output_path.exists():
        output_path.unlink()
        logger.info(f'File "{options.bootstrap_file}" deleted.')

    registry = build_registry(options, project_root, use_cache=use_cache)
    pruned = registry.prune()
    order = [registry[key] for key in order_partials(registry)]
    content = render_bootstrap(order, options)

    result = BootstrapResult(
        order=order,
        content=content,
        parsed_count=registry.parsed_count,
        pruned=pruned,
    )

    if write_output:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        result.output_path = output_path
        logger.info(f'File "{options.bootstrap_file}" created.')

    if use_cache and registry.cache_dirty:
        result.cache_written = save_cache(cache_path(project_root), registry.cache_buffer)

    return result
