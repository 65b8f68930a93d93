"""Dependency ordering of surviving partials.

Partials are placed with an iterative depth-first topological sort over their
``requires`` declarations. A requirement is resolved to the first partial in
the seed sequence whose partial path matches the pattern. Requirements land
before the partials that declare them; partials unrelated to each other keep
their seed order.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from sass_bootstrapper.errors import CycleError, UnresolvedRequirementWarning
from sass_bootstrapper.models import Partial, Requirement
from sass_bootstrapper.registry import PartialRegistry

logger = logging.getLogger(__name__)


def resolve_requirement(pattern: str, candidates: Sequence[Partial]) -> Optional[Partial]:
    """Return the first candidate matched by ``pattern``, or None."""
    for candidate in candidates:
        if candidate.matches(pattern):
            return candidate
    return None


def order_partials(
    registry: PartialRegistry, seed: Optional[Iterable[str]] = None
) -> List[str]:
    """Return canonical keys ordered so every partial follows its requirements.

    Args:
        registry: Pruned registry
        seed: Initial key order; defaults to registration order

    Returns:
        Every key of the seed exactly once

    Raises:
        CycleError: If two partials end up requiring each other, directly or
            through a chain of requirements
    """
    keys = list(seed) if seed is not None else registry.keys()
    candidates = [registry[key] for key in keys]

    ordered: List[str] = []
    placed: Set[str] = set()
    in_progress: Set[str] = set()

    for root in candidates:
        if root.canonical_key in placed:
            continue
        # Explicit stack of (partial, remaining requirements); chains of any
        # length are walked without recursing.
        in_progress.add(root.canonical_key)
        stack: List[Tuple[Partial, Iterator[Requirement]]] = [
            (root, iter(root.declared_requires))
        ]
        while stack:
            partial, pending = stack[-1]
            requirement = next(pending, None)
            if requirement is None:
                stack.pop()
                in_progress.discard(partial.canonical_key)
                placed.add(partial.canonical_key)
                ordered.append(partial.canonical_key)
                continue

            required = resolve_requirement(requirement.pattern, candidates)
            if required is None:
                logger.warning(
                    f'"{partial.file_path}" depends on non-existing partial '
                    f'"{requirement.pattern}".',
                    extra={"category": UnresolvedRequirementWarning},
                )
                continue
            key = required.canonical_key
            if key == partial.canonical_key or key in placed:
                continue
            if key in in_progress:
                raise CycleError(partial.file_path, required.file_path)
            in_progress.add(key)
            stack.append((required, iter(required.declared_requires)))

    return ordered
