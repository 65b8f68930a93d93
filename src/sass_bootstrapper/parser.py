"""Extraction of import and requires declarations from partial files.

Only two kinds of lines matter:

- lines containing the import keyword, e.g. ``@import "buttons";``
- lines containing the requires keyword, e.g. ``// #requires "base/reset"``

Each contributes the first quoted value on the line. Everything else in the
file is ignored.
"""

from __future__ import annotations

import re

from sass_bootstrapper.errors import ConfigurationError
from sass_bootstrapper.models import ParsedDeclarations, Requirement
from sass_bootstrapper.paths import clean_file_path, resolve_import_target

QUOTED_VALUE = re.compile(r"([\"'])(.*?)\1")


def ensure_distinct_keywords(import_keyword: str, require_keyword: str) -> None:
    """Raise ConfigurationError when both keywords are the same string."""
    if import_keyword == require_keyword:
        raise ConfigurationError(
            f'The requires keyword must differ from the import keyword ("{import_keyword}").'
        )


def first_quoted_value(line: str) -> str | None:
    match = QUOTED_VALUE.search(line)
    if match is None:
        return None
    return match.group(2)


def parse_partial(
    text: str,
    file_path: str,
    import_keyword: str,
    require_keyword: str,
) -> ParsedDeclarations:
    """Scan file text for import and requires declarations.

    Args:
        text: Full file content
        file_path: Path of the file being parsed; imports are resolved
            relative to its directory and requirements record it as source
        import_keyword: Token marking an import line (``@import``)
        require_keyword: Token marking a requires line (``#requires``)

    Returns:
        ParsedDeclarations with de-duplicated imports and requirements in
        the order they appear in the file

    Raises:
        ConfigurationError: If the two keywords are identical
    """
    ensure_distinct_keywords(import_keyword, require_keyword)

    imports: dict[str, None] = {}
    requires: dict[Requirement, None] = {}

    for line in text.splitlines():
        if import_keyword in line:
            value = first_quoted_value(line)
            if value:
                imports[resolve_import_target(value, file_path)] = None
        elif require_keyword in line:
            value = first_quoted_value(line)
            if value:
                requires[Requirement(clean_file_path(value), file_path)] = None

    return ParsedDeclarations(imports=tuple(imports), requires=tuple(requires))
