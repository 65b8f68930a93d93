"""Exception hierarchy for bootstrap generation.

Fatal conditions are exceptions. Non-fatal conditions (missing input files,
requirements that match nothing) are only logged; the warning classes below
are attached to those log records as their category.
"""

from __future__ import annotations


class BootstrapperError(Exception):
    """Base exception for bootstrapper errors."""

    pass


class ConfigurationError(BootstrapperError):
    """Raised when options are invalid (e.g. colliding keywords)."""

    pass


class CycleError(BootstrapperError):
    """Raised when two partials each need to precede the other."""

    def __init__(self, requiring_file: str, required_file: str, message: str | None = None):
        """Initialize CycleError.

        Args:
            requiring_file: File whose requirement closed the cycle
            required_file: File that was required but is still being placed
            message: Optional custom message
        """
        self.requiring_file = requiring_file
        self.required_file = required_file
        super().__init__(
            message
            or f'Circular dependency between "{requiring_file}" and "{required_file}".'
        )


class MissingFileWarning(UserWarning):
    """An input file does not exist or cannot be read. The file is skipped."""


class UnresolvedRequirementWarning(UserWarning):
    """A requires pattern matches no surviving partial. The constraint is dropped."""
