"""CLI helpers exposed for other modules."""

from .helpers import configure_logging, console, exit_with_error, resolve_options

__all__ = ["configure_logging", "console", "exit_with_error", "resolve_options"]
