"""CLI command modules for sass-bootstrapper."""

from .build import build
from .cache_cmd import clean_cache
from .init_cmd import init
from .order import order

__all__ = ["build", "clean_cache", "init", "order"]
