"""Entry filtering by directory name, extension lists, and exclusion rules."""

from .entry_filter import EntryFilter
from .filter_config import FilterConfig

__all__ = [
    "EntryFilter",
    "FilterConfig",
]
