"""Directory listing with icons, filtering, and in-file search.

This package provides tools for printing a filtered directory tree and
reporting the first line in each listed file that matches a pattern.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("superls")
except PackageNotFoundError:
    __version__ = "unknown"
