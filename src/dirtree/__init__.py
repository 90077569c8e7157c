"""Directory tree listing utilities.

This package walks a directory, applies hidden-file, pattern, depth and sort
policy, and renders the result as a classic box-drawing tree, as JSON, or as
TOON (a compact colon-delimited notation).
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dirtree")
except PackageNotFoundError:
    __version__ = "unknown"
