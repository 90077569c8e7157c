"""In-memory tree of filesystem entries and the walker that builds it.

This package provides the Entry model for a single file or directory and the
depth-first walker that materializes a filtered, sorted tree of entries.
"""
