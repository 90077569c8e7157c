from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryKind(Enum):
    """Enumeration of the node kinds that can appear in a listing.

    Attributes:
        FILE: Regular file
        DIRECTORY: Directory
        SYMLINK: Symbolic link (reported, never followed)
        OTHER: Sockets, FIFOs, device nodes and anything else
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class OutputFormat(str, Enum):
    """Output format selected for a run."""

    TEXT = "text"
    JSON = "json"
    TOON = "toon"


class ColorMode(str, Enum):
    """When to colorize text output.

    Values:
        AUTO: Colorize only when the output stream is a terminal
        FORCE: Always colorize
        OFF: Never colorize
    """

    AUTO = "auto"
    FORCE = "force"
    OFF = "off"


class SortKey(str, Enum):
    """Base comparator used to order the children of each directory."""

    NAME = "name"
    TIME = "mtime"
    SIZE = "size"
    NONE = "none"
