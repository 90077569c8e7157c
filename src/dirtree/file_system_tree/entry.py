"""Entry representation for file system elements in the tree."""

import stat
from dataclasses import dataclass
from typing import List, Optional

from dirtree.formatting import format_permissions
from dirtree.types import EntryKind


@dataclass
class Entry:
    """A single file, directory, symlink or other node in the listing.

    Directories carry an ordered list of children; every other kind carries
    None. The walker establishes the order of ``children`` once and renderers
    only read it.

    Attributes:
        name (str): The base name of the entry.
        full_path (str): The path as reached from the root argument.
        kind (EntryKind): What kind of node this is.
        size (int): Size in bytes; 0 for directories.
        mode (int): Raw st_mode bits.
        mtime (float): Modification time in seconds since the epoch.
        children (Optional[List[Entry]]): Child entries for directories, None otherwise.
        symlink_target (Optional[str]): Target of a symbolic link, if readable.
        error (Optional[str]): Why a directory's contents could not be listed.

    Example:
        >>> root = Entry("root", "root", EntryKind.DIRECTORY, mode=0o040755, children=[])
        >>> child = Entry("run.sh", "root/run.sh", EntryKind.FILE, size=12, mode=0o100755)
        >>> root.children.append(child)
        >>> root.is_dir, child.is_dir
        (True, False)
        >>> child.is_executable, child.type_indicator
        (True, '*')
        >>> root.permissions
        'drwxr-xr-x'
    """

    name: str
    full_path: str
    kind: EntryKind
    size: int = 0
    mode: int = 0
    mtime: float = 0.0
    children: Optional[List["Entry"]] = None
    symlink_target: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is EntryKind.DIRECTORY:
            if self.children is None:
                self.children = []
        elif self.children is not None:
            raise ValueError(f"Only directories can have children: {self.full_path}")

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is EntryKind.SYMLINK

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")

    @property
    def is_executable(self) -> bool:
        """Whether this is a non-directory with any execute bit set."""
        if self.is_dir or self.is_symlink:
            return False
        return bool(self.mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))

    @property
    def permissions(self) -> str:
        """Symbolic permission string such as ``-rw-r--r--``."""
        return format_permissions(self.mode)

    @property
    def type_indicator(self) -> str:
        """Classification suffix in the style of ``ls -F``."""
        if self.is_dir:
            return "/"
        if self.is_symlink:
            return "@"
        if self.is_executable:
            return "*"
        return ""
