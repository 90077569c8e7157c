"""Depth-first directory walker that builds the in-memory entry tree.

This module provides the TreeWalker class and the walk() convenience function.
The walker lists each directory once, filters and sorts its children, and
recurses into surviving directories until the depth limit is reached. The
complete tree is built before anything is rendered.
"""

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from dirtree.config import TreeConfig
from dirtree.exceptions import EntryUnreadableError, RootNotFoundError, RootNotReadableError
from dirtree.file_system_tree.entry import Entry
from dirtree.file_system_tree.permission_action import PermissionAction
from dirtree.filter_rules import BaseFilterRules, build_display_rules, build_filter_rules
from dirtree.types import EntryKind, PathType, SortKey

# Marker shown next to a directory whose contents could not be listed
ERROR_OPENING_DIR = "error opening dir"

_SORT_KEYS: Dict[SortKey, Callable[[Entry], tuple]] = {
    SortKey.NAME: lambda e: (e.name,),
    SortKey.TIME: lambda e: (e.mtime, e.name),
    SortKey.SIZE: lambda e: (e.size, e.name),
}


@dataclass
class TreeStats:
    """Running totals accumulated while walking.

    The root is never counted. Symlinks and other non-directories count as files.

    Attributes:
        directories (int): Directories listed below the root.
        files (int): Non-directories listed.
        errors (int): Entries that could not be stat'ed or directories that could not be listed.
        error_messages (List[str]): One message per error, in traversal order.
    """

    directories: int = 0
    files: int = 0
    errors: int = 0
    error_messages: List[str] = field(default_factory=list)

    def count(self, entry: Entry) -> None:
        if entry.is_dir:
            self.directories += 1
        else:
            self.files += 1

    def record_error(self, message: str) -> None:
        self.errors += 1
        self.error_messages.append(message)


def sort_entries(
    entries: Iterable[Entry], sort_key: SortKey = SortKey.NAME, reverse: bool = False, dirs_first: bool = False
) -> List[Entry]:
    """Order sibling entries.

    The base comparator is name (case-sensitive), modification time or size,
    each tie-broken by name so the order is total. ``reverse`` inverts the base
    comparator only; ``dirs_first`` is applied afterwards as a stable partition,
    so directories stay first even when reversed. SortKey.NONE keeps the
    listing order and ignores ``reverse``.

    Example:
        >>> a = Entry("a.txt", "a.txt", EntryKind.FILE)
        >>> b = Entry("b", "b", EntryKind.DIRECTORY)
        >>> c = Entry("c.txt", "c.txt", EntryKind.FILE)
        >>> [e.name for e in sort_entries([c, b, a])]
        ['a.txt', 'b', 'c.txt']
        >>> [e.name for e in sort_entries([c, b, a], reverse=True, dirs_first=True)]
        ['b', 'c.txt', 'a.txt']
    """
    if sort_key is SortKey.NONE:
        ordered = list(entries)
    else:
        ordered = sorted(entries, key=_SORT_KEYS[sort_key], reverse=reverse)
    if dirs_first:
        ordered.sort(key=lambda e: not e.is_dir)
    return ordered


def _kind_of(mode: int) -> EntryKind:
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


def _entry_from_stat(name: str, full_path: str, st: os.stat_result) -> Entry:
    kind = _kind_of(st.st_mode)
    symlink_target = None
    if kind is EntryKind.SYMLINK:
        try:
            symlink_target = os.readlink(full_path)
        except OSError:
            # The link is still listed, just without its target
            pass
    return Entry(
        name=name,
        full_path=full_path,
        kind=kind,
        size=0 if kind is EntryKind.DIRECTORY else st.st_size,
        mode=st.st_mode,
        mtime=st.st_mtime,
        symlink_target=symlink_target,
    )


def _reason(error: OSError) -> str:
    return error.strerror or str(error)


class TreeWalker:
    """Walks a directory depth-first and builds a filtered, sorted tree of entries.

    Filtering happens as each directory is listed: hidden entries, files that
    miss the include patterns, and anything matching an exclude pattern are
    dropped before they are descended into.

    In directories-only mode files are still filtered, then hidden. A
    directory is judged after its subtree has been walked and is kept only if
    something below it passed filtering, so branches that end up empty
    disappear. A directory that was empty to begin with has nothing to judge
    and is kept unless include patterns are set. Directories that were not read
    (depth limit or read error) are kept.

    Directories at the depth limit are listed but not read; their children list
    is empty and they still count toward the directory total.

    Permission Handling:
        A root that is missing or cannot be opened is always fatal. Below the
        root, failures are handled according to the permission action:
        - IGNORE (default): a directory that cannot be opened is kept with no
          children and an error marker; a listing that fails partway keeps the
          entries already read. The failure is counted and siblings are still
          walked
        - RAISE: EntryUnreadableError is raised immediately

    Attributes:
        config (TreeConfig): Options controlling depth, sorting and error handling.
        filter_rules (BaseFilterRules): Rules every entry must pass as it is listed.
        display_rules (BaseFilterRules): Rules deciding which passing entries are shown.

    Example:
        >>> walker = TreeWalker(TreeConfig(max_depth=1))  # doctest: +SKIP
        >>> root, stats = walker.walk("project")  # doctest: +SKIP
        >>> [child.name for child in root.children]  # doctest: +SKIP
        ['Cargo.toml', 'src']
        >>> stats.directories, stats.files  # doctest: +SKIP
        (1, 1)
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        filter_rules: Optional[BaseFilterRules] = None,
        display_rules: Optional[BaseFilterRules] = None,
    ) -> None:
        """Initialize a TreeWalker.

        Args:
            config: Walk options. Defaults to TreeConfig().
            filter_rules: Rules applied top-down. Built from the config when omitted.
            display_rules: Rules hiding passing entries from the result and
                enabling bottom-up pruning when they have rules. Built from the
                config when omitted.

        Raises:
            PatternSyntaxError: If rules are built from a config holding a malformed pattern.
        """
        self.config = config if config is not None else TreeConfig()
        self.filter_rules = filter_rules if filter_rules is not None else build_filter_rules(self.config)
        self.display_rules = display_rules if display_rules is not None else build_display_rules(self.config)

    def walk(self, root_path: PathType) -> Tuple[Entry, TreeStats]:
        """Build the tree rooted at root_path.

        Args:
            root_path: Directory to walk. A regular file yields a single-entry tree.

        Returns:
            The root entry and the totals accumulated during the walk.

        Raises:
            RootNotFoundError: If root_path does not exist.
            RootNotReadableError: If root_path exists but cannot be stat'ed or opened.
            EntryUnreadableError: If an entry below the root cannot be read and
                the permission action is RAISE.
        """
        path = Path(root_path)
        full_path = str(path)
        try:
            # The root itself is followed if it is a link
            st = os.stat(path)
        except FileNotFoundError as e:
            raise RootNotFoundError(full_path) from e
        except OSError as e:
            raise RootNotReadableError(full_path, _reason(e)) from e

        # A linked root keeps its own name; "." becomes the directory name
        name = os.path.basename(os.path.abspath(path)) or full_path
        root = _entry_from_stat(name, full_path, st)
        stats = TreeStats()

        if not root.is_dir:
            stats.count(root)
            return root, stats

        try:
            candidates = self._read_directory(root, stats)
        except OSError as e:
            raise RootNotReadableError(full_path, _reason(e)) from e

        root.children, _ = self._filter_and_descend(candidates, 0, stats)
        return root, stats

    def _read_directory(self, directory: Entry, stats: TreeStats) -> List[Entry]:
        """List and stat the immediate children of a directory.

        Children that cannot be stat'ed are skipped and recorded in stats. If
        the listing breaks off partway, the children read so far are returned
        and the failure is recorded.

        Raises:
            OSError: If the directory cannot be opened.
            EntryUnreadableError: If reading fails after the directory was
                opened and the permission action is RAISE.
        """
        children = []
        with os.scandir(directory.full_path) as it:
            entries = iter(it)
            while True:
                try:
                    dir_entry = next(entries)
                except StopIteration:
                    break
                except OSError as e:
                    self._unreadable(directory.full_path, e, stats)
                    break
                try:
                    st = dir_entry.stat(follow_symlinks=False)
                except OSError as e:
                    self._unreadable(dir_entry.path, e, stats)
                    continue
                children.append(_entry_from_stat(dir_entry.name, dir_entry.path, st))
        return children

    def _unreadable(self, full_path: str, error: OSError, stats: TreeStats) -> None:
        """Raise or record a read failure according to the permission action."""
        if self.config.permission_action is PermissionAction.RAISE:
            raise EntryUnreadableError(full_path, _reason(error)) from error
        stats.record_error(f"Cannot read {full_path}: {_reason(error)}")

    def _filter_and_descend(self, candidates: List[Entry], depth: int, stats: TreeStats) -> Tuple[List[Entry], bool]:
        """Filter the children of a directory at the given depth, walk them, and sort the survivors.

        Returns:
            The sorted entries to show and whether any child passed filtering.
        """
        kept = []
        passed = False
        for child in candidates:
            if not self.filter_rules.include(child):
                continue
            if child.is_dir and not self._descend(child, depth + 1, stats):
                continue
            passed = True
            if not self.display_rules.include(child):
                continue
            stats.count(child)
            kept.append(child)

        ordered = sort_entries(
            kept,
            sort_key=self.config.effective_sort_key,
            reverse=self.config.reverse,
            dirs_first=self.config.dirs_first,
        )
        return ordered, passed

    def _descend(self, directory: Entry, depth: int, stats: TreeStats) -> bool:
        """Populate a directory's children unless the depth limit has been reached.

        Returns:
            False if bottom-up pruning drops the directory, True otherwise.
        """
        if self.config.max_depth is not None and depth >= self.config.max_depth:
            return True

        try:
            candidates = self._read_directory(directory, stats)
        except OSError as e:
            self._unreadable(directory.full_path, e, stats)
            directory.error = ERROR_OPENING_DIR
            return True

        directory.children, passed = self._filter_and_descend(candidates, depth, stats)
        if not self.display_rules.has_rules():
            return True
        return passed or (not candidates and not self.config.include_patterns)


def walk(
    root_path: PathType,
    config: Optional[TreeConfig] = None,
    filter_rules: Optional[BaseFilterRules] = None,
) -> Tuple[Entry, TreeStats]:
    """Walk root_path with the given configuration.

    filter_rules replaces the rules built from the config, as in TreeWalker.

    Patterns are compiled before the filesystem is touched, so an invalid
    pattern raises PatternSyntaxError without any traversal.

    Returns:
        The root entry and the walk totals.

    Raises:
        PatternSyntaxError: If a configured pattern is malformed.
        RootNotFoundError: If root_path does not exist.
        RootNotReadableError: If root_path cannot be listed.
        EntryUnreadableError: If an entry below the root cannot be read and the
            permission action is RAISE.
    """
    return TreeWalker(config, filter_rules).walk(root_path)
