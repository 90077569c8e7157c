"""Directories-only filtering."""

from dirtree.file_system_tree.entry import Entry

from .base_rules import BaseFilterRules


class DirsOnlyFilterRules(BaseFilterRules):
    """Exclude every entry that is not a directory.

    Symbolic links are not followed, so a link to a directory is excluded too.

    Example:
        >>> from dirtree.types import EntryKind
        >>> rules = DirsOnlyFilterRules()
        >>> rules.include(Entry("src", "src", EntryKind.DIRECTORY))
        True
        >>> rules.include(Entry("main.py", "main.py", EntryKind.FILE))
        False
    """

    def include(self, entry: Entry) -> bool:
        return entry.is_dir
