"""Hidden-entry filtering based on the leading-dot naming convention."""

from dirtree.file_system_tree.entry import Entry

from .base_rules import BaseFilterRules


class HiddenFilterRules(BaseFilterRules):
    """Exclude entries whose names start with a dot unless hidden entries are requested.

    Attributes:
        show_hidden (bool): When True, this rule includes everything.

    Example:
        >>> from dirtree.types import EntryKind
        >>> rules = HiddenFilterRules(show_hidden=False)
        >>> rules.include(Entry(".git", ".git", EntryKind.DIRECTORY))
        False
        >>> HiddenFilterRules(show_hidden=True).include(Entry(".git", ".git", EntryKind.DIRECTORY))
        True
    """

    def __init__(self, show_hidden: bool = False):
        self.show_hidden = show_hidden

    def include(self, entry: Entry) -> bool:
        return self.show_hidden or not entry.is_hidden

    def has_rules(self) -> bool:
        return not self.show_hidden
