from abc import ABC, abstractmethod

from dirtree.file_system_tree.entry import Entry


class BaseFilterRules(ABC):
    """
    Abstract base class defining the interface for entry filtering rules.

    Each concrete rule answers a single question about an entry (is it hidden,
    is it a file in directories-only mode, does it match a pattern) and several
    rules are combined with CompositeFilterRules. Rules are pure predicates:
    they never touch the filesystem and never modify the entry.

    The traversal root is never passed to a rule; it is always listed.

    Example:
        >>> from dirtree.types import EntryKind
        >>> class NoLogsRules(BaseFilterRules):
        ...     def include(self, entry: Entry) -> bool:
        ...         return not entry.name.endswith(".log")
        >>> rules = NoLogsRules()
        >>> rules.include(Entry("app.log", "app.log", EntryKind.FILE))
        False
        >>> rules.include(Entry("app.py", "app.py", EntryKind.FILE))
        True
    """

    @abstractmethod
    def include(self, entry: Entry) -> bool:
        """
        Determine whether an entry should appear in the listing.

        Args:
            entry (Entry): The entry to check. Only its name, kind and mode are
                meaningful at this point; children have not been read yet.

        Returns:
            bool: True if the entry should be listed, False if it should be dropped.
        """
        pass

    def has_rules(self) -> bool:
        """
        Report whether this rule can exclude anything at all.

        Returns:
            bool: True unless the rule is configured as a no-op.
        """
        return True
