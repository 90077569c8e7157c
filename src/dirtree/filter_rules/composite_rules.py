"""Composite filtering rules for combining multiple rule types."""

from typing import List, Sequence

from dirtree.file_system_tree.entry import Entry

from .base_rules import BaseFilterRules


class CompositeFilterRules(BaseFilterRules):
    """Composite filtering rules that combine multiple rule types.

    An entry is included only if EVERY constituent rule includes it. Hidden,
    directories-only and pattern rules each veto independently, so the order
    in which they are combined never changes the outcome. An empty composite
    includes everything.

    Attributes:
        rules (List[BaseFilterRules]): List of constituent filtering rules.

    Example:
        >>> from dirtree.filter_rules.hidden_rules import HiddenFilterRules
        >>> from dirtree.filter_rules.pattern_rules import PatternFilterRules
        >>> from dirtree.types import EntryKind
        >>> composite = CompositeFilterRules([HiddenFilterRules(), PatternFilterRules(exclude_patterns=["*.pyc"])])
        >>> composite.include(Entry(".env", ".env", EntryKind.FILE))
        False
        >>> composite.include(Entry("a.pyc", "a.pyc", EntryKind.FILE))
        False
        >>> composite.include(Entry("a.py", "a.py", EntryKind.FILE))
        True
    """

    def __init__(self, rules: Sequence[BaseFilterRules] = ()):
        """Initialize composite filtering rules.

        Args:
            rules: Sequence of filtering rules to combine.

        Raises:
            TypeError: If any rule doesn't implement BaseFilterRules.
        """
        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseFilterRules):
                raise TypeError(f"Rule at index {i} must implement BaseFilterRules, got {type(rule)}")

        self.rules: List[BaseFilterRules] = list(rules)

    def include(self, entry: Entry) -> bool:
        """Check that no constituent rule vetoes the entry.

        Uses short-circuit evaluation: stops at the first rule that excludes.
        """
        return all(rule.include(entry) for rule in self.rules)

    def has_rules(self) -> bool:
        return any(rule.has_rules() for rule in self.rules)

    def add_rule_object(self, rule: BaseFilterRules) -> None:
        """Add another filtering rule object to this composite.

        Raises:
            TypeError: If rule doesn't implement BaseFilterRules.
        """
        if not isinstance(rule, BaseFilterRules):
            raise TypeError(f"Rule must implement BaseFilterRules, got {type(rule)}")
        self.rules.append(rule)
