"""Filtering rules that decide which entries appear in a listing."""

from typing import Sequence

from dirtree.config import TreeConfig
from dirtree.file_system_tree.entry import Entry

from .base_rules import BaseFilterRules
from .composite_rules import CompositeFilterRules
from .dirs_only_rules import DirsOnlyFilterRules
from .hidden_rules import HiddenFilterRules
from .pattern_rules import PatternFilterRules, compile_pattern

__all__ = [
    "BaseFilterRules",
    "CompositeFilterRules",
    "DirsOnlyFilterRules",
    "HiddenFilterRules",
    "PatternFilterRules",
    "build_display_rules",
    "build_filter_rules",
    "compile_pattern",
    "include",
]


def build_filter_rules(config: TreeConfig) -> CompositeFilterRules:
    """Build the rules every listed entry must pass.

    Hidden and pattern rules are added only when they can exclude something,
    so a default configuration yields an empty composite. Include patterns
    apply to files only, in every mode.

    Raises:
        PatternSyntaxError: If any configured pattern is malformed.
    """
    filter_rules = CompositeFilterRules()
    for rule in (
        HiddenFilterRules(show_hidden=config.all),
        PatternFilterRules(
            include_patterns=config.include_patterns,
            exclude_patterns=config.exclude_patterns,
            ignore_case=config.ignore_case,
        ),
    ):
        if rule.has_rules():
            filter_rules.add_rule_object(rule)
    return filter_rules


def build_display_rules(config: TreeConfig) -> CompositeFilterRules:
    """Build the rules deciding which entries that passed filtering are shown.

    In directories-only mode files still go through build_filter_rules, so a
    directory can be judged by what it contains, and are hidden afterwards.
    Outside that mode the composite is empty and has_rules() is False.
    """
    display_rules = CompositeFilterRules()
    if config.dirs_only:
        display_rules.add_rule_object(DirsOnlyFilterRules())
    return display_rules


def include(
    entry: Entry,
    show_hidden: bool = False,
    include_patterns: Sequence[str] = (),
    exclude_patterns: Sequence[str] = (),
    dirs_only: bool = False,
    ignore_case: bool = False,
) -> bool:
    """Decide whether a single entry, judged on its own, belongs in a listing.

    This is the one-shot form of the rules the walker applies. Directories are
    never subject to include patterns. In directories-only mode files are
    rejected; the walker additionally drops a directory when nothing below it
    passes filtering.

    Raises:
        PatternSyntaxError: If any pattern is malformed.

    Example:
        >>> from dirtree.types import EntryKind
        >>> include(Entry("notes.md", "notes.md", EntryKind.FILE), include_patterns=["*.md"])
        True
        >>> include(Entry(".notes.md", ".notes.md", EntryKind.FILE), include_patterns=["*.md"])
        False
        >>> include(Entry("notes.md", "notes.md", EntryKind.FILE), dirs_only=True)
        False
    """
    config = TreeConfig(
        all=show_hidden,
        dirs_only=dirs_only,
        include_patterns=list(include_patterns),
        exclude_patterns=list(exclude_patterns),
        ignore_case=ignore_case,
    )
    return build_filter_rules(config).include(entry) and build_display_rules(config).include(entry)
