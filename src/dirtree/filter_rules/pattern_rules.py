"""Include/exclude filtering with glob patterns matched against base names."""

from typing import List, Sequence

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from dirtree.exceptions import PatternSyntaxError
from dirtree.file_system_tree.entry import Entry

from .base_rules import BaseFilterRules


def compile_pattern(pattern: str, ignore_case: bool = False) -> PathSpec:
    """Compile a single glob pattern.

    Patterns use gitwildmatch syntax through the pathspec library. Since they
    are only ever matched against a base name, this is the familiar shell glob
    dialect: ``*``, ``?``, ``[abc]`` and ``[!abc]``.

    Args:
        pattern: The pattern to compile.
        ignore_case: Lowercase the pattern; names must then be lowercased too.

    Returns:
        A PathSpec holding the compiled pattern.

    Raises:
        PatternSyntaxError: If the pattern is malformed.

    Example:
        >>> compile_pattern("*.py").match_file("main.py")
        True
        >>> compile_pattern("[a-c]?.txt").match_file("b1.txt")
        True
    """
    text = pattern.lower() if ignore_case else pattern
    try:
        return PathSpec.from_lines(GitWildMatchPattern, [text])
    except ValueError as e:
        raise PatternSyntaxError(pattern, str(e)) from e


class PatternFilterRules(BaseFilterRules):
    """Filtering rules driven by include and exclude glob patterns.

    An entry whose name matches any exclude pattern is always dropped, whether
    it is a file or a directory. When include patterns are given, an entry that
    is subject to them must match at least one. Include patterns apply to
    files only, so directories stay visible and can be descended into.

    All patterns are compiled on construction so that a malformed pattern is
    reported before any traversal starts.

    Attributes:
        include_patterns (List[str]): Patterns an entry must match to be listed.
        exclude_patterns (List[str]): Patterns that remove matching entries.
        ignore_case (bool): Match case-insensitively.

    Example:
        >>> from dirtree.types import EntryKind
        >>> rules = PatternFilterRules(include_patterns=["*.rs"], exclude_patterns=["target"])
        >>> rules.include(Entry("main.rs", "main.rs", EntryKind.FILE))
        True
        >>> rules.include(Entry("Cargo.toml", "Cargo.toml", EntryKind.FILE))
        False
        >>> rules.include(Entry("src", "src", EntryKind.DIRECTORY))
        True
        >>> rules.include(Entry("target", "target", EntryKind.DIRECTORY))
        False
    """

    def __init__(
        self,
        include_patterns: Sequence[str] = (),
        exclude_patterns: Sequence[str] = (),
        ignore_case: bool = False,
    ):
        self.include_patterns: List[str] = list(include_patterns)
        self.exclude_patterns: List[str] = list(exclude_patterns)
        self.ignore_case = ignore_case
        self._include_specs = [compile_pattern(p, ignore_case) for p in self.include_patterns]
        self._exclude_specs = [compile_pattern(p, ignore_case) for p in self.exclude_patterns]

    def _key(self, name: str) -> str:
        return name.lower() if self.ignore_case else name

    def matches_include(self, entry: Entry) -> bool:
        """Check whether the entry's name matches at least one include pattern."""
        name = self._key(entry.name)
        return any(spec.match_file(name) for spec in self._include_specs)

    def matches_exclude(self, entry: Entry) -> bool:
        """Check whether the entry's name matches any exclude pattern."""
        name = self._key(entry.name)
        return any(spec.match_file(name) for spec in self._exclude_specs)

    def include(self, entry: Entry) -> bool:
        if self._include_specs and not entry.is_dir:
            if not self.matches_include(entry):
                return False
        return not self.matches_exclude(entry)

    def has_rules(self) -> bool:
        return bool(self._include_specs or self._exclude_specs)
