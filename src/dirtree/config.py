"""Resolved configuration for a single listing run.

The command-line layer turns arguments into a TreeConfig; everything below it
(filters, walker, renderers) reads only this object.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from dirtree.file_system_tree.permission_action import PermissionAction
from dirtree.types import ColorMode, OutputFormat, SortKey


@dataclass
class TreeConfig:
    """Every option that influences how a tree is walked and rendered.

    Attributes:
        all: List hidden entries (names starting with a dot).
        dirs_only: List directories only.
        max_depth: Maximum depth to descend; None for unlimited. The root is depth 0.
        full_path: Print the full path of each entry instead of the tree prefix.
        show_perm: Print the symbolic permission string of each entry.
        show_size: Print the size of each entry.
        human_size: Print sizes in human-readable units (implies show_size).
        show_date: Print the last modification date of each entry.
        classify: Append a type indicator (``/``, ``*``, ``@``) to names.
        sort_by_time: Sort by modification time unless sort_key is NONE.
        reverse: Reverse the base sort order.
        dirs_first: List directories before files at every level.
        include_patterns: Glob patterns a file must match to be listed.
        exclude_patterns: Glob patterns that remove matching files and directories.
        color_mode: When to colorize text output.
        output_format: Which renderer to use.
        ignore_case: Match patterns case-insensitively.
        si_units: Human-readable sizes in powers of 1000 (implies human_size).
        time_format: strftime format for dates; None uses ``%b %d %H:%M``.
        sort_key: Base comparator when sort_by_time is not set.
        no_indent: Omit the connector prefix in text output.
        no_report: Omit the directory/file summary in text output.
        permission_action: What to do when an entry below the root cannot be read.

    Example:
        >>> config = TreeConfig(max_depth=2, si_units=True)
        >>> config.show_size, config.human_size
        (True, True)
        >>> config.effective_sort_key
        <SortKey.NAME: 'name'>
        >>> TreeConfig(max_depth=0)
        Traceback (most recent call last):
        ...
        ValueError: Invalid level 0: must be greater than 0
    """

    all: bool = False
    dirs_only: bool = False
    max_depth: Optional[int] = None
    full_path: bool = False
    show_perm: bool = False
    show_size: bool = False
    human_size: bool = False
    show_date: bool = False
    classify: bool = False
    sort_by_time: bool = False
    reverse: bool = False
    dirs_first: bool = False
    include_patterns: List[str] = field(default_factory=list)
    exclude_patterns: List[str] = field(default_factory=list)
    color_mode: ColorMode = ColorMode.AUTO
    output_format: OutputFormat = OutputFormat.TEXT
    ignore_case: bool = False
    si_units: bool = False
    time_format: Optional[str] = None
    sort_key: SortKey = SortKey.NAME
    no_indent: bool = False
    no_report: bool = False
    permission_action: PermissionAction = PermissionAction.IGNORE

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"Invalid level {self.max_depth}: must be greater than 0")

        # Accept plain strings for the enum-valued options
        self.color_mode = ColorMode(self.color_mode)
        self.output_format = OutputFormat(self.output_format)
        self.sort_key = SortKey(self.sort_key)
        self.permission_action = PermissionAction(self.permission_action)

        if self.si_units:
            self.human_size = True
        if self.human_size:
            self.show_size = True

    @property
    def effective_sort_key(self) -> SortKey:
        """The comparator the walker actually uses.

        Unsorted wins over sort_by_time, which in turn wins over any other sort_key.
        """
        if self.sort_key is SortKey.NONE:
            return SortKey.NONE
        return SortKey.TIME if self.sort_by_time else self.sort_key
