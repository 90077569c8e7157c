"""Classic box-drawing text output strategy.

This module renders the tree the way the Unix ``tree`` command does: one line
per entry with branch connectors, followed by a blank line and a summary of
the number of directories and files.
"""

from typing import Iterator, List

from dirtree.config import TreeConfig
from dirtree.file_system_tree.entry import Entry
from dirtree.file_system_tree.walker import TreeStats
from dirtree.formatting import format_size, format_time

from .base_strategy import OutputStrategy

# Tree drawing segments
BRANCH = "├── "
LAST_BRANCH = "└── "
VERTICAL = "│   "
EMPTY = "    "

# ANSI colors
DIRECTORY_COLOR = "\033[1;34m"
EXECUTABLE_COLOR = "\033[1;32m"
SYMLINK_COLOR = "\033[36m"
RESET = "\033[0m"


def colorize(text: str, entry: Entry) -> str:
    """Wrap text in the ANSI color for the entry's kind.

    Directories are bold blue, executables bold green, symlinks cyan; plain
    files are returned unchanged.

    Example:
        >>> from dirtree.types import EntryKind
        >>> colorize("src", Entry("src", "src", EntryKind.DIRECTORY))
        '\\x1b[1;34msrc\\x1b[0m'
        >>> colorize("a.txt", Entry("a.txt", "a.txt", EntryKind.FILE, mode=0o100644))
        'a.txt'
    """
    if entry.is_dir:
        color = DIRECTORY_COLOR
    elif entry.is_symlink:
        color = SYMLINK_COLOR
    elif entry.is_executable:
        color = EXECUTABLE_COLOR
    else:
        return text
    return f"{color}{text}{RESET}"


def format_report(stats: TreeStats) -> str:
    """Format the summary line.

    Example:
        >>> format_report(TreeStats(directories=1, files=3))
        '1 directory, 3 files'
        >>> format_report(TreeStats(directories=0, files=1))
        '0 directories, 1 file'
    """
    directory_word = "directory" if stats.directories == 1 else "directories"
    file_word = "file" if stats.files == 1 else "files"
    return f"{stats.directories} {directory_word}, {stats.files} {file_word}"


class TextOutputStrategy(OutputStrategy):
    """Output strategy producing the classic connector-prefixed listing.

    Each ancestor level contributes ``"│   "`` when that ancestor has a later
    sibling and ``"    "`` when it was the last child; the entry itself gets
    ``"├── "`` or ``"└── "``. In full-path mode every entry is printed as its
    full path with no prefix at all.

    Optional decorations are printed before the name in a fixed order:
    permissions, size, date. Classification, symlink targets and color apply to
    the name itself.

    Attributes:
        config (TreeConfig): Display options.
        use_color (bool): Whether to wrap names in ANSI colors.

    Example:
        >>> from dirtree.types import EntryKind
        >>> src = Entry("src", "project/src", EntryKind.DIRECTORY, children=[
        ...     Entry("lib.rs", "project/src/lib.rs", EntryKind.FILE),
        ...     Entry("main.rs", "project/src/main.rs", EntryKind.FILE),
        ... ])
        >>> root = Entry("project", "project", EntryKind.DIRECTORY, children=[
        ...     src, Entry("Cargo.toml", "project/Cargo.toml", EntryKind.FILE),
        ... ])
        >>> strategy = TextOutputStrategy(TreeConfig())
        >>> print(strategy.render(root, TreeStats(directories=1, files=3)), end="")
        project
        ├── src
        │   ├── lib.rs
        │   └── main.rs
        └── Cargo.toml
        <BLANKLINE>
        1 directory, 3 files
    """

    def __init__(self, config: TreeConfig, use_color: bool = False) -> None:
        super().__init__(config)
        self.use_color = use_color

    def stream(self, root: Entry, stats: TreeStats) -> Iterator[str]:
        yield self._format_name(root)
        yield from self._stream_children(root, "")

        if not self.config.no_report:
            yield ""
            yield format_report(stats)

    def _stream_children(self, directory: Entry, prefix: str) -> Iterator[str]:
        children = directory.children or []
        for index, child in enumerate(children):
            is_last = index == len(children) - 1

            if self.config.full_path or self.config.no_indent:
                connector = ""
            else:
                connector = prefix + (LAST_BRANCH if is_last else BRANCH)

            yield f"{connector}{self._format_decorations(child)}{self._format_name(child)}"

            if child.children:
                yield from self._stream_children(child, prefix + (EMPTY if is_last else VERTICAL))

    def _format_decorations(self, entry: Entry) -> str:
        fields: List[str] = []
        if self.config.show_perm:
            fields.append(entry.permissions)
        if self.config.show_size:
            fields.append(format_size(entry.size, self.config.human_size, self.config.si_units))
        if self.config.show_date:
            fields.append(format_time(entry.mtime, self.config.time_format))
        return "".join(f"{field} " for field in fields)

    def _format_name(self, entry: Entry) -> str:
        name = self.display_name(entry)
        if self.use_color:
            name = colorize(name, entry)
        if self.config.classify:
            name += entry.type_indicator
        if entry.symlink_target is not None:
            name += f" -> {entry.symlink_target}"
        if entry.error is not None:
            name += f" [{entry.error}]"
        return name
