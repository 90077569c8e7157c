"""Directory tree listing facade.

This module ties the pieces together: it compiles the filter rules, walks the
directory once, and hands the finished tree to the selected output strategy.
"""

from pathlib import Path
from typing import Iterator, List, Optional

from dirtree.config import TreeConfig
from dirtree.file_system_tree.entry import Entry
from dirtree.file_system_tree.walker import TreeStats, TreeWalker
from dirtree.filter_rules import build_display_rules, build_filter_rules
from dirtree.output_strategies import OutputStrategy, get_output_strategy
from dirtree.types import PathType


class DirTree:
    """Directory listing built once and rendered in the configured format.

    Construction validates the configuration, compiles every pattern (so a
    malformed pattern fails before the filesystem is touched) and walks the
    directory. The complete tree and its totals are then available, and
    stream_output() renders them with exactly one output strategy.

    Attributes:
        directory (Path): The root path as given.
        config (TreeConfig): Options for this listing.
        use_color (bool): Whether text output is colorized.

    Example:
        >>> listing = DirTree("project")  # doctest: +SKIP
        >>> for line in listing.stream_output():  # doctest: +SKIP
        ...     print(line, end='')  # Each line includes newline
        project
        ├── Cargo.toml
        └── src
            ├── lib.rs
            └── main.rs
        <BLANKLINE>
        1 directory, 3 files
        >>> listing.directory_count, listing.file_count  # doctest: +SKIP
        (1, 3)

    Raises:
        PatternSyntaxError: If an include or exclude pattern is malformed.
        RootNotFoundError: If the directory does not exist.
        RootNotReadableError: If the directory cannot be listed.
        EntryUnreadableError: If an entry below the root cannot be read and the
            permission action is RAISE.
    """

    def __init__(self, directory: PathType, config: Optional[TreeConfig] = None, use_color: bool = False):
        """Build the listing.

        Args:
            directory: Directory to list. Can be any path-like object.
            config: Options for the listing. Defaults to TreeConfig().
            use_color: Colorize text output. Resolving the configured color
                mode against the output stream is up to the caller.
        """
        self.directory = Path(directory)
        self.config = config if config is not None else TreeConfig()
        self.use_color = use_color

        walker = TreeWalker(
            self.config,
            filter_rules=build_filter_rules(self.config),
            display_rules=build_display_rules(self.config),
        )
        self._root, self._stats = walker.walk(self.directory)
        self._strategy: OutputStrategy = get_output_strategy(self.config, use_color=use_color)

    @property
    def root(self) -> Entry:
        """The root entry of the built tree."""
        return self._root

    @property
    def stats(self) -> TreeStats:
        return self._stats

    @property
    def directory_count(self) -> int:
        """Number of directories listed, excluding the root."""
        return self._stats.directories

    @property
    def file_count(self) -> int:
        """Number of non-directories listed."""
        return self._stats.files

    @property
    def error_count(self) -> int:
        """Number of entries that could not be read."""
        return self._stats.errors

    @property
    def errors(self) -> List[str]:
        """Messages describing each entry that could not be read."""
        return list(self._stats.error_messages)

    def stream_output(self) -> Iterator[str]:
        """Render the tree one line at a time.

        Yields:
            Lines of output, each terminated by a newline.
        """
        for line in self._strategy.stream(self._root, self._stats):
            yield f"{line}\n"

    def render(self) -> str:
        """Render the complete output as a single string."""
        return "".join(self.stream_output())
