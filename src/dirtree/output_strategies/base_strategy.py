"""Output strategy base class defining the interface for tree rendering.

This module provides the abstract base class that every renderer implements.
A strategy receives the fully built tree and the walk totals and produces the
output one line at a time. Strategies only read the tree; the order of each
directory's children was fixed by the walker and is never changed here.
"""

from abc import ABC, abstractmethod
from typing import Iterator

from dirtree.config import TreeConfig
from dirtree.file_system_tree.entry import Entry
from dirtree.file_system_tree.walker import TreeStats


class OutputStrategy(ABC):
    """Abstract base class defining the interface for tree output formats.

    This class implements the Strategy pattern for rendering a tree in
    different formats (text, JSON, TOON). Concrete strategies implement
    stream(); render() is provided for callers that want the whole output as a
    single string.

    Attributes:
        config (TreeConfig): Display options (decorations, full paths, report).

    Example:
        >>> class NamesOnly(OutputStrategy):
        ...     def stream(self, root, stats):
        ...         yield root.name
        ...         for child in root.children or []:
        ...             yield child.name
        >>> from dirtree.types import EntryKind
        >>> root = Entry("top", "top", EntryKind.DIRECTORY, children=[Entry("a", "top/a", EntryKind.FILE)])
        >>> print(NamesOnly(TreeConfig()).render(root, TreeStats(files=1)), end="")
        top
        a
    """

    def __init__(self, config: TreeConfig) -> None:
        self.config = config

    @abstractmethod
    def stream(self, root: Entry, stats: TreeStats) -> Iterator[str]:
        """Generate the output one line at a time.

        Args:
            root: The root of the tree built by the walker.
            stats: Totals accumulated during the walk.

        Yields:
            Lines of output without trailing newlines.
        """
        pass

    def render(self, root: Entry, stats: TreeStats) -> str:
        """Render the complete output, each line terminated by a newline."""
        return "".join(f"{line}\n" for line in self.stream(root, stats))

    def display_name(self, entry: Entry) -> str:
        """The name shown for an entry: its full path in full-path mode, else its base name."""
        return entry.full_path if self.config.full_path else entry.name
