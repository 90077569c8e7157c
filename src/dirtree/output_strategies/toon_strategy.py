"""TOON output strategy for tree rendering.

TOON (Token-Oriented Object Notation) is a compact, line-per-entry format
meant to be cheap to read for both people and language models: indentation
shows nesting and each line is a colon-delimited record.
"""

from typing import Iterator, List

from dirtree.file_system_tree.entry import Entry
from dirtree.file_system_tree.walker import TreeStats
from dirtree.formatting import TOON_TIME_FORMAT, format_size, format_time
from dirtree.types import EntryKind

from .base_strategy import OutputStrategy

HEADER = "# TOON - Tree Output"
INDENT = "  "


def escape_field(value: str) -> str:
    """Escape a value so it occupies exactly one colon-delimited field on one line.

    Example:
        >>> escape_field("notes:v2.txt")
        'notes\\\\:v2.txt'
        >>> escape_field("plain.txt")
        'plain.txt'
    """
    return value.replace("\\", "\\\\").replace(":", "\\:").replace("\n", "\\n")


class TOONOutputStrategy(OutputStrategy):
    """Output strategy producing TOON.

    The first line is the header ``# TOON - Tree Output``. Every entry,
    including the root, follows on its own line, indented two spaces per level:

        type[:permissions][:size][:date]:name

    ``type`` is ``d`` (directory), ``f`` (file) or ``l`` (link). Optional
    fields appear in that fixed order on every line once their option is
    enabled. Dates use the colon-free form ``%Y%m%dT%H%M%S`` unless a
    time_format is configured; colons inside any field are escaped as ``\\:``.

    Example:
        >>> from dirtree.config import TreeConfig
        >>> root = Entry("top", "top", EntryKind.DIRECTORY, children=[
        ...     Entry("sub", "top/sub", EntryKind.DIRECTORY, children=[
        ...         Entry("a.txt", "top/sub/a.txt", EntryKind.FILE, size=2048),
        ...     ]),
        ... ])
        >>> strategy = TOONOutputStrategy(TreeConfig(human_size=True))
        >>> print(strategy.render(root, TreeStats(directories=1, files=1)), end="")
        # TOON - Tree Output
        d:0:top
          d:0:sub
            f:2.0K:a.txt
    """

    def stream(self, root: Entry, stats: TreeStats) -> Iterator[str]:
        yield HEADER
        yield from self._stream_entry(root, 0)

    def _stream_entry(self, entry: Entry, depth: int) -> Iterator[str]:
        yield INDENT * depth + ":".join(self._fields(entry))
        for child in entry.children or []:
            yield from self._stream_entry(child, depth + 1)

    def _fields(self, entry: Entry) -> List[str]:
        fields = [self._type_code(entry)]

        if self.config.show_perm:
            fields.append(entry.permissions)
        if self.config.show_size:
            fields.append(format_size(entry.size, self.config.human_size, self.config.si_units).strip())
        if self.config.show_date:
            fields.append(escape_field(format_time(entry.mtime, self.config.time_format or TOON_TIME_FORMAT)))

        name = self.display_name(entry)
        if entry.symlink_target is not None:
            name += f" -> {entry.symlink_target}"
        fields.append(escape_field(name))
        return fields

    @staticmethod
    def _type_code(entry: Entry) -> str:
        if entry.kind is EntryKind.DIRECTORY:
            return "d"
        if entry.kind is EntryKind.SYMLINK:
            return "l"
        return "f"
