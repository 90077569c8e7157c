"""JSON output strategy for tree rendering.

This module provides a strategy that renders the tree as a nested JSON
structure, using the standard json module for encoding and escaping.
"""

import json
from typing import Any, Dict, Iterator, Union

from dirtree.file_system_tree.entry import Entry
from dirtree.file_system_tree.walker import TreeStats
from dirtree.formatting import format_size, format_time
from dirtree.types import EntryKind

from .base_strategy import OutputStrategy


class JSONOutputStrategy(OutputStrategy):
    """Output strategy that renders the tree as a JSON array.

    The output is a single array holding one object for the root. Each object
    has the following structure:
    {
        "type": "directory" | "file" | "link",
        "name": "entry name",
        "target": "link target",       # links only
        "permissions": "-rw-r--r--",   # only with show_perm
        "size": 123,                   # only with show_size; a string when human-readable
        "date": "Jan 01 12:00",        # only with show_date
        "error": "error opening dir",  # only for unreadable directories
        "contents": [...]              # non-empty directories only
    }

    Field values are formatted exactly as the text output's decorations.
    Strings are escaped by the json module, so quotes, backslashes and control
    characters in names always produce valid JSON.

    Example:
        >>> from dirtree.config import TreeConfig
        >>> root = Entry("top", "top", EntryKind.DIRECTORY, children=[
        ...     Entry('say "hi".txt', 'top/say "hi".txt', EntryKind.FILE, size=3),
        ... ])
        >>> strategy = JSONOutputStrategy(TreeConfig(show_size=True))
        >>> strategy.to_data(root)
        [{'type': 'directory', 'name': 'top', 'size': 0, 'contents': [{'type': 'file', 'name': 'say "hi".txt', 'size': 3}]}]
        >>> print(JSONOutputStrategy(TreeConfig()).render(root, TreeStats(files=1)), end="")
        [
          {
            "type": "directory",
            "name": "top",
            "contents": [
              {
                "type": "file",
                "name": "say \\"hi\\".txt"
              }
            ]
          }
        ]
    """

    def stream(self, root: Entry, stats: TreeStats) -> Iterator[str]:
        # json escapes every "\n" inside strings, so this only splits between tokens
        yield from json.dumps(self.to_data(root), indent=2, ensure_ascii=False).split("\n")

    def to_data(self, root: Entry) -> list:
        """Build the JSON-ready structure for the whole tree."""
        return [self._entry_to_dict(root)]

    def _entry_to_dict(self, entry: Entry) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self._type_name(entry), "name": self.display_name(entry)}

        if entry.symlink_target is not None:
            data["target"] = entry.symlink_target
        if self.config.show_perm:
            data["permissions"] = entry.permissions
        if self.config.show_size:
            data["size"] = self._size_value(entry)
        if self.config.show_date:
            data["date"] = format_time(entry.mtime, self.config.time_format)
        if entry.error is not None:
            data["error"] = entry.error
        if entry.children:
            data["contents"] = [self._entry_to_dict(child) for child in entry.children]

        return data

    def _size_value(self, entry: Entry) -> Union[int, str]:
        if self.config.human_size:
            return format_size(entry.size, human=True, si=self.config.si_units).strip()
        return entry.size

    @staticmethod
    def _type_name(entry: Entry) -> str:
        if entry.kind is EntryKind.DIRECTORY:
            return "directory"
        if entry.kind is EntryKind.SYMLINK:
            return "link"
        return "file"
