"""Permission action enum for handling unreadable entries below the root."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory or entry below the root cannot be read.

    Values:
        IGNORE: Record the failure on the entry, count it, and keep walking (default behavior)
        RAISE: Raise EntryUnreadableError immediately
    """

    IGNORE = "ignore"
    RAISE = "raise"
