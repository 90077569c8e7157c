class TraversalError(Exception):
    """
    Base class for errors raised while walking a directory tree.

    Attributes:
        path (str): The path that could not be traversed.

    Example:
        >>> error = TraversalError("/some/where", "cannot walk")
        >>> error.path
        '/some/where'
        >>> str(error)
        'cannot walk'
    """

    def __init__(self, path: str, message: str) -> None:
        """
        Initialize the exception with the offending path and a message.

        Args:
            path (str): The path that could not be traversed.
            message (str): Human-readable description of the failure.
        """
        self.path = path
        super().__init__(message)


class RootNotFoundError(TraversalError):
    """
    Exception raised when the root path of a listing does not exist.

    Example:
        >>> str(RootNotFoundError("/missing"))
        'Root path does not exist: /missing'
    """

    def __init__(self, path: str) -> None:
        super().__init__(path, f"Root path does not exist: {path}")


class RootNotReadableError(TraversalError):
    """
    Exception raised when the root directory exists but cannot be listed.

    This is always fatal: there is nothing meaningful to render without the
    root's contents.

    Example:
        >>> error = RootNotReadableError("/root/secret", "Permission denied")
        >>> str(error)
        'Cannot read root directory /root/secret: Permission denied'
    """

    def __init__(self, path: str, reason: str) -> None:
        self.reason = reason
        super().__init__(path, f"Cannot read root directory {path}: {reason}")


class EntryUnreadableError(TraversalError):
    """
    Exception describing a single entry below the root that could not be read.

    By default the walker does not raise this: the failure is recorded on the
    entry and counted in the walk statistics, and traversal continues. It is
    raised only when the permission action is RAISE.

    Example:
        >>> str(EntryUnreadableError("a/b", "Permission denied"))
        'Cannot read a/b: Permission denied'
    """

    def __init__(self, path: str, reason: str) -> None:
        self.reason = reason
        super().__init__(path, f"Cannot read {path}: {reason}")


class PatternSyntaxError(ValueError):
    """
    Exception raised when an include or exclude pattern is malformed.

    Patterns are compiled before any traversal begins, so this error always
    surfaces before the filesystem is touched.

    Attributes:
        pattern (str): The pattern that failed to compile.

    Example:
        >>> error = PatternSyntaxError("src/", "pattern normalized to nothing")
        >>> error.pattern
        'src/'
        >>> str(error)
        "Invalid pattern 'src/': pattern normalized to nothing"
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
