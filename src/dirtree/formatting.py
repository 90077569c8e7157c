"""Field formatting shared by every output strategy.

Permissions, sizes and dates are rendered here once so that the text, JSON and
TOON outputs agree on how a field looks.
"""

import stat
from datetime import datetime
from typing import Optional

DEFAULT_TIME_FORMAT = "%b %d %H:%M"

# ISO 8601 basic format; contains no colons so TOON field positions stay fixed
TOON_TIME_FORMAT = "%Y%m%dT%H%M%S"

_BINARY_UNITS = ("B", "K", "M", "G", "T", "P")
_SI_UNITS = ("B", "kB", "MB", "GB", "TB", "PB")


def format_permissions(mode: int) -> str:
    """Render raw st_mode bits as a 10-character symbolic string.

    Args:
        mode: The st_mode value from a stat result.

    Returns:
        A string such as ``drwxr-xr-x``, including setuid, setgid and sticky letters.

    Example:
        >>> format_permissions(0o040755)
        'drwxr-xr-x'
        >>> format_permissions(0o100644)
        '-rw-r--r--'
        >>> format_permissions(0o104755)
        '-rwsr-xr-x'
        >>> format_permissions(0o041777)
        'drwxrwxrwt'
    """
    return stat.filemode(mode)


def format_size(size: int, human: bool = False, si: bool = False) -> str:
    """Render a byte count the way the size column of a tree listing does.

    Raw sizes are right-aligned to ten columns. Human-readable sizes use a
    single-letter unit (powers of 1024) or an SI unit (powers of 1000), with one
    decimal below ten and none above. Values smaller than one unit are printed
    as a bare, right-aligned number.

    Args:
        size: Size in bytes.
        human: Whether to use human-readable units.
        si: Use powers of 1000 instead of 1024. Only meaningful with human.

    Returns:
        The formatted, padded size. Callers that need an unpadded value strip it.

    Example:
        >>> format_size(512)
        '       512'
        >>> format_size(512, human=True)
        ' 512'
        >>> format_size(1024, human=True)
        '1.0K'
        >>> format_size(1536000, human=True)
        '1.5M'
        >>> format_size(20480, human=True)
        ' 20K'
        >>> format_size(1500, human=True, si=True)
        '1.5kB'
    """
    if not human:
        return f"{size:>10}"

    units = _SI_UNITS if si else _BINARY_UNITS
    base = 1000 if si else 1024

    if size < base:
        return f"{size:>4}"

    value = float(size)
    unit_index = 0
    while value >= base and unit_index < len(units) - 1:
        value /= base
        unit_index += 1

    if value >= 10:
        return f"{value:>3.0f}{units[unit_index]}"
    return f"{value:>3.1f}{units[unit_index]}"


def format_time(mtime: float, time_format: Optional[str] = None) -> str:
    """Render a modification timestamp in local time.

    Args:
        mtime: Seconds since the epoch.
        time_format: strftime format; defaults to ``%b %d %H:%M``.

    Returns:
        The formatted date string.
    """
    return datetime.fromtimestamp(mtime).strftime(time_format or DEFAULT_TIME_FORMAT)
