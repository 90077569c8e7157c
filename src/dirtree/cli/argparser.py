"""Command-line argument parsing for dirtree.

This module defines the command-line interface for dirtree, handling argument
parsing, validation, and the translation of parsed arguments into a TreeConfig.
"""

import argparse
from pathlib import Path

from dirtree import __version__
from dirtree.config import TreeConfig
from dirtree.file_system_tree.permission_action import PermissionAction
from dirtree.types import ColorMode, OutputFormat, SortKey

_COLOR_MODES = {
    "auto": ColorMode.AUTO,
    "always": ColorMode.FORCE,
    "never": ColorMode.OFF,
}

_PERMISSION_ACTIONS = {
    "ignore": PermissionAction.IGNORE,
    "warn": PermissionAction.IGNORE,
    "fail": PermissionAction.RAISE,
}


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    ``-h`` selects human-readable sizes as in ``tree``, so help is only
    available as ``--help``.

    Returns:
        An ArgumentParser instance configured with dirtree's options.
    """
    description = """
    dirtree: list the contents of a directory as an indented tree.

    The directory is walked once, filtered and sorted, then rendered as a
    box-drawing text tree (the default), a JSON document, or TOON, a compact
    line-per-entry notation that is cheap to feed to language models.
    """

    epilog = """
    Examples:
      # List the current directory
      dirtree

      # Two levels deep, directories first, with human-readable sizes
      dirtree -L 2 --dirsfirst -h /path/to/project

      # Only Python files, skipping virtual environments
      dirtree -P "*.py" -I ".venv" -I "__pycache__" /path/to/project

      # Only the directories that hold Python files
      dirtree -d -P "*.py" /path/to/project

      # Full paths, permissions and dates, newest last
      dirtree -f -p -D -t /path/to/project

      # Machine-readable output
      dirtree -J -o tree.json /path/to/project
      dirtree -T -s -p /path/to/project

      # Report unreadable directories on stderr, or stop at the first one
      dirtree --permission-action warn /path/to/project
      dirtree --permission-action fail /path/to/project
    """

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )

    parser.add_argument("--help", action="help", help="Show this help message and exit")
    parser.add_argument(
        "-V", "--version", action="version", version=f"dirtree {__version__}", help="Show the version and exit"
    )

    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        default=Path("."),
        help="The directory to list (default: the current directory).",
    )

    listing = parser.add_argument_group("listing options")
    listing.add_argument("-a", "--all", action="store_true", help="List hidden entries (names starting with a dot).")
    listing.add_argument("-d", "--dirs-only", action="store_true", help="List directories only.")
    listing.add_argument(
        "-L",
        "--level",
        type=int,
        metavar="N",
        help="Descend at most N levels below the directory (N must be greater than 0).",
    )
    listing.add_argument(
        "-f", "--full-path", action="store_true", help="Print the full path of each entry instead of the tree prefix."
    )
    listing.add_argument(
        "-P",
        "--pattern",
        action="append",
        default=[],
        metavar="PATTERN",
        help=(
            "List only files whose name matches PATTERN (shell glob: *, ?, [abc], [!abc]). "
            "With -d, list only directories holding a matching file. Can be specified multiple times."
        ),
    )
    listing.add_argument(
        "-I",
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Do not list files or directories whose name matches PATTERN. Can be specified multiple times.",
    )
    listing.add_argument("--ignore-case", action="store_true", help="Match patterns case-insensitively.")
    listing.add_argument(
        "--permission-action",
        choices=["ignore", "warn", "fail"],
        default="ignore",
        help=(
            "How to handle directories that cannot be read: list them with an error marker (ignore), "
            "also report them on stderr (warn), or stop with exit code 126 (fail). Default: ignore."
        ),
    )

    details = parser.add_argument_group("file details")
    details.add_argument("-p", "--perm", action="store_true", help="Print the permissions of each entry.")
    details.add_argument("-s", "--size", action="store_true", help="Print the size of each entry in bytes.")
    details.add_argument(
        "-h", "--human", action="store_true", help="Print sizes in human-readable units (powers of 1024)."
    )
    details.add_argument("--si", action="store_true", help="Like -h, but use powers of 1000.")
    details.add_argument("-D", "--date", action="store_true", help="Print the last modification date of each entry.")
    details.add_argument(
        "--timefmt", metavar="FORMAT", help="strftime format for dates (implies -D). Default: '%%b %%d %%H:%%M'."
    )
    details.add_argument(
        "-F", "--classify", action="store_true", help="Append '/' to directories, '*' to executables and '@' to links."
    )

    sorting = parser.add_argument_group("sorting options")
    sorting.add_argument("-t", "--sort-time", action="store_true", help="Sort by last modification time.")
    sorting.add_argument(
        "-U",
        "--unsorted",
        dest="sort",
        action="store_const",
        const="none",
        help="Leave entries in directory listing order. Takes precedence over -t.",
    )
    sorting.add_argument(
        "--sort",
        dest="sort",
        choices=["name", "mtime", "size", "none"],
        help="Sort entries by name, mtime, size or not at all (default: name).",
    )
    sorting.add_argument("-r", "--reverse", action="store_true", help="Reverse the sort order.")
    sorting.add_argument("--dirsfirst", action="store_true", help="List directories before files.")

    output = parser.add_argument_group("output options")
    output.add_argument("-i", "--noindent", action="store_true", help="Do not print the tree prefix.")
    output.add_argument("--noreport", action="store_true", help="Omit the directory and file count report.")
    output.add_argument(
        "-C", dest="color", action="store_const", const="always", help="Always colorize the output."
    )
    output.add_argument("-n", dest="color", action="store_const", const="never", help="Never colorize the output.")
    output.add_argument(
        "--color",
        dest="color",
        choices=["auto", "always", "never"],
        help="When to colorize the output (default: auto, only when writing to a terminal).",
    )
    output_format = output.add_mutually_exclusive_group()
    output_format.add_argument(
        "-J", "--json", dest="format", action="store_const", const="json", help="Print the tree as JSON."
    )
    output_format.add_argument(
        "-T", "--toon", dest="format", action="store_const", const="toon", help="Print the tree as TOON."
    )
    output.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )

    # Several options share each of these destinations
    parser.set_defaults(sort="name", color="auto", format="text")

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.level is not None and args.level < 1:
        raise ValueError(f"Invalid level {args.level}: must be greater than 0")


def build_config(args: argparse.Namespace) -> TreeConfig:
    """Translate parsed arguments into a TreeConfig.

    Args:
        args: Arguments returned by the parser from create_parser().

    Returns:
        The configuration for this run.
    """
    return TreeConfig(
        all=args.all,
        dirs_only=args.dirs_only,
        max_depth=args.level,
        full_path=args.full_path,
        show_perm=args.perm,
        show_size=args.size,
        human_size=args.human,
        show_date=args.date or args.timefmt is not None,
        classify=args.classify,
        sort_by_time=args.sort_time,
        reverse=args.reverse,
        dirs_first=args.dirsfirst,
        include_patterns=list(args.pattern),
        exclude_patterns=list(args.ignore),
        color_mode=_COLOR_MODES[args.color],
        output_format=OutputFormat(args.format),
        ignore_case=args.ignore_case,
        si_units=args.si,
        time_format=args.timefmt,
        sort_key=SortKey(args.sort),
        no_indent=args.noindent,
        no_report=args.noreport,
        permission_action=_PERMISSION_ACTIONS[args.permission_action],
    )
