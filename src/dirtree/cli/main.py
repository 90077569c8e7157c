"""Command-line interface for dirtree.

This module provides the ``dirtree`` command: it parses arguments, builds the
listing, and writes the rendering to stdout or a file while handling signals
and errors.

Signal Handling Notes:
    - SIGPIPE: Handled when the output pipe is closed (e.g., when piping to
      `head`) on Unix-like systems
    - SIGINT: Handled for clean exit on Ctrl+C

Exit Codes:
    0: Successful completion
    1: Runtime error (missing directory, malformed pattern, invalid option value)
    2: Command-line syntax error
    126: Permission denied (unreadable root, or any unreadable entry with
        --permission-action fail)
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # List a directory two levels deep
    $ dirtree -L 2 /path/to/dir

    # Write JSON to a file, warning about unreadable directories
    $ dirtree -J -o tree.json --permission-action warn /path/to/dir
"""

import sys
from typing import Optional

from dirtree.cli.argparser import build_config, create_parser, validate_args
from dirtree.cli.safe_writer import SafeWriter
from dirtree.cli.signal_handler import setup_signal_handling, signal_handler
from dirtree.dirtree import DirTree
from dirtree.exceptions import EntryUnreadableError, RootNotReadableError
from dirtree.types import ColorMode, PathType


def should_colorize(color_mode: ColorMode, output: Optional[PathType] = None) -> bool:
    """Decide whether text output gets ANSI colors.

    Args:
        color_mode: The configured color mode.
        output: Output file, or None when writing to stdout.

    Returns:
        True for FORCE; False for OFF; for AUTO, True only when writing to
        stdout and stdout is a terminal.
    """
    if color_mode is ColorMode.FORCE:
        return True
    if color_mode is ColorMode.OFF:
        return False
    return output is None and sys.stdout.isatty()


def main() -> None:
    """Run the dirtree command.

    Exits with one of the codes listed in the module docstring.
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        # argparse exits with 2 on syntax errors and 0 for --help/--version
        args = parser.parse_args()

        validate_args(args)
        config = build_config(args)
        use_color = should_colorize(config.color_mode, args.output)

        try:
            listing = DirTree(args.directory, config, use_color=use_color)

            output_file = args.output if args.output else sys.stdout.fileno()

            with SafeWriter(output_file) as safe_writer:
                try:
                    for line in listing.stream_output():
                        safe_writer.write(line)
                except BrokenPipeError:
                    pass  # SafeWriter closes in the context manager

            if args.permission_action == "warn":
                for message in listing.errors:
                    print(f"Warning: {message}", file=sys.stderr)

        except (RootNotReadableError, EntryUnreadableError) as e:
            print(f"Error: {str(e)}", file=sys.stderr)
            sys.exit(126)

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # An interrupted run still exits non-zero
    if signal_handler.sigpipe_received.is_set():
        sys.exit(141)
    elif signal_handler.sigint_received.is_set():
        sys.exit(130)


if __name__ == "__main__":
    main()
