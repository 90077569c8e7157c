"""Signal handling for the dirtree CLI.

SIGPIPE (output pipe closed early, e.g. ``dirtree | head``) and SIGINT (Ctrl+C)
only set flags here; the writer checks them and stops, and main() turns them
into the conventional exit codes.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Optional

# Not available on Windows
_SIGPIPE = getattr(signal, "SIGPIPE", None)


class SignalHandler:
    """Records SIGPIPE and SIGINT so output can stop cleanly.

    Each handler restores the original disposition after the first signal, so
    a second Ctrl+C behaves as usual.

    Attributes:
        sigpipe_received: Set once SIGPIPE has been received.
        sigint_received: Set once SIGINT has been received.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler: Any = signal.getsignal(_SIGPIPE) if _SIGPIPE is not None else None
        self.original_sigint_handler: Any = signal.getsignal(signal.SIGINT)

    @property
    def interrupted(self) -> bool:
        """Whether either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        if _SIGPIPE is not None:
            signal.signal(_SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)


# Create a singleton instance for the application
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGPIPE (where supported) and SIGINT handlers."""
    if _SIGPIPE is not None:
        signal.signal(_SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Point stdout at the null device after an interruption.

    Keeps the interpreter from reporting a broken pipe while flushing stdout at
    shutdown.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
