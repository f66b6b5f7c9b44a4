"""Interrupt tracking for the superls CLI.

A listing is often piped into a pager or ``head``. When the reader goes away (SIGPIPE)
or the user presses Ctrl+C (SIGINT), the traversal stops quietly and the process exits
with the shell's conventional status for that signal.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Dict, Optional

# Checked in this order when choosing the exit status
EXIT_CODES = {signal.SIGPIPE: 141, signal.SIGINT: 130}


class Interrupts:
    """Records which of the handled signals have arrived.

    Each signal is caught once: the first delivery is recorded and the previous handler
    is put back, so a second Ctrl+C behaves as it would without superls.

    Attributes:
        received: One event per handled signal, set when that signal arrives.
    """

    def __init__(self) -> None:
        self.received: Dict[int, Event] = {signum: Event() for signum in EXIT_CODES}
        self._previous: Dict[int, Any] = {}

    def install(self) -> None:
        for signum in EXIT_CODES:
            previous = signal.signal(signum, self.handle)
            self._previous[signum] = previous if previous is not None else signal.SIG_DFL

    def handle(self, signum: int, frame: Optional[FrameType]) -> None:
        self.received[signum].set()
        signal.signal(signum, self._previous.get(signum, signal.SIG_DFL))

    @property
    def interrupted(self) -> bool:
        return any(event.is_set() for event in self.received.values())

    @property
    def exit_code(self) -> Optional[int]:
        """Exit status for the received signal, or None if nothing was received."""
        for signum, code in EXIT_CODES.items():
            if self.received[signum].is_set():
                return code
        return None


interrupts = Interrupts()


def silence_stdout() -> None:
    """Point stdout at the null device after an interrupt so that shutdown prints nothing."""
    if interrupts.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(silence_stdout)
