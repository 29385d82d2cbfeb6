import os
import select
import sys
import termios
import time
import tty
from typing import Optional, TextIO

ESCAPE = '\x1b'
QUIT_KEYS = ('q', ESCAPE)

class KeyPoller:
    """ Non-blocking single key reads from a terminal, for a render loop that must keep ticking.

    Used as a context manager: the terminal is put in cbreak mode on enter and restored on exit.
    When the stream is not a terminal (piped input, CI) polling just waits out the timeout and reports no key.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdin
        self.enabled = False
        self._saved = None

    def __enter__(self) -> 'KeyPoller':
        if self.stream.isatty():
            fd = self.stream.fileno()
            self._saved = termios.tcgetattr(fd)
            tty.setcbreak(fd)
            self.enabled = True
        return self

    def __exit__(self, *exc):
        if self._saved is not None:
            termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._saved)
            self._saved = None
        self.enabled = False

    def poll(self, timeout: float) -> Optional[str]:
        """waits up to `timeout` seconds for a key press and returns it, or None."""
        if not self.enabled:
            time.sleep(timeout)
            return None

        fd = self.stream.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        key = os.read(fd, 1)
        if key == ESCAPE.encode():
            # arrow and function keys arrive as ESC followed by more bytes; a bare ESC has nothing after it
            while select.select([fd], [], [], 0)[0]:
                rest = os.read(fd, 32)
                if not rest:
                    break
                key += rest
        return key.decode(errors='replace')

def is_quit(key: Optional[str]) -> bool:
    return key in QUIT_KEYS
