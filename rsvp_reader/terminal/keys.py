"""Read key presses from the controlling terminal.

WHY: The document may arrive on standard input, so keyboard input has to
come from the terminal device itself. The control loop also needs a
bounded wait (until the next word tick), which blocking reads on stdin
cannot provide.

HOW: open() opens /dev/tty, saves its termios attributes, and switches it
to cbreak mode (no line buffering, no echo, signals still delivered).
read_key() waits with select() on the tty and on a self-pipe that the
SIGWINCH handler writes to, so a terminal resize wakes the loop as a
Key.RESIZE. Raw bytes are split into key names by split_keys() and
mapped to Key symbols through KEY_BINDINGS.

RULES:
- Arrow keys arrive as ESC [ A..D or ESC O A..D and map to up/down/right/left
- A lone ESC byte is the "esc" key once ESC_DELAY passes with nothing after it
- An escape sequence split across reads is carried over, never decoded in halves
- Unbound keys are dropped silently
- A zero-byte read from the tty is end of input (Key.EOF)
- close() restores the terminal attributes and the previous SIGWINCH handler
"""

from __future__ import annotations

import logging
import os
import select
import signal
import termios
import tty
from collections import deque
from typing import Deque, Dict, List, Optional

from rsvp_reader.config import KEY_BINDINGS
from rsvp_reader.terminal.base import Key, KeySource

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"

# Seconds to wait for the rest of an escape sequence cut off by a read
ESC_DELAY = 0.05

_ARROWS: Dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def split_keys(data: bytes) -> List[str]:
    """Split a burst of terminal input into key names.

    Printable characters map to themselves; arrow escape sequences map to
    "up"/"down"/"left"/"right"; a bare ESC maps to "esc". Unrecognised
    escape sequences are skipped whole.
    """
    text = data.decode("utf-8", errors="ignore")
    names: List[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\x1b":
            names.append(ch)
            i += 1
            continue

        if i + 1 >= len(text) or text[i + 1] not in "[O":
            names.append("esc")
            i += 1
            continue

        # CSI / SS3: ESC [ params final  or  ESC O final
        j = i + 2
        while j < len(text) and not ("@" <= text[j] <= "~"):
            j += 1
        if j >= len(text):
            break
        final = text[j]
        if final in _ARROWS:
            names.append(_ARROWS[final])
        i = j + 1
    return names


def decode_keys(data: bytes, bindings: Optional[Dict[str, Key]] = None) -> List[Key]:
    """Map a burst of terminal input to bound Key symbols."""
    if bindings is None:
        bindings = KEY_BINDINGS
    return [bindings[name] for name in split_keys(data) if name in bindings]


def incomplete_escape(data: bytes) -> int:
    """Index where a trailing, unfinished escape sequence starts, or -1.

    A lone trailing ESC counts as unfinished, since it may be the first
    byte of an arrow sequence whose remainder has not been read yet.
    """
    start = data.rfind(b"\x1b")
    if start < 0:
        return -1
    tail = data[start + 1:]
    if not tail:
        return start
    if tail[:1] not in (b"[", b"O"):
        return -1
    if any(0x40 <= b <= 0x7E for b in tail[1:]):
        return -1
    return start


class TerminalKeySource(KeySource):
    """KeySource backed by the process's controlling terminal."""

    def __init__(self, path: str = TTY_PATH, bindings: Optional[Dict[str, Key]] = None) -> None:
        self.path = path
        self.bindings = bindings if bindings is not None else KEY_BINDINGS
        self._fd: Optional[int] = None
        self._saved_attrs: Optional[list] = None
        self._wake_r: Optional[int] = None
        self._wake_w: Optional[int] = None
        self._previous_winch = None
        self._pending: Deque[Key] = deque()
        self._carry = b""

    def open(self) -> None:
        self._fd = os.open(self.path, os.O_RDONLY)
        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)

        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_w, False)
        self._previous_winch = signal.signal(signal.SIGWINCH, self._on_resize)
        logger.debug("Opened key source on %s", self.path)

    def close(self) -> None:
        if self._previous_winch is not None:
            signal.signal(signal.SIGWINCH, self._previous_winch)
            self._previous_winch = None
        if self._fd is not None:
            if self._saved_attrs is not None:
                termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
                self._saved_attrs = None
            os.close(self._fd)
            self._fd = None
        for fd in (self._wake_r, self._wake_w):
            if fd is not None:
                os.close(fd)
        self._wake_r = self._wake_w = None
        self._carry = b""

    def _on_resize(self, signum, frame) -> None:
        if self._wake_w is not None:
            try:
                os.write(self._wake_w, b"\0")
            except BlockingIOError:
                # Pipe already holds an unread wake-up byte.
                pass

    def _complete(self, data: bytes) -> bytes:
        """Return the decodable prefix of data; hold back a cut-off sequence.

        Bytes already in flight are given ESC_DELAY to arrive. A lone ESC
        that is still alone afterwards is the Esc key; a partial CSI/SS3
        sequence is kept in the carry-over buffer for the next read.
        """
        self._carry = b""
        cut = incomplete_escape(data)
        while cut >= 0:
            ready, _, _ = select.select([self._fd], [], [], ESC_DELAY)
            if not ready:
                break
            more = os.read(self._fd, 64)
            if not more:
                break
            data += more
            cut = incomplete_escape(data)

        if cut >= 0 and data[cut:] != b"\x1b":
            data, self._carry = data[:cut], data[cut:]
            logger.debug("Holding partial escape sequence %r", self._carry)
        return data

    def read_key(self, timeout: Optional[float] = None) -> Optional[Key]:
        if self._pending:
            return self._pending.popleft()
        if self._fd is None:
            raise RuntimeError("TerminalKeySource.read_key() called before open()")

        watched = [self._fd]
        if self._wake_r is not None:
            watched.append(self._wake_r)
        ready, _, _ = select.select(watched, [], [], timeout)
        if not ready:
            return None

        if self._wake_r is not None and self._wake_r in ready:
            os.read(self._wake_r, 64)
            return Key.RESIZE

        data = os.read(self._fd, 64)
        if not data:
            return Key.EOF
        data = self._complete(self._carry + data)
        self._pending.extend(decode_keys(data, self.bindings))
        if self._pending:
            return self._pending.popleft()
        return None
