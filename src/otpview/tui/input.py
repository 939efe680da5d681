"""Non-blocking keyboard input via termios cbreak mode."""

from __future__ import annotations

import codecs
import os
import selectors
import sys
import termios
import tty
from types import TracebackType

# Escape sequence mappings (bytes after the leading ESC)
_ESCAPE_SEQUENCES = {
    "[A": "up",
    "[B": "down",
    "[C": "right",
    "[D": "left",
    "OA": "up",
    "OB": "down",
    "[5~": "pgup",
    "[6~": "pgdown",
}

# Returned for escape sequences with no binding; never acted on
UNKNOWN_KEY = "unknown"

_CONTROL_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x03": "ctrl+c",
}


def normalize_key(raw: str) -> str:
    """Map a raw control character to its key name; printable input passes through."""
    return _CONTROL_KEYS.get(raw, raw)


class KeyboardInput:
    """Context manager that puts stdin into cbreak mode for single-key reads.

    Uses ``os.read`` on the raw file descriptor so that reads stay in
    sync with what ``selectors`` reports as available.  Python's
    buffered ``sys.stdin.read`` can consume multiple bytes into its
    internal buffer, causing the selector to miss subsequent bytes of
    an escape sequence.

    Usage::

        with KeyboardInput() as kb:
            key = kb.read(timeout=0.05)  # returns key name or None
    """

    def __init__(self, fd: int | None = None) -> None:
        self._old_settings: list | None = None
        self._selector = selectors.DefaultSelector()
        self._fd: int = sys.stdin.fileno() if fd is None else fd
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def __enter__(self) -> KeyboardInput:
        self._old_settings = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        self._selector.register(self._fd, selectors.EVENT_READ)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._selector.unregister(self._fd)
        self._selector.close()
        if self._old_settings is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)

    def _read_byte(self) -> str:
        return os.read(self._fd, 1).decode("ascii", errors="replace")

    def _read_char(self) -> str:
        """Read one full UTF-8 character, pulling continuation bytes as needed."""
        while True:
            ch = self._decoder.decode(os.read(self._fd, 1))
            if ch:
                return ch
            if not self._selector.select(timeout=0.02):
                # Truncated multibyte input
                self._decoder.reset()
                return "\ufffd"

    def read(self, timeout: float = 0.05) -> str | None:
        """Read a single key press, returning None on timeout.

        Handles escape sequences for arrow and paging keys.
        """
        ready = self._selector.select(timeout=timeout)
        if not ready:
            return None

        ch = self._read_char()
        if ch == "\x1b":
            # Possible escape sequence — read more if available
            return self._read_escape_sequence()
        return normalize_key(ch)

    def _read_escape_sequence(self) -> str:
        """Read the rest of a sequence like \\x1b[A; a lone ESC is the Escape key."""
        if not self._selector.select(timeout=0.02):
            return "escape"

        introducer = self._read_byte()
        if introducer not in ("[", "O"):
            # Alt+key and similar: not bound to anything
            return UNKNOWN_KEY

        seq = introducer
        while self._selector.select(timeout=0.02):
            ch = self._read_byte()
            seq += ch
            # SS3 carries a single final byte; CSI ends at the first 0x40-0x7E byte
            if introducer == "O" or "\x40" <= ch <= "\x7e":
                break

        return _ESCAPE_SEQUENCES.get(seq, UNKNOWN_KEY)
