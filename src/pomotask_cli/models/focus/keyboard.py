"""Cross-platform keyboard input for the interactive session.

Keys are reported by name: printable characters as themselves, everything
else as ``"enter"``, ``"escape"``, ``"tab"``, ``"shift+tab"``,
``"backspace"``, ``"up"``, ``"down"``, ``"left"``, ``"right"`` or
``"ctrl+<letter>"``.
"""

from __future__ import annotations

import os
import sys
from collections import deque

from pomotask_cli.utils.logger import get_logger

if sys.platform == "win32":
    import msvcrt
else:
    import select
    import termios
    import tty

ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[Z": "shift+tab",
}

CONTROL_KEYS = {
    "\t": "tab",
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
}

# msvcrt prefixes special keys with one of these, followed by a scan code
WINDOWS_PREFIXES = ("\x00", "\xe0")
WINDOWS_SCAN_CODES = {
    "H": "up",
    "P": "down",
    "K": "left",
    "M": "right",
    "\x0f": "shift+tab",
}


def decode_keys(data: str) -> list[str]:
    """Split raw terminal input into key names."""
    keys: list[str] = []
    i = 0
    while i < len(data):
        ch = data[i]
        if ch == "\x1b":
            seq = data[i : i + 3]
            if seq in ESCAPE_SEQUENCES:
                keys.append(ESCAPE_SEQUENCES[seq])
                i += 3
                continue
            keys.append("escape")
        elif ch in CONTROL_KEYS:
            keys.append(CONTROL_KEYS[ch])
        elif ord(ch) < 0x20:
            keys.append(f"ctrl+{chr(ord(ch) + 0x60)}")
        elif ch.isprintable():
            keys.append(ch)
        i += 1
    return keys


class KeyboardHandler:
    """Non-blocking keyboard reader for POSIX terminals.

    The terminal is put in cbreak mode with signal keys disabled, so
    ``ctrl+c`` arrives as a key press instead of SIGINT.
    """

    def __init__(self):
        self.fd = sys.stdin.fileno()
        self.old_settings = None
        self._pending: deque[str] = deque()
        self.logger = get_logger()
        self._setup()

    def _setup(self) -> None:
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
            attrs = termios.tcgetattr(self.fd)
            attrs[3] &= ~termios.ISIG
            termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
        except (termios.error, OSError) as e:
            # Not a TTY, e.g. piped input
            self.logger.debug("keyboard setup skipped: %s", e)

    def _read_available(self) -> None:
        if not select.select([self.fd], [], [], 0)[0]:
            return
        data = os.read(self.fd, 64)
        self._pending.extend(decode_keys(data.decode("utf-8", errors="ignore")))

    def get_key(self) -> str | None:
        """Return the next key press, or None if nothing was typed."""
        if not self._pending:
            self._read_available()
        return self._pending.popleft() if self._pending else None

    def get_keys(self) -> list[str]:
        """Return every key press waiting to be handled."""
        self._read_available()
        keys = list(self._pending)
        self._pending.clear()
        return keys

    def stop(self) -> None:
        """Restore terminal settings."""
        if self.old_settings:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None


class WindowsKeyboardHandler:
    """Keyboard reader for Windows consoles using msvcrt."""

    def _read_one(self) -> str | None:
        if not msvcrt.kbhit():
            return None
        ch = msvcrt.getwch()
        if ch in WINDOWS_PREFIXES:
            return WINDOWS_SCAN_CODES.get(msvcrt.getwch())
        keys = decode_keys(ch)
        return keys[0] if keys else None

    def get_key(self) -> str | None:
        while msvcrt.kbhit():
            key = self._read_one()
            if key is not None:
                return key
        return None

    def get_keys(self) -> list[str]:
        keys = []
        while (key := self.get_key()) is not None:
            keys.append(key)
        return keys

    def stop(self) -> None:
        """No cleanup needed on Windows."""


def get_keyboard_handler() -> KeyboardHandler | WindowsKeyboardHandler:
    if sys.platform == "win32":
        return WindowsKeyboardHandler()
    return KeyboardHandler()
