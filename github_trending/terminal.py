"""Raw keyboard input for the interactive session.

Puts stdin into cbreak mode and decodes single keypresses, including arrow
and paging escape sequences, into the key names used by ``dispatcher``.
"""

from __future__ import annotations

import os
import select
import sys
import termios
import tty
from typing import TextIO

from github_trending.errors import UIInitError

ESCAPE_SEQUENCES = {
    "[A": "UP",
    "[B": "DOWN",
    "[C": "RIGHT",
    "[D": "LEFT",
    "OA": "UP",
    "OB": "DOWN",
    "OC": "RIGHT",
    "OD": "LEFT",
    "[5~": "PGUP",
    "[6~": "PGDN",
    "[H": "HOME",
    "[F": "END",
    "[1~": "HOME",
    "[4~": "END",
}


def decode_key(key: str, sequence: str = "") -> str:
    if key in {"\r", "\n"}:
        return "ENTER"
    if key == "\t":
        return "TAB"
    if key == "\x03":
        return "QUIT"
    if key == "\x1b":
        return ESCAPE_SEQUENCES.get(sequence, "ESC")
    return key


class KeyReader:
    """Context manager holding the terminal in cbreak mode."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdin
        self.fd = -1
        self._old_settings: list | None = None

    def __enter__(self) -> KeyReader:
        if not self.stream.isatty():
            raise UIInitError("stdin is not a terminal")
        try:
            self.fd = self.stream.fileno()
            self._old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (OSError, termios.error) as exc:
            raise UIInitError(f"Cannot configure terminal: {exc}") from exc
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._old_settings is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._old_settings)
        except termios.error:
            pass
        self._old_settings = None

    def read_key(self, timeout: float | None = None) -> str | None:
        """Block until a key arrives or ``timeout`` elapses (then None)."""
        ready, _, _ = select.select([self.fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(self.fd, 1)
        key = data.decode("utf-8", errors="ignore")
        if not key:
            return None
        sequence = ""
        if key == "\x1b":
            while select.select([self.fd], [], [], 0.01)[0]:
                sequence += os.read(self.fd, 1).decode("utf-8", errors="ignore")
                if len(sequence) < 2:
                    continue
                if sequence[-1].isalpha() or sequence.endswith("~") or len(sequence) >= 6:
                    break
        return decode_key(key, sequence)
