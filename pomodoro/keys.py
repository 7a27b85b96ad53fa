"""Keyboard input: single-key reads and the Y/n continue prompt."""

import os
import select
import sys
import termios
import tty
from typing import Callable, Dict, List, Optional

ENTER = "\n"
ESCAPE = "\x1b"

YES_KEYS = {ENTER, "\r", "y", "Y", " "}
NO_KEYS = {ESCAPE, "n", "N"}

# keys read from a TTY but not handed out yet, per file descriptor
_pending: Dict[int, List[str]] = {}


def split_keys(text: str) -> List[str]:
    """Split raw terminal input into keys.

    Escape sequences (arrow keys, function keys, ...) become "" so callers
    can ignore them. A lone ESC stays ESC.
    """
    keys = []
    i = 0
    while i < len(text):
        if text[i] == ESCAPE and i + 1 < len(text) and text[i + 1] in "[O":
            # CSI/SS3: parameters up to a final byte in @..~
            j = i + 2
            while j < len(text) and not "@" <= text[j] <= "~":
                j += 1
            keys.append("")
            i = j + 1
        else:
            keys.append(text[i])
            i += 1
    return keys


def read_key(stream=None) -> Optional[str]:
    """Read one key. Returns None at end of input.

    On a TTY the key is read in cbreak mode, without waiting for Enter;
    escape sequences come back as "". Otherwise a whole line is read and
    its first character returned (an empty line counts as Enter).
    """
    stream = stream if stream is not None else sys.stdin
    if not stream.isatty():
        line = stream.readline()
        if not line:
            return None
        return line[0]

    fd = stream.fileno()
    pending = _pending.setdefault(fd, [])
    if pending:
        return pending.pop(0)

    old_settings = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd, termios.TCSANOW)
        # raw read: the text wrapper would buffer the tail of a sequence
        chunk = os.read(fd, 32)
        if chunk == ESCAPE.encode() and select.select([fd], [], [], 0.05)[0]:
            chunk += os.read(fd, 32)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    if not chunk:
        return None
    keys = split_keys(chunk.decode("utf-8", errors="replace"))
    pending.extend(keys[1:])
    return keys[0]


def read_continue(read: Callable[[], Optional[str]] = read_key) -> bool:
    """Block until a yes/no key is pressed. Other keys are ignored."""
    while True:
        key = read()
        if key is None:
            return False
        if key in YES_KEYS:
            return True
        if key in NO_KEYS:
            return False
