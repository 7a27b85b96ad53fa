"""Terminal output for the timer: status line, messages, notification sound."""

import shutil
import subprocess
import sys


def format_duration(seconds: float) -> str:
    """Render as MM:SS, rounding partial seconds up."""
    if seconds <= 0:
        return "00:00"
    # ceil on whole (truncated) milliseconds
    total = (int(seconds * 1000) + 999) // 1000
    mins, secs = divmod(total, 60)
    return f"{mins:02d}:{secs:02d}"


def notify(sound_type: str):
    """Play a system sound for a finished phase (non-blocking, platform-aware)."""
    sounds = {
        "work_done": "/System/Library/Sounds/Glass.aiff",
        "break_done": "/System/Library/Sounds/Ping.aiff",
    }
    path = sounds.get(sound_type)
    if not path:
        return

    if sys.platform == "darwin" and shutil.which("afplay"):
        try:
            subprocess.Popen(
                ["afplay", path],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            pass
    else:
        # Terminal bell fallback
        print("\a", end="", flush=True)


class Display:
    """Single status line plus full-line messages."""

    def __init__(self, stream=None):
        self._stream = stream

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stdout

    def clear_line(self):
        term_width = shutil.get_terminal_size((80, 24)).columns
        print("\r" + " " * term_width + "\r", end="", file=self.stream, flush=True)

    def status(self, label: str, remaining: float):
        self.clear_line()
        print(
            f"State: {label}\tTime remaining {format_duration(remaining)}",
            end="",
            file=self.stream,
            flush=True,
        )

    def message(self, text: str):
        print(text, file=self.stream, flush=True)
