"""Non-blocking keyboard input and the timer key bindings."""

import sys
from typing import Literal, Optional

TimerAction = Literal[
    "toggle", "reset", "focus", "short_break", "long_break", "quit"
]

KEY_BINDINGS: dict[str, TimerAction] = {
    " ": "toggle",
    "p": "toggle",
    "r": "reset",
    "1": "focus",
    "2": "short_break",
    "3": "long_break",
    "q": "quit",
}


def action_for_key(key: Optional[str]) -> Optional[TimerAction]:
    """Map a keypress to a timer action (None for unbound keys)."""
    if not key:
        return None
    return KEY_BINDINGS.get(key.lower())


class KeyboardHandler:
    """Non-blocking keyboard input handler for POSIX terminals."""

    def __init__(self):
        self.fd: Optional[int] = None
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Put the terminal in cbreak mode when stdin is a TTY."""
        try:
            import termios
            import tty

            if not sys.stdin.isatty():
                return
            self.fd = sys.stdin.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (ImportError, OSError, ValueError):
            # Windows, or stdin replaced by a non-terminal stream
            self.fd = None
            self.old_settings = None

    def get_key(self) -> Optional[str]:
        """
        Get a single keypress without blocking.

        Returns the key character or None if no key pressed.
        """
        if self.fd is None:
            return None

        import select

        if select.select([sys.stdin], [], [], 0)[0]:
            return sys.stdin.read(1)
        return None

    def stop(self):
        """Restore terminal settings."""
        if self.fd is not None and self.old_settings:
            import termios

            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None
