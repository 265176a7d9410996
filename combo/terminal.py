"""Terminal control helpers for the picker session.

Owns raw-mode lifecycle and alternate-screen switching. The controller is a
scoped resource: acquire it once per session and always leave it through
``raw_mode()`` so the terminal is restored on every exit path.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

from .errors import TerminalInitError

logger = logging.getLogger(__name__)

DEFAULT_TTY_PATH = "/dev/tty"


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalInitError(f"cannot read terminal attributes: {exc}") from exc

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and clear it.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[H\x1b[2J")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and the main screen buffer."""
        try:
            # Reset attributes, show cursor, and restore the main screen buffer.
            os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
        except (OSError, termios.error) as exc:
            self._restore_quietly()
            raise TerminalInitError(f"cannot enter raw mode: {exc}") from exc
        logger.debug("terminal acquired")
        try:
            yield
        finally:
            self._restore_quietly()
            logger.debug("terminal released")

    def _restore_quietly(self) -> None:
        # Teardown must not mask the error that ended the session.
        try:
            self.disable_tui_mode()
        except (OSError, termios.error):
            logger.exception("failed to restore terminal state")


@contextlib.contextmanager
def open_terminal(tty_path: str = DEFAULT_TTY_PATH):
    """Yield a controller bound to the controlling terminal.

    The UI talks to ``tty_path`` directly so standard output stays free for
    the selection, which is what makes ``$(combo ...)`` work. Raises
    ``TerminalInitError`` when there is no usable terminal.
    """
    try:
        fd = os.open(tty_path, os.O_RDWR | os.O_NOCTTY)
    except OSError as exc:
        raise TerminalInitError(f"cannot open {tty_path}: {exc.strerror or exc}") from exc
    try:
        if not os.isatty(fd):
            raise TerminalInitError(f"{tty_path} is not a terminal")
        yield TerminalController(fd, fd)
    finally:
        os.close(fd)
