"""Render surface the picker draws onto.

A surface is a full-screen grid of rows. Each frame is built with
``clear``/``set_row``/``set_cursor`` and shown with ``flush``; the terminal
implementation composes the whole frame in memory and writes it once.
"""

from __future__ import annotations

import logging
import os
from typing import Protocol

from .errors import RenderError
from .input import read_key
from .terminal import TerminalController

logger = logging.getLogger(__name__)

RESIZE_EVENT = "RESIZE"
RESIZE_POLL_MS = 100
FALLBACK_SIZE = (80, 24)


class RenderSurface(Protocol):
    """Drawing and input operations the picker needs from a screen."""

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``."""

    def clear(self) -> None:
        ...

    def set_row(self, y: int, text: str, style: str = "") -> None:
        ...

    def set_cursor(self, x: int, y: int) -> None:
        ...

    def flush(self) -> None:
        ...

    def poll_event(self) -> str:
        """Block until the next key token (or ``RESIZE``) is available."""


class TerminalScreen:
    """Double-buffered ``RenderSurface`` backed by a raw-mode terminal."""

    def __init__(self, terminal: TerminalController, *, reset: str = "\033[0m") -> None:
        self.terminal = terminal
        self.reset = reset
        self._rows: dict[int, tuple[str, str]] = {}
        self._cursor: tuple[int, int] | None = None
        self._drawn_size: tuple[int, int] | None = None

    def size(self) -> tuple[int, int]:
        try:
            term = os.get_terminal_size(self.terminal.stdout_fd)
        except OSError:
            return FALLBACK_SIZE
        return max(1, term.columns), max(1, term.lines)

    def clear(self) -> None:
        self._rows.clear()
        self._cursor = None

    def set_row(self, y: int, text: str, style: str = "") -> None:
        self._rows[y] = (text, style)

    def set_cursor(self, x: int, y: int) -> None:
        self._cursor = (x, y)

    def compose_frame(self, columns: int, rows: int) -> str:
        """Return the escape-sequence payload for the buffered frame."""
        out: list[str] = ["\033[?25l\033[H\033[J"]
        for y in range(rows):
            row = self._rows.get(y)
            if row is None:
                continue
            text, style = row
            out.append(f"\033[{y + 1};1H")
            if style:
                out.append(style)
            out.append(text[:columns])
            if style:
                out.append(self.reset)
        if self._cursor is not None:
            x, y = self._cursor
            col = max(0, min(x, columns - 1))
            line = max(0, min(y, rows - 1))
            out.append(f"\033[{line + 1};{col + 1}H\033[?25h")
        return "".join(out)

    def flush(self) -> None:
        columns, rows = self.size()
        payload = self.compose_frame(columns, rows)
        try:
            os.write(self.terminal.stdout_fd, payload.encode("utf-8", errors="replace"))
        except OSError as exc:
            raise RenderError(f"cannot draw frame: {exc}") from exc
        self._drawn_size = (columns, rows)

    def poll_event(self) -> str:
        while True:
            try:
                key = read_key(self.terminal.stdin_fd, timeout_ms=RESIZE_POLL_MS)
            except (OSError, EOFError) as exc:
                raise RenderError(f"cannot read input: {exc}") from exc
            if key:
                return key
            if self._drawn_size is not None and self.size() != self._drawn_size:
                logger.debug("terminal resized to %sx%s", *self.size())
                return RESIZE_EVENT
