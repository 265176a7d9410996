"""Interactive selection over one candidate list.

One picker run is one level of a session: the user edits a query, moves a
highlighted cursor through the filtered candidates, and leaves by confirming
an item, confirming the raw query as free text, or cancelling.

The loop is render, poll, dispatch. The filtered view and the selection
clamp are recomputed on every render, so movement keys may leave
``selected`` out of range until the next frame fixes it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from .errors import RenderError
from .filtering import filter_candidates
from .screen import RenderSurface
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

PROMPT_PREFIX = "> "
HEADER_PREFIX = "$ "
RESERVED_ROWS = 2
CANCEL_KEYS = frozenset({"ESC", "CTRL_C"})


class PickerExit(Enum):
    CONFIRMED = "confirmed"
    CONFIRMED_FREE_TEXT = "confirmed_free_text"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PickerOutcome:
    """Terminal result of one picker run."""

    kind: PickerExit
    value: str = ""

    @property
    def cancelled(self) -> bool:
        return self.kind is PickerExit.CANCELLED


@dataclass
class PickerState:
    """Mutable state of the picker while it is in its editing state."""

    candidates: Sequence[str]
    query: str = ""
    selected: int = -1
    filtered: Sequence[str] = field(init=False)

    def __post_init__(self) -> None:
        self.filtered = self.candidates

    def refresh(self) -> None:
        """Recompute the filtered view and clamp the selection into it."""
        self.filtered = filter_candidates(self.candidates, self.query)
        self.selected = clamp_selection(self.selected, len(self.filtered))


def clamp_selection(selected: int, count: int) -> int:
    """Return ``selected`` clamped to ``[0, count - 1]``, or ``-1`` when empty."""
    if count <= 0:
        return -1
    return max(0, min(selected, count - 1))


def page_size_for_height(rows: int) -> int:
    """Rows available for items once the header and prompt rows are taken."""
    return max(1, rows - RESERVED_ROWS)


def page_window(selected: int, page_size: int, count: int) -> tuple[int, int]:
    """Return ``(start, end)`` of the page containing ``selected``."""
    if selected < 0 or count <= 0:
        return 0, 0
    page_start = (selected // page_size) * page_size
    return page_start, min(page_start + page_size, count)


def pad_row(text: str, width: int) -> str:
    return text.ljust(width)


def handle_key(
    state: PickerState,
    key: str,
    page_size: int,
    *,
    allow_free_text: bool = True,
) -> PickerOutcome | None:
    """Apply one key to ``state``; return an outcome when the picker exits."""
    if key in CANCEL_KEYS:
        return PickerOutcome(PickerExit.CANCELLED)

    if key == "ENTER":
        if state.selected >= 0:
            return PickerOutcome(PickerExit.CONFIRMED, state.filtered[state.selected])
        if allow_free_text:
            return PickerOutcome(PickerExit.CONFIRMED_FREE_TEXT, state.query)
        return None

    if key == "SPACE":
        state.query += " "
    elif key == "BACKSPACE":
        if state.query:
            state.query = state.query[:-1]
    elif key == "UP":
        state.selected -= 1
    elif key == "DOWN":
        state.selected += 1
    elif key == "PAGE_UP":
        state.selected -= page_size
    elif key == "PAGE_DOWN":
        state.selected += page_size
    elif len(key) == 1 and key.isprintable():
        state.query += key
    return None


def render_picker(
    surface: RenderSurface,
    state: PickerState,
    command_line: str,
    theme: UITheme = DEFAULT_THEME,
) -> int:
    """Draw one frame for ``state`` and return the page size used."""
    columns, rows = surface.size()
    page_size = page_size_for_height(rows)
    state.refresh()

    surface.clear()
    surface.set_row(0, pad_row(HEADER_PREFIX + command_line, columns), theme.header)
    prompt = PROMPT_PREFIX + state.query
    surface.set_row(1, pad_row(prompt, columns), theme.prompt)
    surface.set_cursor(len(prompt), 1)

    page_start, page_end = page_window(state.selected, page_size, len(state.filtered))
    highlighted = state.selected % page_size if state.selected >= 0 else -1
    for offset, item in enumerate(state.filtered[page_start:page_end]):
        style = theme.item_selected if offset == highlighted else theme.item
        surface.set_row(RESERVED_ROWS + offset, pad_row(item, columns), style)

    surface.flush()
    return page_size


def run_picker(
    surface: RenderSurface,
    candidates: Sequence[str],
    command_line: str,
    *,
    allow_free_text: bool = True,
    theme: UITheme = DEFAULT_THEME,
) -> PickerOutcome:
    """Run the interactive loop until the user confirms or cancels.

    Any ``OSError`` from the surface is raised as ``RenderError``.
    """
    state = PickerState(candidates)
    logger.debug("picking among %d candidates for %r", len(candidates), command_line)
    while True:
        try:
            page_size = render_picker(surface, state, command_line, theme)
            key = surface.poll_event()
        except OSError as exc:
            raise RenderError(str(exc)) from exc
        outcome = handle_key(state, key, page_size, allow_free_text=allow_free_text)
        if outcome is not None:
            logger.debug("picker exit: %s %r", outcome.kind.value, outcome.value)
            return outcome
