"""Session wiring for one interactive picking run.

Acquires the terminal once, drives the chain of picker levels on a single
screen, and releases the terminal on every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .chain import ChainOptions, run_chain
from .picker import PickerOutcome, run_picker
from .runner import format_command
from .screen import TerminalScreen
from .terminal import DEFAULT_TTY_PATH, open_terminal
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)


def run_combo(
    command: Sequence[str],
    options: ChainOptions,
    *,
    theme: UITheme = DEFAULT_THEME,
    tty_path: str = DEFAULT_TTY_PATH,
) -> str:
    """Run a full picking session and return the selection (``""`` if none)."""
    options.validate()
    with open_terminal(tty_path) as terminal, terminal.raw_mode():
        screen = TerminalScreen(terminal, reset=theme.reset)

        def pick(level_command: Sequence[str], candidates: Sequence[str]) -> PickerOutcome:
            return run_picker(
                screen,
                candidates,
                format_command(level_command),
                allow_free_text=not options.force_selection,
                theme=theme,
            )

        return run_chain(command, options, pick)
