"""Drill-down chaining across picker levels.

Each level runs the command, lets the user pick, and (in callback mode)
re-runs the command with the pick appended. The chain stops on cancel, on
the first confirmation outside callback mode, or when a re-run yields no
candidates, in which case the last confirmed pick is the result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .errors import ExecutionError, UsageError
from .picker import PickerOutcome
from .runner import quote_command, run_command

logger = logging.getLogger(__name__)

PickFn = Callable[[Sequence[str], Sequence[str]], PickerOutcome]
RunFn = Callable[[Sequence[str]], list[str]]


@dataclass(frozen=True)
class ChainOptions:
    """Chaining policy.

    ``append`` and ``fallback_on_error`` require ``callback``; ``separator``
    requires ``append``.
    """

    callback: bool = False
    append: bool = False
    separator: str = ""
    force_selection: bool = False
    fallback_on_error: bool = False

    def validate(self) -> None:
        if self.append and not self.callback:
            raise UsageError("--append is valid only if --callback is enabled")
        if self.separator and not self.append:
            raise UsageError("--separator is valid only if --append is enabled")
        if self.fallback_on_error and not self.callback:
            raise UsageError("--fallback-on-error is valid only if --callback is enabled")


@dataclass
class ChainState:
    """State threaded from one level to the next."""

    accumulated: list[str] = field(default_factory=list)
    last_output: str = ""
    level: int = 0

    def advance(self, value: str, *, append: bool) -> None:
        """Record a confirmed ``value`` and move to the next level."""
        self.last_output = value
        if append:
            self.accumulated.append(value)
        else:
            self.accumulated = [value]
        self.level += 1


def build_level_command(
    base: Sequence[str],
    accumulated: Sequence[str],
    separator: str = "",
) -> list[str]:
    """Return ``base`` extended with the accumulated picks.

    With a separator the picks are joined into one trailing argument.
    """
    command = list(base)
    if accumulated:
        if separator:
            command.append(separator.join(accumulated))
        else:
            command.extend(accumulated)
    return command


def run_chain(
    base_command: Sequence[str],
    options: ChainOptions,
    pick: PickFn,
    run: RunFn = run_command,
) -> str:
    """Run picker levels until the chain resolves; return the result.

    Returns ``""`` when the user cancels. ``ExecutionError`` aborts the chain
    unless ``fallback_on_error`` is set and an earlier level confirmed a
    value. There is no level cap.
    """
    options.validate()
    state = ChainState()
    while True:
        command = build_level_command(base_command, state.accumulated, options.separator)
        logger.info("level %d: %s", state.level, quote_command(command))
        try:
            candidates = run(command)
        except ExecutionError:
            if options.fallback_on_error and state.last_output:
                logger.info("command failed, returning last pick %r", state.last_output)
                return state.last_output
            raise

        if not candidates and state.last_output:
            logger.info("no further candidates, returning last pick %r", state.last_output)
            return state.last_output

        outcome = pick(command, candidates)
        if outcome.cancelled or not outcome.value:
            logger.info("level %d: nothing selected", state.level)
            return ""

        if not options.callback:
            return outcome.value

        state.advance(outcome.value, append=options.append)
