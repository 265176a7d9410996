"""Error taxonomy for picking sessions.

Every failure raised by combo derives from ``ComboError`` so the CLI can map
it to an exit code in one place. Cancellation is not an error.
"""

from __future__ import annotations


class ComboError(Exception):
    """Base class for all combo failures."""


class UsageError(ComboError):
    """Missing command or invalid flag combination."""


class TerminalInitError(ComboError):
    """The interactive terminal could not be acquired."""


class InvalidArgumentError(ComboError):
    """An operation received an argument it cannot work with."""


class ExecutionError(ComboError):
    """The candidate-producing command could not be run."""

    def __init__(self, program: str, args: list[str], cause: object) -> None:
        self.program = program
        self.args_list = list(args)
        self.cause = cause
        super().__init__(f"{program} {self.args_list}: {cause}")


class RenderError(ComboError):
    """Drawing a frame or polling for input failed mid-session."""


__all__ = [
    "ComboError",
    "UsageError",
    "TerminalInitError",
    "InvalidArgumentError",
    "ExecutionError",
    "RenderError",
]
