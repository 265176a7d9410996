"""Child-process execution for candidate lists.

Runs one argument vector, captures its standard output, and splits it into
trimmed non-empty lines. The child's standard error is discarded so it never
scribbles over the full-screen UI.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence

from .errors import ExecutionError, InvalidArgumentError

logger = logging.getLogger(__name__)


def split_candidates(output: str) -> list[str]:
    """Return trimmed, non-empty lines of ``output`` in order (duplicates kept)."""
    lines: list[str] = []
    for raw in output.split("\n"):
        line = raw.strip()
        if line:
            lines.append(line)
    return lines


def format_command(argv: Sequence[str]) -> str:
    """Join ``argv`` with single spaces, the way the header row shows it."""
    return " ".join(argv)


def quote_command(argv: Sequence[str]) -> str:
    """Shell-quoted rendering of ``argv`` for log messages."""
    return " ".join(shlex.quote(part) for part in argv)


def run_command(argv: Sequence[str]) -> list[str]:
    """Run ``argv`` and return its candidate lines.

    Raises ``InvalidArgumentError`` for an empty vector and ``ExecutionError``
    when the program cannot be started or exits with a non-zero status.
    Empty output is a valid result and yields an empty list.
    """
    if not argv:
        raise InvalidArgumentError("no command to run")

    program = argv[0]
    args = list(argv[1:])
    try:
        proc = subprocess.run(
            [program, *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            errors="replace",
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        logger.warning("command failed: %s (exit status %s)", quote_command(argv), exc.returncode)
        raise ExecutionError(program, args, f"exit status {exc.returncode}") from exc
    except OSError as exc:
        logger.warning("command could not be started: %s (%s)", quote_command(argv), exc)
        raise ExecutionError(program, args, exc) from exc

    candidates = split_candidates(proc.stdout)
    logger.debug("command %s produced %d candidates", quote_command(argv), len(candidates))
    return candidates
