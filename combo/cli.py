"""Command-line front door for combo.

Parses flags, validates their combinations, and runs the picking session.
The selection is written to standard output without a trailing newline;
the exit status tells the caller what happened.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .app import run_combo
from .chain import ChainOptions
from .config import load_user_defaults
from .errors import ComboError, UsageError
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger("combo")

EXIT_OK = 0
EXIT_CANCELLED = 1
EXIT_ERROR = 2
EXIT_USAGE = 3

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class _ArgumentParser(argparse.ArgumentParser):
    """Parser that reports problems as ``UsageError`` and prints to stderr."""

    def error(self, message: str):
        raise UsageError(message)

    def print_help(self, file=None) -> None:
        super().print_help(sys.stderr if file is None else file)

    def print_usage(self, file=None) -> None:
        super().print_usage(sys.stderr if file is None else file)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="combo",
        description="Terminal combo widget: pick one line of a command's output.",
    )
    parser.add_argument(
        "-c",
        "--callback",
        action="store_true",
        help="callback the command with the last selected item as argument after the selection",
    )
    parser.add_argument(
        "-a",
        "--append",
        action="store_true",
        help="callback the command with all the selected items as arguments (requires --callback)",
    )
    parser.add_argument(
        "-s",
        "--separator",
        default="",
        help="join appended items into one argument with this separator (requires --append)",
    )
    parser.add_argument("-f", "--force", action="store_true", help="force a selection, do not allow free text")
    parser.add_argument(
        "--fallback-on-error",
        action="store_true",
        help="return the last selection when a callback run fails (requires --callback)",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write a debug log to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for --log-file (default: INFO).",
    )
    parser.add_argument("-V", "--version", action="store_true", help="Print the version and exit.")
    parser.add_argument("command", nargs=argparse.REMAINDER, help="command to run, with its arguments")
    return parser


def configure_logging(log_file: Path | None, level: str = "INFO") -> None:
    """Attach a file handler to the ``combo`` logger, or silence it.

    The UI owns the terminal, so logs never go to stderr.
    """
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return
    try:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        raise UsageError(f"cannot open log file {log_file}: {exc.strerror or exc}") from exc
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)
    logger.setLevel(getattr(logging, level))


def write_selection(out: str, stream=None) -> None:
    """Write ``out`` with no trailing newline.

    Text streams backed by a byte buffer get the encoded bytes directly, with
    unencodable characters replaced instead of raising.
    """
    stream = sys.stdout if stream is None else stream
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(out)
        stream.flush()
        return
    stream.flush()
    buffer.write(out.encode(stream.encoding or "utf-8", errors="replace"))
    buffer.flush()


def parse_options(argv: Sequence[str]) -> tuple[argparse.Namespace, ChainOptions]:
    """Parse ``argv`` (without program name) into raw args and chain options."""
    args = build_parser().parse_args(list(argv))
    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]
    args.command = command

    options = ChainOptions(
        callback=args.callback,
        append=args.append,
        separator=args.separator,
        force_selection=args.force,
        fallback_on_error=args.fallback_on_error,
    )
    if args.version:
        return args, options
    options.validate()
    if not command:
        raise UsageError("a command is required")
    return args, options


def main(argv: Sequence[str] | None = None) -> int:
    """Run combo with ``argv`` and return the process exit status."""
    argv = sys.argv[1:] if argv is None else argv
    try:
        args, options = parse_options(argv)
        if args.version:
            sys.stderr.write(f"combo version {__version__}\n")
            return EXIT_OK
        configure_logging(args.log_file, args.log_level)
    except UsageError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE

    defaults = load_user_defaults()
    theme = resolve_theme(args.theme or defaults.theme, no_color=args.no_color or defaults.no_color)

    try:
        out = run_combo(args.command, options, theme=theme)
    except UsageError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except ComboError as exc:
        logger.error("session aborted: %s", exc)
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR

    if not out:
        return EXIT_CANCELLED
    write_selection(out)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
