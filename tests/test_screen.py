"""Tests for the double-buffered terminal render surface."""

from __future__ import annotations

import os
import unittest
from types import SimpleNamespace
from unittest import mock

from combo.errors import RenderError
from combo.screen import RESIZE_EVENT, TerminalScreen


def _screen() -> TerminalScreen:
    return TerminalScreen(SimpleNamespace(stdin_fd=0, stdout_fd=1), reset="<R>")


class ComposeFrameTests(unittest.TestCase):
    def test_frame_positions_rows_styles_and_cursor(self) -> None:
        screen = _screen()
        screen.set_row(0, "abc", "<S>")
        screen.set_row(2, "xyz")
        screen.set_cursor(5, 1)

        frame = screen.compose_frame(10, 3)

        self.assertEqual(
            frame,
            "\033[?25l\033[H\033[J"
            "\033[1;1H<S>abc<R>"
            "\033[3;1Hxyz"
            "\033[2;6H\033[?25h",
        )

    def test_rows_are_clipped_to_width_and_height(self) -> None:
        screen = _screen()
        screen.set_row(0, "abcdef")
        screen.set_row(5, "offscreen")

        frame = screen.compose_frame(3, 2)

        self.assertIn("abc", frame)
        self.assertNotIn("abcd", frame)
        self.assertNotIn("offscreen", frame)

    def test_cursor_is_clamped_inside_the_screen(self) -> None:
        screen = _screen()
        screen.set_cursor(50, 9)

        frame = screen.compose_frame(10, 3)

        self.assertTrue(frame.endswith("\033[3;10H\033[?25h"))

    def test_clear_drops_buffered_rows(self) -> None:
        screen = _screen()
        screen.set_row(0, "stale")
        screen.clear()

        self.assertNotIn("stale", screen.compose_frame(10, 3))


class FlushAndPollTests(unittest.TestCase):
    def test_flush_writes_one_frame(self) -> None:
        screen = _screen()
        screen.set_row(0, "hello")
        with mock.patch.object(screen, "size", return_value=(10, 3)), mock.patch(
            "combo.screen.os.write"
        ) as write_mock:
            screen.flush()

        write_mock.assert_called_once()
        fd, payload = write_mock.call_args.args
        self.assertEqual(fd, 1)
        self.assertIn(b"hello", payload)

    def test_flush_failure_raises_render_error(self) -> None:
        screen = _screen()
        with mock.patch.object(screen, "size", return_value=(10, 3)), mock.patch(
            "combo.screen.os.write", side_effect=OSError("EIO")
        ):
            with self.assertRaises(RenderError):
                screen.flush()

    def test_poll_event_skips_idle_timeouts(self) -> None:
        screen = _screen()
        with mock.patch("combo.screen.read_key", side_effect=["", "", "a"]):
            self.assertEqual(screen.poll_event(), "a")

    def test_poll_event_reports_resize_after_flush(self) -> None:
        screen = _screen()
        with mock.patch.object(screen, "size", return_value=(10, 3)), mock.patch("combo.screen.os.write"):
            screen.flush()
        with mock.patch.object(screen, "size", return_value=(20, 5)), mock.patch(
            "combo.screen.read_key", return_value=""
        ):
            self.assertEqual(screen.poll_event(), RESIZE_EVENT)

    def test_poll_event_failures_raise_render_error(self) -> None:
        screen = _screen()
        for error in (OSError("EIO"), EOFError("closed")):
            with self.subTest(error=error):
                with mock.patch("combo.screen.read_key", side_effect=error):
                    with self.assertRaises(RenderError):
                        screen.poll_event()

    def test_size_falls_back_when_terminal_size_unavailable(self) -> None:
        screen = _screen()
        with mock.patch("combo.screen.os.get_terminal_size", side_effect=OSError("ENOTTY")):
            self.assertEqual(screen.size(), (80, 24))

    def test_size_reads_terminal_dimensions(self) -> None:
        screen = _screen()
        with mock.patch("combo.screen.os.get_terminal_size", return_value=os.terminal_size((120, 40))):
            self.assertEqual(screen.size(), (120, 40))


if __name__ == "__main__":
    unittest.main()
