"""Tests for read-only JSON defaults."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from combo.config import UserDefaults, load_config, load_user_defaults


class ConfigLoadingTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "config.json"

    def test_missing_file_yields_empty_config(self) -> None:
        self.assertEqual(load_config(self.path), {})
        self.assertEqual(load_user_defaults(self.path, environ={}), UserDefaults())

    def test_malformed_or_non_object_config_is_ignored(self) -> None:
        for payload in ("{not json", "[1, 2]", '"theme"'):
            with self.subTest(payload=payload):
                self.path.write_text(payload, encoding="utf-8")
                self.assertEqual(load_config(self.path), {})

    def test_valid_values_are_loaded(self) -> None:
        self.path.write_text('{"theme": " ocean ", "no_color": true}', encoding="utf-8")
        self.assertEqual(load_user_defaults(self.path, environ={}), UserDefaults(theme="ocean", no_color=True))

    def test_wrongly_typed_values_fall_back(self) -> None:
        self.path.write_text('{"theme": 3, "no_color": "yes"}', encoding="utf-8")
        self.assertEqual(load_user_defaults(self.path, environ={}), UserDefaults())

    def test_no_color_environment_forces_plain_output(self) -> None:
        self.assertTrue(load_user_defaults(self.path, environ={"NO_COLOR": "1"}).no_color)
        self.assertFalse(load_user_defaults(self.path, environ={"NO_COLOR": ""}).no_color)

    def test_loading_never_writes_the_file(self) -> None:
        load_user_defaults(self.path, environ={})
        self.assertFalse(self.path.exists())


if __name__ == "__main__":
    unittest.main()
