"""Tests for config loading and sanitization.

Malformed or out-of-range values must fall back to defaults.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ghidralink.runtime import config
from ghidralink.runtime.listener import DEFAULT_HOST, DEFAULT_PORT


class BridgeConfigTests(unittest.TestCase):
    def test_missing_file_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("ghidralink.runtime.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                loaded = config.load_bridge_config()
        self.assertEqual(loaded, config.BridgeConfig())
        self.assertEqual((loaded.port, loaded.host), (DEFAULT_PORT, DEFAULT_HOST))

    def test_saved_values_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("ghidralink.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"port": 31337, "host": "localhost", "hexview_rows": 8, "style": "native"})
                loaded = config.load_bridge_config()
        self.assertEqual(loaded, config.BridgeConfig(port=31337, host="localhost", hexview_rows=8, style="native"))

    def test_invalid_values_are_sanitized(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("ghidralink.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"port": 70000, "host": "  ", "hexview_rows": True, "style": 3})
                loaded = config.load_bridge_config()
        self.assertEqual(loaded, config.BridgeConfig())

    def test_malformed_json_is_ignored_with_warning(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("ghidralink.runtime.config.CONFIG_PATH", config_path):
                with self.assertLogs("ghidralink.runtime.config", level="WARNING"):
                    self.assertEqual(config.load_config(), {})

    def test_non_object_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2]\n", encoding="utf-8")
            with mock.patch("ghidralink.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})


if __name__ == "__main__":
    unittest.main()
