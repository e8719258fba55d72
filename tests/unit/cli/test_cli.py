"""CLI mode-selection and argument-handling tests.

Verifies how ``ghidralink.cli.main`` picks encode/send/save/serve modes and
applies option overrides on top of the config file.
"""

from __future__ import annotations

import io
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ghidralink import cli
from ghidralink.runtime.config import BridgeConfig


class CliModeTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name).resolve()
        patcher = mock.patch("ghidralink.runtime.config.CONFIG_PATH", self.tmp / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def test_encode_prints_link_and_exits(self) -> None:
        stdout = io.StringIO()
        with mock.patch.object(sys, "argv", ["ghidralink", "--encode", "my prog.exe", "00401000"]), mock.patch(
            "sys.stdout", stdout
        ), mock.patch("ghidralink.cli.run_bridge") as run_bridge:
            cli.main()

        run_bridge.assert_not_called()
        self.assertEqual(stdout.getvalue(), "ghidra://my%20prog.exe#00401000\n")

    def test_encode_and_send_cannot_be_combined(self) -> None:
        with mock.patch.object(sys, "argv", ["ghidralink", "--encode", "a", "1", "--send", "ghidra://a#1"]):
            with self.assertRaises(SystemExit):
                cli.main()

    def test_send_uses_configured_host_and_port_override(self) -> None:
        with mock.patch.object(sys, "argv", ["ghidralink", "--send", "ghidra://a.bin#1", "--port", "4000"]), mock.patch(
            "ghidralink.cli.send_link"
        ) as send_link:
            cli.main()

        send_link.assert_called_once_with("ghidra://a.bin#1", host="127.0.0.1", port=4000)

    def test_send_without_listener_exits_with_message(self) -> None:
        with mock.patch.object(sys, "argv", ["ghidralink", "--send", "ghidra://a.bin#1"]), mock.patch(
            "ghidralink.cli.send_link", side_effect=ConnectionRefusedError("refused")
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main()
        self.assertIn("Cannot reach listener", str(ctx.exception.code))

    def test_serve_defaults_to_current_directory_and_config(self) -> None:
        previous_cwd = Path.cwd()
        try:
            os.chdir(self.tmp)
            with mock.patch.object(sys, "argv", ["ghidralink"]), mock.patch(
                "ghidralink.cli.run_bridge", return_value=0
            ) as run_bridge:
                cli.main()
        finally:
            os.chdir(previous_cwd)

        run_bridge.assert_called_once()
        root, config = run_bridge.call_args.args
        self.assertEqual(root.resolve(), self.tmp)
        self.assertEqual(config, BridgeConfig())
        self.assertEqual(run_bridge.call_args.kwargs, {"no_color": False, "show_hidden": False})

    def test_serve_applies_option_overrides(self) -> None:
        (self.tmp / "config.json").write_text(json.dumps({"port": 5000, "style": "native"}), encoding="utf-8")
        workspace = self.tmp / "ws"
        workspace.mkdir()
        argv = ["ghidralink", str(workspace), "--rows", "4", "--no-color", "--hidden"]
        with mock.patch.object(sys, "argv", argv), mock.patch("ghidralink.cli.run_bridge", return_value=0) as run_bridge:
            cli.main()

        root, config = run_bridge.call_args.args
        self.assertEqual(root, workspace)
        self.assertEqual(config, BridgeConfig(port=5000, hexview_rows=4, style="native"))
        self.assertEqual(run_bridge.call_args.kwargs, {"no_color": True, "show_hidden": True})

    def test_serve_rejects_missing_workspace_directory(self) -> None:
        with mock.patch.object(sys, "argv", ["ghidralink", str(self.tmp / "missing")]), mock.patch(
            "ghidralink.cli.run_bridge"
        ) as run_bridge:
            with self.assertRaises(SystemExit):
                cli.main()
        run_bridge.assert_not_called()

    def test_bind_failure_exit_code_is_propagated(self) -> None:
        with mock.patch.object(sys, "argv", ["ghidralink", str(self.tmp)]), mock.patch(
            "ghidralink.cli.run_bridge", return_value=1
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main()
        self.assertEqual(ctx.exception.code, 1)

    def test_save_config_writes_effective_settings(self) -> None:
        stdout = io.StringIO()
        with mock.patch.object(sys, "argv", ["ghidralink", "--save-config", "--port", "31337"]), mock.patch(
            "sys.stdout", stdout
        ):
            cli.main()

        saved = json.loads((self.tmp / "config.json").read_text(encoding="utf-8"))
        self.assertEqual(saved["port"], 31337)
        self.assertEqual(saved["host"], "127.0.0.1")
        self.assertEqual(stdout.getvalue().strip(), str(self.tmp / "config.json"))

    def test_invalid_port_is_rejected_by_argparse(self) -> None:
        with mock.patch.object(sys, "argv", ["ghidralink", "--port", "70000"]), mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.main()
        self.assertEqual(ctx.exception.code, 2)

    def test_unknown_log_level_is_rejected(self) -> None:
        with mock.patch.object(sys, "argv", ["ghidralink", "--log-level", "chatty", "--encode", "a", "1"]):
            with self.assertRaises(SystemExit):
                cli.main()


if __name__ == "__main__":
    unittest.main()
