"""Tests for the terminal host: hex-view navigator, status line, stdin commands."""

from __future__ import annotations

import io
import threading
import unittest

from ghidralink.runtime.actions import ActionRegistry
from ghidralink.runtime.console import ConsoleNavigator, StatusReporter, StdinCommandReader
from ghidralink.runtime.copy_link import CopyLinkAction
from ghidralink.runtime.dispatcher import NavigationDispatcher, NavigationDispatcherDeps
from ghidralink.runtime.foreground import ForegroundExecutor
from ghidralink.workspace import MemoryArtifact, MemoryFolder, Workspace


class ConsoleNavigatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.handle = MemoryArtifact("foo.bin", bytes(range(64)), image_base=0x401000)
        self.workspace = Workspace(MemoryFolder(name="/", artifacts=(self.handle,)))
        self.out = io.StringIO()
        self.navigator = ConsoleNavigator(self.workspace, self.out, rows=2, no_color=True)

    def test_go_to_moves_cursor_and_prints_hex_view(self) -> None:
        artifact = self.workspace.open_artifact(self.handle)
        address = artifact.parse_address("0x401012")
        assert address is not None

        self.assertTrue(self.navigator.go_to(artifact, address))

        location = self.workspace.current_location()
        assert location is not None
        self.assertEqual(location.address, address)
        text = self.out.getvalue()
        self.assertIn("== foo.bin @ 00401012 ==", text)
        self.assertIn("> 00401010", text)

    def test_go_to_outside_artifact_bytes_is_refused(self) -> None:
        artifact = self.workspace.open_artifact(self.handle)
        address = artifact.parse_address("0x500000")
        assert address is not None

        self.assertFalse(self.navigator.go_to(artifact, address))
        self.assertIsNone(self.workspace.current_location())
        self.assertEqual(self.out.getvalue(), "")


class StdinCommandReaderTests(unittest.TestCase):
    def setUp(self) -> None:
        handle = MemoryArtifact("foo.bin", bytes(32), image_base=0x1000)
        self.workspace = Workspace(MemoryFolder(name="/", artifacts=(handle,)))
        self.executor = ForegroundExecutor()
        self.out = io.StringIO()
        self.status = StatusReporter(self.out)
        self.copied: list[str] = []
        navigator = ConsoleNavigator(self.workspace, self.out, rows=1, no_color=True)
        self.dispatcher = NavigationDispatcher(
            NavigationDispatcherDeps(
                executor=self.executor,
                workspace=self.workspace,
                navigation_service=lambda: navigator,
                report_status=self.status,
            )
        )
        self.actions = ActionRegistry()
        copy_link = CopyLinkAction(self.workspace, lambda text: self.copied.append(text) or True, self.status)
        self.actions.add_action(copy_link.as_action())

    def _reader(self, text: str) -> StdinCommandReader:
        return StdinCommandReader(
            io.StringIO(text),
            self.executor,
            self.actions,
            self.dispatcher,
            self.workspace,
            self.status,
        )

    def _run(self, command: str) -> None:
        reader = self._reader("")
        self.executor.invoke_later(lambda: reader.run_command(command))
        self.executor.run_pending()

    def test_goto_then_copy_then_where(self) -> None:
        self._run("goto ghidra://foo.bin#0x1008")
        self._run("copy")
        self._run("where")

        self.assertEqual(self.copied, ["ghidra://foo.bin#00001008"])
        self.assertEqual(self.status.last_message, "foo.bin @ 00001008")

    def test_copy_without_location_reports_nothing_to_copy(self) -> None:
        self._run("copy")
        self.assertEqual(self.copied, [])
        self.assertIn("Nothing to copy", self.status.last_message)

    def test_key_binding_command_runs_bound_action(self) -> None:
        self._run("goto ghidra://foo.bin#1000")
        self._run("Ctrl+Shift+C")
        self.assertEqual(self.copied, ["ghidra://foo.bin#00001000"])

    def test_bad_goto_link_and_unknown_command_are_reported(self) -> None:
        self._run("goto http://foo.bin#1")
        self.assertIn("scheme", self.status.last_message)
        self._run("frobnicate")
        self.assertEqual(self.status.last_message, "Unknown command: frobnicate")

    def test_reader_thread_feeds_foreground_until_quit(self) -> None:
        reader = self._reader("where\n\nquit\nwhere\n")
        reader.start()
        done = threading.Event()

        def pump() -> None:
            self.executor.run_until_stopped(poll_seconds=0.05)
            done.set()

        thread = threading.Thread(target=pump)
        thread.start()
        self.assertTrue(done.wait(timeout=2.0))
        thread.join(timeout=1.0)
        self.assertEqual(self.out.getvalue().count("No location selected."), 1)

    def test_end_of_input_keeps_the_pump_running(self) -> None:
        reader = self._reader("where\n")
        reader.start()
        assert reader.thread is not None
        reader.thread.join(timeout=2.0)
        self.assertFalse(reader.thread.is_alive())

        self.assertEqual(self.executor.run_pending(), 2)
        self.assertFalse(self.executor.stopped)
        self.assertEqual(self.status.last_message, "Command input closed; serving links until interrupted.")


if __name__ == "__main__":
    unittest.main()
