"""Terminal host services: hex-view navigator, status line, stdin commands.

Everything here except ``StdinCommandReader``'s reader thread runs on the
foreground executor.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TextIO

from ..address import Address
from ..errors import DecodeError
from ..hexview import DEFAULT_STYLE, render_hex_view
from ..link_codec import decode
from ..workspace import OpenArtifact, Workspace
from .actions import ActionRegistry
from .copy_link import COPY_LINK_ACTION_NAME
from .dispatcher import NavigationDispatcher
from .foreground import ForegroundExecutor

logger = logging.getLogger(__name__)


class StatusReporter:
    """Write one-line status messages and remember the latest."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self.last_message = ""

    def __call__(self, message: str) -> None:
        self.last_message = message
        self._out.write(f"-- {message}\n")
        self._out.flush()


class ConsoleNavigator:
    """Navigation service that shows the cursor as a hex view."""

    def __init__(
        self,
        workspace: Workspace,
        out: TextIO,
        rows: int = 16,
        style: str = DEFAULT_STYLE,
        no_color: bool = False,
    ) -> None:
        self._workspace = workspace
        self._out = out
        self._rows = rows
        self._style = style
        self._no_color = no_color

    def go_to(self, artifact: OpenArtifact, address: Address) -> bool:
        """Move the cursor to ``address``; refuse addresses outside the bytes."""
        if not artifact.contains(address):
            logger.debug("%s outside %s", address, artifact.name)
            return False
        self._workspace.set_location(artifact, address)
        self._out.write(f"== {artifact.name} @ {address} ==\n")
        self._out.write(
            render_hex_view(
                artifact.data,
                artifact.image_base,
                address.offset,
                self._rows,
                style=self._style,
                no_color=self._no_color,
            )
        )
        self._out.flush()
        return True


class StdinCommandReader:
    """Read commands from a text stream and schedule them on the foreground.

    Commands: ``copy`` (or the copy-link key binding), ``goto <link>``,
    ``where`` and ``quit``. End of input only ends command reading; the
    bridge keeps serving links until ``quit`` or an interrupt.
    """

    def __init__(
        self,
        stream: TextIO,
        executor: ForegroundExecutor,
        actions: ActionRegistry,
        dispatcher: NavigationDispatcher,
        workspace: Workspace,
        report_status: Callable[[str], None],
    ) -> None:
        self._stream = stream
        self._executor = executor
        self._actions = actions
        self._dispatcher = dispatcher
        self._workspace = workspace
        self._report_status = report_status
        self._thread: threading.Thread | None = None

    @property
    def thread(self) -> threading.Thread | None:
        return self._thread

    def start(self) -> None:
        self._thread = threading.Thread(target=self._read_loop, name="ghidralink-stdin", daemon=True)
        self._thread.start()

    def _read_loop(self) -> None:
        for line in self._stream:
            command = line.strip()
            if not command:
                continue
            self._executor.invoke_later(lambda command=command: self.run_command(command))
            if command == "quit":
                return
        logger.info("command input closed")
        self._executor.invoke_later(
            lambda: self._report_status("Command input closed; serving links until interrupted.")
        )

    def run_command(self, command: str) -> None:
        """Execute one command; must run on the foreground executor."""
        verb, _sep, argument = command.partition(" ")
        if verb == "quit":
            self._executor.stop()
        elif verb == "copy":
            if not self._actions.invoke(COPY_LINK_ACTION_NAME):
                self._report_status("Nothing to copy: no artifact location selected.")
        elif verb == "goto":
            try:
                link = decode(argument.strip())
            except DecodeError as exc:
                self._report_status(str(exc))
                return
            self._dispatcher.dispatch(link)
        elif verb == "where":
            location = self._workspace.current_location()
            if location is None:
                self._report_status("No location selected.")
            else:
                self._report_status(f"{location.artifact.name} @ {location.address}")
        elif self._actions.dispatch_key(command) is None:
            self._report_status(f"Unknown command: {command}")


__all__ = ["ConsoleNavigator", "StatusReporter", "StdinCommandReader"]
