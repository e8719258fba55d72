"""Compose the terminal host and run the link bridge until quit."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from ..workspace import FsFolder, Workspace
from .actions import ActionRegistry
from .clipboard import copy_text_to_clipboard
from .config import BridgeConfig
from .console import ConsoleNavigator, StatusReporter, StdinCommandReader
from .foreground import ForegroundExecutor
from .plugin import LinkBridgeDeps, LinkBridgePlugin

logger = logging.getLogger(__name__)


def build_plugin(
    root: Path,
    config: BridgeConfig,
    out: TextIO,
    *,
    no_color: bool = False,
    show_hidden: bool = False,
) -> tuple[LinkBridgePlugin, ForegroundExecutor, StatusReporter]:
    """Wire a filesystem workspace at ``root`` into a ready-to-init plugin."""
    executor = ForegroundExecutor()
    workspace = Workspace(FsFolder(root.resolve(), show_hidden=show_hidden))
    navigator = ConsoleNavigator(
        workspace,
        out,
        rows=config.hexview_rows,
        style=config.style,
        no_color=no_color,
    )
    report_status = StatusReporter(out)
    plugin = LinkBridgePlugin(
        LinkBridgeDeps(
            executor=executor,
            workspace=workspace,
            actions=ActionRegistry(),
            navigation_service=lambda: navigator,
            report_status=report_status,
            copy_text=copy_text_to_clipboard,
            port=config.port,
            host=config.host,
        )
    )
    return plugin, executor, report_status


def run_bridge(
    root: Path,
    config: BridgeConfig,
    *,
    no_color: bool = False,
    show_hidden: bool = False,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
) -> int:
    """Serve links for the workspace at ``root``; returns a process exit code.

    The calling thread becomes the foreground executor. Returns ``1`` when
    the listener could not bind its port.
    """
    out = sys.stdout if out is None else out
    stdin = sys.stdin if stdin is None else stdin
    plugin, executor, report_status = build_plugin(
        root,
        config,
        out,
        no_color=no_color,
        show_hidden=show_hidden,
    )
    plugin.init()
    try:
        if plugin.listener.port is None:
            return 1
        report_status(f"Serving {root} on {config.host}:{plugin.listener.port}")
        reader = StdinCommandReader(
            stdin,
            executor,
            plugin.actions,
            plugin.dispatcher,
            plugin.workspace,
            report_status,
        )
        reader.start()
        try:
            executor.run_until_stopped()
        except KeyboardInterrupt:
            logger.info("interrupted")
    finally:
        plugin.dispose()
    return 0


__all__ = ["build_plugin", "run_bridge"]
