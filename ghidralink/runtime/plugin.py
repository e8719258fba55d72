"""Plugin lifecycle owning the link listener and the copy-link action."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from ..link_codec import NavigationLink
from ..workspace import Workspace
from .actions import ActionRegistry
from .copy_link import CopyLinkAction
from .dispatcher import NavigationDispatcher, NavigationDispatcherDeps, NavigationService
from .foreground import ForegroundExecutor
from .listener import DEFAULT_HOST, DEFAULT_PORT, LinkListener

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkBridgeDeps:
    """Host services the plugin is wired against."""

    executor: ForegroundExecutor
    workspace: Workspace
    actions: ActionRegistry
    navigation_service: Callable[[], NavigationService | None]
    report_status: Callable[[str], None]
    copy_text: Callable[[str], bool]
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST


class LinkBridgePlugin:
    """``init`` binds the listener and registers actions; ``dispose`` undoes both."""

    def __init__(self, deps: LinkBridgeDeps) -> None:
        self._deps = deps
        self.dispatcher = NavigationDispatcher(
            NavigationDispatcherDeps(
                executor=deps.executor,
                workspace=deps.workspace,
                navigation_service=deps.navigation_service,
                report_status=deps.report_status,
            )
        )
        self.copy_link = CopyLinkAction(deps.workspace, deps.copy_text, deps.report_status)
        self.listener = LinkListener(self._schedule_dispatch, port=deps.port, host=deps.host)
        self._initialized = False
        self._disposed = False

    @property
    def workspace(self) -> Workspace:
        return self._deps.workspace

    @property
    def actions(self) -> ActionRegistry:
        return self._deps.actions

    def _schedule_dispatch(self, link: NavigationLink) -> None:
        # Called on the listener thread.
        self._deps.executor.invoke_later(partial(self.dispatcher.dispatch, link))

    def init(self) -> None:
        if self._initialized:
            return
        self._initialized = True
        self.listener.start()
        self._deps.actions.add_action(self.copy_link.as_action())

    def dispose(self) -> None:
        if not self._initialized or self._disposed:
            return
        self._disposed = True
        self.listener.close()
        self._deps.actions.remove_action(self.copy_link.as_action().name)
        logger.info("link bridge disposed")


__all__ = ["LinkBridgeDeps", "LinkBridgePlugin"]
