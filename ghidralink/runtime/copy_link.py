"""Copy a link to the current cursor location onto the clipboard."""

from __future__ import annotations

from collections.abc import Callable

from ..link_codec import encode
from ..workspace import Workspace
from .actions import Action

COPY_LINK_ACTION_NAME = "Copy Ghidra Link"
COPY_LINK_MENU_GROUP = "navigation"
COPY_LINK_KEY_BINDING = "ctrl+shift+c"


class CopyLinkAction:
    """Encode the workspace's current location and put it on the clipboard."""

    def __init__(
        self,
        workspace: Workspace,
        copy_text: Callable[[str], bool],
        report_status: Callable[[str], None],
    ) -> None:
        self._workspace = workspace
        self._copy_text = copy_text
        self._report_status = report_status

    def is_enabled(self) -> bool:
        """Enabled only while an artifact is open at a cursor address."""
        return self._workspace.current_location() is not None

    def perform(self) -> str | None:
        location = self._workspace.current_location()
        if location is None:
            return None
        link = encode(location.artifact.name, str(location.address))
        if self._copy_text(link):
            self._report_status(f"Copied to clipboard: {link}")
        else:
            self._report_status(f"Clipboard unavailable: {link}")
        return link

    def as_action(self) -> Action:
        return Action(
            name=COPY_LINK_ACTION_NAME,
            menu_path=(COPY_LINK_ACTION_NAME,),
            group=COPY_LINK_MENU_GROUP,
            key_bindings=(COPY_LINK_KEY_BINDING,),
            perform=self.perform,
            is_enabled=self.is_enabled,
        )


__all__ = [
    "COPY_LINK_ACTION_NAME",
    "COPY_LINK_KEY_BINDING",
    "COPY_LINK_MENU_GROUP",
    "CopyLinkAction",
]
