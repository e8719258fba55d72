"""Workspace service: open artifacts and the current cursor location.

Only the foreground executor touches a ``Workspace``; it holds no locks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..address import Address, AddressSpace
from .types import WorkspaceArtifact, WorkspaceFolder

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class OpenArtifact:
    """Opened artifact with its bytes loaded."""

    handle: WorkspaceArtifact
    data: bytes

    @property
    def name(self) -> str:
        return self.handle.name

    @property
    def image_base(self) -> int:
        return self.handle.image_base

    @property
    def address_space(self) -> AddressSpace:
        return self.handle.address_space

    def parse_address(self, text: str) -> Address | None:
        """Parse ``text`` in this artifact's address space."""
        return self.address_space.parse(text)

    def contains(self, address: Address) -> bool:
        """Return whether ``address`` falls inside the loaded bytes."""
        if address.space != self.address_space:
            return False
        return self.image_base <= address.offset < self.image_base + len(self.data)

    def offset_of(self, address: Address) -> int:
        """Byte index of ``address`` within ``data``."""
        return address.offset - self.image_base


@dataclass(frozen=True)
class Location:
    """Cursor position: one address inside one open artifact."""

    artifact: OpenArtifact
    address: Address


class Workspace:
    """Externally owned folder tree plus the set of opened artifacts.

    Opened artifacts keep their full bytes for the life of the workspace;
    nothing is evicted, so memory grows with every distinct artifact a link
    opens.
    """

    def __init__(self, root: WorkspaceFolder) -> None:
        self._root = root
        self._open: dict[WorkspaceArtifact, OpenArtifact] = {}
        self._location: Location | None = None

    def root_folder(self) -> WorkspaceFolder:
        return self._root

    def open_artifact(self, handle: WorkspaceArtifact) -> OpenArtifact:
        """Open ``handle``, returning the existing instance when already open.

        The loaded bytes stay cached until the workspace itself is dropped.
        """
        opened = self._open.get(handle)
        if opened is None:
            opened = OpenArtifact(handle=handle, data=handle.load())
            self._open[handle] = opened
            logger.info("opened %s (%d bytes)", handle.name, len(opened.data))
        return opened

    def open_artifacts(self) -> list[OpenArtifact]:
        return list(self._open.values())

    def current_location(self) -> Location | None:
        return self._location

    def set_location(self, artifact: OpenArtifact, address: Address) -> None:
        self._location = Location(artifact=artifact, address=address)


__all__ = ["OpenArtifact", "Location", "Workspace"]
