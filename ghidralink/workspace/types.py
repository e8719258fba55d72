"""Read-only workspace tree interface plus in-memory tree datatypes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from ..address import DEFAULT_ADDRESS_SPACE, AddressSpace


class WorkspaceArtifact(Protocol):
    """Openable unit of analysis stored in the workspace."""

    @property
    def name(self) -> str: ...

    @property
    def image_base(self) -> int: ...

    @property
    def address_space(self) -> AddressSpace: ...

    def load(self) -> bytes: ...


class WorkspaceFolder(Protocol):
    """Folder node; enumerates direct artifacts and direct subfolders."""

    @property
    def name(self) -> str: ...

    def files(self) -> Iterable[WorkspaceArtifact]: ...

    def folders(self) -> Iterable[WorkspaceFolder]: ...


@dataclass(frozen=True)
class MemoryArtifact:
    """Artifact whose bytes live in memory."""

    name: str
    data: bytes = b""
    image_base: int = 0
    address_space: AddressSpace = DEFAULT_ADDRESS_SPACE

    def load(self) -> bytes:
        return self.data


@dataclass(frozen=True)
class MemoryFolder:
    """Folder with explicitly listed children, enumerated in listed order."""

    name: str
    artifacts: tuple[MemoryArtifact, ...] = ()
    subfolders: tuple["MemoryFolder", ...] = ()

    def files(self) -> Iterable[MemoryArtifact]:
        return self.artifacts

    def folders(self) -> Iterable[MemoryFolder]:
        return self.subfolders


__all__ = [
    "WorkspaceArtifact",
    "WorkspaceFolder",
    "MemoryArtifact",
    "MemoryFolder",
]
