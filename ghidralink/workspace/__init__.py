"""Workspace model: folder/artifact trees, lookup by name, and open artifacts.

This package contains non-UI primitives:
- the read-only tree interface with in-memory and filesystem implementations
- depth-first artifact lookup by name
- the workspace service that opens artifacts and tracks the cursor
"""

from __future__ import annotations

from .fs import FsArtifact, FsFolder
from .resolver import resolve
from .service import Location, OpenArtifact, Workspace
from .types import MemoryArtifact, MemoryFolder, WorkspaceArtifact, WorkspaceFolder

__all__ = [
    "WorkspaceArtifact",
    "WorkspaceFolder",
    "MemoryArtifact",
    "MemoryFolder",
    "FsArtifact",
    "FsFolder",
    "resolve",
    "OpenArtifact",
    "Location",
    "Workspace",
]
