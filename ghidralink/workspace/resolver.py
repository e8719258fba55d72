"""Locate an artifact by name anywhere under a workspace folder."""

from __future__ import annotations

from .types import WorkspaceArtifact, WorkspaceFolder


def resolve(root: WorkspaceFolder, name: str) -> WorkspaceArtifact | None:
    """Return the first artifact named ``name`` under ``root``, else ``None``.

    Depth-first: all direct files of a folder are checked before any of its
    subfolders, and subfolders are visited in enumeration order. When the
    same name exists in several subfolders the first one reached wins, so
    the result depends on the folder's enumeration order. Matching is exact
    and case-sensitive.
    """
    for artifact in root.files():
        if artifact.name == name:
            return artifact
    for folder in root.folders():
        found = resolve(folder, name)
        if found is not None:
            return found
    return None


__all__ = ["resolve"]
