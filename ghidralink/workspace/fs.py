"""Filesystem-backed workspace tree: directories are folders, files are artifacts."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ..address import DEFAULT_ADDRESS_SPACE, AddressSpace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FsArtifact:
    """Artifact backed by one regular file; bytes are read on ``load``."""

    path: Path
    image_base: int = 0
    address_space: AddressSpace = DEFAULT_ADDRESS_SPACE

    @property
    def name(self) -> str:
        return self.path.name

    def load(self) -> bytes:
        return self.path.read_bytes()


@dataclass(frozen=True)
class FsFolder:
    """Folder backed by a directory.

    Children are yielded in ``os.scandir`` order, which is filesystem
    dependent. Hidden entries are skipped unless ``show_hidden`` is set and
    symlinked directories are never followed.
    """

    path: Path
    show_hidden: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    def _scan(self, want_dirs: bool) -> Iterator[Path]:
        try:
            with os.scandir(self.path) as entries:
                for child in entries:
                    if not self.show_hidden and child.name.startswith("."):
                        continue
                    try:
                        if want_dirs:
                            keep = child.is_dir(follow_symlinks=False)
                        else:
                            keep = child.is_file()
                    except OSError:
                        continue
                    if keep:
                        yield Path(child.path)
        except OSError as exc:
            logger.debug("cannot scan %s: %s", self.path, exc)

    def files(self) -> Iterator[FsArtifact]:
        for path in self._scan(want_dirs=False):
            yield FsArtifact(path)

    def folders(self) -> Iterator[FsFolder]:
        for path in self._scan(want_dirs=True):
            yield FsFolder(path, show_hidden=self.show_hidden)


__all__ = ["FsArtifact", "FsFolder"]
