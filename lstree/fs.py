"""Filesystem access and entry classification used by the tree walker.

The walker never touches ``os`` directly: it goes through a small
``LocalFileSystem`` object exposing listing, symlink-aware stat and link
reads. Tests substitute their own object with the same three methods.
"""

from __future__ import annotations

import enum
import os
import stat
from pathlib import Path

EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class EntryKind(enum.Enum):
    """Mutually exclusive category driving rendering and counting."""

    SYMLINK = "symlink"
    DIRECTORY = "directory"
    EXECUTABLE = "executable"
    FILE = "file"


def classify_mode(mode: int) -> EntryKind:
    """Classify an ``lstat`` mode.

    Symlinks win over everything else, so a link to a directory is still a
    link. Anything that is neither a link nor a directory counts as a file,
    executable when any execute bit is set.
    """
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if mode & EXECUTE_BITS:
        return EntryKind.EXECUTABLE
    return EntryKind.FILE


def sort_key(name: str) -> bytes:
    """Byte-order sort key, identical for every entry kind."""
    return os.fsencode(name)


class LocalFileSystem:
    """Live filesystem backend. Every method may raise ``OSError``."""

    def list_names(self, directory: Path) -> list[str]:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries]

    def lstat(self, path: Path) -> os.stat_result:
        return os.lstat(path)

    def read_link(self, path: Path) -> str:
        return os.readlink(path)


LOCAL_FS = LocalFileSystem()


__all__ = [
    "EXECUTE_BITS",
    "EntryKind",
    "LOCAL_FS",
    "LocalFileSystem",
    "classify_mode",
    "sort_key",
]
