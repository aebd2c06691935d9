"""Depth-first directory walk that filters, classifies and renders entries.

The hierarchy is never materialized: each call lists one directory against the
live filesystem, emits one row per visible child, and recurses into
subdirectories with its ancestor flags extended by one level. Filesystem errors
skip the offending entry or subtree; nothing aborts the walk.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .fs import LOCAL_FS, EntryKind, LocalFileSystem, classify_mode, sort_key
from .options import TreeOptions
from .patterns import ExclusionPattern, is_excluded
from .render import format_root, format_row
from .ui_theme import PLAIN_THEME, UITheme

HIDDEN_PREFIX = "."

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stats:
    """Directory and file counts; ``Stats()`` is the identity for ``+``."""

    directories: int = 0
    files: int = 0

    def __add__(self, other: Stats) -> Stats:
        if not isinstance(other, Stats):
            return NotImplemented
        return Stats(self.directories + other.directories, self.files + other.files)


DIRECTORY = Stats(directories=1)
FILE = Stats(files=1)


def _visible_names(
    directory: Path,
    names: list[str],
    options: TreeOptions,
    patterns: Sequence[ExclusionPattern],
) -> list[str]:
    """Sort ``names`` and drop hidden or excluded ones."""
    visible: list[str] = []
    for name in sorted(names, key=sort_key):
        if not options.show_hidden and name.startswith(HIDDEN_PREFIX):
            continue
        if is_excluded(patterns, str(directory / name), name):
            continue
        visible.append(name)
    return visible


def walk(
    directory: Path,
    ancestors: tuple[bool, ...],
    options: TreeOptions,
    patterns: Sequence[ExclusionPattern],
    emit: Callable[[str], None],
    theme: UITheme = PLAIN_THEME,
    fs: LocalFileSystem = LOCAL_FS,
) -> Stats:
    """Emit rows for everything below ``directory`` and return their counts.

    ``ancestors`` has one flag per level already descended (``True`` when that
    ancestor was the last visible sibling), so its length is the current
    depth. The root call passes an empty tuple.
    """
    if options.max_depth is not None and len(ancestors) >= options.max_depth:
        return Stats()

    try:
        names = fs.list_names(directory)
    except OSError as exc:
        logger.debug("skipping unreadable directory %s: %s", directory, exc)
        return Stats()

    visible = _visible_names(directory, names, options, patterns)
    stats = Stats()
    for index, name in enumerate(visible):
        is_last = index == len(visible) - 1
        path = directory / name
        try:
            mode = fs.lstat(path).st_mode
        except OSError as exc:
            logger.debug("skipping %s: %s", path, exc)
            continue

        kind = classify_mode(mode)
        link_target: str | None = None
        if kind is EntryKind.SYMLINK:
            try:
                link_target = fs.read_link(path)
            except OSError as exc:
                logger.debug("unreadable link target for %s: %s", path, exc)

        emit(format_row(ancestors, is_last, name, kind, theme, link_target))

        if kind is EntryKind.DIRECTORY:
            stats += DIRECTORY
            stats += walk(path, ancestors + (is_last,), options, patterns, emit, theme, fs)
        else:
            stats += FILE
    return stats


def render_tree(
    options: TreeOptions,
    patterns: Sequence[ExclusionPattern],
    emit: Callable[[str], None],
    theme: UITheme = PLAIN_THEME,
    fs: LocalFileSystem = LOCAL_FS,
) -> Stats:
    """Emit the root line followed by the whole tree under ``options.path``."""
    label = options.root_label if options.root_label is not None else str(options.path)
    emit(format_root(label, theme))
    return walk(options.path, (), options, patterns, emit, theme, fs)


__all__ = [
    "HIDDEN_PREFIX",
    "Stats",
    "render_tree",
    "walk",
]
