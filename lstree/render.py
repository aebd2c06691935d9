"""Formatting helpers for tree rows and the closing summary."""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from pathlib import PurePath

from .fs import EntryKind
from .ui_theme import PLAIN_THEME, UITheme

BRANCH = "├── "
LAST_BRANCH = "└── "
CONTINUATION = "│   "
BLANK = "    "
UNREADABLE_LINK_TARGET = "unreadable"

IMAGE_SUFFIXES = frozenset({".svg", ".png", ".jpg", ".jpeg", ".gif"})
ARCHIVE_SUFFIXES = frozenset({".pdf", ".zip", ".tar", ".gz", ".tgz", ".bz2", ".xz", ".7z"})
CONFIG_SUFFIXES = frozenset({".yaml", ".yml", ".toml", ".json", ".ini", ".cfg"})


def tree_prefix(ancestors: Sequence[bool], is_last: bool) -> str:
    """Return box-drawing prefix for an entry.

    ``ancestors`` holds one flag per enclosing level telling whether that
    ancestor was the last sibling at its level.
    """
    parts = [BLANK if ancestor_last else CONTINUATION for ancestor_last in ancestors]
    parts.append(LAST_BRANCH if is_last else BRANCH)
    return "".join(parts)


@lru_cache(maxsize=512)
def _is_source_suffix(suffix: str) -> bool:
    """Return whether Pygments knows a lexer for files ending in ``suffix``."""
    from pygments.lexers import get_lexer_for_filename
    from pygments.lexers.special import TextLexer
    from pygments.util import ClassNotFound

    try:
        lexer = get_lexer_for_filename(f"file{suffix}")
    except ClassNotFound:
        return False
    return not isinstance(lexer, TextLexer)


def file_color_for(name: str, theme: UITheme | None = None) -> str:
    """Return ANSI color used for a regular file name based on its suffix."""
    active_theme = theme or PLAIN_THEME
    suffix = PurePath(name).suffix.lower()
    if not suffix:
        return active_theme.tree_file_default
    if suffix in IMAGE_SUFFIXES:
        return active_theme.tree_file_image
    if suffix in ARCHIVE_SUFFIXES:
        return active_theme.tree_file_archive
    if suffix in CONFIG_SUFFIXES:
        return active_theme.tree_file_config
    if _is_source_suffix(suffix):
        return active_theme.tree_file_source
    return active_theme.tree_file_default


def display_text(text: str) -> str:
    """Return ``text`` with undecodable filename bytes replaced by U+FFFD.

    Names from the filesystem carry such bytes as lone surrogates, which a
    strict UTF-8 stdout refuses to encode.
    """
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "replace")
    return raw.decode("utf-8", "replace")


def _paint(color: str, text: str, reset: str) -> str:
    if not color:
        return text
    return f"{color}{text}{reset}"


def format_entry(
    name: str,
    kind: EntryKind,
    theme: UITheme | None = None,
    link_target: str | None = None,
) -> str:
    """Render the display text (without prefix) for one classified entry."""
    active_theme = theme or PLAIN_THEME
    reset = active_theme.reset
    shown = display_text(name)
    if kind is EntryKind.SYMLINK:
        target = display_text(link_target) if link_target is not None else UNREADABLE_LINK_TARGET
        return (
            f"{_paint(active_theme.tree_link, shown, reset)} -> "
            f"{_paint(active_theme.tree_link_target, target, reset)}"
        )
    if kind is EntryKind.DIRECTORY:
        return _paint(active_theme.tree_dir, shown, reset)
    if kind is EntryKind.EXECUTABLE:
        return _paint(active_theme.tree_exec, shown, reset)
    return _paint(file_color_for(name, active_theme), shown, reset)


def format_row(
    ancestors: Sequence[bool],
    is_last: bool,
    name: str,
    kind: EntryKind,
    theme: UITheme | None = None,
    link_target: str | None = None,
) -> str:
    """Render one full tree row: styled prefix followed by entry text."""
    active_theme = theme or PLAIN_THEME
    prefix = _paint(active_theme.tree_branch, tree_prefix(ancestors, is_last), active_theme.reset)
    return prefix + format_entry(name, kind, active_theme, link_target)


def format_root(root: str, theme: UITheme | None = None) -> str:
    active_theme = theme or PLAIN_THEME
    return _paint(active_theme.tree_root, display_text(root), active_theme.reset)


def format_summary(directories: int, files: int, theme: UITheme | None = None) -> str:
    """Render ``"<D> directories, <F> files"``."""
    active_theme = theme or PLAIN_THEME
    return _paint(active_theme.summary, f"{directories} directories, {files} files", active_theme.reset)


def format_duration(seconds: float) -> str:
    """Format a wall-clock duration using µs, ms or s with two decimals."""
    seconds = max(0.0, seconds)
    if seconds < 1e-3:
        return f"{seconds * 1e6:.2f}µs"
    if seconds < 1.0:
        return f"{seconds * 1e3:.2f}ms"
    return f"{seconds:.2f}s"


def format_elapsed(seconds: float, theme: UITheme | None = None) -> str:
    active_theme = theme or PLAIN_THEME
    return _paint(active_theme.elapsed, f"Time taken: {format_duration(seconds)}", active_theme.reset)


__all__ = [
    "BLANK",
    "BRANCH",
    "CONTINUATION",
    "LAST_BRANCH",
    "UNREADABLE_LINK_TARGET",
    "display_text",
    "file_color_for",
    "format_duration",
    "format_elapsed",
    "format_entry",
    "format_root",
    "format_row",
    "format_summary",
    "tree_prefix",
]
