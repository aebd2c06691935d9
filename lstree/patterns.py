"""Exclusion pattern loading and matching.

Patterns come from two places: the pipe-delimited ``--ignore`` string and the
``.gitignore`` file sitting directly inside the traversal root. Each one is
compiled into either a ``RootAnchored`` pattern (matched against an entry's
full path) or a ``NameAnchored`` pattern (matched against its base name at any
depth). Only a subset of gitignore syntax is understood: no ``!`` negation and
no trailing-slash directory-only rules.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

IGNORE_FILENAME = ".gitignore"
USER_PATTERN_SEPARATOR = "|"
COMMENT_PREFIX = "#"
ANCHOR_PREFIX = "/"

_UNTERMINATED_CLASS_RE = re.compile(r"\[(?![^\]]*\])")

logger = logging.getLogger(__name__)


class MalformedPattern(ValueError):
    """Raised when a glob pattern cannot be compiled."""


@dataclass(frozen=True)
class RootAnchored:
    """Pattern tested against the full path string of an entry."""

    pattern: str
    regex: re.Pattern[str]

    def matches(self, full_path: str, base_name: str) -> bool:
        return self.regex.match(full_path) is not None


@dataclass(frozen=True)
class NameAnchored:
    """Pattern tested against an entry's base name only."""

    pattern: str
    regex: re.Pattern[str]

    def matches(self, full_path: str, base_name: str) -> bool:
        return self.regex.match(base_name) is not None


ExclusionPattern = RootAnchored | NameAnchored


def _check_glob(pattern: str) -> None:
    if not pattern:
        raise MalformedPattern("empty pattern")
    if "***" in pattern:
        raise MalformedPattern(f"too many consecutive wildcards in {pattern!r}")
    if _UNTERMINATED_CLASS_RE.search(pattern):
        raise MalformedPattern(f"unterminated character class in {pattern!r}")


def compile_glob(pattern: str, literal_prefix: str = "") -> re.Pattern[str]:
    """Compile a shell-style glob into an anchored, case-sensitive regex.

    ``literal_prefix`` is matched verbatim ahead of the glob, which lets a
    root directory containing ``[`` or ``*`` in its own name act as a plain
    path prefix. Raises ``MalformedPattern`` for globs that are empty, contain
    an unterminated ``[`` class, or a run of three or more ``*``.
    """
    _check_glob(pattern)
    try:
        return re.compile(re.escape(literal_prefix) + fnmatch.translate(pattern))
    except re.error as exc:
        raise MalformedPattern(f"{pattern!r}: {exc}") from exc


def _child_path_prefix(root: Path) -> str:
    """Return the text that ``str(root / name)`` puts in front of ``name``."""
    # pathlib drops a bare "." when joining, so children of "." carry no prefix.
    if str(root) == ".":
        return ""
    return str(root).rstrip(os.sep) + os.sep


def compile_user_pattern(pattern: str) -> ExclusionPattern:
    """Compile one ``--ignore`` sub-pattern.

    A leading ``/`` makes it an absolute full-path pattern; anything else
    matches base names.
    """
    regex = compile_glob(pattern)
    if pattern.startswith(ANCHOR_PREFIX):
        return RootAnchored(pattern=pattern, regex=regex)
    return NameAnchored(pattern=pattern, regex=regex)


def compile_ignore_line(root: Path, line: str) -> ExclusionPattern:
    """Compile one ``.gitignore`` line, rebasing ``/``-anchored lines onto ``root``."""
    if line.startswith(ANCHOR_PREFIX):
        remainder = line.lstrip(ANCHOR_PREFIX)
        regex = compile_glob(remainder, literal_prefix=_child_path_prefix(root))
        return RootAnchored(pattern=str(root / remainder), regex=regex)
    return NameAnchored(pattern=line, regex=compile_glob(line))


def parse_user_patterns(value: str | None) -> list[ExclusionPattern]:
    """Split a pipe-delimited pattern string, dropping sub-patterns that fail to compile."""
    if not value:
        return []
    patterns: list[ExclusionPattern] = []
    for raw in value.split(USER_PATTERN_SEPARATOR):
        try:
            patterns.append(compile_user_pattern(raw))
        except MalformedPattern as exc:
            logger.debug("dropping ignore pattern: %s", exc)
    return patterns


def parse_ignore_text(root: Path, text: str) -> list[ExclusionPattern]:
    """Parse ignore-file text into patterns.

    Lines are trimmed; blank lines and ``#`` comments are skipped. Malformed
    lines are dropped individually.
    """
    patterns: list[ExclusionPattern] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        try:
            patterns.append(compile_ignore_line(root, line))
        except MalformedPattern as exc:
            logger.debug("dropping %s line: %s", IGNORE_FILENAME, exc)
    return patterns


def load_ignore_file_patterns(root: Path) -> list[ExclusionPattern]:
    """Return patterns from ``root/.gitignore``, or nothing when it is absent or unreadable."""
    ignore_path = root / IGNORE_FILENAME
    try:
        text = ignore_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("no ignore patterns from %s: %s", ignore_path, exc)
        return []
    return parse_ignore_text(root, text)


def load_patterns(root: Path, user_patterns: str | None, use_gitignore: bool = True) -> list[ExclusionPattern]:
    """Build the effective exclusion set for a run.

    Order is irrelevant and duplicates are harmless: an entry is excluded when
    any pattern matches.
    """
    patterns = parse_user_patterns(user_patterns)
    if use_gitignore:
        patterns.extend(load_ignore_file_patterns(root))
    return patterns


def is_excluded(patterns: Sequence[ExclusionPattern], full_path: str, base_name: str) -> bool:
    """Return whether any pattern matches the entry."""
    return any(pattern.matches(full_path, base_name) for pattern in patterns)


__all__ = [
    "IGNORE_FILENAME",
    "ExclusionPattern",
    "MalformedPattern",
    "NameAnchored",
    "RootAnchored",
    "compile_glob",
    "compile_ignore_line",
    "compile_user_pattern",
    "is_excluded",
    "load_ignore_file_patterns",
    "load_patterns",
    "parse_ignore_text",
    "parse_user_patterns",
]
