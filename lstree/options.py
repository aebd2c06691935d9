"""Immutable run configuration shared by the loader and the walker."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TreeOptions:
    """Settings for one listing.

    ``max_depth`` of ``None`` means unbounded; ``0`` prints only the root line.
    ``parallel`` is accepted for command-line compatibility and has no effect.
    ``root_label`` is the header text, normally the path exactly as typed.
    """

    path: Path
    max_depth: int | None = None
    show_hidden: bool = False
    parallel: bool = False
    ignore: str | None = None
    use_gitignore: bool = True
    no_color: bool = False
    theme: str | None = None
    root_label: str | None = None


__all__ = ["TreeOptions"]
